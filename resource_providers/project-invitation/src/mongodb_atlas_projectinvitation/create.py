"""
Handles CREATE and UPDATE actions for the Resource
"""
import logging
from typing import Mapping, Optional

from cloudformation_cli_python_lib import OperationStatus

from mongodb_atlas_util.atlas import AtlasApiError, AtlasClient

from .models import ResourceModel
from .read import failure, invitation_to_model

LOG = logging.getLogger(__name__)


def invitation_create(client: AtlasClient, model: Optional[ResourceModel]) -> Mapping:
    """
    Invites a user to the project with the roles of the model

    :param client: Atlas client
    :param model: Resource model
    :return: Mapping of arguments for the Create response
    """
    LOG.info('[CREATE] Inviting %s to project %s', model.Username, model.ProjectId)
    try:
        invitation = client.create_project_invitation(model.ProjectId, model.Username, model.Roles)
    except AtlasApiError as e:
        LOG.error('[CREATE] Failed to create invitation: %s', e)
        return failure(e)
    LOG.debug('[CREATE] Created invitation %s', invitation.get('id'))
    return {
        'status': OperationStatus.SUCCESS,
        'resourceModel': invitation_to_model(invitation, model),
    }


def invitation_update(client: AtlasClient, model: Optional[ResourceModel]) -> Mapping:
    """
    Replaces the roles of a pending invitation

    :param client: Atlas client
    :param model: Resource model
    :return: Mapping of arguments for the Update response
    """
    LOG.info('[UPDATE] Updating roles of invitation %s', model.Id)
    try:
        invitation = client.update_project_invitation(model.ProjectId, model.Id, model.Roles)
    except AtlasApiError as e:
        LOG.error('[UPDATE] Failed to update invitation: %s', e)
        return failure(e)
    return {
        'status': OperationStatus.SUCCESS,
        'resourceModel': invitation_to_model(invitation, model),
    }
