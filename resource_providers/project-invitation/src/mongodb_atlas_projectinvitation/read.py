"""
Functions for reading Project Invitations from Atlas
"""
import logging
from typing import Any, Mapping, Optional

from cloudformation_cli_python_lib import OperationStatus

from mongodb_atlas_util.atlas import AtlasApiError, AtlasClient
from mongodb_atlas_util.progress_events import error_code_for_status

from .models import ResourceModel

LOG = logging.getLogger(__name__)


def failure(e: AtlasApiError) -> Mapping:
    return {
        'status': OperationStatus.FAILED,
        'errorCode': error_code_for_status(e.status_code),
        'message': str(e),
    }


def invitation_to_model(invitation: Mapping[str, Any], model: ResourceModel) -> ResourceModel:
    """
    Maps an Atlas GroupInvitation onto a resource model

    :param invitation: Invitation returned by Atlas
    :param model: Request model, supplies the Profile and fallback ProjectId
    :return ResourceModel:
    """
    return ResourceModel(
        Profile=model.Profile,
        ProjectId=invitation.get('groupId') or model.ProjectId,
        Id=invitation.get('id'),
        Username=invitation.get('username'),
        Roles=invitation.get('roles') or None,
        InviterUsername=invitation.get('inviterUsername'),
        CreatedAt=invitation.get('createdAt'),
        ExpiresAt=invitation.get('expiresAt'),
    )


def invitation_read(client: AtlasClient, model: Optional[ResourceModel]) -> Mapping:
    LOG.info('[READ] Reading invitation %s of project %s', model.Id, model.ProjectId)
    try:
        invitation = client.get_project_invitation(model.ProjectId, model.Id)
    except AtlasApiError as e:
        LOG.debug('[READ] Error reading invitation: %s', e)
        return failure(e)
    return {
        'status': OperationStatus.SUCCESS,
        'resourceModel': invitation_to_model(invitation, model),
    }


def invitation_list(client: AtlasClient, model: Optional[ResourceModel]) -> Mapping:
    LOG.info('[LIST] Listing invitations of project %s', model.ProjectId)
    try:
        invitations = client.list_project_invitations(model.ProjectId)
    except AtlasApiError as e:
        LOG.debug('[LIST] Error listing invitations: %s', e)
        return failure(e)
    return {
        'status': OperationStatus.SUCCESS,
        'resourceModels': [invitation_to_model(invitation, model) for invitation in invitations],
    }
