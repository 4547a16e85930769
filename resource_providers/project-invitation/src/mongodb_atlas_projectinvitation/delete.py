"""
Handles DELETE actions for the Resource
"""
import logging
from typing import Mapping, Optional

from cloudformation_cli_python_lib import OperationStatus

from mongodb_atlas_util.atlas import AtlasApiError, AtlasClient

from .models import ResourceModel
from .read import failure

log = logging.getLogger(__name__)


def invitation_delete(client: AtlasClient, model: Optional[ResourceModel]) -> Mapping:
    """
    Deletes a pending invitation

    The invitation no longer exists afterwards, so no resource model is returned.

    :param client: Atlas client
    :param model: Resource model
    :return: Mapping of arguments for the Delete response
    """
    try:
        client.delete_project_invitation(model.ProjectId, model.Id)
    except AtlasApiError as e:
        log.error('[DELETE] Failed to delete invitation %s: %s', model.Id, e)
        return failure(e)
    log.debug('[DELETE] Deleted invitation with Id: %s', model.Id)
    return {
        'status': OperationStatus.SUCCESS,
        'resourceModel': None,
    }
