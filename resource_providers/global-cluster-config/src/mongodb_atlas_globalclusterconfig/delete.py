"""
Handles DELETE actions for the Resource
"""
import logging
from typing import Mapping, Optional

from cloudformation_cli_python_lib import HandlerErrorCode, OperationStatus

from mongodb_atlas_util.atlas import AtlasApiError, AtlasClient

from .models import ResourceModel
from .namespaces import failed_results, plan_removals, remove_managed_namespaces
from .read import fetch_resource

log = logging.getLogger(__name__)

NOTHING_TO_REMOVE = "request doest not contain any item to remove"


def global_cluster_delete(client: AtlasClient, model: Optional[ResourceModel]) -> Mapping:
    """
    Removes the namespaces listed in the model and, when asked to, every custom zone mapping

    Namespace removal is best effort: namespaces that fail to be removed are logged and listed in the response
    message, but do not fail the request. Failing to remove the zone mappings does.

    :param client: Atlas client
    :param model: Resource model
    :return: Mapping of arguments for the Delete response
    """
    read_kwargs = fetch_resource(client, model)
    if read_kwargs['status'] == OperationStatus.FAILED:
        return read_kwargs
    current = read_kwargs['resourceModel']

    remove_all_zone_mappings = model.RemoveAllZoneMapping is True
    requested = [namespace for namespace in model.ManagedNamespaces or [] if namespace is not None]
    if not requested and not remove_all_zone_mappings:
        log.warning('[DELETE] %s', NOTHING_TO_REMOVE)
        return {
            'status': OperationStatus.FAILED,
            'errorCode': HandlerErrorCode.InvalidRequest,
            'message': NOTHING_TO_REMOVE,
        }

    failed = []
    if requested:
        plan = plan_removals(current.ManagedNamespaces, requested)
        log.info('[DELETE] Removing %s managed namespaces from %s, %s not present',
                 len(plan.to_remove), model.ClusterName, len(plan.not_present))
        failed = failed_results(remove_managed_namespaces(client, model.ProjectId, model.ClusterName, plan))
        if failed:
            log.error('[DELETE] Unable to remove namespaces: %s', ', '.join(result.name for result in failed))

    if remove_all_zone_mappings:
        log.info('[DELETE] Removing all custom zone mappings from %s', model.ClusterName)
        try:
            client.delete_custom_zone_mappings(model.ProjectId, model.ClusterName)
        except AtlasApiError as e:
            log.error('[DELETE] Failed to remove custom zone mappings: %s', e)
            return {
                'status': OperationStatus.FAILED,
                'errorCode': HandlerErrorCode.InvalidRequest,
                'message': f"Failed to custom zones : {e}",
            }

    message = "Delete Complete"
    if failed:
        message = f"{message}, failed to remove namespaces: {', '.join(result.name for result in failed)}"
    return {
        'status': OperationStatus.SUCCESS,
        'message': message,
    }
