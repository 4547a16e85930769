"""
Handles CREATE actions for the Resource
"""
import logging
from typing import Mapping, Optional

from cloudformation_cli_python_lib import HandlerErrorCode, OperationStatus

from mongodb_atlas_util.atlas import AtlasApiError, AtlasClient

from .models import ResourceModel
from .namespaces import NamespaceOutcome, add_managed_namespaces, zone_mappings_to_remote

LOG = logging.getLogger(__name__)


def global_cluster_create(client: AtlasClient, model: Optional[ResourceModel]) -> Mapping:
    """
    Registers the managed namespaces of the model, then sets its custom zone mappings

    Namespaces Atlas already manages are accepted as they are. Any other namespace error is reported as an invalid
    request, since Atlas rejects namespaces it can not shard.

    :param client: Atlas client
    :param model: Resource model
    :return: Mapping of arguments for the Create response
    """
    project_id = model.ProjectId
    cluster_name = model.ClusterName

    LOG.info('[CREATE] Adding %s managed namespaces to %s', len(model.ManagedNamespaces or []), cluster_name)
    try:
        results = add_managed_namespaces(client, project_id, cluster_name, model.ManagedNamespaces)
    except AtlasApiError as e:
        LOG.debug('[CREATE] Error creating Global Cluster configuration: %s', e)
        return {
            'status': OperationStatus.FAILED,
            'errorCode': HandlerErrorCode.InvalidRequest if e.status_code else HandlerErrorCode.ServiceInternalError,
            'message': str(e),
        }
    duplicates = [result.name for result in results if result.outcome is NamespaceOutcome.ALREADY_PRESENT]
    if duplicates:
        LOG.info('[CREATE] Namespaces already managed: %s', ', '.join(duplicates))

    if model.CustomZoneMappings is not None:
        mappings = zone_mappings_to_remote(model.CustomZoneMappings)
        LOG.info('[CREATE] Setting %s custom zone mappings on %s', len(mappings), cluster_name)
        try:
            response = client.add_custom_zone_mappings(project_id, cluster_name, mappings)
        except AtlasApiError as e:
            LOG.error('[CREATE] Failed to add custom zone mappings: %s', e)
            return {
                'status': OperationStatus.FAILED,
                'errorCode': HandlerErrorCode.ServiceInternalError,
                'message': str(e),
            }
        LOG.debug('[CREATE] Response Object: %s', response)
    else:
        LOG.info('[CREATE] CustomZoneMappings not set, leaving zone mappings unchanged')

    return {
        'status': OperationStatus.SUCCESS,
        'message': "Create Completed",
        'resourceModel': model,
    }
