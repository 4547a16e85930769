"""
Functions for reading the Global Cluster configuration back from Atlas
"""
import logging
from typing import Any, Mapping, Optional

from cloudformation_cli_python_lib import HandlerErrorCode, OperationStatus

from mongodb_atlas_util.atlas import AtlasApiError, AtlasClient
from mongodb_atlas_util.progress_events import error_code_for_status

from .models import ResourceModel
from .namespaces import flatten_managed_namespaces, remote_to_zone_mappings

LOG = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Resource Not Found"


def _not_found(message: str) -> Mapping:
    return {
        'status': OperationStatus.FAILED,
        'errorCode': HandlerErrorCode.NotFound,
        'message': message,
    }


def new_model(global_cluster: Mapping[str, Any], model: ResourceModel) -> ResourceModel:
    """
    Builds a model from the remote Global Cluster state

    Atlas does not return the identifiers or credentials of the resource, so those are carried over from the
    request model.

    :param global_cluster: Response of the globalWrites endpoint
    :param model: Resource model from the request
    :return ResourceModel:
    """
    return ResourceModel(
        ApiKeys=model.ApiKeys,
        ProjectId=model.ProjectId,
        ClusterName=model.ClusterName,
        ManagedNamespaces=flatten_managed_namespaces(global_cluster.get('managedNamespaces')),
        CustomZoneMappings=remote_to_zone_mappings(global_cluster.get('customZoneMapping')),
        RemoveAllZoneMapping=model.RemoveAllZoneMapping,
    )


def fetch_resource(client: AtlasClient, model: Optional[ResourceModel]) -> Mapping:
    """
    Reads the managed namespaces and zone mappings of the cluster

    A 404 from Atlas, or a cluster with neither namespaces nor zone mappings, means the resource does not exist.

    :param client: Atlas client
    :param model: Resource model
    :return Mapping: A Mapping of values that can be used as **kwargs to a ProgressEvent
    """
    LOG.info('Retrieving Global Cluster configuration of %s', model.ClusterName)
    try:
        global_cluster = client.get_global_cluster(model.ProjectId, model.ClusterName)
    except AtlasApiError as e:
        LOG.debug('Error reading Global Cluster configuration (%s): %s', model.ClusterName, e)
        if e.status_code == 404:
            return _not_found(str(e))
        return {
            'status': OperationStatus.FAILED,
            'errorCode': error_code_for_status(e.status_code),
            'message': str(e),
        }

    if not global_cluster.get('managedNamespaces') and not global_cluster.get('customZoneMapping'):
        LOG.info('Cluster %s has no managed namespaces and no custom zone mappings', model.ClusterName)
        return _not_found(NOT_FOUND_MESSAGE)

    read_model = new_model(global_cluster, model)
    LOG.debug('Read %s managed namespaces and %s zone mappings',
              len(read_model.ManagedNamespaces or []), len(read_model.CustomZoneMappings or []))
    return {
        'status': OperationStatus.SUCCESS,
        'message': "Read Complete",
        'resourceModel': read_model,
    }
