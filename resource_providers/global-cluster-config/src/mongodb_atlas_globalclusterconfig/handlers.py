"""
Main entry-points for the CloudFormation Resource Provider framework

* `resource` - Main interfacing handler and entry-point
* `test_entrypoint` - For contract and SAM testing
* `ide_entrypoint` - For certain IDE plugins that can not detect `test_entrypoint` as a valid Lambda handler function

"""
import logging
from typing import Any, MutableMapping, Optional

from cloudformation_cli_python_lib import (
    Action,
    HandlerErrorCode,
    OperationStatus,
    ProgressEvent,
    Resource,
    SessionProxy,
)

from mongodb_atlas_util.atlas import AtlasClient, AtlasClientError, client_from_keys
from mongodb_atlas_util.config import HandlerConfig
from mongodb_atlas_util.progress_events import failed_event
from mongodb_atlas_util.util import redact, setup_logging
from mongodb_atlas_util.validator import CLUSTER_NAME, PRIVATE_KEY, PROJECT_ID, PUBLIC_KEY, validate_model

from .create import global_cluster_create
from .delete import global_cluster_delete
from .models import ResourceHandlerRequest, ResourceModel
from .read import fetch_resource

# Use this logger to forward log messages to CloudWatch Logs.
# All loggers in this module inherit from `mongodb_atlas_globalclusterconfig`
LOG = logging.getLogger("mongodb_atlas_globalclusterconfig")
TYPE_NAME = "MongoDB::Atlas::GlobalClusterConfig"

REQUIRED_FIELDS = [PUBLIC_KEY, PRIVATE_KEY, CLUSTER_NAME, PROJECT_ID]

resource = Resource(TYPE_NAME, ResourceModel)
test_entrypoint = resource.test_entrypoint


def ide_entrypoint(*args, **kwargs):
    return test_entrypoint(*args, **kwargs)


def _setup() -> HandlerConfig:
    config = HandlerConfig.from_env(TYPE_NAME)
    setup_logging(LOG, config)
    return config


def _client(model: ResourceModel, config: HandlerConfig) -> AtlasClient:
    return client_from_keys(model.ApiKeys.PublicKey, model.ApiKeys.PrivateKey, config)


def _run(action: str, model: Optional[ResourceModel], operation) -> ProgressEvent:
    """
    Validates the model, builds the Atlas client and runs the operation with it

    :param action: Action name for log messages
    :param model: Resource model
    :param operation: Callable taking (client, model) and returning ProgressEvent kwargs
    :return ProgressEvent:
    """
    try:
        config = _setup()
        LOG.debug('[%s] Current model state %s', action, redact(model))
        invalid = validate_model(REQUIRED_FIELDS, model)
        if invalid:
            return invalid
        try:
            client = _client(model, config)
        except AtlasClientError as e:
            LOG.warning('[%s] Error creating Atlas client: %s', action, e)
            return failed_event(f"Failed to Create Client : {e}", HandlerErrorCode.InvalidRequest)
        event = ProgressEvent(**operation(client, model))
        LOG.debug('[%s] Returning %s: %s', action, event.status, event.message)
        return event
    except AttributeError as e:
        return failed_event(f"Operation failed because the parameters were invalid: {e}",
                            HandlerErrorCode.InvalidRequest)
    except Exception as e:
        LOG.exception('[%s] Unexpected failure', action)
        return failed_event(f"Operation failed due to an internal problem: {e} . Check the logs for more information",
                            HandlerErrorCode.InternalFailure)


@resource.handler(Action.CREATE)
def create_handler(
        session: Optional[SessionProxy],
        request: ResourceHandlerRequest,
        callback_context: MutableMapping[str, Any]
) -> ProgressEvent:
    """
    [CREATE] Handler

    :param session: Boto SessionProxy
    :param request: Handler request carrying the desired resource state
    :param callback_context: Value Mapping set when the handler returns status=IN_PROGRESS and needs more processing.
    :return ProgressEvent:
    """
    LOG.info('[CREATE] Entering CREATE Handler')
    return _run('CREATE', request.desiredResourceState, global_cluster_create)


@resource.handler(Action.READ)
def read_handler(
        session: Optional[SessionProxy],
        request: ResourceHandlerRequest,
        callback_context: MutableMapping[str, Any],
) -> ProgressEvent:
    """
    [READ] Handler

    :param session: Boto SessionProxy
    :param request: Handler request carrying the desired resource state
    :param callback_context: Value Mapping set when the handler returns status=IN_PROGRESS and needs more processing.
    :return ProgressEvent:
    """
    LOG.info('[READ] Entering READ handler')
    return _run('READ', request.desiredResourceState, fetch_resource)


@resource.handler(Action.UPDATE)
def update_handler(
        session: Optional[SessionProxy],
        request: ResourceHandlerRequest,
        callback_context: MutableMapping[str, Any],
) -> ProgressEvent:
    """
    [UPDATE] Handler

    Atlas has no endpoint to update a Global Cluster configuration in place, so this reports success without
    applying any change. Namespaces and zone mappings only change through CREATE and DELETE.
    """
    LOG.info('[UPDATE] Entering UPDATE handler, no changes are applied')
    return ProgressEvent(
        status=OperationStatus.SUCCESS,
        message="Update Complete",
        resourceModel=request.desiredResourceState,
    )


@resource.handler(Action.DELETE)
def delete_handler(
        session: Optional[SessionProxy],
        request: ResourceHandlerRequest,
        callback_context: MutableMapping[str, Any],
) -> ProgressEvent:
    """
    [DELETE] Handler

    :param session: Boto SessionProxy
    :param request: Handler request carrying the desired resource state
    :param callback_context: Value Mapping set when the handler returns status=IN_PROGRESS and needs more processing.
    :return ProgressEvent:
    """
    LOG.info('[DELETE] Entering DELETE handler')
    return _run('DELETE', request.desiredResourceState, global_cluster_delete)


@resource.handler(Action.LIST)
def list_handler(
        session: Optional[SessionProxy],
        request: ResourceHandlerRequest,
        callback_context: MutableMapping[str, Any],
) -> ProgressEvent:
    # No OP
    return ProgressEvent(
        status=OperationStatus.SUCCESS,
        message="List Complete",
    )
