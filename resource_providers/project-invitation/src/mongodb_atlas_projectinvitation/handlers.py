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
    ProgressEvent,
    Resource,
    SessionProxy,
)

from mongodb_atlas_util.atlas import AtlasClientError
from mongodb_atlas_util.config import HandlerConfig
from mongodb_atlas_util.profile import ProfileError, client_from_profile, resolve_profile_name
from mongodb_atlas_util.progress_events import failed_event
from mongodb_atlas_util.util import redact, setup_logging
from mongodb_atlas_util.validator import PROJECT_ID, validate_model

from .create import invitation_create, invitation_update
from .delete import invitation_delete
from .models import ResourceHandlerRequest, ResourceModel
from .read import invitation_list, invitation_read

# Use this logger to forward log messages to CloudWatch Logs.
# All loggers in this module inherit from `mongodb_atlas_projectinvitation`
LOG = logging.getLogger("mongodb_atlas_projectinvitation")
TYPE_NAME = "MongoDB::Atlas::ProjectInvitation"

INVITATION_ID = "Id"
USERNAME = "Username"
ROLES = "Roles"

CREATE_REQUIRED_FIELDS = [PROJECT_ID, USERNAME, ROLES]
READ_REQUIRED_FIELDS = [PROJECT_ID, INVITATION_ID]
UPDATE_REQUIRED_FIELDS = [PROJECT_ID, INVITATION_ID, ROLES]
DELETE_REQUIRED_FIELDS = [PROJECT_ID, INVITATION_ID]
LIST_REQUIRED_FIELDS = [PROJECT_ID]

resource = Resource(TYPE_NAME, ResourceModel)
test_entrypoint = resource.test_entrypoint


def ide_entrypoint(*args, **kwargs):
    return test_entrypoint(*args, **kwargs)


def _run(action: str, session: Optional[SessionProxy], model: Optional[ResourceModel], required_fields,
         operation) -> ProgressEvent:
    """
    Validates the model, resolves its profile into an Atlas client and runs the operation with it

    :param action: Action name for log messages
    :param session: Boto SessionProxy used to read the profile
    :param model: Resource model
    :param required_fields: Field paths that must be set on the model
    :param operation: Callable taking (client, model) and returning ProgressEvent kwargs
    :return ProgressEvent:
    """
    try:
        config = HandlerConfig.from_env(TYPE_NAME)
        setup_logging(LOG, config)
        LOG.debug('[%s] Current model state %s', action, redact(model))
        invalid = validate_model(required_fields, model)
        if invalid:
            return invalid

        model.Profile = resolve_profile_name(model.Profile, config)
        try:
            client = client_from_profile(session, model.Profile, config)
        except (ProfileError, AtlasClientError) as e:
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
    return _run('CREATE', session, request.desiredResourceState, CREATE_REQUIRED_FIELDS, invitation_create)


@resource.handler(Action.READ)
def read_handler(
        session: Optional[SessionProxy],
        request: ResourceHandlerRequest,
        callback_context: MutableMapping[str, Any],
) -> ProgressEvent:
    LOG.info('[READ] Entering READ handler')
    return _run('READ', session, request.desiredResourceState, READ_REQUIRED_FIELDS, invitation_read)


@resource.handler(Action.UPDATE)
def update_handler(
        session: Optional[SessionProxy],
        request: ResourceHandlerRequest,
        callback_context: MutableMapping[str, Any],
) -> ProgressEvent:
    """
    [UPDATE] Handler

    Only the roles of a pending invitation can be changed. Changing the user creates a new invitation.
    """
    LOG.info('[UPDATE] Entering UPDATE handler')
    return _run('UPDATE', session, request.desiredResourceState, UPDATE_REQUIRED_FIELDS, invitation_update)


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
    return _run('DELETE', session, request.desiredResourceState, DELETE_REQUIRED_FIELDS, invitation_delete)


@resource.handler(Action.LIST)
def list_handler(
        session: Optional[SessionProxy],
        request: ResourceHandlerRequest,
        callback_context: MutableMapping[str, Any],
) -> ProgressEvent:
    LOG.info('[LIST] Entering LIST handler')
    return _run('LIST', session, request.desiredResourceState, LIST_REQUIRED_FIELDS, invitation_list)
