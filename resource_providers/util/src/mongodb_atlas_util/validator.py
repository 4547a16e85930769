"""
Required-field validation for resource models
"""
import logging
from typing import Any, Iterable, List, Optional

from cloudformation_cli_python_lib import HandlerErrorCode, ProgressEvent

from .progress_events import failed_event

LOG = logging.getLogger(__name__)

# Field paths shared by several resources
PUBLIC_KEY = "ApiKeys.PublicKey"
PRIVATE_KEY = "ApiKeys.PrivateKey"
PROJECT_ID = "ProjectId"
CLUSTER_NAME = "ClusterName"


def _lookup(model: Any, path: str) -> Any:
    value = model
    for attr in path.split("."):
        if value is None:
            return None
        value = getattr(value, attr, None)
    return value


def _is_missing(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return not value
    return value is None


def missing_fields(fields: Iterable[str], model: Any) -> List[str]:
    """
    Lists the dotted field paths that are absent from the model

    :param fields: Dotted paths, e.g. `ApiKeys.PublicKey`
    :param model: Resource model, may be None
    :return list: Missing paths, in the order requested
    """
    return [field for field in fields if _is_missing(_lookup(model, field))]


def validate_model(fields: Iterable[str], model: Any) -> Optional[ProgressEvent]:
    """
    Checks that every required field is set on the model

    :param fields: Dotted field paths that must be present
    :param model: Resource model
    :return: A FAILED InvalidRequest ProgressEvent, or None when the model is valid
    """
    missing = missing_fields(fields, model)
    if not missing:
        return None
    message = f"The next fields are required {' '.join(missing)}"
    LOG.warning(message)
    return failed_event(message, HandlerErrorCode.InvalidRequest)
