"""
Builders for FAILED ProgressEvents
"""
from typing import Optional

from cloudformation_cli_python_lib import HandlerErrorCode, OperationStatus, ProgressEvent

STATUS_TO_ERROR_CODE = {
    400: HandlerErrorCode.InvalidRequest,
    401: HandlerErrorCode.InvalidCredentials,
    403: HandlerErrorCode.AccessDenied,
    404: HandlerErrorCode.NotFound,
    409: HandlerErrorCode.AlreadyExists,
    429: HandlerErrorCode.Throttling,
}


def failed_event(message: str, error_code: HandlerErrorCode) -> ProgressEvent:
    return ProgressEvent(
        status=OperationStatus.FAILED,
        errorCode=error_code,
        message=message,
    )


def error_code_for_status(status_code: Optional[int]) -> HandlerErrorCode:
    """
    Maps an HTTP status from the Atlas API to a CloudFormation error code

    A missing status means the request never got a response (connection or timeout error).

    :param status_code: HTTP status code, or None
    :return HandlerErrorCode:
    """
    if status_code is None:
        return HandlerErrorCode.InternalFailure
    return STATUS_TO_ERROR_CODE.get(status_code, HandlerErrorCode.ServiceInternalError)


def failed_event_by_response(message: str, status_code: Optional[int]) -> ProgressEvent:
    return failed_event(message, error_code_for_status(status_code))
