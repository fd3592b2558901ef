from .continuation import InvocationLoop, next_request
from .entrypoint import HandlerEntrypoint
from .errors import (
    BODY_EMPTY,
    MARSHALING,
    AlreadyExists,
    CfnError,
    HandlerError,
    HandlerErrorCode,
    NotFound,
    NotUpdatable,
    TypeConfigurationError,
)
from .progress import Failed, InProgress, OperationStatus, ProgressEvent, Success
from .provider import Action, ResourceHandler, ResourceHandlerPlugin, invoke, invoke_payload
from .request import RequestContext, ResourceRequest, convert_payload

__all__ = [
    "Action",
    "AlreadyExists",
    "BODY_EMPTY",
    "CfnError",
    "Failed",
    "HandlerEntrypoint",
    "HandlerError",
    "HandlerErrorCode",
    "InProgress",
    "InvocationLoop",
    "MARSHALING",
    "NotFound",
    "NotUpdatable",
    "OperationStatus",
    "ProgressEvent",
    "RequestContext",
    "ResourceHandler",
    "ResourceHandlerPlugin",
    "ResourceRequest",
    "Success",
    "TypeConfigurationError",
    "convert_payload",
    "invoke",
    "invoke_payload",
    "next_request",
]
