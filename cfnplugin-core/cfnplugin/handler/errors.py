from enum import Enum
from typing import Optional

# a required property body was absent
BODY_EMPTY = "BodyEmpty"

# a present property body could not be converted into the requested model
MARSHALING = "Marshaling"


class HandlerErrorCode(str, Enum):
    """Failure classification reported to the orchestrator with a FAILED progress event."""

    NotUpdatable = "NotUpdatable"
    InvalidRequest = "InvalidRequest"
    AccessDenied = "AccessDenied"
    InvalidCredentials = "InvalidCredentials"
    AlreadyExists = "AlreadyExists"
    NotFound = "NotFound"
    ResourceConflict = "ResourceConflict"
    Throttling = "Throttling"
    ServiceLimitExceeded = "ServiceLimitExceeded"
    NotStabilized = "NotStabilized"
    GeneralServiceException = "GeneralServiceException"
    ServiceInternalError = "ServiceInternalError"
    NetworkFailure = "NetworkFailure"
    InternalFailure = "InternalFailure"
    InvalidTypeConfiguration = "InvalidTypeConfiguration"


class CfnError(Exception):
    """
    Error raised by the runtime itself, e.g., when a property body cannot be decoded. Carries a short code
    (``BodyEmpty``, ``Marshaling``), a human-readable message, and the underlying cause, if any.
    """

    code: str
    message: str
    cause: Optional[BaseException]

    def __init__(self, code: str, message: str, cause: BaseException = None):
        super().__init__(code, message)
        self.code = code
        self.message = message
        self.cause = cause

    @property
    def handler_error_code(self) -> HandlerErrorCode:
        return HandlerErrorCode.InvalidRequest

    def __str__(self):
        if self.cause is not None:
            return f"{self.code}: {self.message}\ncaused by: {self.cause}"
        return f"{self.code}: {self.message}"


class TypeConfigurationError(CfnError):
    """A ``CfnError`` raised while decoding the type configuration body."""

    @property
    def handler_error_code(self) -> HandlerErrorCode:
        return HandlerErrorCode.InvalidTypeConfiguration


class HandlerError(Exception):
    """
    Raised by resource handlers to fail the current invocation with a specific error code.
    """

    error_code: HandlerErrorCode
    message: str

    def __init__(self, error_code: HandlerErrorCode, message: str = ""):
        self.error_code = HandlerErrorCode(error_code)
        self.message = message or self.error_code.value
        super().__init__(self.message)


class NotFound(HandlerError):
    def __init__(self, type_name: str, identifier: str):
        super().__init__(
            HandlerErrorCode.NotFound,
            f"Resource of type '{type_name}' with identifier '{identifier}' was not found.",
        )


class AlreadyExists(HandlerError):
    def __init__(self, type_name: str, identifier: str):
        super().__init__(
            HandlerErrorCode.AlreadyExists,
            f"Resource of type '{type_name}' with identifier '{identifier}' already exists.",
        )


class NotUpdatable(HandlerError):
    def __init__(self, message: str):
        super().__init__(HandlerErrorCode.NotUpdatable, message)
