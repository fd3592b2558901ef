"""
Outcome of a single handler invocation. A handler returns exactly one of ``Success``, ``Failed`` or ``InProgress``.
``InProgress`` carries the callback context the orchestrator hands back on the next invocation for the same
resource, together with the number of seconds to wait before that invocation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, Mapping, Optional, Sequence, Type, TypeVar, Union

from cfnplugin.utils.json import ensure_json_mapping, thaw_json

from .encoding import encode, get_type_adapter
from .errors import CfnError, HandlerError, HandlerErrorCode

LOG = logging.getLogger(__name__)

Properties = TypeVar("Properties")


class OperationStatus(str, Enum):
    # implicit state before a handler produced an outcome, never emitted
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Success(Generic[Properties]):
    # the resulting model, conventionally empty for DELETE
    resource_model: Optional[Properties] = None
    # models returned by LIST, with next_token pointing to the next page
    resource_models: Optional[Sequence[Properties]] = None
    next_token: Optional[str] = None
    message: str = ""

    status: ClassVar[OperationStatus] = OperationStatus.SUCCESS

    def __post_init__(self):
        if self.resource_models is not None:
            object.__setattr__(self, "resource_models", tuple(self.resource_models))


@dataclass(frozen=True)
class Failed(Generic[Properties]):
    error_code: HandlerErrorCode
    message: str = ""
    resource_model: Optional[Properties] = None

    status: ClassVar[OperationStatus] = OperationStatus.FAILED

    def __post_init__(self):
        object.__setattr__(self, "error_code", HandlerErrorCode(self.error_code))

    @classmethod
    def from_exception(cls, exception: BaseException) -> Failed:
        """Creates the FAILED event reported for an exception raised while handling an invocation."""
        if isinstance(exception, HandlerError):
            return cls(error_code=exception.error_code, message=exception.message)
        if isinstance(exception, CfnError):
            return cls(error_code=exception.handler_error_code, message=str(exception))
        return cls(
            error_code=HandlerErrorCode.InternalFailure,
            message=str(exception) or type(exception).__name__,
        )


@dataclass(frozen=True)
class InProgress(Generic[Properties]):
    callback_context: Mapping[str, Any] = field(default_factory=dict)
    callback_delay_seconds: int = 0
    # optional intermediate model, reported to the orchestrator and passed back as current properties
    resource_model: Optional[Properties] = None
    message: str = ""

    status: ClassVar[OperationStatus] = OperationStatus.IN_PROGRESS

    def __post_init__(self):
        if isinstance(self.callback_delay_seconds, bool) or not isinstance(
            self.callback_delay_seconds, int
        ):
            raise TypeError(
                f"callback delay must be an int, got {type(self.callback_delay_seconds).__name__}"
            )
        if self.callback_delay_seconds < 0:
            raise ValueError(
                f"callback delay must not be negative, got {self.callback_delay_seconds}"
            )
        object.__setattr__(
            self, "callback_context", ensure_json_mapping(self.callback_context, "callback context")
        )


ProgressEvent = Union[Success[Properties], Failed[Properties], InProgress[Properties]]

PROGRESS_EVENT_TYPES = (Success, Failed, InProgress)


def is_progress_event(value: Any) -> bool:
    return isinstance(value, PROGRESS_EVENT_TYPES)


def is_terminal(event: ProgressEvent) -> bool:
    return isinstance(event, (Success, Failed))


def serialize(event: ProgressEvent) -> dict:
    """
    Serializes a progress event into the payload returned to the orchestrator, e.g.::

        {"status": "IN_PROGRESS", "callbackContext": {"id": "abc"}, "callbackDelaySeconds": 5}

    Keys that do not apply to the event are omitted.
    """
    if not is_progress_event(event):
        raise TypeError(f"Not a progress event: {event!r}")

    payload: dict[str, Any] = {"status": event.status.value}

    match event:
        case Success():
            if event.resource_model is not None:
                payload["resourceModel"] = encode(event.resource_model)
            if event.resource_models is not None:
                payload["resourceModels"] = encode(list(event.resource_models))
            if event.next_token:
                payload["nextToken"] = event.next_token
        case Failed():
            payload["errorCode"] = event.error_code.value
            if event.resource_model is not None:
                payload["resourceModel"] = encode(event.resource_model)
        case InProgress():
            payload["callbackContext"] = thaw_json(event.callback_context)
            payload["callbackDelaySeconds"] = event.callback_delay_seconds
            if event.resource_model is not None:
                payload["resourceModel"] = encode(event.resource_model)

    if event.message:
        payload["message"] = event.message

    return payload


def deserialize(payload: Mapping[str, Any], model: Type[Properties] = None) -> ProgressEvent:
    """
    Parses a serialized progress event.

    :param payload: the serialized event
    :param model: optional model type the resource model(s) are validated into, by default they stay plain dicts
    :return: the progress event
    :raises ValueError: if the status is missing, unknown, or not a handler outcome
    """
    status = OperationStatus(payload.get("status"))

    def _model(raw):
        if raw is None or model is None:
            return raw
        return get_type_adapter(model).validate_python(raw)

    message = payload.get("message") or ""
    resource_model = _model(payload.get("resourceModel"))

    match status:
        case OperationStatus.SUCCESS:
            resource_models = payload.get("resourceModels")
            if resource_models is not None:
                resource_models = [_model(item) for item in resource_models]
            return Success(
                resource_model=resource_model,
                resource_models=resource_models,
                next_token=payload.get("nextToken"),
                message=message,
            )
        case OperationStatus.FAILED:
            return Failed(
                error_code=payload.get("errorCode") or HandlerErrorCode.InternalFailure,
                message=message,
                resource_model=resource_model,
            )
        case OperationStatus.IN_PROGRESS:
            return InProgress(
                callback_context=payload.get("callbackContext") or {},
                callback_delay_seconds=int(payload.get("callbackDelaySeconds") or 0),
                resource_model=resource_model,
                message=message,
            )
        case invalid_status:
            raise ValueError(f"{invalid_status.value} is not a handler outcome")
