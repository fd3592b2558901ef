from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Type, TypedDict, TypeVar, Union

import boto3

from cfnplugin.utils.json import canonical_json, ensure_json_mapping
from cfnplugin.utils.strings import to_body

from . import encoding
from .errors import TypeConfigurationError

LOG = logging.getLogger(__name__)

T = TypeVar("T")

RawBody = Union[str, bytes, bytearray, dict, list, None]


class Credentials(TypedDict):
    accessKeyId: str
    secretAccessKey: str
    sessionToken: str


class ResourceHandlerPayloadRequestData(TypedDict, total=False):
    logicalResourceId: str
    resourceProperties: RawBody
    previousResourceProperties: RawBody
    typeConfiguration: RawBody
    callerCredentials: Credentials
    providerCredentials: Credentials
    systemTags: dict[str, str]
    previousSystemTags: dict[str, str]
    stackTags: dict[str, str]
    previousStackTags: dict[str, str]


class ResourceHandlerPayload(TypedDict, total=False):
    action: str
    callbackContext: dict
    stackId: str
    requestData: ResourceHandlerPayloadRequestData
    resourceType: str
    resourceTypeVersion: str
    awsAccountId: str
    bearerToken: str
    region: str
    nextToken: Optional[str]


SessionFactory = Callable[[Optional[Credentials], str], Any]


def _frozen_tags(tags: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(tags or {}))


@dataclass(frozen=True)
class RequestContext:
    """Information about the stack and account the current invocation is issued for."""

    stack_id: str = ""
    region: str = ""
    account_id: str = ""
    stack_tags: Mapping[str, str] = field(default_factory=dict)
    system_tags: Mapping[str, str] = field(default_factory=dict)
    # pagination token, only set for LIST invocations
    next_token: Optional[str] = None
    previous_stack_tags: Mapping[str, str] = field(default_factory=dict)
    previous_system_tags: Mapping[str, str] = field(default_factory=dict)
    resource_type: str = ""

    def __post_init__(self):
        for name in ("stack_tags", "system_tags", "previous_stack_tags", "previous_system_tags"):
            object.__setattr__(self, name, _frozen_tags(getattr(self, name)))

    def with_next_token(self, next_token: Optional[str]) -> RequestContext:
        return dataclasses.replace(self, next_token=next_token)


@dataclass(frozen=True)
class ResourceRequest:
    """
    The immutable input of a single handler invocation. The raw property bodies are kept as bytes and only decoded
    when a handler asks for them, so the same body can be decoded any number of times, into different models.

    The callback context is the state a handler returned with its last IN_PROGRESS event for this resource (empty on
    the first invocation). It is the only state carried over from one invocation to the next. It is exposed
    read-only at every level, nested objects as ``MappingProxyType`` and arrays as ``FrozenList``.
    """

    logical_resource_id: str
    callback_context: Mapping[str, Any] = field(default_factory=dict)
    request_context: RequestContext = field(default_factory=RequestContext)
    # authenticated session, valid for the lifetime of this invocation only
    session: Any = field(default=None, compare=False, repr=False)
    previous_properties_body: bytes = field(default=b"", repr=False)
    properties_body: bytes = field(default=b"", repr=False)
    type_configuration_body: bytes = field(default=b"", repr=False)

    def __post_init__(self):
        object.__setattr__(
            self, "callback_context", ensure_json_mapping(self.callback_context, "callback context")
        )
        for name in ("previous_properties_body", "properties_body", "type_configuration_body"):
            object.__setattr__(self, name, to_body(getattr(self, name)))

    def decode_previous(self, model: Type[T]) -> Optional[T]:
        """
        Decodes the previous properties of the resource. An empty body is valid (there is no previous state on
        CREATE) and yields ``None``.
        """
        return encoding.decode(self.previous_properties_body, model, allow_empty=True)

    def decode_current(self, model: Type[T]) -> T:
        """
        Decodes the current (desired) properties of the resource.

        :raises CfnError: ``BodyEmpty`` if there are no properties, ``Marshaling`` if they do not fit the model
        """
        return encoding.decode(self.properties_body, model, empty_message="Body is empty")

    def decode_type_configuration(self, model: Type[T]) -> T:
        """
        Decodes the provider-level type configuration.

        :raises TypeConfigurationError: ``BodyEmpty`` if there is no configuration, ``Marshaling`` if it does not
            fit the model
        """
        return encoding.decode(
            self.type_configuration_body,
            model,
            empty_message="Type Config is empty",
            error_class=TypeConfigurationError,
        )

    def with_callback_context(self, callback_context: Mapping[str, Any]) -> ResourceRequest:
        return dataclasses.replace(self, callback_context=callback_context)

    def with_properties_body(self, properties_body: bytes) -> ResourceRequest:
        return dataclasses.replace(self, properties_body=properties_body)

    def with_next_token(self, next_token: Optional[str]) -> ResourceRequest:
        return dataclasses.replace(
            self, request_context=self.request_context.with_next_token(next_token)
        )


def create_session(credentials: Optional[Credentials], region_name: str) -> Optional[boto3.session.Session]:
    """Creates a boto3 session from the caller credentials of an invocation payload, if there are any."""
    if not credentials:
        return None
    return boto3.session.Session(
        aws_access_key_id=credentials.get("accessKeyId"),
        aws_secret_access_key=credentials.get("secretAccessKey"),
        aws_session_token=credentials.get("sessionToken"),
        region_name=region_name or None,
    )


def raw_body(value: RawBody) -> bytes:
    """Converts a property field of an invocation payload into a raw body. Absent fields become ``b""``."""
    if value is None or isinstance(value, (str, bytes, bytearray)):
        return to_body(value)
    return canonical_json(value)


def convert_payload(
    payload: ResourceHandlerPayload, session_factory: SessionFactory = create_session
) -> ResourceRequest:
    """
    Builds the ``ResourceRequest`` for an invocation payload sent by the orchestrator.

    :param payload: the raw invocation payload
    :param session_factory: creates the session handed to the handler from the caller credentials and region
    :return: the request
    """
    request_data = payload.get("requestData") or {}
    region = payload.get("region") or ""

    request_context = RequestContext(
        stack_id=payload.get("stackId") or "",
        region=region,
        account_id=payload.get("awsAccountId") or "",
        stack_tags=request_data.get("stackTags"),
        system_tags=request_data.get("systemTags"),
        next_token=payload.get("nextToken"),
        previous_stack_tags=request_data.get("previousStackTags"),
        previous_system_tags=request_data.get("previousSystemTags"),
        resource_type=payload.get("resourceType") or "",
    )

    return ResourceRequest(
        logical_resource_id=request_data.get("logicalResourceId") or "",
        callback_context=payload.get("callbackContext") or {},
        request_context=request_context,
        session=session_factory(request_data.get("callerCredentials"), region),
        previous_properties_body=raw_body(request_data.get("previousResourceProperties")),
        properties_body=raw_body(request_data.get("resourceProperties")),
        type_configuration_body=raw_body(request_data.get("typeConfiguration")),
    )
