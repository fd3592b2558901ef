from __future__ import annotations

import logging
from enum import Enum
from typing import Generic, Optional, Type, TypeVar

from plux import Plugin, PluginManager

from cfnplugin import config
from cfnplugin.logging.format import invocation_log_context

from .errors import HandlerErrorCode
from .progress import Failed, ProgressEvent, is_progress_event, serialize
from .request import (
    ResourceHandlerPayload,
    ResourceRequest,
    SessionFactory,
    convert_payload,
    create_session,
)

LOG = logging.getLogger(__name__)

Properties = TypeVar("Properties")


class Action(str, Enum):
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LIST = "LIST"


class NoResourceHandler(Exception):
    pass


class ResourceHandler(Generic[Properties]):
    """
    Base class of the handlers implementing the lifecycle of a resource type. Each operation receives the request of
    one invocation and returns its outcome. Operations a resource type does not support are left unimplemented.
    """

    TYPE: str = ""

    def create(self, request: ResourceRequest) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def read(self, request: ResourceRequest) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def update(self, request: ResourceRequest) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def delete(self, request: ResourceRequest) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def list(self, request: ResourceRequest) -> ProgressEvent[Properties]:
        raise NotImplementedError


class ResourceHandlerPlugin(Plugin):
    """
    Base class for resource handler plugins. The plugin name is the resource type, ``load`` sets the ``factory``
    that creates the handler.
    """

    namespace = "cfnplugin.resource_handlers"

    def __init__(self):
        self.factory: Optional[Type[ResourceHandler]] = None


_plugin_manager: Optional[PluginManager] = None


def get_plugin_manager() -> PluginManager:
    global _plugin_manager
    if _plugin_manager is None:
        _plugin_manager = PluginManager(ResourceHandlerPlugin.namespace)
    return _plugin_manager


def load_resource_handler(
    resource_type: str, plugin_manager: PluginManager = None
) -> ResourceHandler:
    """
    Loads the handler registered for the given resource type.

    :raises NoResourceHandler: if no plugin exists for the type, or it could not be loaded
    """
    plugin_manager = plugin_manager or get_plugin_manager()
    try:
        plugin = plugin_manager.load(resource_type)
    except ValueError:
        # could not find a plugin for that name
        raise NoResourceHandler(f'No resource handler found for "{resource_type}"')
    except Exception as e:
        LOG.warning(
            "Failed to load resource type %s as a ResourceHandler.",
            resource_type,
            exc_info=LOG.isEnabledFor(logging.DEBUG),
        )
        raise NoResourceHandler(f'Unable to load resource handler for "{resource_type}"') from e

    if plugin.factory is None:
        raise NoResourceHandler(f'Resource handler plugin "{resource_type}" has no factory')
    return plugin.factory()


def is_implemented(handler: ResourceHandler, action: Action) -> bool:
    """Whether the handler overrides the operation of the given action."""
    name = Action(action).value.lower()
    return getattr(type(handler), name, None) is not getattr(ResourceHandler, name)


def invoke(
    handler: ResourceHandler, action: Action, request: ResourceRequest
) -> ProgressEvent[Properties]:
    """
    Invokes the handler operation for the given action. Exceptions raised by the handler are turned into a FAILED
    event, an operation the handler does not implement fails with ``InvalidRequest``. Log records emitted during
    the invocation carry its action and logical resource id.

    :raises TypeError: if the handler returns something that is not a progress event
    """
    action = Action(action)
    resource_type = request.request_context.resource_type or type(handler).__name__

    with invocation_log_context(action.value, request.logical_resource_id, resource_type):
        return _invoke(handler, action, request, resource_type)


def _invoke(
    handler: ResourceHandler, action: Action, request: ResourceRequest, resource_type: str
) -> ProgressEvent[Properties]:
    if not is_implemented(handler, action):
        LOG.warning(
            'Action %s is not supported by resource type "%s", id "%s"',
            action.value,
            resource_type,
            request.logical_resource_id,
        )
        return Failed(
            error_code=HandlerErrorCode.InvalidRequest,
            message=f"Action {action.value} is not supported",
        )

    operation = getattr(handler, action.value.lower())

    LOG.debug(
        "Invoking %s for resource %s (type %s)",
        action.value,
        request.logical_resource_id,
        resource_type,
    )
    try:
        event = operation(request)
    except Exception as e:
        log_method = LOG.exception if config.CFN_VERBOSE_ERRORS else LOG.warning
        log_method(
            "Error handling %s for resource %s: %s", action.value, request.logical_resource_id, e
        )
        return Failed.from_exception(e)

    if not is_progress_event(event):
        raise TypeError(
            f"Handler {type(handler).__name__} returned {type(event).__name__} for {action.value}, "
            f"expected a progress event"
        )

    LOG.debug(
        "Resource %s %s returned %s", request.logical_resource_id, action.value, event.status.value
    )
    return event


def invoke_payload(
    handler: ResourceHandler,
    payload: ResourceHandlerPayload,
    session_factory: SessionFactory = create_session,
) -> dict:
    """
    Handles a raw invocation payload and returns the serialized outcome. An unknown action fails the invocation with
    ``InvalidRequest``.
    """
    try:
        action = Action(payload.get("action"))
    except ValueError:
        return serialize(
            Failed(
                error_code=HandlerErrorCode.InvalidRequest,
                message=f"Unknown action {payload.get('action')}",
            )
        )

    try:
        request = convert_payload(payload, session_factory=session_factory)
    except ValueError as e:
        return serialize(Failed(error_code=HandlerErrorCode.InvalidRequest, message=str(e)))

    return serialize(invoke(handler, action, request))
