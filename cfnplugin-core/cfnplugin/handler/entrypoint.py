"""
Entry point of a process hosting a resource handler. The orchestrator's invocation payload is passed to the
entry point as is, e.g. from a Lambda function::

    handler = HandlerEntrypoint.for_resource_type("MyOrg::Storage::Bucket")

    def lambda_handler(event, context):
        return handler(event, context)
"""
import logging
from typing import Any

from plux import PluginManager

from cfnplugin.logging.setup import setup_logging_from_config

from .provider import ResourceHandler, invoke_payload, load_resource_handler
from .request import ResourceHandlerPayload, SessionFactory, create_session

LOG = logging.getLogger(__name__)


class HandlerEntrypoint:
    handler: ResourceHandler
    session_factory: SessionFactory
    configure_logging: bool

    def __init__(
        self,
        handler: ResourceHandler,
        session_factory: SessionFactory = create_session,
        configure_logging: bool = True,
    ):
        self.handler = handler
        self.session_factory = session_factory
        self.configure_logging = configure_logging
        self._logging_configured = False

    @classmethod
    def for_resource_type(
        cls, resource_type: str, plugin_manager: PluginManager = None, **kwargs
    ) -> "HandlerEntrypoint":
        """Creates an entry point for the handler plugin registered for the given resource type."""
        return cls(load_resource_handler(resource_type, plugin_manager), **kwargs)

    def __call__(self, event: ResourceHandlerPayload, context: Any = None) -> dict:
        if self.configure_logging and not self._logging_configured:
            setup_logging_from_config()
            self._logging_configured = True

        LOG.debug(
            "Received %s invocation for resource type %s",
            event.get("action"),
            event.get("resourceType"),
        )
        return invoke_payload(self.handler, event, session_factory=self.session_factory)
