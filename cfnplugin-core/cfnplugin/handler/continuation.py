"""
Resuming long-running operations. When a handler returns ``InProgress``, the orchestrator waits for the
requested delay and invokes the handler again for the same resource, passing the event's callback context as the
callback context of the new request. ``InvocationLoop`` plays the orchestrator's part for local execution and
tests.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from cfnplugin import config

from .encoding import encode_bytes
from .progress import Failed, InProgress, ProgressEvent, Success
from .provider import Action, ResourceHandler, invoke
from .request import ResourceRequest

LOG = logging.getLogger(__name__)


def next_request(request: ResourceRequest, event: InProgress) -> ResourceRequest:
    """
    Builds the request of the invocation following an IN_PROGRESS outcome. The callback context of the event
    replaces the previous one as a whole, and a partial model reported by the event becomes the current properties.
    Everything else is carried over unchanged.
    """
    if not isinstance(event, InProgress):
        raise ValueError(f"Only an IN_PROGRESS event can be continued, got {event.status.value}")

    continued = request.with_callback_context(event.callback_context)
    if event.resource_model is not None:
        continued = continued.with_properties_body(encode_bytes(event.resource_model))
    return continued


class InvocationLoop:
    """
    Re-invokes a handler while it reports IN_PROGRESS, honoring the requested callback delays, until it returns a
    terminal event.
    """

    max_attempts: int
    max_delay: int

    def __init__(
        self,
        max_attempts: int = None,
        max_delay: int = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.max_attempts = max_attempts if max_attempts is not None else config.CFN_MAX_INVOCATIONS
        self.max_delay = max_delay if max_delay is not None else config.CFN_MAX_CALLBACK_DELAY
        self.sleep = sleep

    def run(
        self, handler: ResourceHandler, action: Action, request: ResourceRequest
    ) -> ProgressEvent:
        """
        Drives the invocations for one resource operation.

        :returns: the terminal (SUCCESS or FAILED) event
        :raises TimeoutError: if the handler is still in progress after ``max_attempts`` invocations
        """
        for attempt in range(1, self.max_attempts + 1):
            event = invoke(handler, action, request)

            match event:
                case Success() | Failed():
                    LOG.debug(
                        "Resource %s reached %s after %s invocation(s)",
                        request.logical_resource_id,
                        event.status.value,
                        attempt,
                    )
                    return event
                case InProgress():
                    request = next_request(request, event)
                    if attempt < self.max_attempts:
                        delay = min(event.callback_delay_seconds, self.max_delay)
                        LOG.debug(
                            "Resource %s in progress, invoking again in %ss",
                            request.logical_resource_id,
                            delay,
                        )
                        self.sleep(delay)

        raise TimeoutError(
            f"Resource {request.logical_resource_id} (action {Action(action).value}) did not stabilize "
            f"after {self.max_attempts} invocations"
        )

    def list_all(
        self, handler: ResourceHandler, request: ResourceRequest, max_pages: Optional[int] = None
    ) -> ProgressEvent:
        """
        Collects all pages of a LIST operation. Each page is requested with the next token of the previous one,
        until a page comes without a token.

        :returns: a SUCCESS event with the models of all pages, or the first FAILED event
        """
        max_pages = max_pages if max_pages is not None else self.max_attempts
        resource_models = []

        for _ in range(max_pages):
            event = self.run(handler, Action.LIST, request)
            if isinstance(event, Failed):
                return event

            resource_models.extend(event.resource_models or [])
            if not event.next_token:
                return Success(resource_models=resource_models, message=event.message)
            request = request.with_next_token(event.next_token)

        raise TimeoutError(
            f"Listing resources for {request.logical_resource_id} exceeded {max_pages} pages"
        )
