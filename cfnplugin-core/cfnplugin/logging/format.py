"""
Formatting of the logs written while resource handlers run. Records emitted inside ``invocation_log_context`` are
tagged with the action and logical resource id of the invocation, e.g.::

    2024-05-02T10:15:03.120  WARN --- [CREATE MyBucket] cfnplugin.handler.provider : Error handling CREATE ...
"""
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, NamedTuple, Optional

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(cfn_level)5s --- [%(cfn_invocation)s] %(name)s : %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# shown instead of the invocation for records emitted outside of one
NO_INVOCATION = "-"

CUSTOM_LEVEL_NAMES = {
    50: "FATAL",
    40: "ERROR",
    30: "WARN",
    20: "INFO",
    10: "DEBUG",
}


class Invocation(NamedTuple):
    action: str
    logical_resource_id: str
    resource_type: str = ""


_current_invocation: ContextVar[Optional[Invocation]] = ContextVar(
    "cfnplugin_invocation", default=None
)


def current_invocation() -> Optional[Invocation]:
    return _current_invocation.get()


@contextmanager
def invocation_log_context(
    action: str, logical_resource_id: str, resource_type: str = ""
) -> Iterator[Invocation]:
    """Tags all records logged in the current context with the given invocation."""
    invocation = Invocation(action, logical_resource_id, resource_type)
    token = _current_invocation.set(invocation)
    try:
        yield invocation
    finally:
        _current_invocation.reset(token)


class InvocationFormatter(logging.Formatter):
    """
    A formatter that uses ``LOG_FORMAT`` and ``LOG_DATE_FORMAT``.
    """

    def __init__(self, fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT):
        super().__init__(fmt=fmt, datefmt=datefmt)


class AddInvocationAttributes(logging.Filter):
    """
    Filter that adds the attributes used by ``LOG_FORMAT`` to a log record:

    - cfn_level: the abbreviated loglevel that's max 5 characters long
    - cfn_action, cfn_resource, cfn_resource_type: the current invocation, ``-`` outside of one
    - cfn_invocation: action and logical resource id, e.g. ``UPDATE MyQueue``
    """

    def filter(self, record):
        record.cfn_level = CUSTOM_LEVEL_NAMES.get(record.levelno, record.levelname)

        invocation = current_invocation()
        if invocation is None:
            record.cfn_action = record.cfn_resource = record.cfn_resource_type = NO_INVOCATION
            record.cfn_invocation = NO_INVOCATION
        else:
            record.cfn_action = invocation.action
            record.cfn_resource = invocation.logical_resource_id or NO_INVOCATION
            record.cfn_resource_type = invocation.resource_type or NO_INVOCATION
            record.cfn_invocation = f"{record.cfn_action} {record.cfn_resource}"
        return True
