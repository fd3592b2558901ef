import logging
import os
from typing import Union

from cfnplugin.constants import (
    CFN_LOG_TRACE,
    DEFAULT_ENCODING,
    DEFAULT_MAX_CALLBACK_DELAY_SECONDS,
    DEFAULT_MAX_INVOCATIONS,
    LOG_LEVELS,
    TRUE_STRINGS,
)

LOG = logging.getLogger(__name__)


def eval_log_type(env_var_name: str) -> Union[str, bool]:
    """Get the log type from environment variable"""
    cfn_log = os.environ.get(env_var_name, "").lower().strip()
    return cfn_log if cfn_log in LOG_LEVELS else False


def is_env_true(env_var_name: str) -> bool:
    """Whether the given environment variable has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() in TRUE_STRINGS


def parse_int_env(env_var_name: str, default: int) -> int:
    """Parse the value of the given env variable as a non-negative int, falling back to the default."""
    value = os.environ.get(env_var_name, "").strip()
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        LOG.warning("Invalid value for %s: %r, using default %s", env_var_name, value, default)
        return default
    if parsed < 0:
        LOG.warning("Negative value for %s: %r, using default %s", env_var_name, value, default)
        return default
    return parsed


def is_trace_logging_enabled():
    return CFN_LOG == CFN_LOG_TRACE


# whether to enable verbose debug logging
CFN_LOG = eval_log_type("CFN_LOG")
DEBUG = is_env_true("DEBUG") or CFN_LOG == CFN_LOG_TRACE

# log full tracebacks for exceptions raised by resource handlers
CFN_VERBOSE_ERRORS = is_env_true("CFN_VERBOSE_ERRORS")

# maximum number of invocations the local invocation loop performs for one resource
CFN_MAX_INVOCATIONS = parse_int_env("CFN_MAX_INVOCATIONS", DEFAULT_MAX_INVOCATIONS)

# callback delays returned by handlers are capped to this many seconds
CFN_MAX_CALLBACK_DELAY = parse_int_env("CFN_MAX_CALLBACK_DELAY", DEFAULT_MAX_CALLBACK_DELAY_SECONDS)
