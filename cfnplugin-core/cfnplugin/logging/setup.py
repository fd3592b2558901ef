import logging
import sys

from cfnplugin import config

from .format import AddInvocationAttributes, InvocationFormatter

# log levels of the libraries a handler process typically loads, applied on top of the root level
default_log_levels = {
    "boto3": logging.INFO,
    "botocore": logging.ERROR,
    "s3transfer": logging.INFO,
    "urllib3": logging.WARNING,
    "plux": logging.WARNING,
    "cfnplugin.handler.encoding": logging.INFO,
}

# with CFN_LOG=trace, failed decodes and AWS calls are logged in detail
trace_log_levels = {
    "boto3": logging.DEBUG,
    "botocore": logging.DEBUG,
    "plux": logging.DEBUG,
    "cfnplugin.handler.encoding": logging.DEBUG,
}


def get_log_level_from_config() -> int:
    if config.is_trace_logging_enabled():
        return logging.DEBUG
    if config.CFN_LOG:
        return logging.getLevelName(str(config.CFN_LOG).upper())
    return logging.DEBUG if config.DEBUG else logging.INFO


def create_default_handler(log_level: int) -> logging.Handler:
    log_handler = logging.StreamHandler(stream=sys.stderr)
    log_handler.setLevel(log_level)
    log_handler.setFormatter(InvocationFormatter())
    log_handler.addFilter(AddInvocationAttributes())
    return log_handler


def setup_logging(log_level=logging.INFO) -> None:
    """
    Configures logging for a process hosting resource handlers: a single stderr handler on the root logger which
    tags records with the current invocation.

    :param log_level: the optional log level.
    """
    logging.basicConfig(level=log_level, handlers=[create_default_handler(log_level)], force=True)

    logging.getLogger("cfnplugin").setLevel(log_level)
    levels = trace_log_levels if config.is_trace_logging_enabled() else default_log_levels
    for logger, level in levels.items():
        logging.getLogger(logger).setLevel(level)


def setup_logging_from_config() -> None:
    setup_logging(get_log_level_from_config())
