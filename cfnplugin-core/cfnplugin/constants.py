# default encoding used for property bodies and string/bytes conversion
DEFAULT_ENCODING = "utf-8"

# truthy values of boolean environment variables
TRUE_STRINGS = ("1", "true", "True")

# log levels accepted by the CFN_LOG environment variable
LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "warning")

# with this log level, the AWS SDK and the property codec log at debug level as well
CFN_LOG_TRACE = "trace"

# upper bound of the re-invocation delay the orchestrator accepts for an IN_PROGRESS event
DEFAULT_MAX_CALLBACK_DELAY_SECONDS = 900

# default number of invocations the local invocation loop performs before giving up
DEFAULT_MAX_INVOCATIONS = 100
