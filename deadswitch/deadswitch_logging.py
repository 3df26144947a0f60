import logging

from logging_plus.default_logging import enable_default_logging_on_flag

TOOL_NAME = 'deadswitch'

# enable default logging
enable_default_logging_on_flag(TOOL_NAME)

# allow importing necessary logging functionality from this package (this implicitly enabling default logging)
# See also https://docs.python.org/3/howto/logging-cookbook.html for proper logging
getLogger = logging.getLogger


def getEventLogger():
    """
    Logger receiving every event emitted by a contract (see logging_plus.default_logging for its file handler)
    """
    return logging.getLogger(TOOL_NAME + '.events')
