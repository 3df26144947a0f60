from logging_plus.configuration import get_environment_variable_int

from deadswitch.deadswitch_logging import TOOL_NAME

DAY = 24 * 60 * 60

# environment variables (prefixed by "DEADSWITCH_")
GENESIS_TIME = 'GENESIS_TIME'
MIN_HEARTBEAT_INTERVAL = 'MIN_HEARTBEAT_INTERVAL'
MAX_HEARTBEAT_INTERVAL = 'MAX_HEARTBEAT_INTERVAL'

DEFAULT_GENESIS_TIME = 1_700_000_000
DEFAULT_MIN_HEARTBEAT_INTERVAL = DAY
DEFAULT_MAX_HEARTBEAT_INTERVAL = 10 * 365 * DAY


def _variable(key: str) -> str:
    return TOOL_NAME.upper() + '_' + key


def get_genesis_time() -> int:
    """
    Timestamp (seconds) a fresh ledger starts at
    """
    return get_environment_variable_int(_variable(GENESIS_TIME), DEFAULT_GENESIS_TIME)


def get_min_heartbeat_interval() -> int:
    return get_environment_variable_int(_variable(MIN_HEARTBEAT_INTERVAL), DEFAULT_MIN_HEARTBEAT_INTERVAL)


def get_max_heartbeat_interval() -> int:
    return get_environment_variable_int(_variable(MAX_HEARTBEAT_INTERVAL), DEFAULT_MAX_HEARTBEAT_INTERVAL)
