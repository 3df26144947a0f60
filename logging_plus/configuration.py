import os
from typing import Optional

from appdirs import user_log_dir

# environment variables (always prefixed by "TOOLNAME_")
LOG_SUB_DIRECTORY = 'LOG_SUB_DIRECTORY'
LOG_DIRECTORY = 'LOG_DIRECTORY'
LOG_LEVEL = 'LOG_LEVEL'
LOGGING_ENABLED = 'LOGGING_ENABLED'
EVENT_LOG_ENABLED = 'EVENT_LOG_ENABLED'


def tool_variable(tool_name: str, key: str) -> str:
    return tool_name.upper() + '_' + key


def get_log_root_directory(tool_name: str):
    default_logging_dir = user_log_dir(tool_name)
    return os.getenv(tool_variable(tool_name, LOG_DIRECTORY), default_logging_dir)


def get_log_sub_directory(tool_name: str):
    return os.getenv(tool_variable(tool_name, LOG_SUB_DIRECTORY), 'default')


def get_log_level_label(tool_name: str):
    label = os.getenv(tool_variable(tool_name, LOG_LEVEL), 'INFO').upper()
    if label not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        raise ValueError(f'Unknown log level "{label}"')
    return label


def get_logging_enabled(tool_name: str):
    return get_environment_variable_bool(tool_variable(tool_name, LOGGING_ENABLED), False)


def get_event_log_enabled(tool_name: str):
    # only relevant when logging is enabled at all
    return get_environment_variable_bool(tool_variable(tool_name, EVENT_LOG_ENABLED), True)


###########
# HELPERS #
###########


def string_to_bool(s: Optional[str], default: bool):
    if s is None:
        return default
    s = s.strip().lower()
    if s in ['true', '1', 't', 'y', 'yes']:
        return True
    elif s in ['false', '0', 'f', 'n', 'no']:
        return False
    else:
        raise ValueError(f'Cannot interpret "{s}" as a boolean')


def string_to_int(s: Optional[str], default: Optional[int]):
    if s is None or s.strip() == '':
        return default
    try:
        return int(s.strip().replace('_', ''), 0)
    except ValueError:
        raise ValueError(f'Cannot interpret "{s}" as an integer')


def get_environment_variable_bool(key: str, default: bool):
    return string_to_bool(os.environ.get(key), default=default)


def get_environment_variable_int(key: str, default: Optional[int]):
    return string_to_int(os.environ.get(key), default=default)
