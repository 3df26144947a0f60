import os
from datetime import datetime
from typing import Optional


now = datetime.now()
now_string = now.strftime("%Y-%m-%d__%H-%M-%S__%f")


def get_log_directory(log_root_directory: str, log_sub_directory: Optional[str] = None, use_time_sub_directory=False):
    directory = log_root_directory

    if log_sub_directory is not None:
        directory = os.path.join(directory, log_sub_directory)

    if use_time_sub_directory:
        # one directory per process run
        time_sub_directory = 'log__' + now_string + '__' + str(os.getpid())
        directory = os.path.join(directory, time_sub_directory)

    return directory
