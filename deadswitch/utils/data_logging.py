import dataclasses
import enum
import json
import os
import contextlib
import time

data_log_file = os.getenv('DEADSWITCH_DATA_LOG_FILE')
if data_log_file is not None:
    the_data_log_file = open(data_log_file, 'a')
    the_current_context = []


def to_json_value(x):
    """
    Convert event payloads (dataclasses, enums, addresses, bytes) into JSON-serializable values
    """
    if dataclasses.is_dataclass(x) and not isinstance(x, type):
        return {f.name: to_json_value(getattr(x, f.name)) for f in dataclasses.fields(x)}
    if isinstance(x, enum.Enum):
        return x.name
    if isinstance(x, bool):
        return x
    if isinstance(x, int):
        # addresses and large token amounts are rendered as strings to stay exact in JSON consumers
        return str(x)
    if isinstance(x, (bytes, bytearray)):
        return bytes(x).hex()
    if isinstance(x, (list, tuple)):
        return [to_json_value(e) for e in x]
    if isinstance(x, dict):
        return {str(k): to_json_value(v) for k, v in x.items()}
    return x


def write_data(data):
    if data_log_file is not None:
        data = {"context": the_current_context, "data": data}
        the_data_log_file.write(json.dumps(data))
        the_data_log_file.write("\n")
        the_data_log_file.flush()


def write_event(emitter: int, event):
    if data_log_file is not None:
        write_data({"event": {"name": type(event).__name__, "emitter": to_json_value(emitter), "args": to_json_value(event)}})


@contextlib.contextmanager
def data_context(key):
    if data_log_file is not None:
        the_current_context.append(key)
        try:
            yield
        finally:
            the_current_context.pop()
    else:
        yield


@contextlib.contextmanager
def time_measure(key):
    if data_log_file is not None:
        start = time.perf_counter()
        yield
        end = time.perf_counter()
        elapsed = end - start
        write_data({"time": {"key": key, "elapsed_sec": elapsed}})
    else:
        yield
