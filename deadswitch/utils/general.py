from collections import OrderedDict
from typing import TypeVar, Iterable, List, Dict

T = TypeVar('T')


def get_duplicates(it: Iterable[T]) -> List[T]:
    unique = set()
    duplicates = []

    for x in it:
        if x in unique:
            duplicates.append(x)
        else:
            unique.add(x)

    return duplicates


K = TypeVar('K')
V = TypeVar('V')


def order_dictionary_by_keys(d: Dict[K, V]):
    items = sorted(d.items())
    ret = OrderedDict(items)
    return ret


def format_duration(seconds: int) -> str:
    """
    Human-readable rendering of a duration, e.g. 90061 -> '1d 1h 1m 1s'
    """
    if seconds == 0:
        return "0s"
    parts = []
    for unit, size in (("d", 86400), ("h", 3600), ("m", 60), ("s", 1)):
        n, seconds = divmod(seconds, size)
        if n > 0:
            parts.append(f"{n}{unit}")
    return " ".join(parts)
