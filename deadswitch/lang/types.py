from typing import Annotated, Any

from deadswitch.lang.type_address import Address

Uint = Annotated[int, 'Unsigned integer']   # numbers in [0, 2^256-1]

UINT_MAX = 2**256 - 1


def is_uint(t) -> bool:
    return t == Uint


def is_address(t) -> bool:
    return t == Address


def is_uint_literal(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and 0 <= x <= UINT_MAX


def coerce_argument(name: str, t, value: Any) -> Any:
    """
    Check a call argument against its declared type, converting plain integers to addresses where needed.

    Arguments of types other than Uint and Address are passed through unchanged.
    """
    if is_address(t):
        try:
            return Address(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"argument '{name}': {e}")
    if is_uint(t):
        if not is_uint_literal(value):
            raise ValueError(f"argument '{name}': {value!r} is not an unsigned integer")
        return value
    return value
