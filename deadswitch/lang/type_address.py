ADDRESS_BITS = 160


class Address(int):
    """
    Account identity on the ledger (user account or contract). Address 0 is the null identity.
    """

    def __new__(cls, value: int = 0):
        if isinstance(value, Address):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Cannot interpret {value!r} as an address")
        if not 0 <= value < 2**ADDRESS_BITS:
            raise ValueError(f"Address 0x{value:x} out of range")
        return super().__new__(cls, value)

    def is_null(self) -> bool:
        return self == 0

    def __repr__(self):
        return f"0x{int(self):040x}"

    def __str__(self):
        return repr(self)


ZERO_ADDRESS = Address(0)
