from dataclasses import dataclass, field
from typing import List, Optional, Any

from deadswitch.lang.type_address import Address


class Transaction:
    def __init__(self, sender: Address, target: Optional[Address], function_name: str, arguments: List[Any],
                 value: int, current_time: int, contract_class: Optional[type] = None):
        self.sender = sender
        self.target = target                        # None for deployments
        self.function_name = function_name
        self.arguments = arguments
        self.value = value
        self.current_time = current_time
        self.contract_class = contract_class        # only set for deployments

    @property
    def is_deployment(self) -> bool:
        return self.target is None

    def __repr__(self):
        target = self.contract_class.__name__ if self.is_deployment else repr(self.target)
        return f"Transaction({self.sender!r} -> {target}.{self.function_name}{tuple(self.arguments)}, value={self.value})"


@dataclass(frozen=True)
class EventRecord:
    emitter: Address
    event: Any


@dataclass
class Receipt:
    transaction: Transaction
    events: List[EventRecord] = field(default_factory=list)
    return_value: Any = None
    contract_address: Optional[Address] = None     # only set for deployments

    def events_of_type(self, event_type: type) -> List[Any]:
        return [r.event for r in self.events if isinstance(r.event, event_type)]


@dataclass(frozen=True)
class Frame:
    """
    One message call: "sender" calls a function on "target", attaching "value"
    """
    sender: Address
    target: Address
    function_name: str
    value: int
