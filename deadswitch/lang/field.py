from dataclasses import dataclass
from typing import Type, TYPE_CHECKING, Any

from deadswitch.utils.inspection import get_and_resolve_type_hints

if TYPE_CHECKING:
    from deadswitch.lang.contract import Contract


@dataclass
class Field:
    """
    Attributes:
        contract_type: the type of the contract holding the field
        name: the name of the field
        field_type: the declared type of the field
    """
    contract_type: Type['Contract']
    name: str
    field_type: Any

    def __post_init__(self):
        from deadswitch.lang.contract import Contract

        assert issubclass(self.contract_type, Contract)
        assert isinstance(self.name, str)

    @property
    def is_public(self) -> bool:
        return not self.name.startswith('_')


def extract_field(cls: Type, declaring_cls: Type, name: str):
    t = get_and_resolve_type_hints(declaring_cls, declaring_cls)[name]
    return Field(cls, name, t)
