import inspect
from collections import OrderedDict
from dataclasses import dataclass
from typing import Type, TYPE_CHECKING, Dict, Optional, Callable, Any, List

from deadswitch.lang.types import coerce_argument
from deadswitch.utils.inspection import get_and_resolve_type_hints

if TYPE_CHECKING:
    from deadswitch.lang.contract import Contract


@dataclass
class Function:
    contract_type: Type['Contract']
    name: str
    argument_types: Dict[str, Any]
    nof_required_arguments: int
    return_type: Optional[Any]
    is_private: bool
    is_constructor: bool
    is_payable: bool
    is_view: bool
    is_non_reentrant: bool

    def __post_init__(self):
        from deadswitch.lang.contract import Contract
        assert issubclass(self.contract_type, Contract)
        assert isinstance(self.name, str)
        assert isinstance(self.argument_types, dict)
        assert 'self' not in self.argument_types
        assert 0 <= self.nof_required_arguments <= len(self.argument_types)
        assert not (self.is_view and self.is_payable), f"View function {self.name} cannot be payable"

    def check_arguments(self, arguments: List[Any]) -> List[Any]:
        """
        Check the number of positional arguments and coerce each one to its declared type.
        Raises ValueError for malformed calls.
        """
        if not self.nof_required_arguments <= len(arguments) <= len(self.argument_types):
            raise ValueError(f"{self.name} expects {self.nof_required_arguments} to {len(self.argument_types)} "
                             f"arguments, but got {len(arguments)}")
        return [coerce_argument(name, t, value) for (name, t), value in zip(self.argument_types.items(), arguments)]


def extract_function(cls: Type, function_name: str):
    if not hasattr(cls, function_name):
        raise ValueError(f"Class {cls} does not have attribute {function_name}.")
    f = getattr(cls, function_name)

    if not callable(f):
        raise ValueError(f"Class {cls} has a non-function attribute {function_name} containing {f}.")

    types, return_type, nof_required = extract_types(cls, f)

    return Function(
        contract_type=cls,
        name=function_name,
        argument_types=types,
        nof_required_arguments=nof_required,
        return_type=cls if hasattr(f, 'is_constructor') else return_type,
        is_private=hasattr(f, 'is_private'),
        is_constructor=hasattr(f, 'is_constructor'),
        is_payable=hasattr(f, 'is_payable'),
        is_view=hasattr(f, 'is_view'),
        is_non_reentrant=hasattr(f, 'is_non_reentrant'),
    )


def extract_types(cls: Type, f: Callable):
    types = get_and_resolve_type_hints(cls, f)
    return_type = types.pop('return', None)

    parameters = list(inspect.signature(f).parameters.values())

    assert parameters[0].name == 'self', f"First argument of {f.__name__} should be called 'self'"
    for p in parameters[1:]:
        assert p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD), \
            f"Function {f.__name__} declares unsupported argument kind for '{p.name}'"

    # reserved keywords of function handles
    arg_names = [p.name for p in parameters[1:]]
    for reserved in ("sender", "value"):
        assert reserved not in arg_names, f"Function {f.__name__} declares reserved argument '{reserved}'"

    # ensure correct sorting
    types = OrderedDict([(arg, types.get(arg)) for arg in arg_names])
    nof_required = len([p for p in parameters[1:] if p.default is inspect.Parameter.empty])

    return types, return_type, nof_required
