import functools
from typing import Callable, Dict, Type, Any, Tuple, TYPE_CHECKING

from deadswitch.errors import ReentrancyError, ERR_REENTRANT
from deadswitch.utils.general import order_dictionary_by_keys, get_duplicates
from deadswitch.lang.field import Field, extract_field
from deadswitch.lang.function import Function, extract_function
from deadswitch.lang.type_address import Address
from deadswitch.utils.inspection import get_member_names_no_superclass, get_member_names_up_to
from deadswitch.deadswitch_logging import getLogger

if TYPE_CHECKING:
    from deadswitch.ledger.ledger import Ledger

logger = getLogger(__name__)


def constructor(f: Callable):
    f.is_constructor = True
    return f


def internal(f: Callable):
    f.is_private = True
    return f


def view(f: Callable):
    f.is_view = True
    return f


def payable(f: Callable):
    f.is_payable = True
    return f


def non_reentrant(f: Callable):
    """
    Reject any call into a guarded function of the same contract while a guarded function is executing
    """
    @functools.wraps(f)
    def wrapper(self: 'Contract', *args):
        self.require(not self._entered, ReentrancyError(ERR_REENTRANT))
        self._entered = True
        try:
            return f(self, *args)
        finally:
            self._entered = False

    wrapper.is_non_reentrant = True
    return wrapper


class Contract:
    """
    Base class for contracts.

    Contract fields:
    - Should be declared as class attributes (annotations), fields starting with "_" are not readable via handles
    - Must only reference other contracts by address, never by object

    Contract functions:
    - Should be declared as functions on subclasses
    - Functions annotated as "@constructor" are constructors
    - Functions annotated as "@internal" cannot be called by other accounts
    - Functions annotated as "@view" can be queried without a transaction
    - Functions annotated as "@payable" accept native currency attached to the call
    """

    # ----- to be used in subclasses -----

    def require(self, condition, error: Exception):
        """
        Abort the current call with error if condition does not hold
        """
        if not condition:
            raise error

    @property
    def me(self) -> Address:
        """
        Caller address (user or contract)
        """
        return self._ledger.current_frame(self._address).sender

    @property
    def value(self) -> int:
        """
        Native currency attached to the current call (already credited to this contract)
        """
        return self._ledger.current_frame(self._address).value

    @property
    def address(self) -> Address:
        """
        Address of the "self" object
        """
        return self._address

    def now(self) -> int:
        """
        Returns the current timestamp
        """
        return self._ledger.current_time

    def emit(self, event):
        """
        Emit an event, published only if the enclosing transaction succeeds
        """
        self._ledger.record_event(self._address, event)

    def call(self, target: Address, function_name: str, *args, value: int = 0) -> Any:
        """
        Call a function on another contract, failures abort the current call
        """
        return self._ledger.call(self._address, target, function_name, list(args), value)

    def try_call(self, target: Address, function_name: str, *args, value: int = 0) -> Tuple[bool, Any]:
        """
        Call a function on another contract. On failure, its effects are reverted and (False, error) is returned.

        After a failed call, references into this contract's storage obtained before the call are stale.
        """
        return self._ledger.try_call(self._address, target, function_name, list(args), value)

    def transfer_native(self, recipient: Address, amount: int) -> bool:
        """
        Send native currency from this contract, returns False if the transfer failed
        """
        return self._ledger.transfer_native(self._address, recipient, amount)

    def is_contract(self, address: Address) -> bool:
        return self._ledger.is_contract(address)

    # ----- internals -----

    contract_fields: Dict[str, Field]
    contract_functions: Dict[str, Function]

    def _bind(self, ledger: 'Ledger', address: Address):
        self._ledger = ledger
        self._address = address
        self._entered = False

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        # ensure subclass does not re-declare existing members
        members_here = get_member_names_no_superclass(cls, include_fields=True, include_functions=True)
        members_both = [m for m in members_here if m in Contract.__reserved_members__()]
        if len(members_both) > 0:
            raise AssertionError(f"Contract '{cls.__name__}' must not re-declare internal member '{members_both[0]}'")

        cls.contract_fields = cls.__extract_contract_fields__()
        cls.contract_functions = cls.__extract_contract_functions__()

        duplicates = get_duplicates(list(cls.contract_fields.keys()) + list(cls.contract_functions.keys()))
        if len(duplicates) > 0:
            raise AssertionError(f"Contract '{cls.__name__}' declares '{duplicates[0]}' as both field and function")
        logger.debug("registered contract %s with functions %s", cls.__name__, list(cls.contract_functions.keys()))

    @staticmethod
    def __reserved_members__():
        return [m for m in Contract.__dict__ if not m.startswith('_')]

    @classmethod
    def __extract_contract_fields__(cls):
        contract_fields = {}
        for klass in reversed(cls.__mro__):
            if klass is Contract or not issubclass(klass, Contract):
                continue
            for name in get_member_names_no_superclass(klass, include_fields=True, include_functions=False):
                contract_fields[name] = extract_field(cls, klass, name)
        return order_dictionary_by_keys(contract_fields)

    @classmethod
    def __extract_contract_functions__(cls):
        functions = get_member_names_up_to(cls, Contract, include_fields=False, include_functions=True)
        contract_functions = {
            name: extract_function(cls, name) for name in functions
        }
        return order_dictionary_by_keys(contract_functions)
