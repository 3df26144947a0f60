import copy
import hashlib
from dataclasses import dataclass
from typing import List, Dict, Tuple, Any, Optional

from deadswitch.config import get_genesis_time
from deadswitch.errors import TxRejectedException
from deadswitch.lang.contract import Contract
from deadswitch.lang.function import Function
from deadswitch.lang.type_address import Address, ZERO_ADDRESS
from deadswitch.ledger.transaction import Transaction, Receipt, EventRecord, Frame
from deadswitch.deadswitch_logging import getLogger

logger = getLogger(__name__)

# payable function a contract must expose to accept plain native transfers
RECEIVE_FUNCTION = "receive"


@dataclass
class LedgerSnapshot:
    balances: Dict[Address, int]
    contracts: Dict[Address, Contract]
    states: Dict[Address, Dict[str, Any]]
    nof_events: int
    next_nonce: int


class Ledger:
    """
    In-process ledger holding native balances and deployed contracts.

    Every transaction executes atomically: if any call within it raises, all balances, contract storage,
    deployments and events are restored to their state before the transaction.
    """

    def __init__(self, genesis_time: Optional[int] = None):
        self.current_time = get_genesis_time() if genesis_time is None else genesis_time
        self.balances: Dict[Address, int] = {}
        self.contracts: Dict[Address, Contract] = {}
        self.accepted_transactions: List[Receipt] = []
        self.call_stack: List[Frame] = []
        self.pending_events: List[EventRecord] = []
        self.next_nonce = 0

    ############
    # ACCOUNTS #
    ############

    def new_address(self) -> Address:
        self.next_nonce += 1
        digest = hashlib.sha256(b"deadswitch/address/" + self.next_nonce.to_bytes(32, 'big')).digest()
        return Address(int.from_bytes(digest[:20], 'big'))

    def is_contract(self, address: Address) -> bool:
        return address in self.contracts

    def get_balance(self, address: Address) -> int:
        return self.balances.get(address, 0)

    def get_contract(self, address: Address) -> Contract:
        if address not in self.contracts:
            raise TxRejectedException(f"no contract at address {address!r}")
        return self.contracts[address]

    def read_field(self, address: Address, field_name: str) -> Any:
        contract = self.get_contract(address)
        field = type(contract).contract_fields.get(field_name)
        if field is None or not field.is_public:
            raise TxRejectedException(f"{type(contract).__name__} does not have public field {field_name}")
        return copy.deepcopy(getattr(contract, field_name))

    ###########
    # TESTING #
    ###########

    def test_increase_current_time_by(self, amount: int):
        """
        Currently, for testing purposes, the timestamping mechanism is manually driven by the user.
        """
        if amount < 0:
            raise ValueError("time cannot move backwards")
        self.current_time += amount

    def test_set_current_time(self, timestamp: int):
        if timestamp < self.current_time:
            raise ValueError("time cannot move backwards")
        self.current_time = timestamp

    def test_mint_native(self, address: Address, amount: int):
        self.balances[address] = self.get_balance(address) + amount

    ##########
    # FRAMES #
    ##########

    def current_frame(self, address: Address) -> Frame:
        if len(self.call_stack) == 0 or self.call_stack[-1].target != address:
            raise TxRejectedException(f"contract {address!r} accessed outside of a call to it")
        return self.call_stack[-1]

    def record_event(self, emitter: Address, event: Any):
        self.pending_events.append(EventRecord(emitter, event))

    #############
    # SNAPSHOTS #
    #############

    def snapshot(self) -> LedgerSnapshot:
        states = {}
        for address, contract in self.contracts.items():
            # never copy the ledger itself
            memo = {id(self): self}
            states[address] = copy.deepcopy(vars(contract), memo)
        return LedgerSnapshot(dict(self.balances), dict(self.contracts), states, len(self.pending_events),
                              self.next_nonce)

    def restore(self, snapshot: LedgerSnapshot):
        """
        Revert to snapshot. Each snapshot may only be restored once.
        """
        self.balances = snapshot.balances
        self.contracts = snapshot.contracts
        for address, contract in self.contracts.items():
            contract.__dict__.clear()
            contract.__dict__.update(snapshot.states[address])
        del self.pending_events[snapshot.nof_events:]
        self.next_nonce = snapshot.next_nonce

    #########
    # CALLS #
    #########

    def execute_transaction(self, transaction: Transaction) -> Receipt:
        if len(self.call_stack) != 0:
            raise TxRejectedException("cannot start a transaction while another one is executing")
        if transaction.current_time != self.current_time:
            raise TxRejectedException("timestamp of transaction invalid")

        snapshot = self.snapshot()
        contract_address = None
        try:
            if transaction.is_deployment:
                contract_address = self._deploy(transaction)
                ret = contract_address
            else:
                ret = self._dispatch(transaction.sender, transaction.target, transaction.function_name,
                                     transaction.arguments, transaction.value)
        except BaseException as e:
            logger.debug("reverting %s: %s", transaction, e)
            self.restore(snapshot)
            raise

        receipt = Receipt(transaction, list(self.pending_events), ret, contract_address)
        self.pending_events.clear()
        self.accepted_transactions.append(receipt)
        return receipt

    def query(self, sender: Optional[Address], target: Address, function_name: str, arguments: List[Any]) -> Any:
        """
        Execute a view function outside of any transaction. State is left untouched.
        """
        if len(self.call_stack) != 0:
            raise TxRejectedException("cannot query while a transaction is executing")
        function = self.get_public_function(self.get_contract(target), function_name)
        if not function.is_view:
            raise TxRejectedException(f"function {function_name} is not a view function")

        snapshot = self.snapshot()
        try:
            return self._dispatch(ZERO_ADDRESS if sender is None else sender, target, function_name, arguments, 0)
        finally:
            self.restore(snapshot)

    def call(self, sender: Address, target: Address, function_name: str, arguments: List[Any], value: int = 0) -> Any:
        """
        Nested call from a contract. Failures propagate to the caller.
        """
        return self._dispatch(sender, target, function_name, arguments, value)

    def try_call(self, sender: Address, target: Address, function_name: str, arguments: List[Any],
                 value: int = 0) -> Tuple[bool, Any]:
        """
        Nested call from a contract whose rejection is contained: its effects are reverted and (False, exception)
        is returned. Exceptions other than TxRejectedException propagate.
        """
        snapshot = self.snapshot()
        try:
            return True, self._dispatch(sender, target, function_name, arguments, value)
        except TxRejectedException as e:
            logger.debug("contained failure of %s on %r: %s", function_name, target, e)
            self.restore(snapshot)
            return False, e

    def transfer_native(self, sender: Address, recipient: Address, amount: int) -> bool:
        """
        Move native currency. Contract recipients must accept it through a payable "receive" function, whose
        failure (or absence) makes the transfer fail without effects.
        """
        if amount < 0 or self.get_balance(sender) < amount:
            return False
        if self.is_contract(recipient):
            ok, _ = self.try_call(sender, recipient, RECEIVE_FUNCTION, [], amount)
            return ok
        self._move_native(sender, recipient, amount)
        return True

    ############
    # INTERNAL #
    ############

    @staticmethod
    def get_public_function(contract: Contract, function_name: str) -> Function:
        clazz = type(contract)
        function = clazz.contract_functions.get(function_name)
        if function is None:
            raise TxRejectedException(f"{clazz.__name__} does not have function {function_name}")
        if function.is_private:
            raise TxRejectedException(f"function {function_name} of {clazz.__name__} is internal")
        return function

    def _move_native(self, sender: Address, recipient: Address, amount: int):
        if self.get_balance(sender) < amount:
            raise TxRejectedException(f"insufficient native balance of {sender!r}")
        self.balances[sender] = self.get_balance(sender) - amount
        self.balances[recipient] = self.get_balance(recipient) + amount

    @staticmethod
    def _check_call(function: Function, arguments: List[Any], value: int) -> List[Any]:
        if value < 0:
            raise TxRejectedException("negative value")
        if value > 0 and not function.is_payable:
            raise TxRejectedException(f"function {function.name} is not payable")
        try:
            return function.check_arguments(arguments)
        except ValueError as e:
            raise TxRejectedException(f"malformed call to {function.name}: {e}")

    def _dispatch(self, sender: Address, target: Address, function_name: str, arguments: List[Any], value: int) -> Any:
        contract = self.get_contract(target)
        function = self.get_public_function(contract, function_name)
        if function.is_constructor:
            raise TxRejectedException(f"cannot call constructor {function_name} on a deployed contract")
        arguments = self._check_call(function, arguments, value)

        if value > 0:
            self._move_native(sender, target, value)
        self.call_stack.append(Frame(sender, target, function_name, value))
        try:
            return getattr(contract, function_name)(*arguments)
        finally:
            self.call_stack.pop()

    def _deploy(self, transaction: Transaction) -> Address:
        clazz = transaction.contract_class
        function = clazz.contract_functions.get(transaction.function_name)
        if function is None or not function.is_constructor or function.is_private:
            raise TxRejectedException(f"{transaction.function_name} is not a public constructor of {clazz.__name__}")
        arguments = self._check_call(function, transaction.arguments, transaction.value)

        address = self.new_address()
        contract = clazz.__new__(clazz)
        contract._bind(self, address)
        self.contracts[address] = contract
        logger.debug("deploying %s at %r", clazz.__name__, address)

        if transaction.value > 0:
            self._move_native(transaction.sender, address, transaction.value)
        self.call_stack.append(Frame(transaction.sender, address, function.name, transaction.value))
        try:
            getattr(contract, function.name)(*arguments)
        finally:
            self.call_stack.pop()
        return address
