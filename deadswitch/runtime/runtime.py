from typing import List, Any, Optional, Type

from deadswitch.errors import TxRejectedException
from deadswitch.lang.contract import Contract
from deadswitch.lang.type_address import Address
from deadswitch.ledger.ledger import Ledger
from deadswitch.ledger.transaction import Transaction, Receipt
from deadswitch.runtime.handles import ClassHandle, ObjectHandle
from deadswitch.utils.data_logging import data_context, time_measure, write_event
from deadswitch.deadswitch_logging import getLogger, getEventLogger


logger = getLogger(__name__)
event_logger = getEventLogger()


class Account:
    """
    A user-controlled account. Its identity is asserted by the runtime on every call (no keys involved).
    """

    def __init__(self, address: Address, label: Optional[str] = None):
        self.address = address
        self.label = label

    def __eq__(self, other):
        return isinstance(other, Account) and self.address == other.address

    def __hash__(self):
        return hash(self.address)

    def __repr__(self):
        return f"Account({self.label or repr(self.address)})"


class Runtime:
    def __init__(self, ledger: Ledger):
        self.ledger = ledger
        self.last_receipt: Optional[Receipt] = None

    def new_user_account(self, balance: int = 0, label: Optional[str] = None) -> Account:
        account = Account(self.ledger.new_address(), label)
        if balance > 0:
            self.ledger.test_mint_native(account.address, balance)
        logger.info("created new user %s with address %r and balance %d", label or "", account.address, balance)
        return account

    def get_class_handle(self, clazz: Type[Contract]) -> ClassHandle:
        return ClassHandle(self, clazz)

    def get_object_handle(self, clazz: Type[Contract], address: Address) -> ObjectHandle:
        return ObjectHandle(self, clazz, Address(address))

    def balance_of(self, address: Address) -> int:
        return self.ledger.get_balance(Address(address))

    def deploy_contract(self, clazz: Type[Contract], constructor_name: str, sender_account: Account,
                        arguments: List[Any], value: int = 0) -> Address:
        transaction = Transaction(sender_account.address, None, constructor_name, arguments, value,
                                  self.ledger.current_time, contract_class=clazz)
        receipt = self._execute(clazz.__name__, constructor_name, transaction)
        logger.info("deployed %s at %r", clazz.__name__, receipt.contract_address)
        return receipt.contract_address

    def call_function(self, clazz: Type[Contract], address: Address, function_name: str, sender_account: Account,
                      arguments: List[Any], value: int = 0) -> Any:
        transaction = Transaction(sender_account.address, address, function_name, arguments, value,
                                  self.ledger.current_time)
        receipt = self._execute(clazz.__name__, function_name, transaction)
        return receipt.return_value

    def query_function(self, address: Address, function_name: str, arguments: List[Any],
                       sender_account: Optional[Account] = None) -> Any:
        sender = None if sender_account is None else sender_account.address
        return self.ledger.query(sender, address, function_name, arguments)

    def get_field_value(self, address: Address, field_name: str) -> Any:
        return self.ledger.read_field(address, field_name)

    def _execute(self, class_name: str, function_name: str, transaction: Transaction) -> Receipt:
        with data_context(class_name):
            with data_context(function_name):
                logger.info("executing %s.%s with arguments %s from %r...", class_name, function_name,
                            str(transaction.arguments), transaction.sender)
                try:
                    with time_measure("execute"):
                        receipt = self.ledger.execute_transaction(transaction)
                except TxRejectedException as e:
                    logger.error("transaction %s.%s rejected: %s", class_name, function_name, str(e))
                    raise
                logger.info("successfully accepted transaction at ledger")

                for record in receipt.events:
                    event_logger.info("%r %r", record.emitter, record.event)
                    write_event(record.emitter, record.event)

                logger.info("finished call to %s.%s", class_name, function_name)
                self.last_receipt = receipt
                return receipt
