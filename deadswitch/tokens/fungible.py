from dataclasses import dataclass
from typing import Dict

from enforce_typing import enforce_types

from deadswitch.errors import TokenError
from deadswitch.lang.contract import Contract, constructor, view
from deadswitch.lang.type_address import Address
from deadswitch.lang.types import Uint


@enforce_types
@dataclass(frozen=True)
class Transfer:
    holder: Address
    recipient: Address
    amount: int


@enforce_types
@dataclass(frozen=True)
class Approval:
    owner: Address
    spender: Address
    amount: int


class FungibleToken(Contract):
    """
    Minimal allowance-based fungible token. The deployer may mint.
    """

    name: str
    symbol: str
    minter: Address
    supply: int
    balances: Dict[Address, int]
    allowances: Dict[Address, Dict[Address, int]]

    @constructor
    def create(self, name: str, symbol: str, initial_supply: Uint = 0):
        self.name = name
        self.symbol = symbol
        self.minter = self.me
        self.supply = 0
        self.balances = {}
        self.allowances = {}
        if initial_supply > 0:
            self._credit(self.me, initial_supply)

    def mint(self, to: Address, amount: Uint):
        self.require(self.me == self.minter, TokenError("caller is not the minter"))
        self.require(not to.is_null(), TokenError("mint to the zero address"))
        self._credit(to, amount)

    @view
    def balance_of(self, account: Address) -> int:
        return self.balances.get(account, 0)

    @view
    def allowance(self, owner: Address, spender: Address) -> int:
        return self.allowances.get(owner, {}).get(spender, 0)

    @view
    def total_supply(self) -> int:
        return self.supply

    def approve(self, spender: Address, amount: Uint) -> bool:
        self.require(not spender.is_null(), TokenError("approve to the zero address"))
        self.allowances.setdefault(self.me, {})[spender] = amount
        self.emit(Approval(self.me, spender, amount))
        return True

    def transfer(self, recipient: Address, amount: Uint) -> bool:
        self._move(self.me, recipient, amount)
        return True

    def transfer_from(self, holder: Address, recipient: Address, amount: Uint) -> bool:
        allowed = self.allowance(holder, self.me)
        self.require(allowed >= amount, TokenError("insufficient allowance"))
        self.allowances.setdefault(holder, {})[self.me] = allowed - amount
        self._move(holder, recipient, amount)
        return True

    def _credit(self, account: Address, amount: int):
        self.supply += amount
        self.balances[account] = self.balance_of(account) + amount
        self.emit(Transfer(Address(0), account, amount))

    def _move(self, holder: Address, recipient: Address, amount: int):
        self.require(not recipient.is_null(), TokenError("transfer to the zero address"))
        self.require(self.balance_of(holder) >= amount, TokenError("transfer amount exceeds balance"))
        self.balances[holder] = self.balance_of(holder) - amount
        self.balances[recipient] = self.balance_of(recipient) + amount
        self.emit(Transfer(holder, recipient, amount))
