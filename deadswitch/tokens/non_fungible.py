from dataclasses import dataclass
from typing import Dict

from enforce_typing import enforce_types

from deadswitch.errors import TokenError
from deadswitch.lang.contract import Contract, constructor, view
from deadswitch.lang.type_address import Address
from deadswitch.lang.types import Uint

# value a contract recipient must return from "on_erc721_received" to accept a safe transfer
ERC721_RECEIVED = 0x150b7a02
RECEIVER_HOOK = "on_erc721_received"


@enforce_types
@dataclass(frozen=True)
class Transfer:
    holder: Address
    recipient: Address
    token_id: int


@enforce_types
@dataclass(frozen=True)
class Approval:
    owner: Address
    approved: Address
    token_id: int


@enforce_types
@dataclass(frozen=True)
class ApprovalForAll:
    owner: Address
    operator: Address
    approved: bool


class NonFungibleToken(Contract):
    """
    Minimal non-fungible token with per-token and operator approvals. The deployer may mint.
    """

    name: str
    symbol: str
    minter: Address
    owners: Dict[int, Address]
    balances: Dict[Address, int]
    token_approvals: Dict[int, Address]
    operator_approvals: Dict[Address, Dict[Address, bool]]

    @constructor
    def create(self, name: str, symbol: str):
        self.name = name
        self.symbol = symbol
        self.minter = self.me
        self.owners = {}
        self.balances = {}
        self.token_approvals = {}
        self.operator_approvals = {}

    def mint(self, to: Address, token_id: Uint):
        self.require(self.me == self.minter, TokenError("caller is not the minter"))
        self.require(not to.is_null(), TokenError("mint to the zero address"))
        self.require(token_id not in self.owners, TokenError("token already minted"))
        self.owners[token_id] = to
        self.balances[to] = self.balance_of(to) + 1
        self.emit(Transfer(Address(0), to, token_id))

    @view
    def owner_of(self, token_id: Uint) -> Address:
        self.require(token_id in self.owners, TokenError("nonexistent token"))
        return self.owners[token_id]

    @view
    def balance_of(self, owner: Address) -> int:
        return self.balances.get(owner, 0)

    @view
    def get_approved(self, token_id: Uint) -> Address:
        self.owner_of(token_id)
        return self.token_approvals.get(token_id, Address(0))

    @view
    def is_approved_for_all(self, owner: Address, operator: Address) -> bool:
        return self.operator_approvals.get(owner, {}).get(operator, False)

    def approve(self, to: Address, token_id: Uint):
        owner = self.owner_of(token_id)
        self.require(to != owner, TokenError("approval to current owner"))
        self.require(self.me == owner or self.is_approved_for_all(owner, self.me),
                     TokenError("caller is not token owner or approved for all"))
        self.token_approvals[token_id] = to
        self.emit(Approval(owner, to, token_id))

    def set_approval_for_all(self, operator: Address, approved: bool):
        self.require(operator != self.me, TokenError("approve to caller"))
        self.operator_approvals.setdefault(self.me, {})[operator] = approved
        self.emit(ApprovalForAll(self.me, operator, approved))

    def transfer_from(self, holder: Address, recipient: Address, token_id: Uint):
        self._transfer(holder, recipient, token_id)

    def safe_transfer_from(self, holder: Address, recipient: Address, token_id: Uint, data: bytes = b""):
        self._transfer(holder, recipient, token_id)
        if self.is_contract(recipient):
            ret = self.call(recipient, RECEIVER_HOOK, self.me, holder, token_id, data)
            self.require(ret == ERC721_RECEIVED, TokenError("transfer to non receiver implementer"))

    def _transfer(self, holder: Address, recipient: Address, token_id: int):
        owner = self.owner_of(token_id)
        self.require(owner == holder, TokenError("transfer from incorrect owner"))
        self.require(not recipient.is_null(), TokenError("transfer to the zero address"))
        self.require(self.me == owner or self.token_approvals.get(token_id) == self.me
                     or self.is_approved_for_all(owner, self.me),
                     TokenError("caller is not token owner or approved"))
        self.token_approvals.pop(token_id, None)
        self.balances[holder] -= 1
        self.balances[recipient] = self.balance_of(recipient) + 1
        self.owners[token_id] = recipient
        self.emit(Transfer(holder, recipient, token_id))
