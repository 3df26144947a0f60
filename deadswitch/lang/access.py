import functools
from dataclasses import dataclass
from typing import Callable

from enforce_typing import enforce_types

from deadswitch.errors import AuthorizationError, PausedError, StateError, ValidationError, ERR_NOT_OWNER, \
    ERR_PAUSED, ERR_NOT_PAUSED, ERR_INVALID_OWNER
from deadswitch.lang.contract import Contract, internal, view
from deadswitch.lang.type_address import Address


@enforce_types
@dataclass(frozen=True)
class Paused:
    account: Address


@enforce_types
@dataclass(frozen=True)
class Unpaused:
    account: Address


@enforce_types
@dataclass(frozen=True)
class OwnershipTransferred:
    previous_owner: Address
    new_owner: Address


def when_not_paused(f: Callable):
    """
    Reject calls to a mutating entry point while the contract is paused
    """
    @functools.wraps(f)
    def wrapper(self: 'Pausable', *args):
        self.require(not self.paused, PausedError(ERR_PAUSED))
        return f(self, *args)

    return wrapper


def only_contract_owner(f: Callable):
    @functools.wraps(f)
    def wrapper(self: 'Pausable', *args):
        self.require(self.me == self.contract_owner, AuthorizationError(ERR_NOT_OWNER))
        return f(self, *args)

    return wrapper


class Pausable(Contract):
    """
    Owner-controlled global switch. Functions decorated with @when_not_paused are disabled while paused,
    views remain available.
    """

    contract_owner: Address
    paused: bool

    @internal
    def init_pausable(self, initial_owner: Address):
        self.contract_owner = initial_owner
        self.paused = False
        self.emit(OwnershipTransferred(Address(0), initial_owner))

    @only_contract_owner
    def pause(self):
        self.require(not self.paused, PausedError(ERR_PAUSED))
        self.paused = True
        self.emit(Paused(self.me))

    @only_contract_owner
    def unpause(self):
        self.require(self.paused, StateError(ERR_NOT_PAUSED))
        self.paused = False
        self.emit(Unpaused(self.me))

    @only_contract_owner
    def transfer_ownership(self, new_owner: Address):
        self.require(not new_owner.is_null(), ValidationError(ERR_INVALID_OWNER))
        previous = self.contract_owner
        self.contract_owner = new_owner
        self.emit(OwnershipTransferred(previous, new_owner))

    @view
    def is_paused(self) -> bool:
        return self.paused
