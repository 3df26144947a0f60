from deadswitch.config import DAY
from deadswitch.escrow.factory import DigitalWillFactory
from deadswitch.ledger.ledger import Ledger
from deadswitch.runtime.handles import ObjectHandle
from deadswitch.runtime.runtime import Runtime, Account
from deadswitch.tokens.fungible import FungibleToken
from deadswitch.tokens.non_fungible import NonFungibleToken

INTERVAL = 30 * DAY


def deploy_escrow(runtime: Runtime, operator: Account) -> ObjectHandle:
    return runtime.get_class_handle(DigitalWillFactory).create(sender=operator)


def deploy_fungible(runtime: Runtime, minter: Account) -> ObjectHandle:
    return runtime.get_class_handle(FungibleToken).create("Gold", "GLD", sender=minter)


def deploy_non_fungible(runtime: Runtime, minter: Account) -> ObjectHandle:
    return runtime.get_class_handle(NonFungibleToken).create("Deeds", "DEED", sender=minter)


def new_runtime(ledger: Ledger):
    runtime = Runtime(ledger)
    operator = runtime.new_user_account(label="operator")
    return runtime, operator
