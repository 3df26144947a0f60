from deadswitch.errors import ApprovalError, TxRejectedException
from deadswitch.lang.contract import Contract, constructor, payable
from deadswitch.lang.type_address import Address
from deadswitch.lang.types import Uint
from deadswitch.ledger.ledger import Ledger
from deadswitch.tokens.non_fungible import ERC721_RECEIVED
from eval.scenarios.common import INTERVAL, deploy_escrow, new_runtime

# META-NAME Contract beneficiary
# META-DESC A multi-owner vault contract inherits once the grantor approved it.


class Vault(Contract):

    keeper: Address
    escrow: Address

    @constructor
    def create(self, escrow: Address):
        self.keeper = self.me
        self.escrow = escrow

    def accept(self, grantor: Address):
        self.require(self.me == self.keeper, TxRejectedException("only the keeper"))
        self.call(self.escrow, "accept_beneficiary", grantor)

    def claim(self, grantor: Address, asset_index: Uint):
        self.require(self.me == self.keeper, TxRejectedException("only the keeper"))
        self.call(self.escrow, "claim_asset", grantor, asset_index)

    @payable
    def receive(self):
        pass

    def on_erc721_received(self, operator: Address, holder: Address, token_id: Uint, data: bytes = b"") -> int:
        return ERC721_RECEIVED


def run_contract_beneficiary(ledger: Ledger):
    runtime, operator = new_runtime(ledger)
    grantor = runtime.new_user_account(50, label="grantor")
    keeper = runtime.new_user_account(label="keeper")
    escrow = deploy_escrow(runtime, operator)
    vault = runtime.get_class_handle(Vault).create(escrow.address, sender=keeper)

    escrow.create_will(INTERVAL, sender=grantor)
    try:
        escrow.deposit_native(vault.address, sender=grantor, value=50)
        raise AssertionError("deposit to unapproved contract must fail")
    except ApprovalError:
        pass
    assert runtime.balance_of(grantor.address) == 50

    escrow.approve_contract_beneficiary(vault.address, sender=grantor)
    escrow.deposit_native(vault.address, sender=grantor, value=50)

    ledger.test_increase_current_time_by(INTERVAL)
    vault.accept(grantor.address, sender=keeper)
    vault.claim(grantor.address, 0, sender=keeper)
    assert vault.balance == 50
