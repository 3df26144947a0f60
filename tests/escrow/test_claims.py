from deadswitch.errors import AuthorizationError, StateError, ValidationError, ApprovalError, TransferError, \
    ERR_NOT_CLAIMABLE, ERR_NOT_BENEFICIARY, ERR_ASSET_CLAIMED, ERR_NOT_ACCEPTED, ERR_WILL_COMPLETED, \
    ERR_INVALID_INDEX, ERR_NATIVE_TRANSFER, ERR_NFT_TRANSFER, ERR_TOKEN_TRANSFER, ERR_REENTRANT, \
    ERR_WILL_DOES_NOT_EXIST
from deadswitch.escrow.assets import AssetKind
from deadswitch.escrow.events import AssetClaimed, WillCompleted, WillClaimable
from deadswitch.escrow.will import WillState
from deadswitch.lang.type_address import ZERO_ADDRESS

from tests.escrow.escrow_test_case import EscrowTestCase, GRANTOR_FUNDS
from tests.examples.contract_beneficiaries import Proxy, Receiver, ReentrantClaimer
from tests.examples.contract_tokens import StuckToken


class TestClaims(EscrowTestCase):

    def setUp(self):
        super().setUp()
        self.create_will()
        self.escrow.deposit_native(self.heir.address, sender=self.grantor, value=100)
        self.escrow.deposit_fungible(self.gold.address, 200, self.heir.address, sender=self.grantor)
        self.escrow.deposit_non_fungible(self.deeds.address, 3, self.heir.address, sender=self.grantor)
        self.escrow.accept_beneficiary(self.grantor.address, sender=self.heir)

    def claim(self, index, beneficiary=None):
        self.escrow.claim_asset(self.grantor.address, index, sender=beneficiary or self.heir)

    def test_claim_before_deadline(self):
        self.ledger.test_increase_current_time_by(self.info().heartbeat_interval - 1)
        self.assertRejected(StateError, ERR_NOT_CLAIMABLE, self.claim, 0)

    def test_claim_native_at_deadline(self):
        self.expire()
        deadline = self.info().deadline
        self.claim(0)
        self.assertEqual(self.events(WillClaimable), [WillClaimable(self.grantor.address, deadline)])
        self.assertEqual(self.events(AssetClaimed), [
            AssetClaimed(self.grantor.address, 0, self.heir.address, AssetKind.NATIVE, ZERO_ADDRESS, 0, 100)
        ])
        self.assertEqual([type(r.event) for r in self.runtime.last_receipt.events], [WillClaimable, AssetClaimed])
        self.assertEqual(self.runtime.balance_of(self.heir.address), 100)
        self.assertEqual(self.escrow.balance, 0)
        self.assertTrue(self.escrow.get_asset(self.grantor.address, 0).claimed)
        self.assertEqual(self.info().state, WillState.CLAIMABLE)
        self.assertEqual(self.info().unclaimed_count, 2)

    def test_claim_all_completes(self):
        self.expire()
        self.claim(2)
        self.claim(0)
        self.assertEqual(self.events(WillCompleted), [])
        self.claim(1)
        self.assertEqual(self.events(WillCompleted), [WillCompleted(self.grantor.address)])
        # completion follows the claim event
        self.assertIsInstance(self.runtime.last_receipt.events[-1].event, WillCompleted)

        self.assertEqual(self.info().state, WillState.COMPLETED)
        self.assertEqual(self.gold.balance_of(self.heir.address), 200)
        self.assertEqual(self.deeds.owner_of(3), self.heir.address)
        self.assertEqual(self.runtime.balance_of(self.heir.address), 100)
        self.assertRejected(StateError, ERR_WILL_COMPLETED, self.claim, 0)

    def test_no_double_claim(self):
        self.expire()
        self.claim(1)
        self.assertRejected(StateError, ERR_ASSET_CLAIMED, self.claim, 1)
        self.assertEqual(self.gold.balance_of(self.heir.address), 200)

    def test_claim_invalid(self):
        self.expire()
        self.assertRejected(ValidationError, ERR_INVALID_INDEX, self.claim, 3)
        self.assertRejected(AuthorizationError, ERR_NOT_BENEFICIARY, self.claim, 0, self.other)
        self.assertRejected(AuthorizationError, ERR_WILL_DOES_NOT_EXIST, self.escrow.claim_asset, self.other.address,
                            0, sender=self.heir)

    def test_claim_requires_acceptance(self):
        self.escrow.reject_beneficiary(self.grantor.address, sender=self.heir)
        self.expire()
        self.assertRejected(ApprovalError, ERR_NOT_ACCEPTED, self.claim, 0)
        # the failed claim did not materialize the state either
        self.assertEqual(self.info().state, WillState.ACTIVE)
        self.escrow.accept_beneficiary(self.grantor.address, sender=self.heir)
        self.claim(0)

    def test_acceptance_persists_through_claims(self):
        self.expire()
        self.claim(0)
        self.assertTrue(self.escrow.is_accepted(self.grantor.address, self.heir.address))

    def test_claim_after_update_state(self):
        self.expire()
        self.escrow.update_state(self.grantor.address, sender=self.other)
        self.claim(0)
        self.assertEqual(self.events(WillClaimable), [])

    def test_claim_to_receiver_contract(self):
        receiver = self.runtime.get_class_handle(Receiver).create(self.escrow.address, sender=self.other)
        self.escrow.approve_contract_beneficiary(receiver.address, sender=self.grantor)
        self.escrow.deposit_native(receiver.address, sender=self.grantor, value=5)
        self.escrow.deposit_non_fungible(self.deeds.address, 1, receiver.address, sender=self.grantor)
        receiver.accept(self.grantor.address, sender=self.other)

        self.expire()
        receiver.claim(self.grantor.address, 3, sender=self.other)
        receiver.claim(self.grantor.address, 4, sender=self.other)
        self.assertEqual(receiver.balance, 5)
        self.assertEqual(self.deeds.owner_of(1), receiver.address)

    def test_claim_to_non_receiving_contract(self):
        proxy = self.runtime.get_class_handle(Proxy).create(self.escrow.address, sender=self.other)
        self.escrow.approve_contract_beneficiary(proxy.address, sender=self.grantor)
        self.escrow.deposit_native(proxy.address, sender=self.grantor, value=5)
        self.escrow.deposit_non_fungible(self.deeds.address, 1, proxy.address, sender=self.grantor)
        proxy.accept(self.grantor.address, sender=self.other)

        self.expire()
        self.assertRejected(TransferError, ERR_NATIVE_TRANSFER, proxy.claim, self.grantor.address, 3,
                            sender=self.other)
        self.assertRejected(TransferError, ERR_NFT_TRANSFER, proxy.claim, self.grantor.address, 4,
                            sender=self.other)
        self.assertFalse(self.escrow.get_asset(self.grantor.address, 3).claimed)
        self.assertEqual(self.escrow.get_native_custody(self.grantor.address), 105)
        self.assertEqual(self.info().unclaimed_count, 5)

    def test_claim_failing_token_transfer_reverts(self):
        stuck = self.runtime.get_class_handle(StuckToken).create("Stuck", "STK", 50, sender=self.grantor)
        stuck.approve(self.escrow.address, 50, sender=self.grantor)
        self.escrow.deposit_fungible(stuck.address, 50, self.heir.address, sender=self.grantor)

        self.expire()
        self.assertRejected(TransferError, ERR_TOKEN_TRANSFER, self.claim, 3)
        self.assertFalse(self.escrow.get_asset(self.grantor.address, 3).claimed)
        self.assertEqual(stuck.balance_of(self.escrow.address), 50)

    def test_reentrant_claim_rejected(self):
        attacker = self.runtime.get_class_handle(ReentrantClaimer).create(self.escrow.address, sender=self.other)
        self.escrow.approve_contract_beneficiary(attacker.address, sender=self.grantor)
        self.escrow.deposit_native(attacker.address, sender=self.grantor, value=7)
        self.escrow.deposit_native(attacker.address, sender=self.grantor, value=8)
        attacker.accept(self.grantor.address, sender=self.other)

        self.expire()
        attacker.claim_twice(self.grantor.address, 3, 4, sender=self.other)
        self.assertEqual(attacker.reentry_error, ERR_REENTRANT)
        self.assertEqual(attacker.balance, 7)
        self.assertTrue(self.escrow.get_asset(self.grantor.address, 3).claimed)
        self.assertFalse(self.escrow.get_asset(self.grantor.address, 4).claimed)

        attacker.claim_twice(self.grantor.address, 4, 4, sender=self.other)
        self.assertEqual(attacker.balance, 15)

    def test_reentrant_claim_through_token_hook(self):
        attacker = self.runtime.get_class_handle(ReentrantClaimer).create(self.escrow.address, sender=self.other)
        self.escrow.approve_contract_beneficiary(attacker.address, sender=self.grantor)
        self.escrow.deposit_non_fungible(self.deeds.address, 1, attacker.address, sender=self.grantor)
        self.escrow.deposit_native(attacker.address, sender=self.grantor, value=8)
        attacker.accept(self.grantor.address, sender=self.other)

        self.expire()
        attacker.claim_twice(self.grantor.address, 3, 4, sender=self.other)
        self.assertEqual(attacker.reentry_error, ERR_REENTRANT)
        self.assertEqual(self.deeds.owner_of(1), attacker.address)
        self.assertEqual(attacker.balance, 0)

    def test_solvency(self):
        self.escrow.deposit_native(self.other.address, sender=self.grantor, value=50)
        self.assertEqual(self.escrow.get_native_custody(self.grantor.address), 150)
        self.assertEqual(self.escrow.balance, 150)
        self.expire()
        self.claim(0)
        self.assertEqual(self.escrow.get_native_custody(self.grantor.address), 50)
        self.assertEqual(self.escrow.balance, 50)
        self.assertEqual(self.runtime.balance_of(self.grantor.address), GRANTOR_FUNDS - 150)
