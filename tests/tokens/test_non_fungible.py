from unittest import TestCase

from deadswitch.errors import TokenError, TxRejectedException
from deadswitch.ledger.ledger import Ledger
from deadswitch.runtime.runtime import Runtime
from deadswitch.tokens.non_fungible import NonFungibleToken, Transfer
from deadswitch.lang.type_address import ZERO_ADDRESS

from tests.examples.contract_beneficiaries import Proxy, Receiver


class TestNonFungibleToken(TestCase):

    def setUp(self):
        self.runtime = Runtime(Ledger())
        self.minter = self.runtime.new_user_account()
        self.alice = self.runtime.new_user_account()
        self.bob = self.runtime.new_user_account()
        self.token = self.runtime.get_class_handle(NonFungibleToken).create("Deeds", "DEED", sender=self.minter)
        self.token.mint(self.alice.address, 1, sender=self.minter)

    def test_mint(self):
        self.assertEqual(self.token.owner_of(1), self.alice.address)
        self.assertEqual(self.token.balance_of(self.alice.address), 1)
        self.assertRaises(TokenError, self.token.mint, self.bob.address, 1, sender=self.minter)
        self.assertRaises(TokenError, self.token.mint, self.bob.address, 2, sender=self.alice)
        self.assertRaises(TokenError, self.token.owner_of, 2)

    def test_transfer_by_owner(self):
        self.token.transfer_from(self.alice.address, self.bob.address, 1, sender=self.alice)
        self.assertEqual(self.runtime.last_receipt.events_of_type(Transfer),
                         [Transfer(self.alice.address, self.bob.address, 1)])
        self.assertEqual(self.token.owner_of(1), self.bob.address)
        self.assertEqual(self.token.balance_of(self.alice.address), 0)
        self.assertRaises(TokenError, self.token.transfer_from, self.alice.address, self.bob.address, 1,
                          sender=self.alice)

    def test_approvals(self):
        self.assertRaises(TokenError, self.token.transfer_from, self.alice.address, self.bob.address, 1,
                          sender=self.bob)
        self.token.approve(self.bob.address, 1, sender=self.alice)
        self.assertEqual(self.token.get_approved(1), self.bob.address)
        self.token.transfer_from(self.alice.address, self.bob.address, 1, sender=self.bob)
        # single-token approval is cleared on transfer
        self.assertEqual(self.token.get_approved(1), ZERO_ADDRESS)

        self.token.set_approval_for_all(self.alice.address, True, sender=self.bob)
        self.assertTrue(self.token.is_approved_for_all(self.bob.address, self.alice.address))
        self.token.transfer_from(self.bob.address, self.alice.address, 1, sender=self.alice)
        self.assertEqual(self.token.owner_of(1), self.alice.address)

    def test_safe_transfer_to_contracts(self):
        receiver = self.runtime.get_class_handle(Receiver).create(ZERO_ADDRESS, sender=self.bob)
        proxy = self.runtime.get_class_handle(Proxy).create(ZERO_ADDRESS, sender=self.bob)

        self.assertRaises(TxRejectedException, self.token.safe_transfer_from, self.alice.address, proxy.address, 1,
                          sender=self.alice)
        self.assertEqual(self.token.owner_of(1), self.alice.address)

        self.token.safe_transfer_from(self.alice.address, receiver.address, 1, sender=self.alice)
        self.assertEqual(self.token.owner_of(1), receiver.address)

    def test_plain_transfer_to_contract(self):
        proxy = self.runtime.get_class_handle(Proxy).create(ZERO_ADDRESS, sender=self.bob)
        self.token.transfer_from(self.alice.address, proxy.address, 1, sender=self.alice)
        self.assertEqual(self.token.owner_of(1), proxy.address)
