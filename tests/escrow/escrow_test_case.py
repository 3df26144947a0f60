from unittest import TestCase

from deadswitch.config import DAY
from deadswitch.errors import EscrowError
from deadswitch.escrow.factory import DigitalWillFactory
from deadswitch.ledger.ledger import Ledger
from deadswitch.runtime.runtime import Runtime
from deadswitch.tokens.fungible import FungibleToken
from deadswitch.tokens.non_fungible import NonFungibleToken

INTERVAL = 30 * DAY
GRANTOR_FUNDS = 1000
NFT_IDS = (1, 2, 3)


class EscrowTestCase(TestCase):
    """
    Fresh ledger with a deployed escrow, a fungible and a non-fungible token. The grantor holds native currency,
    tokens of both kinds and has approved the escrow to pull them.
    """

    def setUp(self):
        self.ledger = Ledger()
        self.runtime = Runtime(self.ledger)
        self.operator = self.runtime.new_user_account(label="operator")
        self.grantor = self.runtime.new_user_account(GRANTOR_FUNDS, label="grantor")
        self.heir = self.runtime.new_user_account(label="heir")
        self.other = self.runtime.new_user_account(GRANTOR_FUNDS, label="other")

        self.escrow = self.runtime.get_class_handle(DigitalWillFactory).create(sender=self.operator)

        self.gold = self.runtime.get_class_handle(FungibleToken).create("Gold", "GLD", sender=self.operator)
        self.gold.mint(self.grantor.address, GRANTOR_FUNDS, sender=self.operator)
        self.gold.approve(self.escrow.address, GRANTOR_FUNDS, sender=self.grantor)

        self.deeds = self.runtime.get_class_handle(NonFungibleToken).create("Deeds", "DEED", sender=self.operator)
        for token_id in NFT_IDS:
            self.deeds.mint(self.grantor.address, token_id, sender=self.operator)
        self.deeds.set_approval_for_all(self.escrow.address, True, sender=self.grantor)

    def create_will(self, interval=INTERVAL, grantor=None):
        self.escrow.create_will(interval, sender=grantor or self.grantor)

    def expire(self, extra=0):
        self.ledger.test_increase_current_time_by(INTERVAL + extra)

    def info(self, grantor=None):
        return self.escrow.get_will_info((grantor or self.grantor).address)

    def events(self, event_type):
        return self.runtime.last_receipt.events_of_type(event_type)

    def assertRejected(self, error_type, reason, f, *args, **kwargs):
        with self.assertRaises(error_type) as cm:
            f(*args, **kwargs)
        self.assertIsInstance(cm.exception, EscrowError)
        self.assertEqual(cm.exception.reason, reason)
