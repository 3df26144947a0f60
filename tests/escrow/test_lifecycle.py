from deadswitch.config import DAY, DEFAULT_MAX_HEARTBEAT_INTERVAL
from deadswitch.errors import AuthorizationError, StateError, ValidationError, ERR_WILL_EXISTS, \
    ERR_WILL_DOES_NOT_EXIST, ERR_WILL_NOT_ACTIVE, ERR_ZERO_INTERVAL, ERR_INTERVAL_TOO_SHORT, ERR_INTERVAL_TOO_LONG, \
    ERR_INTERVAL_UNCHANGED, ERR_INVALID_BOUNDS
from deadswitch.escrow.events import WillCreated, CheckedIn, HeartbeatModified, WillClaimable
from deadswitch.escrow.factory import DigitalWillFactory
from deadswitch.escrow.will import WillState

from tests.escrow.escrow_test_case import EscrowTestCase, INTERVAL


class TestLifecycle(EscrowTestCase):

    def test_create_will(self):
        now = self.ledger.current_time
        self.create_will()
        self.assertEqual(self.events(WillCreated), [WillCreated(self.grantor.address, INTERVAL, now)])

        info = self.info()
        self.assertEqual(info.grantor, self.grantor.address)
        self.assertEqual(info.state, WillState.ACTIVE)
        self.assertEqual(info.last_check_in, now)
        self.assertEqual(info.deadline, now + INTERVAL)
        self.assertEqual(info.asset_count, 0)
        self.assertEqual(info.unclaimed_count, 0)
        self.assertFalse(info.claimable)

    def test_create_will_once(self):
        self.create_will()
        self.assertRejected(StateError, ERR_WILL_EXISTS, self.create_will)
        self.assertRejected(StateError, ERR_WILL_EXISTS, self.create_will, 2 * INTERVAL)

    def test_create_will_interval_bounds(self):
        self.assertRejected(ValidationError, ERR_ZERO_INTERVAL, self.create_will, 0)
        self.assertRejected(ValidationError, ERR_INTERVAL_TOO_SHORT, self.create_will, DAY - 1)
        self.assertRejected(ValidationError, ERR_INTERVAL_TOO_LONG, self.create_will, DEFAULT_MAX_HEARTBEAT_INTERVAL + 1)
        self.create_will(DAY)
        self.create_will(DEFAULT_MAX_HEARTBEAT_INTERVAL, grantor=self.other)

    def test_custom_interval_bounds(self):
        escrow = self.runtime.get_class_handle(DigitalWillFactory).create(60, 3600, sender=self.operator)
        self.assertEqual(escrow.min_heartbeat_interval, 60)
        self.assertEqual(escrow.max_heartbeat_interval, 3600)
        escrow.create_will(60, sender=self.grantor)
        self.assertRejected(ValidationError, ERR_INTERVAL_TOO_LONG, escrow.create_will, 3601, sender=self.other)

        factory = self.runtime.get_class_handle(DigitalWillFactory)
        self.assertRejected(ValidationError, ERR_INVALID_BOUNDS, factory.create, 3600, 60, sender=self.operator)

    def test_unknown_will(self):
        self.assertRejected(AuthorizationError, ERR_WILL_DOES_NOT_EXIST, self.escrow.check_in, sender=self.grantor)
        self.assertRejected(AuthorizationError, ERR_WILL_DOES_NOT_EXIST, self.escrow.is_claimable,
                            self.grantor.address)
        self.assertRejected(AuthorizationError, ERR_WILL_DOES_NOT_EXIST, self.escrow.update_state,
                            self.grantor.address, sender=self.other)

    def test_check_in(self):
        self.create_will()
        self.ledger.test_increase_current_time_by(INTERVAL - 1)
        self.escrow.check_in(sender=self.grantor)
        now = self.ledger.current_time
        self.assertEqual(self.events(CheckedIn), [CheckedIn(self.grantor.address, now, now + INTERVAL)])

        self.ledger.test_increase_current_time_by(INTERVAL - 1)
        self.assertFalse(self.escrow.is_claimable(self.grantor.address))
        self.ledger.test_increase_current_time_by(1)
        self.assertTrue(self.escrow.is_claimable(self.grantor.address))

    def test_check_in_after_deadline(self):
        self.create_will()
        self.expire()
        self.assertRejected(StateError, ERR_WILL_NOT_ACTIVE, self.escrow.check_in, sender=self.grantor)
        self.escrow.update_state(self.grantor.address, sender=self.other)
        self.assertRejected(StateError, ERR_WILL_NOT_ACTIVE, self.escrow.check_in, sender=self.grantor)

    def test_check_in_only_own_will(self):
        self.create_will()
        self.assertRejected(AuthorizationError, ERR_WILL_DOES_NOT_EXIST, self.escrow.check_in, sender=self.heir)

    def test_modify_heartbeat_increase(self):
        self.create_will()
        start = self.info().last_check_in
        self.ledger.test_increase_current_time_by(10 * DAY)
        self.escrow.modify_heartbeat(60 * DAY, sender=self.grantor)
        self.assertEqual(self.events(HeartbeatModified),
                         [HeartbeatModified(self.grantor.address, INTERVAL, 60 * DAY, start)])
        self.assertEqual(self.info().deadline, start + 60 * DAY)

    def test_modify_heartbeat_decrease(self):
        self.create_will()
        self.ledger.test_increase_current_time_by(29 * DAY)
        self.escrow.modify_heartbeat(DAY, sender=self.grantor)
        now = self.ledger.current_time
        self.assertEqual(self.info().last_check_in, now)
        self.assertFalse(self.escrow.is_claimable(self.grantor.address))
        self.ledger.test_increase_current_time_by(DAY)
        self.assertTrue(self.escrow.is_claimable(self.grantor.address))

    def test_modify_heartbeat_invalid(self):
        self.create_will()
        self.assertRejected(ValidationError, ERR_INTERVAL_UNCHANGED, self.escrow.modify_heartbeat, INTERVAL,
                            sender=self.grantor)
        self.assertRejected(ValidationError, ERR_ZERO_INTERVAL, self.escrow.modify_heartbeat, 0,
                            sender=self.grantor)
        self.assertRejected(ValidationError, ERR_INTERVAL_TOO_SHORT, self.escrow.modify_heartbeat, 60,
                            sender=self.grantor)
        self.expire()
        self.assertRejected(StateError, ERR_WILL_NOT_ACTIVE, self.escrow.modify_heartbeat, 2 * INTERVAL,
                            sender=self.grantor)

    def test_update_state(self):
        self.create_will()
        self.assertEqual(self.escrow.update_state(self.grantor.address, sender=self.other), WillState.ACTIVE)
        self.assertEqual(self.events(WillClaimable), [])

        self.expire()
        info = self.info()
        self.assertEqual(info.state, WillState.ACTIVE)
        self.assertTrue(info.claimable)

        self.assertEqual(self.escrow.update_state(self.grantor.address, sender=self.other), WillState.CLAIMABLE)
        self.assertEqual(self.events(WillClaimable), [WillClaimable(self.grantor.address, info.deadline)])
        self.assertEqual(self.info().state, WillState.CLAIMABLE)

        # idempotent
        self.assertEqual(self.escrow.update_state(self.grantor.address, sender=self.heir), WillState.CLAIMABLE)
        self.assertEqual(self.events(WillClaimable), [])

    def test_views_do_not_materialize(self):
        self.create_will()
        self.expire()
        self.assertTrue(self.escrow.is_claimable(self.grantor.address))
        self.assertEqual(self.info().state, WillState.ACTIVE)

    def test_wills_are_independent(self):
        self.create_will()
        self.ledger.test_increase_current_time_by(DAY)
        self.create_will(grantor=self.other)
        self.ledger.test_increase_current_time_by(INTERVAL - DAY)
        self.assertTrue(self.escrow.is_claimable(self.grantor.address))
        self.assertFalse(self.escrow.is_claimable(self.other.address))
        self.escrow.check_in(sender=self.other)
