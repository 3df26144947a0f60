from deadswitch.config import DAY
from deadswitch.ledger.ledger import Ledger
from eval.scenarios.common import INTERVAL, deploy_escrow, new_runtime

# META-NAME Heartbeat decrease
# META-DESC Shortening the heartbeat re-anchors the deadline instead of expiring the will at once.


def run_heartbeat_decrease(ledger: Ledger):
    runtime, operator = new_runtime(ledger)
    grantor = runtime.new_user_account(label="grantor")
    escrow = deploy_escrow(runtime, operator)

    escrow.create_will(INTERVAL, sender=grantor)
    ledger.test_increase_current_time_by(29 * DAY)
    escrow.modify_heartbeat(DAY, sender=grantor)
    assert not escrow.is_claimable(grantor.address)

    ledger.test_increase_current_time_by(DAY - 1)
    assert not escrow.is_claimable(grantor.address)

    ledger.test_increase_current_time_by(1)
    assert escrow.is_claimable(grantor.address)
