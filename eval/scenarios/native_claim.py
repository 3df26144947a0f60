from deadswitch.escrow.will import WillState
from deadswitch.ledger.ledger import Ledger
from eval.scenarios.common import INTERVAL, deploy_escrow, new_runtime

# META-NAME Native claim
# META-DESC Beneficiary claims a native deposit exactly at the heartbeat deadline.


def run_native_claim(ledger: Ledger):
    runtime, operator = new_runtime(ledger)
    grantor = runtime.new_user_account(100, label="grantor")
    heir = runtime.new_user_account(label="heir")
    escrow = deploy_escrow(runtime, operator)

    escrow.create_will(INTERVAL, sender=grantor)
    escrow.deposit_native(heir.address, sender=grantor, value=1)

    ledger.test_increase_current_time_by(INTERVAL)
    assert escrow.is_claimable(grantor.address)

    escrow.accept_beneficiary(grantor.address, sender=heir)
    escrow.claim_asset(grantor.address, 0, sender=heir)

    assert escrow.get_will_info(grantor.address).state == WillState.COMPLETED
    assert runtime.balance_of(heir.address) == 1
    assert runtime.balance_of(grantor.address) == 99
    assert escrow.balance == 0
