from deadswitch.errors import StateError, ERR_WITHDRAW_CLAIMABLE
from deadswitch.escrow.will import WillState
from deadswitch.ledger.ledger import Ledger
from eval.scenarios.common import INTERVAL, deploy_escrow, deploy_fungible, new_runtime

# META-NAME Front-running
# META-DESC A grantor racing the lapsed deadline cannot withdraw, the beneficiary still gets paid.


def run_front_running(ledger: Ledger):
    runtime, operator = new_runtime(ledger)
    grantor = runtime.new_user_account(label="grantor")
    heir = runtime.new_user_account(label="heir")
    escrow = deploy_escrow(runtime, operator)
    gold = deploy_fungible(runtime, operator)

    gold.mint(grantor.address, 1000, sender=operator)
    gold.approve(escrow.address, 1000, sender=grantor)
    escrow.create_will(INTERVAL, sender=grantor)
    escrow.deposit_fungible(gold.address, 1000, heir.address, sender=grantor)
    escrow.accept_beneficiary(grantor.address, sender=heir)

    ledger.test_increase_current_time_by(INTERVAL + 1)
    assert escrow.get_will_info(grantor.address).state == WillState.ACTIVE
    try:
        escrow.emergency_withdraw(sender=grantor)
        raise AssertionError("emergency withdraw after the deadline must fail")
    except StateError as e:
        assert e.reason == ERR_WITHDRAW_CLAIMABLE

    escrow.claim_asset(grantor.address, 0, sender=heir)
    assert gold.balance_of(heir.address) == 1000
    assert gold.balance_of(escrow.address) == 0
