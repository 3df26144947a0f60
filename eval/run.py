from eval.scenarios.contract_beneficiary import run_contract_beneficiary
from eval.scenarios.front_running import run_front_running
from eval.scenarios.heartbeat_decrease import run_heartbeat_decrease
from eval.scenarios.native_claim import run_native_claim
from eval.scenarios.nft_removal import run_nft_removal
from deadswitch.utils.data_logging import time_measure, data_context
from deadswitch.ledger.ledger import Ledger
from deadswitch.deadswitch_logging import getLogger

SCENARIOS = [
    ("native-claim", run_native_claim),
    ("nft-removal", run_nft_removal),
    ("heartbeat-decrease", run_heartbeat_decrease),
    ("contract-beneficiary", run_contract_beneficiary),
    ("front-running", run_front_running),
]


if __name__ == "__main__":
    log = getLogger(__name__)
    log.info("starting evaluation...")

    try:
        log.info("running scenarios...")
        for name, run in SCENARIOS:
            with data_context(name):
                log.info("running scenario %s...", name)
                # each scenario gets a fresh ledger, starting at genesis time
                ledger = Ledger()
                with time_measure("scenario"):
                    run(ledger)

    except BaseException as e:
        log.error("experiments aborted with error: %s", str(e), exc_info=1)
        exit(1)

    log.info("finished evaluation...")
