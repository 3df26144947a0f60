from deadswitch.ledger.ledger import Ledger
from eval.scenarios.common import INTERVAL, deploy_escrow, deploy_non_fungible, new_runtime

# META-NAME NFT removal
# META-DESC Grantor takes a deposited NFT back out and deposits the same token again.

TOKEN_ID = 5


def run_nft_removal(ledger: Ledger):
    runtime, operator = new_runtime(ledger)
    grantor = runtime.new_user_account(label="grantor")
    heir = runtime.new_user_account(label="heir")
    escrow = deploy_escrow(runtime, operator)
    deeds = deploy_non_fungible(runtime, operator)

    deeds.mint(grantor.address, TOKEN_ID, sender=operator)
    deeds.set_approval_for_all(escrow.address, True, sender=grantor)

    escrow.create_will(INTERVAL, sender=grantor)
    escrow.deposit_non_fungible(deeds.address, TOKEN_ID, heir.address, sender=grantor)
    assert deeds.owner_of(TOKEN_ID) == escrow.address

    escrow.remove_asset(0, sender=grantor)
    assert deeds.owner_of(TOKEN_ID) == grantor.address

    index = escrow.deposit_non_fungible(deeds.address, TOKEN_ID, heir.address, sender=grantor)
    assert index == 1
    assert escrow.get_asset(grantor.address, 0).claimed
    assert deeds.owner_of(TOKEN_ID) == escrow.address
