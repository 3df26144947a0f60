from typing import Dict

from deadswitch.errors import StateError, ERR_ALREADY_ACCEPTED
from deadswitch.lang.type_address import Address


class ConsentRegistry:
    """
    Two independent gates between a grantor and a beneficiary:

    - acceptance: set by the beneficiary, covers every current and future asset of that grantor; required to claim
    - contract approval: set by the grantor, required to designate a contract account as beneficiary
    """

    def __init__(self):
        self.accepted: Dict[Address, Dict[Address, bool]] = {}
        self.approved_contracts: Dict[Address, Dict[Address, bool]] = {}

    def is_accepted(self, grantor: Address, beneficiary: Address) -> bool:
        return self.accepted.get(grantor, {}).get(beneficiary, False)

    def accept(self, grantor: Address, beneficiary: Address):
        if self.is_accepted(grantor, beneficiary):
            raise StateError(ERR_ALREADY_ACCEPTED)
        self.accepted.setdefault(grantor, {})[beneficiary] = True

    def reject(self, grantor: Address, beneficiary: Address):
        if beneficiary in self.accepted.get(grantor, {}):
            self.accepted[grantor][beneficiary] = False

    def set_contract_approval(self, grantor: Address, contract: Address, approved: bool):
        self.approved_contracts.setdefault(grantor, {})[contract] = approved

    def is_approved(self, grantor: Address, candidate: Address, candidate_is_contract: bool) -> bool:
        if candidate.is_null():
            return False
        if candidate_is_contract:
            return self.approved_contracts.get(grantor, {}).get(candidate, False)
        return True
