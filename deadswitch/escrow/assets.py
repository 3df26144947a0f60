"""
Asset records and the per-will asset ledger.

An asset is a tagged union over three kinds sharing one record layout:

    kind          token_contract   token_id   amount
    NATIVE        ZERO_ADDRESS     0          quantity
    FUNGIBLE      token            0          quantity
    NON_FUNGIBLE  token            id         1

The ledger is append-only. Indices are permanent handles (beneficiaries and events refer to them), so entries are
never removed or reordered: a withdrawn asset is only flagged as claimed.
"""
import enum
from dataclasses import dataclass
from typing import List, Dict, Tuple

from enforce_typing import enforce_types

from deadswitch.errors import ValidationError, StateError, ERR_INVALID_INDEX, ERR_ASSET_CLAIMED
from deadswitch.lang.type_address import Address, ZERO_ADDRESS


class AssetKind(enum.IntEnum):
    NATIVE = 0
    FUNGIBLE = 1
    NON_FUNGIBLE = 2


@enforce_types
@dataclass
class Asset:
    kind: AssetKind
    token_contract: Address
    token_id: int
    amount: int
    beneficiary: Address
    claimed: bool = False

    def __post_init__(self):
        assert self.amount > 0
        assert (self.kind == AssetKind.NATIVE) == self.token_contract.is_null()
        assert self.kind == AssetKind.NON_FUNGIBLE or self.token_id == 0
        assert self.kind != AssetKind.NON_FUNGIBLE or self.amount == 1

    @staticmethod
    def native(amount: int, beneficiary: Address) -> 'Asset':
        return Asset(AssetKind.NATIVE, ZERO_ADDRESS, 0, amount, beneficiary)

    @staticmethod
    def fungible(token_contract: Address, amount: int, beneficiary: Address) -> 'Asset':
        return Asset(AssetKind.FUNGIBLE, token_contract, 0, amount, beneficiary)

    @staticmethod
    def non_fungible(token_contract: Address, token_id: int, beneficiary: Address) -> 'Asset':
        return Asset(AssetKind.NON_FUNGIBLE, token_contract, token_id, 1, beneficiary)

    @property
    def nft_key(self) -> Tuple[Address, int]:
        assert self.kind == AssetKind.NON_FUNGIBLE
        return self.token_contract, self.token_id


class AssetLedger:

    def __init__(self):
        self.assets: List[Asset] = []
        self.by_beneficiary: Dict[Address, List[int]] = {}
        # number of entries with claimed == False
        self.unclaimed_count = 0

    def __len__(self):
        return len(self.assets)

    def append(self, asset: Asset) -> int:
        assert not asset.claimed
        index = len(self.assets)
        self.assets.append(asset)
        self.unclaimed_count += 1
        self.by_beneficiary.setdefault(asset.beneficiary, []).append(index)
        return index

    def get(self, index: int) -> Asset:
        if not 0 <= index < len(self.assets):
            raise ValidationError(ERR_INVALID_INDEX)
        return self.assets[index]

    def get_unclaimed(self, index: int) -> Asset:
        asset = self.get(index)
        if asset.claimed:
            raise StateError(ERR_ASSET_CLAIMED)
        return asset

    def mark_claimed(self, index: int) -> Asset:
        asset = self.get_unclaimed(index)
        asset.claimed = True
        self.unclaimed_count -= 1
        return asset

    def reassign(self, index: int, new_beneficiary: Address) -> Address:
        """
        Move an unclaimed asset to a new beneficiary, returns the previous beneficiary
        """
        asset = self.get_unclaimed(index)
        old_beneficiary = asset.beneficiary
        indices = self.by_beneficiary[old_beneficiary]
        indices.remove(index)
        if len(indices) == 0:
            del self.by_beneficiary[old_beneficiary]
        asset.beneficiary = new_beneficiary
        self.by_beneficiary.setdefault(new_beneficiary, []).append(index)
        return old_beneficiary

    def indices_of(self, beneficiary: Address) -> List[int]:
        return list(self.by_beneficiary.get(beneficiary, []))

    def is_designated(self, beneficiary: Address) -> bool:
        return beneficiary in self.by_beneficiary

    def unclaimed_indices(self) -> List[int]:
        """
        Indices of all unclaimed entries in ledger order. Stops scanning once all of them are found.
        """
        remaining = self.unclaimed_count
        indices = []
        for i, asset in enumerate(self.assets):
            if remaining == 0:
                break
            if not asset.claimed:
                indices.append(i)
                remaining -= 1
        return indices

    def native_custody(self) -> int:
        return sum(a.amount for a in self.assets if a.kind == AssetKind.NATIVE and not a.claimed)
