"""
Events emitted by the will factory, one per successful state change, for external indexers.
"""
from dataclasses import dataclass

from enforce_typing import enforce_types

from deadswitch.escrow.assets import AssetKind
from deadswitch.lang.type_address import Address


@enforce_types
@dataclass(frozen=True)
class WillCreated:
    grantor: Address
    heartbeat_interval: int
    timestamp: int


@enforce_types
@dataclass(frozen=True)
class CheckedIn:
    grantor: Address
    timestamp: int
    deadline: int


@enforce_types
@dataclass(frozen=True)
class HeartbeatModified:
    grantor: Address
    old_interval: int
    new_interval: int
    last_check_in: int


@enforce_types
@dataclass(frozen=True)
class WillClaimable:
    grantor: Address
    deadline: int


@enforce_types
@dataclass(frozen=True)
class AssetDeposited:
    grantor: Address
    asset_index: int
    kind: AssetKind
    token_contract: Address
    token_id: int
    amount: int
    beneficiary: Address


@enforce_types
@dataclass(frozen=True)
class BeneficiaryUpdated:
    grantor: Address
    asset_index: int
    old_beneficiary: Address
    new_beneficiary: Address


@enforce_types
@dataclass(frozen=True)
class AssetRemoved:
    grantor: Address
    asset_index: int
    kind: AssetKind
    token_contract: Address
    token_id: int
    amount: int


@enforce_types
@dataclass(frozen=True)
class ContractBeneficiaryApproved:
    grantor: Address
    beneficiary: Address


@enforce_types
@dataclass(frozen=True)
class ContractBeneficiaryRevoked:
    grantor: Address
    beneficiary: Address


@enforce_types
@dataclass(frozen=True)
class BeneficiaryAccepted:
    grantor: Address
    beneficiary: Address


@enforce_types
@dataclass(frozen=True)
class BeneficiaryRejected:
    grantor: Address
    beneficiary: Address


@enforce_types
@dataclass(frozen=True)
class AssetClaimed:
    grantor: Address
    asset_index: int
    beneficiary: Address
    kind: AssetKind
    token_contract: Address
    token_id: int
    amount: int


@enforce_types
@dataclass(frozen=True)
class WillCompleted:
    grantor: Address


@enforce_types
@dataclass(frozen=True)
class EmergencyWithdrawal:
    grantor: Address
    assets_returned: int
