"""
Dead-man's-switch escrow.

Each grantor owns one will holding native currency, fungible and non-fungible tokens, each asset designated to one
beneficiary. The grantor proves liveness by checking in. Once the heartbeat deadline passes, beneficiaries that
accepted their designation may claim their assets, and the grantor loses every way of taking them back.

Lifecycle:

    ACTIVE --(deadline passed, materialized lazily)--> CLAIMABLE --(last asset claimed)--> COMPLETED
    ACTIVE --(emergency withdraw)--> COMPLETED

Every mutating entry point checks, in order: caller role, lifecycle (materializing the heartbeat), consent, then
updates the asset ledger and only afterwards moves value.
"""
from dataclasses import replace
from typing import Dict, List, Set, Tuple

from deadswitch.config import get_min_heartbeat_interval, get_max_heartbeat_interval
from deadswitch.errors import AuthorizationError, StateError, ValidationError, ApprovalError, \
    ERR_WILL_DOES_NOT_EXIST, ERR_WILL_EXISTS, ERR_WILL_NOT_ACTIVE, ERR_WILL_COMPLETED, ERR_NOT_CLAIMABLE, \
    ERR_WITHDRAW_CLAIMABLE, ERR_NOT_BENEFICIARY, ERR_NOT_DESIGNATED, ERR_NOT_TOKEN_OWNER, ERR_INVALID_BENEFICIARY, \
    ERR_INVALID_TOKEN, ERR_NOT_CONTRACT, ERR_ZERO_AMOUNT, ERR_NFT_DEPOSITED, ERR_SAME_BENEFICIARY, \
    ERR_CONTRACT_NOT_APPROVED, ERR_NOT_ACCEPTED, ERR_INVALID_BOUNDS
from deadswitch.escrow import heartbeat
from deadswitch.escrow.assets import Asset, AssetKind
from deadswitch.escrow.consent import ConsentRegistry
from deadswitch.escrow.events import WillCreated, CheckedIn, HeartbeatModified, WillClaimable, AssetDeposited, \
    BeneficiaryUpdated, AssetRemoved, ContractBeneficiaryApproved, ContractBeneficiaryRevoked, BeneficiaryAccepted, \
    BeneficiaryRejected, AssetClaimed, WillCompleted, EmergencyWithdrawal
from deadswitch.escrow.transfers import TransferAdapter
from deadswitch.escrow.will import Will, WillState, WillInfo
from deadswitch.lang.access import Pausable, when_not_paused
from deadswitch.lang.contract import constructor, view, payable, non_reentrant
from deadswitch.lang.type_address import Address
from deadswitch.lang.types import Uint
from deadswitch.tokens.non_fungible import ERC721_RECEIVED
from deadswitch.utils.general import format_duration
from deadswitch.deadswitch_logging import getLogger

logger = getLogger(__name__)


class DigitalWillFactory(Pausable):

    wills: Dict[Address, Will]
    consent: ConsentRegistry
    # (grantor, token contract, token id) of every non-fungible token currently in custody
    deposited_nfts: Set[Tuple[Address, Address, int]]
    min_heartbeat_interval: int
    max_heartbeat_interval: int

    @constructor
    def create(self, min_heartbeat_interval: Uint = 0, max_heartbeat_interval: Uint = 0):
        """
        Interval bounds of 0 select the configured defaults
        """
        self.init_pausable(self.me)
        self.min_heartbeat_interval = min_heartbeat_interval or get_min_heartbeat_interval()
        self.max_heartbeat_interval = max_heartbeat_interval or get_max_heartbeat_interval()
        self.require(0 < self.min_heartbeat_interval <= self.max_heartbeat_interval,
                     ValidationError(ERR_INVALID_BOUNDS))
        self.wills = {}
        self.consent = ConsentRegistry()
        self.deposited_nfts = set()

    #############
    # LIFECYCLE #
    #############

    @when_not_paused
    def create_will(self, heartbeat_interval: Uint):
        self.require(self.me not in self.wills, StateError(ERR_WILL_EXISTS))
        heartbeat.validate_interval(heartbeat_interval, self.min_heartbeat_interval, self.max_heartbeat_interval)
        self.wills[self.me] = Will(self.me, self.now(), heartbeat_interval)
        logger.debug("created will of %r with heartbeat %s", self.me, format_duration(heartbeat_interval))
        self.emit(WillCreated(self.me, heartbeat_interval, self.now()))

    @when_not_paused
    def check_in(self):
        will = self._active_will_of_caller()
        heartbeat.check_in(will, self.now())
        self.emit(CheckedIn(will.grantor, self.now(), will.deadline))

    @when_not_paused
    def modify_heartbeat(self, new_interval: Uint):
        will = self._active_will_of_caller()
        heartbeat.validate_interval(new_interval, self.min_heartbeat_interval, self.max_heartbeat_interval)
        old_interval = will.heartbeat_interval
        heartbeat.change_interval(will, new_interval, self.now())
        self.emit(HeartbeatModified(will.grantor, old_interval, new_interval, will.last_check_in))

    @when_not_paused
    def update_state(self, grantor: Address) -> WillState:
        will = self._will_of(grantor)
        self._materialize(will)
        return will.state

    ############
    # DEPOSITS #
    ############

    @when_not_paused
    @payable
    def deposit_native(self, beneficiary: Address) -> int:
        will = self._active_will_of_caller()
        self._require_valid_beneficiary(will.grantor, beneficiary)
        self.require(self.value > 0, ValidationError(ERR_ZERO_AMOUNT))
        return self._deposit(will, Asset.native(self.value, beneficiary))

    @when_not_paused
    def deposit_fungible(self, token: Address, amount: Uint, beneficiary: Address) -> int:
        will = self._active_will_of_caller()
        self._require_token_contract(token)
        self.require(amount > 0, ValidationError(ERR_ZERO_AMOUNT))
        self._require_valid_beneficiary(will.grantor, beneficiary)
        return self._deposit(will, Asset.fungible(token, amount, beneficiary))

    @when_not_paused
    def deposit_non_fungible(self, token: Address, token_id: Uint, beneficiary: Address) -> int:
        will = self._active_will_of_caller()
        self._require_token_contract(token)
        self._require_valid_beneficiary(will.grantor, beneficiary)
        self.require((will.grantor, token, token_id) not in self.deposited_nfts, ValidationError(ERR_NFT_DEPOSITED))
        ok, owner = self.try_call(token, "owner_of", token_id)
        self.require(ok and owner == will.grantor, AuthorizationError(ERR_NOT_TOKEN_OWNER))
        return self._deposit(will, Asset.non_fungible(token, token_id, beneficiary))

    def on_erc721_received(self, operator: Address, holder: Address, token_id: Uint, data: bytes = b"") -> int:
        """
        Accept every incoming safe transfer. Custody is only recorded through deposit_non_fungible.
        """
        return ERC721_RECEIVED

    ##########
    # ASSETS #
    ##########

    @when_not_paused
    def update_beneficiary(self, asset_index: Uint, new_beneficiary: Address):
        will = self._active_will_of_caller()
        asset = will.assets.get_unclaimed(asset_index)
        self.require(new_beneficiary != asset.beneficiary, ValidationError(ERR_SAME_BENEFICIARY))
        self._require_valid_beneficiary(will.grantor, new_beneficiary)
        old_beneficiary = will.assets.reassign(asset_index, new_beneficiary)
        self.emit(BeneficiaryUpdated(will.grantor, asset_index, old_beneficiary, new_beneficiary))

    @when_not_paused
    @non_reentrant
    def remove_asset(self, asset_index: Uint):
        will = self._active_will_of_caller()
        asset = self._release(will, asset_index)
        TransferAdapter(self).push(asset, will.grantor)
        self.emit(AssetRemoved(will.grantor, asset_index, asset.kind, asset.token_contract, asset.token_id,
                               asset.amount))

    ###########
    # CONSENT #
    ###########

    @when_not_paused
    def approve_contract_beneficiary(self, beneficiary: Address):
        will = self._will_of(self.me)
        self.require(self.is_contract(beneficiary), ValidationError(ERR_NOT_CONTRACT))
        self.consent.set_contract_approval(will.grantor, beneficiary, True)
        self.emit(ContractBeneficiaryApproved(will.grantor, beneficiary))

    @when_not_paused
    def revoke_contract_beneficiary(self, beneficiary: Address):
        will = self._will_of(self.me)
        self.require(self.is_contract(beneficiary), ValidationError(ERR_NOT_CONTRACT))
        self.consent.set_contract_approval(will.grantor, beneficiary, False)
        self.emit(ContractBeneficiaryRevoked(will.grantor, beneficiary))

    @when_not_paused
    def accept_beneficiary(self, grantor: Address):
        will = self._will_of(grantor)
        self.require(will.assets.is_designated(self.me), AuthorizationError(ERR_NOT_DESIGNATED))
        self.consent.accept(grantor, self.me)
        self.emit(BeneficiaryAccepted(grantor, self.me))

    @when_not_paused
    def reject_beneficiary(self, grantor: Address):
        will = self._will_of(grantor)
        self.require(will.assets.is_designated(self.me), AuthorizationError(ERR_NOT_DESIGNATED))
        self.consent.reject(grantor, self.me)
        self.emit(BeneficiaryRejected(grantor, self.me))

    ##############
    # WITHDRAWAL #
    ##############

    @when_not_paused
    @non_reentrant
    def claim_asset(self, grantor: Address, asset_index: Uint):
        """
        Release an asset to its accepted beneficiary once the will is claimable.

        Emits AssetClaimed, preceded by WillClaimable when this claim materializes the lapsed heartbeat and followed
        by WillCompleted when it releases the last unclaimed asset.
        """
        will = self._will_of(grantor)
        self.require(will.state != WillState.COMPLETED, StateError(ERR_WILL_COMPLETED))
        self._materialize(will)
        self.require(will.state == WillState.CLAIMABLE, StateError(ERR_NOT_CLAIMABLE))
        self.require(will.assets.get(asset_index).beneficiary == self.me, AuthorizationError(ERR_NOT_BENEFICIARY))
        will.assets.get_unclaimed(asset_index)
        self.require(self.consent.is_accepted(grantor, self.me), ApprovalError(ERR_NOT_ACCEPTED))

        asset = self._release(will, asset_index)
        completed = will.assets.unclaimed_count == 0 and len(will.assets) > 0
        if completed:
            will.transition(WillState.COMPLETED)

        TransferAdapter(self).push(asset, self.me)
        self.emit(AssetClaimed(grantor, asset_index, self.me, asset.kind, asset.token_contract, asset.token_id,
                               asset.amount))
        if completed:
            logger.debug("will of %r completed", grantor)
            self.emit(WillCompleted(grantor))

    @when_not_paused
    @non_reentrant
    def emergency_withdraw(self):
        will = self._will_of(self.me)
        self.require(will.state != WillState.COMPLETED, StateError(ERR_WILL_COMPLETED))
        # the live predicate, not the cached state: a lapsed deadline blocks the grantor immediately
        self.require(not heartbeat.is_claimable(will, self.now()), StateError(ERR_WITHDRAW_CLAIMABLE))

        returned = [self._release(will, i) for i in will.assets.unclaimed_indices()]
        will.transition(WillState.COMPLETED)

        transfers = TransferAdapter(self)
        for asset in returned:
            transfers.push(asset, will.grantor)
        self.emit(EmergencyWithdrawal(will.grantor, len(returned)))

    #########
    # VIEWS #
    #########

    @view
    def is_claimable(self, grantor: Address) -> bool:
        return heartbeat.is_claimable(self._will_of(grantor), self.now())

    @view
    def get_will_info(self, grantor: Address) -> WillInfo:
        will = self._will_of(grantor)
        return WillInfo(
            grantor=will.grantor,
            last_check_in=will.last_check_in,
            heartbeat_interval=will.heartbeat_interval,
            deadline=will.deadline,
            state=will.state,
            asset_count=len(will.assets),
            unclaimed_count=will.assets.unclaimed_count,
            claimable=heartbeat.is_claimable(will, self.now()),
        )

    @view
    def get_asset_count(self, grantor: Address) -> int:
        return len(self._will_of(grantor).assets)

    @view
    def get_asset(self, grantor: Address, asset_index: Uint) -> Asset:
        return replace(self._will_of(grantor).assets.get(asset_index))

    @view
    def get_beneficiary_assets(self, grantor: Address, beneficiary: Address) -> List[int]:
        return self._will_of(grantor).assets.indices_of(beneficiary)

    @view
    def is_approved_beneficiary(self, grantor: Address, candidate: Address) -> bool:
        return self.consent.is_approved(grantor, candidate, self.is_contract(candidate))

    @view
    def is_accepted(self, grantor: Address, beneficiary: Address) -> bool:
        return self.consent.is_accepted(grantor, beneficiary)

    @view
    def get_native_custody(self, grantor: Address) -> int:
        return self._will_of(grantor).assets.native_custody()

    ###########
    # HELPERS #
    ###########

    def _will_of(self, grantor: Address) -> Will:
        self.require(grantor in self.wills, AuthorizationError(ERR_WILL_DOES_NOT_EXIST))
        return self.wills[grantor]

    def _active_will_of_caller(self) -> Will:
        will = self._will_of(self.me)
        self.require(heartbeat.is_live(will, self.now()), StateError(ERR_WILL_NOT_ACTIVE))
        return will

    def _materialize(self, will: Will):
        if heartbeat.materialize(will, self.now()):
            logger.debug("will of %r became claimable", will.grantor)
            self.emit(WillClaimable(will.grantor, will.deadline))

    def _require_token_contract(self, token: Address):
        self.require(not token.is_null(), ValidationError(ERR_INVALID_TOKEN))
        self.require(self.is_contract(token), ValidationError(ERR_NOT_CONTRACT))

    def _require_valid_beneficiary(self, grantor: Address, beneficiary: Address):
        self.require(not beneficiary.is_null(), ValidationError(ERR_INVALID_BENEFICIARY))
        self.require(self.consent.is_approved(grantor, beneficiary, self.is_contract(beneficiary)),
                     ApprovalError(ERR_CONTRACT_NOT_APPROVED))

    def _deposit(self, will: Will, asset: Asset) -> int:
        index = will.assets.append(asset)
        if asset.kind == AssetKind.NON_FUNGIBLE:
            self.deposited_nfts.add((will.grantor,) + asset.nft_key)
        TransferAdapter(self).pull(asset, will.grantor)
        self.emit(AssetDeposited(will.grantor, index, asset.kind, asset.token_contract, asset.token_id, asset.amount,
                                 asset.beneficiary))
        return index

    def _release(self, will: Will, asset_index: int) -> Asset:
        """
        Mark an asset claimed and drop its non-fungible dedup entry. Must precede the outbound transfer.
        """
        asset = will.assets.mark_claimed(asset_index)
        if asset.kind == AssetKind.NON_FUNGIBLE:
            self.deposited_nfts.discard((will.grantor,) + asset.nft_key)
        return asset
