from typing import TYPE_CHECKING, Any

from deadswitch.errors import TransferError, ERR_NATIVE_TRANSFER, ERR_TOKEN_TRANSFER, ERR_TOKEN_AMOUNT_MISMATCH, \
    ERR_NFT_TRANSFER
from deadswitch.escrow.assets import Asset, AssetKind
from deadswitch.lang.type_address import Address

if TYPE_CHECKING:
    from deadswitch.lang.contract import Contract


def _transfer_succeeded(ok: bool, ret: Any) -> bool:
    # tokens that return nothing are treated as successful, an explicit False is a failure
    return ok and ret is not False


def _pull_succeeded(ok: bool, ret: Any) -> bool:
    # a pull must be confirmed explicitly, a non-fungible transfer_from returns nothing
    return ok and ret is True


class TransferAdapter:
    """
    Moves assets in and out of the custody of "contract", dispatching on the asset kind.

    Holds no state. Callers must record all effects (claimed flags, counters) before calling push, since the
    recipient may call back into the contract.
    """

    def __init__(self, contract: 'Contract'):
        self.contract = contract
        self._pull_by_kind = {
            AssetKind.NATIVE: self._pull_native,
            AssetKind.FUNGIBLE: self._pull_fungible,
            AssetKind.NON_FUNGIBLE: self._pull_non_fungible,
        }
        self._push_by_kind = {
            AssetKind.NATIVE: self._push_native,
            AssetKind.FUNGIBLE: self._push_fungible,
            AssetKind.NON_FUNGIBLE: self._push_non_fungible,
        }

    def pull(self, asset: Asset, source: Address):
        """
        Take asset into custody from source
        """
        self._pull_by_kind[asset.kind](asset, source)

    def push(self, asset: Asset, recipient: Address):
        """
        Release asset from custody to recipient
        """
        self._push_by_kind[asset.kind](asset, recipient)

    # ----- native -----

    def _pull_native(self, asset: Asset, source: Address):
        # value is attached to the deposit call and already credited by the ledger
        if self.contract.value != asset.amount:
            raise TransferError(ERR_NATIVE_TRANSFER)

    def _push_native(self, asset: Asset, recipient: Address):
        if not self.contract.transfer_native(recipient, asset.amount):
            raise TransferError(ERR_NATIVE_TRANSFER)

    # ----- fungible -----

    def _token_balance(self, token: Address) -> int:
        ok, balance = self.contract.try_call(token, "balance_of", self.contract.address)
        if not ok:
            raise TransferError(ERR_TOKEN_TRANSFER)
        return balance

    def _pull_fungible(self, asset: Asset, source: Address):
        before = self._token_balance(asset.token_contract)
        ok, ret = self.contract.try_call(asset.token_contract, "transfer_from", source, self.contract.address,
                                         asset.amount)
        if not _pull_succeeded(ok, ret):
            raise TransferError(ERR_TOKEN_TRANSFER)
        if self._token_balance(asset.token_contract) - before != asset.amount:
            raise TransferError(ERR_TOKEN_AMOUNT_MISMATCH)

    def _push_fungible(self, asset: Asset, recipient: Address):
        ok, ret = self.contract.try_call(asset.token_contract, "transfer", recipient, asset.amount)
        if not _transfer_succeeded(ok, ret):
            raise TransferError(ERR_TOKEN_TRANSFER)

    # ----- non-fungible -----

    def _pull_non_fungible(self, asset: Asset, source: Address):
        ok, _ = self.contract.try_call(asset.token_contract, "safe_transfer_from", source, self.contract.address,
                                       asset.token_id)
        if not ok:
            raise TransferError(ERR_NFT_TRANSFER)
        ok, owner = self.contract.try_call(asset.token_contract, "owner_of", asset.token_id)
        if not ok or owner != self.contract.address:
            raise TransferError(ERR_NFT_TRANSFER)

    def _push_non_fungible(self, asset: Asset, recipient: Address):
        ok, _ = self.contract.try_call(asset.token_contract, "safe_transfer_from", self.contract.address, recipient,
                                       asset.token_id)
        if not ok:
            raise TransferError(ERR_NFT_TRANSFER)
