"""
Rejection taxonomy of the escrow engine.

Every failed call raises a subclass of TxRejectedException and leaves the ledger exactly as it was before the call.
The reason strings below are part of the externally visible interface: indexers and user interfaces match on them,
so they must not change.

Hierarchy
---------
TxRejectedException
 └─ EscrowError
     ├─ AuthorizationError : caller lacks the grantor / beneficiary / owner role
     ├─ StateError         : operation invalid in the current lifecycle state
     ├─ ValidationError    : malformed argument (null address, zero amount, bad index, ...)
     ├─ ApprovalError      : beneficiary approval or consent missing
     ├─ TransferError      : native or token transfer failed
     ├─ ReentrancyError    : guarded entry point re-entered during an external call
     └─ PausedError        : mutating entry point called while paused
"""


class TxRejectedException(Exception):
    pass


class EscrowError(TxRejectedException):

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AuthorizationError(EscrowError):
    pass


class StateError(EscrowError):
    pass


class ValidationError(EscrowError):
    pass


class ApprovalError(EscrowError):
    pass


class TransferError(EscrowError):
    pass


class ReentrancyError(EscrowError):
    pass


class PausedError(EscrowError):
    pass


# authorization
ERR_WILL_DOES_NOT_EXIST = "Will does not exist"
ERR_NOT_BENEFICIARY = "Not the beneficiary"
ERR_NOT_DESIGNATED = "Not a designated beneficiary"
ERR_NOT_TOKEN_OWNER = "Not the token owner"
ERR_NOT_OWNER = "Ownable: caller is not the owner"

# lifecycle state
ERR_WILL_EXISTS = "Will already exists"
ERR_WILL_NOT_ACTIVE = "Will must be active"
ERR_WILL_COMPLETED = "Will already completed"
ERR_NOT_CLAIMABLE = "Will not yet claimable"
ERR_WITHDRAW_CLAIMABLE = "Cannot withdraw from claimable will"
ERR_ASSET_CLAIMED = "Asset already claimed"
ERR_ALREADY_ACCEPTED = "Designation already accepted"
ERR_PAUSED = "Pausable: paused"
ERR_NOT_PAUSED = "Pausable: not paused"
ERR_REENTRANT = "ReentrancyGuard: reentrant call"

# validation
ERR_INVALID_BENEFICIARY = "Invalid beneficiary address"
ERR_INVALID_TOKEN = "Invalid token address"
ERR_NOT_CONTRACT = "Not a contract address"
ERR_ZERO_AMOUNT = "Amount must be greater than zero"
ERR_ZERO_INTERVAL = "Interval must be greater than zero"
ERR_INTERVAL_TOO_SHORT = "Interval below minimum"
ERR_INTERVAL_TOO_LONG = "Interval above maximum"
ERR_INTERVAL_UNCHANGED = "New interval must differ from current"
ERR_INVALID_BOUNDS = "Invalid heartbeat interval bounds"
ERR_INVALID_INDEX = "Invalid asset index"
ERR_NFT_DEPOSITED = "NFT already deposited"
ERR_SAME_BENEFICIARY = "New beneficiary must differ"
ERR_INVALID_OWNER = "Ownable: new owner is the zero address"

# approval
ERR_CONTRACT_NOT_APPROVED = "Contract beneficiary not approved"
ERR_NOT_ACCEPTED = "Beneficiary must accept designation first"

# transfer
ERR_NATIVE_TRANSFER = "Native transfer failed"
ERR_TOKEN_TRANSFER = "Token transfer failed"
ERR_TOKEN_AMOUNT_MISMATCH = "Token transfer amount mismatch"
ERR_NFT_TRANSFER = "NFT transfer failed"


class TokenError(TxRejectedException):
    """
    Rejection raised by the reference token contracts (not part of the escrow taxonomy)
    """
    pass
