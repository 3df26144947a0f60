import enum
from dataclasses import dataclass, field

from enforce_typing import enforce_types

from deadswitch.escrow.assets import AssetLedger
from deadswitch.lang.type_address import Address


class WillState(enum.IntEnum):
    ACTIVE = 0
    CLAIMABLE = 1
    COMPLETED = 2


# lifecycle only moves forward
ALLOWED_TRANSITIONS = {
    WillState.ACTIVE: (WillState.CLAIMABLE, WillState.COMPLETED),
    WillState.CLAIMABLE: (WillState.COMPLETED,),
    WillState.COMPLETED: (),
}


@dataclass
class Will:
    grantor: Address
    last_check_in: int
    heartbeat_interval: int
    state: WillState = WillState.ACTIVE
    assets: AssetLedger = field(default_factory=AssetLedger)

    @property
    def deadline(self) -> int:
        return self.last_check_in + self.heartbeat_interval

    def transition(self, new_state: WillState):
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise AssertionError(f"illegal will transition {self.state.name} -> {new_state.name}")
        self.state = new_state


@enforce_types
@dataclass(frozen=True)
class WillInfo:
    grantor: Address
    last_check_in: int
    heartbeat_interval: int
    deadline: int
    state: WillState
    asset_count: int
    unclaimed_count: int
    claimable: bool
