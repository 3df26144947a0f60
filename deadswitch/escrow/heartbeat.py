"""
Claimability of a will, derived from its heartbeat.

The cached Will.state only ever lags behind the truth: a will whose deadline has passed is claimable even while its
state still reads ACTIVE. Security checks must therefore use is_claimable, never the cached state alone.
"""
from deadswitch.errors import ValidationError, ERR_ZERO_INTERVAL, ERR_INTERVAL_TOO_SHORT, ERR_INTERVAL_TOO_LONG, \
    ERR_INTERVAL_UNCHANGED
from deadswitch.escrow.will import Will, WillState


def is_claimable(will: Will, now: int) -> bool:
    if will.state == WillState.CLAIMABLE:
        return True
    # exactly at the deadline counts as expired
    return will.state == WillState.ACTIVE and now >= will.deadline


def materialize(will: Will, now: int) -> bool:
    """
    Advance ACTIVE -> CLAIMABLE if the deadline has passed. Returns True iff the state changed.
    """
    if will.state == WillState.ACTIVE and is_claimable(will, now):
        will.transition(WillState.CLAIMABLE)
        return True
    return False


def is_live(will: Will, now: int) -> bool:
    """
    True iff the grantor is still in control: the will is ACTIVE and its deadline has not passed
    """
    return will.state == WillState.ACTIVE and not is_claimable(will, now)


def validate_interval(interval: int, min_interval: int, max_interval: int):
    if interval == 0:
        raise ValidationError(ERR_ZERO_INTERVAL)
    if interval < min_interval:
        raise ValidationError(ERR_INTERVAL_TOO_SHORT)
    if interval > max_interval:
        raise ValidationError(ERR_INTERVAL_TOO_LONG)


def check_in(will: Will, now: int):
    will.last_check_in = now


def change_interval(will: Will, new_interval: int, now: int):
    """
    Extending keeps the anchor (the deadline moves out). Shortening re-anchors at now, so that a grantor can never
    shorten the interval below the elapsed time and make the will instantly claimable.
    """
    if new_interval == will.heartbeat_interval:
        raise ValidationError(ERR_INTERVAL_UNCHANGED)
    if new_interval < will.heartbeat_interval:
        will.last_check_in = now
    will.heartbeat_interval = new_interval
