"""
Account lockout state machine.

States:
    Unlocked(attempts)  -- lock_until is None
    Locked(until)       -- lock_until is set

A failure while unlocked increments the counter and, once the counter reaches
the threshold, sets a single lock. Further failures while locked only bump the
counter; the lock is never extended. A failure after the lock has lapsed
starts a new streak at 1. Any success resets to Unlocked(0).

This module is pure; CredentialStore applies the same transitions as one
conditional UPDATE.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class LockoutPolicy:
    threshold: int = 5
    duration: timedelta = timedelta(hours=1)


@dataclass(frozen=True)
class LockState:
    login_attempts: int = 0
    lock_until: Optional[datetime] = None


def lock_expired(state: LockState, now: datetime) -> bool:
    """True if a lock was set and has already lapsed."""
    return state.lock_until is not None and state.lock_until < now


def is_locked(state: LockState, now: datetime) -> bool:
    """True while a lock is set and still in the future."""
    return state.lock_until is not None and state.lock_until > now


def register_failure(state: LockState, now: datetime, policy: LockoutPolicy = LockoutPolicy()) -> LockState:
    """
    Apply one failed login to the state.

    Args:
        state: Current lockout state
        now: Time of the failed attempt
        policy: Threshold and lock duration

    Returns:
        LockState: The new state
    """
    if lock_expired(state, now):
        return LockState(login_attempts=1, lock_until=None)

    attempts = state.login_attempts + 1
    lock_until = state.lock_until
    if attempts >= policy.threshold and lock_until is None:
        lock_until = now + policy.duration
    return LockState(login_attempts=attempts, lock_until=lock_until)


def register_success() -> LockState:
    """A successful login always clears the counter and any lock."""
    return LockState()


def minutes_remaining(state: LockState, now: datetime) -> int:
    """Whole minutes left on the lock, rounded up; 0 when not locked."""
    if not is_locked(state, now):
        return 0
    return math.ceil((state.lock_until - now).total_seconds() / 60)
