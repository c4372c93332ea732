"""
Tests for the account lockout state machine and its SQL counterpart.
"""
from datetime import datetime, timedelta
import threading

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from salon.auth.lockout import (
    LockoutPolicy, LockState, is_locked, minutes_remaining, register_failure, register_success,
)
from salon.auth.models import User, UserRole
from salon.auth.store import CredentialStore
from salon.database import Base

NOW = datetime(2026, 3, 1, 12, 0, 0)


def fail_times(state, count, start=NOW, step=timedelta(seconds=10)):
    now = start
    for _ in range(count):
        state = register_failure(state, now)
        now += step
    return state


def test_four_failures_do_not_lock():
    state = fail_times(LockState(), 4)
    assert state.login_attempts == 4
    assert state.lock_until is None


def test_fifth_failure_locks_for_an_hour():
    state = fail_times(LockState(), 4)
    fifth = NOW + timedelta(minutes=5)
    state = register_failure(state, fifth)
    assert state.login_attempts == 5
    assert state.lock_until == fifth + timedelta(hours=1)
    assert is_locked(state, fifth)


def test_failures_while_locked_never_extend_the_lock():
    locked = fail_times(LockState(), 5)
    later = register_failure(locked, locked.lock_until - timedelta(minutes=1))
    assert later.login_attempts == 6
    assert later.lock_until == locked.lock_until


def test_failure_after_expiry_starts_new_streak():
    locked = fail_times(LockState(), 5)
    after = register_failure(locked, locked.lock_until + timedelta(seconds=1))
    assert after == LockState(login_attempts=1, lock_until=None)


def test_expired_lock_is_not_locked():
    locked = fail_times(LockState(), 5)
    assert not is_locked(locked, locked.lock_until + timedelta(seconds=1))


def test_success_always_resets():
    assert register_success() == LockState(0, None)


def test_minutes_remaining_rounds_up():
    state = LockState(5, NOW + timedelta(minutes=10, seconds=1))
    assert minutes_remaining(state, NOW) == 11
    assert minutes_remaining(LockState(), NOW) == 0


def test_custom_policy_threshold():
    policy = LockoutPolicy(threshold=2, duration=timedelta(minutes=5))
    state = register_failure(LockState(), NOW, policy)
    state = register_failure(state, NOW, policy)
    assert state.lock_until == NOW + timedelta(minutes=5)


def test_store_update_matches_pure_transitions(db):
    """
    The conditional UPDATE must walk through the same states as register_failure.
    """
    store = CredentialStore(db, LockoutPolicy())
    user = store.create_user("stylist", "pw-123456", UserRole.USER)

    offsets = (0, 1, 2, 3, 4, 5, 30, 61, 62, 200, 201)
    expected = LockState()
    for minutes in offsets:
        now = NOW + timedelta(minutes=minutes)
        expected = register_failure(expected, now)
        assert store.record_failed_attempt(user, now) == expected


def test_store_success_clears_lock(db):
    store = CredentialStore(db, LockoutPolicy(threshold=1))
    user = store.create_user("stylist", "pw-123456", UserRole.USER)
    assert store.record_failed_attempt(user, NOW).lock_until is not None

    store.record_success(user)
    assert user.login_attempts == 0
    assert user.lock_until is None


def test_concurrent_failures_lock_once(tmp_path):
    """
    Two failures racing on the fifth attempt must count both and lock once.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'lockout.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    policy = LockoutPolicy()

    setup = Session()
    user = CredentialStore(setup, policy).create_user("stylist", "pw-123456", UserRole.USER)
    user.login_attempts = 4
    setup.commit()
    user_id = user.id
    setup.close()

    times = [NOW, NOW + timedelta(seconds=1)]
    barrier = threading.Barrier(len(times))
    errors = []

    def fail_at(now):
        db = Session()
        try:
            target = db.get(User, user_id)
            barrier.wait()
            CredentialStore(db, policy).record_failed_attempt(target, now)
        except Exception as e:
            errors.append(e)
        finally:
            db.close()

    threads = [threading.Thread(target=fail_at, args=(now,)) for now in times]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    check = Session()
    try:
        final = check.get(User, user_id)
        assert final.login_attempts == 6
        assert final.lock_until in {now + policy.duration for now in times}
    finally:
        check.close()
        engine.dispose()
