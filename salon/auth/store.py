"""
Credential store - persistence of user records and their lockout counters.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, and_, case, literal, null, update
from sqlalchemy.orm import Session

from ..core.clock import utcnow
from ..core.security import hash_password
from .lockout import LockoutPolicy, LockState
from .models import User, UserRole

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Reads and writes User rows.

    Password hashing happens only in create_user/set_password. Lockout
    counters are changed with single conditional UPDATE statements so two
    concurrent failures for one user cannot both read the same old counter.
    """

    def __init__(self, db: Session, policy: LockoutPolicy = LockoutPolicy()):
        self.db = db
        self.policy = policy

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def admin_exists(self) -> bool:
        return self.db.query(User).filter(User.role == UserRole.ADMIN).count() > 0

    def create_user(self, username: str, password: str, role: UserRole = UserRole.USER) -> User:
        """
        Create a user with a freshly hashed password.

        Args:
            username: Unique login name
            password: Plain text password
            role: Role of the new account

        Returns:
            User: The persisted user
        """
        user = User(
            username=username.strip(),
            password_hash=hash_password(password),
            role=role,
            login_attempts=0,
            lock_until=None,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User created: {user.username} ({user.role.value})")
        return user

    def set_password(self, user: User, password: str) -> User:
        """Replace the stored hash with a hash of the new password."""
        user.password_hash = hash_password(password)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Password updated for user {user.id}")
        return user

    def record_failed_attempt(self, user: User, now: Optional[datetime] = None) -> LockState:
        """
        Count one failed login, locking the account at the threshold.

        Mirrors lockout.register_failure, evaluated by the database against
        the row's current values rather than the copy loaded in memory.

        Returns:
            LockState: State after the update
        """
        now = now or utcnow()
        lock_time = literal(now + self.policy.duration, DateTime)
        expired = and_(User.lock_until.isnot(None), User.lock_until < now)

        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(
                login_attempts=case(
                    (expired, 1),
                    else_=User.login_attempts + 1,
                ),
                lock_until=case(
                    (expired, null()),
                    (and_(User.lock_until.is_(None), User.login_attempts + 1 >= self.policy.threshold), lock_time),
                    else_=User.lock_until,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        self.db.execute(stmt)
        self.db.commit()
        self.db.refresh(user)

        state = LockState(user.login_attempts, user.lock_until)
        if state.lock_until is not None:
            logger.warning(f"User {user.id} locked until {state.lock_until.isoformat()} "
                           f"after {state.login_attempts} failed attempts")
        else:
            logger.info(f"Failed login for user {user.id} ({state.login_attempts} in current streak)")
        return state

    def record_success(self, user: User) -> LockState:
        """Reset the failure counter and clear any lock."""
        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(login_attempts=0, lock_until=None)
            .execution_options(synchronize_session=False)
        )
        self.db.execute(stmt)
        self.db.commit()
        self.db.refresh(user)
        return LockState()

    def touch_last_login(self, user: User, now: Optional[datetime] = None) -> None:
        """Record the time of a successful login."""
        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(last_login=now or utcnow())
            .execution_options(synchronize_session=False)
        )
        self.db.execute(stmt)
        self.db.commit()
        self.db.refresh(user)
