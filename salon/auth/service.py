"""
Authentication service layer for business logic.
"""
import logging
from datetime import timedelta
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..core.clock import utcnow
from ..core.security import TokenService, verify_password
from ..core.validation import validate_required
from ..exceptions import ValidationException
from .exceptions import AccountLockedException, InvalidCredentialsException, UsernameTakenException
from .lockout import LockoutPolicy, LockState, is_locked, minutes_remaining
from .models import User, UserRole
from .schemas import UserSummary
from .store import CredentialStore

# Set up logging
logger = logging.getLogger(__name__)


def login_user(
    store: CredentialStore,
    tokens: TokenService,
    username: Optional[str],
    password: Optional[str],
) -> Dict[str, Any]:
    """
    Authenticate a user and generate an access token.

    Args:
        store: Credential store bound to the request's session
        tokens: Token issuer
        username: Submitted username
        password: Submitted password

    Returns:
        Dict with token and user information

    Raises:
        ValidationException: If username or password is missing
        InvalidCredentialsException: Unknown user or wrong password
        AccountLockedException: Account is locked, or this failure locked it
    """
    result = validate_required({"username": username}, ("username",))
    # Passwords are compared as sent; only an absent or empty one is rejected
    if not password:
        result.add("password", "password is required")
    if not result.valid:
        raise ValidationException("Username and password are required", result)

    user = store.get_by_username(username.strip())
    if not user:
        # Same answer as a wrong password so usernames cannot be probed
        logger.warning("Login failed: unknown username")
        raise InvalidCredentialsException()

    now = utcnow()
    state = LockState(user.login_attempts, user.lock_until)
    if is_locked(state, now):
        # Rejected without counting as another failure
        logger.warning(f"Login refused: user {user.id} is locked")
        raise AccountLockedException(minutes_remaining(state, now))

    if not verify_password(password, user.password_hash):
        state = store.record_failed_attempt(user, now)
        if is_locked(state, now):
            raise AccountLockedException(minutes_remaining(state, now))
        raise InvalidCredentialsException()

    store.record_success(user)
    store.touch_last_login(user, now)

    token = tokens.issue(user.id, user.username, user.role.value)
    logger.info(f"Login successful: user {user.id} ({user.username})")

    return {
        "success": True,
        "token": token,
        "user": UserSummary.model_validate(user),
    }


def refresh_token(user: User, tokens: TokenService, remember: bool = False) -> Dict[str, Any]:
    """
    Issue a new token for an already authenticated user.

    Args:
        user: Current user, freshly resolved by the auth gateway
        tokens: Token issuer
        remember: Issue the long-lived variant instead of a regular token

    Returns:
        Dict with the new token
    """
    expires_delta = timedelta(minutes=settings.refresh_token_expire_minutes) if remember else None
    token = tokens.issue(user.id, user.username, user.role.value, expires_delta=expires_delta)
    logger.info(f"Token refreshed for user {user.id} ({user.username})")
    return {"success": True, "token": token}


def get_credential_store(db: Session) -> CredentialStore:
    """CredentialStore using the configured lockout policy."""
    policy = LockoutPolicy(
        threshold=settings.lockout_threshold,
        duration=timedelta(minutes=settings.lockout_minutes),
    )
    return CredentialStore(db, policy)


def create_account(store: CredentialStore, username: str, password: str, role: UserRole) -> User:
    """
    Create an operator account.

    Raises:
        UsernameTakenException: If the username is already registered
    """
    if store.get_by_username(username.strip()):
        logger.warning(f"Account creation failed: username {username} already registered")
        raise UsernameTakenException()
    return store.create_user(username, password, role)


def change_password(store: CredentialStore, user: User, current_password: str, new_password: str) -> None:
    """
    Replace the password of the current user after checking the old one.

    Raises:
        InvalidCredentialsException: If the current password is wrong
    """
    # The gateway hands out detached users; act on the session's copy
    db_user = store.get_by_id(user.id)
    if db_user is None or not verify_password(current_password, db_user.password_hash):
        raise InvalidCredentialsException("Current password is incorrect")
    store.set_password(db_user, new_password)
