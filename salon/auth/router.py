"""
Authentication routes.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session

from ..core.security import TokenService
from ..database import get_db
from .dependencies import get_current_user, get_token_service, require_admin
from .gateway import extract_bearer_token
from .models import User
from .schemas import (
    AuthStatusResponse, LoginResponse, MessageResponse, PasswordChange,
    RefreshRequest, TokenResponse, UserCreate, UserLogin, UserSummary,
)
from .service import change_password, create_account, get_credential_store, login_user, refresh_token

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Exchange a username and password for a bearer token.

    Five consecutive failures lock the account for an hour; while locked the
    response reports the remaining minutes.
    """
    store = get_credential_store(db)
    return login_user(store, tokens, credentials.username, credentials.password)


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    """
    Acknowledge a logout.

    Tokens are stateless; the client discards its copy.
    """
    logger.info(f"User {current_user.id} logged out")
    return {"success": True, "message": "Logout successful"}


@router.post("/refresh-token", response_model=TokenResponse)
def refresh(
    payload: Optional[RefreshRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    tokens: TokenService = Depends(get_token_service),
):
    """Issue a fresh token with a new expiry window for the current user."""
    remember = payload.remember if payload else False
    return refresh_token(current_user, tokens, remember=remember)


@router.get("/status", response_model=AuthStatusResponse)
def auth_status(request: Request):
    """
    Report whether a bearer token is present.

    The token is not verified here; protected routes do that.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    return {"authenticated": token is not None}


@router.get("/me", response_model=UserSummary)
def me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return current_user


@router.post("/users", response_model=UserSummary, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Create an operator account (administrators only)."""
    user = create_account(get_credential_store(db), payload.username, payload.password, payload.role)
    logger.info(f"User {user.id} created by admin {admin.id}")
    return user


@router.post("/change-password", response_model=MessageResponse)
def update_password(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Change the current user's password."""
    change_password(get_credential_store(db), current_user, payload.current_password, payload.new_password)
    return {"success": True, "message": "Password changed successfully"}
