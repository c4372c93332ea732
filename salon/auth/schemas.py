"""
Auth Schemas - Pydantic models for login requests and token responses.
"""
from typing import Optional
from pydantic import BaseModel, Field
from .models import UserRole


class UserLogin(BaseModel):
    """
    User Login Schema - Used for authentication

    Both fields are optional at the schema level so that a missing value
    produces the login-specific 400 message instead of a generic one.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class RefreshRequest(BaseModel):
    """Body of /refresh-token; `remember` asks for the long-lived variant."""
    remember: bool = False


class UserSummary(BaseModel):
    """Public view of a user"""
    username: str
    role: UserRole

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: UserSummary


class TokenResponse(BaseModel):
    success: bool = True
    token: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class AuthStatusResponse(BaseModel):
    authenticated: bool


class UserCreate(BaseModel):
    """Admin-created operator account"""
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.USER


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)
