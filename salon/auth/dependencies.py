"""
FastAPI dependencies for authentication and authorization.
"""
from typing import List

from fastapi import Depends, Request

from .exceptions import NoTokenException, PermissionDeniedException
from .models import User, UserRole


def get_current_user(request: Request) -> User:
    """
    Get the user the auth gateway resolved for this request.

    Raises:
        NoTokenException: If the route was reached without authentication
    """
    user = getattr(request.state, "user", None)
    if user is None:
        raise NoTokenException()
    return user


def get_token_service(request: Request):
    """Token issuer shared by the application."""
    return request.app.state.token_service


def require_roles(allowed_roles: List[UserRole]):
    """
    Dependency factory to require specific roles.

    Args:
        allowed_roles: List of roles that are allowed access

    Returns:
        Function that checks if user has required role
    """
    def role_checker(current_user: User = Depends(get_current_user)):
        if current_user.role not in allowed_roles:
            raise PermissionDeniedException(
                f"Access denied. Required roles: {[role.value for role in allowed_roles]}. "
                f"Your role: {current_user.role.value}"
            )
        return current_user
    return role_checker


require_admin = require_roles([UserRole.ADMIN])
