"""
Authentication-specific exceptions.
"""
from fastapi import status

from ..exceptions import AppException


class AuthenticationException(AppException):
    """Base class for authentication exceptions."""
    status_code = status.HTTP_401_UNAUTHORIZED
    reason = "unauthorized"

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail)


class NoTokenException(AuthenticationException):
    """Exception raised when the request carries no bearer token."""
    reason = "no token provided"

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail)


class InvalidTokenException(AuthenticationException):
    """Exception raised when token is malformed or its signature does not match."""
    reason = "invalid token"

    def __init__(self, detail: str = "Invalid authentication token"):
        super().__init__(detail)


class TokenExpiredException(AuthenticationException):
    """Exception raised when token has expired."""
    reason = "token expired"

    def __init__(self, detail: str = "Your session has expired, please login again"):
        super().__init__(detail)


class UserNotFoundException(AuthenticationException):
    """Exception raised when a valid token names a user that no longer exists."""
    reason = "user not found"

    def __init__(self, detail: str = "User not found"):
        super().__init__(detail)


class InvalidCredentialsException(AuthenticationException):
    """Exception raised when credentials are invalid."""
    reason = "invalid credentials"

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


class AccountLockedException(AuthenticationException):
    """Exception raised when account is locked."""
    reason = "account locked"

    def __init__(self, minutes_remaining: int):
        self.minutes_remaining = minutes_remaining
        super().__init__(f"Account is temporarily locked. Try again in {minutes_remaining} minutes.")

    def extra(self):
        return {"minutes_remaining": self.minutes_remaining}


class PermissionDeniedException(AppException):
    """Exception raised when user doesn't have required role."""
    status_code = status.HTTP_403_FORBIDDEN
    reason = "forbidden"

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(detail)


class UsernameTakenException(AppException):
    """Exception raised when a username is already registered."""
    status_code = status.HTTP_400_BAD_REQUEST
    reason = "username taken"

    def __init__(self, detail: str = "Username already registered"):
        super().__init__(detail)
