"""
Core security utilities for password hashing and bearer tokens.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
import logging

from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenMalformedError(TokenError):
    """Token is structurally invalid or its signature does not match."""


class TokenExpiredError(TokenError):
    """Token signature is valid but its expiry has passed."""


@dataclass(frozen=True)
class TokenClaims:
    identity: int
    username: str
    role: str
    expires_at: datetime


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    Tokens are stateless: validity depends only on the signature and the
    `exp` claim. Resolving the user behind a token is the caller's job.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(hours=24)):
        if not secret:
            raise ValueError("A signing secret is required to issue tokens")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, identity: int, username: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a signed access token.

        Args:
            identity: User id, stored as the `sub` claim
            username: Login name, informational
            role: Role at issue time
            expires_delta: Optional custom lifetime

        Returns:
            str: Encoded JWT
        """
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(identity),
            "username": username,
            "role": role,
            "iat": now,
            "exp": now + (expires_delta or self.expires_delta),
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify and decode a token.

        Raises:
            TokenExpiredError: Signature is fine but the token is past `exp`
            TokenMalformedError: Anything else wrong with the token
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError(str(e)) from e
        except JWTError as e:
            raise TokenMalformedError(str(e)) from e

        try:
            return TokenClaims(
                identity=int(payload["sub"]),
                username=payload.get("username", ""),
                role=payload["role"],
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TokenMalformedError(f"Missing or invalid claim: {e}") from e


def build_token_service() -> TokenService:
    """TokenService configured from settings."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
