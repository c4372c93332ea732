"""
Auth gateway - bearer token check in front of every non-public route.
"""
import logging
from typing import Callable, Iterable, Optional

from fastapi import Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..core.security import TokenExpiredError, TokenMalformedError, TokenService
from ..exceptions import error_response, server_error_response
from .exceptions import (
    AuthenticationException,
    InvalidTokenException,
    NoTokenException,
    TokenExpiredException,
    UserNotFoundException,
)
from .models import User

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

PUBLIC_PATHS = frozenset({
    "/login",
    "/api/auth/login",
    "/api/auth/status",
    "/health",
})


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the token from an Authorization header value.

    Returns None unless the header starts with the exact "Bearer " prefix
    and carries a non-empty token after it.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class AuthGatewayMiddleware(BaseHTTPMiddleware):
    """
    Authenticates each request before it reaches a route handler.

    The token is verified, then the user it names is loaded from the store on
    every request so deletions and role changes apply to tokens already
    issued. The loaded user is attached as `request.state.user`.
    """

    def __init__(
        self,
        app: ASGIApp,
        tokens: TokenService,
        session_factory: Callable[[], Session],
        public_paths: Iterable[str] = PUBLIC_PATHS,
    ):
        super().__init__(app)
        self.tokens = tokens
        self.session_factory = session_factory
        self.public_paths = frozenset(public_paths)

    async def dispatch(self, request: Request, call_next):
        """
        Reject or authenticate the request, then hand it on.

        Args:
            request: The incoming request
            call_next: The next middleware or endpoint handler

        Returns:
            Response: 401 for credential problems, 500 if the store fails,
            otherwise the downstream response
        """
        if request.method == "OPTIONS" or request.url.path in self.public_paths:
            return await call_next(request)

        try:
            request.state.user = await self.authenticate(request)
        except AuthenticationException as exc:
            logger.warning(f"Rejected {request.method} {request.url.path}: {exc.reason}")
            return error_response(exc)
        except Exception:
            logger.exception(f"Authentication error on {request.method} {request.url.path}")
            return server_error_response()

        return await call_next(request)

    async def authenticate(self, request: Request) -> User:
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            raise NoTokenException()

        try:
            claims = self.tokens.verify(token)
        except TokenExpiredError:
            logger.info("Expired token presented")
            raise TokenExpiredException()
        except TokenMalformedError as e:
            logger.info(f"Malformed token presented: {e}")
            raise InvalidTokenException()

        user = await run_in_threadpool(self._load_user, claims.identity)
        if user is None:
            logger.warning(f"Token for missing user {claims.identity}")
            raise UserNotFoundException()
        return user

    def _load_user(self, user_id: int) -> Optional[User]:
        db = self.session_factory()
        try:
            user = db.get(User, user_id)
            if user is not None:
                db.expunge(user)
            return user
        finally:
            db.close()
