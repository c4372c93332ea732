"""
Custom middleware for the FastAPI application.
"""
import time
import logging
from collections import defaultdict, deque
from threading import Lock
from typing import Callable, Deque, Dict, Iterable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import uuid

from ..auth.gateway import AuthGatewayMiddleware
from ..config import settings
from ..exceptions import RateLimitException, error_response
from .cache import ResponseCacheMiddleware

# Set up logging
logger = logging.getLogger(__name__)

LOGIN_PATHS = ("/login", "/api/auth/login")
REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request with its outcome and duration.

    A caller-supplied X-Request-ID is reused so log lines can be matched
    with the frontend; otherwise a new id is generated. Both the id and the
    elapsed time are returned as response headers.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        client_host = request.client.host if request.client else "unknown"
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed = time.perf_counter() - started
            logger.exception(
                f"[{request_id}] {request.method} {request.url.path} from {client_host} "
                f"failed after {elapsed:.4f}s"
            )
            raise

        elapsed = time.perf_counter() - started
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.6f}"

        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            f"[{request_id}] {request.method} {request.url.path} from {client_host} "
            f"-> {response.status_code} in {elapsed:.4f}s"
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding-window rate limiting per client IP.

    Only requests to the configured paths are counted; everything else passes
    straight through. State is in memory and per process.
    """
    def __init__(
        self,
        app: ASGIApp,
        rate_limit: int = 10,
        window_seconds: int = 15 * 60,
        paths: Iterable[str] = LOGIN_PATHS,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.rate_limit = rate_limit
        self.window_seconds = window_seconds
        self.paths = frozenset(paths)
        self._clock = clock
        self.requests: Dict[str, Deque[float]] = defaultdict(deque)  # IP -> timestamps
        self._lock = Lock()

    def allow(self, client_ip: str) -> bool:
        """Record a request from client_ip; False once the window is full."""
        now = self._clock()
        with self._lock:
            timestamps = self.requests[client_ip]
            while timestamps and now - timestamps[0] >= self.window_seconds:
                timestamps.popleft()
            if len(timestamps) >= self.rate_limit:
                return False
            timestamps.append(now)
            return True

    async def dispatch(self, request: Request, call_next):
        """
        Process the request with rate limiting.

        Args:
            request: The incoming request
            call_next: The next middleware or endpoint handler

        Returns:
            Response: The response from the next handler or a 429 response
        """
        if request.url.path not in self.paths:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        if not self.allow(client_ip):
            logger.warning(f"Rate limit exceeded for IP: {client_ip} on {request.url.path}")
            return error_response(RateLimitException())

        return await call_next(request)


def setup_middlewares(app, tokens, session_factory, cache):
    """
    Configure all middlewares for the application.

    Starlette wraps the most recently added middleware around the others, so
    they are added innermost first. Request order is: logging, login rate
    limit, auth gateway, response cache, routes.

    Args:
        app: FastAPI application instance
        tokens: TokenService used by the auth gateway
        session_factory: Session factory the gateway loads users with
        cache: ResponseCache shared with the cache middleware
    """
    app.add_middleware(ResponseCacheMiddleware, cache=cache)
    app.add_middleware(AuthGatewayMiddleware, tokens=tokens, session_factory=session_factory)
    app.add_middleware(
        RateLimitMiddleware,
        rate_limit=settings.login_rate_limit,
        window_seconds=settings.login_rate_window_seconds,
    )
    app.add_middleware(RequestLoggingMiddleware)
