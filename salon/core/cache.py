"""
In-process response cache for read endpoints.

Read handlers are memoized by request path + query string for a fixed TTL.
Every successful write under a cached prefix flushes the whole cache:
invalidation is collection-wide, never per key.
"""
import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Iterable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

# Collections served through the cache. A 2xx write under any of them flushes
# every entry. Auth and schedule writes do not flush: no cached body reads those
# tables. A cached route that reads schedules needs "/api/schedules" added here.
CACHED_PREFIXES = ("/api/clients", "/api/procedures", "/api/appointments", "/api/stats")
WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass(frozen=True)
class CacheEntry:
    body: bytes
    media_type: Optional[str]
    created_at: float
    expires_at: float


class ResponseCache:
    """
    TTL cache of serialized response bodies.

    Construct one per application; tests build a fresh instance per case.
    """

    def __init__(self, ttl: int = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the live entry for key, or None on a miss."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expires_at <= now:
                del self._entries[key]
                entry = None
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
            return entry

    def set(self, key: str, body: bytes, ttl: Optional[int] = None, media_type: Optional[str] = None) -> None:
        now = self._clock()
        entry = CacheEntry(
            body=body,
            media_type=media_type,
            created_at=now,
            expires_at=now + (self.ttl if ttl is None else ttl),
        )
        with self._lock:
            self._entries[key] = entry

    def invalidate_all(self) -> int:
        """Drop every entry. Returns how many were dropped."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {"entries": len(self._entries), "hits": self.hits, "misses": self.misses}


def cache_key(request: Request) -> str:
    """Method-independent key: path plus query string."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class ResponseCacheMiddleware(BaseHTTPMiddleware):
    """
    Read-through caching for GETs under the cached prefixes and
    flush-on-write for any resource collection under those prefixes.

    Must sit inside the auth gateway so cached bodies are only served to
    authenticated requests.
    """

    def __init__(
        self,
        app: ASGIApp,
        cache: ResponseCache,
        cached_prefixes: Iterable[str] = CACHED_PREFIXES,
        ttl: Optional[int] = None,
    ):
        super().__init__(app)
        self.cache = cache
        self.cached_prefixes = tuple(cached_prefixes)
        self.ttl = ttl

    def _is_cached_path(self, path: str) -> bool:
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self.cached_prefixes)

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if request.method == "GET" and self._is_cached_path(path):
            return await self._read_through(request, call_next)

        response = await call_next(request)
        if request.method in WRITE_METHODS and self._is_cached_path(path) and 200 <= response.status_code < 300:
            dropped = self.cache.invalidate_all()
            logger.info(f"Cache invalidated after {request.method} {path} ({dropped} entries)")
        return response

    async def _read_through(self, request: Request, call_next):
        key = cache_key(request)
        entry = self.cache.get(key)
        if entry is not None:
            logger.info(f"Cache hit for {key}")
            return Response(
                content=entry.body,
                status_code=200,
                media_type=entry.media_type,
                headers={"X-Cache": "HIT"},
            )

        logger.info(f"Cache miss for {key}")
        response = await call_next(request)
        if response.status_code != 200:
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        self.cache.set(key, body, ttl=self.ttl, media_type=response.headers.get("content-type"))

        headers = dict(response.headers)
        headers.pop("content-length", None)
        headers["X-Cache"] = "MISS"
        return Response(content=body, status_code=response.status_code, headers=headers)
