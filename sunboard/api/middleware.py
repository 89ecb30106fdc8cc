"""API security middleware."""

import logging
import secrets
import time
from collections import defaultdict, deque

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from sunboard.utils.config import get_settings

logger = logging.getLogger("sunboard.api.middleware")

# Paths that don't require authentication
PUBLIC_PATHS = {
    "/",
    "/health",
    "/api/docs",
    "/api/redoc",
    "/openapi.json",
}


def _is_public(path: str) -> bool:
    path = path.rstrip("/")
    return path == "" or path in PUBLIC_PATHS


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require an API key for all non-public endpoints.

    Enabled when SUNBOARD_API_KEY is set; otherwise (local development)
    every request is allowed.

    Clients pass the key via:
    - Header: Authorization: Bearer <key>
    - Header: X-API-Key: <key>
    """

    def __init__(self, app, api_key: str | None = None):
        super().__init__(app)
        self._api_key = get_settings().security.api_key if api_key is None else api_key

    async def dispatch(self, request: Request, call_next):
        if not self._api_key or _is_public(request.url.path):
            return await call_next(request)

        auth_header = request.headers.get("authorization", "")
        api_key_header = request.headers.get("x-api-key", "")

        provided_key = ""
        if auth_header.startswith("Bearer "):
            provided_key = auth_header[7:]
        elif api_key_header:
            provided_key = api_key_header

        if not provided_key or not secrets.compare_digest(provided_key, self._api_key):
            logger.warning(
                "Unauthorized request to %s from %s",
                request.url.path,
                request.client.host if request.client else "unknown",
            )
            return JSONResponse(
                status_code=401,
                content={"detail": "Invalid or missing API key"},
            )

        return await call_next(request)


# Review writes get the stricter limit
_STRICT_PREFIXES = (
    "/api/v1/reviews/feedback",
    "/api/v1/reviews/comments",
)
_WINDOW_SECONDS = 60


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory sliding window rate limiter by client IP.

    Limits come from RATE_LIMIT_DEFAULT and RATE_LIMIT_STRICT (requests per
    minute); the strict limit applies to review write endpoints.
    """

    def __init__(self, app, default_limit: int | None = None, strict_limit: int | None = None):
        super().__init__(app)
        security = get_settings().security
        self._default_limit = default_limit or security.rate_limit_default
        self._strict_limit = strict_limit or security.rate_limit_strict
        self._windows: dict[str, deque] = defaultdict(deque)

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _is_strict(self, request: Request) -> bool:
        return request.method != "GET" and request.url.path.startswith(_STRICT_PREFIXES)

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if _is_public(path):
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        strict = self._is_strict(request)
        limit = self._strict_limit if strict else self._default_limit
        now = time.monotonic()

        # Strict and default traffic are counted separately
        window = self._windows[f"{client_ip}:{'strict' if strict else 'default'}"]

        cutoff = now - _WINDOW_SECONDS
        while window and window[0] < cutoff:
            window.popleft()

        if len(window) >= limit:
            retry_after = int(window[0] - cutoff) + 1
            logger.warning(
                "Rate limit exceeded for %s on %s (%d/%d)",
                client_ip, path, len(window), limit,
            )
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests"},
                headers={"Retry-After": str(retry_after)},
            )

        window.append(now)
        return await call_next(request)
