"""
Rate Limit Middleware Module

Implements per-client request limiting for the document endpoints.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT = "500/minute"

# Paths never counted against the limit
EXCLUDED_PATHS = ("/health", "/docs", "/openapi.json", "/redoc", "/favicon.ico")

# Idle clients are dropped every this many limited requests
CLEANUP_EVERY = 1000


def parse_rate_limit(limit: str) -> tuple[int, int]:
    """
    Parse rate limit string to requests count and window seconds.

    Args:
        limit: Rate limit string like "500/minute", "20/hour", etc.

    Returns:
        Tuple of (requests_count, window_seconds)

    Raises:
        ValueError: If rate limit format is invalid
    """
    parts = limit.lower().split("/")
    if len(parts) != 2:
        raise ValueError(f"Invalid rate limit format: {limit}")

    try:
        count = int(parts[0])
    except ValueError as exc:
        raise ValueError(f"Invalid request count in rate limit: {limit}") from exc

    unit = parts[1]
    unit_multipliers = {
        "second": 1,
        "seconds": 1,
        "minute": 60,
        "minutes": 60,
        "hour": 3600,
        "hours": 3600,
        "day": 86400,
        "days": 86400,
    }

    if unit not in unit_multipliers:
        raise ValueError(f"Unknown time unit in rate limit: {unit}")

    return count, unit_multipliers[unit]


class InMemoryRateLimiter:
    """
    In-memory rate limiter using sliding window algorithm.

    Counts are per process; several workers each enforce their own window.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        # Structure: {key: [timestamp, ...]}
        self._requests: dict[str, list[float]] = {}

    def is_allowed(self, key: str, max_requests: int, window_seconds: int) -> tuple[bool, int, int]:
        """
        Check if request is allowed under rate limit.

        Args:
            key: Unique client identifier
            max_requests: Maximum requests allowed in window
            window_seconds: Time window in seconds

        Returns:
            Tuple of (is_allowed, remaining_requests, retry_after_seconds)
        """
        current_time = self._clock()
        window_start = current_time - window_seconds

        # Drop entries outside the window
        timestamps = [ts for ts in self._requests.get(key, []) if ts > window_start]
        self._requests[key] = timestamps

        if len(timestamps) >= max_requests:
            oldest = min(timestamps) if timestamps else current_time
            retry_after = int(oldest + window_seconds - current_time) + 1
            return False, 0, max(1, retry_after)

        timestamps.append(current_time)
        return True, max_requests - len(timestamps), 0

    def cleanup_expired(self, max_age_seconds: int = 3600) -> None:
        """Remove clients idle for longer than max_age_seconds."""
        cutoff = self._clock() - max_age_seconds
        self._requests = {
            k: v for k, v in self._requests.items()
            if v and max(v) > cutoff
        }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rate Limit Middleware

    Limits requests per client IP address. The client address is taken from
    X-Forwarded-For, then X-Real-IP, then the peer address.
    """

    def __init__(self, app: ASGIApp, enabled: bool = True, limit: str = DEFAULT_RATE_LIMIT) -> None:
        super().__init__(app)
        self.enabled = enabled
        self.limit = limit
        self._limiter = InMemoryRateLimiter()
        self._request_count = 0
        self._max_requests, self._window_seconds = parse_rate_limit(limit)

        logger.info(f"Rate limit middleware initialized: enabled={self.enabled}, limit={self.limit}")

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request."""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            # Take the first IP (original client)
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()

        if request.client:
            return request.client.host

        return "unknown"

    def _is_excluded_path(self, path: str) -> bool:
        return any(path == prefix or path.startswith(prefix + "/") for prefix in EXCLUDED_PATHS)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request through rate limiter."""
        if not self.enabled or self._is_excluded_path(request.url.path):
            return await call_next(request)

        self._request_count += 1
        if self._request_count % CLEANUP_EVERY == 0:
            self._limiter.cleanup_expired(max_age_seconds=self._window_seconds)

        key = f"ip:{self._get_client_ip(request)}"
        is_allowed, remaining, retry_after = self._limiter.is_allowed(
            key, self._max_requests, self._window_seconds
        )

        if not is_allowed:
            logger.warning(
                f"Rate limit exceeded: key={key}, path={request.url.path}, "
                f"limit={self._max_requests}/{self._window_seconds}s"
            )
            return JSONResponse(
                status_code=429,
                content={"message": "Rate limit exceeded. Please try again later."},
                headers={
                    "X-RateLimit-Limit": str(self._max_requests),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(retry_after),
                    "Retry-After": str(retry_after),
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self._max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(self._window_seconds)

        return response
