"""Simple in-memory rate limiter for login attempts."""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping

from app.core.config import get_settings
from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RateLimitResult:
    """Outcome of a rate limit check. ``reset_at`` is epoch milliseconds."""
    success: bool
    limit: int
    remaining: int
    reset_at: int

    def headers(self) -> Dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at),
        }


@dataclass
class _Window:
    count: int
    reset_at: int


class RateLimiter:
    """
    Fixed-window rate limiter.

    Tracks requests per key (e.g., client IP). Uses in-memory storage, so
    limits are per process - behind several workers each keeps its own count.
    """

    def __init__(
        self,
        max_requests: int,
        window_ms: int,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize rate limiter.

        Args:
            max_requests: Requests allowed per window
            window_ms: Window length in milliseconds
            clock: Seconds since epoch
        """
        self.max_requests = max_requests
        self.window_ms = window_ms
        self._clock = clock
        self._windows: Dict[str, _Window] = {}

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _prune(self, now: int) -> None:
        expired = [key for key, window in self._windows.items() if window.reset_at < now]
        for key in expired:
            del self._windows[key]

    def check_limit(self, key: str) -> RateLimitResult:
        """
        Count a request against ``key``.

        Args:
            key: Rate limit key (e.g., client IP)

        Returns:
            RateLimitResult; ``success`` is False once the window is used up
        """
        now = self._now_ms()
        self._prune(now)
        window = self._windows.get(key)

        if window is None:
            window = _Window(count=1, reset_at=now + self.window_ms)
            self._windows[key] = window
            return RateLimitResult(
                success=True,
                limit=self.max_requests,
                remaining=self.max_requests - 1,
                reset_at=window.reset_at,
            )

        if window.count >= self.max_requests:
            logger.warning(f"Rate limit exceeded for key: {key}")
            return RateLimitResult(
                success=False,
                limit=self.max_requests,
                remaining=0,
                reset_at=window.reset_at,
            )

        window.count += 1
        return RateLimitResult(
            success=True,
            limit=self.max_requests,
            remaining=self.max_requests - window.count,
            reset_at=window.reset_at,
        )


def get_client_ip(headers: Mapping[str, str]) -> str:
    """Client IP from proxy headers: first X-Forwarded-For hop, then X-Real-IP."""
    forwarded_for = headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip

    return "unknown"


_login_rate_limiter: RateLimiter | None = None


def get_login_rate_limiter() -> RateLimiter:
    """Process-wide limiter for login attempts, sized from settings."""
    global _login_rate_limiter
    if _login_rate_limiter is None:
        settings = get_settings()
        _login_rate_limiter = RateLimiter(
            max_requests=settings.LOGIN_RATE_LIMIT_MAX,
            window_ms=settings.LOGIN_RATE_LIMIT_WINDOW_SECONDS * 1000,
        )
    return _login_rate_limiter
