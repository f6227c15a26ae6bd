"""In-memory, per-IP rate limiters.

Two independent limiters live here:

- LoginRateLimiter locks an IP out after repeated failed admin logins.
- CommentRateLimiter caps how many comments an IP may submit per window.

Both keep their state in a process-local dict guarded by a lock, so one
instance must be shared by every request in the process (the DI container
provides them at APP scope). Expiry is lazy: entries are checked and purged
when read, there is no background sweep. Nothing survives a restart.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import logfire

from scribe.domain.value import AntiSpamResult, SpamReason

from .base import Service

Clock = Callable[[], float]


@dataclass
class _LoginAttempts:
    count: int
    first_attempt: float
    locked_at: Optional[float] = None


@dataclass
class _CommentWindow:
    count: int
    reset_at: float


class LoginRateLimiter(Service):
    """Brute-force lockout for the admin login.

    After ``max_attempts`` failures an IP is locked for ``lockout_seconds``.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize login limiter.

        Args:
            max_attempts: Failures that trigger a lockout
            lockout_seconds: Lockout duration
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self._clock = clock
        self._attempts: dict[str, _LoginAttempts] = {}
        self._lock = threading.Lock()

    def record_failed_attempt(self, ip: str) -> None:
        """Record a failed login from ``ip``, locking it at the threshold."""
        with self._lock:
            now = self._clock()
            entry = self._attempts.get(ip)
            if entry is None:
                entry = _LoginAttempts(count=0, first_attempt=now)
                self._attempts[ip] = entry

            entry.count += 1
            if entry.count >= self.max_attempts:
                entry.locked_at = now

        if entry.locked_at is not None:
            logfire.warn("Login locked out", ip_address=ip, attempts=entry.count)

    def is_rate_limited(self, ip: str) -> bool:
        """Return True while ``ip`` is inside an active lockout."""
        return self._remaining(ip) > 0

    def clear_attempts(self, ip: str) -> None:
        """Forget every failure recorded for ``ip`` (successful login)."""
        with self._lock:
            self._attempts.pop(ip, None)

    def get_remaining_lockout_time(self, ip: str) -> int:
        """Milliseconds left in the lockout of ``ip``; 0 when not locked."""
        return int(self._remaining(ip) * 1000)

    def reset(self) -> None:
        """Drop all tracked IPs."""
        with self._lock:
            self._attempts.clear()

    def _remaining(self, ip: str) -> float:
        with self._lock:
            entry = self._attempts.get(ip)
            if entry is None or entry.locked_at is None:
                return 0.0

            remaining = self.lockout_seconds - (self._clock() - entry.locked_at)
            if remaining <= 0:
                # Lockout served; start over from a clean slate
                del self._attempts[ip]
                return 0.0
            return remaining


class CommentRateLimiter(Service):
    """Fixed-window flood control for public comment submissions."""

    def __init__(
        self,
        max_requests: int = 3,
        window_seconds: float = 60,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize comment limiter.

        Args:
            max_requests: Accepted submissions per window
            window_seconds: Window length
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _CommentWindow] = {}
        self._lock = threading.Lock()

    def check_rate_limit(self, ip: str) -> AntiSpamResult:
        """Count a submission from ``ip`` and decide whether it may proceed.

        The first call of a new or expired window always passes. Once the
        window is full, further calls are rejected without being counted.
        """
        with self._lock:
            now = self._clock()
            window = self._windows.get(ip)

            if window is None or now >= window.reset_at:
                self._windows[ip] = _CommentWindow(
                    count=1, reset_at=now + self.window_seconds
                )
                return AntiSpamResult.ok()

            if window.count < self.max_requests:
                window.count += 1
                return AntiSpamResult.ok()

        return AntiSpamResult.reject(SpamReason.RATE_LIMIT)

    def reset_rate_limiter(self) -> None:
        """Drop all tracked IPs."""
        with self._lock:
            self._windows.clear()
