"""Failed-login tracking and temporary account lockout.

Counters and locks are kept in Redis and expire after the lockout duration.
"""

import hashlib
import logging
import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import redis

logger = logging.getLogger(__name__)


@dataclass
class LoginAttemptResult:
    """Outcome of recording a failed login."""
    is_locked: bool
    attempts_remaining: int
    error: str


@dataclass
class LoginPermission:
    """Whether a login may be attempted right now."""
    allowed: bool
    remaining_minutes: int = 0
    error: Optional[str] = None


class LoginAttemptTracker:
    """
    Counts failed logins per identifier and locks the identifier once the
    limit is reached.

    Both the counter and the lock carry a Redis expiry of the lockout
    duration, so a lock lifts by itself and an abandoned counter is
    forgotten. A successful login clears both.
    """

    def __init__(
        self,
        client: redis.Redis,
        max_attempts: int = 3,
        lockout_duration: timedelta = timedelta(minutes=15),
        key_prefix: str = "lockout",
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if lockout_duration.total_seconds() < 1:
            raise ValueError("lockout_duration must be at least one second")
        self.client = client
        self.max_attempts = max_attempts
        self.lockout_duration = lockout_duration
        self.key_prefix = key_prefix

    @classmethod
    def from_settings(cls, settings, client: Optional[redis.Redis] = None) -> "LoginAttemptTracker":
        if client is None:
            client = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
        return cls(
            client,
            max_attempts=settings.max_login_attempts,
            lockout_duration=timedelta(minutes=settings.lockout_duration_minutes),
        )

    @property
    def _ttl_seconds(self) -> int:
        return int(self.lockout_duration.total_seconds())

    def _get_key(self, identifier: str, kind: str) -> str:
        # Hash the identifier so usernames never appear in Redis
        hashed = hashlib.sha256(identifier.encode()).hexdigest()[:16]
        return f"{self.key_prefix}:{kind}:{hashed}"

    def is_locked(self, identifier: str) -> bool:
        return bool(self.client.exists(self._get_key(identifier, "locked")))

    def attempts(self, identifier: str) -> int:
        value = self.client.get(self._get_key(identifier, "attempts"))
        return int(value) if value is not None else 0

    def record_failure(self, identifier: str) -> LoginAttemptResult:
        """Record a failed login and lock the identifier at the limit."""
        if self.is_locked(identifier):
            return LoginAttemptResult(
                is_locked=True,
                attempts_remaining=0,
                error="Account temporarily locked.",
            )

        counter_key = self._get_key(identifier, "attempts")
        with self.client.pipeline(transaction=True) as pipe:
            pipe.incr(counter_key)
            pipe.expire(counter_key, self._ttl_seconds)
            results = pipe.execute()
        attempts = int(results[0])

        if attempts >= self.max_attempts:
            with self.client.pipeline(transaction=True) as pipe:
                pipe.set(self._get_key(identifier, "locked"), attempts, ex=self._ttl_seconds)
                pipe.delete(counter_key)
                pipe.execute()
            logger.warning("login locked after %d failed attempts", attempts)
            minutes = self._ttl_seconds // 60
            return LoginAttemptResult(
                is_locked=True,
                attempts_remaining=0,
                error=f"Too many failed attempts. Account locked for {minutes} minutes.",
            )

        remaining = self.max_attempts - attempts
        return LoginAttemptResult(
            is_locked=False,
            attempts_remaining=remaining,
            error=f"Invalid credentials. {remaining} attempts remaining.",
        )

    def record_success(self, identifier: str) -> None:
        self.client.delete(
            self._get_key(identifier, "attempts"),
            self._get_key(identifier, "locked"),
        )

    def clear(self, identifier: str) -> None:
        """Lift a lock early (administrative unlock)."""
        self.record_success(identifier)

    def can_attempt(self, identifier: str) -> LoginPermission:
        """
        Check whether a login may be attempted.

        A Redis failure denies the attempt; lockout state that cannot be
        read is treated as locked.
        """
        try:
            ttl = self.client.ttl(self._get_key(identifier, "locked"))
        except redis.RedisError as exc:
            logger.error("lockout state unavailable: %s", exc)
            return LoginPermission(
                allowed=False,
                error="Login temporarily unavailable. Please try again later.",
            )

        # -2: no lock. -1: lock without expiry, report the full duration.
        if ttl == -2:
            return LoginPermission(allowed=True)
        if ttl < 0:
            ttl = self._ttl_seconds
        minutes = max(1, math.ceil(ttl / 60))
        return LoginPermission(
            allowed=False,
            remaining_minutes=minutes,
            error=f"Account temporarily locked. Try again in {minutes} minutes.",
        )
