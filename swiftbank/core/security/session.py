"""Session expiry and recent-authentication policy."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionInfo:
    """A login session as seen by the policy."""
    principal_id: str
    login_time: datetime
    last_activity: datetime
    is_active: bool = True


@dataclass
class ValidationResult:
    valid: bool
    reason: Optional[str] = None


class SessionPolicy:
    """Wall-clock rules deciding whether a session may still be trusted.

    A session expires when either its age or its idle time exceeds the
    session duration. Sensitive operations additionally require a login
    within the reauthentication window.
    """

    def __init__(
        self,
        session_duration: timedelta = timedelta(minutes=30),
        reauth_window: timedelta = timedelta(minutes=15),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.session_duration = session_duration
        self.reauth_window = reauth_window
        self._clock = clock

    @classmethod
    def from_settings(cls, settings) -> "SessionPolicy":
        return cls(
            session_duration=timedelta(minutes=settings.session_duration_minutes),
            reauth_window=timedelta(minutes=settings.reauth_window_minutes),
        )

    def start(self, principal_id: str) -> SessionInfo:
        now = self._clock()
        return SessionInfo(principal_id=principal_id, login_time=now, last_activity=now)

    def touch(self, session: SessionInfo) -> SessionInfo:
        """Return a copy of the session with its activity time refreshed."""
        return replace(session, last_activity=self._clock())

    def is_expired(self, session: SessionInfo) -> bool:
        now = self._clock()
        age = now - session.login_time
        idle = now - session.last_activity
        return age > self.session_duration or idle > self.session_duration

    def validate(self, session: Optional[SessionInfo]) -> ValidationResult:
        if session is None or not session.is_active:
            return ValidationResult(valid=False, reason="Invalid or expired session")
        if self.is_expired(session):
            return ValidationResult(valid=False, reason="Session expired")
        return ValidationResult(valid=True)

    def validate_high_security(self, session: Optional[SessionInfo]) -> ValidationResult:
        result = self.validate(session)
        if not result.valid:
            return result
        if self._clock() - session.login_time > self.reauth_window:
            return ValidationResult(
                valid=False,
                reason="Recent authentication required for this operation",
            )
        return ValidationResult(valid=True)
