"""Session, lockout and token collaborators.

These produce the trusted principal snapshots that access decisions run on.
"""

from .credentials import validate_login_input, validate_password_strength
from .lockout import LoginAttemptTracker
from .session import SessionInfo, SessionPolicy
from .tokens import create_access_token, decode_principal

__all__ = [
    "LoginAttemptTracker",
    "SessionInfo",
    "SessionPolicy",
    "create_access_token",
    "decode_principal",
    "validate_login_input",
    "validate_password_strength",
]
