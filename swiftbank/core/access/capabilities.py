"""Capability and role model for SwiftBank access control.

Defines the closed universe of capability tokens, the wildcard sentinel,
and the role enumeration.

Capability string format: "<area>_<action>"
Examples:
  - account_view
  - transaction_approve
  - user_edit
  - admin_panel
"""

from enum import Enum
from typing import FrozenSet, Optional


class Capability(str, Enum):
    """Tokens naming a single permitted operation class."""

    # User administration
    USER_VIEW = "user_view"
    USER_EDIT = "user_edit"
    USER_CREATE = "user_create"
    USER_DELETE = "user_delete"

    # Transactions
    TRANSACTION_VIEW = "transaction_view"
    TRANSACTION_CREATE = "transaction_create"
    TRANSACTION_APPROVE = "transaction_approve"
    TRANSACTION_REJECT = "transaction_reject"

    # Site content (messages, banners)
    CONTENT_VIEW = "content_view"
    CONTENT_EDIT = "content_edit"
    CONTENT_CREATE = "content_create"
    CONTENT_DELETE = "content_delete"

    # System administration
    SETTINGS_VIEW = "settings_view"
    SETTINGS_EDIT = "settings_edit"
    SECURITY_VIEW = "security_view"
    SECURITY_EDIT = "security_edit"
    ADMIN_PANEL = "admin_panel"

    # Customer self-service
    PROFILE_VIEW = "profile_view"
    PROFILE_EDIT = "profile_edit"
    ACCOUNT_VIEW = "account_view"
    NOTIFICATIONS_VIEW = "notifications_view"


class _Wildcard(str):
    """Distinguished token granting every capability."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "WILDCARD"


WILDCARD = _Wildcard("*")


class Role(str, Enum):
    """Coarse principal classification."""

    ADMIN = "admin"
    MANAGER = "manager"
    SUPPORT = "support"
    CUSTOMER = "customer"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Map a stored role value to a Role, or None when unrecognized."""
        if isinstance(value, Role):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Roles allowed through coarse UI gating
ELEVATED_ROLES: FrozenSet[Role] = frozenset([Role.ADMIN, Role.MANAGER, Role.SUPPORT])

# Display ordering only, never consulted for allow/deny
ROLE_LEVELS = {
    Role.ADMIN: 100,
    Role.MANAGER: 75,
    Role.SUPPORT: 50,
    Role.CUSTOMER: 25,
}

# All known tokens as plain strings
KNOWN_CAPABILITIES: FrozenSet[str] = frozenset(c.value for c in Capability)


def is_wildcard(token) -> bool:
    """Check if a token is the wildcard sentinel."""
    return isinstance(token, str) and token == WILDCARD


def is_known_capability(token) -> bool:
    """Check if a token names a capability in the known universe."""
    if isinstance(token, Capability):
        return True
    return isinstance(token, str) and token in KNOWN_CAPABILITIES


def normalize_token(token) -> Optional[str]:
    """Return the plain string form of a token, or None for non-strings."""
    if isinstance(token, Capability):
        return token.value
    if isinstance(token, str):
        return str(token)
    return None


def get_all_capabilities() -> list[str]:
    """Get all known capability strings."""
    return [c.value for c in Capability]
