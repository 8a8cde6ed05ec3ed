"""Default role definitions for SwiftBank.

Defines the 4 standard roles with their default capability sets:
1. Admin - Full access via the wildcard token
2. Manager - User and transaction oversight, settings read access
3. Support - Customer assistance, read-mostly
4. Customer - Self-service on own accounts and profile
"""

from typing import Dict, List, Optional

from .capabilities import Capability, Role, ROLE_LEVELS, WILDCARD


def _build_capabilities(*caps: Capability) -> List[str]:
    """Build capability strings from Capability members."""
    return [c.value for c in caps]


# Admin: Full access to everything
ADMIN_CAPABILITIES = [WILDCARD]

# Manager: Oversees users and transactions, cannot change security settings
MANAGER_CAPABILITIES = _build_capabilities(
    Capability.ADMIN_PANEL,
    Capability.USER_VIEW,
    Capability.USER_EDIT,
    Capability.USER_CREATE,
    Capability.TRANSACTION_VIEW,
    Capability.TRANSACTION_CREATE,
    Capability.TRANSACTION_APPROVE,
    Capability.TRANSACTION_REJECT,
    Capability.CONTENT_VIEW,
    Capability.CONTENT_EDIT,
    Capability.CONTENT_CREATE,
    Capability.SETTINGS_VIEW,
    Capability.SECURITY_VIEW,
    Capability.NOTIFICATIONS_VIEW,
)

# Support: Looks up customers and their activity
SUPPORT_CAPABILITIES = _build_capabilities(
    Capability.ADMIN_PANEL,
    Capability.USER_VIEW,
    Capability.TRANSACTION_VIEW,
    Capability.CONTENT_VIEW,
    Capability.PROFILE_VIEW,
    Capability.NOTIFICATIONS_VIEW,
)

# Customer: Own accounts, transfers and profile
CUSTOMER_CAPABILITIES = _build_capabilities(
    Capability.ACCOUNT_VIEW,
    Capability.TRANSACTION_VIEW,
    Capability.TRANSACTION_CREATE,
    Capability.PROFILE_VIEW,
    Capability.PROFILE_EDIT,
    Capability.NOTIFICATIONS_VIEW,
)


# Default roles configuration
DEFAULT_ROLES: Dict[Role, List[str]] = {
    Role.ADMIN: ADMIN_CAPABILITIES,
    Role.MANAGER: MANAGER_CAPABILITIES,
    Role.SUPPORT: SUPPORT_CAPABILITIES,
    Role.CUSTOMER: CUSTOMER_CAPABILITIES,
}


def get_default_role_capabilities(role) -> List[str]:
    """Get the default capability list for a role.

    Raises:
        ValueError: If the role is not one of the standard roles
    """
    parsed = Role.parse(role)
    if parsed is None:
        raise ValueError(f"Unknown default role: {role}")
    return list(DEFAULT_ROLES[parsed])


def get_role_level(role: Optional[Role]) -> int:
    """Hierarchy level used for display ordering; 0 when unknown."""
    if role is None:
        return 0
    return ROLE_LEVELS.get(role, 0)
