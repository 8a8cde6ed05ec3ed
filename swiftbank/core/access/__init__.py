"""Access control module for SwiftBank.

This module defines the capability model, role defaults, the static feature
and operation tables, and the access predicates evaluated against principal
snapshots.
"""

from .capabilities import Capability, Role, WILDCARD, KNOWN_CAPABILITIES
from .principal import Principal, owner_of
from .tables import AccessTables, DEFAULT_TABLES, load_access_tables
from .checker import (
    AccessControl,
    has_capability,
    is_role,
    has_elevated_access,
    can_access_feature,
    can_access_owned_resource,
    can_perform_operation,
    resolve_effective_capabilities,
    can_access_route,
    can_access_admin_panel,
    can_impersonate,
)

__all__ = [
    "Capability",
    "Role",
    "WILDCARD",
    "KNOWN_CAPABILITIES",
    "Principal",
    "owner_of",
    "AccessTables",
    "DEFAULT_TABLES",
    "load_access_tables",
    "AccessControl",
    "has_capability",
    "is_role",
    "has_elevated_access",
    "can_access_feature",
    "can_access_owned_resource",
    "can_perform_operation",
    "resolve_effective_capabilities",
    "can_access_route",
    "can_access_admin_panel",
    "can_impersonate",
]
