"""Access decisions for SwiftBank.

Every predicate here is total and side-effect free. Missing principals,
unknown tokens, unknown feature or operation names all resolve to False;
nothing is raised and nothing is logged. Callers decide what a False means
for them (hide a menu entry, reject a request).
"""

from typing import Any, FrozenSet, Iterable, Mapping, Optional, Union

from .capabilities import (
    Capability,
    ELEVATED_ROLES,
    KNOWN_CAPABILITIES,
    Role,
    WILDCARD,
    is_known_capability,
    normalize_token,
)
from .principal import Principal, owner_of
from .roles import get_role_level
from .tables import AccessTables, DEFAULT_TABLES


Token = Union[str, Capability]

# Context keys naming a target principal id
TARGET_USER_KEYS = ("target_user_id", "targetUserId")

# Context keys naming a resource whose owner must match
TARGET_RESOURCE_KEYS = ("resource", "transaction", "account")


class AccessControl:
    """Evaluates access predicates against a fixed pair of tables."""

    def __init__(self, tables: AccessTables = DEFAULT_TABLES):
        self.tables = tables

    def has_capability(self, principal: Optional[Principal], token: Token) -> bool:
        """Check if an active principal holds a known capability.

        The wildcard grant covers every known token. The wildcard itself is
        not a capability and is never granted by this check.
        """
        if principal is None or not principal.is_active:
            return False
        if not is_known_capability(token):
            return False
        if principal.has_wildcard:
            return True
        return normalize_token(token) in principal.capabilities

    def has_any_capability(self, principal: Optional[Principal], tokens: Iterable[Token]) -> bool:
        """Check if the principal holds at least one of the given tokens."""
        return any(self.has_capability(principal, t) for t in tokens)

    def is_role(self, principal: Optional[Principal], role: Union[str, Role]) -> bool:
        """Exact match against the principal's role."""
        if principal is None or principal.role is None:
            return False
        expected = Role.parse(role)
        return expected is not None and principal.role is expected

    def has_elevated_access(self, principal: Optional[Principal]) -> bool:
        """Coarse staff check for UI gating.

        Not a substitute for a capability check on a sensitive operation.
        """
        if principal is None:
            return False
        return principal.role in ELEVATED_ROLES

    def can_access_feature(self, principal: Optional[Principal], feature: str) -> bool:
        """A feature is visible when any one of its tokens is held."""
        required = self.tables.features.get(feature) if isinstance(feature, str) else None
        if not required:
            return False
        return self.has_any_capability(principal, required)

    def can_access_owned_resource(self, principal: Optional[Principal], resource: Any) -> bool:
        """Row-level check: staff see every row, others only their own."""
        if principal is None:
            return False
        if self.has_elevated_access(principal):
            return True
        owner = owner_of(resource)
        return owner is not None and bool(principal.id) and owner == principal.id

    def can_access_user_data(self, principal: Optional[Principal], target_user_id: Any) -> bool:
        """Ownership check where the target is a principal id."""
        if principal is None:
            return False
        if self.has_elevated_access(principal):
            return True
        return bool(principal.id) and principal.id == str(target_user_id)

    def can_perform_operation(
        self,
        principal: Optional[Principal],
        operation: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Capability gate AND ownership gate.

        The principal must hold one of the operation's tokens. When the
        context names a target user or a target resource, the principal must
        also be allowed onto that particular row.
        """
        required = self.tables.operations.get(operation) if isinstance(operation, str) else None
        if not required:
            return False
        if not self.has_any_capability(principal, required):
            return False

        if context is None:
            context = {}
        elif not isinstance(context, Mapping):
            return False
        for key in TARGET_USER_KEYS:
            target = context.get(key)
            if target not in (None, "") and not self.can_access_user_data(principal, target):
                return False
        for key in TARGET_RESOURCE_KEYS:
            target = context.get(key)
            if target is not None and not self.can_access_owned_resource(principal, target):
                return False
        return True

    def resolve_effective_capabilities(self, principal: Optional[Principal]) -> FrozenSet[str]:
        """Capabilities for display and audit.

        Decisions go through has_capability, not through this set.
        """
        if principal is None:
            return frozenset()
        if principal.has_wildcard:
            return KNOWN_CAPABILITIES
        return frozenset(principal.capabilities)

    def can_access_route(self, principal: Optional[Principal], required: Iterable[Token] = ()) -> bool:
        """Route guard: any authenticated principal when nothing is required."""
        if principal is None:
            return False
        required = list(required)
        if not required:
            return True
        return self.has_any_capability(principal, required)

    def can_access_admin_panel(self, principal: Optional[Principal]) -> bool:
        return self.has_capability(principal, Capability.ADMIN_PANEL) or self.has_elevated_access(principal)

    def can_impersonate(self, principal: Optional[Principal], target: Optional[Principal]) -> bool:
        """Admins may act as non-admin principals.

        The target must be a Principal snapshot; raw records are refused.
        """
        if not isinstance(target, Principal) or not self.is_role(principal, Role.ADMIN):
            return False
        return target.role is not Role.ADMIN

    def get_role_level(self, principal: Optional[Principal]) -> int:
        if principal is None:
            return 0
        return get_role_level(principal.role)


_default = AccessControl()


def has_capability(principal: Optional[Principal], token: Token) -> bool:
    return _default.has_capability(principal, token)


def is_role(principal: Optional[Principal], role: Union[str, Role]) -> bool:
    return _default.is_role(principal, role)


def has_elevated_access(principal: Optional[Principal]) -> bool:
    return _default.has_elevated_access(principal)


def can_access_feature(principal: Optional[Principal], feature: str) -> bool:
    return _default.can_access_feature(principal, feature)


def can_access_owned_resource(principal: Optional[Principal], resource: Any) -> bool:
    return _default.can_access_owned_resource(principal, resource)


def can_perform_operation(
    principal: Optional[Principal],
    operation: str,
    context: Optional[Mapping[str, Any]] = None,
) -> bool:
    return _default.can_perform_operation(principal, operation, context)


def resolve_effective_capabilities(principal: Optional[Principal]) -> FrozenSet[str]:
    return _default.resolve_effective_capabilities(principal)


def can_access_route(principal: Optional[Principal], required: Iterable[Token] = ()) -> bool:
    return _default.can_access_route(principal, required)


def can_access_admin_panel(principal: Optional[Principal]) -> bool:
    return _default.can_access_admin_panel(principal)


def can_impersonate(principal: Optional[Principal], target: Optional[Principal]) -> bool:
    return _default.can_impersonate(principal, target)
