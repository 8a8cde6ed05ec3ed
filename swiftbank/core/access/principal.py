"""Principal snapshots and resource ownership lookup."""

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping, Optional, Tuple

from .capabilities import Role, WILDCARD, is_wildcard, normalize_token


# Field names under which user documents and resources record their owner
OWNER_FIELDS = ("owner_id", "ownerId", "user_id", "userId")


@dataclass(frozen=True)
class Principal:
    """Immutable snapshot of an authenticated actor.

    The snapshot is built fresh by the authentication layer for each decision;
    access predicates only read it.
    """

    id: str
    role: Optional[Role] = None
    capabilities: FrozenSet[str] = field(default_factory=frozenset)
    is_active: bool = True
    owner_links: Tuple[str, ...] = ()

    def __post_init__(self):
        capabilities = self.capabilities
        if isinstance(capabilities, str):
            capabilities = [capabilities]
        owner_links = self.owner_links
        if isinstance(owner_links, str):
            owner_links = [owner_links]

        # Keep the wildcard as the sentinel object so identity checks hold.
        tokens = set()
        for token in capabilities:
            normalized = normalize_token(token)
            if normalized is None:
                continue
            tokens.add(WILDCARD if is_wildcard(normalized) else normalized)
        object.__setattr__(self, "capabilities", frozenset(tokens))
        object.__setattr__(self, "role", Role.parse(self.role))
        object.__setattr__(self, "owner_links", tuple(owner_links))

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD in self.capabilities

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Principal":
        """Build a snapshot from a stored user document.

        Accepts both the camelCase keys written by the web client and
        snake_case keys. A record without an explicit active flag is active
        unless its ``status`` says otherwise.
        """
        principal_id = record.get("id") or record.get("uid") or ""

        capabilities = record.get("capabilities")
        if capabilities is None:
            capabilities = record.get("permissions") or []
        if isinstance(capabilities, str):
            capabilities = [capabilities]

        if "isActive" in record:
            is_active = record["isActive"] is True
        elif "is_active" in record:
            is_active = record["is_active"] is True
        else:
            is_active = record.get("status", "active") == "active"

        links = (
            record.get("ownerLinks")
            or record.get("owner_links")
            or record.get("assignedCustomers")
            or []
        )
        if isinstance(links, str):
            links = [links]

        return cls(
            id=str(principal_id),
            role=record.get("role"),
            capabilities=frozenset(capabilities),
            is_active=is_active,
            owner_links=tuple(str(link) for link in links),
        )


def owner_of(resource: Any) -> Optional[str]:
    """Return the owning principal id recorded on a resource, if any.

    Works with mappings and with objects exposing an owner attribute.
    """
    if resource is None:
        return None
    for name in OWNER_FIELDS:
        if isinstance(resource, Mapping):
            value = resource.get(name)
        else:
            value = getattr(resource, name, None)
        if value is not None and value != "":
            return str(value)
    return None
