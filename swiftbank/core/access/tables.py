"""Static feature and operation tables.

Both tables map a name to the capability tokens that qualify for it. They are
built once at startup and exposed as read-only mappings for the lifetime of
the process. A YAML file may replace the built-in tables; it is validated at
load time so decisions never see an unknown token.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping

import yaml

from .capabilities import Capability, is_known_capability, normalize_token


def _freeze(table: Mapping[str, Iterable]) -> Mapping[str, FrozenSet[str]]:
    return MappingProxyType(
        {name: frozenset(normalize_token(t) for t in tokens) for name, tokens in table.items()}
    )


FEATURE_CAPABILITIES = _freeze({
    # Admin features
    "user_management": [Capability.USER_VIEW, Capability.USER_EDIT, Capability.USER_CREATE],
    "transaction_management": [
        Capability.TRANSACTION_VIEW,
        Capability.TRANSACTION_APPROVE,
        Capability.TRANSACTION_REJECT,
    ],
    "content_management": [
        Capability.CONTENT_EDIT,
        Capability.CONTENT_CREATE,
        Capability.CONTENT_DELETE,
    ],
    "system_settings": [Capability.SETTINGS_VIEW, Capability.SETTINGS_EDIT],
    "security_center": [Capability.SECURITY_VIEW, Capability.SECURITY_EDIT],

    # Customer features
    "account_view": [Capability.ACCOUNT_VIEW],
    "transaction_create": [Capability.TRANSACTION_CREATE],
    "profile_edit": [Capability.PROFILE_EDIT],

    # Shared features
    "notifications": [Capability.NOTIFICATIONS_VIEW],
})


OPERATION_CAPABILITIES = _freeze({
    # User operations
    "create_user": [Capability.USER_CREATE],
    "edit_user": [Capability.USER_EDIT],
    "delete_user": [Capability.USER_DELETE],
    "view_user": [Capability.USER_VIEW],

    # Transaction operations
    "create_transaction": [Capability.TRANSACTION_CREATE],
    "approve_transaction": [Capability.TRANSACTION_APPROVE],
    "reject_transaction": [Capability.TRANSACTION_REJECT],
    "view_transaction": [Capability.TRANSACTION_VIEW],

    # Content operations
    "edit_content": [Capability.CONTENT_EDIT],
    "create_content": [Capability.CONTENT_CREATE],
    "delete_content": [Capability.CONTENT_DELETE],

    # System operations
    "edit_settings": [Capability.SETTINGS_EDIT],
    "view_settings": [Capability.SETTINGS_VIEW],
    "security_audit": [Capability.SECURITY_VIEW],

    # Profile operations
    "edit_profile": [Capability.PROFILE_EDIT],
    "view_profile": [Capability.PROFILE_VIEW],
})


@dataclass(frozen=True)
class AccessTables:
    """The pair of lookup tables an AccessControl instance decides against."""

    features: Mapping[str, FrozenSet[str]]
    operations: Mapping[str, FrozenSet[str]]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AccessTables":
        """Build validated, frozen tables from a plain mapping.

        Raises:
            TypeError: If a section is not a mapping of name -> token list
            ValueError: If a section is empty or names an unknown token
        """
        features = _parse_section(data, "features")
        operations = _parse_section(data, "operations")
        return cls(features=_freeze(features), operations=_freeze(operations))

    def feature_names(self) -> list[str]:
        return sorted(self.features)

    def operation_names(self) -> list[str]:
        return sorted(self.operations)


DEFAULT_TABLES = AccessTables(
    features=FEATURE_CAPABILITIES,
    operations=OPERATION_CAPABILITIES,
)


def _parse_section(data: Mapping[str, Any], section: str) -> Dict[str, list]:
    raw = data.get(section)
    if raw is None:
        raise ValueError(f"Access tables are missing the '{section}' section")
    if not isinstance(raw, Mapping):
        raise TypeError(
            f"Section '{section}' must be a mapping, got {type(raw).__name__}"
        )

    parsed = {}
    for name, tokens in raw.items():
        if isinstance(tokens, str):
            tokens = [tokens]
        if not isinstance(tokens, list) or not tokens:
            raise ValueError(
                f"{section}.{name} must list at least one capability token"
            )
        unknown = [t for t in tokens if not is_known_capability(t)]
        if unknown:
            raise ValueError(
                f"{section}.{name} names unknown capabilities: {', '.join(map(str, unknown))}"
            )
        parsed[str(name)] = tokens
    return parsed


def load_access_tables(path: str) -> AccessTables:
    """Load feature and operation tables from a YAML file.

    Args:
        path: Path to a YAML file with ``features`` and ``operations`` mappings

    Returns:
        AccessTables instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is invalid YAML
        TypeError: If the document root is not a mapping
        ValueError: If a table names an unknown capability
    """
    tables_file = Path(os.path.expandvars(path))

    if not tables_file.exists():
        raise FileNotFoundError(f"Access tables file not found: {path}")

    with tables_file.open("r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise TypeError(
            f"Access tables root must be a mapping, got {type(data).__name__}"
        )

    return AccessTables.from_dict(data)
