"""Access tokens carrying a principal snapshot."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from swiftbank.core.access import Principal
from swiftbank.core.config import Settings, get_settings


def create_access_token(
    principal: Principal,
    settings: Optional[Settings] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a JWT access token for a principal snapshot."""
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": principal.id,
        "role": principal.role.value if principal.role else None,
        "permissions": sorted(str(c) for c in principal.capabilities),
        "active": principal.is_active,
        "links": list(principal.owner_links),
        "iat": now,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_principal(token: str, settings: Optional[Settings] = None) -> Optional[Principal]:
    """Decode and validate a JWT token. Returns the principal if valid."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    subject = payload.get("sub")
    if not subject or payload.get("type") != "access":
        return None

    permissions = payload.get("permissions") or []
    if not isinstance(permissions, list):
        return None

    return Principal(
        id=str(subject),
        role=payload.get("role"),
        capabilities=frozenset(permissions),
        is_active=payload.get("active") is True,
        owner_links=tuple(str(link) for link in payload.get("links") or []),
    )
