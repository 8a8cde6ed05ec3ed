from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from swiftbank.core.access import AccessControl, DEFAULT_TABLES, Principal, load_access_tables
from swiftbank.core.config import Settings, get_settings
from swiftbank.core.security import decode_principal

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


@lru_cache
def access_control_for(tables_path: Optional[str]) -> AccessControl:
    """AccessControl over the given YAML tables file, or the built-in tables."""
    if tables_path:
        return AccessControl(load_access_tables(tables_path))
    return AccessControl(DEFAULT_TABLES)


def get_access_control(settings: Settings = Depends(get_settings)) -> AccessControl:
    """AccessControl built once per configured table file."""
    return access_control_for(settings.access_tables_path)


def get_optional_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> Optional[Principal]:
    """Principal from the bearer token, or None for anonymous callers."""
    if not token:
        return None
    return decode_principal(token, settings)


def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """Get the authenticated principal or reject with 401."""
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal
