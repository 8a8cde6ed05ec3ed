"""Audit logging of denied access checks.

Access decisions themselves never log; the HTTP layer records each denial
with who asked, for what, and from where.
"""

import logging
from typing import Optional

from fastapi import Request

from swiftbank.common.logger import AUDIT_LOGGER_SUFFIX, PACKAGE_LOGGER_NAME
from swiftbank.core.access import Principal

AUDIT_LOGGER_NAME = f"{PACKAGE_LOGGER_NAME}.{AUDIT_LOGGER_SUFFIX}"

logger = logging.getLogger(AUDIT_LOGGER_NAME)


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    # Check X-Forwarded-For header (set by reverse proxies)
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # Take the first IP (original client)
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


def log_denied(
    request: Request,
    principal: Optional[Principal],
    action: str,
    target: Optional[str] = None,
) -> None:
    """Record a denied access attempt at WARNING level."""
    logger.warning(
        "access denied: principal=%s role=%s action=%s target=%s ip=%s path=%s",
        principal.id if principal else "anonymous",
        principal.role.value if principal and principal.role else "none",
        action,
        target or "-",
        get_client_ip(request),
        request.url.path,
    )
