"""FastAPI dependencies enforcing access decisions on endpoints.

Each guard turns a False from AccessControl into HTTP 403 and logs the
denial; a missing principal is HTTP 401 (raised by get_current_principal).
"""

from typing import Optional, Union

from fastapi import Depends, HTTPException, Request, status

from swiftbank.core.access import AccessControl, Capability, Principal

from .audit import log_denied
from .deps import get_access_control, get_current_principal


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class RequireCapability:
    """
    Dependency requiring one (or, with require_all, every) capability.

    Usage:
        @router.get("/settings", dependencies=[Depends(RequireCapability("settings_view"))])
        async def read_settings():
            ...
    """

    def __init__(self, *capabilities: Union[str, Capability], require_all: bool = False):
        self.capabilities = [c.value if isinstance(c, Capability) else c for c in capabilities]
        self.require_all = require_all

    def __call__(
        self,
        request: Request,
        principal: Principal = Depends(get_current_principal),
        access: AccessControl = Depends(get_access_control),
    ) -> Principal:
        if self.require_all:
            allowed = all(access.has_capability(principal, c) for c in self.capabilities)
        else:
            allowed = access.has_any_capability(principal, self.capabilities)

        if not allowed:
            log_denied(request, principal, f"capability:{','.join(self.capabilities)}")
            raise _forbidden(f"Insufficient permissions. Required: {', '.join(self.capabilities)}")
        return principal


class RequireFeature:
    """Dependency gating an endpoint behind a feature name."""

    def __init__(self, feature: str):
        self.feature = feature

    def __call__(
        self,
        request: Request,
        principal: Principal = Depends(get_current_principal),
        access: AccessControl = Depends(get_access_control),
    ) -> Principal:
        if not access.can_access_feature(principal, self.feature):
            log_denied(request, principal, f"feature:{self.feature}")
            raise _forbidden("Not authorized")
        return principal


class RequireOperation:
    """
    Dependency applying the capability and ownership gates of an operation.

    When target_user_param names a path parameter, its value is the target
    principal id for the ownership gate.

    Usage:
        @router.put(
            "/users/{user_id}",
            dependencies=[Depends(RequireOperation("edit_user", target_user_param="user_id"))],
        )
    """

    def __init__(self, operation: str, target_user_param: Optional[str] = None):
        self.operation = operation
        self.target_user_param = target_user_param

    def __call__(
        self,
        request: Request,
        principal: Principal = Depends(get_current_principal),
        access: AccessControl = Depends(get_access_control),
    ) -> Principal:
        context = {}
        target = None
        if self.target_user_param:
            target = request.path_params.get(self.target_user_param)
            context["target_user_id"] = target

        if not access.can_perform_operation(principal, self.operation, context):
            log_denied(request, principal, f"operation:{self.operation}", target)
            raise _forbidden("Not authorized")
        return principal


def require_elevated(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    access: AccessControl = Depends(get_access_control),
) -> Principal:
    """Staff-only UI areas. Sensitive actions still need RequireOperation."""
    if not access.has_elevated_access(principal):
        log_denied(request, principal, "elevated")
        raise _forbidden("Not authorized")
    return principal
