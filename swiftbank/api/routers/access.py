"""Access introspection endpoints."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from swiftbank.api.audit import log_denied
from swiftbank.api.deps import get_access_control, get_current_principal
from swiftbank.api.guards import RequireFeature
from swiftbank.core.access import AccessControl, Principal

router = APIRouter(prefix="/access", tags=["access"])


# Schemas
class AccessSummary(BaseModel):
    id: str
    role: Optional[str]
    role_level: int
    is_active: bool
    elevated: bool
    admin_panel: bool
    capabilities: List[str]


class FeatureAccess(BaseModel):
    feature: str
    allowed: bool


class OperationContext(BaseModel):
    target_user_id: Optional[str] = None
    resource_owner_id: Optional[str] = None


class AccessTablesView(BaseModel):
    features: Dict[str, List[str]]
    operations: Dict[str, List[str]]


class OperationAccess(BaseModel):
    operation: str
    allowed: bool


# Endpoints
@router.get("/me", response_model=AccessSummary)
async def read_my_access(
    principal: Principal = Depends(get_current_principal),
    access: AccessControl = Depends(get_access_control),
):
    """Describe the caller's role and effective capabilities."""
    return AccessSummary(
        id=principal.id,
        role=principal.role.value if principal.role else None,
        role_level=access.get_role_level(principal),
        is_active=principal.is_active,
        elevated=access.has_elevated_access(principal),
        admin_panel=access.can_access_admin_panel(principal),
        capabilities=sorted(access.resolve_effective_capabilities(principal)),
    )


@router.get("/features", response_model=List[FeatureAccess])
async def list_features(
    principal: Principal = Depends(get_current_principal),
    access: AccessControl = Depends(get_access_control),
):
    """List every known feature with the caller's visibility of it."""
    return [
        FeatureAccess(feature=name, allowed=access.can_access_feature(principal, name))
        for name in access.tables.feature_names()
    ]


@router.get("/features/{feature}", response_model=FeatureAccess)
async def check_feature(
    feature: str,
    principal: Principal = Depends(get_current_principal),
    access: AccessControl = Depends(get_access_control),
):
    return FeatureAccess(feature=feature, allowed=access.can_access_feature(principal, feature))


@router.post("/operations/{operation}", response_model=OperationAccess)
async def check_operation(
    operation: str,
    request: Request,
    context: Optional[OperationContext] = None,
    principal: Principal = Depends(get_current_principal),
    access: AccessControl = Depends(get_access_control),
):
    """Dry-run an operation against the capability and ownership gates."""
    decision_context = {}
    if context is not None:
        if context.target_user_id:
            decision_context["target_user_id"] = context.target_user_id
        if context.resource_owner_id:
            decision_context["resource"] = {"owner_id": context.resource_owner_id}

    allowed = access.can_perform_operation(principal, operation, decision_context)
    if not allowed:
        log_denied(request, principal, f"operation:{operation}", context.target_user_id if context else None)
    return OperationAccess(operation=operation, allowed=allowed)


@router.get("/tables", response_model=AccessTablesView)
async def read_access_tables(
    principal: Principal = Depends(RequireFeature("security_center")),
    access: AccessControl = Depends(get_access_control),
):
    """Feature and operation tables in effect, for the security center."""
    return AccessTablesView(
        features={name: sorted(tokens) for name, tokens in access.tables.features.items()},
        operations={name: sorted(tokens) for name, tokens in access.tables.operations.items()},
    )
