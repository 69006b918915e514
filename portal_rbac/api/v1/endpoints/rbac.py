"""RBAC endpoints: permission checks for the current staff user."""

from fastapi import APIRouter

from portal_rbac.api.v1.dependencies import CurrentUserId, Resolver
from portal_rbac.schemas.rbac import (
    CheckPermissionRequest,
    CheckPermissionResponse,
    UserPermissionsResponse,
)

router = APIRouter()


@router.post("/check-permission", response_model=CheckPermissionResponse)
async def check_permission(
    body: CheckPermissionRequest,
    user_id: CurrentUserId,
    resolver: Resolver,
) -> CheckPermissionResponse:
    """Return whether the caller holds body.permission."""
    allowed = await resolver.has_permission(user_id, body.permission)
    return CheckPermissionResponse(
        has_permission=allowed, user_id=user_id, permission=body.permission
    )


@router.get("/user-permissions", response_model=UserPermissionsResponse)
async def user_permissions(user_id: CurrentUserId, resolver: Resolver) -> UserPermissionsResponse:
    """Return the caller's permission keys and accessible admin pages."""
    permissions = await resolver.get_user_permissions(user_id)
    pages = await resolver.get_user_pages(user_id)
    return UserPermissionsResponse(
        user_id=user_id,
        permissions=sorted(permissions),
        accessible_pages=sorted(pages),
    )
