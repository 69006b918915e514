"""RBAC API schemas: permission checks, user permissions, role changes."""

from pydantic import BaseModel, Field

from portal_rbac.domain.enums import Role


class CheckPermissionRequest(BaseModel):
    """Body for POST /rbac/check-permission."""

    permission: str = Field(..., min_length=1, description="Permission key, e.g. 'users:view'")


class CheckPermissionResponse(BaseModel):
    has_permission: bool
    user_id: str
    permission: str


class UserPermissionsResponse(BaseModel):
    """Response for GET /rbac/user-permissions."""

    user_id: str
    permissions: list[str] = Field(default_factory=list)
    accessible_pages: list[str] = Field(default_factory=list)


class RoleUpdateRequest(BaseModel):
    """Body for PATCH /staff/{staff_id}/role."""

    role: Role


class RoleUpdateResponse(BaseModel):
    success: bool = True
    staff_id: str
    role: Role
    message: str = "Role updated successfully"
