"""Admin staff endpoints: role changes (gated by the admin API patterns)."""

from fastapi import APIRouter

from portal_rbac.api.v1.dependencies import GatedUserId, RoleAssignment
from portal_rbac.schemas.rbac import RoleUpdateRequest, RoleUpdateResponse

router = APIRouter()


@router.patch("/{staff_id}/role", response_model=RoleUpdateResponse)
async def update_staff_role(
    staff_id: str,
    body: RoleUpdateRequest,
    user_id: GatedUserId,
    service: RoleAssignment,
) -> RoleUpdateResponse:
    """Change a staff member's role; cached permissions of the target are invalidated."""
    role = await service.change_role(user_id, staff_id, body.role)
    return RoleUpdateResponse(staff_id=staff_id, role=role)
