"""Admin gate and PATCH /api/admin/staff/{staff_id}/role."""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from portal_rbac.api.v1.dependencies import GatedUserId
from portal_rbac.domain.enums import Role


async def test_superadmin_changes_role(app: FastAPI, client: AsyncClient) -> None:
    response = await client.patch(
        "/api/admin/staff/u-support/role",
        json={"role": "manager"},
        headers={"X-User-ID": "u-super"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "staff_id": "u-support",
        "role": "manager",
        "message": "Role updated successfully",
    }
    assert await app.state.role_provider.role_of("u-support") is Role.MANAGER


async def test_role_change_invalidates_cached_permissions(client: AsyncClient) -> None:
    """The target's next permission check reflects the new role."""
    check = {"permission": "users:edit"}
    before = await client.post("/api/v1/rbac/check-permission", json=check, headers={"X-User-ID": "u-support"})
    assert before.json()["has_permission"] is False

    await client.patch(
        "/api/admin/staff/u-support/role", json={"role": "manager"}, headers={"X-User-ID": "u-super"}
    )

    after = await client.post("/api/v1/rbac/check-permission", json=check, headers={"X-User-ID": "u-support"})
    assert after.json()["has_permission"] is True


@pytest.mark.parametrize("caller", ["u-admin", "u-manager", "u-support", "nobody"])
async def test_gate_blocks_roles_without_staff_api(client: AsyncClient, caller: str) -> None:
    response = await client.patch(
        "/api/admin/staff/u-new/role", json={"role": "support"}, headers={"X-User-ID": caller}
    )
    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "PERMISSION_DENIED"
    assert body["details"] == {"resource": "/api/admin/staff/u-new/role", "action": "access"}


async def test_role_change_requires_identity(client: AsyncClient) -> None:
    response = await client.patch("/api/admin/staff/u-new/role", json={"role": "support"})
    assert response.status_code == 401


async def test_role_change_rejects_unknown_role(client: AsyncClient) -> None:
    response = await client.patch(
        "/api/admin/staff/u-new/role", json={"role": "root"}, headers={"X-User-ID": "u-super"}
    )
    assert response.status_code == 422


async def test_role_change_on_self_rejected(client: AsyncClient) -> None:
    response = await client.patch(
        "/api/admin/staff/u-super/role", json={"role": "admin"}, headers={"X-User-ID": "u-super"}
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "staff_id"}


async def test_role_change_on_unknown_staff_is_forbidden(client: AsyncClient) -> None:
    response = await client.patch(
        "/api/admin/staff/ghost/role", json={"role": "support"}, headers={"X-User-ID": "u-super"}
    )
    assert response.status_code == 403


@pytest.fixture
def page_app(app: FastAPI) -> FastAPI:
    """App with a gated admin page route, the way page handlers use the gate."""

    @app.get("/admin/{section:path}")
    async def admin_page(section: str, user_id: GatedUserId) -> dict[str, str]:
        return {"section": section, "user_id": user_id}

    return app


@pytest.mark.parametrize(
    "caller,path,status",
    [
        ("u-manager", "/admin/users", 200),
        ("u-manager", "/admin/staff", 403),
        ("u-super", "/admin/staff", 200),
        ("u-new", "/admin/profile", 200),
        ("u-new", "/admin/cards", 403),
        ("nobody", "/admin/profile", 403),
    ],
)
async def test_page_gate(page_app: FastAPI, client: AsyncClient, caller: str, path: str, status: int) -> None:
    response = await client.get(path, headers={"X-User-ID": caller})
    assert response.status_code == status


async def test_gate_refusal_is_logged_with_caller_and_path(client: AsyncClient, caplog) -> None:
    with caplog.at_level("WARNING", logger="portal_rbac.core.exception_handlers"):
        response = await client.patch(
            "/api/admin/staff/u-new/role", json={"role": "support"}, headers={"X-User-ID": "u-manager"}
        )
    assert response.status_code == 403
    refusals = [r.getMessage() for r in caplog.records if r.name == "portal_rbac.core.exception_handlers"]
    assert len(refusals) == 1
    assert "PERMISSION_DENIED" in refusals[0]
    assert "user_id=u-manager" in refusals[0]
    assert "method=PATCH path=/api/admin/staff/u-new/role" in refusals[0]


async def test_missing_identity_is_logged(client: AsyncClient, caplog) -> None:
    with caplog.at_level("WARNING", logger="portal_rbac.core.exception_handlers"):
        response = await client.get("/api/v1/rbac/user-permissions")
    assert response.status_code == 401
    assert "AUTHENTICATION_ERROR: user_id=None method=GET path=/api/v1/rbac/user-permissions" in caplog.text
