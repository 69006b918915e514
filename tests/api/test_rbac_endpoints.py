"""RBAC endpoints: check-permission and user-permissions for the calling staff user."""

from httpx import AsyncClient

from portal_rbac.application.services import default_catalog
from portal_rbac.domain.enums import Role


async def test_check_permission_allowed(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/rbac/check-permission",
        json={"permission": "users:view"},
        headers={"X-User-ID": "u-support"},
    )
    assert response.status_code == 200
    assert response.json() == {"has_permission": True, "user_id": "u-support", "permission": "users:view"}


async def test_check_permission_denied(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/rbac/check-permission",
        json={"permission": "users:delete"},
        headers={"X-User-ID": "u-support"},
    )
    assert response.status_code == 200
    assert response.json()["has_permission"] is False


async def test_check_permission_unknown_user_is_denied_not_error(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/rbac/check-permission",
        json={"permission": "dashboard:view"},
        headers={"X-User-ID": "nobody"},
    )
    assert response.status_code == 200
    assert response.json()["has_permission"] is False


async def test_check_permission_requires_identity(client: AsyncClient) -> None:
    """Missing X-User-ID returns 401 with the domain error body."""
    response = await client.post("/api/v1/rbac/check-permission", json={"permission": "users:view"})
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_check_permission_validates_body(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/rbac/check-permission",
        json={"permission": ""},
        headers={"X-User-ID": "u-support"},
    )
    assert response.status_code == 422


async def test_user_permissions(client: AsyncClient) -> None:
    response = await client.get("/api/v1/rbac/user-permissions", headers={"X-User-ID": "u-new"})
    assert response.status_code == 200
    data = response.json()
    catalog = default_catalog()
    assert data["user_id"] == "u-new"
    assert data["permissions"] == sorted(catalog.permissions_for(Role.NEW))
    assert data["accessible_pages"] == sorted(catalog.pages_for(Role.NEW))


async def test_user_permissions_from_request_state(app, client: AsyncClient) -> None:
    """Identity set on request.state by an upstream layer takes precedence over the header."""

    @app.middleware("http")
    async def authenticate(request, call_next):
        request.state.user_id = "u-admin"
        return await call_next(request)

    response = await client.get("/api/v1/rbac/user-permissions", headers={"X-User-ID": "u-new"})
    assert response.status_code == 200
    assert response.json()["user_id"] == "u-admin"
