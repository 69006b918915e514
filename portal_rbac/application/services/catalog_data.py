"""Source-controlled RBAC configuration: permission keys and per-role grants.

Keyed by role name, in the same shape PermissionCatalog.from_mapping and
load_catalog accept, so a JSON override file can replace it wholesale.
"""

from typing import Any

# All grantable permission keys ("resource:action").
PERMISSIONS: dict[str, str] = {
    # Dashboard
    "DASHBOARD_VIEW": "dashboard:view",
    # User management
    "USERS_VIEW": "users:view",
    "USERS_EDIT": "users:edit",
    "USERS_DELETE": "users:delete",
    # Staff management
    "STAFF_VIEW": "staff:view",
    "STAFF_EDIT": "staff:edit",
    "STAFF_DELETE": "staff:delete",
    "STAFF_ROLES": "staff:roles",
    # Schemes
    "SCHEMES_VIEW": "schemes:view",
    "SCHEMES_EDIT": "schemes:edit",
    "SCHEMES_DELETE": "schemes:delete",
    # Cards
    "CARDS_VIEW": "cards:view",
    "CARDS_EDIT": "cards:edit",
    "CARDS_ISSUE": "cards:issue",
    # Financial
    "INCOME_VIEW": "income:view",
    "INCOME_EDIT": "income:edit",
    # Referrals
    "REFERRALS_VIEW": "referrals:view",
    "REFERRALS_EDIT": "referrals:edit",
    "REFERRALS_SETTINGS": "referrals:settings",
    "REFERRALS_LEVELS_MANAGE": "referrals:levels:manage",
    # Support desk
    "SUPPORT_VIEW": "support:view",
    "SUPPORT_RESPOND": "support:respond",
    "SUPPORT_ADMIN": "support:admin",
    # Winners
    "WINNERS_VIEW": "winners:view",
    "WINNERS_EDIT": "winners:edit",
    "WINNERS_DELETE": "winners:delete",
    # Settings
    "SETTINGS_VIEW": "settings:view",
    "SETTINGS_EDIT": "settings:edit",
    "SETTINGS_ADMIN": "settings:admin",
    # Profile
    "PROFILE_VIEW": "profile:view",
    "PROFILE_EDIT": "profile:edit",
}

P = PERMISSIONS

# Every admin page section, including ones no role below grants explicitly.
ADMIN_PAGES: tuple[str, ...] = (
    "/admin",
    "/admin/schemes",
    "/admin/cards",
    "/admin/users",
    "/admin/income",
    "/admin/referrals",
    "/admin/staff",
    "/admin/winners",
    "/admin/support",
    "/admin/profile",
    "/admin/settings",
)

ROLE_PERMISSIONS: dict[str, dict[str, Any]] = {
    "superadmin": {
        "permissions": list(PERMISSIONS.values()),
        "pages": [
            "/admin",
            "/admin/schemes",
            "/admin/cards",
            "/admin/users",
            "/admin/income",
            "/admin/referrals",
            "/admin/referrals/settings",
            "/admin/staff",
            "/admin/support",
            "/admin/profile",
            "/admin/settings",
        ],
        "api_endpoints": ["/api/admin/*"],
    },
    "admin": {
        "permissions": [
            P["DASHBOARD_VIEW"],
            P["USERS_VIEW"],
            P["USERS_EDIT"],
            P["USERS_DELETE"],
            P["SCHEMES_VIEW"],
            P["SCHEMES_EDIT"],
            P["SCHEMES_DELETE"],
            P["CARDS_VIEW"],
            P["CARDS_EDIT"],
            P["CARDS_ISSUE"],
            P["INCOME_VIEW"],
            P["INCOME_EDIT"],
            P["REFERRALS_VIEW"],
            P["REFERRALS_EDIT"],
            P["REFERRALS_SETTINGS"],
            P["REFERRALS_LEVELS_MANAGE"],
            P["SUPPORT_VIEW"],
            P["SUPPORT_RESPOND"],
            P["SUPPORT_ADMIN"],
            P["WINNERS_VIEW"],
            P["SETTINGS_VIEW"],
            P["SETTINGS_EDIT"],
            P["PROFILE_VIEW"],
            P["PROFILE_EDIT"],
        ],
        "pages": [
            "/admin",
            "/admin/schemes",
            "/admin/cards",
            "/admin/users",
            "/admin/income",
            "/admin/referrals",
            "/admin/referrals/settings",
            "/admin/winners",
            "/admin/support",
            "/admin/profile",
            "/admin/settings",
        ],
        "api_endpoints": [
            "/api/admin/users/*",
            "/api/admin/schemes/*",
            "/api/admin/cards/*",
            "/api/admin/income/*",
            "/api/admin/referrals/*",
            "/api/admin/support/*",
        ],
    },
    "manager": {
        "permissions": [
            P["DASHBOARD_VIEW"],
            P["USERS_VIEW"],
            P["USERS_EDIT"],
            P["SCHEMES_VIEW"],
            P["SCHEMES_EDIT"],
            P["CARDS_VIEW"],
            P["CARDS_EDIT"],
            P["INCOME_VIEW"],
            P["REFERRALS_VIEW"],
            P["REFERRALS_EDIT"],
            P["SUPPORT_VIEW"],
            P["SUPPORT_RESPOND"],
            P["SETTINGS_VIEW"],
            P["PROFILE_VIEW"],
            P["PROFILE_EDIT"],
        ],
        "pages": [
            "/admin",
            "/admin/schemes",
            "/admin/cards",
            "/admin/users",
            "/admin/income",
            "/admin/referrals",
            "/admin/winners",
            "/admin/support",
            "/admin/profile",
            "/admin/settings",
        ],
        "api_endpoints": [
            "/api/admin/users/*",
            "/api/admin/schemes/view",
            "/api/admin/schemes/edit",
            "/api/admin/cards/*",
            "/api/admin/referrals/*",
            "/api/admin/support/*",
        ],
    },
    "support": {
        "permissions": [
            P["DASHBOARD_VIEW"],
            P["USERS_VIEW"],
            P["SCHEMES_VIEW"],
            P["CARDS_VIEW"],
            P["INCOME_VIEW"],
            P["REFERRALS_VIEW"],
            P["SUPPORT_VIEW"],
            P["SUPPORT_RESPOND"],
            P["WINNERS_VIEW"],
            P["WINNERS_EDIT"],
            P["WINNERS_DELETE"],
            P["SETTINGS_VIEW"],
            P["PROFILE_VIEW"],
            P["PROFILE_EDIT"],
        ],
        "pages": [
            "/admin",
            "/admin/schemes",
            "/admin/cards",
            "/admin/users",
            "/admin/income",
            "/admin/referrals",
            "/admin/winners",
            "/admin/support",
            "/admin/profile",
            "/admin/settings",
        ],
        "api_endpoints": [
            "/api/admin/support/*",
            "/api/admin/users/view",
            "/api/admin/cards/view",
        ],
    },
    "new": {
        "permissions": [
            P["DASHBOARD_VIEW"],
            P["SETTINGS_VIEW"],
            P["PROFILE_VIEW"],
            P["PROFILE_EDIT"],
        ],
        "pages": [
            "/admin",
            "/admin/profile",
            "/admin/settings",
        ],
        "api_endpoints": ["/api/admin/profile/*"],
    },
}
