"""portal_rbac: role-based access control core for the admin portal."""
