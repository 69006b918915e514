"""Application interfaces (ports) implemented by infrastructure."""

from portal_rbac.application.interfaces.services import (
    ICacheStore,
    IPermissionInvalidator,
    IRoleProvider,
    IRoleStore,
)

__all__ = [
    "ICacheStore",
    "IPermissionInvalidator",
    "IRoleProvider",
    "IRoleStore",
]
