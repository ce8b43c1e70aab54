"""
Session and role dependencies for FastAPI routes.

Roles only gate what the dashboard shows and triggers; the remote data
service is responsible for enforcing access to its tables.
"""
from typing import Sequence
from fastapi import Depends
from app.core.constants import UserRole, WAREHOUSE_ROLES
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.features.container import StoreContainer, get_stores
from app.schemas.auth import AuthUser


def get_current_user(stores: StoreContainer = Depends(get_stores)) -> AuthUser:
    """
    Dependency to get the signed-in user from the auth store.

    Raises:
        AuthenticationError: If nobody is signed in
    """
    if stores.auth.user is None:
        raise AuthenticationError("Not authenticated")
    return stores.auth.user


def require_role(allowed_roles: Sequence[UserRole]):
    """
    Dependency factory to require specific roles.

    Usage:
        @router.post("/warehouse")
        def warehouse_ops(current_user: AuthUser = Depends(require_role(WAREHOUSE_ROLES))):
            ...
    """
    def check_role(current_user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if current_user.role not in allowed_roles:
            raise AuthorizationError(
                f"Insufficient permissions. Required roles: {[r.value for r in allowed_roles]}"
            )
        return current_user

    return check_role


require_admin = require_role([UserRole.ADMIN])
require_warehouse = require_role(WAREHOUSE_ROLES)
