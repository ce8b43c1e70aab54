"""
User administration endpoints.
"""
from fastapi import APIRouter, Depends, Query
from app.features.auth.dependencies import require_admin
from app.features.container import StoreContainer, get_stores
from app.schemas.auth import AuthUser
from app.schemas.common import StoreResponse
from app.schemas.user import RegisterUserRequest, UserCreate, UserListResponse, UserUpdate
from app.utils.notifications import build_store_response, notification_for
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
def list_users(
    refresh: bool = Query(False, description="Reload from the data service first"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_admin)
):
    """
    Get cached user profiles ordered by name.

    **Admin access required.**
    """
    notification = None
    if refresh:
        notification = notification_for("fetch_users", stores.users.fetch_users())
    users = stores.users.users
    return UserListResponse(users=users, total=len(users), loading=stores.users.loading, notification=notification)


@router.post("/refresh", response_model=StoreResponse)
def refresh_users(
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_admin)
):
    """Reload user profiles and report the outcome as a notification."""
    result = stores.users.fetch_users()
    return build_store_response("fetch_users", result, data=[])


@router.post("", response_model=StoreResponse)
def add_user(
    request: UserCreate,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_admin)
):
    """Add a profile for an existing identity."""
    result = stores.users.add_user(request)
    return build_store_response("add_user", result)


@router.post("/register", response_model=StoreResponse)
def register_user(
    request: RegisterUserRequest,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_admin)
):
    """
    Create a sign-in identity and its profile.

    **Admin access required.**

    If the profile cannot be created after the identity was, the identity
    remains without a profile and the response reports
    `incomplete_registration`.
    """
    logger.info(f"Register user {request.profile.email} by {current_user.email}")
    result = stores.users.register_user(request.profile.email, request.password, request.profile)
    return build_store_response("register_user", result)


@router.patch("/{user_id}", response_model=StoreResponse)
def update_user(
    user_id: str,
    request: UserUpdate,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_admin)
):
    """Update some fields of a profile."""
    result = stores.users.update_user(user_id, request)
    return build_store_response("update_user", result)


@router.delete("/{user_id}", response_model=StoreResponse)
def delete_user(
    user_id: str,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_admin)
):
    """Delete a profile. The sign-in identity is not removed."""
    result = stores.users.delete_user(user_id)
    return build_store_response("delete_user", result)
