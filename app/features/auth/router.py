"""
Authentication endpoints.
"""
from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from app.core.exceptions import AuthenticationError
from app.core.results import OperationResult
from app.features.auth.dependencies import get_current_user
from app.features.container import StoreContainer, get_stores
from app.schemas.auth import AuthUser, LoginRequest, SessionResponse
from app.schemas.common import StoreResponse
from app.utils.notifications import build_store_response, error_notification
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=StoreResponse)
def login(
    request: LoginRequest,
    stores: StoreContainer = Depends(get_stores)
):
    """
    Sign in with email and password.

    Returns the signed-in user. Invalid credentials answer 401 with an
    error notification.
    """
    try:
        user = stores.auth.login(request.email, request.password)
    except AuthenticationError as e:
        logger.warning(f"Login failed for {request.email}: {e.message}")
        notification = error_notification("login")
        body = StoreResponse(
            success=False,
            message=notification.message,
            notification=notification,
            error="authentication_failed"
        )
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=jsonable_encoder(body))

    return build_store_response("login", OperationResult.ok(user))


@router.post("/logout", response_model=StoreResponse)
def logout(stores: StoreContainer = Depends(get_stores)):
    """
    Sign out. The local session is cleared even if the data service
    cannot be reached.
    """
    result = stores.auth.logout()
    return build_store_response("logout", result)


@router.get("/session", response_model=SessionResponse)
def check_session(stores: StoreContainer = Depends(get_stores)):
    """
    Resolve the current session against the data service.

    Used by the dashboard on startup to decide between login and home.
    """
    stores.auth.check_auth()
    return SessionResponse(
        authenticated=stores.auth.is_authenticated,
        loading=stores.auth.loading,
        user=stores.auth.user
    )


@router.get("/me", response_model=AuthUser)
def get_current_user_info(current_user: AuthUser = Depends(get_current_user)):
    """Get the signed-in user."""
    return current_user
