"""
Inventory movement endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.core.constants import MovementType
from app.features.auth.dependencies import get_current_user, require_warehouse
from app.features.container import StoreContainer, get_stores
from app.schemas.auth import AuthUser
from app.schemas.common import StoreResponse
from app.schemas.movement import MovementCreate, MovementListResponse
from app.utils.notifications import build_store_response, notification_for

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("/movements", response_model=MovementListResponse)
def list_movements(
    type: Optional[MovementType] = Query(None, description="Only entries (in) or exits (out)"),
    refresh: bool = Query(False, description="Reload from the data service first"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Get cached movements, newest first."""
    store = stores.inventory
    notification = None
    if refresh:
        notification = notification_for("fetch_movements", store.fetch_movements())

    movements = store.get_movements_by_type(type) if type else store.movements
    return MovementListResponse(
        movements=movements, total=len(movements), loading=store.loading, notification=notification
    )


@router.post("/movements/refresh", response_model=StoreResponse)
def refresh_movements(
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Reload movements and report the outcome as a notification."""
    result = stores.inventory.fetch_movements()
    return build_store_response("fetch_movements", result, data=[])


@router.get("/movements/recent", response_model=MovementListResponse)
def recent_movements(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Defaults to RECENT_MOVEMENTS_LIMIT"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Most recent cached movements."""
    movements = stores.inventory.get_recent_movements(limit)
    return MovementListResponse(movements=movements, total=len(movements), loading=stores.inventory.loading)


@router.post("/movements", response_model=StoreResponse)
def register_movement(
    request: MovementCreate,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_warehouse)
):
    """
    Register an entry or exit.

    **Requires:** admin, supervisor or bodeguero role

    Product stock is not changed by this call.
    """
    product = next((p for p in stores.products.products if p.id == request.product_id), None)
    user_name = current_user.email if request.user_id == current_user.id else None

    result = stores.inventory.register_movement(
        request,
        product_name=product.name if product else None,
        user_name=user_name
    )
    return build_store_response("register_movement", result)
