"""
Dispatch order endpoints.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from app.core.exceptions import NotFoundError
from app.features.auth.dependencies import get_current_user, require_warehouse
from app.features.container import StoreContainer, get_stores
from app.schemas.auth import AuthUser
from app.schemas.common import StoreResponse
from app.schemas.order import OrderCreate, OrderListResponse, OrderStatusUpdate
from app.utils.notifications import build_store_response, notification_for
from app.utils.pdf_templates import OrderDispatchReport
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


def _list_response(store, orders, notification=None) -> OrderListResponse:
    return OrderListResponse(orders=orders, total=len(orders), loading=store.loading, notification=notification)


@router.get("", response_model=OrderListResponse)
def list_orders(
    refresh: bool = Query(False, description="Reload from the data service first"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Get cached orders, newest first. A reload reports its outcome in `notification`."""
    notification = None
    if refresh:
        notification = notification_for("fetch_orders", stores.orders.fetch_orders())
    return _list_response(stores.orders, stores.orders.orders, notification)


@router.post("/refresh", response_model=StoreResponse)
def refresh_orders(
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Reload orders and report the outcome as a notification."""
    result = stores.orders.fetch_orders()
    return build_store_response("fetch_orders", result, data=[])


@router.get("/pending", response_model=OrderListResponse)
def pending_orders(
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Cached orders with status pending."""
    return _list_response(stores.orders, stores.orders.get_pending_orders())


@router.get("/today", response_model=OrderListResponse)
def today_orders(
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Cached orders dated today (UTC calendar day)."""
    return _list_response(stores.orders, stores.orders.get_today_orders())


@router.get("/search", response_model=OrderListResponse)
def search_orders(
    q: str = Query("", description="Number, branch or carrier"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Search cached orders."""
    return _list_response(stores.orders, stores.orders.search_orders(q))


@router.post("", response_model=StoreResponse)
def create_order(
    request: OrderCreate,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """
    Create a dispatch order.

    The order number is generated from the current time. Product stock is
    not decremented.
    """
    logger.info(f"Create order for {request.branch} by {current_user.email}")
    result = stores.orders.create_order(request)
    return build_store_response("create_order", result)


@router.patch("/{order_id}/status", response_model=StoreResponse)
def update_order_status(
    order_id: str,
    request: OrderStatusUpdate,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_warehouse)
):
    """Mark an order as pending, completed or cancelled."""
    result = stores.orders.update_order_status(order_id, request.status)
    return build_store_response("update_order_status", result)


@router.get("/{order_id}/dispatch-guide")
def dispatch_guide(
    order_id: str,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """
    Download the dispatch guide PDF of a cached order.

    Product codes and names come from the cached product list.
    """
    order = stores.orders.get_order(order_id)
    if order is None:
        raise NotFoundError("Order", order_id)

    products = {p.id: p for p in stores.products.products}
    pdf = OrderDispatchReport().generate(order, products)

    return StreamingResponse(
        pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="guia_{order.number}.pdf"'}
    )
