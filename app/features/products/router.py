"""
Product management endpoints.
"""
from fastapi import APIRouter, Depends, Query
from app.features.auth.dependencies import get_current_user, require_warehouse
from app.features.container import StoreContainer, get_stores
from app.schemas.auth import AuthUser
from app.schemas.common import StoreResponse
from app.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductUpdate,
    StockChangeRequest
)
from app.utils.notifications import build_store_response, notification_for
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


def _list_response(store, products, notification=None) -> ProductListResponse:
    return ProductListResponse(
        products=products, total=len(products), loading=store.loading, notification=notification
    )


@router.get("", response_model=ProductListResponse)
def list_products(
    refresh: bool = Query(False, description="Reload from the data service first"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """
    Get cached products ordered by name.

    With **refresh=true** the cache is reloaded first and the outcome is
    reported in `notification`; if the reload fails the previous cache is
    returned.
    """
    notification = None
    if refresh:
        notification = notification_for("fetch_products", stores.products.fetch_products())
    return _list_response(stores.products, stores.products.products, notification)


@router.post("/refresh", response_model=StoreResponse)
def refresh_products(
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Reload products and report the outcome as a notification."""
    result = stores.products.fetch_products()
    return build_store_response("fetch_products", result, data=[])


@router.get("/low-stock", response_model=ProductListResponse)
def low_stock_products(
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Products at or below the low stock threshold."""
    return _list_response(stores.products, stores.products.check_low_stock())


@router.get("/search", response_model=ProductListResponse)
def search_products(
    q: str = Query("", description="Code, name or category"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Search cached products."""
    return _list_response(stores.products, stores.products.search_products(q))


@router.post("", response_model=StoreResponse)
def add_product(
    request: ProductCreate,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_warehouse)
):
    """
    Add a product.

    **Requires:** admin, supervisor or bodeguero role
    """
    logger.info(f"Add product {request.code} by {current_user.email}")
    result = stores.products.add_product(request)
    return build_store_response("add_product", result)


@router.patch("/{product_id}", response_model=StoreResponse)
def update_product(
    product_id: str,
    request: ProductUpdate,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_warehouse)
):
    """Update some fields of a product."""
    result = stores.products.update_product(product_id, request)
    return build_store_response("update_product", result)


@router.delete("/{product_id}", response_model=StoreResponse)
def delete_product(
    product_id: str,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_warehouse)
):
    """Delete a product."""
    result = stores.products.delete_product(product_id)
    return build_store_response("delete_product", result)


@router.post("/{product_id}/stock", response_model=StoreResponse)
def change_stock(
    product_id: str,
    request: StockChangeRequest,
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(require_warehouse)
):
    """
    Add or remove units from a product's stock.

    The change is rejected, without contacting the data service, if the
    cached stock would go negative.
    """
    result = stores.products.update_stock(product_id, request.delta)
    return build_store_response("update_stock", result)
