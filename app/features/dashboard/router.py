"""
Dashboard endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from app.features.auth.dependencies import get_current_user
from app.features.container import StoreContainer, get_stores
from app.features.dashboard.service import DashboardService
from app.schemas.auth import AuthUser
from app.schemas.dashboard import DashboardSummary
from app.schemas.product import ChartPoint
from app.utils.notifications import notification_for

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def get_summary(
    refresh: bool = Query(False, description="Reload products, orders and movements first"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """
    Home dashboard: totals, pending orders, low stock, today's dispatches
    and recent activity.

    A reload reports a single notification: the error of the first failed
    fetch, or success when all three succeed.
    """
    notification = None
    if refresh:
        results = [
            stores.products.fetch_products(),
            stores.orders.fetch_orders(),
            stores.inventory.fetch_movements(),
        ]
        failed = next((result for result in results if not result.success), None)
        notification = notification_for("refresh_dashboard", failed or results[0])
    return DashboardService(stores).get_summary(notification)


@router.get("/products-chart", response_model=List[ChartPoint])
def get_products_chart(
    group_by: str = Query("product", pattern="^(product|category)$", description="product or category"),
    stores: StoreContainer = Depends(get_stores),
    current_user: AuthUser = Depends(get_current_user)
):
    """Stock per product (default) or per category for the products chart."""
    return DashboardService(stores).get_products_chart(group_by)
