"""
Dashboard summary built from the cached store state.
Nothing here calls the data service.
"""
from typing import List, Optional
from app.core.constants import MovementType
from app.features.container import StoreContainer
from app.schemas.common import Notification
from app.schemas.dashboard import ActivityItem, DashboardStats, DashboardSummary
from app.schemas.product import ChartPoint
from app.utils.formatters import format_movement_type
from app.utils.timezone import get_local_today_label


class DashboardService:
    """Service for the home dashboard."""

    def __init__(self, stores: StoreContainer):
        self.stores = stores

    def get_stats(self) -> DashboardStats:
        products = self.stores.products
        orders = self.stores.orders
        return DashboardStats(
            total_products=len(products.products),
            pending_orders=len(orders.get_pending_orders()),
            low_stock=len(products.check_low_stock()),
            dispatches_today=len(orders.get_today_orders()),
        )

    def get_recent_activity(self, limit: Optional[int] = None) -> List[ActivityItem]:
        """
        Recent movements followed by low stock alerts.

        Movements keep their cache order (newest first after a fetch).
        """
        limit = limit or self.stores.inventory.recent_limit
        activity = []
        for movement in self.stores.inventory.get_recent_movements(limit):
            label = format_movement_type(movement.type)
            activity.append(ActivityItem(
                kind="movement_in" if movement.type == MovementType.IN else "movement_out",
                action=f"{label} de inventario",
                description=f"{movement.product or movement.product_id}: {movement.quantity} unidades",
                timestamp=movement.date
            ))

        for product in self.stores.products.check_low_stock():
            activity.append(ActivityItem(
                kind="low_stock",
                action="Stock bajo detectado",
                description=f"Producto: {product.name} ({product.stock} unidades)",
                timestamp=None
            ))

        return activity[:limit]

    def get_summary(self, notification: Optional[Notification] = None) -> DashboardSummary:
        user = self.stores.auth.user
        return DashboardSummary(
            welcome=f"Bienvenido, {user.email}" if user else "Bienvenido",
            date=get_local_today_label(),
            stats=self.get_stats(),
            recent_activity=self.get_recent_activity(),
            notification=notification
        )

    def get_products_chart(self, group_by: str = "product") -> List[ChartPoint]:
        """Stock per product, or summed per category."""
        if group_by == "category":
            return self.stores.products.stock_by_category()
        return self.stores.products.stock_by_product()
