"""
Store container.

One container per application instance; routers get it through the
get_stores dependency. Tests build isolated containers around a fake client.
"""
from fastapi import Request
from app.core.config import Settings
from app.features.auth.store import AuthStore
from app.features.inventory.store import InventoryStore
from app.features.orders.store import OrderStore
from app.features.products.store import ProductStore
from app.features.users.store import UserStore
from app.infrastructure.dataservice import DataServiceClient


class StoreContainer:
    """All entity stores sharing one data service client."""

    def __init__(self, client: DataServiceClient, settings: Settings):
        self.client = client
        self.auth = AuthStore(client)
        self.products = ProductStore(client, low_stock_threshold=settings.LOW_STOCK_THRESHOLD)
        self.inventory = InventoryStore(client, recent_limit=settings.RECENT_MOVEMENTS_LIMIT)
        self.orders = OrderStore(client)
        self.users = UserStore(
            client,
            compensate_failed_registration=settings.COMPENSATE_FAILED_REGISTRATION
        )


def get_stores(request: Request) -> StoreContainer:
    """
    Dependency to get the application's stores.

    Usage:
        @router.get("/products")
        def list_products(stores: StoreContainer = Depends(get_stores)):
            return stores.products.products
    """
    return request.app.state.stores
