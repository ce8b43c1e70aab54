"""
Dispatch order store.

Creating an order does not touch product stock.
"""
from typing import List, Optional
from pydantic import ValidationError as SchemaError
from app.core.constants import OrderStatus, Table
from app.core.exceptions import DataServiceError
from app.core.results import OperationResult
from app.features.base_store import BaseStore
from app.schemas.order import Order, OrderCreate
from app.utils.formatters import generate_order_number
from app.utils.timezone import get_today_utc, utc_now_iso


class OrderStore(BaseStore[Order]):
    """Store for dispatch orders."""

    table = Table.ORDERS
    model = Order

    @property
    def orders(self) -> List[Order]:
        return self.items

    def fetch_orders(self) -> OperationResult[List[Order]]:
        """Load all orders, newest first."""
        def load() -> List[Order]:
            rows = self.client.select(self.table, order="date", descending=True)
            return [self._from_row(row) for row in rows]

        return self._fetch("fetch_orders", load)

    def create_order(self, data: OrderCreate) -> OperationResult[Order]:
        """
        Number the order from the current timestamp, insert it and put it
        first in the cache.

        Args:
            data: Order fields; date defaults to now

        Returns:
            Result with the created order
        """
        payload = data.model_dump(by_alias=True, mode="json")
        payload["number"] = generate_order_number()
        if not payload.get("date"):
            payload["date"] = utc_now_iso()

        try:
            order = self._from_row(self.client.insert(self.table, payload))
        except DataServiceError as e:
            return self._remote_failure("create_order", e)
        except SchemaError as e:
            return self._unexpected_row("create_order", e)

        self._prepend(order)
        self.logger.info(f"Order created: {order.number} for {order.branch}")
        return OperationResult.ok(order)

    def update_order_status(self, order_id: str, status: OrderStatus) -> OperationResult[Optional[Order]]:
        """Change the status remotely, then patch only the cached status."""
        status = OrderStatus(status)
        try:
            self.client.update(self.table, order_id, {"status": status.value})
        except DataServiceError as e:
            return self._remote_failure("update_order_status", e)

        self.logger.info(f"Order {order_id} status -> {status.value}")
        return OperationResult.ok(self._merge(order_id, {"status": status}))

    def get_order(self, order_id: str) -> Optional[Order]:
        """Cached order by id."""
        return self._find(order_id)

    def get_pending_orders(self) -> List[Order]:
        """Cached orders still pending."""
        return self._filter(lambda o: o.status == OrderStatus.PENDING)

    def get_today_orders(self, today: Optional[str] = None) -> List[Order]:
        """
        Cached orders whose date starts with today's YYYY-MM-DD (UTC).

        Stored dates are compared as text; no timezone normalization is done.
        """
        today = today or get_today_utc()
        return self._filter(lambda o: (o.date or "").startswith(today))

    def search_orders(self, term: str) -> List[Order]:
        """Case-insensitive match on number, branch or carrier."""
        term = (term or "").strip().lower()
        if not term:
            return list(self.items)
        return self._filter(
            lambda o: term in o.number.lower() or term in o.branch.lower() or term in o.carrier.lower()
        )
