"""
Inventory movement store.

Movements are append-only: there are no update or delete operations, and
registering a movement does not change product stock.
"""
from typing import Any, Dict, List, Optional
from pydantic import ValidationError as SchemaError
from app.core.constants import MovementType, RECENT_MOVEMENTS_LIMIT, Table
from app.core.exceptions import DataServiceError
from app.core.results import OperationResult
from app.features.base_store import BaseStore
from app.infrastructure.dataservice import DataServiceClient
from app.schemas.movement import Movement, MovementCreate
from app.utils.timezone import utc_now_iso

# Movement rows joined with product and user display names
MOVEMENT_COLUMNS = "*, products(name), users(name)"


def _display_name(row: Dict[str, Any], flat_key: str, join_key: str) -> Optional[str]:
    """Display name from a flat column or an embedded join."""
    if row.get(flat_key):
        return row[flat_key]
    joined = row.get(join_key)
    if isinstance(joined, dict):
        return joined.get("name")
    return None


def movement_from_row(row: Dict[str, Any]) -> Movement:
    """Build a Movement from a remote row, flattening joined names."""
    data = {k: v for k, v in row.items() if k not in ("products", "users")}
    data["product"] = _display_name(row, "product", "products")
    data["user"] = _display_name(row, "user", "users")
    return Movement.model_validate(data)


class InventoryStore(BaseStore[Movement]):
    """Store for inventory movements."""

    table = Table.INVENTORY_MOVEMENTS
    model = Movement

    def __init__(self, client: DataServiceClient, recent_limit: int = RECENT_MOVEMENTS_LIMIT):
        super().__init__(client)
        self.recent_limit = recent_limit

    @property
    def movements(self) -> List[Movement]:
        return self.items

    def _from_row(self, row: Dict[str, Any]) -> Movement:
        return movement_from_row(row)

    def fetch_movements(self) -> OperationResult[List[Movement]]:
        """Load all movements with product and user names, newest first."""
        def load() -> List[Movement]:
            rows = self.client.select(self.table, columns=MOVEMENT_COLUMNS, order="date", descending=True)
            return [self._from_row(row) for row in rows]

        return self._fetch("fetch_movements", load)

    def register_movement(
        self,
        data: MovementCreate,
        product_name: Optional[str] = None,
        user_name: Optional[str] = None
    ) -> OperationResult[Movement]:
        """
        Stamp the current time, insert, and put the movement first in the cache.

        Args:
            data: Movement to register
            product_name: Display name kept on the cached record only
            user_name: Display name kept on the cached record only

        Returns:
            Result with the created movement
        """
        payload = data.model_dump(by_alias=True, mode="json")
        payload["date"] = utc_now_iso()

        try:
            movement = self._from_row(self.client.insert(self.table, payload))
        except DataServiceError as e:
            return self._remote_failure("register_movement", e)
        except SchemaError as e:
            return self._unexpected_row("register_movement", e)

        if movement.product is None or movement.user is None:
            movement = movement.model_copy(update={
                "product": movement.product or product_name,
                "user": movement.user or user_name,
            })

        self._prepend(movement)
        self.logger.info(
            f"Movement registered: {movement.type.value} {movement.quantity} x {movement.product_id}"
        )
        return OperationResult.ok(movement)

    def get_movements_by_type(self, movement_type: MovementType) -> List[Movement]:
        """Cached movements of one type."""
        movement_type = MovementType(movement_type)
        return self._filter(lambda m: m.type == movement_type)

    def get_recent_movements(self, limit: Optional[int] = None) -> List[Movement]:
        """First `limit` cached movements (newest first after a fetch)."""
        if limit is None:
            limit = self.recent_limit
        return list(self.items[:max(limit, 0)])
