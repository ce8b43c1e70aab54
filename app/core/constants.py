"""
Business constants and enums.
Centralizes magic numbers and strings.
"""
from enum import Enum


class UserRole(str, Enum):
    """User roles in the system."""
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    BODEGUERO = "bodeguero"
    PERSONAL = "personal"


class MovementType(str, Enum):
    """Inventory movement direction."""
    IN = "in"
    OUT = "out"


class OrderStatus(str, Enum):
    """Dispatch order status."""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Remote table names
class Table:
    """Remote data service tables."""
    PRODUCTS = "products"
    ORDERS = "orders"
    INVENTORY_MOVEMENTS = "inventory_movements"
    USERS = "users"


# Roles allowed to change products and register movements
WAREHOUSE_ROLES = (UserRole.ADMIN, UserRole.SUPERVISOR, UserRole.BODEGUERO)

# Default role when the identity carries no role metadata
DEFAULT_ROLE = UserRole.PERSONAL

# Stock
LOW_STOCK_THRESHOLD = 10

# Movements shown in "recent activity"
RECENT_MOVEMENTS_LIMIT = 10

# Order numbers are "OD" + epoch milliseconds
ORDER_NUMBER_PREFIX = "OD"

# Date format used for "today" comparisons (ISO calendar day)
ISO_DATE_FORMAT = "%Y-%m-%d"

# Display labels
ORDER_STATUS_LABELS = {
    OrderStatus.PENDING: "Pendiente",
    OrderStatus.COMPLETED: "Completado",
    OrderStatus.CANCELLED: "Cancelado",
}

MOVEMENT_TYPE_LABELS = {
    MovementType.IN: "Entrada",
    MovementType.OUT: "Salida",
}
