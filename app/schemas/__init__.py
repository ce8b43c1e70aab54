"""
Pydantic schemas for request/response validation.
"""
from app.schemas.common import (
    ErrorResponse,
    NotificationLevel,
    Notification,
    StoreResponse,
    HealthResponse
)
from app.schemas.auth import (
    LoginRequest,
    AuthUser,
    SessionResponse
)
from app.schemas.product import (
    ProductBase,
    ProductCreate,
    ProductUpdate,
    Product,
    StockChangeRequest,
    ProductListResponse,
    ChartPoint
)
from app.schemas.movement import (
    MovementCreate,
    Movement,
    MovementListResponse
)
from app.schemas.order import (
    OrderProduct,
    OrderCreate,
    Order,
    OrderStatusUpdate,
    OrderListResponse
)
from app.schemas.user import (
    UserBase,
    UserCreate,
    UserUpdate,
    User,
    RegisterUserRequest,
    UserListResponse
)
from app.schemas.dashboard import (
    DashboardStats,
    ActivityItem,
    DashboardSummary
)

__all__ = [
    # Common
    "ErrorResponse",
    "NotificationLevel",
    "Notification",
    "StoreResponse",
    "HealthResponse",
    # Auth
    "LoginRequest",
    "AuthUser",
    "SessionResponse",
    # Product
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "Product",
    "StockChangeRequest",
    "ProductListResponse",
    "ChartPoint",
    # Movement
    "MovementCreate",
    "Movement",
    "MovementListResponse",
    # Order
    "OrderProduct",
    "OrderCreate",
    "Order",
    "OrderStatusUpdate",
    "OrderListResponse",
    # User
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "User",
    "RegisterUserRequest",
    "UserListResponse",
    # Dashboard
    "DashboardStats",
    "ActivityItem",
    "DashboardSummary",
]
