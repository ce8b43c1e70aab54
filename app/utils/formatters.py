"""
Formatting utilities for order numbers and display values.
"""
from datetime import datetime
from typing import Optional
from app.core.constants import (
    ORDER_NUMBER_PREFIX,
    ORDER_STATUS_LABELS,
    MOVEMENT_TYPE_LABELS,
    OrderStatus,
    MovementType
)
from app.utils.timezone import epoch_millis


def generate_order_number(now: Optional[datetime] = None) -> str:
    """
    Generate an order number from the current timestamp.

    Uniqueness is not guaranteed when two sessions create orders in the
    same millisecond.

    Example:
        2024-01-01 00:00:00 UTC -> "OD1704067200000"
    """
    return f"{ORDER_NUMBER_PREFIX}{epoch_millis(now)}"


def format_order_status(status: OrderStatus) -> str:
    """Spanish label for an order status."""
    return ORDER_STATUS_LABELS.get(OrderStatus(status), str(status))


def format_movement_type(movement_type: MovementType) -> str:
    """Spanish label for a movement type."""
    return MOVEMENT_TYPE_LABELS.get(MovementType(movement_type), str(movement_type))


def truncate_text(text: str, max_length: int = 30) -> str:
    """Truncate text to max length."""
    text = text or ""
    return text[:max_length] if len(text) > max_length else text
