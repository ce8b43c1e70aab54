"""
Inventory movement schemas.
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from app.schemas.common import Notification
from app.core.constants import MovementType


class MovementCreate(BaseModel):
    """Request to register a movement. The date is stamped by the store."""
    type: MovementType = Field(..., description="in or out")
    product_id: str = Field(..., alias="productId", description="Product ID")
    quantity: int = Field(..., gt=0, description="Units moved")
    user_id: str = Field(..., alias="userId", description="User registering the movement")
    reason: str = Field(default="", description="Reason for the movement")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "type": "out",
                "productId": "P1",
                "quantity": 4,
                "userId": "U1",
                "reason": "Despacho a sucursal"
            }
        }


class Movement(BaseModel):
    """Movement record. Immutable once created."""
    id: str
    date: str
    type: MovementType
    product_id: str = Field(..., alias="productId")
    product: Optional[str] = None
    quantity: int
    user_id: str = Field(..., alias="userId")
    user: Optional[str] = None
    reason: str = ""

    class Config:
        populate_by_name = True


class MovementListResponse(BaseModel):
    """Cached movement list."""
    movements: List[Movement]
    total: int
    loading: bool
    notification: Optional[Notification] = Field(None, description="Set when the list was reloaded")
