"""
Dispatch order schemas.
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from app.schemas.common import Notification
from app.core.constants import OrderStatus


class OrderProduct(BaseModel):
    """Product line of an order."""
    product_id: str = Field(..., alias="productId")
    quantity: int = Field(..., gt=0)

    class Config:
        populate_by_name = True


class OrderCreate(BaseModel):
    """Request to create a dispatch order. The number is generated on creation."""
    date: Optional[str] = Field(None, description="Order date (ISO); defaults to now")
    delivery_date: str = Field(..., alias="deliveryDate")
    products: List[OrderProduct] = Field(..., min_length=1)
    branch: str
    address: str = ""
    carrier: str = ""
    carrier_phone: str = Field(default="", alias="carrierPhone")
    delivery_policy: str = Field(default="", alias="deliveryPolicy")
    authorized_by: str = Field(default="", alias="authorizedBy")
    additional_info: str = Field(default="", alias="additionalInfo")
    status: OrderStatus = OrderStatus.PENDING

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "deliveryDate": "2024-05-10",
                "products": [{"productId": "P1", "quantity": 2}],
                "branch": "Osorno",
                "address": "Av. Matta 123",
                "carrier": "Transportes Sur",
                "carrierPhone": "+56 9 1234 5678",
                "deliveryPolicy": "Entrega en horario hábil",
                "authorizedBy": "Supervisor de turno",
                "additionalInfo": ""
            }
        }


class Order(BaseModel):
    """Order record. Only status changes after creation."""
    id: str
    number: str
    date: str
    delivery_date: str = Field(default="", alias="deliveryDate")
    products: List[OrderProduct] = []
    branch: str
    address: str = ""
    carrier: str = ""
    carrier_phone: str = Field(default="", alias="carrierPhone")
    delivery_policy: str = Field(default="", alias="deliveryPolicy")
    authorized_by: str = Field(default="", alias="authorizedBy")
    additional_info: str = Field(default="", alias="additionalInfo")
    status: OrderStatus = OrderStatus.PENDING

    class Config:
        populate_by_name = True


class OrderStatusUpdate(BaseModel):
    """New status for an order."""
    status: OrderStatus


class OrderListResponse(BaseModel):
    """Cached order list."""
    orders: List[Order]
    total: int
    loading: bool
    notification: Optional[Notification] = Field(None, description="Set when the list was reloaded")
