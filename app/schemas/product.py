"""
Product-related schemas.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from app.schemas.common import Notification


class ProductBase(BaseModel):
    """Fields shared by product payloads."""
    code: str = Field(..., min_length=1, description="Internal product code")
    name: str = Field(..., min_length=1, description="Product name")
    category: str = Field(..., description="Product category")
    stock: int = Field(default=0, ge=0, description="Units on hand")
    branch: str = Field(..., description="Branch holding the stock")


class ProductCreate(ProductBase):
    """Schema for creating a product."""

    class Config:
        json_schema_extra = {
            "example": {
                "code": "LMP-001",
                "name": "Limpiador Multiuso 1L",
                "category": "Limpieza",
                "stock": 25,
                "branch": "Osorno"
            }
        }


class ProductUpdate(BaseModel):
    """Partial product update. Only the fields sent are changed."""
    code: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    branch: Optional[str] = None

    @field_validator('*', mode='before')
    @classmethod
    def reject_null(cls, v):
        """Omit a field to leave it unchanged; null is not a value."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class Product(ProductBase):
    """Product as stored in the remote service."""
    id: str
    stock: int = 0


class StockChangeRequest(BaseModel):
    """Apply a delta to a product's stock."""
    delta: int = Field(..., description="Units to add (positive) or remove (negative)")


class ProductListResponse(BaseModel):
    """Cached product list."""
    products: List[Product]
    total: int
    loading: bool
    notification: Optional[Notification] = Field(None, description="Set when the list was reloaded")


class ChartPoint(BaseModel):
    """Single bar of the products chart."""
    label: str
    value: int
