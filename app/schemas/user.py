"""
User-related schemas.
"""
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from app.schemas.common import Notification
from app.core.constants import UserRole


class UserBase(BaseModel):
    """Base user profile schema."""
    email: EmailStr = Field(..., description="Email address")
    name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(default="", alias="lastName", max_length=100, description="Last name")
    role: UserRole = Field(..., description="User role")
    active: bool = Field(default=True, description="Whether the user can use the dashboard")

    class Config:
        populate_by_name = True


class UserCreate(UserBase):
    """Schema for creating a user profile."""

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "email": "jperez@surinnova.cl",
                "name": "Juan",
                "lastName": "Pérez",
                "role": "bodeguero",
                "active": True
            }
        }


class UserUpdate(BaseModel):
    """Schema for updating a user profile."""
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=100)
    role: Optional[UserRole] = None
    active: Optional[bool] = None

    @field_validator('*', mode='before')
    @classmethod
    def reject_null(cls, v):
        """Omit a field to leave it unchanged; null is not a value."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    class Config:
        populate_by_name = True


class User(UserBase):
    """User profile as stored in the remote service."""
    id: str
    email: str
    last_activity: Optional[str] = Field(None, alias="lastActivity")

    class Config:
        populate_by_name = True


class RegisterUserRequest(BaseModel):
    """Create an identity and its profile in one request."""
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    profile: UserCreate

    class Config:
        json_schema_extra = {
            "example": {
                "password": "Secreto123",
                "profile": {
                    "email": "jperez@surinnova.cl",
                    "name": "Juan",
                    "lastName": "Pérez",
                    "role": "personal",
                    "active": True
                }
            }
        }


class UserListResponse(BaseModel):
    """Schema for list of users."""
    users: List[User]
    total: int
    loading: bool
    notification: Optional[Notification] = Field(None, description="Set when the list was reloaded")
