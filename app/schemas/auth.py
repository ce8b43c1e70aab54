"""
Authentication schemas.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from app.core.constants import UserRole


class LoginRequest(BaseModel):
    """Login request schema."""
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "bodega@surinnova.cl",
                "password": "secreto123"
            }
        }


class AuthUser(BaseModel):
    """Identity of the signed-in dashboard user."""
    id: str
    email: str
    role: UserRole

    class Config:
        json_schema_extra = {
            "example": {
                "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                "email": "bodega@surinnova.cl",
                "role": "bodeguero"
            }
        }


class SessionResponse(BaseModel):
    """Current session state of the auth store."""
    authenticated: bool
    loading: bool
    user: Optional[AuthUser] = None
