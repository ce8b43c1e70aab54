"""
Common schemas shared across features.
"""
from enum import Enum
from typing import Optional, Any, Dict
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response schema."""
    message: str
    success: bool = False
    details: Optional[Dict[str, Any]] = None


class NotificationLevel(str, Enum):
    """Toast level shown by the dashboard."""
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """Transient user-facing notification (toast)."""
    level: NotificationLevel
    message: str


class StoreResponse(BaseModel):
    """Response of a store operation triggered from the dashboard."""
    success: bool
    message: str
    notification: Notification
    error: Optional[str] = None
    data: Optional[Any] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    environment: str
    data_service_configured: bool
    authenticated: bool
