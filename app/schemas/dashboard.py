"""
Dashboard schemas.
"""
from typing import List, Optional
from pydantic import BaseModel
from app.schemas.common import Notification


class DashboardStats(BaseModel):
    """Counters shown on the dashboard cards."""
    total_products: int
    pending_orders: int
    low_stock: int
    dispatches_today: int


class ActivityItem(BaseModel):
    """Entry of the recent activity feed."""
    kind: str
    action: str
    description: str
    timestamp: Optional[str] = None


class DashboardSummary(BaseModel):
    """Home dashboard."""
    welcome: str
    date: str
    stats: DashboardStats
    recent_activity: List[ActivityItem]
    notification: Optional[Notification] = None
