"""
Remote data service integration infrastructure.
"""
from app.infrastructure.dataservice.client import DataServiceClient
from app.infrastructure.dataservice.connection import DataServiceManager

__all__ = [
    "DataServiceClient",
    "DataServiceManager",
]
