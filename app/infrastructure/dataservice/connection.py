"""
Data service connection manager.
Builds the client from settings and reports its status.
"""
from typing import Optional
from app.core.config import Settings
from app.infrastructure.dataservice.client import DataServiceClient


class DataServiceManager:
    """
    Owns the DataServiceClient of one application instance.

    The application creates one manager at startup and keeps it in
    app.state; tests build their own with a fake client.
    """

    def __init__(self, settings: Settings, client: Optional[DataServiceClient] = None):
        self.settings = settings
        self._client = client

    def get_client(self) -> DataServiceClient:
        """
        Get the data service client, creating it on first use.

        Returns:
            Data service client
        """
        if self._client is None:
            self._client = DataServiceClient(
                url=self.settings.DATA_SERVICE_URL,
                anon_key=self.settings.DATA_SERVICE_ANON_KEY,
                service_key=self.settings.DATA_SERVICE_SERVICE_KEY,
                timeout=self.settings.DATA_SERVICE_TIMEOUT_SECONDS
            )
        return self._client

    def is_configured(self) -> bool:
        """Check if the service URL and key are set."""
        return bool(self.settings.DATA_SERVICE_URL and self.settings.DATA_SERVICE_ANON_KEY)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._client is not None and hasattr(self._client, "http"):
            self._client.http.close()
        self._client = None

    def get_connection_status(self) -> dict:
        """
        Get status of the connection.

        Returns:
            Dictionary with connection status
        """
        client = self._client
        return {
            "configured": self.is_configured(),
            "url": self.settings.DATA_SERVICE_URL or None,
            "authenticated": bool(client and client.is_authenticated())
        }
