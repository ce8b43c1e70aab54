"""
HTTP client for the hosted data service.
Table access goes through the PostgREST API (/rest/v1) and identities
through the auth API (/auth/v1).
"""
import logging
from typing import Any, Dict, List, Optional
import requests
from app.core.exceptions import AuthenticationError, DataServiceError

logger = logging.getLogger(__name__)


class DataServiceClient:
    """
    Client for the remote data service.

    Handles table select/insert/update/delete and the authentication
    subsystem (sign-in, sign-up, session lookup, sign-out). After a
    successful sign-in the access token is kept and sent with every
    table call so rows are read and written as that user.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        service_key: str = "",
        timeout: float = 15.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize data service client.

        Args:
            url: Base URL of the service (e.g. https://xyz.supabase.co)
            anon_key: Public API key
            service_key: Service-role key, only needed for identity deletion
            timeout: Per-request timeout in seconds
            session: Optional requests session (tests inject one)
        """
        self.url = url.rstrip('/')
        self.anon_key = anon_key
        self.service_key = service_key
        self.timeout = timeout
        self.access_token: Optional[str] = None
        self.http = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level
    # ------------------------------------------------------------------

    def _headers(self, extra: Optional[Dict[str, str]] = None, use_service_key: bool = False) -> Dict[str, str]:
        """Build request headers with api key and bearer token."""
        bearer = self.access_token or self.anon_key
        api_key = self.anon_key
        if use_service_key:
            bearer = self.service_key
            api_key = self.service_key

        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {bearer}",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        use_service_key: bool = False,
        retry: int = 1
    ) -> requests.Response:
        """
        Send a request and raise DataServiceError on failure.

        Args:
            method: HTTP method
            path: Path relative to the service URL
            operation: Operation name used in errors and logs
            params: Query parameters
            json: JSON body
            headers: Extra headers
            use_service_key: Authenticate with the service-role key
            retry: Number of retries for connection errors

        Returns:
            Successful response

        Raises:
            DataServiceError: If the request fails or returns an error status
        """
        if not self.url:
            raise DataServiceError(operation, "DATA_SERVICE_URL is not configured")

        for attempt in range(retry + 1):
            try:
                response = self.http.request(
                    method,
                    f"{self.url}{path}",
                    params=params,
                    json=json,
                    headers=self._headers(headers, use_service_key),
                    timeout=self.timeout
                )
            except requests.ConnectionError as e:
                if attempt < retry:
                    logger.warning(f"Connection error on {operation}, retrying: {str(e)}")
                    continue
                raise DataServiceError(operation, f"Failed after {retry} retries: {str(e)}")
            except requests.RequestException as e:
                raise DataServiceError(operation, str(e))

            if not response.ok:
                raise DataServiceError(
                    operation,
                    self._error_message(response),
                    details={"operation": operation, "status": response.status_code}
                )
            return response

    @staticmethod
    def _json(response: requests.Response, operation: str) -> Any:
        """Decode a successful response body."""
        try:
            return response.json()
        except ValueError:
            raise DataServiceError(operation, f"Invalid JSON in response (HTTP {response.status_code})")

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the error message from an error response."""
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"

        if isinstance(body, dict):
            for key in ("message", "msg", "error_description", "error"):
                if body.get(key):
                    return str(body[key])
        return f"HTTP {response.status_code}"

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        descending: bool = False
    ) -> List[Dict]:
        """
        Read rows from a table.

        Args:
            table: Table name
            columns: PostgREST select expression (supports embedded joins)
            filters: Equality filters {column: value}
            order: Column to order by
            descending: Order direction

        Returns:
            List of row dictionaries
        """
        params: Dict[str, Any] = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        if order:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"

        response = self._request("GET", f"/rest/v1/{table}", f"{table}.select", params=params)
        return self._json(response, f"{table}.select")

    def insert(self, table: str, row: Dict) -> Dict:
        """
        Insert one row and return it as stored.

        Args:
            table: Table name
            row: Column values

        Returns:
            Created row
        """
        response = self._request(
            "POST",
            f"/rest/v1/{table}",
            f"{table}.insert",
            json=[row],
            headers={"Prefer": "return=representation"}
        )
        rows = self._json(response, f"{table}.insert")
        if not rows or not isinstance(rows, list):
            raise DataServiceError(f"{table}.insert", "No row returned")
        return rows[0]

    def update(self, table: str, record_id: str, values: Dict) -> None:
        """
        Update the row with the given id.

        Args:
            table: Table name
            record_id: Row id
            values: Column values to change
        """
        self._request(
            "PATCH",
            f"/rest/v1/{table}",
            f"{table}.update",
            params={"id": f"eq.{record_id}"},
            json=values
        )

    def delete(self, table: str, record_id: str) -> None:
        """
        Delete the row with the given id.

        Args:
            table: Table name
            record_id: Row id
        """
        self._request(
            "DELETE",
            f"/rest/v1/{table}",
            f"{table}.delete",
            params={"id": f"eq.{record_id}"}
        )

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def sign_in(self, email: str, password: str) -> Dict:
        """
        Sign in with email and password.

        Returns:
            Identity dictionary (id, email, user_metadata)

        Raises:
            AuthenticationError: If the credentials are rejected or the call fails
        """
        try:
            response = self._request(
                "POST",
                "/auth/v1/token",
                "auth.sign_in",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                retry=0
            )
            body = self._json(response, "auth.sign_in")
        except DataServiceError as e:
            raise AuthenticationError(e.message, details=e.details)

        self.access_token = body.get("access_token")
        identity = body.get("user")
        if not self.access_token or not identity:
            self.access_token = None
            raise AuthenticationError("Sign-in response carried no session")
        return identity

    def sign_up(self, email: str, password: str, metadata: Optional[Dict] = None) -> Optional[Dict]:
        """
        Create a new identity.

        Args:
            email: Email address
            password: Password
            metadata: Auxiliary user metadata (role, name, ...)

        Returns:
            Created identity, or None if the service returned none
        """
        response = self._request(
            "POST",
            "/auth/v1/signup",
            "auth.sign_up",
            json={"email": email, "password": password, "data": metadata or {}},
            retry=0
        )
        body = self._json(response, "auth.sign_up")
        # Depending on email confirmation settings the identity is nested or top level
        if isinstance(body, dict) and isinstance(body.get("user"), dict):
            return body["user"]
        if isinstance(body, dict) and body.get("id"):
            return body
        return None

    def delete_identity(self, identity_id: str) -> None:
        """Delete an identity. Requires the service-role key."""
        if not self.service_key:
            raise DataServiceError("auth.delete_identity", "DATA_SERVICE_SERVICE_KEY is not configured")
        self._request(
            "DELETE",
            f"/auth/v1/admin/users/{identity_id}",
            "auth.delete_identity",
            use_service_key=True,
            retry=0
        )

    def get_session(self) -> Optional[Dict]:
        """
        Get the identity of the current session.

        Returns:
            Identity dictionary, or None if there is no valid session
        """
        if not self.access_token:
            return None

        try:
            response = self._request("GET", "/auth/v1/user", "auth.get_session")
        except DataServiceError as e:
            if e.details.get("status") == 401:
                self.access_token = None
                return None
            raise
        return self._json(response, "auth.get_session")

    def sign_out(self) -> None:
        """Sign out remotely. The local token is always cleared."""
        try:
            if self.access_token:
                self._request("POST", "/auth/v1/logout", "auth.sign_out", retry=0)
        finally:
            self.access_token = None

    def is_authenticated(self) -> bool:
        """Check if client holds a session token."""
        return self.access_token is not None
