"""
Auth store: the signed-in identity of this dashboard.
"""
import logging
from typing import Dict, Optional
from app.core.constants import DEFAULT_ROLE, UserRole
from app.core.exceptions import DataServiceError
from app.core.results import ErrorKind, OperationResult
from app.infrastructure.dataservice import DataServiceClient
from app.schemas.auth import AuthUser

logger = logging.getLogger(__name__)


def auth_user_from_identity(identity: Dict) -> AuthUser:
    """
    Build the session user from a remote identity.

    The role comes from the identity metadata; unknown or missing roles
    fall back to the least privileged one.
    """
    metadata = identity.get("user_metadata") or {}
    app_metadata = identity.get("app_metadata") or {}
    raw_role = metadata.get("role") or app_metadata.get("role") or identity.get("role")

    try:
        role = UserRole(raw_role)
    except ValueError:
        role = DEFAULT_ROLE

    return AuthUser(id=str(identity["id"]), email=identity.get("email", ""), role=role)


class AuthStore:
    """
    Holds the current user and the startup loading flag.

    States: loading (before check_auth) -> resolved with a user or None.
    No token refresh is done.
    """

    def __init__(self, client: DataServiceClient):
        self.client = client
        self.user: Optional[AuthUser] = None
        self.loading = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def has_role(self, *roles: UserRole) -> bool:
        """Check if the current user has one of the roles."""
        return self.user is not None and self.user.role in roles

    def login(self, email: str, password: str) -> AuthUser:
        """
        Sign in and keep the identity.

        Raises:
            AuthenticationError: If sign-in fails; the caller decides what to show
        """
        identity = self.client.sign_in(email, password)
        self.user = auth_user_from_identity(identity)
        logger.info(f"User logged in: {self.user.email} ({self.user.role.value})")
        return self.user

    def logout(self) -> OperationResult[None]:
        """Sign out remotely and clear the local identity whatever the outcome."""
        try:
            self.client.sign_out()
        except DataServiceError as e:
            logger.error(f"Error in logout: {e.message}")
            return OperationResult.fail(ErrorKind.REMOTE_FAILURE, detail=e.message)
        finally:
            self.user = None
        return OperationResult.ok()

    def check_auth(self) -> OperationResult[Optional[AuthUser]]:
        """
        Resolve an existing session, if any, and clear the loading flag.

        A failed lookup resolves to no user.
        """
        try:
            identity = self.client.get_session()
        except DataServiceError as e:
            logger.error(f"Error in check_auth: {e.message}")
            self.user = None
            return OperationResult.fail(ErrorKind.REMOTE_FAILURE, detail=e.message)
        finally:
            self.loading = False

        self.user = auth_user_from_identity(identity) if identity else None
        return OperationResult.ok(self.user)
