"""
User administration store.
"""
from typing import List, Optional
from pydantic import ValidationError as SchemaError
from app.core.constants import Table
from app.core.exceptions import DataServiceError
from app.core.results import ErrorKind, OperationResult
from app.features.base_store import BaseStore
from app.infrastructure.dataservice import DataServiceClient
from app.schemas.user import User, UserCreate, UserUpdate
from app.utils.timezone import utc_now_iso


class UserStore(BaseStore[User]):
    """Store for user profiles."""

    table = Table.USERS
    model = User

    def __init__(self, client: DataServiceClient, compensate_failed_registration: bool = False):
        """
        Initialize user store.

        Args:
            client: Data service client
            compensate_failed_registration: Delete the new identity when its
                profile cannot be created
        """
        super().__init__(client)
        self.compensate_failed_registration = compensate_failed_registration

    @property
    def users(self) -> List[User]:
        return self.items

    def fetch_users(self) -> OperationResult[List[User]]:
        """Load all user profiles ordered by name."""
        def load() -> List[User]:
            rows = self.client.select(self.table, order="name")
            return [self._from_row(row) for row in rows]

        return self._fetch("fetch_users", load)

    def _profile_payload(self, profile: UserCreate) -> dict:
        payload = profile.model_dump(by_alias=True, mode="json")
        payload["lastActivity"] = utc_now_iso()
        return payload

    def add_user(self, data: UserCreate) -> OperationResult[User]:
        """Insert a profile stamped with lastActivity and append it to the cache."""
        try:
            user = self._from_row(self.client.insert(self.table, self._profile_payload(data)))
        except DataServiceError as e:
            return self._remote_failure("add_user", e)
        except SchemaError as e:
            return self._unexpected_row("add_user", e)

        self._append(user)
        return OperationResult.ok(user)

    def update_user(self, user_id: str, updates: UserUpdate) -> OperationResult[Optional[User]]:
        """Send a partial update, then merge it into the cached profile."""
        try:
            self.client.update(self.table, user_id, updates.model_dump(exclude_unset=True, by_alias=True, mode="json"))
        except DataServiceError as e:
            return self._remote_failure("update_user", e)

        return OperationResult.ok(self._merge(user_id, updates.model_dump(exclude_unset=True)))

    def delete_user(self, user_id: str) -> OperationResult[None]:
        """Delete a profile remotely, then drop it from the cache."""
        try:
            self.client.delete(self.table, user_id)
        except DataServiceError as e:
            return self._remote_failure("delete_user", e)

        self._remove(user_id)
        return OperationResult.ok()

    def register_user(self, email: str, password: str, profile: UserCreate) -> OperationResult[Optional[User]]:
        """
        Create an identity, then a profile keyed by the identity id.

        The two steps are not atomic. If the profile insert fails the
        identity stays behind without a profile (unless compensation is
        enabled, in which case its deletion is attempted once) and the cache
        is not touched.

        Args:
            email: Sign-in email for the identity
            password: Password for the identity
            profile: Profile fields; role and names are also sent as identity metadata

        Returns:
            Result with the new profile. data is None when the service
            created no identity (e.g. pending email confirmation).
        """
        metadata = {
            "role": profile.role.value,
            "name": profile.name,
            "lastName": profile.last_name,
        }

        try:
            identity = self.client.sign_up(email, password, metadata)
        except DataServiceError as e:
            return self._remote_failure("register_user", e)

        if not identity or not identity.get("id"):
            self.logger.info(f"Sign-up for {email} returned no identity; profile not created")
            return OperationResult.ok(None)

        identity_id = identity["id"]
        payload = self._profile_payload(profile)
        payload["id"] = identity_id

        try:
            row = self.client.insert(self.table, payload)
        except DataServiceError as e:
            compensated = self._compensate(identity_id)
            if not compensated:
                self.logger.warning(f"Identity {identity_id} ({email}) left without profile: {e.message}")
            return OperationResult.fail(
                ErrorKind.INCOMPLETE_REGISTRATION,
                detail=e.message,
                context={"identity_id": identity_id, "compensated": compensated}
            )

        try:
            user = self._from_row(row)
        except SchemaError as e:
            return self._unexpected_row("register_user", e)

        self._append(user)
        self.logger.info(f"User registered: {email} ({identity_id})")
        return OperationResult.ok(user)

    def _compensate(self, identity_id: str) -> bool:
        """Best-effort deletion of an identity whose profile insert failed."""
        if not self.compensate_failed_registration:
            return False
        try:
            self.client.delete_identity(identity_id)
        except DataServiceError as e:
            self.logger.error(f"Could not delete orphaned identity {identity_id}: {e.message}")
            return False
        self.logger.info(f"Deleted orphaned identity {identity_id}")
        return True
