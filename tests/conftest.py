"""
Shared fixtures.

FakeDataService stands in for DataServiceClient: tables are kept in memory,
every call is recorded, and any operation can be made to fail.
"""
import copy
from collections import defaultdict
from typing import Dict, List, Optional
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.exceptions import AuthenticationError, DataServiceError
from app.features.container import StoreContainer
from app.infrastructure.dataservice import DataServiceManager
from app.main import create_app


class FakeDataService:
    """In-memory data service with the DataServiceClient interface."""

    def __init__(self):
        self.tables: Dict[str, List[Dict]] = defaultdict(list)
        self.identities: Dict[str, Dict] = {}
        self.passwords: Dict[str, str] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[str, str] = {}
        self.access_token: Optional[str] = None
        self.current_identity: Optional[Dict] = None
        self.sign_up_returns_identity = True
        self._next_id = 1

    # Test helpers

    def fail_on(self, operation: str, message: str = "service unavailable") -> None:
        """Make every call to operation (e.g. "products.insert") fail."""
        self.failures[operation] = message

    def seed(self, table: str, *rows: Dict) -> None:
        self.tables[table].extend(copy.deepcopy(rows))

    def add_identity(self, email: str, password: str, role: Optional[str] = None) -> Dict:
        identity = {
            "id": self._new_id("auth"),
            "email": email,
            "user_metadata": {"role": role} if role else {},
        }
        self.identities[identity["id"]] = identity
        self.passwords[email] = password
        return identity

    def called(self, operation: str) -> bool:
        return any(call[0] == operation for call in self.calls)

    def _new_id(self, prefix: str) -> str:
        value = f"{prefix}-{self._next_id}"
        self._next_id += 1
        return value

    def _check(self, operation: str, *args) -> None:
        self.calls.append((operation, *args))
        if operation in self.failures:
            raise DataServiceError(operation, self.failures[operation])

    # Tables

    def select(self, table, columns="*", filters=None, order=None, descending=False):
        self._check(f"{table}.select", columns)
        rows = [copy.deepcopy(row) for row in self.tables[table]]
        for column, value in (filters or {}).items():
            rows = [row for row in rows if row.get(column) == value]
        if order:
            rows.sort(key=lambda row: row.get(order) or "", reverse=descending)
        return rows

    def insert(self, table, row):
        self._check(f"{table}.insert", row)
        stored = copy.deepcopy(row)
        stored.setdefault("id", self._new_id(table))
        self.tables[table].append(stored)
        return copy.deepcopy(stored)

    def update(self, table, record_id, values):
        self._check(f"{table}.update", record_id, values)
        for row in self.tables[table]:
            if row.get("id") == record_id:
                row.update(copy.deepcopy(values))

    def delete(self, table, record_id):
        self._check(f"{table}.delete", record_id)
        self.tables[table] = [row for row in self.tables[table] if row.get("id") != record_id]

    # Authentication

    def sign_in(self, email, password):
        self.calls.append(("auth.sign_in", email))
        if "auth.sign_in" in self.failures or self.passwords.get(email) != password:
            raise AuthenticationError("Data service auth.sign_in failed: Invalid login credentials")
        identity = next(i for i in self.identities.values() if i["email"] == email)
        self.access_token = f"token-{identity['id']}"
        self.current_identity = identity
        return copy.deepcopy(identity)

    def sign_up(self, email, password, metadata=None):
        self._check("auth.sign_up", email, metadata)
        if not self.sign_up_returns_identity:
            return None
        identity = {"id": self._new_id("auth"), "email": email, "user_metadata": dict(metadata or {})}
        self.identities[identity["id"]] = identity
        self.passwords[email] = password
        return copy.deepcopy(identity)

    def delete_identity(self, identity_id):
        self._check("auth.delete_identity", identity_id)
        self.identities.pop(identity_id, None)

    def get_session(self):
        self._check("auth.get_session")
        if not self.access_token:
            return None
        return copy.deepcopy(self.current_identity)

    def sign_out(self):
        try:
            self._check("auth.sign_out")
        finally:
            self.access_token = None
            self.current_identity = None

    def is_authenticated(self):
        return self.access_token is not None


def product_row(id, code, name, category="Limpieza", stock=20, branch="Osorno"):
    return {"id": id, "code": code, "name": name, "category": category, "stock": stock, "branch": branch}


def order_row(id, number, date, status="pending", branch="Osorno", carrier="Transportes Sur", products=None):
    return {
        "id": id,
        "number": number,
        "date": date,
        "deliveryDate": "2024-05-12",
        "products": products or [{"productId": "P1", "quantity": 2}],
        "branch": branch,
        "address": "Av. Matta 123",
        "carrier": carrier,
        "carrierPhone": "+56 9 1111 2222",
        "deliveryPolicy": "Horario hábil",
        "authorizedBy": "Supervisor",
        "additionalInfo": "",
        "status": status,
    }


@pytest.fixture
def settings():
    return Settings(DATA_SERVICE_URL="", DATA_SERVICE_ANON_KEY="", LOW_STOCK_THRESHOLD=10)


@pytest.fixture
def fake():
    return FakeDataService()


@pytest.fixture
def stores(fake, settings):
    return StoreContainer(fake, settings)


@pytest.fixture
def app(fake, settings):
    return create_app(DataServiceManager(settings, client=fake))


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def login(client, fake):
    """Sign in through the API with a fresh identity of the given role."""
    def _login(role="admin", email=None, password="secret123"):
        email = email or f"{role}@surinnova.cl"
        fake.add_identity(email, password, role)
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return response.json()["data"]

    return _login
