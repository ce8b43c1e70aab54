"""
Tests for UserStore, including the two-step registration.
"""
import pytest
from pydantic import ValidationError
from app.core.constants import UserRole
from app.core.results import ErrorKind
from app.features.base_store import UNEXPECTED_RESPONSE
from app.features.users.store import UserStore
from app.schemas.user import UserCreate, UserUpdate


def profile(**overrides):
    data = {"email": "jperez@surinnova.cl", "name": "Juan", "lastName": "Pérez", "role": "bodeguero"}
    data.update(overrides)
    return UserCreate(**data)


def test_add_user_stamps_last_activity(fake):
    store = UserStore(fake)

    result = store.add_user(profile())

    assert result.success
    assert result.data.last_activity
    assert store.users[-1].email == "jperez@surinnova.cl"
    assert "lastActivity" in fake.tables["users"][0]


def test_update_user_merges_aliased_fields(fake):
    store = UserStore(fake)
    user = store.add_user(profile()).data

    result = store.update_user(user.id, UserUpdate(lastName="González", active=False))

    assert result.success
    assert result.data.last_name == "González"
    assert result.data.active is False
    assert fake.tables["users"][0]["lastName"] == "González"


def test_delete_user(fake):
    store = UserStore(fake)
    user = store.add_user(profile()).data

    assert store.delete_user(user.id).success
    assert store.users == []


def test_register_user_creates_identity_and_profile(fake):
    store = UserStore(fake)

    result = store.register_user("jperez@surinnova.cl", "secret123", profile())

    assert result.success
    identity_id = next(iter(fake.identities))
    assert result.data.id == identity_id
    assert fake.identities[identity_id]["user_metadata"] == {
        "role": "bodeguero", "name": "Juan", "lastName": "Pérez"
    }
    assert store.users[0].role == UserRole.BODEGUERO


def test_register_user_profile_failure_leaves_orphan_identity(fake):
    store = UserStore(fake)
    fake.fail_on("users.insert")

    result = store.register_user("jperez@surinnova.cl", "secret123", profile())

    assert not result.success
    assert result.error == ErrorKind.INCOMPLETE_REGISTRATION
    assert result.context["compensated"] is False
    assert result.context["identity_id"] in fake.identities
    assert store.users == []
    assert not fake.called("auth.delete_identity")


def test_register_user_profile_failure_compensates_when_enabled(fake):
    store = UserStore(fake, compensate_failed_registration=True)
    fake.fail_on("users.insert")

    result = store.register_user("jperez@surinnova.cl", "secret123", profile())

    assert result.error == ErrorKind.INCOMPLETE_REGISTRATION
    assert result.context["compensated"] is True
    assert fake.identities == {}


def test_register_user_sign_up_failure(fake):
    store = UserStore(fake)
    fake.fail_on("auth.sign_up", "User already registered")

    result = store.register_user("jperez@surinnova.cl", "secret123", profile())

    assert result.error == ErrorKind.REMOTE_FAILURE
    assert "User already registered" in result.detail
    assert not fake.called("users.insert")


def test_register_user_without_identity_creates_no_profile(fake):
    store = UserStore(fake)
    fake.sign_up_returns_identity = False

    result = store.register_user("jperez@surinnova.cl", "secret123", profile())

    assert result.success
    assert result.data is None
    assert not fake.called("users.insert")
    assert store.users == []


def test_user_update_rejects_null_fields():
    with pytest.raises(ValidationError):
        UserUpdate.model_validate({"lastName": None})
    with pytest.raises(ValidationError):
        UserUpdate(active=None)


def test_add_user_malformed_row_leaves_cache(fake, monkeypatch):
    store = UserStore(fake)
    monkeypatch.setattr(fake, "insert", lambda table, row: {"id": "X"})

    result = store.add_user(profile())

    assert result.error == ErrorKind.REMOTE_FAILURE
    assert result.detail == UNEXPECTED_RESPONSE
    assert store.users == []


def test_register_user_malformed_profile_row(fake, monkeypatch):
    store = UserStore(fake)
    monkeypatch.setattr(fake, "insert", lambda table, row: {"id": "X"})

    result = store.register_user("jperez@surinnova.cl", "secret123", profile())

    assert result.error == ErrorKind.REMOTE_FAILURE
    assert result.detail == UNEXPECTED_RESPONSE
    assert store.users == []
