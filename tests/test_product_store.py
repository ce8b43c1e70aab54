"""
Tests for ProductStore.
"""
import pytest
from pydantic import ValidationError
from app.core.results import ErrorKind
from app.features.base_store import UNEXPECTED_RESPONSE
from app.features.products.store import ProductStore
from app.schemas.product import ProductCreate, ProductUpdate
from tests.conftest import product_row


def seeded_store(fake):
    fake.seed(
        "products",
        product_row("P2", "LMP-002", "Detergente", stock=5),
        product_row("P1", "LMP-001", "Cloro", stock=10),
        product_row("P3", "ABR-001", "Guantes", category="Protección", stock=40),
    )
    store = ProductStore(fake, low_stock_threshold=10)
    assert store.fetch_products().success
    return store


def test_fetch_products_orders_by_name_and_clears_loading(fake):
    store = seeded_store(fake)

    assert [p.name for p in store.products] == ["Cloro", "Detergente", "Guantes"]
    assert store.loading is False


def test_fetch_failure_keeps_previous_cache(fake):
    store = seeded_store(fake)
    fake.fail_on("products.select")

    result = store.fetch_products()

    assert not result.success
    assert result.error == ErrorKind.REMOTE_FAILURE
    assert len(store.products) == 3
    assert store.loading is False


def test_add_product_appends_without_resorting(fake):
    store = seeded_store(fake)

    result = store.add_product(ProductCreate(code="AAA-1", name="Aceite", category="Cocina", stock=3, branch="Osorno"))

    assert result.success
    assert store.products[-1].name == "Aceite"
    assert store.products[-1].id == result.data.id


def test_add_product_failure_leaves_cache(fake):
    store = seeded_store(fake)
    fake.fail_on("products.insert")

    result = store.add_product(ProductCreate(code="X", name="X", category="X", branch="Osorno"))

    assert result.error == ErrorKind.REMOTE_FAILURE
    assert len(store.products) == 3


def test_update_product_merges_only_sent_fields(fake):
    store = seeded_store(fake)

    result = store.update_product("P1", ProductUpdate(name="Cloro Gel"))

    assert result.success
    product = next(p for p in store.products if p.id == "P1")
    assert product.name == "Cloro Gel"
    assert product.stock == 10
    assert ("products.update", "P1", {"name": "Cloro Gel"}) in fake.calls


def test_update_product_failure_leaves_cache(fake):
    store = seeded_store(fake)
    fake.fail_on("products.update")

    store.update_product("P1", ProductUpdate(name="Otro"))

    assert next(p for p in store.products if p.id == "P1").name == "Cloro"


def test_delete_product_removes_from_cache(fake):
    store = seeded_store(fake)

    assert store.delete_product("P2").success
    assert "P2" not in [p.id for p in store.products]


def test_update_stock_applies_delta(fake):
    store = seeded_store(fake)

    result = store.update_stock("P1", -4)

    assert result.success
    assert result.data.stock == 6
    assert fake.tables["products"][1]["stock"] == 6


def test_update_stock_to_exactly_zero_is_allowed(fake):
    store = seeded_store(fake)

    result = store.update_stock("P2", -5)

    assert result.success
    assert result.data.stock == 0


def test_update_stock_rejects_negative_without_remote_call(fake):
    store = seeded_store(fake)

    result = store.update_stock("P2", -6)

    assert result.error == ErrorKind.INSUFFICIENT_STOCK
    assert result.context == {"product": "Detergente", "available": 5, "requested": 6}
    assert not fake.called("products.update")
    assert next(p for p in store.products if p.id == "P2").stock == 5


def test_update_stock_unknown_product(fake):
    store = seeded_store(fake)

    result = store.update_stock("missing", 1)

    assert result.error == ErrorKind.NOT_FOUND
    assert not fake.called("products.update")


def test_check_low_stock_includes_threshold(fake):
    store = seeded_store(fake)

    assert sorted(p.id for p in store.check_low_stock()) == ["P1", "P2"]


def test_search_products_matches_code_name_and_category(fake):
    store = seeded_store(fake)

    assert [p.id for p in store.search_products("abr")] == ["P3"]
    assert [p.id for p in store.search_products("CLORO")] == ["P1"]
    assert len(store.search_products("limpieza")) == 2
    assert len(store.search_products("")) == 3


def test_stock_by_category(fake):
    store = seeded_store(fake)

    points = {p.label: p.value for p in store.stock_by_category()}

    assert points == {"Limpieza": 15, "Protección": 40}


def test_check_low_stock_empty_when_nothing_qualifies(fake):
    fake.seed("products", product_row("P1", "LMP-001", "Cloro", stock=11))
    store = ProductStore(fake, low_stock_threshold=10)

    assert store.check_low_stock() == []
    store.fetch_products()
    assert store.check_low_stock() == []


def test_stock_by_product_keeps_cache_order(fake):
    store = seeded_store(fake)

    points = [(p.label, p.value) for p in store.stock_by_product()]

    assert points == [("Cloro", 10), ("Detergente", 5), ("Guantes", 40)]


def test_product_update_rejects_null_fields():
    with pytest.raises(ValidationError):
        ProductUpdate(stock=None)
    with pytest.raises(ValidationError):
        ProductUpdate.model_validate({"name": None})

    assert ProductUpdate.model_validate({}).model_dump(exclude_unset=True) == {}


def test_add_product_malformed_row_leaves_cache(fake, monkeypatch):
    store = seeded_store(fake)
    monkeypatch.setattr(fake, "insert", lambda table, row: {"id": "X"})

    result = store.add_product(ProductCreate(code="X", name="X", category="X", branch="Osorno"))

    assert result.error == ErrorKind.REMOTE_FAILURE
    assert result.detail == UNEXPECTED_RESPONSE
    assert len(store.products) == 3
