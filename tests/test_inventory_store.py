"""
Tests for InventoryStore.
"""
import re
from app.core.constants import MovementType
from app.core.results import ErrorKind
from app.features.inventory.store import InventoryStore, movement_from_row
from app.schemas.movement import MovementCreate
from tests.conftest import product_row


def movement_row(id, date, type="in", quantity=5):
    return {
        "id": id,
        "date": date,
        "type": type,
        "productId": "P1",
        "quantity": quantity,
        "userId": "U1",
        "reason": "Reposición",
        "products": {"name": "Cloro"},
        "users": {"name": "Ana"},
    }


def test_movement_from_row_flattens_joined_names():
    movement = movement_from_row(movement_row("M1", "2024-05-01T10:00:00.000Z"))

    assert movement.product == "Cloro"
    assert movement.user == "Ana"
    assert movement.product_id == "P1"


def test_fetch_movements_newest_first(fake):
    fake.seed(
        "inventory_movements",
        movement_row("M1", "2024-05-01T10:00:00.000Z"),
        movement_row("M2", "2024-05-03T10:00:00.000Z", type="out"),
        movement_row("M3", "2024-05-02T10:00:00.000Z"),
    )
    store = InventoryStore(fake)

    assert store.fetch_movements().success
    assert [m.id for m in store.movements] == ["M2", "M3", "M1"]
    assert fake.calls[-1][1] == "*, products(name), users(name)"


def test_register_movement_stamps_date_and_prepends(fake):
    fake.seed("inventory_movements", movement_row("M1", "2024-05-01T10:00:00.000Z"))
    fake.seed("products", product_row("P1", "LMP-001", "Cloro", stock=10))
    store = InventoryStore(fake)
    store.fetch_movements()

    result = store.register_movement(
        MovementCreate(type="out", productId="P1", quantity=3, userId="U1", reason="Despacho"),
        product_name="Cloro",
        user_name="ana@surinnova.cl"
    )

    assert result.success
    movement = store.movements[0]
    assert movement.id == result.data.id
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", movement.date)
    assert movement.product == "Cloro"
    assert movement.user == "ana@surinnova.cl"
    # Stock is not touched by movements
    assert fake.tables["products"][0]["stock"] == 10
    assert not fake.called("products.update")


def test_register_movement_failure_leaves_cache(fake):
    store = InventoryStore(fake)
    fake.fail_on("inventory_movements.insert")

    result = store.register_movement(MovementCreate(type="in", productId="P1", quantity=1, userId="U1"))

    assert result.error == ErrorKind.REMOTE_FAILURE
    assert store.movements == []


def test_filters_by_type_and_recent_limit(fake):
    fake.seed(
        "inventory_movements",
        *[movement_row(f"M{i}", f"2024-05-{i:02d}T10:00:00.000Z", type="in" if i % 2 else "out") for i in range(1, 13)]
    )
    store = InventoryStore(fake)
    store.fetch_movements()

    assert len(store.get_movements_by_type(MovementType.OUT)) == 6
    assert all(m.type == MovementType.IN for m in store.get_movements_by_type("in"))
    recent = store.get_recent_movements()
    assert len(recent) == 10
    assert recent[0].id == "M12"
    assert len(store.get_recent_movements(3)) == 3
