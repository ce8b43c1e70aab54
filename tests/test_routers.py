"""
API tests: session gating, role checks and notifications.
"""
from tests.conftest import order_row, product_row


def test_health_and_root(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["authenticated"] is False

    assert client.get("/").json()["api_prefix"] == "/api"


def test_requires_session(client):
    response = client.get("/api/products")

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_login_failure_returns_error_notification(client, fake):
    fake.add_identity("admin@surinnova.cl", "secret123", "admin")

    response = client.post("/api/auth/login", json={"email": "admin@surinnova.cl", "password": "wrong"})

    assert response.status_code == 401
    body = response.json()
    assert body["notification"] == {"level": "error", "message": "Credenciales inválidas"}
    assert body["error"] == "authentication_failed"


def test_login_success_and_session(client, fake):
    fake.add_identity("admin@surinnova.cl", "secret123", "admin")

    response = client.post("/api/auth/login", json={"email": "admin@surinnova.cl", "password": "secret123"})

    body = response.json()
    assert body["success"] is True
    assert body["notification"]["message"] == "¡Bienvenido a Sur Innova!"
    assert body["data"]["role"] == "admin"

    session = client.get("/api/auth/session").json()
    assert session["authenticated"] is True
    assert session["loading"] is False
    assert client.get("/api/auth/me").json()["email"] == "admin@surinnova.cl"


def test_logout(client, login):
    login("admin")

    body = client.post("/api/auth/logout").json()

    assert body["notification"]["message"] == "Sesión cerrada"
    assert client.get("/api/products").status_code == 401


def test_personal_role_cannot_change_products(client, login):
    login("personal")

    response = client.post("/api/products", json={
        "code": "LMP-9", "name": "Cloro", "category": "Limpieza", "stock": 3, "branch": "Osorno"
    })

    assert response.status_code == 403


def test_add_product_and_refresh(client, login, fake):
    login("bodeguero")

    body = client.post("/api/products", json={
        "code": "LMP-9", "name": "Cloro", "category": "Limpieza", "stock": 3, "branch": "Osorno"
    }).json()

    assert body["success"] is True
    assert body["notification"] == {"level": "success", "message": "Producto agregado exitosamente"}
    assert client.get("/api/products").json()["total"] == 1
    assert client.get("/api/products/low-stock").json()["total"] == 1


def test_remote_failure_is_reported_as_notification(client, login, fake):
    login("admin")
    fake.fail_on("products.select")

    response = client.post("/api/products/refresh")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "remote_failure"
    assert body["notification"] == {"level": "error", "message": "Error al cargar productos"}


def test_insufficient_stock_notification(client, login, fake):
    login("bodeguero")
    fake.seed("products", product_row("P1", "LMP-001", "Cloro", stock=2))
    client.post("/api/products/refresh")

    body = client.post("/api/products/P1/stock", json={"delta": -3}).json()

    assert body["success"] is False
    assert body["error"] == "insufficient_stock"
    assert body["notification"]["message"] == "Stock insuficiente"
    assert not fake.called("products.update")


def test_register_movement_uses_cached_product_name(client, login, fake):
    user = login("bodeguero")
    fake.seed("products", product_row("P1", "LMP-001", "Cloro", stock=10))
    client.post("/api/products/refresh")

    body = client.post("/api/inventory/movements", json={
        "type": "in", "productId": "P1", "quantity": 5, "userId": user["id"], "reason": "Compra"
    }).json()

    assert body["success"] is True
    assert body["data"]["product"] == "Cloro"
    assert body["data"]["productId"] == "P1"
    recent = client.get("/api/inventory/movements/recent").json()
    assert recent["movements"][0]["id"] == body["data"]["id"]


def test_create_order_and_dispatch_guide(client, login, fake):
    login("personal")
    fake.seed("products", product_row("P1", "LMP-001", "Cloro", stock=10))
    client.post("/api/products/refresh")

    body = client.post("/api/orders", json={
        "deliveryDate": "2024-05-12",
        "products": [{"productId": "P1", "quantity": 4}],
        "branch": "Puerto Montt",
        "carrier": "Transportes Sur"
    }).json()

    assert body["success"] is True
    assert body["data"]["number"].startswith("OD")
    assert body["data"]["deliveryDate"] == "2024-05-12"

    response = client.get(f"/api/orders/{body['data']['id']}/dispatch-guide")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")

    assert client.get("/api/orders/missing/dispatch-guide").status_code == 404


def test_order_status_requires_warehouse_role(client, login, fake):
    login("personal")
    fake.seed("orders", order_row("O1", "OD1", "2024-05-01T09:00:00.000Z"))
    client.post("/api/orders/refresh")

    response = client.patch("/api/orders/O1/status", json={"status": "completed"})

    assert response.status_code == 403


def test_users_admin_only(client, login):
    login("supervisor")

    assert client.get("/api/users").status_code == 403


def test_register_user_incomplete(client, login, fake):
    login("admin")
    fake.fail_on("users.insert")

    body = client.post("/api/users/register", json={
        "password": "secret123",
        "profile": {"email": "nuevo@surinnova.cl", "name": "Nuevo", "lastName": "Usuario", "role": "personal"}
    }).json()

    assert body["success"] is False
    assert body["error"] == "incomplete_registration"
    assert body["notification"]["message"] == "Error al registrar usuario"
    assert any(i["email"] == "nuevo@surinnova.cl" for i in fake.identities.values())


def test_validation_error(client, login):
    login("admin")

    response = client.post("/api/orders", json={"deliveryDate": "2024-05-12", "products": [], "branch": "X"})

    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"


def test_dashboard_summary(client, login, fake):
    login("admin")
    fake.seed(
        "products",
        product_row("P1", "LMP-001", "Cloro", stock=2),
        product_row("P2", "LMP-002", "Detergente", category="Lavado", stock=50),
    )
    fake.seed("orders", order_row("O1", "OD1", "2024-05-01T09:00:00.000Z"))

    body = client.get("/api/dashboard/summary", params={"refresh": True}).json()

    assert body["welcome"] == "Bienvenido, admin@surinnova.cl"
    assert body["stats"]["total_products"] == 2
    assert body["stats"]["pending_orders"] == 1
    assert body["stats"]["low_stock"] == 1
    assert body["recent_activity"][0]["kind"] == "low_stock"

    chart = client.get("/api/dashboard/products-chart").json()
    assert chart == [{"label": "Cloro", "value": 2}, {"label": "Detergente", "value": 50}]
    by_category = client.get("/api/dashboard/products-chart", params={"group_by": "category"}).json()
    assert by_category == [{"label": "Lavado", "value": 50}, {"label": "Limpieza", "value": 2}]


def test_products_chart_rejects_unknown_grouping(client, login):
    login("admin")

    assert client.get("/api/dashboard/products-chart", params={"group_by": "branch"}).status_code == 422


def test_dashboard_refresh_reports_success(client, login, fake):
    login("admin")

    body = client.get("/api/dashboard/summary", params={"refresh": True}).json()

    assert body["notification"] == {"level": "success", "message": "Panel actualizado"}
    assert client.get("/api/dashboard/summary").json()["notification"] is None


def test_dashboard_refresh_reports_failed_fetch(client, login, fake):
    login("admin")
    fake.seed("products", product_row("P1", "LMP-001", "Cloro", stock=2))
    fake.fail_on("orders.select")

    body = client.get("/api/dashboard/summary", params={"refresh": True}).json()

    assert body["notification"] == {"level": "error", "message": "Error al actualizar el panel"}
    assert body["stats"]["total_products"] == 1


def test_list_refresh_reports_notification(client, login, fake):
    login("admin")
    fake.seed("products", product_row("P1", "LMP-001", "Cloro"))

    refreshed = client.get("/api/products", params={"refresh": True}).json()
    cached = client.get("/api/products").json()

    assert refreshed["notification"] == {"level": "success", "message": "Productos actualizados"}
    assert refreshed["total"] == 1
    assert cached["notification"] is None


def test_list_refresh_failure_is_not_silent(client, login, fake):
    login("admin")
    fake.seed("products", product_row("P1", "LMP-001", "Cloro"))
    client.post("/api/products/refresh")
    fake.fail_on("products.select")
    fake.fail_on("orders.select")
    fake.fail_on("inventory_movements.select")
    fake.fail_on("users.select")

    products = client.get("/api/products", params={"refresh": True}).json()
    orders = client.get("/api/orders", params={"refresh": True}).json()
    movements = client.get("/api/inventory/movements", params={"refresh": True}).json()
    users = client.get("/api/users", params={"refresh": True}).json()

    assert products["notification"] == {"level": "error", "message": "Error al cargar productos"}
    assert products["total"] == 1
    assert orders["notification"] == {"level": "error", "message": "Error al cargar órdenes"}
    assert movements["notification"] == {"level": "error", "message": "Error al cargar movimientos"}
    assert users["notification"] == {"level": "error", "message": "Error al cargar usuarios"}


def test_product_patch_rejects_null_fields(client, login, fake):
    login("admin")
    fake.seed("products", product_row("P1", "LMP-001", "Cloro", stock=2))
    client.post("/api/products/refresh")

    response = client.patch("/api/products/P1", json={"stock": None, "name": None})

    assert response.status_code == 422
    assert not fake.called("products.update")
    low_stock = client.get("/api/products/low-stock").json()
    assert [p["id"] for p in low_stock["products"]] == ["P1"]
    assert client.get("/api/products/search", params={"q": "clo"}).json()["total"] == 1
    assert client.get("/api/dashboard/summary").status_code == 200


def test_user_patch_rejects_null_fields(client, login, fake):
    login("admin")

    response = client.patch("/api/users/U1", json={"lastName": None})

    assert response.status_code == 422
    assert not fake.called("users.update")
