import pytest
from httpx import AsyncClient

ORDERS_API_PREFIX = "/api/orders"

SHIPPING_PAYLOAD = {
    "fullName": "Jeanne Martin",
    "phone": "0600000000",
    "city": "Lyon",
    "address": "1 rue des Lilas",
    "postalCode": "69001",
}


def _payload(*lines, shipping=None):
    return {
        "cartItems": [{"product_id": p, "quantity": q, "unit_price": u} for p, q, u in lines],
        "shippingInfo": shipping if shipping is not None else SHIPPING_PAYLOAD,
    }


@pytest.mark.asyncio
async def test_create_order_success(test_client: AsyncClient, auth_headers_user, make_product, stock_of):
    """Teste la création réussie d'une commande."""
    product = await make_product(stock=5, price="10.00")
    product_id = product.id

    response = await test_client.post(
        ORDERS_API_PREFIX, json=_payload((product_id, 3, "10.00")), headers=auth_headers_user
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["order_number"].startswith("ORD-")
    assert data["total_amount"] == "30.00"
    assert data["items"][0]["product"]["id"] == product_id
    assert await stock_of(product_id) == 2


@pytest.mark.asyncio
async def test_create_order_insufficient_stock(test_client: AsyncClient, auth_headers_user, make_product, stock_of):
    product = await make_product(stock=2)
    product_id = product.id

    response = await test_client.post(
        ORDERS_API_PREFIX, json=_payload((product_id, 3, "10.00")), headers=auth_headers_user
    )

    assert response.status_code == 400
    assert "Stock insuffisant" in response.json()["error"]
    assert await stock_of(product_id) == 2


@pytest.mark.asyncio
async def test_create_order_unknown_product(test_client: AsyncClient, auth_headers_user):
    response = await test_client.post(ORDERS_API_PREFIX, json=_payload((999, 1, "1.00")), headers=auth_headers_user)
    assert response.status_code == 400
    assert "999" in response.json()["error"]


@pytest.mark.asyncio
async def test_create_order_validation_errors(test_client: AsyncClient, auth_headers_user, make_product):
    product = await make_product(stock=5)
    product_id = product.id

    empty_cart = await test_client.post(ORDERS_API_PREFIX, json=_payload(), headers=auth_headers_user)
    assert empty_cart.status_code == 400
    assert "error" in empty_cart.json()

    missing_city = {k: v for k, v in SHIPPING_PAYLOAD.items() if k != "city"}
    response = await test_client.post(
        ORDERS_API_PREFIX, json=_payload((product_id, 1, "1.00"), shipping=missing_city), headers=auth_headers_user
    )
    assert response.status_code == 400

    zero_quantity = await test_client.post(
        ORDERS_API_PREFIX, json=_payload((product_id, 0, "1.00")), headers=auth_headers_user
    )
    assert zero_quantity.status_code == 400


@pytest.mark.asyncio
async def test_create_order_requires_token(test_client: AsyncClient):
    response = await test_client.post(ORDERS_API_PREFIX, json=_payload((1, 1, "1.00")))
    assert response.status_code == 401
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_my_orders_and_get_order(
    test_client: AsyncClient, auth_headers_user, auth_headers_user_2, auth_headers_admin, make_product
):
    product = await make_product(stock=10)
    created = await test_client.post(
        ORDERS_API_PREFIX, json=_payload((product.id, 1, "10.00")), headers=auth_headers_user
    )
    order_id = created.json()["id"]

    mine = await test_client.get(f"{ORDERS_API_PREFIX}/my-orders", headers=auth_headers_user)
    assert mine.status_code == 200
    assert [o["id"] for o in mine.json()] == [order_id]

    others = await test_client.get(f"{ORDERS_API_PREFIX}/my-orders", headers=auth_headers_user_2)
    assert others.json() == []

    assert (await test_client.get(f"{ORDERS_API_PREFIX}/{order_id}", headers=auth_headers_user)).status_code == 200
    assert (await test_client.get(f"{ORDERS_API_PREFIX}/{order_id}", headers=auth_headers_admin)).status_code == 200

    forbidden = await test_client.get(f"{ORDERS_API_PREFIX}/{order_id}", headers=auth_headers_user_2)
    assert forbidden.status_code == 403
    assert "error" in forbidden.json()

    missing = await test_client.get(f"{ORDERS_API_PREFIX}/{order_id + 1}", headers=auth_headers_user)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_admin_list_all_orders(test_client: AsyncClient, auth_headers_user, auth_headers_admin, make_product):
    product = await make_product(stock=10)
    await test_client.post(ORDERS_API_PREFIX, json=_payload((product.id, 1, "1.00")), headers=auth_headers_user)

    response = await test_client.get(f"{ORDERS_API_PREFIX}/admin/all", headers=auth_headers_admin)
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["user"]["email"] == "testuser@example.com"

    denied = await test_client.get(f"{ORDERS_API_PREFIX}/admin/all", headers=auth_headers_user)
    assert denied.status_code == 403


@pytest.mark.asyncio
async def test_admin_update_status_and_cancel(
    test_client: AsyncClient, auth_headers_user, auth_headers_admin, make_product, stock_of
):
    product = await make_product(stock=5)
    product_id = product.id
    created = await test_client.post(
        ORDERS_API_PREFIX, json=_payload((product_id, 3, "1.00")), headers=auth_headers_user
    )
    order_id = created.json()["id"]
    status_url = f"{ORDERS_API_PREFIX}/admin/{order_id}/status"

    shipped = await test_client.put(status_url, json={"status": "shipped"}, headers=auth_headers_admin)
    assert shipped.status_code == 200
    assert shipped.json()["status"] == "shipped"

    backward = await test_client.put(status_url, json={"status": "pending"}, headers=auth_headers_admin)
    assert backward.status_code == 400

    invalid = await test_client.put(status_url, json={"status": "lost"}, headers=auth_headers_admin)
    assert invalid.status_code == 400
    assert "lost" in invalid.json()["error"]

    cancelled = await test_client.put(status_url, json={"status": "cancelled"}, headers=auth_headers_admin)
    assert cancelled.status_code == 200
    assert await stock_of(product_id) == 5

    not_admin = await test_client.put(status_url, json={"status": "cancelled"}, headers=auth_headers_user)
    assert not_admin.status_code == 403

    missing = await test_client.put(
        f"{ORDERS_API_PREFIX}/admin/{order_id + 1}/status", json={"status": "shipped"}, headers=auth_headers_admin
    )
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_health(test_client: AsyncClient):
    response = await test_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "OK"}
