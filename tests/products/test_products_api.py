import pytest
from httpx import AsyncClient

PRODUCTS_API_PREFIX = "/api/products"
ADMIN_PRODUCTS_API_PREFIX = "/api/admin/products"

NEW_PRODUCT = {
    "name": "Olivier en pot",
    "description": "Olivier de 1m20",
    "price": "49.90",
    "image_url": "https://example.com/olivier.jpg",
    "stock": 8,
}


@pytest.mark.asyncio
async def test_public_catalogue(test_client: AsyncClient, make_product):
    """Teste la lecture publique du catalogue, sans token."""
    first = await make_product(name="Rosier")
    second = await make_product(name="Tulipe")

    response = await test_client.get(PRODUCTS_API_PREFIX)

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [second.id, first.id]
    assert response.headers["Content-Range"] == "products 0-1/2"

    single = await test_client.get(f"{PRODUCTS_API_PREFIX}/{first.id}")
    assert single.status_code == 200
    assert single.json()["name"] == "Rosier"

    missing = await test_client.get(f"{PRODUCTS_API_PREFIX}/999")
    assert missing.status_code == 404
    assert "error" in missing.json()


@pytest.mark.asyncio
async def test_catalogue_pagination(test_client: AsyncClient, make_product):
    for i in range(3):
        await make_product(name=f"Plante {i}")

    response = await test_client.get(PRODUCTS_API_PREFIX, params={"limit": 2, "offset": 2})

    assert response.status_code == 200
    assert len(response.json()) == 1
    assert response.headers["Content-Range"] == "products 2-2/3"


@pytest.mark.asyncio
async def test_admin_create_product(test_client: AsyncClient, auth_headers_admin, admin_user):
    admin_id = admin_user.id
    response = await test_client.post(ADMIN_PRODUCTS_API_PREFIX, json=NEW_PRODUCT, headers=auth_headers_admin)

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == NEW_PRODUCT["name"]
    assert data["stock"] == 8
    assert data["created_by"] == admin_id


@pytest.mark.asyncio
async def test_admin_routes_require_admin(test_client: AsyncClient, auth_headers_user):
    response = await test_client.post(ADMIN_PRODUCTS_API_PREFIX, json=NEW_PRODUCT, headers=auth_headers_user)
    assert response.status_code == 403

    anonymous = await test_client.get(ADMIN_PRODUCTS_API_PREFIX)
    assert anonymous.status_code == 401


@pytest.mark.asyncio
async def test_admin_create_product_rejects_negative_stock(test_client: AsyncClient, auth_headers_admin):
    response = await test_client.post(
        ADMIN_PRODUCTS_API_PREFIX, json={**NEW_PRODUCT, "stock": -1}, headers=auth_headers_admin
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_admin_update_product_and_stock(test_client: AsyncClient, auth_headers_admin, make_product, stock_of):
    product = await make_product(name="Rosier", price="10.00", stock=5)
    product_id = product.id

    response = await test_client.put(
        f"{ADMIN_PRODUCTS_API_PREFIX}/{product_id}",
        json={"price": "11.00", "stock": 20},
        headers=auth_headers_admin,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["price"] == "11.00"
    assert data["stock"] == 20
    assert data["updated_at"] is not None
    assert await stock_of(product_id) == 20

    missing = await test_client.put(
        f"{ADMIN_PRODUCTS_API_PREFIX}/999", json={"price": "1.00"}, headers=auth_headers_admin
    )
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_admin_update_null_clears_optional_text(test_client: AsyncClient, auth_headers_admin, make_product):
    """null vide description et image_url, mais laisse les champs obligatoires inchangés."""
    product = await make_product(name="Rosier", price="10.00", stock=5)
    product_id = product.id

    response = await test_client.put(
        f"{ADMIN_PRODUCTS_API_PREFIX}/{product_id}",
        json={"description": None, "image_url": None, "name": None, "price": None},
        headers=auth_headers_admin,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["description"] == ""
    assert data["image_url"] == ""
    assert data["name"] == "Rosier"
    assert data["price"] == "10.00"
    assert data["stock"] == 5


@pytest.mark.asyncio
async def test_admin_delete_product_keeps_order_history(
    test_client: AsyncClient, auth_headers_admin, auth_headers_user, make_product
):
    product = await make_product(stock=5)
    product_id = product.id
    order = await test_client.post(
        "/api/orders",
        json={
            "cartItems": [{"product_id": product_id, "quantity": 1, "unit_price": "10.00"}],
            "shippingInfo": {"fullName": "A", "phone": "1", "city": "B", "address": "C"},
        },
        headers=auth_headers_user,
    )
    order_id = order.json()["id"]

    deleted = await test_client.delete(f"{ADMIN_PRODUCTS_API_PREFIX}/{product_id}", headers=auth_headers_admin)
    assert deleted.status_code == 200
    assert (await test_client.get(f"{PRODUCTS_API_PREFIX}/{product_id}")).status_code == 404

    history = await test_client.get(f"/api/orders/{order_id}", headers=auth_headers_user)
    assert history.status_code == 200
    item = history.json()["items"][0]
    assert item["product_id"] is None
    assert item["price"] == "10.00"

    again = await test_client.delete(f"{ADMIN_PRODUCTS_API_PREFIX}/{product_id}", headers=auth_headers_admin)
    assert again.status_code == 404
