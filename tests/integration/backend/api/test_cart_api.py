"""Integration tests for the anonymous cart and checkout."""

import pytest
from httpx import AsyncClient

URL = "/api/v1/cart"

CART = {"X-Cart-Session": "cart-one"}
OTHER_CART = {"X-Cart-Session": "cart-two"}

CUSTOMER = {"client_name": " Anna ", "client_phone": "+48 600 100 200"}


async def create_item(client: AsyncClient, headers: dict, sku: str, **fields) -> dict:
    body = {"sku": sku, "name": sku.title(), "price": 100, **fields}
    response = await client.post("/api/v1/catalog/admin/products", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def place_order(client: AsyncClient, product_id: int, quantity: int = 1) -> dict:
    await client.post(URL, json={"product_id": product_id, "quantity": quantity}, headers=CART)
    response = await client.post(f"{URL}/checkout", json=CUSTOMER, headers=CART)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCart:
    @pytest.mark.asyncio
    async def test_add_merges_lines_and_uses_sale_price(
        self,
        client: AsyncClient,
        admin_headers: dict,
        api,
    ):
        chair = await create_item(client, admin_headers, "chair", price=100, sale_price=80)
        lamp = await create_item(client, admin_headers, "lamp", price=40)

        await client.post(URL, json={"product_id": chair["id"]}, headers=CART)
        await client.post(URL, json={"product_id": lamp["id"]}, headers=CART)
        added = api.assert_success(
            await client.post(URL, json={"product_id": chair["id"], "quantity": 2}, headers=CART),
            201,
        )

        assert added == {"message": "Added to cart", "count": 2}
        cart = api.assert_success(await client.get(URL, headers=CART))
        assert cart["total"] == 280
        assert [(i["product_name"], i["quantity"], i["subtotal"]) for i in cart["items"]] == [
            ("Chair", 3, 240),
            ("Lamp", 1, 40),
        ]

    @pytest.mark.asyncio
    async def test_carts_are_isolated(self, client: AsyncClient, admin_headers: dict, api):
        chair = await create_item(client, admin_headers, "chair")
        await client.post(URL, json={"product_id": chair["id"]}, headers=CART)

        other = api.assert_success(await client.get(URL, headers=OTHER_CART))

        assert other == {"items": [], "total": 0, "count": 0}

    @pytest.mark.asyncio
    async def test_hidden_product_cannot_be_added(self, client: AsyncClient, admin_headers: dict, api):
        draft = await create_item(client, admin_headers, "draft", visible=False)

        response = await client.post(URL, json={"product_id": draft["id"]}, headers=CART)

        api.assert_error(response, 404, "RES_NOT_FOUND", "Product not found")

    @pytest.mark.asyncio
    async def test_update_and_remove_line(self, client: AsyncClient, admin_headers: dict, api):
        chair = await create_item(client, admin_headers, "chair")
        await client.post(URL, json={"product_id": chair["id"]}, headers=CART)
        [line] = api.assert_success(await client.get(URL, headers=CART))["items"]

        updated = api.assert_success(await client.put(f"{URL}/{line['id']}", json={"quantity": 5}, headers=CART))
        foreign = await client.delete(f"{URL}/{line['id']}", headers=OTHER_CART)
        api.assert_success(await client.delete(f"{URL}/{line['id']}", headers=CART))

        assert updated["quantity"] == 5
        assert foreign.status_code == 404
        assert api.assert_success(await client.get(URL, headers=CART))["count"] == 0

    @pytest.mark.asyncio
    async def test_new_session_cookie_issued(self, client: AsyncClient):
        response = await client.get(URL)

        assert response.status_code == 200
        assert "cart_session" in response.cookies


class TestCheckout:
    @pytest.mark.asyncio
    async def test_checkout_empties_cart(self, client: AsyncClient, admin_headers: dict, api):
        chair = await create_item(client, admin_headers, "chair", price=120)

        result = await place_order(client, chair["id"], quantity=2)

        assert result["order_number"].startswith("ORD-")
        assert result["total"] == 240
        assert api.assert_success(await client.get(URL, headers=CART))["count"] == 0

        tracked = api.assert_success(await client.get(f"{URL}/order/{result['order_number']}"))
        assert tracked["status"] == "new"

    @pytest.mark.asyncio
    async def test_empty_cart(self, client: AsyncClient, api):
        response = await client.post(f"{URL}/checkout", json=CUSTOMER, headers=CART)

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Cart is empty")

    @pytest.mark.asyncio
    async def test_client_details_required(self, client: AsyncClient, api):
        response = await client.post(f"{URL}/checkout", json={"client_name": "Anna"}, headers=CART)

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Client name and phone are required")

    @pytest.mark.asyncio
    async def test_unknown_order_number(self, client: AsyncClient, api):
        api.assert_error(await client.get(f"{URL}/order/ORD-0-0000"), 404, "RES_NOT_FOUND")


class TestCheckoutAdmin:
    @pytest.mark.asyncio
    async def test_order_detail_and_status(self, client: AsyncClient, admin_headers: dict, api):
        chair = await create_item(client, admin_headers, "chair", price=120)
        result = await place_order(client, chair["id"])
        [order] = api.assert_success(await client.get(f"{URL}/admin/orders", headers=admin_headers))

        detail = api.assert_success(await client.get(f"{URL}/admin/orders/{order['id']}", headers=admin_headers))
        shipped = api.assert_success(
            await client.patch(
                f"{URL}/admin/orders/{order['id']}/status",
                json={"status": "shipped"},
                headers=admin_headers,
            )
        )

        assert order["order_number"] == result["order_number"]
        assert order["client_name"] == "Anna"
        assert [(i["product_name"], i["subtotal"]) for i in detail["items"]] == [("Chair", 120)]
        assert shipped["status"] == "shipped"

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient, admin_headers: dict, api):
        chair = await create_item(client, admin_headers, "chair")
        await place_order(client, chair["id"])
        [order] = api.assert_success(await client.get(f"{URL}/admin/orders", headers=admin_headers))

        response = await client.patch(
            f"{URL}/admin/orders/{order['id']}/status",
            json={"status": "lost"},
            headers=admin_headers,
        )

        api.assert_error(
            response,
            400,
            "VAL_VALIDATION_ERROR",
            "Status must be: new, processing, shipped, completed, cancelled",
        )

    @pytest.mark.asyncio
    async def test_stats_exclude_cancelled_revenue(self, client: AsyncClient, admin_headers: dict, api):
        chair = await create_item(client, admin_headers, "chair", price=100)
        await place_order(client, chair["id"])
        await place_order(client, chair["id"], quantity=3)
        orders = api.assert_success(await client.get(f"{URL}/admin/orders", headers=admin_headers))
        cheapest = min(orders, key=lambda o: o["total"])
        await client.patch(
            f"{URL}/admin/orders/{cheapest['id']}/status",
            json={"status": "cancelled"},
            headers=admin_headers,
        )

        stats = api.assert_success(await client.get(f"{URL}/admin/stats", headers=admin_headers))

        assert stats["total_orders"] == 2
        assert stats["total_revenue"] == 300
        assert stats["by_status"]["new"] == 1
        assert stats["by_status"]["cancelled"] == 1
        assert stats["this_month"] == {"orders": 1, "revenue": 300}

    @pytest.mark.asyncio
    async def test_admin_requires_login(self, client: AsyncClient):
        response = await client.get(f"{URL}/admin/orders")

        assert response.status_code == 401
