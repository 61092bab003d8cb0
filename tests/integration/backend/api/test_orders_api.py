"""Integration tests for per-site lead orders."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient

URL = "/api/v1/orders"


async def place_order(client: AsyncClient, site: str = "babylon", **fields) -> dict:
    payload = {"name": "Jan Kowalski", "phone": "+48 600 100 200", **fields}
    response = await client.post(f"{URL}/{site}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestPublicOrderCreate:
    @pytest.mark.asyncio
    async def test_create_is_public_and_sanitised(self, client: AsyncClient):
        order = await place_order(client, comment="It's \"urgent\"; call me", product_key="excavator")

        assert order["status"] == "new"
        assert order["comment"] == "Its urgent call me"
        assert order["email"] == ""
        assert order["product_key"] == "excavator"

    @pytest.mark.asyncio
    async def test_name_and_phone_required(self, client: AsyncClient, api):
        response = await client.post(f"{URL}/babylon", json={"name": "Jan"})

        api.assert_error(response, 400, expected_message="Name and phone are required")


class TestOrderAdmin:
    @pytest.mark.asyncio
    async def test_list_newest_first_and_scoped(self, client: AsyncClient, admin_headers: dict, api):
        first = await place_order(client)
        second = await place_order(client)
        await place_order(client, site="mattress")

        listed = api.assert_success(await client.get(f"{URL}/babylon", headers=admin_headers))

        assert [o["id"] for o in listed] == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_list_filters(self, client: AsyncClient, admin_headers: dict, api):
        order = await place_order(client)
        await place_order(client)
        await client.patch(
            f"{URL}/babylon/{order['id']}/status",
            json={"status": "completed"},
            headers=admin_headers,
        )

        completed = api.assert_success(
            await client.get(f"{URL}/babylon?status=completed", headers=admin_headers)
        )
        everything = api.assert_success(
            await client.get(f"{URL}/babylon?status=all", headers=admin_headers)
        )
        tomorrow = (date.today() + timedelta(days=2)).isoformat()
        future = api.assert_success(
            await client.get(f"{URL}/babylon?date_from={tomorrow}", headers=admin_headers)
        )

        assert [o["id"] for o in completed] == [order["id"]]
        assert len(everything) == 2
        assert future == []

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient, admin_headers: dict, api):
        order = await place_order(client)

        response = await client.patch(
            f"{URL}/babylon/{order['id']}/status",
            json={"status": "shipped"},
            headers=admin_headers,
        )

        api.assert_error(response, 400, expected_message="Invalid status")

    @pytest.mark.asyncio
    async def test_notes(self, client: AsyncClient, accountant_headers: dict, api):
        order = await place_order(client)

        response = await client.patch(
            f"{URL}/babylon/{order['id']}/notes",
            json={"notes": "Called back"},
            headers=accountant_headers,
        )

        assert api.assert_success(response)["notes"] == "Called back"

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, admin_headers: dict, api):
        order = await place_order(client, product_key="crane")
        await place_order(client, product_key="crane")
        await place_order(client, product_key="forklift")
        await client.patch(
            f"{URL}/babylon/{order['id']}/status",
            json={"status": "in_progress"},
            headers=admin_headers,
        )

        stats = api.assert_success(await client.get(f"{URL}/babylon/stats", headers=admin_headers))
        popular = api.assert_success(
            await client.get(f"{URL}/babylon/stats/popular", headers=admin_headers)
        )

        assert stats == {"total": 3, "new": 2, "in_progress": 1, "completed": 0}
        assert popular == [
            {"product_key": "crane", "count": 2},
            {"product_key": "forklift", "count": 1},
        ]

    @pytest.mark.asyncio
    async def test_chart_covers_seven_days(self, client: AsyncClient, admin_headers: dict, api):
        await place_order(client)

        chart = api.assert_success(
            await client.get(f"{URL}/babylon/stats/chart", headers=admin_headers)
        )

        assert len(chart) == 7
        assert sum(day["count"] for day in chart) == 1
        assert chart[-1]["count"] == 1

    @pytest.mark.asyncio
    async def test_delete_requires_admin(
        self,
        client: AsyncClient,
        admin_headers: dict,
        accountant_headers: dict,
        api,
    ):
        order = await place_order(client)

        api.assert_error(
            await client.delete(f"{URL}/babylon/{order['id']}", headers=accountant_headers),
            403,
        )
        api.assert_success(await client.delete(f"{URL}/babylon/{order['id']}", headers=admin_headers))
        api.assert_error(
            await client.get(f"{URL}/babylon/{order['id']}", headers=admin_headers),
            404,
            expected_message="Order not found",
        )
