"""Integration tests for appointment booking."""

import pytest
from httpx import AsyncClient

URL = "/api/v1/bookings"
DAY = "2030-05-14"


async def create_service(client: AsyncClient, headers: dict, **fields) -> dict:
    body = {"name": "Consultation", "duration_minutes": 60, "price": 150, **fields}
    response = await client.post(f"{URL}/admin/services", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def booking(service_id: int, slot: str = f"{DAY}T10:00", **fields) -> dict:
    return {
        "service_id": service_id,
        "datetime": slot,
        "client_name": "Anna",
        "client_phone": "+48 600 100 200",
        **fields,
    }


class TestAvailability:
    @pytest.mark.asyncio
    async def test_slots_step_by_duration(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers, duration_minutes=120)

        data = api.assert_success(await client.get(f"{URL}/availability/{service['id']}/{DAY}"))

        assert data["date"] == DAY
        assert [s["datetime"][-5:] for s in data["slots"]] == ["09:00", "11:00", "13:00", "15:00"]

    @pytest.mark.asyncio
    async def test_booked_slot_unavailable(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers)
        api.assert_success(await client.post(URL, json=booking(service["id"])), 201)

        data = api.assert_success(await client.get(f"{URL}/availability/{service['id']}/{DAY}"))

        taken = [s["datetime"] for s in data["slots"] if not s["available"]]
        assert taken == [f"{DAY}T10:00"]
        assert len(data["slots"]) == 9

    @pytest.mark.asyncio
    async def test_unknown_service(self, client: AsyncClient, api):
        response = await client.get(f"{URL}/availability/999/{DAY}")

        api.assert_error(response, 404, "RES_NOT_FOUND", "Service not found")


class TestBookings:
    @pytest.mark.asyncio
    async def test_double_booking_conflict(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers)
        created = api.assert_success(await client.post(URL, json=booking(service["id"])), 201)

        response = await client.post(URL, json=booking(service["id"], client_name="Piotr"))

        assert created["status"] == "pending"
        assert created["service_name"] == "Consultation"
        api.assert_error(response, 409, "RES_CONFLICT", "Time slot already booked")

    @pytest.mark.asyncio
    async def test_cancelled_slot_can_be_rebooked(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers)
        created = api.assert_success(await client.post(URL, json=booking(service["id"])), 201)
        api.assert_success(
            await client.patch(
                f"{URL}/admin/{created['id']}/status",
                json={"status": "cancelled"},
                headers=admin_headers,
            )
        )

        api.assert_success(await client.post(URL, json=booking(service["id"])), 201)

    @pytest.mark.asyncio
    async def test_required_fields(self, client: AsyncClient, api):
        response = await client.post(URL, json={"client_name": "Anna"})

        api.assert_error(
            response,
            400,
            "VAL_VALIDATION_ERROR",
            "Required: service_id, datetime, client_name, client_phone",
        )

    @pytest.mark.asyncio
    async def test_inactive_service(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers, active=False)

        response = await client.post(URL, json=booking(service["id"]))

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Service is not available")

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers)
        created = api.assert_success(await client.post(URL, json=booking(service["id"])), 201)

        response = await client.patch(
            f"{URL}/admin/{created['id']}/status",
            json={"status": "lost"},
            headers=admin_headers,
        )

        api.assert_error(
            response,
            400,
            "VAL_VALIDATION_ERROR",
            "Status must be one of: pending, confirmed, completed, cancelled",
        )

    @pytest.mark.asyncio
    async def test_admin_list_filters_by_date(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers)
        await client.post(URL, json=booking(service["id"]))
        await client.post(URL, json=booking(service["id"], slot="2030-05-15T10:00"))

        data = api.assert_success(await client.get(f"{URL}/admin", params={"date": DAY}, headers=admin_headers))

        assert [b["starts_at"][:16] for b in data] == [f"{DAY}T10:00"]


class TestBookingServices:
    @pytest.mark.asyncio
    async def test_public_list_shows_active_only(self, client: AsyncClient, admin_headers: dict, api):
        await create_service(client, admin_headers, name="Massage")
        await create_service(client, admin_headers, name="Archived", active=False)

        public = api.assert_success(await client.get(f"{URL}/services"))
        admin = api.assert_success(await client.get(f"{URL}/admin/services", headers=admin_headers))

        assert [s["name"] for s in public] == ["Massage"]
        assert len(admin) == 2

    @pytest.mark.asyncio
    async def test_name_required(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(f"{URL}/admin/services", json={"name": "  "}, headers=admin_headers)

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Name is required")

    @pytest.mark.asyncio
    async def test_delete_with_bookings_conflicts(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers)
        await client.post(URL, json=booking(service["id"]))

        response = await client.delete(f"{URL}/admin/services/{service['id']}", headers=admin_headers)

        api.assert_error(response, 409, "RES_CONFLICT", "Service has bookings; deactivate it instead")

    @pytest.mark.asyncio
    async def test_update_and_delete_unused(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers)

        updated = api.assert_success(
            await client.put(
                f"{URL}/admin/services/{service['id']}",
                json={"price": 200, "active": False},
                headers=admin_headers,
            )
        )
        api.assert_success(await client.delete(f"{URL}/admin/services/{service['id']}", headers=admin_headers))

        assert updated["price"] == 200
        assert updated["active"] is False
        assert api.assert_success(await client.get(f"{URL}/admin/services", headers=admin_headers)) == []


class TestServiceUpdate:
    @pytest.mark.asyncio
    async def test_null_required_fields_rejected(self, client: AsyncClient, admin_headers: dict, api):
        service = await create_service(client, admin_headers)

        response = await client.put(
            f"{URL}/admin/services/{service['id']}",
            json={"duration_minutes": None, "name": None},
            headers=admin_headers,
        )

        error = api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "name, duration_minutes cannot be null")
        assert error["details"]["null_fields"] == ["name", "duration_minutes"]
