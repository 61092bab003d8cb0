"""Integration tests for the FAQ."""

import pytest
from httpx import AsyncClient

URL = "/api/v1/faq"


async def create_category(client: AsyncClient, headers: dict, name: str, sort_order: int = 0) -> dict:
    response = await client.post(
        f"{URL}/admin/categories",
        json={"name": name, "sort_order": sort_order},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_item(client: AsyncClient, headers: dict, question: str, **fields) -> dict:
    body = {"question": question, "answer": f"Answer to {question}", **fields}
    response = await client.post(f"{URL}/admin/items", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestFaqGrouping:
    @pytest.mark.asyncio
    async def test_groups_follow_category_order(self, client: AsyncClient, admin_headers: dict, api):
        shipping = await create_category(client, admin_headers, "Shipping", sort_order=2)
        payment = await create_category(client, admin_headers, "Payment", sort_order=1)
        await create_category(client, admin_headers, "Empty", sort_order=3)
        await create_item(client, admin_headers, "How long?", category_id=shipping["id"])
        await create_item(client, admin_headers, "Cards?", category_id=payment["id"])
        await create_item(client, admin_headers, "Who are you?")
        await create_item(client, admin_headers, "Secret?", category_id=payment["id"], visible=False)

        groups = api.assert_success(await client.get(URL))

        assert [g["category"]["name"] for g in groups] == ["Payment", "Shipping", "General"]
        assert groups[-1]["category"]["id"] is None
        assert [i["question"] for i in groups[0]["items"]] == ["Cards?"]

    @pytest.mark.asyncio
    async def test_deleting_category_uncategorises_items(
        self,
        client: AsyncClient,
        admin_headers: dict,
        api,
    ):
        shipping = await create_category(client, admin_headers, "Shipping")
        item = await create_item(client, admin_headers, "How long?", category_id=shipping["id"])

        api.assert_success(await client.delete(f"{URL}/admin/categories/{shipping['id']}", headers=admin_headers))

        groups = api.assert_success(await client.get(URL))
        assert groups[0]["category"]["name"] == "General"
        assert [i["id"] for i in groups[0]["items"]] == [item["id"]]


class TestFaqAdmin:
    @pytest.mark.asyncio
    async def test_question_and_answer_required(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(f"{URL}/admin/items", json={"question": "Why?"}, headers=admin_headers)

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Question and answer are required")

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(
            f"{URL}/admin/items",
            json={"question": "Why?", "answer": "Because", "category_id": 999},
            headers=admin_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Category not found")

    @pytest.mark.asyncio
    async def test_update_item(self, client: AsyncClient, admin_headers: dict, api):
        payment = await create_category(client, admin_headers, "Payment")
        item = await create_item(client, admin_headers, "Cards?")

        updated = api.assert_success(
            await client.put(
                f"{URL}/admin/items/{item['id']}",
                json={"category_id": payment["id"], "visible": False},
                headers=admin_headers,
            )
        )

        assert updated["category_id"] == payment["id"]
        assert updated["visible"] is False
        assert updated["answer"] == "Answer to Cards?"

    @pytest.mark.asyncio
    async def test_category_name_required(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(f"{URL}/admin/categories", json={"name": ""}, headers=admin_headers)

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Name is required")

    @pytest.mark.asyncio
    async def test_public_categories(self, client: AsyncClient, admin_headers: dict, api):
        await create_category(client, admin_headers, "Shipping", sort_order=2)
        await create_category(client, admin_headers, "Payment", sort_order=1)

        data = api.assert_success(await client.get(f"{URL}/categories"))

        assert [c["name"] for c in data] == ["Payment", "Shipping"]

    @pytest.mark.asyncio
    async def test_admin_requires_login(self, client: AsyncClient):
        response = await client.get(f"{URL}/admin/items")

        assert response.status_code == 401
