"""Integration tests for the SKU catalog."""

import pytest
from httpx import AsyncClient

from sitekit.backend.services.storage import UploadStorage

URL = "/api/v1/catalog"


async def create_item(client: AsyncClient, headers: dict, sku: str, **fields) -> dict:
    body = {"sku": sku, "name": sku.title(), "price": 100, **fields}
    response = await client.post(f"{URL}/admin/products", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCatalogBrowsing:
    @pytest.mark.asyncio
    async def test_paginated_listing_hides_invisible(
        self,
        client: AsyncClient,
        admin_headers: dict,
    ):
        for sku in ("chair", "table", "lamp"):
            await create_item(client, admin_headers, sku)
        await create_item(client, admin_headers, "draft", visible=False)

        response = await client.get(f"{URL}/products", params={"limit": 2})

        body = response.json()
        assert response.status_code == 200
        assert len(body["data"]) == 2
        assert body["pagination"] == {"total": 3, "limit": 2, "offset": 0, "has_more": True}

    @pytest.mark.asyncio
    async def test_search_and_sort(self, client: AsyncClient, admin_headers: dict):
        await create_item(client, admin_headers, "chair", price=250, description="Solid oak")
        await create_item(client, admin_headers, "table", price=900, name="Oak table")
        await create_item(client, admin_headers, "lamp", price=40)

        response = await client.get(f"{URL}/products", params={"search": "oak", "sort": "price_desc"})

        assert [p["sku"] for p in response.json()["data"]] == ["table", "chair"]

    @pytest.mark.asyncio
    async def test_category_counts(self, client: AsyncClient, admin_headers: dict, api):
        await create_item(client, admin_headers, "chair", category="furniture")
        await create_item(client, admin_headers, "table", category="furniture")
        await create_item(client, admin_headers, "lamp", category="lighting")
        await create_item(client, admin_headers, "sofa", category="furniture", visible=False)
        await create_item(client, admin_headers, "misc")

        data = api.assert_success(await client.get(f"{URL}/categories"))

        assert data == [
            {"category": "furniture", "count": 2},
            {"category": "lighting", "count": 1},
        ]

    @pytest.mark.asyncio
    async def test_hidden_product_not_found(self, client: AsyncClient, admin_headers: dict, api):
        item = await create_item(client, admin_headers, "draft", visible=False)

        api.assert_error(await client.get(f"{URL}/products/{item['id']}"), 404, "RES_NOT_FOUND")


class TestCatalogAdmin:
    @pytest.mark.asyncio
    async def test_defaults_applied(self, client: AsyncClient, admin_headers: dict, api):
        data = api.assert_success(
            await client.post(f"{URL}/admin/products", json={"name": "Chair", "price": 10}, headers=admin_headers),
            201,
        )

        assert data["sku"].startswith("SKU-")
        assert data["currency"] == "PLN"
        assert data["stock"] == 0

    @pytest.mark.asyncio
    async def test_name_and_price_required(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(f"{URL}/admin/products", json={"name": "Chair"}, headers=admin_headers)

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Name and price are required")

    @pytest.mark.asyncio
    async def test_duplicate_sku(self, client: AsyncClient, admin_headers: dict, api):
        await create_item(client, admin_headers, "chair")

        response = await client.post(
            f"{URL}/admin/products",
            json={"sku": "chair", "name": "Another", "price": 1},
            headers=admin_headers,
        )

        api.assert_error(response, 409, "RES_CONFLICT", "SKU already exists")

    @pytest.mark.asyncio
    async def test_partial_update_and_stock(self, client: AsyncClient, admin_headers: dict, api):
        item = await create_item(client, admin_headers, "chair", description="Oak")

        updated = api.assert_success(
            await client.put(
                f"{URL}/admin/products/{item['id']}",
                json={"sale_price": 80},
                headers=admin_headers,
            )
        )
        stocked = api.assert_success(
            await client.patch(
                f"{URL}/admin/products/{item['id']}/stock",
                json={"stock": 12},
                headers=admin_headers,
            )
        )

        assert updated["sale_price"] == 80
        assert updated["description"] == "Oak"
        assert stocked["stock"] == 12

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, client: AsyncClient, admin_headers: dict, api):
        item = await create_item(client, admin_headers, "chair")

        response = await client.put(
            f"{URL}/admin/products/{item['id']}",
            json={"name": ""},
            headers=admin_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "name cannot be empty")

    @pytest.mark.asyncio
    async def test_primary_image_demotes_previous(
        self,
        client: AsyncClient,
        admin_headers: dict,
        image_file: tuple,
        upload_storage: UploadStorage,
        api,
    ):
        item = await create_item(client, admin_headers, "chair")
        image_url = f"{URL}/admin/products/{item['id']}/images"

        first = api.assert_success(
            await client.post(image_url, data={"is_primary": "true"}, files={"image": image_file}, headers=admin_headers),
            201,
        )
        second = api.assert_success(
            await client.post(image_url, data={"is_primary": "true"}, files={"image": image_file}, headers=admin_headers),
            201,
        )

        product = api.assert_success(await client.get(f"{URL}/products/{item['id']}"))
        primary = {image["id"]: image["is_primary"] for image in product["images"]}
        assert primary == {first["id"]: False, second["id"]: True}

        api.assert_success(await client.delete(f"{URL}/admin/products/{item['id']}", headers=admin_headers))
        assert not upload_storage.path_for(first["image_path"]).exists()
        assert not upload_storage.path_for(second["image_path"]).exists()

    @pytest.mark.asyncio
    async def test_admin_requires_login(self, client: AsyncClient):
        response = await client.get(f"{URL}/admin/products")

        assert response.status_code == 401
