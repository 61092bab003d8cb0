"""
Integration tests for storefront products.

Products are created with multipart forms: an optional image file and a
`translations` JSON field keyed by language.
"""

import json

import pytest
from httpx import AsyncClient

from sitekit.backend.services.storage import UploadStorage

URL = "/api/v1/products"


@pytest.fixture
async def category(client: AsyncClient, admin_headers: dict) -> dict:
    response = await client.post(
        "/api/v1/categories/mattress",
        json={"key": "beds", "name_en": "Beds", "name_pl": "Łóżka"},
        headers=admin_headers,
    )
    return response.json()["data"]


async def create_product(client: AsyncClient, headers: dict, site: str = "mattress", **fields) -> dict:
    form = {"product_key": "oak-bed", "price": "from 1200 zł", **fields}
    response = await client.post(f"{URL}/{site}", data=form, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestProductCreate:
    @pytest.mark.asyncio
    async def test_create_with_translations(
        self,
        client: AsyncClient,
        admin_headers: dict,
        category: dict,
    ):
        translations = {
            "en": {"title": "Oak bed", "description": "Solid oak"},
            "de": {"title": "Eichenbett"},
            "fr": {"title": "ignored"},
        }

        product = await create_product(
            client,
            admin_headers,
            category_id=str(category["id"]),
            translations=json.dumps(translations),
        )

        assert product["category_key"] == "beds"
        assert product["category_name_pl"] == "Łóżka"
        assert product["price"] == "from 1200 zł"
        assert set(product["translations"]) == {"en", "de"}
        assert product["translations"]["en"]["description"] == "Solid oak"
        assert product["translations"]["de"]["subtitle"] == ""

    @pytest.mark.asyncio
    async def test_create_with_image(
        self,
        client: AsyncClient,
        admin_headers: dict,
        image_file: tuple,
        upload_storage: UploadStorage,
        api,
    ):
        response = await client.post(
            f"{URL}/mattress",
            data={"product_key": "oak-bed"},
            files={"image": image_file},
            headers=admin_headers,
        )

        product = api.assert_success(response, 201)
        assert product["image"].startswith("/uploads/products/product-")
        assert product["image"].endswith(".gif")
        assert upload_storage.path_for(product["image"]).is_file()

    @pytest.mark.asyncio
    async def test_rejects_non_image_upload(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(
            f"{URL}/mattress",
            data={"product_key": "oak-bed"},
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=admin_headers,
        )

        api.assert_error(response, 400, expected_message="Only image files are allowed (jpeg, jpg, png, gif, webp)")

    @pytest.mark.asyncio
    async def test_requires_product_key(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(f"{URL}/mattress", data={"price": "10"}, headers=admin_headers)

        api.assert_error(response, 400, expected_message="Product key is required")

    @pytest.mark.asyncio
    async def test_rejects_invalid_translations(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(
            f"{URL}/mattress",
            data={"product_key": "oak-bed", "translations": "{broken"},
            headers=admin_headers,
        )

        api.assert_error(response, 400, expected_message="Translations must be valid JSON")

    @pytest.mark.asyncio
    async def test_rejects_category_of_other_site(
        self,
        client: AsyncClient,
        admin_headers: dict,
        category: dict,
        api,
    ):
        response = await client.post(
            f"{URL}/babylon",
            data={"product_key": "crane", "category_id": str(category["id"])},
            headers=admin_headers,
        )

        api.assert_error(response, 400, expected_message="Category not found for this site")


class TestProductUpdate:
    @pytest.mark.asyncio
    async def test_update_upserts_translations(self, client: AsyncClient, admin_headers: dict, api):
        product = await create_product(
            client,
            admin_headers,
            translations=json.dumps({"en": {"title": "Oak bed"}}),
        )

        response = await client.put(
            f"{URL}/mattress/{product['id']}",
            data={
                "product_key": "oak-bed-xl",
                "visible": "false",
                "translations": json.dumps({"en": {"title": "Oak bed XL"}, "ru": {"title": "Кровать"}}),
            },
            headers=admin_headers,
        )

        updated = api.assert_success(response)
        assert updated["product_key"] == "oak-bed-xl"
        assert updated["visible"] is False
        assert updated["translations"]["en"]["title"] == "Oak bed XL"
        assert updated["translations"]["ru"]["title"] == "Кровать"

    @pytest.mark.asyncio
    async def test_new_image_replaces_old_file(
        self,
        client: AsyncClient,
        admin_headers: dict,
        image_file: tuple,
        upload_storage: UploadStorage,
        api,
    ):
        created = api.assert_success(
            await client.post(
                f"{URL}/mattress",
                data={"product_key": "oak-bed"},
                files={"image": image_file},
                headers=admin_headers,
            ),
            201,
        )
        old_path = upload_storage.path_for(created["image"])

        response = await client.put(
            f"{URL}/mattress/{created['id']}",
            data={"product_key": "oak-bed"},
            files={"image": ("second.png", image_file[1], "image/png")},
            headers=admin_headers,
        )

        updated = api.assert_success(response)
        assert updated["image"] != created["image"]
        assert not old_path.exists()
        assert upload_storage.path_for(updated["image"]).is_file()


class TestProductBatch:
    @pytest.mark.asyncio
    async def test_batch_visibility_and_category(
        self,
        client: AsyncClient,
        admin_headers: dict,
        category: dict,
        api,
    ):
        first = await create_product(client, admin_headers, product_key="a")
        second = await create_product(client, admin_headers, product_key="b")
        ids = [first["id"], second["id"]]

        hidden = await client.post(
            f"{URL}/mattress/batch/visibility",
            json={"ids": ids, "visible": False},
            headers=admin_headers,
        )
        moved = await client.post(
            f"{URL}/mattress/batch/category",
            json={"ids": ids, "category_id": category["id"]},
            headers=admin_headers,
        )

        assert api.assert_success(hidden)["updated"] == 2
        assert api.assert_success(moved)["updated"] == 2
        listed = api.assert_success(
            await client.get(f"{URL}/mattress?category_id={category['id']}", headers=admin_headers)
        )
        assert {p["product_key"] for p in listed} == {"a", "b"}
        assert all(p["visible"] is False for p in listed)

    @pytest.mark.asyncio
    async def test_batch_requires_ids(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(
            f"{URL}/mattress/batch/visibility",
            json={"ids": [], "visible": False},
            headers=admin_headers,
        )

        api.assert_error(response, 400, expected_message="IDs array is required")

    @pytest.mark.asyncio
    async def test_batch_delete_is_admin_only(
        self,
        client: AsyncClient,
        admin_headers: dict,
        accountant_headers: dict,
        api,
    ):
        product = await create_product(client, admin_headers)

        forbidden = await client.post(
            f"{URL}/mattress/batch/delete",
            json={"ids": [product["id"]]},
            headers=accountant_headers,
        )
        deleted = await client.post(
            f"{URL}/mattress/batch/delete",
            json={"ids": [product["id"], 999]},
            headers=admin_headers,
        )

        api.assert_error(forbidden, 403)
        assert api.assert_success(deleted)["deleted"] == 1

    @pytest.mark.asyncio
    async def test_batch_ignores_other_sites(self, client: AsyncClient, admin_headers: dict, api):
        product = await create_product(client, admin_headers, site="babylon")

        response = await client.post(
            f"{URL}/mattress/batch/visibility",
            json={"ids": [product["id"]], "visible": False},
            headers=admin_headers,
        )

        assert api.assert_success(response)["updated"] == 0


class TestProductDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_image(
        self,
        client: AsyncClient,
        admin_headers: dict,
        image_file: tuple,
        upload_storage: UploadStorage,
        api,
    ):
        created = api.assert_success(
            await client.post(
                f"{URL}/mattress",
                data={"product_key": "oak-bed"},
                files={"image": image_file},
                headers=admin_headers,
            ),
            201,
        )
        path = upload_storage.path_for(created["image"])

        response = await client.delete(f"{URL}/mattress/{created['id']}", headers=admin_headers)

        api.assert_success(response)
        assert not path.exists()
        missing = await client.get(f"{URL}/mattress/{created['id']}", headers=admin_headers)
        api.assert_error(missing, 404)

    @pytest.mark.asyncio
    async def test_reorder(self, client: AsyncClient, admin_headers: dict, api):
        first = await create_product(client, admin_headers, product_key="a")
        second = await create_product(client, admin_headers, product_key="b")

        await client.post(
            f"{URL}/mattress/reorder",
            json={"order": [second["id"], first["id"]]},
            headers=admin_headers,
        )

        listed = api.assert_success(await client.get(f"{URL}/mattress", headers=admin_headers))
        assert [p["product_key"] for p in listed] == ["b", "a"]
