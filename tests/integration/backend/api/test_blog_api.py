"""Integration tests for the blog."""

import pytest
from httpx import AsyncClient

URL = "/api/v1/blog"


async def create_post(client: AsyncClient, headers: dict, title: str, **fields) -> dict:
    response = await client.post(f"{URL}/admin/posts", json={"title": title, **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_tag(client: AsyncClient, headers: dict, name: str) -> dict:
    response = await client.post(f"{URL}/admin/tags", json={"name": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestPosts:
    @pytest.mark.asyncio
    async def test_slug_generated_from_title(self, client: AsyncClient, admin_headers: dict):
        post = await create_post(client, admin_headers, "Hello, World!  Again")

        assert post["slug"] == "hello-world-again"
        assert post["status"] == "draft"
        assert post["author"] == "Admin"
        assert post["published_at"] is None

    @pytest.mark.asyncio
    async def test_duplicate_slug_gets_suffix(self, client: AsyncClient, admin_headers: dict):
        first = await create_post(client, admin_headers, "Launch")
        second = await create_post(client, admin_headers, "Launch")

        assert first["slug"] == "launch"
        assert second["slug"].startswith("launch-")
        assert second["slug"][len("launch-"):].isdigit()

    @pytest.mark.asyncio
    async def test_title_required(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(f"{URL}/admin/posts", json={"title": " "}, headers=admin_headers)

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Title is required")

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient, admin_headers: dict, api):
        response = await client.post(
            f"{URL}/admin/posts",
            json={"title": "Launch", "status": "archived"},
            headers=admin_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Status must be draft or published")

    @pytest.mark.asyncio
    async def test_publish_keeps_first_published_at(self, client: AsyncClient, admin_headers: dict, api):
        post = await create_post(client, admin_headers, "Launch")
        status_url = f"{URL}/admin/posts/{post['id']}/status"

        published = api.assert_success(
            await client.patch(status_url, json={"status": "published"}, headers=admin_headers)
        )
        api.assert_success(await client.patch(status_url, json={"status": "draft"}, headers=admin_headers))
        republished = api.assert_success(
            await client.patch(status_url, json={"status": "published"}, headers=admin_headers)
        )

        assert published["published_at"] is not None
        assert republished["published_at"] == published["published_at"]

    @pytest.mark.asyncio
    async def test_update_slug_conflict(self, client: AsyncClient, admin_headers: dict, api):
        await create_post(client, admin_headers, "Launch")
        other = await create_post(client, admin_headers, "Roadmap")

        response = await client.put(
            f"{URL}/admin/posts/{other['id']}",
            json={"slug": "Launch"},
            headers=admin_headers,
        )

        api.assert_error(response, 409, "RES_CONFLICT", "Slug already exists")


class TestPublicBlog:
    @pytest.mark.asyncio
    async def test_only_published_posts_listed(self, client: AsyncClient, admin_headers: dict):
        await create_post(client, admin_headers, "Live", status="published")
        await create_post(client, admin_headers, "Draft")

        response = await client.get(f"{URL}/posts")

        body = response.json()
        assert [p["slug"] for p in body["data"]] == ["live"]
        assert body["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_draft_not_readable_by_slug(self, client: AsyncClient, admin_headers: dict, api):
        await create_post(client, admin_headers, "Draft")

        api.assert_error(await client.get(f"{URL}/posts/draft"), 404, "RES_NOT_FOUND", "Post not found")

    @pytest.mark.asyncio
    async def test_filter_by_tag_and_counts(self, client: AsyncClient, admin_headers: dict, api):
        news = await create_tag(client, admin_headers, "Company News")
        await create_tag(client, admin_headers, "Empty")
        live = await create_post(client, admin_headers, "Live", status="published")
        other = await create_post(client, admin_headers, "Other", status="published")
        draft = await create_post(client, admin_headers, "Draft")
        for post in (live, draft):
            api.assert_success(
                await client.put(
                    f"{URL}/admin/posts/{post['id']}/tags",
                    json={"tag_ids": [news["id"]]},
                    headers=admin_headers,
                )
            )

        tagged = await client.get(f"{URL}/posts", params={"tag": "company-news"})
        counts = api.assert_success(await client.get(f"{URL}/tags"))

        assert [p["id"] for p in tagged.json()["data"]] == [live["id"]]
        assert other["id"] not in [p["id"] for p in tagged.json()["data"]]
        assert [(t["slug"], t["post_count"]) for t in counts] == [("company-news", 1), ("empty", 0)]


class TestTags:
    @pytest.mark.asyncio
    async def test_duplicate_tag(self, client: AsyncClient, admin_headers: dict, api):
        await create_tag(client, admin_headers, "News")

        response = await client.post(f"{URL}/admin/tags", json={"name": "News"}, headers=admin_headers)

        api.assert_error(response, 409, "RES_CONFLICT", "Tag already exists")

    @pytest.mark.asyncio
    async def test_rename_updates_slug(self, client: AsyncClient, admin_headers: dict, api):
        tag = await create_tag(client, admin_headers, "News")

        renamed = api.assert_success(
            await client.put(f"{URL}/admin/tags/{tag['id']}", json={"name": "Press Releases"}, headers=admin_headers)
        )

        assert renamed["slug"] == "press-releases"

    @pytest.mark.asyncio
    async def test_tag_ids_must_be_array(self, client: AsyncClient, admin_headers: dict, api):
        post = await create_post(client, admin_headers, "Launch")

        response = await client.put(
            f"{URL}/admin/posts/{post['id']}/tags",
            json={"tag_ids": "1,2"},
            headers=admin_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "tag_ids must be an array")

    @pytest.mark.asyncio
    async def test_unknown_tag_id(self, client: AsyncClient, admin_headers: dict, api):
        post = await create_post(client, admin_headers, "Launch")

        response = await client.put(
            f"{URL}/admin/posts/{post['id']}/tags",
            json={"tag_ids": [999]},
            headers=admin_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR", "Unknown tag id")
