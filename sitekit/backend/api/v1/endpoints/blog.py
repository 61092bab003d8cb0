"""
Blog API Endpoints.

Published posts and tags are public; drafts and editing live under
`/admin/...`.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from sitekit.backend.core.dependencies import CurrentUser, DbSession, RequestId
from sitekit.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from sitekit.backend.schemas.base import ApiResponse, MessageResponse, PaginatedResponse
from sitekit.backend.schemas.blog import (
    PostCreate,
    PostResponse,
    PostStatusUpdate,
    PostTagsUpdate,
    PostUpdate,
    TagCreate,
    TagResponse,
    TagWithCount,
)
from sitekit.backend.services.blog import BlogService

router = APIRouter()


@router.get(
    "/posts",
    response_model=PaginatedResponse[PostResponse],
    summary="Published posts",
)
async def list_posts(
    db: DbSession,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    tag: str | None = Query(default=None, description="Tag slug"),
) -> dict[str, Any]:
    posts, total = await BlogService(db).list_published(tag, pagination.limit, pagination.offset)
    return create_paginated_response(
        items=posts,
        item_schema=PostResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/posts/{slug}", response_model=ApiResponse[PostResponse], summary="Published post by slug")
async def get_post(
    slug: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PostResponse]:
    post = await BlogService(db).get_published(slug)
    return ApiResponse(data=PostResponse.model_validate(post))


@router.get("/tags", response_model=ApiResponse[list[TagWithCount]], summary="Tags with post counts")
async def list_tags(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[TagWithCount]]:
    return ApiResponse(data=await BlogService(db).tags_with_counts())


@router.get("/admin/posts", response_model=ApiResponse[list[PostResponse]], summary="All posts")
async def admin_list_posts(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[PostResponse]]:
    posts = await BlogService(db).list_posts()
    return ApiResponse(data=[PostResponse.model_validate(p) for p in posts])


@router.get("/admin/posts/{post_id}", response_model=ApiResponse[PostResponse], summary="Get a post")
async def admin_get_post(
    post_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PostResponse]:
    post = await BlogService(db).get_post(post_id)
    return ApiResponse(data=PostResponse.model_validate(post))


@router.post(
    "/admin/posts",
    response_model=ApiResponse[PostResponse],
    status_code=201,
    summary="Create a post",
)
async def admin_create_post(
    data: PostCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PostResponse]:
    post = await BlogService(db).create_post(data)
    return ApiResponse(data=PostResponse.model_validate(post))


@router.put("/admin/posts/{post_id}", response_model=ApiResponse[PostResponse], summary="Update a post")
async def admin_update_post(
    post_id: int,
    data: PostUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PostResponse]:
    post = await BlogService(db).update_post(post_id, data)
    return ApiResponse(data=PostResponse.model_validate(post))


@router.patch(
    "/admin/posts/{post_id}/status",
    response_model=ApiResponse[PostResponse],
    summary="Publish or unpublish a post",
)
async def admin_set_post_status(
    post_id: int,
    data: PostStatusUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PostResponse]:
    post = await BlogService(db).set_status(post_id, data.status)
    return ApiResponse(data=PostResponse.model_validate(post))


@router.put(
    "/admin/posts/{post_id}/tags",
    response_model=ApiResponse[PostResponse],
    summary="Replace a post's tags",
)
async def admin_set_post_tags(
    post_id: int,
    data: PostTagsUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PostResponse]:
    post = await BlogService(db).set_tags(post_id, data.tag_ids)
    return ApiResponse(data=PostResponse.model_validate(post))


@router.delete("/admin/posts/{post_id}", response_model=ApiResponse[MessageResponse], summary="Delete a post")
async def admin_delete_post(
    post_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await BlogService(db).delete_post(post_id)
    return ApiResponse(data=MessageResponse(message="Post deleted"))


@router.get("/admin/tags", response_model=ApiResponse[list[TagResponse]], summary="All tags")
async def admin_list_tags(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[TagResponse]]:
    tags = await BlogService(db).list_tags()
    return ApiResponse(data=[TagResponse.model_validate(t) for t in tags])


@router.post(
    "/admin/tags",
    response_model=ApiResponse[TagResponse],
    status_code=201,
    summary="Create a tag",
)
async def admin_create_tag(
    data: TagCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[TagResponse]:
    tag = await BlogService(db).create_tag(data)
    return ApiResponse(data=TagResponse.model_validate(tag))


@router.put("/admin/tags/{tag_id}", response_model=ApiResponse[TagResponse], summary="Rename a tag")
async def admin_update_tag(
    tag_id: int,
    data: TagCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[TagResponse]:
    tag = await BlogService(db).update_tag(tag_id, data)
    return ApiResponse(data=TagResponse.model_validate(tag))


@router.delete("/admin/tags/{tag_id}", response_model=ApiResponse[MessageResponse], summary="Delete a tag")
async def admin_delete_tag(
    tag_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await BlogService(db).delete_tag(tag_id)
    return ApiResponse(data=MessageResponse(message="Tag deleted"))
