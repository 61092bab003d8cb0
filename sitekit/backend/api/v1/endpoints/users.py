"""
Users API Endpoints.

Admin-only management of panel accounts.
"""

from fastapi import APIRouter

from sitekit.backend.core.dependencies import AdminUser, DbSession, RequestId
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.user import (
    UserCreate,
    UserPasswordUpdate,
    UserResponse,
    UserRoleUpdate,
)
from sitekit.backend.services.user import UserService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[UserResponse]], summary="List users")
async def list_users(
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[UserResponse]]:
    users = await UserService(db).list_users()
    return ApiResponse(data=[UserResponse.model_validate(user) for user in users])


@router.get("/{user_id}", response_model=ApiResponse[UserResponse], summary="Get a user")
async def get_user(
    user_id: int,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[UserResponse]:
    user = await UserService(db).get_user(user_id)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    status_code=201,
    summary="Create a user",
)
async def create_user(
    data: UserCreate,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[UserResponse]:
    user = await UserService(db).create_user(data)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    summary="Change a user's role",
)
async def update_user_role(
    user_id: int,
    data: UserRoleUpdate,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[UserResponse]:
    user = await UserService(db).update_role(user_id, data.role, acting_user_id=admin.id)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.post(
    "/{user_id}/password",
    response_model=ApiResponse[MessageResponse],
    summary="Reset a user's password",
)
async def set_user_password(
    user_id: int,
    data: UserPasswordUpdate,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await UserService(db).set_password(user_id, data.password)
    return ApiResponse(data=MessageResponse(message="Password updated"))


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a user",
)
async def delete_user(
    user_id: int,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await UserService(db).delete_user(user_id, acting_user_id=admin.id)
    return ApiResponse(data=MessageResponse(message="User deleted"))
