"""
Auth API Endpoints.

Login and logout for the admin panel. The session token is stored in an
httpOnly cookie; `Authorization: Bearer` is accepted as well.
"""

from fastapi import APIRouter, Depends, Request, Response

from sitekit.backend.core.config import get_app_config
from sitekit.backend.core.dependencies import (
    CurrentUser,
    DbSession,
    RequestId,
    SessionUser,
    get_optional_user,
)
from sitekit.backend.gateway.security.rate_limiter import enforce_rate_limit, get_rate_limiters
from sitekit.backend.schemas.auth import (
    AuthStatusResponse,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MeResponse,
)
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.services.auth import AuthService, redirect_for_role

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    session_config = get_app_config().security.session
    response.set_cookie(
        session_config.cookie_name,
        token,
        max_age=session_config.max_age_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=session_config.secure,
    )


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    summary="Log in",
    description="Check credentials and set the session cookie. Failed attempts are rate limited per IP.",
)
async def login(
    data: LoginRequest,
    request: Request,
    response: Response,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[LoginResponse]:
    """Log in with username and password."""
    limiter_key = None
    if get_app_config().features.auth_rate_limit_enabled:
        limiter_key = enforce_rate_limit(request, "login")

    service = AuthService(db)
    user, token = await service.authenticate(data.username, data.password)

    # Successful logins do not count toward the limit
    if limiter_key is not None:
        get_rate_limiters(request).get("login").release(limiter_key)

    _set_session_cookie(response, token)
    return ApiResponse(
        data=LoginResponse(
            username=user.username,
            role=user.role,
            redirect=redirect_for_role(user.role),
        )
    )


@router.post(
    "/logout",
    response_model=ApiResponse[MessageResponse],
    summary="Log out",
)
async def logout(
    response: Response,
    user: CurrentUser,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    response.delete_cookie(get_app_config().security.session.cookie_name)
    return ApiResponse(data=MessageResponse(message="Logged out"))


@router.get(
    "/me",
    response_model=ApiResponse[MeResponse],
    summary="Current user",
)
async def me(user: CurrentUser, request_id: RequestId) -> ApiResponse[MeResponse]:
    return ApiResponse(data=MeResponse(id=user.id, username=user.username, role=user.role))


@router.get(
    "/status",
    response_model=ApiResponse[AuthStatusResponse],
    summary="Session status",
    description="Public check used by the login page to skip straight to the dashboard.",
)
async def status(
    request_id: RequestId,
    user: SessionUser | None = Depends(get_optional_user),
) -> ApiResponse[AuthStatusResponse]:
    if user is None:
        return ApiResponse(data=AuthStatusResponse(authenticated=False))
    return ApiResponse(
        data=AuthStatusResponse(authenticated=True, username=user.username, role=user.role)
    )


@router.post(
    "/change-password",
    response_model=ApiResponse[MessageResponse],
    summary="Change own password",
)
async def change_password(
    data: ChangePasswordRequest,
    request: Request,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    if get_app_config().features.auth_rate_limit_enabled:
        enforce_rate_limit(request, "password_change")

    service = AuthService(db)
    await service.change_password(user.id, data.current_password, data.new_password)
    return ApiResponse(data=MessageResponse(message="Password changed successfully"))
