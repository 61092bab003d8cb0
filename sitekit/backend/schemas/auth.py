"""
Auth Schemas.

Request/response schemas for login, session status and password changes.
Fields default to empty strings so missing values reach the service and
are reported as 400, the same as blank ones.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(default="", description="Account username")
    password: str = Field(default="", description="Account password")


class LoginResponse(BaseModel):
    username: str
    role: str
    redirect: str = Field(description="Where the admin panel should navigate next")


class MeResponse(BaseModel):
    id: int
    username: str
    role: str


class AuthStatusResponse(BaseModel):
    authenticated: bool
    username: str | None = None
    role: str | None = None


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(default="")
    new_password: str = Field(default="")
