"""
User Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """User as shown in the admin user list (never includes the hash)."""

    id: int
    username: str
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    username: str = Field(default="", max_length=64)
    password: str = Field(default="")
    role: str | None = Field(
        default=None,
        description="admin or accountant; anything else becomes accountant",
    )


class UserRoleUpdate(BaseModel):
    role: str = Field(default="")


class UserPasswordUpdate(BaseModel):
    password: str = Field(default="")
