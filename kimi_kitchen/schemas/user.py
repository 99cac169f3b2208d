"""Pydantic schemas for users and authentication."""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

RoleName = Literal["ADMIN", "MANAGER", "CHEF", "CUSTOMER"]


class UserRegister(BaseModel):
    """Self-service signup. New accounts always start as CUSTOMER."""

    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)


class LoginRequest(BaseModel):
    """Username/password credentials."""

    username: str
    password: str


class UserResponse(BaseModel):
    """Public user fields."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    active: bool
    created_at: datetime


class CurrentUserResponse(UserResponse):
    """The signed-in user with role details."""

    role_display_name: str
    permissions: list[str]


class TokenResponse(BaseModel):
    """Access token issued at login."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserList(BaseModel):
    """Schema for list of users."""

    users: list[UserResponse]
    count: int


class RoleUpdate(BaseModel):
    """Request to change a user's role."""

    role: RoleName


class StatusUpdate(BaseModel):
    """Request to activate or deactivate a user."""

    active: bool


class UserUpdateResponse(BaseModel):
    """Result of a role or status change."""

    message: str
    user: UserResponse
