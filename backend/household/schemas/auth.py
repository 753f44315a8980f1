"""Pydantic schemas for authentication and account API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from household.models.user import UserRole


class RegisterRequest(BaseModel):
    """Request for account registration."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.USER


class LoginRequest(BaseModel):
    """Request for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Partial profile update. Unset fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = Field(None, min_length=6, max_length=128)
    role: UserRole | None = None


class UserResponse(BaseModel):
    """A user without credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    role: UserRole
    created_at: datetime


class LoginResponse(BaseModel):
    """Response with the bearer token and the logged-in user."""

    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    """Generic success/message response."""

    success: bool = True
    message: str


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserResponse


class UserListResponse(BaseModel):
    success: bool = True
    users: list[UserResponse]
