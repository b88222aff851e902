import uuid
from datetime import datetime

from pydantic import EmailStr
from sqlmodel import Field, SQLModel


class UserUpdate(SQLModel):
    """Schema for admin edits of a platform user"""
    email: EmailStr | None = Field(default=None, max_length=255)
    full_name: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = None
    is_banned: bool | None = None
    registered_from_app_id: uuid.UUID | None = None


class UserBan(SQLModel):
    is_banned: bool


class UserPublic(SQLModel):
    """Schema for public user data"""
    id: uuid.UUID
    email: str
    full_name: str | None
    avatar_url: str | None
    is_banned: bool
    registered_from_app_id: uuid.UUID | None
    created_at: datetime
    updated_at: datetime


class UserRow(UserPublic):
    application_name: str | None = None
    application_slug: str | None = None


class UserFilters(SQLModel):
    search: str | None = None
    application_id: uuid.UUID | None = None
