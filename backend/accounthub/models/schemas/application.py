import uuid
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator
from sqlmodel import Field, SQLModel

from accounthub.utils.validation import is_valid_slug, is_valid_url


def _check_slug(value: str) -> str:
    if not is_valid_slug(value):
        raise ValueError("slug must be 3-100 lowercase letters, digits and hyphens")
    return value


def _check_url(value: str) -> str:
    if not is_valid_url(value):
        raise ValueError("website_url must be an http or https URL")
    return value


Slug = Annotated[str, AfterValidator(_check_slug)]
WebsiteUrl = Annotated[str, AfterValidator(_check_url)]


class ApplicationBase(SQLModel):
    """Base schema for application data"""
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(max_length=100)
    description: str | None = Field(default=None)
    website_url: str | None = Field(default=None)
    is_active: bool = True


class ApplicationCreate(ApplicationBase):
    """Schema for creating an application. The app key is generated server-side."""
    slug: Slug
    website_url: WebsiteUrl | None = None


class ApplicationUpdate(SQLModel):
    """Schema for updating application data"""
    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: Slug | None = None
    description: str | None = Field(default=None)
    website_url: WebsiteUrl | None = None
    is_active: bool | None = None


class ApplicationPublic(ApplicationBase):
    """Schema for public application data"""
    id: uuid.UUID
    app_key: str
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime


class ApplicationActive(SQLModel):
    is_active: bool


class ApplicationFilters(SQLModel):
    search: str | None = None
