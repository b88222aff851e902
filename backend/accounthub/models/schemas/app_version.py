import uuid
from datetime import datetime
from typing import Any, Dict

from sqlmodel import Field, SQLModel

from accounthub.models.constants import Platform


class AppVersionBase(SQLModel):
    application_id: uuid.UUID
    version_number: str = Field(min_length=1, max_length=50)
    version_code: int = Field(default=1, ge=0)
    release_notes: str | None = None
    download_url: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    file_hash: str | None = None
    min_supported_version: str | None = None
    is_force_update: bool = False
    is_published: bool = False
    platform: Platform = "all"
    extra_data: Dict[str, Any] | None = None


class AppVersionCreate(AppVersionBase):
    pass


class AppVersionUpdate(SQLModel):
    version_number: str | None = Field(default=None, min_length=1, max_length=50)
    version_code: int | None = Field(default=None, ge=0)
    release_notes: str | None = None
    download_url: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    file_hash: str | None = None
    min_supported_version: str | None = None
    is_force_update: bool | None = None
    platform: Platform | None = None
    extra_data: Dict[str, Any] | None = None


class AppVersionPublic(AppVersionBase):
    id: uuid.UUID
    platform: str
    published_at: datetime | None
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime


class AppVersionRow(AppVersionPublic):
    application_name: str | None = None
    application_slug: str | None = None


class AppVersionFilters(SQLModel):
    application_id: uuid.UUID | None = None
    platform: Platform | None = None
    is_published: bool | None = None
    search: str | None = None


class AppVersionPublish(SQLModel):
    is_published: bool
