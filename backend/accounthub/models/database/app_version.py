import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class AppVersion(SQLModel, table=True):
    """Released build of an application on one platform"""
    __tablename__ = "app_versions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    application_id: uuid.UUID = Field(index=True, foreign_key="applications.id")
    version_number: str = Field(max_length=50)
    version_code: int = Field(default=1)
    release_notes: str | None = Field(default=None)
    download_url: str | None = Field(default=None)
    file_size: int | None = Field(default=None)
    file_hash: str | None = Field(default=None)
    min_supported_version: str | None = Field(default=None)
    is_force_update: bool = Field(default=False)
    is_published: bool = Field(default=False)
    platform: str = Field(default="all", index=True, max_length=20)
    extra_data: dict[str, Any] | None = Field(default=None, sa_column=Column("metadata", JSON))
    published_at: datetime | None = Field(default=None)
    created_by: uuid.UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
