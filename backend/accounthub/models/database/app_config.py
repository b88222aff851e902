import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class AppConfig(SQLModel, table=True):
    """Keyed JSON configuration served to client applications"""
    __tablename__ = "app_configs"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    config_key: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=255)
    description: str | None = Field(default=None)
    config_data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    config_type: str | None = Field(default=None, max_length=50)
    is_active: bool = Field(default=True)
    created_by: uuid.UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AppConfigTemplate(SQLModel, table=True):
    """Form definition used to fill in an AppConfig"""
    __tablename__ = "app_config_templates"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    template_name: str = Field(unique=True, index=True, max_length=100)
    display_name: str = Field(max_length=255)
    description: str | None = Field(default=None)
    template_fields: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    example_data: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    icon: str | None = Field(default=None, max_length=100)
    category: str | None = Field(default=None, max_length=100)
    is_active: bool = Field(default=True)
    sort_order: int = Field(default=0)
    created_by: uuid.UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
