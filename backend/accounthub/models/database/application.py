import uuid
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class Application(SQLModel, table=True):
    """Database model for tenant applications"""
    __tablename__ = "applications"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, max_length=255)
    slug: str = Field(unique=True, index=True, max_length=100)
    app_key: str = Field(unique=True, index=True, max_length=35)
    description: str | None = Field(default=None)
    website_url: str | None = Field(default=None)
    is_active: bool = Field(default=True)
    created_by: uuid.UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
