import uuid
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class Admin(SQLModel, table=True):
    """Database model for back-office administrators"""
    __tablename__ = "admins"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str
    full_name: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = Field(default=None)
    last_login_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
