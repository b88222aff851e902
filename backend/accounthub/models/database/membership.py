import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class UserAppMembership(SQLModel, table=True):
    """A user's membership in one application"""
    __tablename__ = "user_app_memberships"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(index=True, foreign_key="users.id")
    application_id: uuid.UUID = Field(index=True, foreign_key="applications.id")
    membership_plan_id: uuid.UUID | None = Field(default=None, foreign_key="membership_plans.id")
    status: str = Field(default="active", index=True, max_length=20)
    payment_status: str | None = Field(default=None, max_length=20)
    billing_cycle: str | None = Field(default=None, max_length=20)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime | None = Field(default=None)
    trial_ends_at: datetime | None = Field(default=None)
    cancelled_at: datetime | None = Field(default=None)
    extra_data: dict[str, Any] | None = Field(default=None, sa_column=Column("metadata", JSON))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
