import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class RedemptionCode(SQLModel, table=True):
    """Code redeemable for a membership plan grant"""
    __tablename__ = "redemption_codes"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=50)
    code_type: str = Field(default="single", max_length=20)
    application_id: uuid.UUID = Field(index=True, foreign_key="applications.id")
    membership_plan_id: uuid.UUID = Field(foreign_key="membership_plans.id")
    max_uses: int = Field(default=1)  # -1 means unlimited
    current_uses: int = Field(default=0)
    valid_from: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    valid_until: datetime | None = Field(default=None)
    is_active: bool = Field(default=True)
    # Stored as supplied, never derived from current_uses or valid_until
    status: str = Field(default="active", index=True, max_length=20)
    description: str | None = Field(default=None)
    extra_data: dict[str, Any] | None = Field(default=None, sa_column=Column("metadata", JSON))
    created_by: uuid.UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RedemptionCodeUse(SQLModel, table=True):
    """Append-only record of one redemption. Written by the redemption flow."""
    __tablename__ = "redemption_code_uses"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    redemption_code_id: uuid.UUID = Field(index=True, foreign_key="redemption_codes.id")
    user_id: uuid.UUID = Field(index=True, foreign_key="users.id")
    membership_id: uuid.UUID | None = Field(default=None, foreign_key="user_app_memberships.id")
    redeemed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    ip_address: str | None = Field(default=None, max_length=64)
    user_agent: str | None = Field(default=None)
    extra_data: dict[str, Any] | None = Field(default=None, sa_column=Column("metadata", JSON))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
