import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class MembershipPlan(SQLModel, table=True):
    """Priced, timed entitlement tier of one application"""
    __tablename__ = "membership_plans"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    application_id: uuid.UUID | None = Field(default=None, index=True, foreign_key="applications.id")
    plan_id: str = Field(max_length=100)
    name: str = Field(max_length=255)
    display_name: str = Field(max_length=255)
    duration_days: int = Field(default=30)
    price: Decimal = Field(default=0, max_digits=10, decimal_places=2)
    currency: str = Field(default="CNY", max_length=10)
    billing_cycle: str | None = Field(default=None, max_length=20)
    description: str | None = Field(default=None)
    features: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    is_active: bool = Field(default=True)
    sort_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
