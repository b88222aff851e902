import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from sqlmodel import Field, SQLModel

from accounthub.models.constants import BillingCycle


class MembershipPlanBase(SQLModel):
    application_id: uuid.UUID | None = None
    plan_id: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=255)
    display_name: str = Field(min_length=1, max_length=255)
    duration_days: int = Field(default=30, ge=0)
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    currency: str = Field(default="CNY", max_length=10)
    billing_cycle: BillingCycle | None = None
    description: str | None = None
    features: Dict[str, Any] | None = None
    is_active: bool = True
    sort_order: int = 0


class MembershipPlanCreate(MembershipPlanBase):
    pass


class MembershipPlanUpdate(SQLModel):
    application_id: uuid.UUID | None = None
    plan_id: str | None = Field(default=None, min_length=1, max_length=100)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    display_name: str | None = Field(default=None, min_length=1, max_length=255)
    duration_days: int | None = Field(default=None, ge=0)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    currency: str | None = Field(default=None, max_length=10)
    billing_cycle: BillingCycle | None = None
    description: str | None = None
    features: Dict[str, Any] | None = None
    is_active: bool | None = None
    sort_order: int | None = None


class MembershipPlanOrder(SQLModel):
    sort_order: int


class MembershipPlanPublic(MembershipPlanBase):
    id: uuid.UUID
    billing_cycle: str | None
    created_at: datetime
    updated_at: datetime


class MembershipPlanRow(MembershipPlanPublic):
    application_name: str | None = None
    application_slug: str | None = None


class MembershipPlanFilters(SQLModel):
    application_id: uuid.UUID | None = None
    is_active: bool | None = None
