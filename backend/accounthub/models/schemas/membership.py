import uuid
from datetime import datetime
from typing import Any, Dict

from sqlmodel import SQLModel

from accounthub.models.constants import BillingCycle, MembershipPaymentStatus, MembershipStatus


class MembershipBase(SQLModel):
    user_id: uuid.UUID
    application_id: uuid.UUID
    membership_plan_id: uuid.UUID | None = None
    status: MembershipStatus = "active"
    payment_status: MembershipPaymentStatus | None = None
    billing_cycle: BillingCycle | None = None
    started_at: datetime | None = None
    expires_at: datetime | None = None
    trial_ends_at: datetime | None = None
    cancelled_at: datetime | None = None
    extra_data: Dict[str, Any] | None = None


class MembershipCreate(MembershipBase):
    pass


class MembershipUpdate(SQLModel):
    application_id: uuid.UUID | None = None
    membership_plan_id: uuid.UUID | None = None
    status: MembershipStatus | None = None
    payment_status: MembershipPaymentStatus | None = None
    billing_cycle: BillingCycle | None = None
    started_at: datetime | None = None
    expires_at: datetime | None = None
    trial_ends_at: datetime | None = None
    cancelled_at: datetime | None = None
    extra_data: Dict[str, Any] | None = None


class MembershipStatusUpdate(SQLModel):
    status: MembershipStatus


class MembershipPublic(MembershipBase):
    id: uuid.UUID
    status: str
    payment_status: str | None
    billing_cycle: str | None
    started_at: datetime
    created_at: datetime
    updated_at: datetime


class MembershipRow(MembershipPublic):
    user_email: str | None = None
    user_full_name: str | None = None
    application_name: str | None = None
    application_slug: str | None = None
    plan_display_name: str | None = None
    plan_code: str | None = None


class MembershipFilters(SQLModel):
    user_id: uuid.UUID | None = None
    application_id: uuid.UUID | None = None
    status: MembershipStatus | None = None
