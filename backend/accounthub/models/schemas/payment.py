import uuid
from datetime import datetime
from decimal import Decimal

from sqlmodel import Field, SQLModel

from accounthub.models.constants import PaymentMethod, PaymentStatus


class PaymentBase(SQLModel):
    membership_id: uuid.UUID | None = None
    user_id: uuid.UUID
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    currency: str = Field(default="CNY", max_length=10)
    payment_method: PaymentMethod | None = None
    transaction_id: str | None = Field(default=None, max_length=255)
    status: PaymentStatus = "pending"
    invoice_url: str | None = None
    paid_at: datetime | None = None


class PaymentCreate(PaymentBase):
    pass


class PaymentUpdate(SQLModel):
    membership_id: uuid.UUID | None = None
    amount: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    currency: str | None = Field(default=None, max_length=10)
    payment_method: PaymentMethod | None = None
    transaction_id: str | None = Field(default=None, max_length=255)
    status: PaymentStatus | None = None
    invoice_url: str | None = None
    paid_at: datetime | None = None


class PaymentPublic(PaymentBase):
    id: uuid.UUID
    payment_method: str | None
    status: str
    created_at: datetime


class PaymentRow(PaymentPublic):
    user_email: str | None = None
    user_full_name: str | None = None
    application_name: str | None = None
    application_slug: str | None = None


class PaymentFilters(SQLModel):
    user_id: uuid.UUID | None = None
    membership_id: uuid.UUID | None = None
    status: PaymentStatus | None = None
