import uuid
from datetime import datetime
from typing import Any, Dict

from sqlmodel import Field, SQLModel

from accounthub.models.constants import PaymentMethod


class PaymentConfigBase(SQLModel):
    application_id: uuid.UUID | None = None
    payment_method: PaymentMethod
    config: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True
    is_sandbox: bool = False


class PaymentConfigCreate(PaymentConfigBase):
    pass


class PaymentConfigUpdate(SQLModel):
    application_id: uuid.UUID | None = None
    payment_method: PaymentMethod | None = None
    config: Dict[str, Any] | None = None
    is_active: bool | None = None
    is_sandbox: bool | None = None


class PaymentConfigPublic(PaymentConfigBase):
    id: uuid.UUID
    payment_method: str
    created_at: datetime
    updated_at: datetime


class PaymentConfigRow(PaymentConfigPublic):
    application_name: str | None = None
    application_slug: str | None = None


class PaymentConfigFilters(SQLModel):
    application_id: uuid.UUID | None = None
    payment_method: PaymentMethod | None = None
