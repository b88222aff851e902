import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import Field, SQLModel


class PaymentHistory(SQLModel, table=True):
    """Single payment made by a user"""
    __tablename__ = "payment_history"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    membership_id: uuid.UUID | None = Field(default=None, index=True, foreign_key="user_app_memberships.id")
    user_id: uuid.UUID = Field(index=True, foreign_key="users.id")
    amount: Decimal = Field(default=0, max_digits=10, decimal_places=2)
    currency: str = Field(default="CNY", max_length=10)
    payment_method: str | None = Field(default=None, max_length=20)
    transaction_id: str | None = Field(default=None, max_length=255)
    status: str = Field(default="pending", index=True, max_length=20)
    invoice_url: str | None = Field(default=None)
    paid_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
