import uuid
from decimal import Decimal

from sqlmodel import SQLModel


class DashboardStats(SQLModel):
    total_users: int = 0
    new_users_last_7_days: int = 0
    total_applications: int = 0
    active_applications: int = 0
    active_memberships: int = 0
    total_revenue: Decimal = Decimal("0")


class ApplicationRevenue(SQLModel):
    application_id: uuid.UUID
    application_name: str
    payment_count: int = 0
    total_revenue: Decimal = Decimal("0")
