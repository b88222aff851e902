import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class AdminAuditLog(SQLModel, table=True):
    """Append-only record of an administrative mutation"""
    __tablename__ = "admin_audit_logs"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    admin_id: uuid.UUID | None = Field(default=None, index=True, foreign_key="admins.id")
    action: str = Field(index=True, max_length=100)
    resource_type: str = Field(max_length=100)
    resource_id: str | None = Field(default=None, index=True, max_length=64)
    target_user_email: str | None = Field(default=None, max_length=255)
    details: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    ip_address: str | None = Field(default=None, max_length=64)
    user_agent: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
