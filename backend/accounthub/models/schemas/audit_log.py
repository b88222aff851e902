import uuid
from datetime import datetime
from typing import Any, Dict, List

from sqlmodel import SQLModel


class AuditLogEntry(SQLModel):
    """One administrative action to record"""
    admin_id: str
    action: str
    resource_type: str
    resource_id: str | None = None
    target_user_email: str | None = None
    details: Dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None


class AuditLogPublic(SQLModel):
    id: uuid.UUID
    admin_id: uuid.UUID | None
    action: str
    resource_type: str
    resource_id: str | None
    target_user_email: str | None
    details: Dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime


class AuditLogsPublic(SQLModel):
    data: List[AuditLogPublic]
    count: int
    limit: int
    offset: int
