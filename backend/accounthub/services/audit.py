"""
Audit service for logging administrative actions.

A failed audit write must never fail the mutation it describes, so the
entity services go through ``log_action_safely`` which reports problems on
the audit log channel and hands back an ``AuditResult`` instead of raising.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from accounthub.core.exceptions import AccountHubError, AuditError, ValidationError
from accounthub.core.logging import audit_logger
from accounthub.models.database.audit_log import AdminAuditLog
from accounthub.models.schemas.audit_log import AuditLogEntry
from accounthub.utils.validation import is_valid_uuid

logger = logging.getLogger(__name__)

MAX_LIMIT = 100


@dataclass
class AuditContext:
    """Who performed a mutation, and from where"""
    admin_id: Optional[str]
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def admin_uuid(self) -> Optional[uuid.UUID]:
        return uuid.UUID(self.admin_id) if is_valid_uuid(self.admin_id) else None


@dataclass
class AuditResult:
    ok: bool
    log_id: Optional[uuid.UUID] = None
    error: Optional[AccountHubError] = None


def log_action(session: Session, entry: AuditLogEntry) -> AdminAuditLog:
    """
    Write one audit entry.

    Raises:
        ValidationError: admin_id (or a user resource_id) is not a UUID
        AuditError: the insert failed
    """
    if not is_valid_uuid(entry.admin_id):
        raise ValidationError("Invalid admin ID format", operation="log_action")
    if entry.resource_type == "user" and entry.resource_id and not is_valid_uuid(entry.resource_id):
        raise ValidationError("Invalid target user ID format", operation="log_action")

    log = AdminAuditLog(
        admin_id=uuid.UUID(entry.admin_id),
        action=entry.action,
        resource_type=entry.resource_type,
        resource_id=entry.resource_id,
        target_user_email=entry.target_user_email,
        details=jsonable_encoder(entry.details) if entry.details else None,
        ip_address=entry.ip_address,
        user_agent=entry.user_agent,
    )
    try:
        session.add(log)
        session.commit()
        session.refresh(log)
    except SQLAlchemyError as e:
        session.rollback()
        raise AuditError(f"Failed to write audit log: {e}", operation="log_action") from e
    return log


def log_action_safely(session: Session, entry: AuditLogEntry) -> AuditResult:
    """Write an audit entry, reporting failures on the audit channel instead of raising."""
    try:
        log = log_action(session, entry)
    except AccountHubError as e:
        audit_logger.error("Failed to log audit for %s on %s: %s", entry.action, entry.resource_type, e)
        return AuditResult(ok=False, error=e)
    return AuditResult(ok=True, log_id=log.id)


def record(
    session: Session,
    actor: Optional[AuditContext],
    action: str,
    resource_type: str,
    resource_id: Optional[Any] = None,
    details: Optional[Dict[str, Any]] = None,
    target_user_email: Optional[str] = None,
) -> Optional[AuditResult]:
    """Audit a mutation performed by ``actor``. Does nothing without an actor."""
    if actor is None or actor.admin_id is None:
        return None
    entry = AuditLogEntry(
        admin_id=actor.admin_id,
        action=action,
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id is not None else None,
        target_user_email=target_user_email,
        details=details,
        ip_address=actor.ip_address,
        user_agent=actor.user_agent,
    )
    return log_action_safely(session, entry)


def _clamp_limit(limit: Optional[int], default: int = 50) -> int:
    return max(1, min(limit or default, MAX_LIMIT))


def get_logs(
    session: Session,
    admin_id: Optional[str] = None,
    action: Optional[str] = None,
    limit: Optional[int] = 50,
    offset: Optional[int] = 0,
) -> Dict[str, Any]:
    """Newest audit entries first, with an optional admin/action filter."""
    statement = select(AdminAuditLog)
    count_statement = select(func.count()).select_from(AdminAuditLog)
    if admin_id:
        if not is_valid_uuid(admin_id):
            raise ValidationError("Invalid admin ID format", operation="get_logs")
        statement = statement.where(AdminAuditLog.admin_id == uuid.UUID(admin_id))
        count_statement = count_statement.where(AdminAuditLog.admin_id == uuid.UUID(admin_id))
    if action:
        statement = statement.where(AdminAuditLog.action == action)
        count_statement = count_statement.where(AdminAuditLog.action == action)

    limit = _clamp_limit(limit)
    offset = max(offset or 0, 0)
    statement = statement.order_by(AdminAuditLog.created_at.desc()).offset(offset).limit(limit)
    try:
        count = session.exec(count_statement).one()
        logs = session.exec(statement).all()
    except SQLAlchemyError as e:
        session.rollback()
        raise AuditError(f"Failed to fetch audit logs: {e}", operation="get_logs") from e
    return {"data": list(logs), "count": count, "limit": limit, "offset": offset}


def get_logs_by_target_user(session: Session, user_id: str, limit: int = 50) -> List[AdminAuditLog]:
    if not is_valid_uuid(user_id):
        raise ValidationError("Invalid user ID format", operation="get_logs_by_target_user")
    statement = (
        select(AdminAuditLog)
        .where(AdminAuditLog.resource_type == "user", AdminAuditLog.resource_id == str(uuid.UUID(user_id)))
        .order_by(AdminAuditLog.created_at.desc())
        .limit(_clamp_limit(limit))
    )
    try:
        return list(session.exec(statement).all())
    except SQLAlchemyError as e:
        session.rollback()
        raise AuditError(f"Failed to fetch user audit logs: {e}", operation="get_logs_by_target_user") from e


def get_recent_logs(session: Session, limit: int = 20) -> List[AdminAuditLog]:
    statement = select(AdminAuditLog).order_by(AdminAuditLog.created_at.desc()).limit(_clamp_limit(limit, 20))
    try:
        return list(session.exec(statement).all())
    except SQLAlchemyError as e:
        session.rollback()
        raise AuditError(f"Failed to fetch recent audit logs: {e}", operation="get_recent_logs") from e
