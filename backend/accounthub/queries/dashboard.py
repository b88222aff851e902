"""Hooks for read-only views: dashboard figures and the audit trail."""
from typing import Optional

from sqlmodel import Session

from accounthub.models.schemas.audit_log import AuditLogPublic, AuditLogsPublic
from accounthub.queries.base import QueryCache, QueryResult, use_query
from accounthub.services import audit, dashboard


def use_dashboard_stats(cache: QueryCache, session: Session) -> QueryResult:
    return use_query(cache, ("dashboard", "stats"), lambda: dashboard.get_dashboard_stats(session))


def use_revenue_by_application(cache: QueryCache, session: Session) -> QueryResult:
    return use_query(cache, ("dashboard", "revenue"), lambda: dashboard.get_revenue_by_application(session))


def use_audit_logs(
    cache: QueryCache,
    session: Session,
    admin_id: Optional[str] = None,
    action: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> QueryResult:
    def fetch() -> AuditLogsPublic:
        result = audit.get_logs(session, admin_id, action, limit, offset)
        return AuditLogsPublic(
            data=[AuditLogPublic.model_validate(log) for log in result["data"]],
            count=result["count"],
            limit=result["limit"],
            offset=result["offset"],
        )

    return use_query(cache, ("audit_logs", "list", admin_id, action, limit, offset), fetch)


def use_user_audit_logs(cache: QueryCache, session: Session, user_id: str, limit: int = 50) -> QueryResult:
    return use_query(
        cache,
        ("audit_logs", "user", user_id, limit),
        lambda: [AuditLogPublic.model_validate(log) for log in audit.get_logs_by_target_user(session, user_id, limit)],
    )
