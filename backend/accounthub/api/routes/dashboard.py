from typing import Any, List, Optional

from fastapi import APIRouter

from accounthub.api.deps import CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.schemas.audit_log import AuditLogsPublic
from accounthub.models.schemas.dashboard import ApplicationRevenue, DashboardStats
from accounthub.queries import dashboard as hooks

router = APIRouter()
audit_router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def read_dashboard_stats(session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin) -> Any:
    return unwrap(hooks.use_dashboard_stats(cache, session), language)


@router.get("/revenue", response_model=List[ApplicationRevenue])
def read_revenue_by_application(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin
) -> Any:
    return unwrap(hooks.use_revenue_by_application(cache, session), language)


@audit_router.get("/", response_model=AuditLogsPublic)
def read_audit_logs(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    admin_id: Optional[str] = None,
    action: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Any:
    return unwrap(hooks.use_audit_logs(cache, session, admin_id, action, limit, offset), language)
