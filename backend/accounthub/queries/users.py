from typing import Optional

from sqlmodel import Session

from accounthub.core.i18n import DEFAULT_LANGUAGE
from accounthub.models.schemas.user import UserFilters, UserUpdate
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, filters_key, use_mutation, use_query
from accounthub.services import users as service
from accounthub.services.audit import AuditContext

ENTITY = "users"
LABEL = "user"
INVALIDATES = [(ENTITY,), ("memberships",), ("payments",), ("redemption_codes", "uses"), ("audit_logs",)]


def use_users(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[UserFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: service.get_users(session, page, page_size, filters),
    )


def use_user(cache: QueryCache, session: Session, user_id: str) -> QueryResult:
    return use_query(cache, (ENTITY, "detail", user_id), lambda: service.get_user(session, user_id))


def use_update_user(
    cache: QueryCache,
    session: Session,
    user_id: str,
    updates: UserUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_user(session, user_id, updates, actor),
        INVALIDATES, "updated", "update", LABEL, language,
    )


def use_toggle_ban(
    cache: QueryCache,
    session: Session,
    user_id: str,
    is_banned: bool,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.toggle_ban(session, user_id, is_banned, actor),
        INVALIDATES, "status_updated", "status_update", LABEL, language,
    )
