import uuid
from typing import Any, List, Optional

from fastapi import APIRouter

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.schemas.audit_log import AuditLogPublic
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.models.schemas.user import UserBan, UserFilters, UserPublic, UserRow, UserUpdate
from accounthub.queries import dashboard as read_hooks
from accounthub.queries import users as hooks

router = APIRouter()


@router.get("/", response_model=Page[UserRow])
def read_users(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    search: Optional[str] = None,
    application_id: Optional[uuid.UUID] = None,
) -> Any:
    filters = UserFilters(search=search, application_id=application_id)
    return unwrap(hooks.use_users(cache, session, page, page_size, filters), language)


@router.get("/{user_id}", response_model=UserRow)
def read_user(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, user_id: str
) -> Any:
    return unwrap(hooks.use_user(cache, session, user_id), language)


@router.get("/{user_id}/audit-logs", response_model=List[AuditLogPublic])
def read_user_audit_logs(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    user_id: str,
    limit: int = 50,
) -> Any:
    return unwrap(read_hooks.use_user_audit_logs(cache, session, user_id, limit), language)


@router.patch("/{user_id}", response_model=MutationResponse[UserPublic])
def update_user(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    user_id: str,
    updates: UserUpdate,
) -> Any:
    result = hooks.use_update_user(cache, session, user_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{user_id}/ban", response_model=MutationResponse[UserPublic])
def toggle_ban(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    user_id: str,
    body: UserBan,
) -> Any:
    result = hooks.use_toggle_ban(cache, session, user_id, body.is_banned, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))
