import logging
from typing import Any, Dict, Optional, Union

from fastapi.encoders import jsonable_encoder
from sqlmodel import Session, select

from accounthub.models.database.application import Application
from accounthub.models.database.user import User
from accounthub.models.schemas.common import Page
from accounthub.models.schemas.user import UserFilters, UserRow, UserUpdate
from accounthub.services import audit
from accounthub.services.audit import AuditContext
from accounthub.services.base import (
    apply_update,
    backend_call,
    get_or_404,
    paginate,
    parse_id,
    save,
    search_clause,
)

logger = logging.getLogger(__name__)

RESOURCE = "user"


def _row_statement():
    return select(User, Application.name, Application.slug).outerjoin(
        Application, User.registered_from_app_id == Application.id
    )


def _to_row(row: Any) -> UserRow:
    user, app_name, app_slug = row
    return UserRow.model_validate(user, update={"application_name": app_name, "application_slug": app_slug})


def get_users(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[UserFilters] = None,
) -> Page[UserRow]:
    """Users newest first, with the application they registered from."""
    statement = _row_statement().order_by(User.created_at.desc())
    if filters:
        if filters.search:
            statement = statement.where(search_clause(filters.search, User.email, User.full_name))
        if filters.application_id:
            statement = statement.where(User.registered_from_app_id == filters.application_id)
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_users")
    return Page(data=[_to_row(row) for row in rows], total=total, page=page, page_size=page_size)


def get_user(session: Session, user_id: str) -> UserRow:
    get_or_404(session, User, user_id, "get_user")
    with backend_call(session, "get_user"):
        row = session.exec(_row_statement().where(User.id == parse_id(user_id))).one()
    return _to_row(row)


def update_user(
    session: Session,
    user_id: str,
    updates: Union[UserUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> User:
    db_obj = get_or_404(session, User, user_id, "update_user")
    update_data = apply_update(db_obj, updates)
    save(session, db_obj, "update_user")

    audit.record(
        session, actor, "UPDATE_USER", RESOURCE, db_obj.id,
        {"updates": jsonable_encoder(update_data)},
        target_user_email=db_obj.email,
    )
    return db_obj


def toggle_ban(session: Session, user_id: str, is_banned: bool, actor: Optional[AuditContext] = None) -> User:
    """Ban or unban a user. Banned users keep their memberships."""
    db_obj = get_or_404(session, User, user_id, "toggle_ban")
    apply_update(db_obj, {"is_banned": is_banned})
    save(session, db_obj, "toggle_ban")
    logger.info("%s user %s", "Banned" if is_banned else "Unbanned", db_obj.id)

    audit.record(
        session, actor, "BAN_USER" if is_banned else "UNBAN_USER", RESOURCE, db_obj.id,
        target_user_email=db_obj.email,
    )
    return db_obj
