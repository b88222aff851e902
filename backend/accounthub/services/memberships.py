import logging
from typing import Any, Dict, Optional, Union

from fastapi.encoders import jsonable_encoder
from sqlmodel import Session, select

from accounthub.models.database.application import Application
from accounthub.models.database.membership import UserAppMembership
from accounthub.models.database.membership_plan import MembershipPlan
from accounthub.models.database.user import User
from accounthub.models.schemas.common import Page
from accounthub.models.schemas.membership import (
    MembershipCreate,
    MembershipFilters,
    MembershipRow,
    MembershipUpdate,
)
from accounthub.services import audit
from accounthub.services.audit import AuditContext
from accounthub.services.base import apply_update, backend_call, get_or_404, paginate, parse_id, remove, save

logger = logging.getLogger(__name__)

RESOURCE = "membership"


def _row_statement():
    return (
        select(
            UserAppMembership,
            User.email,
            User.full_name,
            Application.name,
            Application.slug,
            MembershipPlan.display_name,
            MembershipPlan.plan_id,
        )
        .outerjoin(User, UserAppMembership.user_id == User.id)
        .outerjoin(Application, UserAppMembership.application_id == Application.id)
        .outerjoin(MembershipPlan, UserAppMembership.membership_plan_id == MembershipPlan.id)
    )


def _to_row(row: Any) -> MembershipRow:
    membership, email, full_name, app_name, app_slug, plan_name, plan_code = row
    return MembershipRow.model_validate(
        membership,
        update={
            "user_email": email,
            "user_full_name": full_name,
            "application_name": app_name,
            "application_slug": app_slug,
            "plan_display_name": plan_name,
            "plan_code": plan_code,
        },
    )


def get_memberships(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[MembershipFilters] = None,
) -> Page[MembershipRow]:
    statement = _row_statement().order_by(UserAppMembership.created_at.desc())
    if filters:
        if filters.user_id:
            statement = statement.where(UserAppMembership.user_id == filters.user_id)
        if filters.application_id:
            statement = statement.where(UserAppMembership.application_id == filters.application_id)
        if filters.status:
            statement = statement.where(UserAppMembership.status == filters.status)
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_memberships")
    return Page(data=[_to_row(row) for row in rows], total=total, page=page, page_size=page_size)


def get_membership(session: Session, membership_id: str) -> MembershipRow:
    get_or_404(session, UserAppMembership, membership_id, "get_membership")
    with backend_call(session, "get_membership"):
        row = session.exec(_row_statement().where(UserAppMembership.id == parse_id(membership_id))).one()
    return _to_row(row)


def create_membership(
    session: Session,
    membership_in: MembershipCreate,
    actor: Optional[AuditContext] = None,
) -> UserAppMembership:
    # started_at falls back to the column default when omitted
    db_obj = UserAppMembership(**membership_in.model_dump(exclude_none=True))
    save(session, db_obj, "create_membership")
    logger.info("Created membership %s for user %s", db_obj.id, db_obj.user_id)

    audit.record(
        session, actor, "CREATE_MEMBERSHIP", RESOURCE, db_obj.id,
        {"user_id": str(db_obj.user_id), "application_id": str(db_obj.application_id)},
    )
    return db_obj


def update_membership(
    session: Session,
    membership_id: str,
    updates: Union[MembershipUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> UserAppMembership:
    db_obj = get_or_404(session, UserAppMembership, membership_id, "update_membership")
    update_data = apply_update(db_obj, updates)
    save(session, db_obj, "update_membership")

    audit.record(
        session, actor, "UPDATE_MEMBERSHIP", RESOURCE, db_obj.id,
        {"updates": jsonable_encoder(update_data)},
    )
    return db_obj


def update_status(
    session: Session,
    membership_id: str,
    status: str,
    actor: Optional[AuditContext] = None,
) -> UserAppMembership:
    return update_membership(session, membership_id, {"status": status}, actor)


def delete_membership(session: Session, membership_id: str, actor: Optional[AuditContext] = None) -> None:
    db_obj = get_or_404(session, UserAppMembership, membership_id, "delete_membership")
    remove(session, db_obj, "delete_membership")

    audit.record(session, actor, "DELETE_MEMBERSHIP", RESOURCE, membership_id)
