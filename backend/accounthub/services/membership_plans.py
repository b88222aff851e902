import logging
from typing import Any, Dict, Optional, Union

from fastapi.encoders import jsonable_encoder
from sqlmodel import Session, select

from accounthub.models.database.application import Application
from accounthub.models.database.membership_plan import MembershipPlan
from accounthub.models.schemas.common import Page
from accounthub.models.schemas.membership_plan import (
    MembershipPlanCreate,
    MembershipPlanFilters,
    MembershipPlanRow,
    MembershipPlanUpdate,
)
from accounthub.services import audit
from accounthub.services.audit import AuditContext
from accounthub.services.base import apply_update, backend_call, get_or_404, paginate, parse_id, remove, save

logger = logging.getLogger(__name__)

RESOURCE = "membership_plan"


def _row_statement():
    return select(MembershipPlan, Application.name, Application.slug).outerjoin(
        Application, MembershipPlan.application_id == Application.id
    )


def _to_row(row: Any) -> MembershipPlanRow:
    plan, app_name, app_slug = row
    return MembershipPlanRow.model_validate(plan, update={"application_name": app_name, "application_slug": app_slug})


def get_membership_plans(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[MembershipPlanFilters] = None,
) -> Page[MembershipPlanRow]:
    """Plans in display order."""
    statement = _row_statement().order_by(MembershipPlan.sort_order, MembershipPlan.created_at)
    if filters:
        if filters.application_id:
            statement = statement.where(MembershipPlan.application_id == filters.application_id)
        if filters.is_active is not None:
            statement = statement.where(MembershipPlan.is_active == filters.is_active)
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_membership_plans")
    return Page(data=[_to_row(row) for row in rows], total=total, page=page, page_size=page_size)


def get_membership_plan(session: Session, plan_id: str) -> MembershipPlanRow:
    get_or_404(session, MembershipPlan, plan_id, "get_membership_plan")
    with backend_call(session, "get_membership_plan"):
        row = session.exec(_row_statement().where(MembershipPlan.id == parse_id(plan_id))).one()
    return _to_row(row)


def create_membership_plan(
    session: Session,
    plan_in: MembershipPlanCreate,
    actor: Optional[AuditContext] = None,
) -> MembershipPlan:
    db_obj = MembershipPlan.model_validate(plan_in)
    save(session, db_obj, "create_membership_plan")
    logger.info("Created membership plan %s", db_obj.plan_id)

    audit.record(session, actor, "CREATE_MEMBERSHIP_PLAN", RESOURCE, db_obj.id, {"plan_id": db_obj.plan_id})
    return db_obj


def update_membership_plan(
    session: Session,
    plan_id: str,
    updates: Union[MembershipPlanUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> MembershipPlan:
    db_obj = get_or_404(session, MembershipPlan, plan_id, "update_membership_plan")
    update_data = apply_update(db_obj, updates)
    save(session, db_obj, "update_membership_plan")

    audit.record(
        session, actor, "UPDATE_MEMBERSHIP_PLAN", RESOURCE, db_obj.id,
        {"updates": jsonable_encoder(update_data)},
    )
    return db_obj


def update_plan_order(
    session: Session,
    plan_id: str,
    sort_order: int,
    actor: Optional[AuditContext] = None,
) -> MembershipPlan:
    return update_membership_plan(session, plan_id, {"sort_order": sort_order}, actor)


def delete_membership_plan(session: Session, plan_id: str, actor: Optional[AuditContext] = None) -> None:
    db_obj = get_or_404(session, MembershipPlan, plan_id, "delete_membership_plan")
    code = db_obj.plan_id
    remove(session, db_obj, "delete_membership_plan")

    audit.record(session, actor, "DELETE_MEMBERSHIP_PLAN", RESOURCE, plan_id, {"plan_id": code})
