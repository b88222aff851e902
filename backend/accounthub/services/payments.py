import logging
from typing import Any, Dict, Optional, Union

from fastapi.encoders import jsonable_encoder
from sqlmodel import Session, select

from accounthub.models.database.application import Application
from accounthub.models.database.membership import UserAppMembership
from accounthub.models.database.payment import PaymentHistory
from accounthub.models.database.user import User
from accounthub.models.schemas.common import Page
from accounthub.models.schemas.payment import PaymentCreate, PaymentFilters, PaymentRow, PaymentUpdate
from accounthub.services import audit
from accounthub.services.audit import AuditContext
from accounthub.services.base import apply_update, backend_call, get_or_404, paginate, parse_id, remove, save

logger = logging.getLogger(__name__)

RESOURCE = "payment"


def _row_statement():
    return (
        select(PaymentHistory, User.email, User.full_name, Application.name, Application.slug)
        .outerjoin(User, PaymentHistory.user_id == User.id)
        .outerjoin(UserAppMembership, PaymentHistory.membership_id == UserAppMembership.id)
        .outerjoin(Application, UserAppMembership.application_id == Application.id)
    )


def _to_row(row: Any) -> PaymentRow:
    payment, email, full_name, app_name, app_slug = row
    return PaymentRow.model_validate(
        payment,
        update={
            "user_email": email,
            "user_full_name": full_name,
            "application_name": app_name,
            "application_slug": app_slug,
        },
    )


def get_payments(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[PaymentFilters] = None,
) -> Page[PaymentRow]:
    statement = _row_statement().order_by(PaymentHistory.created_at.desc())
    if filters:
        if filters.user_id:
            statement = statement.where(PaymentHistory.user_id == filters.user_id)
        if filters.membership_id:
            statement = statement.where(PaymentHistory.membership_id == filters.membership_id)
        if filters.status:
            statement = statement.where(PaymentHistory.status == filters.status)
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_payments")
    return Page(data=[_to_row(row) for row in rows], total=total, page=page, page_size=page_size)


def get_payment(session: Session, payment_id: str) -> PaymentRow:
    get_or_404(session, PaymentHistory, payment_id, "get_payment")
    with backend_call(session, "get_payment"):
        row = session.exec(_row_statement().where(PaymentHistory.id == parse_id(payment_id))).one()
    return _to_row(row)


def create_payment(
    session: Session,
    payment_in: PaymentCreate,
    actor: Optional[AuditContext] = None,
) -> PaymentHistory:
    db_obj = PaymentHistory.model_validate(payment_in)
    save(session, db_obj, "create_payment")
    logger.info("Recorded payment %s of %s %s", db_obj.id, db_obj.amount, db_obj.currency)

    audit.record(
        session, actor, "CREATE_PAYMENT", RESOURCE, db_obj.id,
        {"amount": str(db_obj.amount), "currency": db_obj.currency},
    )
    return db_obj


def update_payment(
    session: Session,
    payment_id: str,
    updates: Union[PaymentUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> PaymentHistory:
    # payment_history has no updated_at column
    db_obj = get_or_404(session, PaymentHistory, payment_id, "update_payment")
    update_data = apply_update(db_obj, updates, stamp=False)
    save(session, db_obj, "update_payment")

    audit.record(
        session, actor, "UPDATE_PAYMENT", RESOURCE, db_obj.id,
        {"updates": jsonable_encoder(update_data)},
    )
    return db_obj


def delete_payment(session: Session, payment_id: str, actor: Optional[AuditContext] = None) -> None:
    db_obj = get_or_404(session, PaymentHistory, payment_id, "delete_payment")
    remove(session, db_obj, "delete_payment")

    audit.record(session, actor, "DELETE_PAYMENT", RESOURCE, payment_id)
