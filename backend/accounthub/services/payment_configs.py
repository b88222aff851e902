import logging
from typing import Any, Dict, Optional, Union

from sqlmodel import Session, select

from accounthub.models.database.application import Application
from accounthub.models.database.payment_config import PaymentConfig
from accounthub.models.schemas.common import Page
from accounthub.models.schemas.payment_config import (
    PaymentConfigCreate,
    PaymentConfigFilters,
    PaymentConfigRow,
    PaymentConfigUpdate,
)
from accounthub.services import audit
from accounthub.services.audit import AuditContext
from accounthub.services.base import apply_update, backend_call, get_or_404, paginate, parse_id, remove, save

logger = logging.getLogger(__name__)

RESOURCE = "payment_config"


def _row_statement():
    return select(PaymentConfig, Application.name, Application.slug).outerjoin(
        Application, PaymentConfig.application_id == Application.id
    )


def _to_row(row: Any) -> PaymentConfigRow:
    config, app_name, app_slug = row
    return PaymentConfigRow.model_validate(config, update={"application_name": app_name, "application_slug": app_slug})


def get_payment_configs(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[PaymentConfigFilters] = None,
) -> Page[PaymentConfigRow]:
    statement = _row_statement().order_by(PaymentConfig.created_at.desc())
    if filters:
        if filters.application_id:
            statement = statement.where(PaymentConfig.application_id == filters.application_id)
        if filters.payment_method:
            statement = statement.where(PaymentConfig.payment_method == filters.payment_method)
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_payment_configs")
    return Page(data=[_to_row(row) for row in rows], total=total, page=page, page_size=page_size)


def get_payment_config(session: Session, config_id: str) -> PaymentConfigRow:
    get_or_404(session, PaymentConfig, config_id, "get_payment_config")
    with backend_call(session, "get_payment_config"):
        row = session.exec(_row_statement().where(PaymentConfig.id == parse_id(config_id))).one()
    return _to_row(row)


def create_payment_config(
    session: Session,
    config_in: PaymentConfigCreate,
    actor: Optional[AuditContext] = None,
) -> PaymentConfig:
    db_obj = PaymentConfig.model_validate(config_in)
    save(session, db_obj, "create_payment_config")

    # credentials in ``config`` stay out of the audit trail
    audit.record(
        session, actor, "CREATE_PAYMENT_CONFIG", RESOURCE, db_obj.id,
        {"payment_method": db_obj.payment_method},
    )
    return db_obj


def update_payment_config(
    session: Session,
    config_id: str,
    updates: Union[PaymentConfigUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> PaymentConfig:
    db_obj = get_or_404(session, PaymentConfig, config_id, "update_payment_config")
    update_data = apply_update(db_obj, updates)
    save(session, db_obj, "update_payment_config")

    audit.record(
        session, actor, "UPDATE_PAYMENT_CONFIG", RESOURCE, db_obj.id,
        {"fields": sorted(update_data)},
    )
    return db_obj


def delete_payment_config(session: Session, config_id: str, actor: Optional[AuditContext] = None) -> None:
    db_obj = get_or_404(session, PaymentConfig, config_id, "delete_payment_config")
    remove(session, db_obj, "delete_payment_config")

    audit.record(session, actor, "DELETE_PAYMENT_CONFIG", RESOURCE, config_id)
