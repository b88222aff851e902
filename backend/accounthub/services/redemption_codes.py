"""
Redemption code management: issuance, listing, stats and export.

``status`` is stored exactly as supplied. Nothing here derives ``expired``
from ``valid_until`` or ``exhausted`` from ``current_uses``.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from fastapi.encoders import jsonable_encoder
from sqlmodel import Session, func, select

from accounthub.models.constants import UNLIMITED_USES
from accounthub.models.database.application import Application
from accounthub.models.database.membership import UserAppMembership
from accounthub.models.database.membership_plan import MembershipPlan
from accounthub.models.database.redemption_code import RedemptionCode, RedemptionCodeUse
from accounthub.models.database.user import User
from accounthub.models.schemas.common import Page
from accounthub.models.schemas.redemption_code import (
    RedemptionCodeCreate,
    RedemptionCodeExportFilters,
    RedemptionCodeExportRow,
    RedemptionCodeFilters,
    RedemptionCodeRow,
    RedemptionCodeStats,
    RedemptionCodeTemplate,
    RedemptionCodeUpdate,
    RedemptionCodeUsePublic,
)
from accounthub.services import audit
from accounthub.services.audit import AuditContext
from accounthub.services.base import (
    apply_update,
    backend_call,
    get_or_404,
    paginate,
    parse_id,
    save,
    remove,
    search_clause,
)
from accounthub.utils.identifiers import generate_redemption_code

logger = logging.getLogger(__name__)

RESOURCE = "redemption_code"
NEVER_EXPIRES = "永久有效"
# stored timestamps are UTC
EXPORT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
COUNTED_STATUSES = ("active", "expired", "exhausted")


def format_usage(current_uses: int, max_uses: int) -> str:
    limit = "∞" if max_uses == UNLIMITED_USES else str(max_uses)
    return f"{current_uses} / {limit}"


def _row_statement():
    return (
        select(
            RedemptionCode,
            Application.name,
            Application.slug,
            MembershipPlan.plan_id,
            MembershipPlan.display_name,
            MembershipPlan.price,
            MembershipPlan.currency,
            MembershipPlan.duration_days,
        )
        .outerjoin(Application, RedemptionCode.application_id == Application.id)
        .outerjoin(MembershipPlan, RedemptionCode.membership_plan_id == MembershipPlan.id)
    )


def _to_row(row: Any) -> RedemptionCodeRow:
    code, app_name, app_slug, plan_code, plan_name, price, currency, duration = row
    return RedemptionCodeRow.model_validate(
        code,
        update={
            "application_name": app_name,
            "application_slug": app_slug,
            "plan_code": plan_code,
            "plan_display_name": plan_name,
            "plan_price": price,
            "plan_currency": currency,
            "plan_duration_days": duration,
            "usage_display": format_usage(code.current_uses, code.max_uses),
        },
    )


def _template_data(template: Union[RedemptionCodeTemplate, RedemptionCodeCreate]) -> Dict[str, Any]:
    # valid_from falls back to the column default (now) when omitted
    return template.model_dump(exclude={"code", "auto_generate"}, exclude_none=True)


def get_redemption_codes(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[RedemptionCodeFilters] = None,
) -> Page[RedemptionCodeRow]:
    """One page of codes, newest first."""
    statement = _row_statement().order_by(RedemptionCode.created_at.desc(), RedemptionCode.code)
    if filters:
        if filters.application_id:
            statement = statement.where(RedemptionCode.application_id == filters.application_id)
        if filters.status:
            statement = statement.where(RedemptionCode.status == filters.status)
        if filters.code_type:
            statement = statement.where(RedemptionCode.code_type == filters.code_type)
        if filters.search:
            statement = statement.where(
                search_clause(filters.search, RedemptionCode.code, RedemptionCode.description)
            )

    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_redemption_codes")
    return Page(data=[_to_row(row) for row in rows], total=total, page=page, page_size=page_size)


def get_redemption_code(session: Session, code_id: str) -> RedemptionCodeRow:
    get_or_404(session, RedemptionCode, code_id, "get_redemption_code")
    statement = _row_statement().where(RedemptionCode.id == parse_id(code_id))
    with backend_call(session, "get_redemption_code"):
        row = session.exec(statement).one()
    return _to_row(row)


def create_redemption_code(
    session: Session,
    code_in: RedemptionCodeCreate,
    actor: Optional[AuditContext] = None,
) -> RedemptionCode:
    """Insert one code, generating it unless the caller supplied its own."""
    code = generate_redemption_code() if code_in.auto_generate else code_in.code
    db_obj = RedemptionCode(
        **_template_data(code_in),
        code=code,
        created_by=actor.admin_uuid if actor else None,
    )
    save(session, db_obj, "create_redemption_code")
    logger.info("Created redemption code %s", db_obj.id)

    audit.record(session, actor, "CREATE_REDEMPTION_CODE", RESOURCE, db_obj.id, {"code": db_obj.code})
    return db_obj


def batch_create_redemption_codes(
    session: Session,
    count: int,
    template: RedemptionCodeTemplate,
    actor: Optional[AuditContext] = None,
) -> List[RedemptionCode]:
    """
    Generate ``count`` codes sharing ``template`` and insert them in one commit.

    Either every row is inserted or none is: a duplicate code anywhere in the
    batch fails the whole batch. Generated codes are not checked for
    uniqueness up front and failed batches are not retried.
    """
    data = _template_data(template)
    created_by = actor.admin_uuid if actor else None
    codes = [
        RedemptionCode(**data, code=generate_redemption_code(), created_by=created_by)
        for _ in range(count)
    ]

    with backend_call(session, "batch_create_redemption_codes"):
        session.add_all(codes)
        session.commit()
        for code in codes:
            session.refresh(code)
    logger.info("Created batch of %d redemption codes", len(codes))

    audit.record(
        session,
        actor,
        "BATCH_CREATE_REDEMPTION_CODES",
        RESOURCE,
        details={"count": len(codes), "code_ids": [str(code.id) for code in codes]},
    )
    return codes


def update_redemption_code(
    session: Session,
    code_id: str,
    updates: Union[RedemptionCodeUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> RedemptionCode:
    db_obj = get_or_404(session, RedemptionCode, code_id, "update_redemption_code")
    update_data = apply_update(db_obj, updates)
    save(session, db_obj, "update_redemption_code")

    audit.record(
        session, actor, "UPDATE_REDEMPTION_CODE", RESOURCE, db_obj.id,
        {"updates": jsonable_encoder(update_data)},
    )
    return db_obj


def delete_redemption_code(session: Session, code_id: str, actor: Optional[AuditContext] = None) -> None:
    db_obj = get_or_404(session, RedemptionCode, code_id, "delete_redemption_code")
    code = db_obj.code
    remove(session, db_obj, "delete_redemption_code")
    logger.info("Deleted redemption code %s", code_id)

    audit.record(session, actor, "DELETE_REDEMPTION_CODE", RESOURCE, code_id, {"code": code})


def get_redemption_code_uses(
    session: Session,
    code_id: str,
    page: int = 1,
    page_size: int = 10,
) -> Page[RedemptionCodeUsePublic]:
    """Usage log of one code, most recent redemption first."""
    statement = (
        select(
            RedemptionCodeUse,
            User.email,
            User.full_name,
            UserAppMembership.status,
            UserAppMembership.expires_at,
        )
        .outerjoin(User, RedemptionCodeUse.user_id == User.id)
        .outerjoin(UserAppMembership, RedemptionCodeUse.membership_id == UserAppMembership.id)
        .where(RedemptionCodeUse.redemption_code_id == parse_id(code_id))
        .order_by(RedemptionCodeUse.redeemed_at.desc())
    )
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_redemption_code_uses")
    data = [
        RedemptionCodeUsePublic.model_validate(
            use,
            update={
                "user_email": email,
                "user_full_name": full_name,
                "membership_status": membership_status,
                "membership_expires_at": expires_at,
            },
        )
        for use, email, full_name, membership_status, expires_at in rows
    ]
    return Page(data=data, total=total, page=page, page_size=page_size)


def get_redemption_code_stats(session: Session, application_id: Optional[str] = None) -> RedemptionCodeStats:
    """
    Count codes in total and per status, optionally for one application.

    Each figure comes from its own count statement, so the four numbers are
    not a consistent snapshot. Statuses outside the counted three (such as
    ``disabled``) only appear in ``total``.
    """
    app_uuid = parse_id(application_id) if application_id else None

    def count(status: Optional[str] = None) -> int:
        statement = select(func.count()).select_from(RedemptionCode)
        if status:
            statement = statement.where(RedemptionCode.status == status)
        if app_uuid:
            statement = statement.where(RedemptionCode.application_id == app_uuid)
        return session.exec(statement).one()

    with backend_call(session, "get_redemption_code_stats"):
        counts = {"total": count()}
        for status in COUNTED_STATUSES:
            counts[status] = count(status)
    return RedemptionCodeStats(**counts)


def export_redemption_codes(
    session: Session,
    filters: Optional[RedemptionCodeExportFilters] = None,
) -> List[RedemptionCodeExportRow]:
    """Every code matching ``filters`` with its application and plan names. Not paginated."""
    statement = (
        select(RedemptionCode, Application.name, MembershipPlan.display_name)
        .outerjoin(Application, RedemptionCode.application_id == Application.id)
        .outerjoin(MembershipPlan, RedemptionCode.membership_plan_id == MembershipPlan.id)
        .order_by(RedemptionCode.created_at.desc(), RedemptionCode.code)
    )
    if filters:
        if filters.application_id:
            statement = statement.where(RedemptionCode.application_id == filters.application_id)
        if filters.status:
            statement = statement.where(RedemptionCode.status == filters.status)

    with backend_call(session, "export_redemption_codes"):
        rows = session.exec(statement).all()
    return [
        RedemptionCodeExportRow(
            id=code.id,
            code=code.code,
            status=code.status,
            application_name=app_name or "-",
            plan_name=plan_name or "-",
            valid_until=code.valid_until,
        )
        for code, app_name, plan_name in rows
    ]


def _export_time(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(EXPORT_TIME_FORMAT)


def format_export_lines(rows: Iterable[RedemptionCodeExportRow], never_expires: str = NEVER_EXPIRES) -> str:
    """Tab-separated ``code, application, plan, expiry`` lines for the clipboard."""
    lines = []
    for row in rows:
        expiry = _export_time(row.valid_until) if row.valid_until else never_expires
        lines.append(f"{row.code}\t{row.application_name}\t{row.plan_name}\t{expiry}")
    return "\n".join(lines)
