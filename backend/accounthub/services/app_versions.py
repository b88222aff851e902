import logging
from typing import Any, Dict, Optional, Union

from sqlmodel import Session, select

from accounthub.core.exceptions import NotFoundError
from accounthub.models.database.app_version import AppVersion
from accounthub.models.database.application import Application
from accounthub.models.schemas.app_version import (
    AppVersionCreate,
    AppVersionFilters,
    AppVersionPublic,
    AppVersionRow,
    AppVersionUpdate,
)
from accounthub.models.schemas.common import Page
from accounthub.services.audit import AuditContext
from accounthub.services.base import (
    apply_update,
    backend_call,
    get_or_404,
    paginate,
    parse_id,
    remove,
    save,
    search_clause,
    utcnow,
)

logger = logging.getLogger(__name__)

ALL_PLATFORMS = "all"


def _row_statement():
    return select(AppVersion, Application.name, Application.slug).outerjoin(
        Application, AppVersion.application_id == Application.id
    )


def _to_row(row: Any) -> AppVersionRow:
    version, app_name, app_slug = row
    return AppVersionRow.model_validate(
        version, update={"application_name": app_name, "application_slug": app_slug}
    )


def get_app_versions(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[AppVersionFilters] = None,
) -> Page[AppVersionRow]:
    statement = _row_statement().order_by(AppVersion.created_at.desc())
    if filters:
        if filters.application_id:
            statement = statement.where(AppVersion.application_id == filters.application_id)
        if filters.platform:
            statement = statement.where(AppVersion.platform == filters.platform)
        if filters.is_published is not None:
            statement = statement.where(AppVersion.is_published == filters.is_published)
        if filters.search:
            statement = statement.where(
                search_clause(filters.search, AppVersion.version_number, AppVersion.release_notes)
            )
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_app_versions")
    return Page(data=[_to_row(row) for row in rows], total=total, page=page, page_size=page_size)


def get_app_version(session: Session, version_id: str) -> AppVersionRow:
    get_or_404(session, AppVersion, version_id, "get_app_version")
    with backend_call(session, "get_app_version"):
        row = session.exec(_row_statement().where(AppVersion.id == parse_id(version_id))).one()
    return _to_row(row)


def _latest_for(session: Session, application_id: str, platform: str) -> Optional[AppVersion]:
    statement = (
        select(AppVersion)
        .where(
            AppVersion.application_id == parse_id(application_id),
            AppVersion.platform == platform,
            AppVersion.is_published == True,  # noqa: E712
        )
        .order_by(AppVersion.version_code.desc())
        .limit(1)
    )
    with backend_call(session, "get_latest_version"):
        return session.exec(statement).first()


def get_latest_version(session: Session, application_id: str, platform: str) -> AppVersionPublic:
    """
    Highest published version for ``platform``, falling back to builds
    published for every platform.
    """
    version = _latest_for(session, application_id, platform)
    if version is None and platform != ALL_PLATFORMS:
        version = _latest_for(session, application_id, ALL_PLATFORMS)
    if version is None:
        raise NotFoundError(
            f"No published version for application {application_id} on {platform}",
            operation="get_latest_version",
        )
    return AppVersionPublic.model_validate(version)


def create_app_version(
    session: Session,
    version_in: AppVersionCreate,
    actor: Optional[AuditContext] = None,
) -> AppVersion:
    update: Dict[str, Any] = {"created_by": actor.admin_uuid if actor else None}
    if version_in.is_published:
        update["published_at"] = utcnow()
    db_obj = AppVersion.model_validate(version_in, update=update)
    save(session, db_obj, "create_app_version")
    logger.info("Created version %s for application %s", db_obj.version_number, db_obj.application_id)
    return db_obj


def update_app_version(
    session: Session,
    version_id: str,
    updates: Union[AppVersionUpdate, Dict[str, Any]],
) -> AppVersion:
    db_obj = get_or_404(session, AppVersion, version_id, "update_app_version")
    apply_update(db_obj, updates)
    return save(session, db_obj, "update_app_version")


def delete_app_version(session: Session, version_id: str) -> None:
    db_obj = get_or_404(session, AppVersion, version_id, "delete_app_version")
    remove(session, db_obj, "delete_app_version")


def publish_version(session: Session, version_id: str) -> AppVersion:
    return update_app_version(session, version_id, {"is_published": True, "published_at": utcnow()})


def unpublish_version(session: Session, version_id: str) -> AppVersion:
    return update_app_version(session, version_id, {"is_published": False, "published_at": None})


def toggle_published(session: Session, version_id: str, is_published: bool) -> AppVersion:
    if is_published:
        return publish_version(session, version_id)
    return unpublish_version(session, version_id)
