import logging
from typing import Any, Dict, Optional, Union

from fastapi.encoders import jsonable_encoder
from sqlmodel import Session, select

from accounthub.models.database.application import Application
from accounthub.models.schemas.application import (
    ApplicationCreate,
    ApplicationFilters,
    ApplicationPublic,
    ApplicationUpdate,
)
from accounthub.models.schemas.common import Page
from accounthub.services import audit
from accounthub.services.audit import AuditContext
from accounthub.services.base import apply_update, get_or_404, paginate, remove, save, search_clause
from accounthub.utils.identifiers import generate_app_key

logger = logging.getLogger(__name__)

RESOURCE = "application"


def get_applications(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[ApplicationFilters] = None,
) -> Page[ApplicationPublic]:
    statement = select(Application).order_by(Application.created_at.desc())
    if filters and filters.search:
        statement = statement.where(
            search_clause(filters.search, Application.name, Application.slug, Application.description)
        )
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_applications")
    return Page(
        data=[ApplicationPublic.model_validate(app) for app in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


def get_application(session: Session, application_id: str) -> ApplicationPublic:
    return ApplicationPublic.model_validate(
        get_or_404(session, Application, application_id, "get_application")
    )


def create_application(
    session: Session,
    app_create: ApplicationCreate,
    actor: Optional[AuditContext] = None,
) -> Application:
    """Create an application with a freshly generated app key."""
    db_obj = Application.model_validate(
        app_create,
        update={"app_key": generate_app_key(), "created_by": actor.admin_uuid if actor else None},
    )
    save(session, db_obj, "create_application")
    logger.info("Created application %s (%s)", db_obj.slug, db_obj.id)

    audit.record(session, actor, "CREATE_APPLICATION", RESOURCE, db_obj.id, {"slug": db_obj.slug})
    return db_obj


def update_application(
    session: Session,
    application_id: str,
    updates: Union[ApplicationUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> Application:
    db_obj = get_or_404(session, Application, application_id, "update_application")
    update_data = apply_update(db_obj, updates)
    save(session, db_obj, "update_application")

    audit.record(
        session, actor, "UPDATE_APPLICATION", RESOURCE, db_obj.id,
        {"updates": jsonable_encoder(update_data)},
    )
    return db_obj


def delete_application(session: Session, application_id: str, actor: Optional[AuditContext] = None) -> None:
    db_obj = get_or_404(session, Application, application_id, "delete_application")
    slug = db_obj.slug
    remove(session, db_obj, "delete_application")
    logger.info("Deleted application %s", slug)

    audit.record(session, actor, "DELETE_APPLICATION", RESOURCE, application_id, {"slug": slug})


def toggle_active(
    session: Session,
    application_id: str,
    is_active: bool,
    actor: Optional[AuditContext] = None,
) -> Application:
    return update_application(session, application_id, {"is_active": is_active}, actor)


def regenerate_app_key(session: Session, application_id: str, actor: Optional[AuditContext] = None) -> Application:
    """
    Replace the app key of an application.

    Clients still using the old key stop being recognised.
    """
    db_obj = get_or_404(session, Application, application_id, "regenerate_app_key")
    apply_update(db_obj, {"app_key": generate_app_key()})
    save(session, db_obj, "regenerate_app_key")

    audit.record(session, actor, "REGENERATE_APP_KEY", RESOURCE, db_obj.id)
    return db_obj
