"""
Keyed configuration documents served to client applications, and the
templates the back-office uses to build them.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from sqlmodel import Session, select

from accounthub.core.exceptions import NotFoundError
from accounthub.models.database.app_config import AppConfig, AppConfigTemplate
from accounthub.models.schemas.app_config import (
    AppConfigCreate,
    AppConfigFilters,
    AppConfigPublic,
    AppConfigTemplateCreate,
    AppConfigTemplatePublic,
    AppConfigTemplateUpdate,
    AppConfigUpdate,
)
from accounthub.models.schemas.common import Page
from accounthub.services import audit
from accounthub.services.audit import AuditContext
from accounthub.services.base import apply_update, backend_call, get_or_404, paginate, remove, save, search_clause

logger = logging.getLogger(__name__)

RESOURCE = "app_config"
TEMPLATE_RESOURCE = "app_config_template"


def get_app_configs(
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[AppConfigFilters] = None,
) -> Page[AppConfigPublic]:
    statement = select(AppConfig).order_by(AppConfig.created_at.desc())
    if filters:
        if filters.config_type:
            statement = statement.where(AppConfig.config_type == filters.config_type)
        if filters.is_active is not None:
            statement = statement.where(AppConfig.is_active == filters.is_active)
        if filters.search:
            statement = statement.where(
                search_clause(filters.search, AppConfig.config_key, AppConfig.name, AppConfig.description)
            )
    rows, total, page, page_size = paginate(session, statement, page, page_size, "get_app_configs")
    return Page(
        data=[AppConfigPublic.model_validate(config) for config in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


def get_app_config(session: Session, config_id: str) -> AppConfigPublic:
    return AppConfigPublic.model_validate(get_or_404(session, AppConfig, config_id, "get_app_config"))


def get_app_config_by_key(session: Session, config_key: str) -> AppConfigPublic:
    """Active configuration stored under ``config_key``."""
    statement = select(AppConfig).where(AppConfig.config_key == config_key, AppConfig.is_active == True)  # noqa: E712
    with backend_call(session, "get_app_config_by_key"):
        config = session.exec(statement).first()
    if config is None:
        raise NotFoundError(f"No active config with key {config_key}", operation="get_app_config_by_key")
    return AppConfigPublic.model_validate(config)


def create_app_config(
    session: Session,
    config_in: AppConfigCreate,
    actor: Optional[AuditContext] = None,
) -> AppConfig:
    db_obj = AppConfig.model_validate(config_in, update={"created_by": actor.admin_uuid if actor else None})
    save(session, db_obj, "create_app_config")
    logger.info("Created app config %s", db_obj.config_key)

    audit.record(session, actor, "CREATE_APP_CONFIG", RESOURCE, db_obj.id, {"config_key": db_obj.config_key})
    return db_obj


def update_app_config(
    session: Session,
    config_id: str,
    updates: Union[AppConfigUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> AppConfig:
    db_obj = get_or_404(session, AppConfig, config_id, "update_app_config")
    update_data = apply_update(db_obj, updates)
    save(session, db_obj, "update_app_config")

    audit.record(session, actor, "UPDATE_APP_CONFIG", RESOURCE, db_obj.id, {"fields": sorted(update_data)})
    return db_obj


def toggle_app_config(
    session: Session,
    config_id: str,
    is_active: bool,
    actor: Optional[AuditContext] = None,
) -> AppConfig:
    return update_app_config(session, config_id, {"is_active": is_active}, actor)


def delete_app_config(session: Session, config_id: str, actor: Optional[AuditContext] = None) -> None:
    db_obj = get_or_404(session, AppConfig, config_id, "delete_app_config")
    config_key = db_obj.config_key
    remove(session, db_obj, "delete_app_config")

    audit.record(session, actor, "DELETE_APP_CONFIG", RESOURCE, config_id, {"config_key": config_key})


def get_templates(session: Session) -> List[AppConfigTemplatePublic]:
    """Active templates in display order."""
    statement = (
        select(AppConfigTemplate)
        .where(AppConfigTemplate.is_active == True)  # noqa: E712
        .order_by(AppConfigTemplate.sort_order, AppConfigTemplate.template_name)
    )
    with backend_call(session, "get_templates"):
        templates = session.exec(statement).all()
    return [AppConfigTemplatePublic.model_validate(template) for template in templates]


def get_template(session: Session, template_id: str) -> AppConfigTemplatePublic:
    return AppConfigTemplatePublic.model_validate(
        get_or_404(session, AppConfigTemplate, template_id, "get_template")
    )


def get_template_by_name(session: Session, template_name: str) -> AppConfigTemplatePublic:
    statement = select(AppConfigTemplate).where(AppConfigTemplate.template_name == template_name)
    with backend_call(session, "get_template_by_name"):
        template = session.exec(statement).first()
    if template is None:
        raise NotFoundError(f"Template {template_name} not found", operation="get_template_by_name")
    return AppConfigTemplatePublic.model_validate(template)


def create_template(
    session: Session,
    template_in: AppConfigTemplateCreate,
    actor: Optional[AuditContext] = None,
) -> AppConfigTemplate:
    data = template_in.model_dump(mode="json")
    db_obj = AppConfigTemplate(**data, created_by=actor.admin_uuid if actor else None)
    save(session, db_obj, "create_template")

    audit.record(
        session, actor, "CREATE_APP_CONFIG_TEMPLATE", TEMPLATE_RESOURCE, db_obj.id,
        {"template_name": db_obj.template_name},
    )
    return db_obj


def update_template(
    session: Session,
    template_id: str,
    updates: Union[AppConfigTemplateUpdate, Dict[str, Any]],
    actor: Optional[AuditContext] = None,
) -> AppConfigTemplate:
    db_obj = get_or_404(session, AppConfigTemplate, template_id, "update_template")
    if not isinstance(updates, dict):
        # template_fields is stored as plain JSON
        updates = updates.model_dump(mode="json", exclude_unset=True)
    update_data = apply_update(db_obj, updates)
    save(session, db_obj, "update_template")

    audit.record(
        session, actor, "UPDATE_APP_CONFIG_TEMPLATE", TEMPLATE_RESOURCE, db_obj.id,
        {"fields": sorted(update_data)},
    )
    return db_obj


def delete_template(session: Session, template_id: str, actor: Optional[AuditContext] = None) -> None:
    db_obj = get_or_404(session, AppConfigTemplate, template_id, "delete_template")
    remove(session, db_obj, "delete_template")

    audit.record(session, actor, "DELETE_APP_CONFIG_TEMPLATE", TEMPLATE_RESOURCE, template_id)
