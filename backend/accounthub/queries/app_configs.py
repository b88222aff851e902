"""Hooks for app configs and the templates used to fill them in."""
from typing import Optional

from sqlmodel import Session

from accounthub.core.i18n import DEFAULT_LANGUAGE
from accounthub.models.schemas.app_config import (
    AppConfigCreate,
    AppConfigFilters,
    AppConfigTemplateCreate,
    AppConfigTemplateUpdate,
    AppConfigUpdate,
)
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, filters_key, use_mutation, use_query
from accounthub.services import app_configs as service
from accounthub.services.audit import AuditContext

ENTITY = "app_configs"
TEMPLATE_ENTITY = "app_config_templates"


def use_app_configs(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[AppConfigFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: service.get_app_configs(session, page, page_size, filters),
    )


def use_app_config(cache: QueryCache, session: Session, config_id: str) -> QueryResult:
    return use_query(cache, (ENTITY, "detail", config_id), lambda: service.get_app_config(session, config_id))


def use_app_config_by_key(cache: QueryCache, session: Session, config_key: str) -> QueryResult:
    return use_query(cache, (ENTITY, "key", config_key), lambda: service.get_app_config_by_key(session, config_key))


def use_create_app_config(
    cache: QueryCache,
    session: Session,
    config_in: AppConfigCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.create_app_config(session, config_in, actor),
        [(ENTITY,)], "created", "create", "app_config", language,
    )


def use_update_app_config(
    cache: QueryCache,
    session: Session,
    config_id: str,
    updates: AppConfigUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_app_config(session, config_id, updates, actor),
        [(ENTITY,)], "updated", "update", "app_config", language,
    )


def use_toggle_app_config(
    cache: QueryCache,
    session: Session,
    config_id: str,
    is_active: bool,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.toggle_app_config(session, config_id, is_active, actor),
        [(ENTITY,)], "status_updated", "status_update", "app_config", language,
    )


def use_delete_app_config(
    cache: QueryCache,
    session: Session,
    config_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.delete_app_config(session, config_id, actor),
        [(ENTITY,)], "deleted", "delete", "app_config", language,
    )


def use_templates(cache: QueryCache, session: Session) -> QueryResult:
    return use_query(cache, (TEMPLATE_ENTITY, "list"), lambda: service.get_templates(session))


def use_template(cache: QueryCache, session: Session, template_id: str) -> QueryResult:
    return use_query(cache, (TEMPLATE_ENTITY, "detail", template_id), lambda: service.get_template(session, template_id))


def use_template_by_name(cache: QueryCache, session: Session, template_name: str) -> QueryResult:
    return use_query(
        cache, (TEMPLATE_ENTITY, "name", template_name), lambda: service.get_template_by_name(session, template_name)
    )


def use_create_template(
    cache: QueryCache,
    session: Session,
    template_in: AppConfigTemplateCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.create_template(session, template_in, actor),
        [(TEMPLATE_ENTITY,)], "created", "create", "app_config_template", language,
    )


def use_update_template(
    cache: QueryCache,
    session: Session,
    template_id: str,
    updates: AppConfigTemplateUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_template(session, template_id, updates, actor),
        [(TEMPLATE_ENTITY,)], "updated", "update", "app_config_template", language,
    )


def use_delete_template(
    cache: QueryCache,
    session: Session,
    template_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.delete_template(session, template_id, actor),
        [(TEMPLATE_ENTITY,)], "deleted", "delete", "app_config_template", language,
    )
