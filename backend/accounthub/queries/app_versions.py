from typing import Optional

from sqlmodel import Session

from accounthub.core.i18n import DEFAULT_LANGUAGE
from accounthub.models.schemas.app_version import AppVersionCreate, AppVersionFilters, AppVersionUpdate
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, filters_key, use_mutation, use_query
from accounthub.services import app_versions as service
from accounthub.services.audit import AuditContext

ENTITY = "app_versions"
LABEL = "app_version"
INVALIDATES = [(ENTITY,)]


def use_app_versions(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[AppVersionFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: service.get_app_versions(session, page, page_size, filters),
    )


def use_app_version(cache: QueryCache, session: Session, version_id: str) -> QueryResult:
    return use_query(cache, (ENTITY, "detail", version_id), lambda: service.get_app_version(session, version_id))


def use_latest_version(cache: QueryCache, session: Session, application_id: str, platform: str) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "latest", application_id, platform),
        lambda: service.get_latest_version(session, application_id, platform),
    )


def use_create_app_version(
    cache: QueryCache,
    session: Session,
    version_in: AppVersionCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.create_app_version(session, version_in, actor),
        INVALIDATES, "created", "create", LABEL, language,
    )


def use_update_app_version(
    cache: QueryCache,
    session: Session,
    version_id: str,
    updates: AppVersionUpdate,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_app_version(session, version_id, updates),
        INVALIDATES, "updated", "update", LABEL, language,
    )


def use_toggle_published(
    cache: QueryCache,
    session: Session,
    version_id: str,
    is_published: bool,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.toggle_published(session, version_id, is_published),
        INVALIDATES, "status_updated", "status_update", LABEL, language,
    )


def use_delete_app_version(
    cache: QueryCache,
    session: Session,
    version_id: str,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.delete_app_version(session, version_id),
        INVALIDATES, "deleted", "delete", LABEL, language,
    )
