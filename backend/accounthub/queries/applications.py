from typing import Optional

from sqlmodel import Session

from accounthub.core.i18n import DEFAULT_LANGUAGE
from accounthub.models.schemas.application import ApplicationCreate, ApplicationFilters, ApplicationUpdate
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, filters_key, use_mutation, use_query
from accounthub.services import applications as service
from accounthub.services.audit import AuditContext

ENTITY = "applications"
LABEL = "application"
# application names are joined into most other list views
INVALIDATES = [
    (ENTITY,),
    ("app_versions",),
    ("users",),
    ("memberships",),
    ("membership_plans",),
    ("payment_configs",),
    ("payments",),
    ("redemption_codes",),
    ("dashboard",),
]


def use_applications(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[ApplicationFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: service.get_applications(session, page, page_size, filters),
    )


def use_application(cache: QueryCache, session: Session, application_id: str) -> QueryResult:
    return use_query(cache, (ENTITY, "detail", application_id), lambda: service.get_application(session, application_id))


def use_create_application(
    cache: QueryCache,
    session: Session,
    app_in: ApplicationCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.create_application(session, app_in, actor),
        INVALIDATES, "created", "create", LABEL, language,
    )


def use_update_application(
    cache: QueryCache,
    session: Session,
    application_id: str,
    updates: ApplicationUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_application(session, application_id, updates, actor),
        INVALIDATES, "updated", "update", LABEL, language,
    )


def use_toggle_application(
    cache: QueryCache,
    session: Session,
    application_id: str,
    is_active: bool,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.toggle_active(session, application_id, is_active, actor),
        INVALIDATES, "status_updated", "status_update", LABEL, language,
    )


def use_regenerate_app_key(
    cache: QueryCache,
    session: Session,
    application_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.regenerate_app_key(session, application_id, actor),
        [(ENTITY,)], "updated", "update", LABEL, language,
    )


def use_delete_application(
    cache: QueryCache,
    session: Session,
    application_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.delete_application(session, application_id, actor),
        INVALIDATES, "deleted", "delete", LABEL, language,
    )
