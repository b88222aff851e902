from typing import Optional

from sqlmodel import Session

from accounthub.core.i18n import DEFAULT_LANGUAGE
from accounthub.models.schemas.redemption_code import (
    RedemptionCodeCreate,
    RedemptionCodeExportFilters,
    RedemptionCodeFilters,
    RedemptionCodeTemplate,
    RedemptionCodeUpdate,
)
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, filters_key, use_mutation, use_query
from accounthub.services import redemption_codes as service
from accounthub.services.audit import AuditContext

ENTITY = "redemption_codes"
LABEL = "redemption_code"
INVALIDATES = [(ENTITY,)]


def use_redemption_codes(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[RedemptionCodeFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: service.get_redemption_codes(session, page, page_size, filters),
    )


def use_redemption_code(cache: QueryCache, session: Session, code_id: str) -> QueryResult:
    return use_query(cache, (ENTITY, "detail", code_id), lambda: service.get_redemption_code(session, code_id))


def use_redemption_code_stats(cache: QueryCache, session: Session, application_id: Optional[str] = None) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "stats", application_id),
        lambda: service.get_redemption_code_stats(session, application_id),
    )


def use_redemption_code_uses(
    cache: QueryCache,
    session: Session,
    code_id: str,
    page: int = 1,
    page_size: int = 10,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "uses", code_id, page, page_size),
        lambda: service.get_redemption_code_uses(session, code_id, page, page_size),
    )


def use_export_redemption_codes(
    cache: QueryCache,
    session: Session,
    filters: Optional[RedemptionCodeExportFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "export", filters_key(filters)),
        lambda: service.export_redemption_codes(session, filters),
    )


def use_create_redemption_code(
    cache: QueryCache,
    session: Session,
    code_in: RedemptionCodeCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache,
        lambda: service.create_redemption_code(session, code_in, actor),
        INVALIDATES, "created", "create", LABEL, language,
    )


def use_batch_create_redemption_codes(
    cache: QueryCache,
    session: Session,
    count: int,
    template: RedemptionCodeTemplate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache,
        lambda: service.batch_create_redemption_codes(session, count, template, actor),
        INVALIDATES, "batch_created", "batch_create", LABEL, language,
        count=count,
    )


def use_update_redemption_code(
    cache: QueryCache,
    session: Session,
    code_id: str,
    updates: RedemptionCodeUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache,
        lambda: service.update_redemption_code(session, code_id, updates, actor),
        INVALIDATES, "updated", "update", LABEL, language,
    )


def use_delete_redemption_code(
    cache: QueryCache,
    session: Session,
    code_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache,
        lambda: service.delete_redemption_code(session, code_id, actor),
        INVALIDATES, "deleted", "delete", LABEL, language,
    )
