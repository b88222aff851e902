from typing import Optional

from sqlmodel import Session

from accounthub.core.i18n import DEFAULT_LANGUAGE
from accounthub.models.schemas.membership import MembershipCreate, MembershipFilters, MembershipUpdate
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, filters_key, use_mutation, use_query
from accounthub.services import memberships as service
from accounthub.services.audit import AuditContext

ENTITY = "memberships"
LABEL = "membership"
INVALIDATES = [(ENTITY,), ("payments",), ("redemption_codes", "uses"), ("dashboard",)]


def use_memberships(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[MembershipFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: service.get_memberships(session, page, page_size, filters),
    )


def use_membership(cache: QueryCache, session: Session, membership_id: str) -> QueryResult:
    return use_query(cache, (ENTITY, "detail", membership_id), lambda: service.get_membership(session, membership_id))


def use_create_membership(
    cache: QueryCache,
    session: Session,
    membership_in: MembershipCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.create_membership(session, membership_in, actor),
        INVALIDATES, "created", "create", LABEL, language,
    )


def use_update_membership(
    cache: QueryCache,
    session: Session,
    membership_id: str,
    updates: MembershipUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_membership(session, membership_id, updates, actor),
        INVALIDATES, "updated", "update", LABEL, language,
    )


def use_update_membership_status(
    cache: QueryCache,
    session: Session,
    membership_id: str,
    status: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_status(session, membership_id, status, actor),
        INVALIDATES, "status_updated", "status_update", LABEL, language,
    )


def use_delete_membership(
    cache: QueryCache,
    session: Session,
    membership_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.delete_membership(session, membership_id, actor),
        INVALIDATES, "deleted", "delete", LABEL, language,
    )
