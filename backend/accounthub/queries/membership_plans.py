from typing import Optional

from sqlmodel import Session

from accounthub.core.i18n import DEFAULT_LANGUAGE
from accounthub.models.schemas.membership_plan import (
    MembershipPlanCreate,
    MembershipPlanFilters,
    MembershipPlanUpdate,
)
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, filters_key, use_mutation, use_query
from accounthub.services import membership_plans as service
from accounthub.services.audit import AuditContext

ENTITY = "membership_plans"
LABEL = "membership_plan"
# plan names are shown on memberships and redemption codes
INVALIDATES = [(ENTITY,), ("memberships",), ("redemption_codes",)]


def use_membership_plans(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[MembershipPlanFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: service.get_membership_plans(session, page, page_size, filters),
    )


def use_membership_plan(cache: QueryCache, session: Session, plan_id: str) -> QueryResult:
    return use_query(cache, (ENTITY, "detail", plan_id), lambda: service.get_membership_plan(session, plan_id))


def use_create_membership_plan(
    cache: QueryCache,
    session: Session,
    plan_in: MembershipPlanCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.create_membership_plan(session, plan_in, actor),
        INVALIDATES, "created", "create", LABEL, language,
    )


def use_update_membership_plan(
    cache: QueryCache,
    session: Session,
    plan_id: str,
    updates: MembershipPlanUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_membership_plan(session, plan_id, updates, actor),
        INVALIDATES, "updated", "update", LABEL, language,
    )


def use_update_plan_order(
    cache: QueryCache,
    session: Session,
    plan_id: str,
    sort_order: int,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.update_plan_order(session, plan_id, sort_order, actor),
        [(ENTITY,)], "updated", "update", LABEL, language,
    )


def use_delete_membership_plan(
    cache: QueryCache,
    session: Session,
    plan_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: service.delete_membership_plan(session, plan_id, actor),
        INVALIDATES, "deleted", "delete", LABEL, language,
    )
