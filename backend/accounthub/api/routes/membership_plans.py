import uuid
from typing import Any, Optional

from fastapi import APIRouter

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.models.schemas.membership_plan import (
    MembershipPlanCreate,
    MembershipPlanFilters,
    MembershipPlanOrder,
    MembershipPlanPublic,
    MembershipPlanRow,
    MembershipPlanUpdate,
)
from accounthub.queries import membership_plans as hooks

router = APIRouter()


@router.get("/", response_model=Page[MembershipPlanRow])
def read_membership_plans(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    application_id: Optional[uuid.UUID] = None,
    is_active: Optional[bool] = None,
) -> Any:
    filters = MembershipPlanFilters(application_id=application_id, is_active=is_active)
    return unwrap(hooks.use_membership_plans(cache, session, page, page_size, filters), language)


@router.get("/{plan_id}", response_model=MembershipPlanRow)
def read_membership_plan(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, plan_id: str
) -> Any:
    return unwrap(hooks.use_membership_plan(cache, session, plan_id), language)


@router.post("/", response_model=MutationResponse[MembershipPlanPublic])
def create_membership_plan(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, plan_in: MembershipPlanCreate
) -> Any:
    result = hooks.use_create_membership_plan(cache, session, plan_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{plan_id}", response_model=MutationResponse[MembershipPlanPublic])
def update_membership_plan(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    plan_id: str,
    updates: MembershipPlanUpdate,
) -> Any:
    result = hooks.use_update_membership_plan(cache, session, plan_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{plan_id}/order", response_model=MutationResponse[MembershipPlanPublic])
def update_plan_order(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    plan_id: str,
    body: MembershipPlanOrder,
) -> Any:
    result = hooks.use_update_plan_order(cache, session, plan_id, body.sort_order, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.delete("/{plan_id}", response_model=MutationResponse[None])
def delete_membership_plan(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, plan_id: str
) -> Any:
    result = hooks.use_delete_membership_plan(cache, session, plan_id, actor, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)
