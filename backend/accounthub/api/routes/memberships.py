import uuid
from typing import Any, Optional

from fastapi import APIRouter

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.constants import MembershipStatus
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.models.schemas.membership import (
    MembershipCreate,
    MembershipFilters,
    MembershipPublic,
    MembershipRow,
    MembershipStatusUpdate,
    MembershipUpdate,
)
from accounthub.queries import memberships as hooks

router = APIRouter()


@router.get("/", response_model=Page[MembershipRow])
def read_memberships(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    user_id: Optional[uuid.UUID] = None,
    application_id: Optional[uuid.UUID] = None,
    status: Optional[MembershipStatus] = None,
) -> Any:
    filters = MembershipFilters(user_id=user_id, application_id=application_id, status=status)
    return unwrap(hooks.use_memberships(cache, session, page, page_size, filters), language)


@router.get("/{membership_id}", response_model=MembershipRow)
def read_membership(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, membership_id: str
) -> Any:
    return unwrap(hooks.use_membership(cache, session, membership_id), language)


@router.post("/", response_model=MutationResponse[MembershipPublic])
def create_membership(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, membership_in: MembershipCreate
) -> Any:
    result = hooks.use_create_membership(cache, session, membership_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{membership_id}", response_model=MutationResponse[MembershipPublic])
def update_membership(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    membership_id: str,
    updates: MembershipUpdate,
) -> Any:
    result = hooks.use_update_membership(cache, session, membership_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{membership_id}/status", response_model=MutationResponse[MembershipPublic])
def update_membership_status(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    membership_id: str,
    body: MembershipStatusUpdate,
) -> Any:
    result = hooks.use_update_membership_status(cache, session, membership_id, body.status, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.delete("/{membership_id}", response_model=MutationResponse[None])
def delete_membership(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, membership_id: str
) -> Any:
    result = hooks.use_delete_membership(cache, session, membership_id, actor, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)
