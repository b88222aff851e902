import uuid
from typing import Any, Optional

from fastapi import APIRouter

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.constants import PaymentStatus
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.models.schemas.payment import (
    PaymentCreate,
    PaymentFilters,
    PaymentPublic,
    PaymentRow,
    PaymentUpdate,
)
from accounthub.queries import payments as hooks

router = APIRouter()


@router.get("/", response_model=Page[PaymentRow])
def read_payments(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    user_id: Optional[uuid.UUID] = None,
    membership_id: Optional[uuid.UUID] = None,
    status: Optional[PaymentStatus] = None,
) -> Any:
    filters = PaymentFilters(user_id=user_id, membership_id=membership_id, status=status)
    return unwrap(hooks.use_payments(cache, session, page, page_size, filters), language)


@router.get("/{payment_id}", response_model=PaymentRow)
def read_payment(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, payment_id: str
) -> Any:
    return unwrap(hooks.use_payment(cache, session, payment_id), language)


@router.post("/", response_model=MutationResponse[PaymentPublic])
def create_payment(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, payment_in: PaymentCreate
) -> Any:
    result = hooks.use_create_payment(cache, session, payment_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{payment_id}", response_model=MutationResponse[PaymentPublic])
def update_payment(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    payment_id: str,
    updates: PaymentUpdate,
) -> Any:
    result = hooks.use_update_payment(cache, session, payment_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.delete("/{payment_id}", response_model=MutationResponse[None])
def delete_payment(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, payment_id: str
) -> Any:
    result = hooks.use_delete_payment(cache, session, payment_id, actor, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)
