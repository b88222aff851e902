import uuid
from typing import Any, Optional

from fastapi import APIRouter

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.constants import PaymentMethod
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.models.schemas.payment_config import (
    PaymentConfigCreate,
    PaymentConfigFilters,
    PaymentConfigPublic,
    PaymentConfigRow,
    PaymentConfigUpdate,
)
from accounthub.queries import payments as hooks

router = APIRouter()


@router.get("/", response_model=Page[PaymentConfigRow])
def read_payment_configs(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    application_id: Optional[uuid.UUID] = None,
    payment_method: Optional[PaymentMethod] = None,
) -> Any:
    filters = PaymentConfigFilters(application_id=application_id, payment_method=payment_method)
    return unwrap(hooks.use_payment_configs(cache, session, page, page_size, filters), language)


@router.get("/{config_id}", response_model=PaymentConfigRow)
def read_payment_config(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, config_id: str
) -> Any:
    return unwrap(hooks.use_payment_config(cache, session, config_id), language)


@router.post("/", response_model=MutationResponse[PaymentConfigPublic])
def create_payment_config(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, config_in: PaymentConfigCreate
) -> Any:
    result = hooks.use_create_payment_config(cache, session, config_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{config_id}", response_model=MutationResponse[PaymentConfigPublic])
def update_payment_config(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    config_id: str,
    updates: PaymentConfigUpdate,
) -> Any:
    result = hooks.use_update_payment_config(cache, session, config_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.delete("/{config_id}", response_model=MutationResponse[None])
def delete_payment_config(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, config_id: str
) -> Any:
    result = hooks.use_delete_payment_config(cache, session, config_id, actor, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)
