from typing import Any, Optional

from fastapi import APIRouter

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.schemas.application import (
    ApplicationActive,
    ApplicationCreate,
    ApplicationFilters,
    ApplicationPublic,
    ApplicationUpdate,
)
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.queries import applications as hooks

router = APIRouter()


@router.get("/", response_model=Page[ApplicationPublic])
def read_applications(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    search: Optional[str] = None,
) -> Any:
    filters = ApplicationFilters(search=search)
    return unwrap(hooks.use_applications(cache, session, page, page_size, filters), language)


@router.get("/{application_id}", response_model=ApplicationPublic)
def read_application(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, application_id: str
) -> Any:
    return unwrap(hooks.use_application(cache, session, application_id), language)


@router.post("/", response_model=MutationResponse[ApplicationPublic])
def create_application(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, app_in: ApplicationCreate
) -> Any:
    result = hooks.use_create_application(cache, session, app_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{application_id}", response_model=MutationResponse[ApplicationPublic])
def update_application(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    application_id: str,
    updates: ApplicationUpdate,
) -> Any:
    result = hooks.use_update_application(cache, session, application_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{application_id}/active", response_model=MutationResponse[ApplicationPublic])
def toggle_application(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    application_id: str,
    body: ApplicationActive,
) -> Any:
    result = hooks.use_toggle_application(cache, session, application_id, body.is_active, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.post("/{application_id}/regenerate-key", response_model=MutationResponse[ApplicationPublic])
def regenerate_app_key(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, application_id: str
) -> Any:
    """Issue a new app key. The previous key stops working immediately."""
    result = hooks.use_regenerate_app_key(cache, session, application_id, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.delete("/{application_id}", response_model=MutationResponse[None])
def delete_application(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, application_id: str
) -> Any:
    result = hooks.use_delete_application(cache, session, application_id, actor, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)
