from typing import Any, List, Optional

from fastapi import APIRouter

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.constants import AppConfigType
from accounthub.models.schemas.app_config import (
    AppConfigActive,
    AppConfigCreate,
    AppConfigFilters,
    AppConfigPublic,
    AppConfigTemplateCreate,
    AppConfigTemplatePublic,
    AppConfigTemplateUpdate,
    AppConfigUpdate,
)
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.queries import app_configs as hooks

router = APIRouter()
templates_router = APIRouter()


@router.get("/", response_model=Page[AppConfigPublic])
def read_app_configs(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    config_type: Optional[AppConfigType] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
) -> Any:
    filters = AppConfigFilters(config_type=config_type, is_active=is_active, search=search)
    return unwrap(hooks.use_app_configs(cache, session, page, page_size, filters), language)


@router.get("/key/{config_key}", response_model=AppConfigPublic)
def read_app_config_by_key(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, config_key: str
) -> Any:
    return unwrap(hooks.use_app_config_by_key(cache, session, config_key), language)


@router.get("/{config_id}", response_model=AppConfigPublic)
def read_app_config(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, config_id: str
) -> Any:
    return unwrap(hooks.use_app_config(cache, session, config_id), language)


@router.post("/", response_model=MutationResponse[AppConfigPublic])
def create_app_config(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, config_in: AppConfigCreate
) -> Any:
    result = hooks.use_create_app_config(cache, session, config_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{config_id}", response_model=MutationResponse[AppConfigPublic])
def update_app_config(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    config_id: str,
    updates: AppConfigUpdate,
) -> Any:
    result = hooks.use_update_app_config(cache, session, config_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{config_id}/active", response_model=MutationResponse[AppConfigPublic])
def toggle_app_config(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    config_id: str,
    body: AppConfigActive,
) -> Any:
    result = hooks.use_toggle_app_config(cache, session, config_id, body.is_active, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.delete("/{config_id}", response_model=MutationResponse[None])
def delete_app_config(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, config_id: str
) -> Any:
    result = hooks.use_delete_app_config(cache, session, config_id, actor, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)


@templates_router.get("/", response_model=List[AppConfigTemplatePublic])
def read_templates(session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin) -> Any:
    return unwrap(hooks.use_templates(cache, session), language)


@templates_router.get("/name/{template_name}", response_model=AppConfigTemplatePublic)
def read_template_by_name(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, template_name: str
) -> Any:
    return unwrap(hooks.use_template_by_name(cache, session, template_name), language)


@templates_router.get("/{template_id}", response_model=AppConfigTemplatePublic)
def read_template(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, template_id: str
) -> Any:
    return unwrap(hooks.use_template(cache, session, template_id), language)


@templates_router.post("/", response_model=MutationResponse[AppConfigTemplatePublic])
def create_template(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    template_in: AppConfigTemplateCreate,
) -> Any:
    result = hooks.use_create_template(cache, session, template_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@templates_router.patch("/{template_id}", response_model=MutationResponse[AppConfigTemplatePublic])
def update_template(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    template_id: str,
    updates: AppConfigTemplateUpdate,
) -> Any:
    result = hooks.use_update_template(cache, session, template_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@templates_router.delete("/{template_id}", response_model=MutationResponse[None])
def delete_template(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, template_id: str
) -> Any:
    result = hooks.use_delete_template(cache, session, template_id, actor, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)
