import uuid
from typing import Any, Optional

from fastapi import APIRouter

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.models.constants import Platform
from accounthub.models.schemas.app_version import (
    AppVersionCreate,
    AppVersionFilters,
    AppVersionPublish,
    AppVersionPublic,
    AppVersionRow,
    AppVersionUpdate,
)
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.queries import app_versions as hooks

router = APIRouter()


@router.get("/", response_model=Page[AppVersionRow])
def read_app_versions(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    application_id: Optional[uuid.UUID] = None,
    platform: Optional[Platform] = None,
    is_published: Optional[bool] = None,
    search: Optional[str] = None,
) -> Any:
    filters = AppVersionFilters(
        application_id=application_id, platform=platform, is_published=is_published, search=search
    )
    return unwrap(hooks.use_app_versions(cache, session, page, page_size, filters), language)


@router.get("/latest", response_model=AppVersionPublic)
def read_latest_version(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    application_id: str,
    platform: Platform = "all",
) -> Any:
    return unwrap(hooks.use_latest_version(cache, session, application_id, platform), language)


@router.get("/{version_id}", response_model=AppVersionRow)
def read_app_version(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, version_id: str
) -> Any:
    return unwrap(hooks.use_app_version(cache, session, version_id), language)


@router.post("/", response_model=MutationResponse[AppVersionPublic])
def create_app_version(
    session: SessionDep, cache: CacheDep, language: LanguageDep, actor: ActorDep, version_in: AppVersionCreate
) -> Any:
    result = hooks.use_create_app_version(cache, session, version_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{version_id}", response_model=MutationResponse[AppVersionPublic])
def update_app_version(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    version_id: str,
    updates: AppVersionUpdate,
) -> Any:
    result = hooks.use_update_app_version(cache, session, version_id, updates, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.patch("/{version_id}/published", response_model=MutationResponse[AppVersionPublic])
def toggle_published(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    version_id: str,
    body: AppVersionPublish,
) -> Any:
    result = hooks.use_toggle_published(cache, session, version_id, body.is_published, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.delete("/{version_id}", response_model=MutationResponse[None])
def delete_app_version(
    session: SessionDep, cache: CacheDep, language: LanguageDep, current_admin: CurrentAdmin, version_id: str
) -> Any:
    result = hooks.use_delete_app_version(cache, session, version_id, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)
