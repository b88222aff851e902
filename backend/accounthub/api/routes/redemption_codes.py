import uuid
from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from accounthub.api.deps import ActorDep, CacheDep, CurrentAdmin, LanguageDep, SessionDep, unwrap
from accounthub.core.i18n import get_translation
from accounthub.models.constants import RedemptionCodeStatus, RedemptionCodeType
from accounthub.models.schemas.common import MutationResponse, Page
from accounthub.models.schemas.redemption_code import (
    RedemptionCodeBatchCreate,
    RedemptionCodeCreate,
    RedemptionCodeExportFilters,
    RedemptionCodeFilters,
    RedemptionCodePublic,
    RedemptionCodeRow,
    RedemptionCodeStats,
    RedemptionCodeUpdate,
    RedemptionCodeUsePublic,
)
from accounthub.queries import redemption_codes as hooks
from accounthub.services.redemption_codes import format_export_lines

router = APIRouter()


@router.get("/", response_model=Page[RedemptionCodeRow])
def read_redemption_codes(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    page: int = 1,
    page_size: int = 10,
    application_id: Optional[uuid.UUID] = None,
    status: Optional[RedemptionCodeStatus] = None,
    code_type: Optional[RedemptionCodeType] = None,
    search: Optional[str] = None,
) -> Any:
    filters = RedemptionCodeFilters(
        application_id=application_id, status=status, code_type=code_type, search=search
    )
    return unwrap(hooks.use_redemption_codes(cache, session, page, page_size, filters), language)


@router.get("/stats", response_model=RedemptionCodeStats)
def read_redemption_code_stats(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    application_id: Optional[str] = None,
) -> Any:
    return unwrap(hooks.use_redemption_code_stats(cache, session, application_id), language)


@router.get("/export", response_class=PlainTextResponse)
def export_redemption_codes(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    application_id: Optional[uuid.UUID] = None,
    status: Optional[RedemptionCodeStatus] = None,
) -> Any:
    """
    Tab-separated ``code, application, plan, expiry`` lines, one per code,
    ready to paste into a spreadsheet. Expiry times are printed in UTC.
    """
    filters = RedemptionCodeExportFilters(application_id=application_id, status=status)
    rows = unwrap(hooks.use_export_redemption_codes(cache, session, filters), language)
    if not rows:
        raise HTTPException(status_code=404, detail=get_translation("no_codes_to_export", language))
    return PlainTextResponse(format_export_lines(rows, get_translation("never_expires", language)))


@router.post("/", response_model=MutationResponse[RedemptionCodePublic])
def create_redemption_code(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    code_in: RedemptionCodeCreate,
) -> Any:
    result = hooks.use_create_redemption_code(cache, session, code_in, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.post("/batch", response_model=MutationResponse[List[RedemptionCodePublic]])
def batch_create_redemption_codes(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    batch_in: RedemptionCodeBatchCreate,
) -> Any:
    result = hooks.use_batch_create_redemption_codes(
        cache, session, batch_in.count, batch_in.template, actor, language
    )
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.get("/{code_id}", response_model=RedemptionCodeRow)
def read_redemption_code(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    code_id: str,
) -> Any:
    return unwrap(hooks.use_redemption_code(cache, session, code_id), language)


@router.get("/{code_id}/uses", response_model=Page[RedemptionCodeUsePublic])
def read_redemption_code_uses(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    current_admin: CurrentAdmin,
    code_id: str,
    page: int = 1,
    page_size: int = 10,
) -> Any:
    return unwrap(hooks.use_redemption_code_uses(cache, session, code_id, page, page_size), language)


@router.patch("/{code_id}", response_model=MutationResponse[RedemptionCodePublic])
def update_redemption_code(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    code_id: str,
    updates: RedemptionCodeUpdate,
) -> Any:
    result = hooks.use_update_redemption_code(cache, session, code_id, updates, actor, language)
    return MutationResponse(message=result.notification, data=unwrap(result, language))


@router.delete("/{code_id}", response_model=MutationResponse[None])
def delete_redemption_code(
    session: SessionDep,
    cache: CacheDep,
    language: LanguageDep,
    actor: ActorDep,
    code_id: str,
) -> Any:
    result = hooks.use_delete_redemption_code(cache, session, code_id, actor, language)
    unwrap(result, language)
    return MutationResponse(message=result.notification)
