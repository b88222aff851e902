from collections.abc import Generator
from typing import Annotated, Any, Union

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from accounthub.core.config import settings
from accounthub.core.db import engine
from accounthub.core.exceptions import (
    AccountHubError,
    AuthError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from accounthub.core.i18n import get_language_from_request, get_translation
from accounthub.models.database.admin import Admin
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, failure_notification
from accounthub.services import auth
from accounthub.services.audit import AuditContext

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login"
)


def get_db() -> Generator[Session, None, None]:
    # rows returned by a mutation are serialized after its audit entry is committed
    with Session(engine, expire_on_commit=False) as session:
        yield session


def get_language(request: Request) -> str:
    """
    Dependency to extract the preferred language from the request.
    """
    return get_language_from_request(request)


def get_cache(request: Request) -> QueryCache:
    return request.app.state.query_cache


def get_auth_events(request: Request) -> auth.AuthEvents:
    return request.app.state.auth_events


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[str, Depends(reusable_oauth2)]
LanguageDep = Annotated[str, Depends(get_language)]
CacheDep = Annotated[QueryCache, Depends(get_cache)]
AuthEventsDep = Annotated[auth.AuthEvents, Depends(get_auth_events)]


def get_current_admin(session: SessionDep, language: LanguageDep, token: TokenDep) -> Admin:
    try:
        return auth.get_current_admin(session, token)
    except AuthError as e:
        if e.code == "INSUFFICIENT_PERMISSIONS":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=get_translation("insufficient_permissions", language),
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=get_translation("invalid_token", language),
            headers={"WWW-Authenticate": "Bearer"},
        )


CurrentAdmin = Annotated[Admin, Depends(get_current_admin)]


def get_audit_context(request: Request, current_admin: CurrentAdmin) -> AuditContext:
    """Acting admin plus client details for the audit trail."""
    return AuditContext(
        admin_id=str(current_admin.id),
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("User-Agent"),
    )


ActorDep = Annotated[AuditContext, Depends(get_audit_context)]


def status_for(error: AccountHubError) -> int:
    if isinstance(error, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, AuthError):
        if error.code == "INSUFFICIENT_PERMISSIONS":
            return status.HTTP_403_FORBIDDEN
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, ServiceError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def unwrap(result: Union[QueryResult, MutationResult], language: str) -> Any:
    """Return the data of a hook result, or raise its error as an HTTP error."""
    if isinstance(result, MutationResult):
        if result.ok:
            return result.data
        raise HTTPException(status_code=status_for(result.error), detail=result.notification)
    if result.is_error:
        raise HTTPException(
            status_code=status_for(result.error),
            detail=failure_notification(result.error, "fetch", language),
        )
    return result.data
