from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from accounthub.api.deps import AuthEventsDep, CurrentAdmin, LanguageDep, SessionDep
from accounthub.core.exceptions import AuthError
from accounthub.core.i18n import get_translation
from accounthub.models.schemas.auth import AdminPublic, Token
from accounthub.models.schemas.common import Message
from accounthub.services import auth

router = APIRouter()


@router.post("/login")
def login(
    session: SessionDep,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    language: LanguageDep,
    events: AuthEventsDep,
) -> Token:
    """
    OAuth2 compatible token login, get an access token for future requests.
    """
    try:
        return auth.sign_in(session, form_data.username, form_data.password, events)
    except AuthError as e:
        if e.code == "INSUFFICIENT_PERMISSIONS":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=get_translation("insufficient_permissions", language),
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=get_translation("incorrect_credentials", language),
        )


@router.get("/me", response_model=AdminPublic)
def read_admin_me(current_admin: CurrentAdmin) -> Any:
    return current_admin


@router.post("/logout", response_model=Message)
def logout(current_admin: CurrentAdmin, language: LanguageDep, events: AuthEventsDep) -> Any:
    """Signing out clears the query cache. The token itself stays valid until it expires."""
    auth.sign_out(current_admin, events)
    return Message(message=get_translation("signed_out", language))
