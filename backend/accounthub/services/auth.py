"""
Back-office sign-in.

Tokens are stateless JWTs, so signing out only notifies the listeners
registered on the app's ``AuthEvents`` (the query cache clears itself).
"""
import logging
import uuid
from datetime import timedelta
from typing import Callable, List, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session, select

from accounthub.core.config import settings
from accounthub.core.exceptions import AuthError
from accounthub.core.security import create_access_token, decode_access_token, verify_password
from accounthub.models.database.admin import Admin
from accounthub.models.database.user import User
from accounthub.models.schemas.auth import Token, TokenPayload
from accounthub.services.base import backend_call, save, utcnow
from accounthub.utils.validation import is_valid_email, is_valid_uuid

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthListener = Callable[[str, Optional[Admin]], None]


class AuthEvents:
    """Sign-in and sign-out listeners of one running app."""

    def __init__(self) -> None:
        self._listeners: List[AuthListener] = []

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        """Register ``callback(event, admin)``. Returns a function that unregisters it."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, admin: Optional[Admin]) -> None:
        for listener in list(self._listeners):
            listener(event, admin)


def authenticate(session: Session, email: str, password: str) -> Optional[Admin]:
    with backend_call(session, "authenticate"):
        admin = session.exec(select(Admin).where(Admin.email == email)).first()
    if not admin or not verify_password(password, admin.hashed_password):
        return None
    return admin


def sign_in(session: Session, email: str, password: str, events: Optional[AuthEvents] = None) -> Token:
    """
    Check admin credentials and issue an access token.

    Raises:
        AuthError: malformed email, wrong credentials, or a platform user
            without back-office access
    """
    if not is_valid_email(email):
        raise AuthError("Invalid email format", code="INVALID_EMAIL")
    admin = authenticate(session, email, password)
    if admin is None:
        with backend_call(session, "sign_in"):
            platform_user = session.exec(select(User.id).where(User.email == email)).first()
        if platform_user is not None:
            raise AuthError("Not an administrator", code="INSUFFICIENT_PERMISSIONS")
        raise AuthError("Incorrect email or password", code="INVALID_CREDENTIALS")

    admin.last_login_at = utcnow()
    save(session, admin, "sign_in")
    logger.info("Admin %s signed in", admin.email)

    token = create_access_token(admin.id, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    if events is not None:
        events.emit(SIGNED_IN, admin)
    return Token(access_token=token)


def get_admin(session: Session, admin_id: str) -> Optional[Admin]:
    if not is_valid_uuid(admin_id):
        return None
    with backend_call(session, "get_admin"):
        return session.get(Admin, uuid.UUID(admin_id))


def get_current_admin(session: Session, token: str) -> Admin:
    """Resolve the admin a token was issued to."""
    try:
        token_data = TokenPayload(**decode_access_token(token))
    except (jwt.InvalidTokenError, PydanticValidationError) as e:
        raise AuthError("Could not validate credentials", code="INVALID_TOKEN") from e

    admin = get_admin(session, token_data.sub) if token_data.sub else None
    if admin is None:
        raise AuthError("Admin not found", code="INVALID_TOKEN")
    return admin


def sign_out(admin: Optional[Admin] = None, events: Optional[AuthEvents] = None) -> None:
    if admin is not None:
        logger.info("Admin %s signed out", admin.email)
    if events is not None:
        events.emit(SIGNED_OUT, admin)
