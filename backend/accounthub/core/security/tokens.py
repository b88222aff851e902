"""
JWT token utilities.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from accounthub.core.config import settings

# JWT algorithm
ALGORITHM = "HS256"


def create_access_token(subject: str | Any, expires_delta: timedelta) -> str:
    """
    Create a JWT access token.

    Args:
        subject: The subject of the token (the admin ID)
        expires_delta: The expiration time delta

    Returns:
        str: The encoded JWT token
    """
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"exp": expire, "sub": str(subject)}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify a token. Raises ``jwt.InvalidTokenError`` on failure."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
