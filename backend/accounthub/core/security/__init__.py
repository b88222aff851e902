"""
Security-related modules for the application.
"""

from accounthub.core.security.tokens import (
    ALGORITHM,
    create_access_token,
    decode_access_token,
)
from accounthub.core.security.password import (
    get_password_hash,
    verify_password,
)

__all__ = [
    "ALGORITHM",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
