"""
Opaque identifiers handed to people: application keys and redemption codes.
"""
import secrets
import string

APP_KEY_PREFIX = "ak_"
APP_KEY_LENGTH = 32
APP_KEY_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

# Excludes the look-alikes I, O, 0 and 1
REDEMPTION_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
REDEMPTION_CODE_LENGTH = 16
REDEMPTION_CODE_GROUP = 4


def generate_app_key() -> str:
    """Return a key of the form ``ak_`` + 32 alphanumerics."""
    body = "".join(secrets.choice(APP_KEY_ALPHABET) for _ in range(APP_KEY_LENGTH))
    return f"{APP_KEY_PREFIX}{body}"


def generate_redemption_code(length: int = REDEMPTION_CODE_LENGTH) -> str:
    """
    Return a random code such as ``7KQM-X2PD-HC9W-ZT4N``.

    Symbols are drawn independently from a 32-symbol alphabet, so a
    16-symbol code carries 80 bits. Uniqueness is left to the database.
    """
    raw = "".join(secrets.choice(REDEMPTION_CODE_ALPHABET) for _ in range(length))
    return "-".join(
        raw[i:i + REDEMPTION_CODE_GROUP] for i in range(0, len(raw), REDEMPTION_CODE_GROUP)
    )
