"""Password hashing: bcrypt over a base64 SHA-256 digest of the password.

The digest keeps every password under bcrypt's 72-byte input limit, so long
passphrases are compared in full.
"""

import base64
import hashlib

import bcrypt

_ENCODING = "utf-8"


def _bcrypt_input(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode(_ENCODING)).digest())


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt()).decode(_ENCODING)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check; a malformed stored hash never matches."""
    try:
        return bcrypt.checkpw(_bcrypt_input(plain_password), hashed_password.encode(_ENCODING))
    except (TypeError, ValueError):
        return False
