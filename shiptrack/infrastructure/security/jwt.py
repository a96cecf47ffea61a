"""Bearer tokens: HS256 JWTs signed with SECRET_KEY.

Claims: sub (user id), email, role, exp and jti. The jti is a fresh CUID, so
tokens issued to one user within the same second still map to distinct
session:<token> keys.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from shiptrack.core.config import get_settings
from shiptrack.shared.utils.generators import generate_cuid

_REQUIRED_CLAIMS = ("sub", "exp")


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Sign data plus exp/jti claims.

    expires_delta defaults to ACCESS_TOKEN_EXPIRE_MINUTES, which matches the
    session window.
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "exp": datetime.now(UTC) + lifetime}
    claims.setdefault("jti", generate_cuid())
    return str(
        jwt.encode(claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm)
    )


def verify_token(token: str) -> dict[str, Any]:
    """Return the claims of a valid, unexpired token.

    Raises:
        ValueError: Bad signature, expired, malformed or missing sub/exp.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    missing = [name for name in _REQUIRED_CLAIMS if name not in claims]
    if missing:
        raise ValueError(f"Token missing required claim(s): {', '.join(missing)}")
    return claims
