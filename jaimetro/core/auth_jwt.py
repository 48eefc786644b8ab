"""Admin token creation and verification.

The admin session is a stateless HS256 JWT carried in the ``admintoken``
cookie. The only claim that grants access is ``role == "admin"``.
"""

from __future__ import annotations

import hmac
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from loguru import logger

from jaimetro.config.settings import Settings

ADMIN_COOKIE_NAME = "admintoken"
ADMIN_ROLE = "admin"


def check_credentials(username: str, password: str, settings: Settings) -> bool:
    """Compare submitted credentials with the configured admin account."""
    user_ok = hmac.compare_digest(username.encode("utf-8"), settings.admin_user.encode("utf-8"))
    pass_ok = hmac.compare_digest(password.encode("utf-8"), settings.admin_pass.encode("utf-8"))
    return user_ok and pass_ok


def create_admin_token(settings: Settings, now: datetime | None = None) -> str:
    """Create a signed admin token.

    Args:
        settings: Application settings (secret, algorithm, lifetime)
        now: Issue time, defaults to the current UTC time

    Returns:
        JWT token string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "role": ADMIN_ROLE,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.auth_token_expire_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.auth_algorithm)


def is_admin_token(token: str | None, settings: Settings) -> bool:
    """Return True when the token is valid, unexpired and carries the admin role."""
    if not token:
        return False
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.auth_algorithm])
    except JWTError as e:
        logger.debug(f"[AUTH] Admin token rejected: {e}")
        return False
    return payload.get("role") == ADMIN_ROLE
