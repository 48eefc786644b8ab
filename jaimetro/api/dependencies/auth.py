"""FastAPI dependencies for the admin session cookie."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from loguru import logger

from jaimetro.api.dependencies.db import get_settings
from jaimetro.config.settings import Settings
from jaimetro.core.auth_jwt import ADMIN_COOKIE_NAME, is_admin_token


def is_admin(request: Request, settings: Settings = Depends(get_settings)) -> bool:
    """Return True when the request carries a valid admin cookie."""
    return is_admin_token(request.cookies.get(ADMIN_COOKIE_NAME), settings)


def require_admin(request: Request, admin: bool = Depends(is_admin)) -> None:
    """Reject the request with 401 unless it carries a valid admin cookie.

    Raises:
        HTTPException: 401 when the cookie is missing, invalid or expired
    """
    if not admin:
        logger.warning(f"[AUTH] Unauthorized {request.method} {request.url.path}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
