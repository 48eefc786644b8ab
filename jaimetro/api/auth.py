"""Admin login endpoints.

Provides:
- Credential login that sets the admin cookie
- Logout that clears it
- Session introspection for the UI
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from loguru import logger

from jaimetro.api.dependencies.auth import is_admin
from jaimetro.api.dependencies.db import get_settings
from jaimetro.api.schemas import LoginRequest
from jaimetro.config.settings import Settings
from jaimetro.core.auth_jwt import ADMIN_COOKIE_NAME, check_credentials, create_admin_token

router = APIRouter(prefix="/api", tags=["auth"])


def _set_admin_cookie(response: Response, token: str, settings: Settings) -> None:
    """Set the admin cookie: httponly, SameSite=Lax, site-wide, same lifetime as the token."""
    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
        max_age=60 * 60 * settings.auth_token_expire_hours,
    )


@router.post("/login")
def login(body: LoginRequest, response: Response, settings: Settings = Depends(get_settings)):
    """Log in as admin.

    Raises:
        HTTPException: 401 if the credentials do not match
    """
    if not check_credentials(body.username, body.password, settings):
        logger.warning("[AUTH] Login failed: invalid credentials")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_admin_token(settings)
    _set_admin_cookie(response, token, settings)
    logger.info("[AUTH] Admin logged in")
    return {"ok": True}


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(key=ADMIN_COOKIE_NAME, path="/")
    return {"ok": True}


@router.get("/session")
def session_info(response: Response, admin: bool = Depends(is_admin)):
    response.headers["Cache-Control"] = "no-store"
    return {"ok": True, "isAdmin": admin}
