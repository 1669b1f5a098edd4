"""
Shared-password login for the admin dashboard.

There is one admin secret and no user identity; a successful login only
sets loggedIn in the signed session cookie.
"""

import hmac
import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..auth.dependencies import is_logged_in, log_in, log_out
from ..core.config import settings
from ..core.exceptions import AuthError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["authentication"])


class LoginRequest(BaseModel):
    # untyped so a number or object is a wrong password, not a 422
    password: Optional[Any] = None


@router.post("/login")
async def login(payload: LoginRequest, request: Request):
    password = payload.password
    if not isinstance(password, str) or not hmac.compare_digest(
        password.encode(), settings.ADMIN_PASSWORD.encode()
    ):
        logger.warning("[Auth] Failed login attempt")
        raise AuthError("Incorrect Password")

    log_in(request)
    logger.info("[Auth] ✅ Admin logged in")
    return {"success": True}


@router.get("/check-auth")
async def check_auth(request: Request):
    return {"loggedIn": is_logged_in(request)}


@router.post("/logout")
async def logout(request: Request):
    log_out(request)
    return {"success": True}
