from fastapi import Request
import logging

from ..core.exceptions import AuthError

logger = logging.getLogger(__name__)

SESSION_FLAG = "loggedIn"


def is_logged_in(request: Request) -> bool:
    return bool(request.session.get(SESSION_FLAG))


def log_in(request: Request) -> None:
    request.session[SESSION_FLAG] = True


def log_out(request: Request) -> None:
    request.session[SESSION_FLAG] = False


async def require_session(request: Request) -> None:
    """
    Guard for protected routes.
    Raises 401 unless the session cookie carries loggedIn=True.
    """
    if not is_logged_in(request):
        logger.warning(f"[Auth] Rejected unauthenticated {request.method} {request.url.path}")
        raise AuthError("Unauthorized. Please login.")
