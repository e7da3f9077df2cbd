"""Session gate middleware: resolves the session before any gated view runs."""
import logging
from typing import Callable

from fastapi import Request
from fastapi.responses import RedirectResponse, Response
from httpx import HTTPError
from starlette.middleware.base import BaseHTTPMiddleware

from src.app.core.services import session_gate
from src.shared.auth.supabase_auth import Session, SessionProvider

logger = logging.getLogger(__name__)

SAFE_METHODS = {"GET", "HEAD"}


def extract_access_token(request: Request, cookie_name: str) -> str | None:
    """Read the access token from the session cookie or an Authorization: Bearer header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def resolve_session(provider: SessionProvider, token: str | None) -> Session | None:
    """Look up the session; provider failures count as no session."""
    try:
        return await provider.get_session(token)
    except HTTPError as e:
        logger.warning("Session lookup failed, treating request as signed out: %s", e)
        return None


class SessionGateMiddleware(BaseHTTPMiddleware):
    """
    Redirects signed-out users away from protected views and signed-in users
    away from the auth views. The resolved session is exposed to handlers as
    ``request.state.session``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        request.state.session = None
        if not session_gate.is_gated(path):
            return await call_next(request)

        container = request.app.state.container
        cookie_name = container.config().auth.session_cookie
        token = extract_access_token(request, cookie_name)
        session = await resolve_session(container.session_provider(), token)
        request.state.session = session

        decision = session_gate.evaluate(path, has_session=session is not None)
        if not decision.proceed:
            logger.debug("Redirecting %s %s to %s", request.method, path, decision.redirect_to)
            # 303 turns a redirected form post into a GET of the target view
            status_code = 307 if request.method in SAFE_METHODS else 303
            return RedirectResponse(url=decision.redirect_to, status_code=status_code)

        return await call_next(request)
