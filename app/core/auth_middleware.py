"""Authentication dependencies and page guard for FastAPI."""

from typing import Awaitable, Callable, Optional

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from app.core.admin_users import ADMIN_SLUGS
from app.core.error_messages import AUTH_ERRORS
from app.core.logging import get_logger
from app.core.schemas_auth import SessionPayload, SessionRole
from app.core.session import SESSION_COOKIE, build_clear_session_cookie, verify_session_token

logger = get_logger(__name__)


async def get_current_session(request: Request) -> Optional[SessionPayload]:
    """
    Verify the session cookie on the request.

    Returns None if no valid session is present (for optional auth endpoints).
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return None
    return verify_session_token(token)


async def require_session(
    request: Request,
    session: Optional[SessionPayload] = Depends(get_current_session),
) -> SessionPayload:
    """Require authentication. Raises 401 if not authenticated."""
    if session is None:
        detail = (
            AUTH_ERRORS.SESSION_INVALID
            if request.cookies.get(SESSION_COOKIE)
            else AUTH_ERRORS.NOT_AUTHENTICATED
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
    return session


class RoleChecker:
    """Dependency class for checking the session role."""

    def __init__(self, *roles: SessionRole, detail: Optional[str] = None):
        """
        Args:
            roles: Roles allowed through
            detail: 403 message; defaults to "<role> access required"
        """
        self.roles = roles
        self.detail = detail or f"{' or '.join(r.value for r in roles)} access required"

    async def __call__(self, session: SessionPayload = Depends(require_session)) -> SessionPayload:
        if session.role not in self.roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=self.detail)

        # Admin tokens must also name a known admin
        if session.role == SessionRole.ADMIN and session.slug not in ADMIN_SLUGS:
            logger.warning(f"Admin session for unknown slug {session.slug}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=self.detail)

        return session


# Pre-configured role checkers
require_admin = RoleChecker(SessionRole.ADMIN, detail=AUTH_ERRORS.ADMIN_ACCESS_REQUIRED)
require_investor = RoleChecker(SessionRole.INVESTOR)
require_deck_or_admin = RoleChecker(SessionRole.DECK, SessionRole.ADMIN)


# ============================================================================
# Page guard
# ============================================================================

PROTECTED_PREFIXES: list[tuple[str, tuple[SessionRole, ...]]] = [
    ("/admin", (SessionRole.ADMIN,)),
    ("/pitch-deck", (SessionRole.DECK, SessionRole.ADMIN)),
]


def required_roles(path: str) -> Optional[tuple[SessionRole, ...]]:
    """Roles allowed on a page path, or None for public pages."""
    for prefix, roles in PROTECTED_PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return roles
    return None


async def page_guard(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """
    HTTP middleware that redirects unauthenticated page requests to the portal.

    No cookie redirects to ``/?auth=required``; an invalid session or the
    wrong role redirects to ``/`` and clears the cookie.
    """
    roles = required_roles(request.url.path)
    if roles is None:
        return await call_next(request)

    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return RedirectResponse(url="/?auth=required", status_code=status.HTTP_307_TEMPORARY_REDIRECT)

    session = verify_session_token(token)
    if session is None or session.role not in roles:
        response = RedirectResponse(url="/", status_code=status.HTTP_307_TEMPORARY_REDIRECT)
        response.set_cookie(**build_clear_session_cookie())
        return response

    return await call_next(request)
