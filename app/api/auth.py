"""Session API endpoints: log in with a PIN, inspect, log out."""

import math
import time

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from app.core.error_messages import AUTH_ERRORS, NETWORK_ERRORS, VALIDATION_ERRORS
from app.core.exceptions import ConfigurationError
from app.core.logging import get_logger
from app.core.pin_auth import authenticate
from app.core.rate_limiter import get_client_ip, get_login_rate_limiter
from app.core.schemas_auth import LoginRequest, LoginResponse, SessionResponse, SessionRole
from app.core.session import (
    SESSION_COOKIE,
    build_clear_session_cookie,
    build_session_cookie,
    create_session_token,
    verify_session_token,
)
from app.db.investor_sessions import record_investor_login

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_PIN_MESSAGES = {
    SessionRole.ADMIN: AUTH_ERRORS.ADMIN_PIN_INVALID,
    SessionRole.DECK: AUTH_ERRORS.DECK_PIN_INVALID,
    SessionRole.INVESTOR: AUTH_ERRORS.INVESTOR_CREDENTIALS_INVALID,
}


@router.get("/session", response_model=SessionResponse)
async def get_session(request: Request):
    """Return the current session, clearing the cookie if it no longer verifies."""
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AUTH_ERRORS.NOT_AUTHENTICATED,
        )

    session = verify_session_token(token)
    if session is None:
        response = JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": AUTH_ERRORS.SESSION_INVALID},
        )
        response.set_cookie(**build_clear_session_cookie())
        return response

    return SessionResponse(slug=session.slug, role=session.role, exp=session.exp)


def _validate_login(body: LoginRequest) -> str | None:
    if not body.role or not body.pin:
        return VALIDATION_ERRORS.ROLE_AND_PIN_REQUIRED
    if body.role not in {role.value for role in SessionRole}:
        return VALIDATION_ERRORS.UNSUPPORTED_ROLE
    if body.role == SessionRole.INVESTOR.value and not body.slug:
        return VALIDATION_ERRORS.INVESTOR_SLUG_REQUIRED
    return None


@router.post("/session", response_model=LoginResponse)
async def login(body: LoginRequest, request: Request, response: Response) -> LoginResponse:
    """
    Exchange a role + PIN for a session cookie.

    Rate limited per client IP. Investor logins are recorded for visit stats.

    Raises:
        HTTPException 429: Too many attempts from this client
        HTTPException 400: Missing role/PIN/slug or unsupported role
        HTTPException 401: PIN does not match
        HTTPException 500: Session could not be issued
    """
    rate_limit = get_login_rate_limiter().check_limit(get_client_ip(request.headers))
    if not rate_limit.success:
        retry_after = max(0, math.ceil((rate_limit.reset_at - time.time() * 1000) / 1000))
        minutes = math.ceil(retry_after / 60)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=(
                f"Too many login attempts. Please try again in {minutes} "
                f"minute{'s' if minutes != 1 else ''}."
            ),
            headers={**rate_limit.headers(), "Retry-After": str(retry_after)},
        )

    validation_message = _validate_login(body)
    if validation_message:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=validation_message)

    role = SessionRole(body.role)

    try:
        principal = authenticate(role, body.pin, slug=body.slug)
        if principal is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_PIN_MESSAGES[role],
            )

        slug, role = principal
        token = create_session_token(slug, role)
    except ConfigurationError as e:
        logger.error(f"Session POST failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=NETWORK_ERRORS.SESSION_REQUEST_FAILED,
        )

    if role == SessionRole.INVESTOR:
        record_investor_login(slug)

    logger.info(f"Issued {role.value} session for {slug}")
    response.set_cookie(**build_session_cookie(token))
    return LoginResponse(slug=slug, role=role)


@router.delete("/session")
async def logout(response: Response) -> dict:
    """Clear the session cookie. Tokens are stateless, so nothing is revoked."""
    response.set_cookie(**build_clear_session_cookie())
    return {"ok": True}
