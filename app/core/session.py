"""
Stateless session tokens.

A token is ``base64url(json(payload)) + "." + base64url(hmac_sha256(payload))``
with padding stripped from both segments. Nothing is stored server-side:
a token stays valid until its ``exp`` passes or ``SESSION_SECRET`` rotates.

Usage:
    from app.core.session import create_session_token, verify_session_token

    token = create_session_token("acme-admin", SessionRole.ADMIN)
    session = verify_session_token(token)  # SessionPayload | None
"""

import base64
import binascii
import hashlib
import hmac
import json
import secrets
import time
from typing import Any, Callable

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.error_messages import VALIDATION_ERRORS
from app.core.exceptions import ConfigurationError
from app.core.logging import get_logger
from app.core.schemas_auth import SessionPayload, SessionRole

logger = get_logger(__name__)

SESSION_COOKIE = "baseline_session"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 24
SESSION_DURATION_MS = SESSION_MAX_AGE_SECONDS * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


def _get_session_secret() -> bytes:
    secret = get_settings().SESSION_SECRET
    if not secret:
        raise ConfigurationError(VALIDATION_ERRORS.SESSION_SECRET_MISSING)
    return secret.encode("utf-8")


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64url_decode(value: str) -> bytes:
    padded = value + "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def encode_payload(payload: dict[str, Any]) -> str:
    """Serialize a payload dict to its URL-safe token segment."""
    return _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))


def sign_payload(encoded_payload: str) -> str:
    """HMAC-SHA256 over the encoded payload segment, base64url without padding."""
    digest = hmac.new(
        _get_session_secret(),
        encoded_payload.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return _b64url_encode(digest)


def safe_compare(a: str, b: str) -> bool:
    """Length-checked constant-time string comparison."""
    a_bytes = a.encode("utf-8")
    b_bytes = b.encode("utf-8")
    if len(a_bytes) != len(b_bytes):
        return False
    return hmac.compare_digest(a_bytes, b_bytes)


def create_session_token(
    slug: str,
    role: SessionRole | str,
    now_ms: Callable[[], int] = _now_ms,
) -> str:
    """
    Issue a signed session token.

    Args:
        slug: Principal identity (investor or admin slug)
        role: One of investor, admin, deck
        now_ms: Clock returning milliseconds since epoch

    Returns:
        Token string ``<payload>.<signature>``

    Raises:
        ValueError: If slug is empty or role is unknown
        ConfigurationError: If SESSION_SECRET is not configured
    """
    if not slug:
        raise ValueError("slug is required")
    role = SessionRole(role)

    payload = {
        "slug": slug,
        "role": role.value,
        "exp": now_ms() + SESSION_DURATION_MS,
        "nonce": secrets.token_hex(16),
    }
    encoded = encode_payload(payload)
    return f"{encoded}.{sign_payload(encoded)}"


def verify_session_token(
    token: str,
    now_ms: Callable[[], int] = _now_ms,
) -> SessionPayload | None:
    """
    Verify a session token.

    Bad input never raises: malformed, tampered and expired tokens all return
    None so callers cannot tell the reasons apart. Only a missing secret
    raises, since that is a deployment error rather than a bad token.

    Args:
        token: Token string from the session cookie
        now_ms: Clock returning milliseconds since epoch

    Returns:
        SessionPayload if valid, None otherwise
    """
    if not token:
        return None

    parts = token.split(".")
    if len(parts) != 2:
        return None
    encoded, signature = parts
    if not encoded or not signature:
        return None

    if not safe_compare(signature, sign_payload(encoded)):
        return None

    try:
        data = json.loads(_b64url_decode(encoded).decode("utf-8"))
        payload = SessionPayload.model_validate(data)
    except (binascii.Error, UnicodeDecodeError, ValueError, ValidationError) as e:
        logger.debug(f"Session payload could not be decoded: {type(e).__name__}")
        return None

    if payload.exp < now_ms():
        return None

    return payload


def _base_cookie_config() -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": get_settings().is_production,
        "samesite": "lax",
        "path": "/",
    }


def build_session_cookie(token: str) -> dict[str, Any]:
    """Keyword arguments for ``Response.set_cookie`` carrying a session token."""
    return {
        "key": SESSION_COOKIE,
        "value": token,
        **_base_cookie_config(),
        "max_age": SESSION_MAX_AGE_SECONDS,
    }


def build_clear_session_cookie() -> dict[str, Any]:
    """Keyword arguments for ``Response.set_cookie`` that expire the session cookie."""
    return {
        "key": SESSION_COOKIE,
        "value": "",
        **_base_cookie_config(),
        "max_age": 0,
    }
