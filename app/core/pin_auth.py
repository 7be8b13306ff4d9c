"""PIN checks that turn a login attempt into a (slug, role) pair."""

from typing import Any

from app.core.admin_users import get_admin_pins
from app.core.defaults import DECK_PERSONA_SLUG, default_site_payload
from app.core.logging import get_logger
from app.core.schemas_auth import SessionRole
from app.core.session import safe_compare
from app.db.versioned_documents import SITE_STATE, VersionedDocumentStore

logger = get_logger(__name__)


def load_investor_personas(store: VersionedDocumentStore | None = None) -> list[dict[str, Any]]:
    """Investor personas from the current site document.

    Falls back to the default personas when the store is unreachable so the
    deck login form keeps working during an outage.
    """
    store = store or VersionedDocumentStore(SITE_STATE)
    try:
        investors = store.read_current().payload.get("investors")
    except Exception as e:
        logger.error(f"Failed to load investors for auth: {e}")
        investors = None

    if isinstance(investors, list):
        return investors
    return default_site_payload()["investors"]


def _pin_matches(expected: Any, supplied: str) -> bool:
    if not isinstance(expected, str) or not expected:
        return False
    return safe_compare(expected, supplied)


def _find_persona(investors: list[dict[str, Any]], slug: str) -> dict[str, Any] | None:
    return next(
        (inv for inv in investors if isinstance(inv, dict) and inv.get("slug") == slug),
        None,
    )


def authenticate_admin(pin: str) -> str | None:
    """Admin slug whose PIN matches, or None."""
    for slug, admin_pin in get_admin_pins().items():
        if safe_compare(admin_pin, pin):
            return slug
    return None


def authenticate_deck(pin: str, investors: list[dict[str, Any]]) -> str | None:
    """Deck persona slug if the PIN matches, or None."""
    persona = _find_persona(investors, DECK_PERSONA_SLUG) or _find_persona(
        default_site_payload()["investors"], DECK_PERSONA_SLUG
    )
    if persona and _pin_matches(persona.get("pin"), pin):
        return persona["slug"]
    return None


def authenticate_investor(slug: str, pin: str, investors: list[dict[str, Any]]) -> str | None:
    """Investor slug if the persona exists and the PIN matches, or None."""
    persona = _find_persona(investors, slug)
    if persona and _pin_matches(persona.get("pin"), pin):
        return persona["slug"]
    return None


def authenticate(
    role: SessionRole,
    pin: str,
    slug: str | None = None,
    store: VersionedDocumentStore | None = None,
) -> tuple[str, SessionRole] | None:
    """
    Resolve a login attempt to the principal it identifies.

    Args:
        role: Requested role
        pin: Supplied PIN
        slug: Investor slug (investor role only)
        store: Site document store, for tests

    Returns:
        (slug, role) on success, None on a bad PIN or unknown persona

    Raises:
        ConfigurationError: If admin PINs are not configured
    """
    if role == SessionRole.ADMIN:
        admin_slug = authenticate_admin(pin)
        return (admin_slug, role) if admin_slug else None

    investors = load_investor_personas(store)

    if role == SessionRole.DECK:
        deck_slug = authenticate_deck(pin, investors)
        return (deck_slug, role) if deck_slug else None

    if not slug:
        return None
    investor_slug = authenticate_investor(slug, pin, investors)
    return (investor_slug, role) if investor_slug else None
