"""Admin personas. PINs live in settings, never in this module."""

from dataclasses import dataclass

from app.core.config import get_settings
from app.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class AdminPersona:
    slug: str
    name: str
    short_label: str
    title: str
    pin_setting: str


ADMIN_PERSONAS: list[AdminPersona] = [
    AdminPersona(
        slug="chase-admin",
        name="Chase (Admin)",
        short_label="Chase",
        title="Co-Founder",
        pin_setting="ADMIN_PIN_CHASE",
    ),
    AdminPersona(
        slug="sheldon-admin",
        name="Sheldon (Admin)",
        short_label="Sheldon",
        title="Partner",
        pin_setting="ADMIN_PIN_SHELDON",
    ),
]

ADMIN_SLUGS: list[str] = [admin.slug for admin in ADMIN_PERSONAS]


def get_admin_pins() -> dict[str, str]:
    """
    Map of admin slug to PIN.

    Raises:
        ConfigurationError: If any admin PIN is not configured
    """
    settings = get_settings()
    pins: dict[str, str] = {}
    for admin in ADMIN_PERSONAS:
        pin = getattr(settings, admin.pin_setting)
        if not pin:
            raise ConfigurationError(f"{admin.pin_setting} environment variable is required")
        pins[admin.slug] = pin
    return pins
