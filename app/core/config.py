"""Settings for the Investor Hub service, read from the environment or ``.env``."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env may be unreadable in sandboxed deployments; the environment still applies
try:
    load_dotenv()
except (PermissionError, OSError):
    pass

APP_ENVIRONMENTS = ("dev", "test", "staging", "prod")


class Settings(BaseSettings):
    """
    Deployment configuration.

    Secrets are optional here so the app can start and serve public pages;
    the code that needs one raises ``ConfigurationError`` when it is absent.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    SUPABASE_URL: str | None = Field(default=None, description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str | None = Field(
        default=None, description="Supabase service role key"
    )

    SESSION_SECRET: str | None = Field(default=None, description="HMAC key for session tokens")

    APP_ENV: str = Field(default="dev", description="One of dev, test, staging, prod")

    ADMIN_PIN_CHASE: str | None = Field(default=None, description="PIN for chase-admin")
    ADMIN_PIN_SHELDON: str | None = Field(default=None, description="PIN for sheldon-admin")

    LOGIN_RATE_LIMIT_MAX: int = Field(default=5, ge=1, description="Login attempts per window")
    LOGIN_RATE_LIMIT_WINDOW_SECONDS: int = Field(
        default=15 * 60, ge=1, description="Login rate limit window in seconds"
    )

    @field_validator("APP_ENV")
    @classmethod
    def _known_environment(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in APP_ENVIRONMENTS:
            raise ValueError(f"APP_ENV must be one of {', '.join(APP_ENVIRONMENTS)}")
        return value

    @property
    def is_production(self) -> bool:
        """Production turns on the ``Secure`` cookie flag."""
        return self.APP_ENV == "prod"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings; call ``get_settings.cache_clear()`` after changing the environment.

    Raises:
        ValidationError: If an environment variable has an invalid value
    """
    return Settings()
