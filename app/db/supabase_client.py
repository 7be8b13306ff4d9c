"""Supabase client initialization."""

from functools import lru_cache

from supabase import Client, create_client

from app.core.config import get_settings
from app.core.error_messages import VALIDATION_ERRORS
from app.core.exceptions import ConfigurationError

# PostgREST / Postgres codes meaning the table is not provisioned yet
MISSING_RELATION_CODES = {"42P01", "PGRST205"}


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get Supabase client instance (cached singleton).

    Returns:
        Supabase client configured with service role key

    Raises:
        ConfigurationError: If Supabase credentials are not configured
        RuntimeError: If client initialization fails
    """
    settings = get_settings()
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise ConfigurationError(VALIDATION_ERRORS.SUPABASE_SERVICE_CONFIG_MISSING)

    try:
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
        return client
    except Exception as e:
        raise RuntimeError(f"Failed to initialize Supabase client: {e}") from e


def is_missing_relation_error(error: BaseException) -> bool:
    """True when a store error means the table does not exist."""
    code = getattr(error, "code", None)
    return code in MISSING_RELATION_CODES
