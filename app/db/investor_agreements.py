"""Investor terms agreement database operations."""

from datetime import UTC, datetime
from typing import Any

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


def get_agreement(investor_slug: str) -> dict[str, Any] | None:
    """
    Get an investor's agreement record.

    Returns:
        Agreement dict, or None if the investor has not agreed

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    response = (
        supabase.table("investor_agreements")
        .select("*")
        .eq("investor_slug", investor_slug)
        .limit(1)
        .execute()
    )
    return response.data[0] if response.data else None


def record_agreement(investor_slug: str) -> tuple[dict[str, Any], bool]:
    """
    Record that an investor agreed to the terms. Idempotent.

    Returns:
        Tuple of (agreement record, already_agreed)

    Raises:
        Exception: If database operation fails
    """
    existing = get_agreement(investor_slug)
    if existing:
        return existing, True

    supabase = get_supabase()
    row = {
        "investor_slug": investor_slug,
        "agreed_at": datetime.now(UTC).isoformat(),
    }

    try:
        response = supabase.table("investor_agreements").insert(row).execute()
    except Exception as e:
        logger.error(f"Failed to record agreement for investor {investor_slug}: {e}")
        raise

    logger.info(f"Recorded agreement for investor {investor_slug}")
    return (response.data[0] if response.data else row), False
