"""Investor login tracking database operations."""

from datetime import UTC, datetime
from typing import Any

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


def record_investor_login(investor_slug: str) -> None:
    """
    Record an investor login. Best-effort: failures are logged, not raised.

    Args:
        investor_slug: Slug of the investor who logged in
    """
    try:
        supabase = get_supabase()
        supabase.table("investor_sessions").insert(
            {
                "investor_slug": investor_slug,
                "login_timestamp": datetime.now(UTC).isoformat(),
            }
        ).execute()
    except Exception as e:
        logger.warning(f"Could not record login for investor {investor_slug}: {e}")


def get_session_stats() -> dict[str, dict[str, Any]]:
    """
    Aggregate login stats per investor.

    Returns:
        Mapping of investor slug to ``{"lastLogin", "totalVisits"}``

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table("investor_sessions")
            .select("investor_slug, login_timestamp")
            .order("login_timestamp", desc=True)
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to fetch investor sessions: {e}")
        raise

    stats: dict[str, dict[str, Any]] = {}
    # Rows arrive newest first, so the first row per slug is the last login
    for row in response.data or []:
        slug = row["investor_slug"]
        if slug not in stats:
            stats[slug] = {"lastLogin": row.get("login_timestamp"), "totalVisits": 0}
        stats[slug]["totalVisits"] += 1

    return stats


def delete_investor_sessions(investor_slug: str) -> None:
    """
    Delete all login records for an investor (resets their visit count).

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        supabase.table("investor_sessions").delete().eq("investor_slug", investor_slug).execute()
        logger.info(f"Reset visit count for investor {investor_slug}")
    except Exception as e:
        logger.error(f"Failed to reset visits for investor {investor_slug}: {e}")
        raise
