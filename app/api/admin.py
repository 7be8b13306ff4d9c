"""Admin API endpoints: visit stats and document history."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from app.core.auth_middleware import require_admin
from app.core.error_messages import DATABASE_ERRORS, get_user_friendly_error
from app.core.logging import get_logger
from app.core.schemas_auth import SessionPayload
from app.core.schemas_documents import HistoryEntry
from app.db.investor_sessions import delete_investor_sessions, get_session_stats
from app.db.versioned_documents import get_document_store

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class ResetVisitsRequest(BaseModel):
    """Request body for resetting an investor's visit count."""
    investor_slug: str = Field(..., min_length=1, alias="investorSlug")


@router.get("/session-stats")
async def session_stats(session: SessionPayload = Depends(require_admin)) -> dict:
    """Login count and last login per investor."""
    try:
        stats = get_session_stats()
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.SESSION_STATS_FAILED,
        )
    return {"stats": stats}


@router.post("/reset-visits")
async def reset_visits(
    body: ResetVisitsRequest,
    session: SessionPayload = Depends(require_admin),
) -> dict:
    """Delete an investor's login records."""
    try:
        delete_investor_sessions(body.investor_slug)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.RESET_VISITS_FAILED,
        )
    return {"success": True, "message": f"Visit count reset for {body.investor_slug}"}


@router.get("/history/{document}", response_model=list[HistoryEntry])
async def document_history(
    document: str,
    limit: int = Query(default=20, ge=1, le=100),
    session: SessionPayload = Depends(require_admin),
) -> list[HistoryEntry]:
    """
    Recent published versions of a document class.

    Raises:
        HTTPException 404: If the document class is unknown
        HTTPException 500: If the history cannot be read
    """
    try:
        store = get_document_store(document)
    except KeyError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown document")

    try:
        return store.list_history(limit=limit)
    except Exception as e:
        logger.error(f"Failed to list {document} history: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=get_user_friendly_error(e, DATABASE_ERRORS.GENERIC),
        )
