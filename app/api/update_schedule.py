"""API endpoints for the update-schedule timeline."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth_middleware import require_admin
from app.core.error_messages import DATABASE_ERRORS, VALIDATION_ERRORS
from app.core.exceptions import PersistenceError, VersionConflictError
from app.core.logging import get_logger
from app.core.schemas_auth import SessionPayload
from app.core.schemas_documents import CurrentDocument, TimelineUpdateRequest
from app.core.timeline import has_validation_errors, validate_timeline
from app.db.versioned_documents import UPDATE_SCHEDULE, VersionedDocumentStore

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/update-schedule", tags=["update_schedule"])


def get_schedule_store() -> VersionedDocumentStore:
    return VersionedDocumentStore(UPDATE_SCHEDULE)


def _timeline_response(document: CurrentDocument) -> dict[str, Any]:
    return {
        **document.payload,
        "id": document.id,
        "version": document.version,
        "updatedBy": document.updated_by,
        "updatedAt": document.updated_at,
    }


@router.get("")
async def get_timeline(
    store: VersionedDocumentStore = Depends(get_schedule_store),
) -> dict[str, Any]:
    """
    Get the active timeline. Public: anyone can read the schedule.

    Raises:
        HTTPException 500: If the timeline cannot be read
    """
    try:
        document = store.read_current()
    except Exception as e:
        logger.exception(f"Failed to fetch timeline: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.SITE_STATE_FETCH,
        )

    return _timeline_response(document)


@router.post("")
async def update_timeline(
    body: TimelineUpdateRequest,
    session: SessionPayload = Depends(require_admin),
    store: VersionedDocumentStore = Depends(get_schedule_store),
) -> dict[str, Any]:
    """
    Publish a new timeline version.

    Raises:
        HTTPException 400: If the timeline is missing or invalid
        HTTPException 409: If expected_version is stale
        HTTPException 500: If the write fails
    """
    if body.timeline is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=VALIDATION_ERRORS.PAYLOAD_REQUIRED,
        )

    errors = validate_timeline(body.timeline)
    if has_validation_errors(errors):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": VALIDATION_ERRORS.TIMELINE_INVALID, "details": errors},
        )

    try:
        result = store.write(
            body.timeline,
            author=session.slug,
            notes=body.notes,
            expected_version=body.expected_version,
        )
    except VersionConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DATABASE_ERRORS.VERSION_CONFLICT,
        )
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.QUESTIONNAIRE_UPDATE_FAILED,
        )

    saved = CurrentDocument(
        id=result.id,
        payload=result.payload,
        version=result.version,
        updated_by=session.slug,
    )
    return {"ok": True, "version": result.version, "timeline": _timeline_response(saved)}
