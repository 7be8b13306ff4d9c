"""API endpoints for the pitch deck document."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth_middleware import require_admin, require_deck_or_admin
from app.core.error_messages import DATABASE_ERRORS, VALIDATION_ERRORS
from app.core.exceptions import PersistenceError, VersionConflictError
from app.core.logging import get_logger
from app.core.schemas_auth import SessionPayload
from app.core.schemas_documents import CurrentDocument, DocumentUpdateRequest
from app.db.versioned_documents import PITCH_DECK, VersionedDocumentStore, get_document_store

logger = get_logger(__name__)

router = APIRouter(prefix="/pitch-deck", tags=["pitch_deck"])


def get_pitch_deck_store() -> VersionedDocumentStore:
    return get_document_store(PITCH_DECK.name)


@router.get("", response_model=CurrentDocument)
async def get_pitch_deck(
    session: SessionPayload = Depends(require_deck_or_admin),
    store: VersionedDocumentStore = Depends(get_pitch_deck_store),
) -> CurrentDocument:
    """
    Get the current pitch deck content for deck viewers and admins.

    Raises:
        HTTPException 500: If the pitch deck cannot be read
    """
    try:
        return store.read_current()
    except Exception as e:
        logger.exception(f"Pitch deck fetch failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.PITCH_DECK_FETCH,
        )


@router.post("")
async def update_pitch_deck(
    body: DocumentUpdateRequest,
    session: SessionPayload = Depends(require_admin),
    store: VersionedDocumentStore = Depends(get_pitch_deck_store),
) -> dict:
    """
    Save a new version of the pitch deck.

    Raises:
        HTTPException 400: If the payload is missing
        HTTPException 409: If expected_version is stale
        HTTPException 500: If the write fails
    """
    if body.payload is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=VALIDATION_ERRORS.PAYLOAD_REQUIRED,
        )

    try:
        result = store.write(
            body.payload,
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
            detail=DATABASE_ERRORS.PITCH_DECK_SAVE_FAILED,
        )

    return {"ok": True, "version": result.version}
