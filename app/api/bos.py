"""API endpoints for the business operating system (BOS) document."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth_middleware import require_admin
from app.core.error_messages import DATABASE_ERRORS, VALIDATION_ERRORS
from app.core.exceptions import PersistenceError, VersionConflictError
from app.core.logging import get_logger
from app.core.schemas_auth import SessionPayload
from app.core.schemas_documents import CurrentDocument, DocumentUpdateRequest
from app.db.versioned_documents import BOS_STATE, VersionedDocumentStore

logger = get_logger(__name__)

router = APIRouter(prefix="/bos", tags=["bos"])


def get_bos_store() -> VersionedDocumentStore:
    return VersionedDocumentStore(BOS_STATE)


@router.get("", response_model=CurrentDocument)
async def get_bos_state(
    session: SessionPayload = Depends(require_admin),
    store: VersionedDocumentStore = Depends(get_bos_store),
) -> CurrentDocument:
    """
    Get the current BOS document.

    Never fails on store errors: the editor falls back to the default
    template so it stays usable while the database is unavailable.
    """
    try:
        return store.read_current()
    except Exception as e:
        logger.error(f"BOS state fetch failed, serving default: {e}")
        return CurrentDocument(payload=BOS_STATE.default_payload(), version=0)


@router.post("")
async def update_bos_state(
    body: DocumentUpdateRequest,
    session: SessionPayload = Depends(require_admin),
    store: VersionedDocumentStore = Depends(get_bos_store),
) -> dict:
    """
    Save a new version of the BOS document.

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
            detail=DATABASE_ERRORS.QUESTIONNAIRE_UPDATE_FAILED,
        )

    return {"success": True, "version": result.version, "payload": result.payload}
