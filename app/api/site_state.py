"""API endpoints for the investor site content document."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth_middleware import require_admin
from app.core.error_messages import DATABASE_ERRORS, VALIDATION_ERRORS
from app.core.exceptions import PersistenceError, VersionConflictError
from app.core.logging import get_logger
from app.core.schemas_auth import SessionPayload
from app.core.schemas_documents import CurrentDocument, DocumentUpdateRequest
from app.db.versioned_documents import SITE_STATE, VersionedDocumentStore

logger = get_logger(__name__)

router = APIRouter()


def get_site_store() -> VersionedDocumentStore:
    return VersionedDocumentStore(SITE_STATE)


@router.get("/site-state", response_model=CurrentDocument)
async def get_site_state(
    store: VersionedDocumentStore = Depends(get_site_store),
) -> CurrentDocument:
    """
    Get the current site content.

    Raises:
        HTTPException 500: If the site document cannot be read
    """
    try:
        return store.read_current()
    except Exception as e:
        logger.exception(f"Site state fetch failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.SITE_STATE_FETCH,
        )


@router.post("/admin/update")
async def publish_site_state(
    body: DocumentUpdateRequest,
    session: SessionPayload = Depends(require_admin),
    store: VersionedDocumentStore = Depends(get_site_store),
) -> dict:
    """
    Publish a new version of the site content.

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
            detail=DATABASE_ERRORS.ADMIN_PUBLISH_FAILED,
        )

    return {"ok": True, "version": result.version}
