"""API endpoints for investors: public login list, terms agreement, self-report."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from app.api.site_state import get_site_store
from app.core.auth_middleware import require_investor
from app.core.error_messages import AUTH_ERRORS, DATABASE_ERRORS
from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.core.schemas_auth import SessionPayload
from app.db.investor_agreements import get_agreement, record_agreement
from app.db.versioned_documents import VersionedDocumentStore

logger = get_logger(__name__)

router = APIRouter(tags=["investors"])

# Only these fields ever leave the server on the public list
PUBLIC_INVESTOR_FIELDS = ("slug", "name", "firm", "title")

SELF_REPORT_FIELD = "dickheadCount"


class SelfReportRequest(BaseModel):
    """Request body for an investor reporting against their own counter."""
    investor_slug: str = Field(..., min_length=1, alias="investorSlug")


@router.get("/investors/list")
async def list_investors(
    store: VersionedDocumentStore = Depends(get_site_store),
) -> dict:
    """
    Investor list for the login dropdown. Public, so PINs and personalised
    content are stripped.

    Raises:
        HTTPException 500: If the site document cannot be read
    """
    try:
        investors = store.read_current().payload.get("investors") or []
    except Exception as e:
        logger.exception(f"Investor list fetch failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.SITE_STATE_FETCH,
        )

    return {
        "investors": [
            {field: investor.get(field) for field in PUBLIC_INVESTOR_FIELDS}
            for investor in investors
            if isinstance(investor, dict)
        ]
    }


@router.get("/investor/agree-terms")
async def get_agreement_status(
    session: SessionPayload = Depends(require_investor),
) -> dict:
    """Whether the logged-in investor has agreed to the terms."""
    try:
        agreement = get_agreement(session.slug)
    except Exception as e:
        logger.error(f"Failed to check agreement: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.AGREEMENT_FAILED,
        )

    return {
        "hasAgreed": agreement is not None,
        "agreedAt": agreement.get("agreed_at") if agreement else None,
    }


@router.post("/investor/agree-terms")
async def agree_terms(
    session: SessionPayload = Depends(require_investor),
) -> dict:
    """Record the logged-in investor's agreement. Repeat calls are no-ops."""
    try:
        agreement, already_agreed = record_agreement(session.slug)
    except Exception as e:
        logger.error(f"Failed to record agreement: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.AGREEMENT_FAILED,
        )

    return {
        "success": True,
        "alreadyAgreed": already_agreed,
        "agreedAt": agreement.get("agreed_at"),
    }


@router.post("/investor/self-report")
async def self_report(
    body: SelfReportRequest,
    session: SessionPayload = Depends(require_investor),
    store: VersionedDocumentStore = Depends(get_site_store),
) -> dict:
    """
    Increment the logged-in investor's counter in the site document.

    Raises:
        HTTPException 403: If the body names a different investor
        HTTPException 404: If the investor is not in the site document
        HTTPException 500: If the site document cannot be read or written
    """
    if body.investor_slug != session.slug:
        logger.warning(f"Investor {session.slug} tried to self-report for {body.investor_slug}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=AUTH_ERRORS.SELF_REPORT_OTHER_INVESTOR,
        )

    try:
        current = store.read_current()
    except Exception as e:
        logger.exception(f"Self-report read failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.SITE_STATE_FETCH,
        )

    payload = dict(current.payload)
    investors = []
    new_count = None
    for investor in payload.get("investors") or []:
        if isinstance(investor, dict) and investor.get("slug") == session.slug:
            new_count = (investor.get(SELF_REPORT_FIELD) or 0) + 1
            investor = {**investor, SELF_REPORT_FIELD: new_count}
        investors.append(investor)

    if new_count is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown investor")

    payload["investors"] = investors
    try:
        result = store.write(payload, author=session.slug, notes="Self-report")
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATABASE_ERRORS.QUESTIONNAIRE_UPDATE_FAILED,
        )

    return {"ok": True, "newCount": new_count, "version": result.version}
