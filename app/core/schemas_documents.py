"""Pydantic schemas for versioned documents."""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field

RowId = Union[int, str]


class CurrentDocument(BaseModel):
    """The authoritative row of a document class, or its cold-start default."""
    id: Optional[RowId] = None
    payload: dict[str, Any]
    version: int = Field(default=0, ge=0)
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None


class WriteResult(BaseModel):
    """Outcome of a successful versioned write."""
    id: Optional[RowId] = None
    version: int = Field(..., ge=1)
    payload: dict[str, Any]


class HistoryEntry(BaseModel):
    id: Optional[RowId] = None
    author: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    version: Optional[int] = None
    payload: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Request Schemas
# ============================================================================


class DocumentUpdateRequest(BaseModel):
    """Body for publishing a new document version."""
    payload: Optional[dict[str, Any]] = None
    notes: Optional[str] = None
    expected_version: Optional[int] = Field(
        default=None,
        ge=0,
        description="Reject the write if the current version differs",
    )


class TimelineUpdateRequest(BaseModel):
    """Body for publishing a new update-schedule timeline."""
    timeline: Optional[dict[str, Any]] = None
    notes: Optional[str] = None
    expected_version: Optional[int] = Field(default=None, ge=0)
