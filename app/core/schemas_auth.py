"""Pydantic schemas for sessions and login."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SessionRole(str, Enum):
    """Coarse authorization class carried in a session token."""
    INVESTOR = "investor"
    ADMIN = "admin"
    DECK = "deck"


class SessionPayload(BaseModel):
    """Signed contents of a session token. Never mutated after issuance."""
    slug: str = Field(..., min_length=1)
    role: SessionRole
    exp: int = Field(..., description="Expiry instant, milliseconds since epoch")
    nonce: str


# ============================================================================
# Request / Response Schemas
# ============================================================================


class LoginRequest(BaseModel):
    """Login body. Validation of role/pin presence happens in the route so the
    error text matches the portal's messages."""
    role: Optional[str] = None
    slug: Optional[str] = None
    pin: Optional[str] = None


class LoginResponse(BaseModel):
    slug: str
    role: SessionRole


class SessionResponse(BaseModel):
    slug: str
    role: SessionRole
    exp: int
