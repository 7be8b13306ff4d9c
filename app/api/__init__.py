"""API router for /api endpoints."""

from fastapi import APIRouter

from app.api import admin, auth, bos, investors, pitch_deck, site_state, update_schedule

router = APIRouter()

# Session login / logout
router.include_router(auth.router)

# Versioned documents
router.include_router(site_state.router, tags=["site_state"])
router.include_router(bos.router)
router.include_router(pitch_deck.router)
router.include_router(update_schedule.router)

# Investor-facing and admin utilities
router.include_router(investors.router)
router.include_router(admin.router)
