"""Seed payloads returned before a document has ever been written."""

from datetime import UTC, datetime
from typing import Any

DECK_PERSONA_SLUG = "pre-pitch-deck"


def default_site_payload() -> dict[str, Any]:
    """Site content with only the pitch-deck persona placeholder.

    The deck persona has no PIN until an admin publishes one, so deck logins
    fail closed on a fresh install.
    """
    return {
        "investors": [
            {
                "slug": DECK_PERSONA_SLUG,
                "name": "Pitch Deck Preview",
                "firm": "Baseline",
                "title": "Guest",
                "pin": "",
            }
        ],
    }


def default_bos_payload() -> dict[str, Any]:
    """Business operating system template with editable placeholders."""
    return {
        "northStar": {
            "mission": "",
            "vision": "",
            "principles": [],
            "unfairAdvantages": [],
            "ifNotTrueTest": "",
        },
        "timeHorizons": {
            "tenYear": {
                "purpose": "The world we change",
                "narrative": "",
                "notBelongsHere": "Specific product features, revenue targets, team size.",
            },
            "fiveYear": {
                "purpose": "The company we become",
                "narrative": "",
                "notBelongsHere": "Quarterly metrics, specific partnerships, feature roadmaps.",
            },
            "threeYear": {
                "purpose": "The platform we own",
                "narrative": "",
                "notBelongsHere": "Weekly tasks, hiring plans, specific customer names.",
            },
            "oneYear": {
                "purpose": "The proof we deliver",
                "narrative": "",
                "notBelongsHere": "Long-term vision statements, multi-year projections.",
            },
        },
        "theBet": {
            "categoryOwned": "",
            "dataAsset": "",
            "behaviorsChanged": "",
            "whoFeelsThreatened": "",
            "fullNarrative": "",
        },
        "theProof": {"signals": []},
        "quarterly": {
            "currentQuarter": "Q_ 20__",
            "theme": "Set your quarterly theme here - what's the narrative for this quarter?",
            "primaryLever": (
                "Define the ONE lever that matters most this quarter. "
                "Everything else supports this."
            ),
            "supportingLevers": [],
            "killList": [],
            "successSignal": "",
            "failureSignal": "",
        },
        "experiments": [
            {
                "id": "exp-1",
                "month": "Month 1",
                "hypothesis": "",
                "action": "",
                "signal": "",
                "decision": "pending",
            }
        ],
        "weekly": {
            "currentWeek": "",
            "movedPrimaryLever": "",
            "surprises": "",
            "frictionIncreasing": "",
            "founderDecisionNeeded": "",
        },
        "systemMap": {
            "mermaidDiagram": "graph LR\n    A[Training Tech] --> B[Data Layer]\n    B --> C[Reports]",
            "leverageCompounds": "",
            "fragilityExists": "",
        },
        "updatedAt": datetime.now(UTC).isoformat(),
    }


def default_pitch_deck_payload() -> dict[str, Any]:
    """Pitch deck with a title card and one welcome text slide."""
    return {
        "title": "# Baseline Analytics",
        "tagline": "Data **Redefined.**",
        "displayMode": "masonry",
        "countdown": {
            "targetDate": "2026-03-01T00:00:00-08:00",
            "label": "Launch milestone",
        },
        "slides": [
            {
                "id": "slide-1",
                "type": "text",
                "order": 0,
                "textContent": (
                    "# Welcome to Baseline\n\n"
                    "Building the performance data layer for baseball and softball."
                ),
                "textPosition": "full",
                "size": "medium",
            }
        ],
    }
