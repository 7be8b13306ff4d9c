"""Update-schedule timeline: defaults, validation, and row mapping.

The timeline is stored column-per-field in ``update_schedule_state`` rather
than as a single JSON payload, so the versioned store uses the row mappers
here to move between the API shape (camelCase) and the table shape.
"""

from datetime import UTC, datetime
from typing import Any

PHASE_TYPES = ("planning", "dev", "test", "launch", "post")

# API key -> table column
TIMELINE_COLUMNS = {
    "timelineStart": "timeline_start",
    "timelineEnd": "timeline_end",
    "timelineMonths": "timeline_months",
    "phases": "phases",
    "milestones": "milestones",
    "title": "title",
    "subtitle": "subtitle",
    "footerText": "footer_text",
    "colors": "colors",
}


def create_default_timeline() -> dict[str, Any]:
    """Default MVP schedule shown until an admin publishes one."""
    return {
        "timelineStart": "2025-12-01",
        "timelineEnd": "2026-06-30",
        "timelineMonths": [
            "Dec 2025", "Jan 2026", "Feb 2026", "Mar 2026", "Apr 2026", "May 2026", "Jun 2026",
        ],
        "phases": [
            _phase("phase-planning", "planning", "Phase 1 – Planning", "Dec 2025",
                   "MVP scope, data models, and facility onboarding architecture.",
                   3, 20, "#6b7280", "#9ca3af"),
            _phase("phase-dev", "dev", "Phase 2 – Build", "Jan – Feb 2026",
                   "Facility OS foundations, ingestion pipeline, investor hub v1.",
                   18, 35, "#4f9edb", "#7cc0ff"),
            _phase("phase-test", "test", "Phase 3 – Validation", "Mar 2026",
                   "Closed pilots, QA, data quality sweeps, investor preview.",
                   48, 20, "#eab308", "#fde047"),
            _phase("phase-launch", "launch", "Phase 4 – Launch", "May 2026",
                   "MVP release, enablement, and investor launch cadence.",
                   61, 15, "#f26c1a", "#faae6b"),
            _phase("phase-post", "post", "Phase 5 – Post-Launch & Phase 2 Prep",
                   "Late May – Jun 2026",
                   "Metrics review, second facility cohort, Phase 2 scope.",
                   72, 15, "#22c55e", "#4ade80"),
        ],
        "milestones": [
            {"id": "m1", "title": "MVP Scope Defined", "date": "2025-12-15", "meta": "Dec 15, 2025"},
            {"id": "m2", "title": "Architecture Finalized", "date": "2025-12-22", "meta": "Dec 22, 2025"},
            {"id": "m3", "title": "UI/UX Complete", "date": "2026-01-10", "meta": "Jan 10, 2026"},
            {"id": "m4", "title": "Core Features Built", "date": "2026-03-01", "meta": "Mar 1, 2026"},
            {"id": "m5", "title": "Feature Freeze", "date": "2026-03-08", "meta": "Mar 8, 2026"},
            {"id": "m6", "title": "Alpha Testing", "date": "2026-03-10", "meta": "Starts Mar 10, 2026"},
            {"id": "m7", "title": "Beta Launch", "date": "2026-04-01", "meta": "Apr 1, 2026"},
            {"id": "m8", "title": "MVP Public Launch", "date": "2026-05-10", "meta": "May 10, 2026"},
            {"id": "m9", "title": "Metrics Review", "date": "2026-05-25", "meta": "Late May 2026"},
            {"id": "m10", "title": "Phase 2 Planning", "date": "2026-06-15", "meta": "June 2026"},
        ],
        "title": "Baseline Analytics – MVP Gantt",
        "subtitle": "MVP build for Facility OS, investor reporting, and internal dashboard infrastructure.",
        "footerText": "Edit dates, text, and bar widths to refresh the roadmap.",
        "colors": {
            "planning": "#6b7280",
            "dev": "#4f9edb",
            "test": "#eab308",
            "launch": "#f26c1a",
            "post": "#22c55e",
        },
    }


def _phase(
    phase_id: str,
    phase_type: str,
    label: str,
    timing: str,
    focus: str,
    start: float,
    width: float,
    color: str,
    light: str,
) -> dict[str, Any]:
    return {
        "id": phase_id,
        "type": phase_type,
        "label": label,
        "timing": timing,
        "focus": focus,
        "startPercent": start,
        "widthPercent": width,
        "color": color,
        "colorGradient": f"linear-gradient(90deg, {color}, {light})",
    }


# =============================================================================
# Validation
# =============================================================================


def parse_date(value: Any) -> datetime | None:
    """Parse an ISO date or datetime; None when missing or invalid."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def validate_phase(phase: dict[str, Any]) -> list[str]:
    """Return error messages for a single phase (empty if valid)."""
    errors: list[str] = []

    if _blank(phase.get("label")):
        errors.append("Phase label is required")
    if _blank(phase.get("timing")):
        errors.append("Phase timing is required")
    if _blank(phase.get("focus")):
        errors.append("Phase focus is required")

    start = _number(phase.get("startPercent"))
    width = _number(phase.get("widthPercent"))
    if start is None or start < 0 or start > 100:
        errors.append("Start position must be between 0-100%")
    if width is None or width <= 0 or width > 100:
        errors.append("Width must be between 1-100%")
    if start is not None and width is not None and start + width > 100:
        errors.append("Phase extends beyond 100% of timeline")

    return errors


def validate_milestone(milestone: dict[str, Any]) -> list[str]:
    """Return error messages for a single milestone (empty if valid)."""
    errors: list[str] = []

    if _blank(milestone.get("title")):
        errors.append("Milestone title is required")
    if not milestone.get("date"):
        errors.append("Milestone date is required")
    elif parse_date(milestone.get("date")) is None:
        errors.append("Invalid milestone date")

    return errors


def validate_timeline(timeline: dict[str, Any]) -> dict[str, list[str]]:
    """
    Validate a whole timeline.

    Returns:
        Mapping of field path (``timeline``, ``title``, ``phases``,
        ``milestones``, ``phase-<i>``, ``milestone-<i>``) to error messages.
        Empty when valid.
    """
    errors: dict[str, list[str]] = {}

    start = parse_date(timeline.get("timelineStart"))
    end = parse_date(timeline.get("timelineEnd"))
    if start is None:
        errors.setdefault("timeline", []).append("Invalid start date")
    if end is None:
        errors.setdefault("timeline", []).append("Invalid end date")
    if start is not None and end is not None and start >= end:
        errors.setdefault("timeline", []).append("End date must be after start date")

    if _blank(timeline.get("title")):
        errors["title"] = ["Title is required"]

    phases = timeline.get("phases") or []
    if not isinstance(phases, list):
        errors["phases"] = ["Phases must be a list"]
        phases = []
    for idx, phase in enumerate(phases):
        phase_errors = validate_phase(phase if isinstance(phase, dict) else {})
        if phase_errors:
            errors[f"phase-{idx}"] = phase_errors

    milestones = timeline.get("milestones") or []
    if not isinstance(milestones, list):
        errors["milestones"] = ["Milestones must be a list"]
        milestones = []
    for idx, milestone in enumerate(milestones):
        milestone_errors = validate_milestone(milestone if isinstance(milestone, dict) else {})
        if milestone_errors:
            errors[f"milestone-{idx}"] = milestone_errors

    return errors


def has_validation_errors(errors: dict[str, list[str]]) -> bool:
    return len(errors) > 0


# =============================================================================
# Row mapping
# =============================================================================


def timeline_to_row(timeline: dict[str, Any]) -> dict[str, Any]:
    """API timeline -> ``update_schedule_state`` columns (metadata excluded)."""
    return {column: timeline.get(key) for key, column in TIMELINE_COLUMNS.items()}


def row_to_timeline(row: dict[str, Any]) -> dict[str, Any]:
    """``update_schedule_state`` row -> API timeline, filling gaps from the default."""
    fallback = create_default_timeline()
    timeline = {key: row.get(column) for key, column in TIMELINE_COLUMNS.items()}

    for key in ("timelineMonths", "phases", "milestones"):
        if not isinstance(timeline[key], list):
            timeline[key] = fallback[key]
    for key in ("title", "colors", "timelineStart", "timelineEnd"):
        if timeline[key] is None:
            timeline[key] = fallback[key]
    timeline["subtitle"] = timeline["subtitle"] or ""
    timeline["footerText"] = timeline["footerText"] or ""

    return timeline
