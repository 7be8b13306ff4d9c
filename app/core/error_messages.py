"""User-facing error message catalogs.

Routes answer with these strings instead of raw store or crypto errors so
that schema details never reach the browser.
"""

import re


class DATABASE_ERRORS:
    SITE_STATE_FETCH = "We couldn't load the latest investor briefing. Refresh and try again."
    PITCH_DECK_FETCH = "We couldn't load the pitch deck content. Refresh and try again."
    ADMIN_PUBLISH_FAILED = (
        "We couldn't publish your updates right now. Review the fields and try again."
    )
    PITCH_DECK_SAVE_FAILED = (
        "We couldn't save the pitch deck changes right now. Try again shortly."
    )
    QUESTIONNAIRE_UPDATE_FAILED = (
        "We couldn't update the questionnaire data just now. Try again shortly."
    )
    VERSION_CONFLICT = (
        "Someone else published a newer version. Reload the latest content and try again."
    )
    SESSION_STATS_FAILED = "We couldn't load investor visit stats. Try again shortly."
    RESET_VISITS_FAILED = "We couldn't reset that investor's visit count. Try again shortly."
    AGREEMENT_FAILED = "We couldn't record the agreement. Try again shortly."
    GENERIC = "We ran into a database issue. Try again shortly."


class AUTH_ERRORS:
    ADMIN_PIN_INVALID = "We couldn't verify that admin PIN. Double-check the secure code."
    DECK_PIN_INVALID = "We couldn't verify that pitch deck PIN. Double-check the code."
    SESSION_INVALID = "Your session expired or is invalid. Log in again."
    NOT_AUTHENTICATED = "You need to sign in before continuing."
    INVESTOR_CREDENTIALS_INVALID = (
        "Those investor credentials don't match. Check the PIN and try again."
    )
    ADMIN_ACCESS_REQUIRED = "Log in as Chase or Sheldon to publish updates."
    SELF_REPORT_OTHER_INVESTOR = "You can only report for your own investor profile."


class VALIDATION_ERRORS:
    ROLE_AND_PIN_REQUIRED = "Provide both a role and PIN before continuing."
    UNSUPPORTED_ROLE = "That access role isn't supported."
    INVESTOR_SLUG_REQUIRED = "Choose an investor profile before continuing."
    PAYLOAD_REQUIRED = "Include the payload before continuing."
    QUESTIONNAIRE_PARSE_FAILED = (
        "We couldn't read that JSON. Confirm the formatting and try again."
    )
    TIMELINE_INVALID = "Validation failed"
    SUPABASE_SERVICE_CONFIG_MISSING = (
        "Configure SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY before continuing."
    )
    SESSION_SECRET_MISSING = "SESSION_SECRET isn't set. Define it to handle sessions securely."


class NETWORK_ERRORS:
    GENERIC = "We ran into a network issue. Check your connection and try again."
    SESSION_REQUEST_FAILED = "We couldn't start a secure session. Try again."
    SESSION_VERIFICATION_FAILED = (
        "We couldn't verify your access token. Check your connection and try again."
    )


class FILE_UPLOAD_ERRORS:
    UPLOAD_FAILED = "We couldn't upload the file. Try again."


class GENERAL_ERRORS:
    UNKNOWN = "Something went wrong. Try again in a moment."


# Order matters: first match wins
TECHNICAL_ERROR_MATCHERS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"network|fetch|timeout", re.IGNORECASE), NETWORK_ERRORS.GENERIC),
    (re.compile(r"json|syntax|parse", re.IGNORECASE), VALIDATION_ERRORS.QUESTIONNAIRE_PARSE_FAILED),
    (re.compile(r"auth|token|session", re.IGNORECASE), NETWORK_ERRORS.SESSION_VERIFICATION_FAILED),
    (re.compile(r"upload|storage|bucket", re.IGNORECASE), FILE_UPLOAD_ERRORS.UPLOAD_FAILED),
    (re.compile(r"database|relation|table|row|constraint", re.IGNORECASE), DATABASE_ERRORS.GENERIC),
]


def _extract_message(error: object) -> str | None:
    if isinstance(error, str):
        return error.strip() or None
    message = getattr(error, "message", None)
    if isinstance(message, str) and message.strip():
        return message.strip()
    if isinstance(error, BaseException) and str(error).strip():
        return str(error).strip()
    return None


def get_user_friendly_error(error: object, fallback: str = GENERAL_ERRORS.UNKNOWN) -> str:
    """
    Translate an error into a message that is safe to show to end users.

    Plain strings are assumed to already be user-facing and pass through.
    Exceptions are matched against known technical patterns; anything
    unrecognised becomes ``fallback``.
    """
    normalized = _extract_message(error)
    if not normalized:
        return fallback

    if isinstance(error, str):
        return normalized

    for pattern, friendly in TECHNICAL_ERROR_MATCHERS:
        if pattern.search(normalized):
            return friendly

    return fallback
