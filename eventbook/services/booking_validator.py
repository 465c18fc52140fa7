"""
Pre-commit validation for Booking records
"""

import logging
import re
from typing import Any, Callable, Dict

from eventbook.core.errors import (
    EventReferenceCheckFailedError,
    EventReferenceNotFoundError,
    InvalidEmailShapeError,
    MissingRequiredFieldError,
)
from eventbook.services.changes import ChangeSet

logger = logging.getLogger(__name__)

EMAIL_SHAPE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def normalize_email(value: Any) -> str:
    """Trim and lowercase an email, rejecting anything not shaped local@domain.tld"""
    if value is None or not str(value).strip():
        raise MissingRequiredFieldError("email", "Email")
    email = str(value).strip().lower()
    if not EMAIL_SHAPE.fullmatch(email):
        raise InvalidEmailShapeError(value)
    return email


def ensure_event_exists(event_id: str, event_exists: Callable[[str], bool]) -> None:
    """Fail unless event_exists reports the referenced event.

    A lookup that raises is reported as EventReferenceCheckFailedError, kept
    apart from a lookup that answers "no".
    """
    try:
        found = event_exists(event_id)
    except Exception as exc:
        logger.warning(f"Event reference lookup failed for {event_id}: {exc}")
        raise EventReferenceCheckFailedError(event_id) from exc

    if not found:
        raise EventReferenceNotFoundError(event_id)


def validate_booking(
    record: Dict[str, Any],
    changes: ChangeSet,
    event_exists: Callable[[str], bool],
) -> Dict[str, Any]:
    """Validate a booking record about to be written and return the normalized copy.

    The existence check is advisory: an event deleted between this check and
    the write still leaves an orphaned booking. Callers that need a stronger
    guarantee must serialize the conflicting writes themselves.
    """
    candidate = dict(record)

    event_id = candidate.get("event_id")
    if event_id is None or not str(event_id).strip():
        raise MissingRequiredFieldError("event_id", "Event ID")
    candidate["event_id"] = str(event_id).strip()

    candidate["email"] = normalize_email(candidate.get("email"))

    if changes.touches("event_id"):
        ensure_event_exists(candidate["event_id"], event_exists)

    return candidate
