"""
Pre-commit normalization for Event records

Runs before every insert or update of an event. Validates required fields and
rewrites title, date, time and mode into their canonical stored forms.
"""

import re
from typing import Any, Dict, List

import pandas as pd

from eventbook.core.errors import (
    EmptySequenceFieldError,
    EmptySlugError,
    InvalidDateFormatError,
    InvalidEnumValueError,
    InvalidFieldTypeError,
    InvalidTimeFormatError,
    MissingRequiredFieldError,
)
from eventbook.services.changes import ChangeSet

EVENT_MODES = ("online", "offline", "hybrid")

TEXT_FIELDS = ("title", "description", "overview", "image", "venue", "location", "audience", "organizer")
SEQUENCE_FIELDS = ("agenda", "tags")

# declaration order; the first failing field is reported
FIELD_LABELS = {
    "title": "Event title",
    "description": "Event description",
    "overview": "Event overview",
    "image": "Event image",
    "venue": "Event venue",
    "location": "Event location",
    "date": "Event date",
    "time": "Event time",
    "mode": "Event mode",
    "audience": "Event audience",
    "agenda": "Event agenda",
    "organizer": "Event organizer",
    "tags": "Event tags",
}

TIME_24H = re.compile(r"([0-1]?[0-9]|2[0-3]):([0-5][0-9])")
TIME_12H = re.compile(r"(0?[1-9]|1[0-2]):([0-5][0-9])\s?(AM|PM)", re.IGNORECASE)

# word characters are ASCII only, whitespace is any Unicode space
_SLUG_STRIP = re.compile(r"[^A-Za-z0-9_\s-]")
_SLUG_SPACES = re.compile(r"\s+")
_SLUG_HYPHENS = re.compile(r"-+")


def slugify(title: str) -> str:
    """Derive a lowercase, hyphen-separated slug from a title"""
    slug = title.lower().strip()
    slug = _SLUG_STRIP.sub("", slug)
    slug = _SLUG_SPACES.sub("-", slug)
    slug = _SLUG_HYPHENS.sub("-", slug)
    return slug.strip("-")


def canonicalize_date(value: Any) -> str:
    """Parse a free-form date and return it as YYYY-MM-DD.

    Time-of-day and timezone offset are dropped, the calendar date is kept
    as written.
    """
    text = str(value).strip() if value is not None else ""
    if not text:
        raise InvalidDateFormatError(value)
    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError) as exc:
        raise InvalidDateFormatError(value) from exc
    if pd.isna(parsed):
        raise InvalidDateFormatError(value)
    return parsed.strftime("%Y-%m-%d")


def canonicalize_time(value: Any) -> str:
    """Return a 24-hour HH:MM time from HH:MM or HH:MM AM/PM input"""
    text = str(value).strip() if value is not None else ""

    match = TIME_24H.fullmatch(text)
    if match:
        hours, minutes = match.groups()
        return f"{int(hours):02d}:{minutes}"

    match = TIME_12H.fullmatch(text)
    if match:
        hours = int(match.group(1))
        minutes = match.group(2)
        period = match.group(3).upper()
        if period == "PM" and hours != 12:
            hours += 12
        if period == "AM" and hours == 12:
            hours = 0
        return f"{hours:02d}:{minutes}"

    raise InvalidTimeFormatError(value)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _as_text(name: str, value: Any) -> str:
    if value is None:
        return ""
    if not _is_scalar(value):
        raise InvalidFieldTypeError(name, FIELD_LABELS[name], "text")
    return str(value).strip()


def _as_sequence(name: str, value: Any) -> List[str] | None:
    """Lists and tuples of text pass through, a single string becomes one item"""
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(_is_scalar(item) for item in value):
        raise InvalidFieldTypeError(name, FIELD_LABELS[name], "a list of text")
    return [str(item) for item in value]


def normalize_event(record: Dict[str, Any], changes: ChangeSet) -> Dict[str, Any]:
    """Validate and normalize an event record about to be written.

    Returns a new dict; the input record is left untouched so a rejected
    write never leaks partially normalized values.

    Raises:
        MissingRequiredFieldError: a required field is absent or blank.
        InvalidFieldTypeError: a text field is not a scalar, or agenda/tags is
            not a list of text.
        InvalidEnumValueError: mode is not online, offline or hybrid.
        EmptySequenceFieldError: agenda or tags is empty.
        EmptySlugError: the title has no letters or digits to build a slug from.
        InvalidDateFormatError: date could not be parsed.
        InvalidTimeFormatError: time matches neither accepted shape.
    """
    candidate = dict(record)

    for name in TEXT_FIELDS + ("time",):
        if name in candidate:
            candidate[name] = _as_text(name, candidate[name])
    if candidate.get("mode") is not None:
        candidate["mode"] = _as_text("mode", candidate["mode"]).lower()
    for name in SEQUENCE_FIELDS:
        candidate[name] = _as_sequence(name, candidate.get(name))

    for name, label in FIELD_LABELS.items():
        value = candidate.get(name)
        if name in SEQUENCE_FIELDS:
            if value is None:
                raise MissingRequiredFieldError(name, label)
            if not value:
                raise EmptySequenceFieldError(name)
            continue
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingRequiredFieldError(name, label)
        if name == "mode" and value not in EVENT_MODES:
            raise InvalidEnumValueError("mode", value, EVENT_MODES)

    if changes.touches("title"):
        slug = slugify(candidate["title"])
        if not slug:
            raise EmptySlugError(candidate["title"])
        candidate["slug"] = slug

    if changes.touches("date"):
        candidate["date"] = canonicalize_date(candidate["date"])

    if changes.touches("time"):
        candidate["time"] = canonicalize_time(candidate["time"])

    return candidate
