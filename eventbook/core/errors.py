"""
Domain errors raised by the pre-commit hooks and the media service
"""

from enum import Enum
from typing import Any, Iterable, Optional


class ErrorCode(Enum):
    """Domain error codes exposed to API clients"""

    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    EMPTY_SEQUENCE_FIELD = "EMPTY_SEQUENCE_FIELD"
    INVALID_FIELD_TYPE = "INVALID_FIELD_TYPE"
    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"
    INVALID_TIME_FORMAT = "INVALID_TIME_FORMAT"
    INVALID_EMAIL_SHAPE = "INVALID_EMAIL_SHAPE"
    EMPTY_SLUG = "EMPTY_SLUG"
    DUPLICATE_SLUG = "DUPLICATE_SLUG"
    EVENT_REFERENCE_NOT_FOUND = "EVENT_REFERENCE_NOT_FOUND"
    EVENT_REFERENCE_CHECK_FAILED = "EVENT_REFERENCE_CHECK_FAILED"
    MEDIA_UPLOAD_FAILED = "MEDIA_UPLOAD_FAILED"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def details(self) -> Optional[dict[str, Any]]:
        return {"field": self.field} if self.field else None


class ValidationError(DomainError):
    """A record failed field validation and must not be written."""


class MissingRequiredFieldError(ValidationError):
    code = ErrorCode.MISSING_REQUIRED_FIELD

    def __init__(self, field: str, label: Optional[str] = None) -> None:
        super().__init__(f"{label or field} is required", field=field)


class InvalidEnumValueError(ValidationError):
    code = ErrorCode.INVALID_ENUM_VALUE

    def __init__(self, field: str, value: Any, allowed: Iterable[str]) -> None:
        self.value = value
        self.allowed = tuple(allowed)
        choices = ", ".join(self.allowed[:-1]) + f", or {self.allowed[-1]}"
        super().__init__(f"{field.capitalize()} must be {choices}", field=field)


class EmptySequenceFieldError(ValidationError):
    code = ErrorCode.EMPTY_SEQUENCE_FIELD

    def __init__(self, field: str) -> None:
        super().__init__(f"{field.capitalize()} must contain at least one item", field=field)


class InvalidFieldTypeError(ValidationError):
    code = ErrorCode.INVALID_FIELD_TYPE

    def __init__(self, field: str, label: str, expected: str) -> None:
        self.expected = expected
        super().__init__(f"{label} must be {expected}", field=field)


class InvalidDateFormatError(ValidationError):
    code = ErrorCode.INVALID_DATE_FORMAT

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__("Invalid date format. Please provide a valid date.", field="date")


class InvalidTimeFormatError(ValidationError):
    code = ErrorCode.INVALID_TIME_FORMAT

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__("Invalid time format. Use HH:MM (24-hour) or HH:MM AM/PM.", field="time")


class InvalidEmailShapeError(ValidationError):
    code = ErrorCode.INVALID_EMAIL_SHAPE

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__("Please provide a valid email address", field="email")


class EmptySlugError(ValidationError):
    code = ErrorCode.EMPTY_SLUG

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__("Event title must contain at least one letter or digit", field="title")


class DuplicateSlugError(ValidationError):
    code = ErrorCode.DUPLICATE_SLUG

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"An event with slug '{slug}' already exists", field="slug")


class EventReferenceNotFoundError(DomainError):
    """Raised when a booking points at an event that does not exist."""

    code = ErrorCode.EVENT_REFERENCE_NOT_FOUND

    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        super().__init__("Referenced event does not exist", field="event_id")


class EventReferenceCheckFailedError(DomainError):
    """Raised when the event existence lookup itself fails."""

    code = ErrorCode.EVENT_REFERENCE_CHECK_FAILED

    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        super().__init__("Failed to validate event reference", field="event_id")


class MediaUploadError(DomainError):
    """Raised when the image could not be stored by the media provider."""

    code = ErrorCode.MEDIA_UPLOAD_FAILED

    def __init__(self, message: str = "Image upload failed") -> None:
        super().__init__(message, field="image")
