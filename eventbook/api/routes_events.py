"""
Event API routes
"""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from eventbook.core.config import settings
from eventbook.core.db import get_db
from eventbook.core.errors import DomainError
from eventbook.services.booking_service import BookingService
from eventbook.services.event_service import EventService
from eventbook.services.media_service import MediaService
from eventbook.utils.responses import success_response, error_response, domain_error_response

logger = logging.getLogger(__name__)

router = APIRouter()

SEQUENCE_FIELDS = ("agenda", "tags")


def parse_sequence_field(values: list) -> list:
    """Repeated form fields, or a single JSON array string"""
    texts = [v for v in values if isinstance(v, str)]
    if len(texts) == 1 and texts[0].strip().startswith("["):
        parsed = json.loads(texts[0])
        if not isinstance(parsed, list):
            raise ValueError("Expected a JSON array")
        return parsed
    return texts


def form_to_event_data(form) -> Dict[str, Any]:
    """Flatten a multipart form into an event record, leaving out the image file"""
    data: Dict[str, Any] = {}
    for key in form.keys():
        if key == "image":
            continue
        if key in SEQUENCE_FIELDS:
            data[key] = parse_sequence_field(form.getlist(key))
            continue
        value = form.get(key)
        if isinstance(value, str):
            data[key] = value
    return data


@router.get("/events")
async def list_events(db: Session = Depends(get_db)):
    """List all events, newest first"""
    try:
        events = EventService.list_events(db)
    except Exception as e:
        logger.exception("Failed to fetch events")
        return error_response(
            message="Failed to fetch events",
            details=str(e),
            status_code=500
        )

    return success_response(
        message="Events fetched successfully",
        data={"events": events}
    )

@router.post("/events")
async def create_event(request: Request, db: Session = Depends(get_db)):
    """Create an event from a multipart form with an image upload"""
    try:
        form = await request.form()
        data = form_to_event_data(form)
    except ValueError as e:
        return error_response(
            message="Invalid form data",
            details=str(e),
            status_code=400
        )

    file = form.get("image")
    if not isinstance(file, UploadFile) or not file.filename:
        return error_response(message="Image file is required", status_code=400)

    if not file.filename.lower().endswith(MediaService.ALLOWED_EXTENSIONS):
        return error_response(
            message=f"Invalid image format. Allowed: {', '.join(MediaService.ALLOWED_EXTENSIONS)}",
            status_code=400
        )

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        return error_response(
            message=f"Image exceeds maximum size of {settings.MAX_UPLOAD_SIZE} bytes",
            status_code=400
        )

    try:
        data["image"] = MediaService.upload_image(
            content=content,
            filename=file.filename,
            content_type=file.content_type or "application/octet-stream"
        )
    except DomainError as e:
        return domain_error_response(e)

    # a rejected event must not leave its image behind
    try:
        event = EventService.create_event(db, data)
    except DomainError as e:
        MediaService.delete_image(data["image"])
        return domain_error_response(e)
    except Exception as e:
        MediaService.delete_image(data["image"])
        logger.exception("Event creation failed")
        return error_response(
            message="Event creation failed",
            details=str(e),
            status_code=500
        )

    return success_response(
        message="Event created successfully",
        data={"event": event},
        status_code=201
    )

@router.get("/events/{slug}")
async def get_event(slug: str, db: Session = Depends(get_db)):
    """Get a single event by slug"""
    event = EventService.get_event_by_slug(db, slug)
    if not event:
        return error_response(message="Event not found", status_code=404)

    return success_response(
        message="Event fetched successfully",
        data={"event": event}
    )

@router.put("/events/{event_id}")
async def update_event(
    event_id: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """Replace event fields; slug, date and time are normalized again"""
    try:
        event = EventService.update_event(db, event_id, payload)
    except DomainError as e:
        return domain_error_response(e)
    except Exception as e:
        logger.exception(f"Event update failed for {event_id}")
        return error_response(
            message="Event update failed",
            details=str(e),
            status_code=500
        )

    if not event:
        return error_response(message="Event not found", status_code=404)

    return success_response(
        message="Event updated successfully",
        data={"event": event}
    )

@router.get("/events/{slug}/bookings")
async def list_event_bookings(slug: str, db: Session = Depends(get_db)):
    """List bookings made against an event"""
    event = EventService.get_event_by_slug(db, slug)
    if not event:
        return error_response(message="Event not found", status_code=404)

    bookings = BookingService.list_bookings_for_event(db, event["id"])
    return success_response(
        message="Bookings fetched successfully",
        data={"bookings": bookings}
    )
