"""
Booking API routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventbook.core.db import get_db
from eventbook.core.errors import DomainError
from eventbook.schemas.booking import BookingCreate
from eventbook.services.booking_service import BookingService
from eventbook.utils.responses import success_response, error_response, domain_error_response

router = APIRouter()

@router.post("/bookings")
async def create_booking(payload: BookingCreate, db: Session = Depends(get_db)):
    """Book a spot at an event"""
    try:
        booking = BookingService.create_booking(db, payload.model_dump())
    except DomainError as e:
        return domain_error_response(e)

    return success_response(
        message="Booking created successfully",
        data={"booking": booking},
        status_code=201
    )

@router.put("/bookings/{booking_id}")
async def update_booking(booking_id: str, payload: BookingCreate, db: Session = Depends(get_db)):
    """Update a booking; the event reference is checked again if it changed"""
    changes = payload.model_dump(exclude_none=True)
    try:
        booking = BookingService.update_booking(db, booking_id, changes)
    except DomainError as e:
        return domain_error_response(e)

    if not booking:
        return error_response(message="Booking not found", status_code=404)

    return success_response(
        message="Booking updated successfully",
        data={"booking": booking}
    )
