"""
Booking service
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from eventbook.core.errors import DomainError
from eventbook.schemas.booking import BookingResponse
from eventbook.services.repositories import BookingRepo, use_firestore

logger = logging.getLogger(__name__)

class BookingService:
    """Service for booking operations"""
    
    @staticmethod
    def serialize(booking: Any) -> Dict[str, Any]:
        return BookingResponse.model_validate(booking).model_dump(mode="json")
    
    @staticmethod
    def create_booking(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate the event reference and persist a booking"""
        try:
            booking = BookingRepo.create_fs(data) if use_firestore() else BookingRepo.create_sql(db, data)
        except DomainError as e:
            logger.warning(f"Booking rejected: {e}")
            raise
        
        created = BookingService.serialize(booking)
        logger.info(f"Booking {created['id']} created for event {created['event_id']}")
        return created
    
    @staticmethod
    def update_booking(db: Session, booking_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if use_firestore():
            booking = BookingRepo.update_fs(booking_id, data)
        else:
            current = BookingRepo.get_by_id_sql(db, booking_id)
            booking = BookingRepo.update_sql(db, current, data) if current else None
        
        return BookingService.serialize(booking) if booking else None
    
    @staticmethod
    def list_bookings_for_event(db: Session, event_id: str) -> List[Dict[str, Any]]:
        if use_firestore():
            bookings = BookingRepo.list_for_event_fs(event_id)
        else:
            bookings = BookingRepo.list_for_event_sql(db, event_id)
        return [BookingService.serialize(b) for b in bookings]
