"""
Event catalog service: picks the storage backend and serializes results
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from eventbook.core.errors import ValidationError
from eventbook.schemas.event import EventResponse
from eventbook.services.repositories import EventRepo, use_firestore

logger = logging.getLogger(__name__)

class EventService:
    """Service for event operations"""
    
    @staticmethod
    def serialize(event: Any) -> Dict[str, Any]:
        return EventResponse.model_validate(event).model_dump(mode="json")
    
    @staticmethod
    def list_events(db: Session) -> List[Dict[str, Any]]:
        """Return all events, newest first"""
        events = EventRepo.list_fs() if use_firestore() else EventRepo.list_sql(db)
        return [EventService.serialize(e) for e in events]
    
    @staticmethod
    def get_event_by_slug(db: Session, slug: str) -> Optional[Dict[str, Any]]:
        event = EventRepo.get_by_slug_fs(slug) if use_firestore() else EventRepo.get_by_slug_sql(db, slug)
        return EventService.serialize(event) if event else None
    
    @staticmethod
    def create_event(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize and persist a new event"""
        try:
            event = EventRepo.create_fs(data) if use_firestore() else EventRepo.create_sql(db, data)
        except ValidationError as e:
            logger.warning(f"Event rejected: {e}")
            raise
        
        created = EventService.serialize(event)
        logger.info(f"Event created: {created['slug']} ({created['id']})")
        return created
    
    @staticmethod
    def update_event(db: Session, event_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a whole-document update; the pre-commit hook runs again"""
        if use_firestore():
            event = EventRepo.update_fs(event_id, data)
        else:
            current = EventRepo.get_by_id_sql(db, event_id)
            event = EventRepo.update_sql(db, current, data) if current else None
        
        if event is None:
            return None
        return EventService.serialize(event)
