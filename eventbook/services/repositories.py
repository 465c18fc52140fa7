"""
Repository layer abstracting storage (SQLAlchemy vs Firebase Firestore).

Every create/update runs the record's pre-commit hook first and writes only
the normalized record it returns. A hook error propagates before anything
touches storage.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from firebase_admin import firestore
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventbook.core.config import settings
from eventbook.core.errors import DuplicateSlugError
from eventbook.models import Booking, Event
from eventbook.services.booking_validator import validate_booking
from eventbook.services.changes import ChangeSet
from eventbook.services.event_normalizer import normalize_event
from eventbook.services.firebase_client import get_firestore_client

EVENT_FIELDS = (
    "title", "slug", "description", "overview", "image", "venue", "location",
    "date", "time", "mode", "audience", "agenda", "organizer", "tags",
)
BOOKING_FIELDS = ("event_id", "email")


def use_firestore() -> bool:
    return settings.USE_FIREBASE is True


def _editable(data: Dict[str, Any], fields) -> Dict[str, Any]:
    # slug is always derived, never taken from input
    return {k: v for k, v in data.items() if k in fields and k != "slug"}


def event_to_record(event: Event) -> Dict[str, Any]:
    return {name: getattr(event, name) for name in EVENT_FIELDS}


def _with_id(doc) -> Dict[str, Any]:
    item = doc.to_dict()
    item["id"] = doc.id
    return item


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def list_sql(db: Session) -> List[Event]:
        return db.query(Event).order_by(Event.created_at.desc()).all()

    @staticmethod
    def get_by_id_sql(db: Session, event_id: str) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def get_by_slug_sql(db: Session, slug: str) -> Optional[Event]:
        return db.query(Event).filter(Event.slug == slug).first()

    @staticmethod
    def exists_sql(db: Session, event_id: str) -> bool:
        return db.query(Event.id).filter(Event.id == event_id).first() is not None

    @staticmethod
    def _ensure_unique_slug_sql(db: Session, slug: str, exclude_id: Optional[str] = None) -> None:
        query = db.query(Event.id).filter(Event.slug == slug)
        if exclude_id:
            query = query.filter(Event.id != exclude_id)
        if query.first() is not None:
            raise DuplicateSlugError(slug)

    @staticmethod
    def _commit_sql(db: Session, slug: str) -> None:
        try:
            db.commit()
        except IntegrityError as exc:
            # slug is the only unique column left unchecked by the hook
            db.rollback()
            raise DuplicateSlugError(slug) from exc

    @staticmethod
    def create_sql(db: Session, data: Dict[str, Any]) -> Event:
        record = normalize_event(_editable(data, EVENT_FIELDS), ChangeSet.for_insert())
        EventRepo._ensure_unique_slug_sql(db, record["slug"])

        event = Event(**{name: record.get(name) for name in EVENT_FIELDS})
        db.add(event)
        EventRepo._commit_sql(db, record["slug"])
        db.refresh(event)
        return event

    @staticmethod
    def update_sql(db: Session, event: Event, data: Dict[str, Any]) -> Event:
        before = event_to_record(event)
        after = {**before, **_editable(data, EVENT_FIELDS)}
        changes = ChangeSet.for_update(before, after)
        record = normalize_event(after, changes)
        if record["slug"] != before["slug"]:
            EventRepo._ensure_unique_slug_sql(db, record["slug"], exclude_id=event.id)

        for name in EVENT_FIELDS:
            setattr(event, name, record[name])
        EventRepo._commit_sql(db, record["slug"])
        db.refresh(event)
        return event

    # Firestore shape: collection "events/{auto_id}" document with the fields above
    @staticmethod
    def list_fs() -> List[Dict[str, Any]]:
        fs = get_firestore_client()
        docs = fs.collection("events").order_by("created_at", direction=firestore.Query.DESCENDING).get()
        return [_with_id(d) for d in docs]

    @staticmethod
    def get_by_id_fs(event_id: str) -> Optional[Dict[str, Any]]:
        fs = get_firestore_client()
        doc = fs.collection("events").document(event_id).get()
        return _with_id(doc) if doc.exists else None

    @staticmethod
    def get_by_slug_fs(slug: str) -> Optional[Dict[str, Any]]:
        fs = get_firestore_client()
        docs = fs.collection("events").where("slug", "==", slug).limit(1).get()
        return _with_id(docs[0]) if docs else None

    @staticmethod
    def exists_fs(event_id: str) -> bool:
        fs = get_firestore_client()
        return fs.collection("events").document(event_id).get().exists

    @staticmethod
    def _ensure_unique_slug_fs(slug: str, exclude_id: Optional[str] = None) -> None:
        existing = EventRepo.get_by_slug_fs(slug)
        if existing and existing["id"] != exclude_id:
            raise DuplicateSlugError(slug)

    @staticmethod
    def create_fs(data: Dict[str, Any]) -> Dict[str, Any]:
        record = normalize_event(_editable(data, EVENT_FIELDS), ChangeSet.for_insert())
        EventRepo._ensure_unique_slug_fs(record["slug"])

        fs = get_firestore_client()
        now = datetime.utcnow().isoformat()
        payload = {name: record.get(name) for name in EVENT_FIELDS}
        payload["created_at"] = now
        payload["updated_at"] = now
        doc_ref = fs.collection("events").document()
        doc_ref.set(payload)
        payload["id"] = doc_ref.id
        return payload

    @staticmethod
    def update_fs(event_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        current = EventRepo.get_by_id_fs(event_id)
        if not current:
            return None

        before = {name: current.get(name) for name in EVENT_FIELDS}
        after = {**before, **_editable(data, EVENT_FIELDS)}
        record = normalize_event(after, ChangeSet.for_update(before, after))
        if record["slug"] != before["slug"]:
            EventRepo._ensure_unique_slug_fs(record["slug"], exclude_id=event_id)

        payload = {name: record.get(name) for name in EVENT_FIELDS}
        payload["updated_at"] = datetime.utcnow().isoformat()
        fs = get_firestore_client()
        fs.collection("events").document(event_id).set(payload, merge=True)
        return {**current, **payload}


# -------- Booking repository --------

class BookingRepo:
    @staticmethod
    def get_by_id_sql(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def list_for_event_sql(db: Session, event_id: str) -> List[Booking]:
        return db.query(Booking).filter(Booking.event_id == event_id).order_by(Booking.created_at).all()

    @staticmethod
    def create_sql(db: Session, data: Dict[str, Any]) -> Booking:
        record = validate_booking(
            _editable(data, BOOKING_FIELDS),
            ChangeSet.for_insert(),
            lambda event_id: EventRepo.exists_sql(db, event_id),
        )
        booking = Booking(event_id=record["event_id"], email=record["email"])
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def update_sql(db: Session, booking: Booking, data: Dict[str, Any]) -> Booking:
        before = {"event_id": booking.event_id, "email": booking.email}
        after = {**before, **_editable(data, BOOKING_FIELDS)}
        record = validate_booking(
            after,
            ChangeSet.for_update(before, after),
            lambda event_id: EventRepo.exists_sql(db, event_id),
        )
        booking.event_id = record["event_id"]
        booking.email = record["email"]
        db.commit()
        db.refresh(booking)
        return booking

    # Firestore bookings live in a top-level "bookings" collection
    @staticmethod
    def list_for_event_fs(event_id: str) -> List[Dict[str, Any]]:
        fs = get_firestore_client()
        docs = fs.collection("bookings").where("event_id", "==", event_id).order_by("created_at").get()
        return [_with_id(d) for d in docs]

    @staticmethod
    def create_fs(data: Dict[str, Any]) -> Dict[str, Any]:
        record = validate_booking(_editable(data, BOOKING_FIELDS), ChangeSet.for_insert(), EventRepo.exists_fs)

        fs = get_firestore_client()
        now = datetime.utcnow().isoformat()
        payload = {
            "event_id": record["event_id"],
            "email": record["email"],
            "created_at": now,
            "updated_at": now,
        }
        doc_ref = fs.collection("bookings").document()
        doc_ref.set(payload)
        payload["id"] = doc_ref.id
        return payload

    @staticmethod
    def update_fs(booking_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        fs = get_firestore_client()
        doc = fs.collection("bookings").document(booking_id).get()
        if not doc.exists:
            return None

        current = _with_id(doc)
        before = {name: current.get(name) for name in BOOKING_FIELDS}
        after = {**before, **_editable(data, BOOKING_FIELDS)}
        record = validate_booking(after, ChangeSet.for_update(before, after), EventRepo.exists_fs)

        payload = {name: record[name] for name in BOOKING_FIELDS}
        payload["updated_at"] = datetime.utcnow().isoformat()
        fs.collection("bookings").document(booking_id).set(payload, merge=True)
        return {**current, **payload}
