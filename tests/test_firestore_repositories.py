"""
Tests for the Firestore repository path against an in-memory stand-in client
"""

import uuid

import pytest

from eventbook.core.config import settings
from eventbook.core.errors import (
    DuplicateSlugError,
    EventReferenceNotFoundError,
    InvalidDateFormatError,
)
from eventbook.services import repositories
from eventbook.services.booking_service import BookingService
from eventbook.services.event_service import EventService
from eventbook.services.repositories import BookingRepo, EventRepo


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeQuery:
    def __init__(self, items):
        self._items = list(items)

    def where(self, field, op, value):
        assert op == "=="
        return FakeQuery([(i, d) for i, d in self._items if d.get(field) == value])

    def order_by(self, field, direction="ASCENDING"):
        ordered = sorted(self._items, key=lambda item: item[1].get(field), reverse=direction == "DESCENDING")
        return FakeQuery(ordered)

    def limit(self, count):
        return FakeQuery(self._items[:count])

    def get(self):
        return [FakeSnapshot(i, d) for i, d in self._items]


class FakeDocument:
    def __init__(self, docs, doc_id):
        self._docs = docs
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self.id, self._docs.get(self.id))

    def set(self, data, merge=False):
        if merge and self.id in self._docs:
            self._docs[self.id] = {**self._docs[self.id], **data}
        else:
            self._docs[self.id] = dict(data)


class FakeCollection:
    def __init__(self):
        self.docs = {}

    def document(self, doc_id=None):
        return FakeDocument(self.docs, doc_id or uuid.uuid4().hex)

    def _query(self):
        return FakeQuery(self.docs.items())

    def where(self, field, op, value):
        return self._query().where(field, op, value)

    def order_by(self, field, direction="ASCENDING"):
        return self._query().order_by(field, direction=direction)


class FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def fake_fs(monkeypatch):
    fs = FakeFirestore()
    monkeypatch.setattr(repositories, "get_firestore_client", lambda: fs)
    monkeypatch.setattr(settings, "USE_FIREBASE", True)
    return fs


def test_create_event_document(fake_fs, event_data):
    created = EventRepo.create_fs(event_data)

    stored = fake_fs.collection("events").docs[created["id"]]
    assert stored["slug"] == "ai-future-2025"
    assert stored["date"] == "2025-03-03"
    assert stored["time"] == "21:05"
    assert "created_at" in stored

def test_rejected_event_writes_no_document(fake_fs, event_data):
    event_data["date"] = "not-a-date"

    with pytest.raises(InvalidDateFormatError):
        EventRepo.create_fs(event_data)

    assert fake_fs.collection("events").docs == {}

def test_duplicate_slug_document(fake_fs, event_data):
    EventRepo.create_fs(event_data)

    with pytest.raises(DuplicateSlugError):
        EventRepo.create_fs({**event_data, "title": "AI Future 2025"})

def test_update_event_document(fake_fs, event_data):
    created = EventRepo.create_fs(event_data)

    updated = EventRepo.update_fs(created["id"], {"title": "New Name", "mode": "HYBRID"})

    assert updated["slug"] == "new-name"
    assert updated["mode"] == "hybrid"
    assert fake_fs.collection("events").docs[created["id"]]["slug"] == "new-name"
    assert EventRepo.update_fs("missing", {"title": "x"}) is None

def test_service_lists_documents_newest_first(fake_fs, event_data):
    EventService.create_event(None, event_data)
    EventService.create_event(None, {**event_data, "title": "Later Event"})

    events = EventService.list_events(None)

    assert [e["slug"] for e in events] == ["later-event", "ai-future-2025"]
    assert EventService.get_event_by_slug(None, "later-event")["title"] == "Later Event"

def test_booking_document_requires_existing_event(fake_fs, event_data):
    created = EventRepo.create_fs(event_data)

    with pytest.raises(EventReferenceNotFoundError):
        BookingRepo.create_fs({"event_id": "missing", "email": "jane@example.com"})
    assert fake_fs.collection("bookings").docs == {}

    booking = BookingService.create_booking(None, {"event_id": created["id"], "email": " Jane@Example.com"})

    assert booking["email"] == "jane@example.com"
    assert [b["id"] for b in BookingService.list_bookings_for_event(None, created["id"])] == [booking["id"]]

def test_booking_document_update(fake_fs, event_data):
    created = EventRepo.create_fs(event_data)
    booking = BookingRepo.create_fs({"event_id": created["id"], "email": "jane@example.com"})

    updated = BookingRepo.update_fs(booking["id"], {"email": "JOHN@example.com"})

    assert updated["email"] == "john@example.com"
    assert BookingRepo.update_fs("missing", {"email": "a@b.co"}) is None
