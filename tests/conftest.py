"""
Pytest configuration and shared fixtures
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventbook.core.db import Base, get_db
from eventbook import models  # noqa: F401  registers tables on Base.metadata
from eventbook.services.media_service import MediaService
from main import app

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FAKE_IMAGE_URL = "https://media.example.com/events/poster.png"

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client(db_session):
    """Test client sharing the test session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def uploaded_images(monkeypatch):
    """Replace the media provider; records every upload"""
    calls = []

    def fake_upload(content, filename, content_type="application/octet-stream", folder=None):
        calls.append({"filename": filename, "content_type": content_type, "size": len(content)})
        return FAKE_IMAGE_URL

    monkeypatch.setattr(MediaService, "upload_image", staticmethod(fake_upload))
    return calls

@pytest.fixture
def deleted_images(monkeypatch):
    """Replace image removal; records every removed URL"""
    calls = []

    def fake_delete(url):
        calls.append(url)
        return True

    monkeypatch.setattr(MediaService, "delete_image", staticmethod(fake_delete))
    return calls

@pytest.fixture
def event_data():
    """A complete, not yet normalized event record"""
    return {
        "title": "AI & Future: 2025!",
        "description": "A day of talks on applied machine learning",
        "overview": "Keynotes, panels and hands-on workshops",
        "image": "https://media.example.com/events/ai.png",
        "venue": "Moscone Center",
        "location": "San Francisco, CA",
        "date": "March 3, 2025",
        "time": "9:05 PM",
        "mode": "Online",
        "audience": "Developers",
        "agenda": ["Opening keynote", "Panel: AI in production"],
        "organizer": "AI Guild",
        "tags": ["ai", "ml"],
    }
