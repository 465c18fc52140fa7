"""
Tests for event image uploads
"""

import os

import pytest

from eventbook.core.config import settings
from eventbook.core.errors import MediaUploadError
from eventbook.services import media_service
from eventbook.services.media_service import MediaService

def test_build_object_name_keeps_extension():
    name = MediaService.build_object_name("Poster.PNG", "events")

    assert name.startswith("events/")
    assert name.endswith(".png")

def test_local_upload_writes_file(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_BACKEND", "local")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "BASE_URL", "http://testserver/")

    url = MediaService.upload_image(b"image-bytes", "poster.jpg", "image/jpeg")

    assert url.startswith("http://testserver/uploads/events/")
    object_name = url.split("/uploads/", 1)[1]
    with open(os.path.join(tmp_path, object_name), "rb") as f:
        assert f.read() == b"image-bytes"

def test_firebase_upload_returns_public_url(monkeypatch):
    uploaded = {}

    class FakeBlob:
        def __init__(self, name):
            self.name = name
            self.public_url = f"https://storage.example.com/bucket/{name}"

        def upload_from_string(self, content, content_type=None):
            uploaded["content"] = content
            uploaded["content_type"] = content_type

        def make_public(self):
            uploaded["public"] = True

    class FakeBucket:
        def blob(self, name):
            return FakeBlob(name)

    monkeypatch.setattr(settings, "MEDIA_BACKEND", "firebase")
    monkeypatch.setattr(media_service, "get_storage_bucket", lambda: FakeBucket())

    url = MediaService.upload_image(b"abc", "poster.png", "image/png", folder="banners")

    assert url.startswith("https://storage.example.com/bucket/banners/")
    assert uploaded == {"content": b"abc", "content_type": "image/png", "public": True}

def test_provider_failure_raises_media_upload_error(monkeypatch):
    def no_bucket():
        raise RuntimeError("Firebase credentials not provided")

    monkeypatch.setattr(settings, "MEDIA_BACKEND", "firebase")
    monkeypatch.setattr(media_service, "get_storage_bucket", no_bucket)

    with pytest.raises(MediaUploadError) as exc_info:
        MediaService.upload_image(b"abc", "poster.png")

    assert "credentials" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, RuntimeError)

def test_local_delete_removes_uploaded_file(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_BACKEND", "local")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "BASE_URL", "http://testserver")

    url = MediaService.upload_image(b"image-bytes", "poster.jpg", "image/jpeg")
    file_path = os.path.join(tmp_path, url.split("/uploads/", 1)[1])

    assert MediaService.delete_image(url) is True
    assert not os.path.exists(file_path)
    assert MediaService.delete_image(url) is False

def test_local_delete_ignores_foreign_url(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_BACKEND", "local")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "BASE_URL", "http://testserver")

    assert MediaService.delete_image("https://cdn.example.com/uploads/events/a.png") is False

def test_firebase_delete_removes_blob(monkeypatch):
    deleted = []

    class FakeBlob:
        def __init__(self, name):
            self.name = name

        def delete(self):
            deleted.append(self.name)

    class FakeBucket:
        name = "eventbook-media"

        def blob(self, name):
            return FakeBlob(name)

    monkeypatch.setattr(settings, "MEDIA_BACKEND", "firebase")
    monkeypatch.setattr(media_service, "get_storage_bucket", lambda: FakeBucket())

    removed = MediaService.delete_image("https://storage.googleapis.com/eventbook-media/events/ab%20c.png")

    assert removed is True
    assert deleted == ["events/ab c.png"]

def test_delete_failure_is_reported_not_raised(monkeypatch):
    def no_bucket():
        raise RuntimeError("Firebase credentials not provided")

    monkeypatch.setattr(settings, "MEDIA_BACKEND", "firebase")
    monkeypatch.setattr(media_service, "get_storage_bucket", no_bucket)

    assert MediaService.delete_image("https://storage.googleapis.com/b/events/a.png") is False
