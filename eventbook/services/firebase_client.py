"""
Firebase initialization and helpers
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any
import base64
import os

import firebase_admin
from firebase_admin import credentials, firestore, storage

from eventbook.core.config import settings


def _load_credentials_info() -> dict[str, Any] | None:
    if settings.FIREBASE_CREDENTIALS_JSON:
        return json.loads(settings.FIREBASE_CREDENTIALS_JSON)
    if settings.FIREBASE_CREDENTIALS_B64:
        decoded = base64.b64decode(settings.FIREBASE_CREDENTIALS_B64).decode("utf-8")
        return json.loads(decoded)
    if settings.FIREBASE_CREDENTIALS_FILE and os.path.exists(settings.FIREBASE_CREDENTIALS_FILE):
        with open(settings.FIREBASE_CREDENTIALS_FILE, "r", encoding="utf-8") as f:
            return json.load(f)
    return None


def ensure_firebase_app() -> None:
    """Initialize the default Firebase app once per process.

    Expects credentials via one of: FIREBASE_CREDENTIALS_JSON, FIREBASE_CREDENTIALS_B64, FIREBASE_CREDENTIALS_FILE.
    """
    if firebase_admin._apps:
        return

    info = _load_credentials_info()
    if not info:
        raise RuntimeError("Firebase credentials not provided. Set FIREBASE_CREDENTIALS_FILE, FIREBASE_CREDENTIALS_JSON, or FIREBASE_CREDENTIALS_B64")

    options = {}
    if settings.FIREBASE_STORAGE_BUCKET:
        options["storageBucket"] = settings.FIREBASE_STORAGE_BUCKET

    cred = credentials.Certificate(info)
    firebase_admin.initialize_app(cred, options)


@lru_cache(maxsize=1)
def get_firestore_client():
    """Return a cached Firestore client if Firebase is enabled."""
    if not settings.USE_FIREBASE:
        return None

    ensure_firebase_app()
    return firestore.client()


def get_storage_bucket(name: str | None = None):
    """Return the Cloud Storage bucket used for event images."""
    ensure_firebase_app()
    return storage.bucket(name or settings.FIREBASE_STORAGE_BUCKET)
