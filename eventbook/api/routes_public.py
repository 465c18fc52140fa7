"""
Public API routes - no authentication required
"""

from fastapi import APIRouter

from eventbook.services.repositories import use_firestore

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "storage": "firestore" if use_firestore() else "sql"}
