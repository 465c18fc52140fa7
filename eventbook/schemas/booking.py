"""
Booking-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class BookingCreate(BaseModel):
    """Schema for creating a booking; shape checks happen in the pre-commit hook"""
    event_id: Optional[str] = None
    email: Optional[str] = None

class BookingResponse(BaseModel):
    """Booking response schema"""
    id: str
    event_id: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
