"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

class EventResponse(BaseModel):
    """Event as returned by the API"""
    id: str
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: List[str]
    organizer: str
    tags: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
