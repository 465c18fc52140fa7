"""
Booking model
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey

from eventbook.core.db import Base
from eventbook.models.event import new_id

class Booking(Base):
    __tablename__ = "bookings"
    
    id = Column(String(32), primary_key=True, default=new_id)
    # non-owning reference; deleting an event does not cascade
    event_id = Column(String(32), ForeignKey("events.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
