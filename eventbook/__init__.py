"""
Event booking backend: event catalog, image upload and bookings
"""

__version__ = "1.0.0"
