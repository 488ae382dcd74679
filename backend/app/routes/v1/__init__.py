# backend/app/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import analytics, availability, bookings, time_slots

__all__ = [
    "analytics",
    "availability",
    "bookings",
    "time_slots",
]
