"""
Database models for the trainer booking platform.

The models are organized by functionality:
- User identity references (trainers, customers, admins)
- Weekly and daily availability
- The time slot ledger
- Bookings
"""

from .availability import DailyAvailability, WeeklyAvailability
from .booking import Booking
from .time_slot import TimeSlot
from .user import User

__all__ = [
    "Booking",
    "DailyAvailability",
    "TimeSlot",
    "User",
    "WeeklyAvailability",
]
