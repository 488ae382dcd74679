# backend/app/repositories/__init__.py
"""
Repository Pattern Implementation for the trainer booking platform.

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with generic CRUD operations
- IRepository: Interface defining required methods for all repositories
- RepositoryFactory: Factory for creating repository instances
- AvailabilityRepository: Weekly/daily availability rows and leave counts
- TimeSlotRepository: Slot ledger listing and conditional booked/free flips
- BookingRepository: Booking lookups and listings
- AnalyticsRepository: Aggregate queries for utilization reporting

Usage:
    from app.repositories import RepositoryFactory

    # In a service:
    repository = RepositoryFactory.create_time_slot_repository(db)
    slots, total = repository.get_trainer_slots_for_date(trainer_id, day, 1, 10)
"""

from .analytics_repository import AnalyticsRepository
from .availability_repository import AvailabilityRepository
from .base_repository import BaseRepository, IRepository
from .booking_repository import BookingRepository
from .factory import RepositoryFactory
from .time_slot_repository import TimeSlotRepository
from .user_repository import UserRepository

__all__ = [
    "AnalyticsRepository",
    "AvailabilityRepository",
    "BaseRepository",
    "BookingRepository",
    "IRepository",
    "RepositoryFactory",
    "TimeSlotRepository",
    "UserRepository",
]
