# backend/app/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...core.clock import Clock, utc_now
from ...services.analytics_service import AnalyticsService
from ...services.availability_service import AvailabilityService
from ...services.booking_service import BookingService
from ...services.leave_policy import LeavePolicyService
from ...services.slot_ledger import SlotLedgerService
from .database import get_db

logger = logging.getLogger(__name__)


def get_clock() -> Clock:
    """Source of "now" for services; overridden in tests to pin time."""
    return utc_now


def get_availability_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> AvailabilityService:
    return AvailabilityService(db, clock=clock)


def get_leave_policy_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> LeavePolicyService:
    return LeavePolicyService(db, clock=clock)


def get_slot_ledger_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> SlotLedgerService:
    return SlotLedgerService(db, clock=clock)


def get_booking_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> BookingService:
    """
    Get booking service instance with all dependencies.

    Args:
        db: Database session
        clock: Injectable time source
    """
    return BookingService(db, clock=clock)


def get_analytics_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> AnalyticsService:
    return AnalyticsService(db, clock=clock)
