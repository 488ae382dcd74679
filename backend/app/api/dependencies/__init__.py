# backend/app/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import get_current_customer, get_current_trainer, get_current_user, require_admin
from .authz import require_roles
from .database import get_db
from .services import (
    get_analytics_service,
    get_availability_service,
    get_booking_service,
    get_clock,
    get_leave_policy_service,
    get_slot_ledger_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "get_current_trainer",
    "get_current_customer",
    "require_admin",
    "require_roles",
    # Database
    "get_db",
    # Services
    "get_clock",
    "get_availability_service",
    "get_leave_policy_service",
    "get_slot_ledger_service",
    "get_booking_service",
    "get_analytics_service",
]
