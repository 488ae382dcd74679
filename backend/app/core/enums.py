# backend/app/core/enums.py
"""
Core enums for the trainer booking platform.

This module contains enumeration types used throughout the application
for type safety and consistency.
"""

from enum import Enum


class RoleName(str, Enum):
    """Roles resolved by the identity provider for a user id."""

    ADMIN = "ADMIN"
    TRAINER = "TRAINER"
    CUSTOMER = "CUSTOMER"


class SlotType(str, Enum):
    """Category of a trainer-offered time window. Informational only."""

    PEAK = "PEAK"
    ALTERNATIVE = "ALTERNATIVE"


class AttendanceStatus(str, Enum):
    """Attendance vocabulary accepted by the mark-attended endpoint."""

    ATTENDED = "ATTENDED"
    NOT_ATTENDED = "NOT_ATTENDED"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"
