# backend/app/schemas/__init__.py
"""
Pydantic schemas for the trainer booking platform.

Request models forbid unknown fields; every wire payload uses camelCase aliases.
"""

from .analytics import (
    BookingStatistics,
    ChartData,
    DashboardAnalyticsResponse,
    NextSession,
    NextSessionActions,
    PeriodAnalytics,
    PeriodSummary,
    PopularSlot,
)
from .availability import (
    AvailabilityUpdate,
    DailyAvailabilityView,
    LeaveEligibility,
    SlotRangeIn,
    SlotView,
)
from .base_responses import HealthResponse, PaginationMeta
from .booking import (
    AccoladesUpdate,
    AttendanceUpdate,
    BookingCreate,
    BookingDetailResponse,
    BookingPage,
    BookingResponse,
    RescheduleRequest,
    TimeSlotSummary,
    UserSummary,
)
from .time_slot import TimeSlotCreate, TimeSlotPage, TimeSlotResponse

__all__ = [
    "AccoladesUpdate",
    "AttendanceUpdate",
    "AvailabilityUpdate",
    "BookingCreate",
    "BookingDetailResponse",
    "BookingPage",
    "BookingResponse",
    "BookingStatistics",
    "ChartData",
    "DailyAvailabilityView",
    "DashboardAnalyticsResponse",
    "HealthResponse",
    "LeaveEligibility",
    "NextSession",
    "NextSessionActions",
    "PaginationMeta",
    "PeriodAnalytics",
    "PeriodSummary",
    "PopularSlot",
    "RescheduleRequest",
    "SlotRangeIn",
    "SlotView",
    "TimeSlotCreate",
    "TimeSlotPage",
    "TimeSlotResponse",
    "TimeSlotSummary",
    "UserSummary",
]
