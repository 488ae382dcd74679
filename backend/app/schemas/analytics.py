# backend/app/schemas/analytics.py
"""Trainer dashboard analytics responses."""

from datetime import date
from typing import List, Optional

from pydantic import Field

from ..core.enums import Trend
from .base import StandardizedModel


class PeriodSummary(StandardizedModel):
    booked: int
    attended: int
    sessions_completed_percentage: float


class ChartData(StandardizedModel):
    labels: List[str]
    data: List[int]


class BookingStatistics(StandardizedModel):
    total_sessions: int
    trend: Trend
    chart: ChartData


class PeriodAnalytics(StandardizedModel):
    summary: PeriodSummary
    booking_statistics: BookingStatistics


class PopularSlot(StandardizedModel):
    month: str = Field(description="YYYY-MM")
    label: str = Field(description="Hour range, HH:00-HH:00")
    count: int


class NextSessionActions(StandardizedModel):
    can_reschedule: bool
    can_cancel: bool


class NextSession(StandardizedModel):
    booking_id: str
    client_name: str
    date: date
    time: str
    actions: NextSessionActions


class DashboardAnalyticsResponse(StandardizedModel):
    weekly: PeriodAnalytics
    monthly: PeriodAnalytics
    yearly: PeriodAnalytics
    popular_slots: List[PopularSlot]
    next_session: Optional[NextSession] = None
    total_working_hours: float
