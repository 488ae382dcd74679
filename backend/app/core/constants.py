"""Application-wide constants for the trainer booking platform."""

from __future__ import annotations

API_DESCRIPTION = (
    "Trainer time-slot availability, booking, rescheduling and utilization analytics."
)

# Wire formats
TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

# Display labels used by availability views and dashboard charts
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# Header carrying the pre-validated caller identity
USER_ID_HEADER = "X-User-Id"

# Operations slower than this are logged as warnings
SLOW_OPERATION_SECONDS = 1.0
