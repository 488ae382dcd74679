"""
Clock helpers.

Services take a ``clock`` callable so tests can pin "now". Timestamps are
stored as naive UTC datetimes.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports ``moment``."""

    def _now() -> datetime:
        return moment

    return _now
