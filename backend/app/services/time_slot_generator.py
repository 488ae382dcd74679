# backend/app/services/time_slot_generator.py
"""
Time slot generation.

Turns raw ``HH:MM`` ranges for one calendar date into slot rows ready to
persist. Pure: nothing here touches the database, so availability writes and
the admin scheduling flow share the same validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from ..core.constants import TIME_PATTERN
from ..core.enums import SlotType
from ..core.exceptions import InvalidSlotException
from ..utils.date_ranges import combine

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(TIME_PATTERN)


@dataclass(frozen=True)
class SlotRange:
    start: str
    end: str


@dataclass(frozen=True)
class GeneratedSlot:
    trainer_id: str
    date: date
    start_time: datetime
    end_time: datetime
    slot_type: str
    duration_minutes: int
    is_booked: bool = False

    def as_row(self, **extra: Any) -> Dict[str, Any]:
        """Column values for a TimeSlot insert, merged with ``extra``."""
        row: Dict[str, Any] = {
            "trainer_id": self.trainer_id,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "slot_type": self.slot_type,
            "duration_minutes": self.duration_minutes,
            "is_booked": self.is_booked,
        }
        row.update(extra)
        return row


def build_slot(
    trainer_id: str, day: date, start: str, end: str, slot_type: SlotType | str
) -> GeneratedSlot:
    """
    Build one slot for ``day`` from ``start``/``end`` clock times.

    Raises:
        InvalidSlotException: malformed time or end not after start
    """
    for value in (start, end):
        if not isinstance(value, str) or not _TIME_RE.match(value):
            raise InvalidSlotException(
                str(start), str(end), reason=f"Invalid time {value!r}, expected HH:MM (24h)"
            )

    start_at = combine(day, start)
    end_at = combine(day, end)
    if end_at <= start_at:
        raise InvalidSlotException(start, end)

    try:
        kind = SlotType(slot_type).value
    except ValueError:
        raise InvalidSlotException(start, end, reason=f"Unknown slot type {slot_type!r}")
    return GeneratedSlot(
        trainer_id=trainer_id,
        date=day,
        start_time=start_at,
        end_time=end_at,
        slot_type=kind,
        duration_minutes=round((end_at - start_at).total_seconds() / 60),
    )


def generate_slots(
    trainer_id: str,
    day: date,
    peak_slots: Optional[Iterable[Any]] = None,
    alternative_slots: Optional[Iterable[Any]] = None,
) -> List[GeneratedSlot]:
    """
    Generate slots for every peak and alternative range on ``day``.

    Ranges are any objects with ``start`` and ``end`` attributes (or mappings
    with those keys). The result is ordered by start time.

    Raises:
        InvalidSlotException: a range is malformed or ranges overlap
    """
    slots: List[GeneratedSlot] = []
    for slot_type, ranges in (
        (SlotType.PEAK, peak_slots or ()),
        (SlotType.ALTERNATIVE, alternative_slots or ()),
    ):
        for item in ranges:
            start, end = _bounds(item)
            slots.append(build_slot(trainer_id, day, start, end, slot_type))

    slots.sort(key=lambda s: (s.start_time, s.end_time))
    for previous, current in zip(slots, slots[1:]):
        if current.start_time < previous.end_time:
            raise InvalidSlotException(
                f"{current.start_time:%H:%M}",
                f"{current.end_time:%H:%M}",
                reason=(
                    f"Slot {current.start_time:%H:%M}-{current.end_time:%H:%M} overlaps "
                    f"{previous.start_time:%H:%M}-{previous.end_time:%H:%M}"
                ),
            )

    logger.debug(f"Generated {len(slots)} slots for trainer {trainer_id} on {day}")
    return slots


def _bounds(item: Any) -> tuple[str, str]:
    if isinstance(item, dict):
        return item.get("start"), item.get("end")
    return getattr(item, "start", None), getattr(item, "end", None)
