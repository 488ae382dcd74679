# backend/app/repositories/availability_repository.py
"""
Availability Repository for the trainer booking platform.

Data access for the weekly and daily availability rows:
- Find-or-create of the week and day rows (race-safe through a SAVEPOINT)
- Atomic SQL-side increment of the weekly booked-minutes accumulator
- Leave-day counting for the monthly leave policy
"""

from datetime import date, datetime
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from ..core.exceptions import RepositoryException
from ..models.availability import DailyAvailability, WeeklyAvailability
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AvailabilityRepository(BaseRepository[DailyAvailability]):
    """
    Repository for trainer availability.

    The daily row is the primary model; the weekly row is managed alongside it
    because every daily row belongs to exactly one week.
    """

    def __init__(self, db: Session):
        super().__init__(db, DailyAvailability)
        self.logger = logging.getLogger(__name__)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            joinedload(DailyAvailability.week),
            selectinload(DailyAvailability.time_slots),
        )

    # Weekly rows

    def find_week(
        self, trainer_id: str, week_start: datetime, week_end: datetime
    ) -> Optional[WeeklyAvailability]:
        try:
            return (
                self.db.query(WeeklyAvailability)
                .filter(
                    WeeklyAvailability.trainer_id == trainer_id,
                    WeeklyAvailability.week_start_date == week_start,
                    WeeklyAvailability.week_end_date == week_end,
                )
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding week for trainer {trainer_id}: {str(e)}")
            raise RepositoryException(f"Failed to find weekly availability: {str(e)}")

    def get_or_create_week(
        self, trainer_id: str, week_start: datetime, week_end: datetime
    ) -> WeeklyAvailability:
        """
        Find the trainer's week row, creating it if missing.

        The insert runs in a SAVEPOINT; if a concurrent caller created the row
        first, the unique constraint fires and the winner's row is re-read.
        """
        week = self.find_week(trainer_id, week_start, week_end)
        if week is not None:
            return week

        try:
            with self.db.begin_nested():
                week = WeeklyAvailability(
                    trainer_id=trainer_id,
                    week_start_date=week_start,
                    week_end_date=week_end,
                    required_minutes=0,
                    total_booked_minutes=0,
                )
                self.db.add(week)
            self.logger.debug(f"Created week {week_start:%Y-%m-%d} for trainer {trainer_id}")
            return week
        except IntegrityError:
            self.logger.info(f"Week row for trainer {trainer_id} created concurrently; re-reading")
            existing = self.find_week(trainer_id, week_start, week_end)
            if existing is None:
                raise RepositoryException("Weekly availability vanished after conflict")
            return existing

    def increment_week_minutes(self, week_id: str, delta: int) -> int:
        """
        Add ``delta`` to the week's booked-minute total in SQL.

        Returns:
            Number of rows updated (0 or 1)
        """
        if delta == 0:
            return 0
        try:
            return (
                self.db.query(WeeklyAvailability)
                .filter(WeeklyAvailability.id == week_id)
                .update(
                    {
                        WeeklyAvailability.total_booked_minutes: WeeklyAvailability.total_booked_minutes
                        + delta
                    },
                    synchronize_session="fetch",
                )
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error incrementing week {week_id} minutes: {str(e)}")
            raise RepositoryException(f"Failed to update weekly minutes: {str(e)}")

    # Daily rows

    def find_day(self, trainer_id: str, day: date) -> Optional[DailyAvailability]:
        """Daily row for (trainer, date) with its week and slots loaded."""
        try:
            query = self.db.query(DailyAvailability).filter(
                DailyAvailability.trainer_id == trainer_id,
                DailyAvailability.date == day,
            )
            return self._apply_eager_loading(query).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding availability for {trainer_id} on {day}: {str(e)}")
            raise RepositoryException(f"Failed to find daily availability: {str(e)}")

    def get_or_create_day(
        self,
        trainer_id: str,
        week_id: str,
        day: date,
        day_of_week: str,
        is_available: bool,
    ) -> tuple[DailyAvailability, bool]:
        """
        Find the daily row, creating it if missing.

        Returns:
            (row, created) where ``created`` is True for a fresh row
        """
        existing = self.find_day(trainer_id, day)
        if existing is not None:
            return existing, False

        try:
            with self.db.begin_nested():
                row = DailyAvailability(
                    trainer_id=trainer_id,
                    week_id=week_id,
                    date=day,
                    day_of_week=day_of_week,
                    is_available=is_available,
                    total_day_minutes=0,
                )
                self.db.add(row)
            return row, True
        except IntegrityError:
            self.logger.info(f"Daily row for {trainer_id} on {day} created concurrently; re-reading")
            existing = self.find_day(trainer_id, day)
            if existing is None:
                raise RepositoryException("Daily availability vanished after conflict")
            return existing, False

    def count_leave_days(self, trainer_id: str, start: date, end: date) -> int:
        """Count days in [start, end] the trainer marked unavailable."""
        try:
            return (
                self.db.query(DailyAvailability)
                .filter(
                    DailyAvailability.trainer_id == trainer_id,
                    DailyAvailability.is_available.is_(False),
                    DailyAvailability.date >= start,
                    DailyAvailability.date <= end,
                )
                .count()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting leave days for {trainer_id}: {str(e)}")
            raise RepositoryException(f"Failed to count leave days: {str(e)}")

    def sum_day_minutes(self, week_id: str) -> int:
        """Recomputed sum of the week's daily minutes (used for consistency checks)."""
        total = self._execute_scalar(
            self.db.query(func.coalesce(func.sum(DailyAvailability.total_day_minutes), 0)).filter(
                DailyAvailability.week_id == week_id
            )
        )
        return int(total or 0)
