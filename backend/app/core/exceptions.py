# backend/app/core/exceptions.py
"""
Domain-specific exceptions for the trainer booking platform.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Convert to an HTTPException carrying the structured detail."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails (store failure mid-transaction)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class InvalidSlotException(ValidationException):
    """Raised when a slot range is malformed or has a non-positive duration."""

    def __init__(self, start: str, end: str, reason: Optional[str] = None):
        super().__init__(
            message=reason or f"Slot end time {end} must be after start time {start}",
            code="INVALID_SLOT",
            details={"start": start, "end": end},
        )


class TrainerMismatchException(ValidationException):
    """Raised when a slot is booked against a trainer who does not own it."""

    def __init__(self, time_slot_id: str, trainer_id: str):
        super().__init__(
            message="TrainerId does not match the time slot",
            code="TRAINER_MISMATCH",
            details={"time_slot_id": time_slot_id, "trainer_id": trainer_id},
        )


class SlotNotFoundException(NotFoundException):
    def __init__(self, time_slot_id: str):
        super().__init__(
            message="Time slot not found",
            code="SLOT_NOT_FOUND",
            details={"time_slot_id": time_slot_id},
        )


class BookingNotFoundException(NotFoundException):
    def __init__(self, booking_id: str):
        super().__init__(
            message="Booking not found",
            code="BOOKING_NOT_FOUND",
            details={"booking_id": booking_id},
        )


class AvailabilityNotFoundException(NotFoundException):
    def __init__(self, trainer_id: str, day: str):
        super().__init__(
            message="No availability found for this date",
            code="AVAILABILITY_NOT_FOUND",
            details={"trainer_id": trainer_id, "date": day},
        )


class UserNotFoundException(NotFoundException):
    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class SlotAlreadyBookedException(ConflictException):
    """Raised when a slot already holds a live booking."""

    def __init__(self, time_slot_id: str):
        super().__init__(
            message="Time slot is already booked",
            code="SLOT_ALREADY_BOOKED",
            details={"time_slot_id": time_slot_id},
        )


class AlreadyCancelledException(ConflictException):
    def __init__(self, booking_id: str):
        super().__init__(
            message="Booking is already cancelled",
            code="BOOKING_ALREADY_CANCELLED",
            details={"booking_id": booking_id},
        )


class NoOpRescheduleException(ConflictException):
    def __init__(self, booking_id: str, time_slot_id: str):
        super().__init__(
            message="Booking is already scheduled on this time slot",
            code="NO_OP_RESCHEDULE",
            details={"booking_id": booking_id, "time_slot_id": time_slot_id},
        )


class LeaveLimitExceededException(ConflictException):
    """Raised when a trainer has used up the monthly leave allowance."""

    def __init__(self, trainer_id: str, month: str, limit: int):
        super().__init__(
            message="You already have applied 1 leave this month. Please contact admin."
            if limit == 1
            else f"You already have applied {limit} leaves this month. Please contact admin.",
            code="LEAVE_LIMIT_EXCEEDED",
            details={"trainer_id": trainer_id, "month": month, "limit": limit},
        )


class BookedSlotsLockedException(ConflictException):
    """Raised when an availability change would drop slots that hold live bookings."""

    def __init__(self, trainer_id: str, day: str, time_slot_ids: list[str]):
        super().__init__(
            message="Availability for this date has slots held by bookings and cannot be replaced",
            code="BOOKED_SLOTS_LOCKED",
            details={"trainer_id": trainer_id, "date": day, "time_slot_ids": time_slot_ids},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
