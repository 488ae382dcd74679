# backend/app/routes/v1/bookings.py
"""
Booking routes - API v1

All business logic delegated to BookingService. Routes only check that the
caller is a party to the booking (or an admin).

Endpoints:
    POST /trainers/{trainer_id}/bookings        → Customer books a slot
    GET /trainers/{trainer_id}/bookings         → Trainer's bookings, newest first
    GET /bookings/{booking_id}                  → Booking with nested summaries
    POST /bookings/{booking_id}/attendance      → Trainer marks attendance
    POST /bookings/{booking_id}/cancel          → Cancel and free the slot
    POST /bookings/{booking_id}/reschedule      → Move to another free slot
    PUT /bookings/{booking_id}/accolades        → Replace accolades
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from ...api.dependencies.auth import get_current_customer, get_current_user
from ...api.dependencies.authz import require_roles
from ...api.dependencies.services import get_booking_service
from ...core.config import settings
from ...core.enums import RoleName
from ...core.exceptions import DomainException, ForbiddenException
from ...models.booking import Booking
from ...models.user import User
from ...schemas.base_responses import PaginationMeta
from ...schemas.booking import (
    AccoladesUpdate,
    AttendanceUpdate,
    BookingCreate,
    BookingDetailResponse,
    BookingPage,
    BookingResponse,
    RescheduleRequest,
)
from ...services.booking_service import BookingService
from ._errors import ULID_PATH_PATTERN, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings-v1"])


def _ensure_party(booking: Booking, user: User, trainer_only: bool = False) -> None:
    if user.is_admin or booking.trainer_id == user.id:
        return
    if not trainer_only and booking.customer_id == user.id:
        return
    raise ForbiddenException(
        "You do not have access to this booking",
        code="BOOKING_FORBIDDEN",
        details={"booking_id": booking.id},
    )


def _authorize(
    service: BookingService, booking_id: str, user: User, trainer_only: bool = False
) -> Booking:
    booking = service.get_booking_details(booking_id)
    _ensure_party(booking, user, trainer_only=trainer_only)
    return booking


@router.post(
    "/trainers/{trainer_id}/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
def book_slot(
    trainer_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    payload: BookingCreate = Body(...),
    current_user: User = Depends(get_current_customer),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """
    Book a free slot of ``trainer_id`` for the calling customer.

    Returns 409 if the slot is already booked, 400 if it belongs to another
    trainer, 404 if it does not exist.
    """
    try:
        booking = service.book(current_user.id, trainer_id, payload.time_slot_id)
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/trainers/{trainer_id}/bookings", response_model=BookingPage)
def list_trainer_bookings(
    trainer_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=settings.max_page_size),
    current_user: User = Depends(require_roles(RoleName.TRAINER, RoleName.ADMIN)),
    service: BookingService = Depends(get_booking_service),
) -> BookingPage:
    page_size = page_size or settings.default_page_size
    try:
        if not (current_user.is_admin or current_user.id == trainer_id):
            raise ForbiddenException("You can only list your own bookings")
        bookings, total = service.list_bookings_by_trainer(trainer_id, page, page_size)
        return BookingPage(
            bookings=[BookingDetailResponse.from_model(b) for b in bookings],
            pagination=PaginationMeta.build(total, page, page_size),
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/bookings/{booking_id}", response_model=BookingDetailResponse)
def get_booking_details(
    booking_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingDetailResponse:
    try:
        booking = _authorize(service, booking_id, current_user)
        return BookingDetailResponse.from_model(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/bookings/{booking_id}/attendance", response_model=BookingResponse)
def mark_attendance(
    booking_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    payload: AttendanceUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Mark whether the customer attended. Trainer of the booking or admin only."""
    try:
        _authorize(service, booking_id, current_user, trainer_only=True)
        booking = service.mark_attended(booking_id, payload.resolved)
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/bookings/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        _authorize(service, booking_id, current_user)
        booking = service.cancel(booking_id)
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/bookings/{booking_id}/reschedule", response_model=BookingResponse)
def reschedule_booking(
    booking_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    payload: RescheduleRequest = Body(...),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        _authorize(service, booking_id, current_user)
        booking = service.reschedule(booking_id, payload.new_time_slot_id)
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/bookings/{booking_id}/accolades", response_model=BookingResponse)
def update_accolades(
    booking_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    payload: AccoladesUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        _authorize(service, booking_id, current_user, trainer_only=True)
        booking = service.update_accolades(booking_id, payload.accolades)
        return BookingResponse.model_validate(booking)
    except DomainException as e:
        handle_domain_exception(e)
