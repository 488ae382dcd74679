# backend/app/routes/v1/availability.py
"""
Availability routes - API v1

Trainer-facing availability endpoints under /api/v1/availability.
All business logic delegated to AvailabilityService and LeavePolicyService.

Endpoints:
    GET /                   → Day availability for the calling trainer
    POST /                  → Set a day's slots, or request leave (isAvailable=false)
    GET /leave/eligibility  → Whether leave can still be taken in that month
"""

from datetime import date
import logging

from fastapi import APIRouter, Body, Depends, Query

from ...api.dependencies.auth import get_current_trainer
from ...api.dependencies.services import get_availability_service, get_leave_policy_service
from ...core.exceptions import AvailabilityNotFoundException, DomainException
from ...models.user import User
from ...schemas.availability import AvailabilityUpdate, DailyAvailabilityView, LeaveEligibility
from ...services.availability_service import AvailabilityService
from ...services.leave_policy import LeavePolicyService
from ._errors import handle_domain_exception

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["availability-v1"])


@router.get("/leave/eligibility", response_model=LeaveEligibility)
def get_leave_eligibility(
    day: date = Query(..., alias="date", description="Date to check, YYYY-MM-DD"),
    current_user: User = Depends(get_current_trainer),
    service: LeavePolicyService = Depends(get_leave_policy_service),
) -> LeaveEligibility:
    """Whether the trainer can still take leave in the month of ``date``."""
    try:
        return service.check_eligibility(current_user.id, day)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=DailyAvailabilityView)
def get_availability(
    day: date = Query(..., alias="date", description="Date to read, YYYY-MM-DD"),
    current_user: User = Depends(get_current_trainer),
    service: AvailabilityService = Depends(get_availability_service),
) -> DailyAvailabilityView:
    """
    Get the calling trainer's availability for one date.

    Raises:
        404 if no availability was ever set for that date
    """
    try:
        view = service.get_availability(current_user.id, day)
        if view is None:
            raise AvailabilityNotFoundException(current_user.id, day.isoformat())
        return view
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=DailyAvailabilityView)
def set_availability(
    payload: AvailabilityUpdate = Body(...),
    current_user: User = Depends(get_current_trainer),
    service: AvailabilityService = Depends(get_availability_service),
) -> DailyAvailabilityView:
    """
    Set availability for one date.

    Slots for the date are replaced wholesale. With ``isAvailable=false`` the
    request is a leave request and is rejected once the month's leave is used.
    """
    try:
        return service.set_availability(current_user.id, payload)
    except DomainException as e:
        handle_domain_exception(e)
