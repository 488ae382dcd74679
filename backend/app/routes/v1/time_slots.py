# backend/app/routes/v1/time_slots.py
"""
Time slot routes - API v1

Endpoints:
    GET /trainers/{trainer_id}/time-slots → A trainer's slots for one date (paginated)
    POST /time-slots                      → Admin: schedule a standalone slot
    GET /time-slots                       → Admin: list slots by date/creator/trainer
"""

from datetime import date
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from ...api.dependencies.auth import get_current_user, require_admin
from ...api.dependencies.services import get_slot_ledger_service
from ...core.config import settings
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.base_responses import PaginationMeta
from ...schemas.time_slot import TimeSlotCreate, TimeSlotPage, TimeSlotResponse
from ...services.slot_ledger import SlotLedgerService
from ._errors import ULID_PATH_PATTERN, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["time-slots-v1"])


def _page(slots, total: int, page: int, page_size: int) -> TimeSlotPage:
    return TimeSlotPage(
        slots=[TimeSlotResponse.from_model(slot) for slot in slots],
        pagination=PaginationMeta.build(total, page, page_size),
    )


@router.get("/trainers/{trainer_id}/time-slots", response_model=TimeSlotPage)
def list_trainer_slots(
    trainer_id: str = Path(..., pattern=ULID_PATH_PATTERN),
    day: date = Query(..., alias="date"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=settings.max_page_size),
    current_user: User = Depends(get_current_user),
    service: SlotLedgerService = Depends(get_slot_ledger_service),
) -> TimeSlotPage:
    """Slots for the trainer on ``date``, ordered by start time."""
    page_size = page_size or settings.default_page_size
    try:
        slots, total = service.list_trainer_slots(trainer_id, day, page, page_size)
        return _page(slots, total, page, page_size)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/time-slots", response_model=TimeSlotResponse, status_code=status.HTTP_201_CREATED)
def create_time_slot(
    payload: TimeSlotCreate = Body(...),
    admin: User = Depends(require_admin),
    service: SlotLedgerService = Depends(get_slot_ledger_service),
) -> TimeSlotResponse:
    try:
        slot = service.create_slot(
            created_by=admin.id,
            trainer_id=payload.trainer_id,
            day=payload.date,
            start=payload.start,
            end=payload.end,
            slot_type=payload.slot_type,
        )
        return TimeSlotResponse.from_model(slot)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/time-slots", response_model=TimeSlotPage)
def list_time_slots(
    day: Optional[date] = Query(None, alias="date"),
    created_by: Optional[str] = Query(None, alias="createdBy"),
    trainer_id: Optional[str] = Query(None, alias="trainerId"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=settings.max_page_size),
    admin: User = Depends(require_admin),
    service: SlotLedgerService = Depends(get_slot_ledger_service),
) -> TimeSlotPage:
    """Admin schedule view with optional filters, ordered by start time."""
    page_size = page_size or settings.default_page_size
    try:
        slots, total = service.list_slots(
            page, page_size, day=day, created_by=created_by, trainer_id=trainer_id
        )
        return _page(slots, total, page, page_size)
    except DomainException as e:
        handle_domain_exception(e)
