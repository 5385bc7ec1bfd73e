"""Public router - Unauthenticated booking page endpoints"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...rate_limiter import create_rate_limiter
from ..catalog.schemas import PublicServiceResponse
from .availability import AvailabilityService, get_public_owner
from .schemas import PublicBookingRequest, PublicBookingResponse, TimeSlotResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public", tags=["Public"])

rate_limit_booking = create_rate_limiter(limit=10, window_seconds=3600, key_prefix="public_booking")


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


@router.get("/services", response_model=list[PublicServiceResponse])
async def get_public_services(
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
):
    owner = get_public_owner(db)
    return [
        PublicServiceResponse(id=s.id, name=s.name, duration=s.duration, price=s.price)
        for s in service.get_services(owner.id)
    ]


@router.get("/availability/working-days", response_model=list[int])
async def get_working_days(
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Weekdays (0=Sunday) on which at least one professional works"""
    return service.get_working_days(get_public_owner(db).id)


@router.get("/availability/time-slots", response_model=list[TimeSlotResponse])
async def get_time_slots(
    day: date = Query(..., alias="date", description="Day to list, YYYY-MM-DD"),
    serviceId: int = Query(...),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
):
    owner = get_public_owner(db)
    slots = service.get_time_slots(owner.id, day, serviceId)
    return [
        TimeSlotResponse(time=str(slot.time), availableProfessionalCount=slot.available_professional_count)
        for slot in slots
    ]


@router.post("/booking", response_model=PublicBookingResponse, status_code=201)
async def create_public_booking(
    data: PublicBookingRequest,
    _: None = Depends(rate_limit_booking),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Book a service. The salon confirms and assigns a professional afterwards."""
    return PublicBookingResponse.from_model(service.book(data))
