"""Appointment router - FastAPI endpoints for appointment operations"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import AuthContext, require_permission
from ...database import get_db
from ...permissions import Permission
from .schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    ConflictCheckRequest,
    ConflictCheckResponse,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])

can_view = require_permission(Permission.VIEW_APPOINTMENTS)
can_manage = require_permission(Permission.MANAGE_APPOINTMENTS)
can_record_payment = require_permission(Permission.MANAGE_FINANCIAL)


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.post("/check-conflict", response_model=ConflictCheckResponse)
async def check_conflict(
    data: ConflictCheckRequest,
    ctx: AuthContext = Depends(can_view),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Check whether a professional is already booked for the service's interval"""
    return ConflictCheckResponse(hasConflict=service.check_conflict(data, ctx))


@router.get("", response_model=list[AppointmentResponse])
async def get_appointments(
    day: Optional[date] = Query(None, alias="date", description="Only appointments on this day"),
    startDate: Optional[date] = Query(None),
    endDate: Optional[date] = Query(None),
    ctx: AuthContext = Depends(can_view),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointments = service.get_appointments(ctx, day=day, start_date=startDate, end_date=endDate)
    return [AppointmentResponse.from_model(a) for a in appointments]


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    ctx: AuthContext = Depends(can_view),
    service: AppointmentService = Depends(get_appointment_service),
):
    return AppointmentResponse.from_model(service.get_appointment(appointment_id, ctx))


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    ctx: AuthContext = Depends(can_manage),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Create an appointment; 409 when the professional is already booked"""
    return AppointmentResponse.from_model(service.create_appointment(data, ctx))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    ctx: AuthContext = Depends(can_manage),
    service: AppointmentService = Depends(get_appointment_service),
):
    return AppointmentResponse.from_model(service.update_appointment(appointment_id, data, ctx))


@router.delete("/{appointment_id}", status_code=204)
async def delete_appointment(
    appointment_id: int,
    ctx: AuthContext = Depends(can_manage),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.delete_appointment(appointment_id, ctx)
    return Response(status_code=204)


@router.post("/{appointment_id}/mark-paid", response_model=AppointmentResponse)
async def mark_paid(
    appointment_id: int,
    ctx: AuthContext = Depends(can_record_payment),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Mark an appointment paid and record the revenue; 409 if already paid"""
    return AppointmentResponse.from_model(service.mark_paid(appointment_id, ctx))
