"""Scheduling schemas - Pydantic models for appointments and availability"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.clock import to_local_naive
from ...shared.validators import validate_email, validate_phone

AppointmentStatus = Literal["pending", "confirmed", "completed", "cancelled"]


class AppointmentCreate(BaseModel):
    """Schema for creating an appointment. The end time is derived from the service."""

    clientId: int
    serviceId: int
    professionalId: Optional[int] = None
    date: datetime
    notes: Optional[str] = Field(default=None, max_length=2000)
    status: Literal["pending", "confirmed"] = "confirmed"

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_local_naive(v)


class AppointmentUpdate(BaseModel):
    """Partial update. ``professionalId: null`` unassigns the appointment."""

    clientId: Optional[int] = None
    serviceId: Optional[int] = None
    professionalId: Optional[int] = None
    date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[AppointmentStatus] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_local_naive(v)


class AppointmentResponse(BaseModel):
    id: int
    clientId: int
    clientName: Optional[str] = None
    clientPhone: Optional[str] = None
    serviceId: int
    serviceName: Optional[str] = None
    servicePrice: Optional[float] = None
    professionalId: Optional[int] = None
    professionalName: Optional[str] = None
    date: datetime
    endDate: datetime
    notes: Optional[str] = None
    status: str
    paymentStatus: str
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, appointment) -> "AppointmentResponse":
        client = appointment.client
        service = appointment.service
        professional = appointment.professional
        return cls(
            id=appointment.id,
            clientId=appointment.client_id,
            clientName=client.name if client else None,
            clientPhone=client.phone if client else None,
            serviceId=appointment.service_id,
            serviceName=service.name if service else None,
            servicePrice=service.price if service else None,
            professionalId=appointment.professional_id,
            professionalName=professional.name if professional else None,
            date=appointment.date,
            endDate=appointment.end_date,
            notes=appointment.notes,
            status=appointment.status,
            paymentStatus=appointment.payment_status,
            createdAt=appointment.created_at,
        )


class ConflictCheckRequest(BaseModel):
    professionalId: Optional[int] = None
    date: datetime
    serviceId: int
    excludeId: Optional[int] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_local_naive(v)


class ConflictCheckResponse(BaseModel):
    hasConflict: bool


class TimeSlotResponse(BaseModel):
    time: str  # HH:MM
    availableProfessionalCount: int


class PublicBookingRequest(BaseModel):
    """Booking made by a client on the public page"""

    clientName: str = Field(min_length=1, max_length=255)
    clientPhone: str
    clientEmail: Optional[str] = None
    serviceId: int
    appointmentDate: datetime
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("clientPhone")
    @classmethod
    def validate_phone(cls, v):
        return validate_phone(v)

    @field_validator("clientEmail")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)

    @field_validator("appointmentDate")
    @classmethod
    def normalize_date(cls, v):
        return to_local_naive(v)


class PublicBookingResponse(BaseModel):
    """Booking confirmation. Never names the professional."""

    id: int
    serviceName: str
    date: datetime
    endDate: datetime
    status: str

    @classmethod
    def from_model(cls, appointment) -> "PublicBookingResponse":
        return cls(
            id=appointment.id,
            serviceName=appointment.service.name,
            date=appointment.date,
            endDate=appointment.end_date,
            status=appointment.status,
        )
