"""Professional domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...permissions import Permission
from ...shared.validators import validate_email, validate_phone, validate_time_of_day


class ScheduleFields(BaseModel):
    workDays: Optional[list[int]] = None
    workStartTime: Optional[str] = None
    workEndTime: Optional[str] = None
    lunchStartTime: Optional[str] = None
    lunchEndTime: Optional[str] = None

    @field_validator("workDays")
    @classmethod
    def validate_work_days(cls, v):
        if v is None:
            return v
        if any(d < 0 or d > 6 for d in v):
            raise ValueError("Work days must be weekday numbers 0 (Sunday) to 6 (Saturday)")
        return sorted(set(v))

    @field_validator("workStartTime", "workEndTime", "lunchStartTime", "lunchEndTime")
    @classmethod
    def validate_times(cls, v):
        if v == "":
            return None
        return validate_time_of_day(v)


class ProfessionalCreate(ScheduleFields):
    """Schema for creating a professional"""

    name: str = Field(min_length=1, max_length=255)
    specialty: str = Field(min_length=1, max_length=255)
    phone: str
    email: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)


class ProfessionalUpdate(ScheduleFields):
    """Schema for updating a professional"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    specialty: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = None
    email: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)


class ProfessionalResponse(BaseModel):
    id: int
    name: str
    specialty: str
    phone: str
    email: Optional[str] = None
    workDays: list[int]
    workStartTime: str
    workEndTime: str
    lunchStartTime: Optional[str] = None
    lunchEndTime: Optional[str] = None
    canAccessSystem: bool
    username: Optional[str] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, professional) -> "ProfessionalResponse":
        return cls(
            id=professional.id,
            name=professional.name,
            specialty=professional.specialty,
            phone=professional.phone,
            email=professional.email,
            workDays=[int(d) for d in professional.work_days.split(",") if d.strip()],
            workStartTime=professional.work_start_time,
            workEndTime=professional.work_end_time,
            lunchStartTime=professional.lunch_start_time,
            lunchEndTime=professional.lunch_end_time,
            canAccessSystem=professional.can_access_system,
            username=professional.user.username if professional.user else None,
            createdAt=professional.created_at,
        )


class GrantAccessRequest(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6, max_length=72)


class PermissionResponse(BaseModel):
    permission: Permission


class PermissionsUpdate(BaseModel):
    """The complete set of permissions the professional should hold"""

    permissions: list[Permission]
