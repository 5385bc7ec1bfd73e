"""Service catalog schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    """Schema for creating a salon service"""

    name: str = Field(min_length=1, max_length=255)
    duration: int = Field(gt=0, le=24 * 60, description="Duration in minutes")
    price: float = Field(ge=0)


class ServiceUpdate(BaseModel):
    """Schema for updating a salon service"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    duration: Optional[int] = Field(default=None, gt=0, le=24 * 60)
    price: Optional[float] = Field(default=None, ge=0)


class ServiceResponse(BaseModel):
    id: int
    name: str
    duration: int
    price: float
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, service) -> "ServiceResponse":
        return cls(
            id=service.id,
            name=service.name,
            duration=service.duration,
            price=service.price,
            createdAt=service.created_at,
        )


class PublicServiceResponse(BaseModel):
    """Service as shown on the public booking page"""

    id: int
    name: str
    duration: int
    price: float
