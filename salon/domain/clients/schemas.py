"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_phone


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: str = Field(min_length=1, max_length=255)
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


class ClientUpdate(BaseModel):
    """Schema for updating an existing client"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
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


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    name: str
    phone: str
    email: Optional[str] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, client) -> "ClientResponse":
        return cls(
            id=client.id,
            name=client.name,
            phone=client.phone,
            email=client.email,
            createdAt=client.created_at,
        )
