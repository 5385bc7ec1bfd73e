from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .shared.validators import validate_email


class UserResponse(BaseModel):
    id: int
    username: str
    name: str
    email: Optional[str] = None
    role: str
    professionalId: Optional[int] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            name=user.name,
            email=user.email,
            role=user.role,
            professionalId=user.professional.id if user.professional else None,
            createdAt=user.created_at,
        )


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6, max_length=72)
    name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    accessToken: str
    tokenType: str = "bearer"
    user: UserResponse
