"""Finance schemas - Pydantic models for the ledger and dashboard"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.clock import to_local_naive


class TransactionCreate(BaseModel):
    """Manual ledger entry (e.g. rent, product purchase, tip)"""

    type: Literal["revenue", "expense"]
    category: str = Field(min_length=1, max_length=100)
    amount: float = Field(gt=0)
    description: str = Field(min_length=1, max_length=2000)
    transactionDate: Optional[datetime] = None

    @field_validator("transactionDate")
    @classmethod
    def normalize_date(cls, v):
        return to_local_naive(v)


class TransactionResponse(BaseModel):
    id: int
    type: str
    category: str
    amount: float
    description: str
    transactionDate: datetime
    appointmentId: Optional[int] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, transaction) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            type=transaction.type,
            category=transaction.category,
            amount=transaction.amount,
            description=transaction.description,
            transactionDate=transaction.transaction_date,
            appointmentId=transaction.appointment_id,
            createdAt=transaction.created_at,
        )


class FinancialSummary(BaseModel):
    totalRevenue: float
    totalExpenses: float
    netIncome: float
    transactionCount: int


class NextAppointment(BaseModel):
    time: str  # HH:MM
    clientName: str


class DashboardStats(BaseModel):
    todayAppointments: int
    activeClients: int
    monthlyRevenue: float
    nextAppointment: Optional[NextAppointment] = None
