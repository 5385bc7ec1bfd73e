"""Finance router - Ledger, summary and dashboard endpoints"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import AuthContext, get_auth_context, require_permission
from ...database import get_db
from ...permissions import Permission
from .schemas import DashboardStats, FinancialSummary, TransactionCreate, TransactionResponse
from .service import FinanceService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Finance"])

can_view = require_permission(Permission.VIEW_FINANCIAL)
can_manage = require_permission(Permission.MANAGE_FINANCIAL)


def get_finance_service(db: Session = Depends(get_db)) -> FinanceService:
    return FinanceService(db)


@router.get("/transactions", response_model=list[TransactionResponse])
async def get_transactions(
    startDate: Optional[date] = Query(None),
    endDate: Optional[date] = Query(None),
    ctx: AuthContext = Depends(can_view),
    service: FinanceService = Depends(get_finance_service),
):
    """Ledger entries, newest first, optionally limited to an inclusive date range"""
    return [TransactionResponse.from_model(t) for t in service.get_transactions(ctx, startDate, endDate)]


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    data: TransactionCreate,
    ctx: AuthContext = Depends(can_manage),
    service: FinanceService = Depends(get_finance_service),
):
    return TransactionResponse.from_model(service.create_transaction(data, ctx))


@router.get("/financial/summary", response_model=FinancialSummary)
async def get_financial_summary(
    startDate: Optional[date] = Query(None),
    endDate: Optional[date] = Query(None),
    ctx: AuthContext = Depends(can_view),
    service: FinanceService = Depends(get_finance_service),
):
    return service.get_summary(ctx, startDate, endDate)


@router.get("/dashboard/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    ctx: AuthContext = Depends(get_auth_context),
    service: FinanceService = Depends(get_finance_service),
):
    return service.get_dashboard_stats(ctx)
