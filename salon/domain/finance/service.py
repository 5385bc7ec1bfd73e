"""Finance service - Ledger, financial summary and dashboard figures"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import AuthContext
from ...errors import ValidationError
from ...models import Transaction
from ...shared.clock import local_now
from ..clients.repository import ClientRepository
from ..scheduling.repository import AppointmentRepository
from .repository import TransactionRepository
from .schemas import DashboardStats, FinancialSummary, NextAppointment, TransactionCreate

logger = logging.getLogger(__name__)


def day_range(start_date: Optional[date], end_date: Optional[date]):
    """Convert an inclusive date range into ``[start, end)`` datetimes"""
    if start_date and end_date and end_date < start_date:
        raise ValidationError("endDate must not be before startDate")
    start = datetime.combine(start_date, datetime.min.time()) if start_date else None
    end = datetime.combine(end_date + timedelta(days=1), datetime.min.time()) if end_date else None
    return start, end


def month_start(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def next_month_start(moment: datetime) -> datetime:
    first = month_start(moment)
    if first.month == 12:
        return first.replace(year=first.year + 1, month=1)
    return first.replace(month=first.month + 1)


class FinanceService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TransactionRepository()

    def get_transactions(
        self, ctx: AuthContext, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Transaction]:
        start, end = day_range(start_date, end_date)
        return self.repo.get_transactions(self.db, ctx.owner_scope_id, start, end)

    def create_transaction(self, data: TransactionCreate, ctx: AuthContext) -> Transaction:
        logger.info(
            f"💰 Recording {data.type} of {data.amount:.2f} ({data.category}) for owner_id: {ctx.owner_scope_id}"
        )
        return self.repo.add_transaction(
            self.db,
            ctx.owner_scope_id,
            type=data.type,
            category=data.category.strip(),
            amount=round(data.amount, 2),
            description=data.description.strip(),
            transaction_date=data.transactionDate or local_now(),
        )

    def get_summary(
        self, ctx: AuthContext, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> FinancialSummary:
        start, end = day_range(start_date, end_date)
        totals = self.repo.totals_by_type(self.db, ctx.owner_scope_id, start, end)
        revenue, revenue_count = totals.get("revenue", (0.0, 0))
        expenses, expense_count = totals.get("expense", (0.0, 0))
        return FinancialSummary(
            totalRevenue=round(revenue, 2),
            totalExpenses=round(expenses, 2),
            netIncome=round(revenue - expenses, 2),
            transactionCount=revenue_count + expense_count,
        )

    def get_dashboard_stats(self, ctx: AuthContext) -> DashboardStats:
        now = local_now()
        today = datetime.combine(now.date(), datetime.min.time())
        tomorrow = today + timedelta(days=1)
        owner_id = ctx.owner_scope_id

        totals = self.repo.totals_by_type(self.db, owner_id, month_start(now), next_month_start(now))
        upcoming = AppointmentRepository.get_next_active(self.db, owner_id, now, tomorrow)

        return DashboardStats(
            todayAppointments=AppointmentRepository.count_active_between(self.db, owner_id, today, tomorrow),
            activeClients=ClientRepository.count_clients(self.db, owner_id),
            monthlyRevenue=round(totals.get("revenue", (0.0, 0))[0], 2),
            nextAppointment=(
                NextAppointment(time=upcoming.date.strftime("%H:%M"), clientName=upcoming.client.name)
                if upcoming
                else None
            ),
        )
