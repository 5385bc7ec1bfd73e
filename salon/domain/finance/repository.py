"""Finance repository - Database operations for the transaction ledger"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Transaction


class TransactionRepository:
    """Append-only ledger access"""

    @staticmethod
    def _in_range(query, start: Optional[datetime], end: Optional[datetime]):
        if start is not None:
            query = query.filter(Transaction.transaction_date >= start)
        if end is not None:
            query = query.filter(Transaction.transaction_date < end)
        return query

    @staticmethod
    def get_transactions(
        db: Session,
        owner_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Transaction]:
        query = db.query(Transaction).filter(Transaction.owner_id == owner_id)
        query = TransactionRepository._in_range(query, start, end)
        return query.order_by(Transaction.transaction_date.desc(), Transaction.id.desc()).all()

    @staticmethod
    def add_transaction(db: Session, owner_id: int, commit: bool = True, **data) -> Transaction:
        """Append a ledger row. With ``commit=False`` the caller owns the transaction."""
        transaction = Transaction(owner_id=owner_id, **data)
        db.add(transaction)
        if commit:
            db.commit()
            db.refresh(transaction)
        else:
            db.flush()
        return transaction

    @staticmethod
    def totals_by_type(
        db: Session,
        owner_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> dict[str, tuple[float, int]]:
        """``{type: (sum, count)}`` over the range"""
        query = db.query(
            Transaction.type, func.coalesce(func.sum(Transaction.amount), 0.0), func.count(Transaction.id)
        ).filter(Transaction.owner_id == owner_id)
        query = TransactionRepository._in_range(query, start, end)
        rows = query.group_by(Transaction.type).all()
        return {row[0]: (float(row[1]), int(row[2])) for row in rows}
