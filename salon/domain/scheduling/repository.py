"""Appointment repository - Database operations for appointments"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, Professional


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def _with_relations(db: Session):
        return db.query(Appointment).options(
            joinedload(Appointment.client),
            joinedload(Appointment.service),
            joinedload(Appointment.professional),
        )

    @staticmethod
    def get_appointments(
        db: Session,
        owner_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Appointment]:
        """Get appointments for an owner, optionally those starting within [start, end]"""
        query = AppointmentRepository._with_relations(db).filter(Appointment.owner_id == owner_id)
        if start is not None:
            query = query.filter(Appointment.date >= start)
        if end is not None:
            query = query.filter(Appointment.date <= end)
        return query.order_by(Appointment.date.asc()).all()

    @staticmethod
    def get_appointment(db: Session, appointment_id: int, owner_id: int) -> Optional[Appointment]:
        return (
            AppointmentRepository._with_relations(db)
            .filter(Appointment.id == appointment_id, Appointment.owner_id == owner_id)
            .first()
        )

    @staticmethod
    def get_active_for_professional(
        db: Session,
        owner_id: int,
        professional_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> list[Appointment]:
        """Non-cancelled appointments of a professional overlapping [start, end)"""
        query = db.query(Appointment).filter(
            Appointment.owner_id == owner_id,
            Appointment.professional_id == professional_id,
            Appointment.status != "cancelled",
            Appointment.date < end,
            Appointment.end_date > start,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return query.all()

    @staticmethod
    def get_assigned_between(
        db: Session, owner_id: int, start: datetime, end: datetime
    ) -> list[Appointment]:
        """Non-cancelled assigned appointments overlapping [start, end)"""
        return (
            db.query(Appointment)
            .filter(
                Appointment.owner_id == owner_id,
                Appointment.professional_id.isnot(None),
                Appointment.status != "cancelled",
                Appointment.date < end,
                Appointment.end_date > start,
            )
            .all()
        )

    @staticmethod
    def lock_professional(db: Session, professional_id: int, owner_id: int) -> Optional[Professional]:
        """
        Lock the professional row for the rest of the transaction.

        Serializes concurrent check-then-insert bookings for the same
        professional. SQLite ignores FOR UPDATE; file databases take the write
        lock at BEGIN IMMEDIATE instead (see ``database.configure_sqlite``).
        """
        return (
            db.query(Professional)
            .filter(Professional.id == professional_id, Professional.owner_id == owner_id)
            .with_for_update()
            .first()
        )

    @staticmethod
    def add_appointment(db: Session, appointment: Appointment) -> Appointment:
        db.add(appointment)
        db.flush()
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()

    @staticmethod
    def mark_paid_if_pending(db: Session, appointment_id: int, owner_id: int) -> bool:
        """Flip payment_status pending -> paid. Returns False if it was not pending."""
        updated = (
            db.query(Appointment)
            .filter(
                Appointment.id == appointment_id,
                Appointment.owner_id == owner_id,
                Appointment.payment_status == "pending",
            )
            .update({Appointment.payment_status: "paid"}, synchronize_session="fetch")
        )
        return updated == 1

    @staticmethod
    def count_active_between(db: Session, owner_id: int, start: datetime, end: datetime) -> int:
        """Non-cancelled appointments starting within [start, end)"""
        return (
            db.query(Appointment)
            .filter(
                Appointment.owner_id == owner_id,
                Appointment.status != "cancelled",
                Appointment.date >= start,
                Appointment.date < end,
            )
            .count()
        )

    @staticmethod
    def get_next_active(
        db: Session, owner_id: int, after: datetime, before: datetime
    ) -> Optional[Appointment]:
        """First non-cancelled appointment starting within [after, before)"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.client))
            .filter(
                Appointment.owner_id == owner_id,
                Appointment.status != "cancelled",
                Appointment.date >= after,
                Appointment.date < before,
            )
            .order_by(Appointment.date.asc())
            .first()
        )
