"""
Appointment service - Booking, rescheduling, status changes and payment

Every write that can claim a professional's time runs the conflict check in
the same database transaction as the insert/update, with the professional
row locked.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import AuthContext
from ...errors import AlreadyPaidError, ConflictError, NotFoundError, ValidationError
from ...models import Appointment, Service
from ...shared.clock import local_now
from ..catalog.service import CatalogService
from ..clients.service import ClientService
from ..finance.repository import TransactionRepository
from .overlap import CANCELLED, BookedInterval, find_conflict
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate, ConflictCheckRequest

logger = logging.getLogger(__name__)

PENDING = "pending"
CONFIRMED = "confirmed"
COMPLETED = "completed"

STATUS_TRANSITIONS = {
    PENDING: {CONFIRMED, CANCELLED},
    CONFIRMED: {COMPLETED, CANCELLED},
    COMPLETED: set(),
    CANCELLED: set(),
}

SERVICE_PAYMENT_CATEGORY = "service_payment"


def validate_status_transition(current: str, new: str) -> None:
    if new == current:
        return
    if new not in STATUS_TRANSITIONS.get(current, set()):
        raise ValidationError(f"Cannot change appointment status from '{current}' to '{new}'")


def end_of(start: datetime, service: Service) -> datetime:
    return start + timedelta(minutes=service.duration)


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.catalog = CatalogService(db)
        self.clients = ClientService(db)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_appointments(
        self,
        ctx: AuthContext,
        day: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Appointment]:
        """All appointments, those on ``day``, or those within an inclusive date range"""
        if day is not None:
            start_date = end_date = day
        if start_date and end_date and end_date < start_date:
            raise ValidationError("endDate must not be before startDate")
        start = datetime.combine(start_date, datetime.min.time()) if start_date else None
        end = datetime.combine(end_date, datetime.max.time()) if end_date else None
        return self.repo.get_appointments(self.db, ctx.owner_scope_id, start, end)

    def get_appointment(self, appointment_id: int, ctx: AuthContext) -> Appointment:
        appointment = self.repo.get_appointment(self.db, appointment_id, ctx.owner_scope_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    def _find_conflict(
        self,
        owner_id: int,
        professional_id: Optional[int],
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> Optional[BookedInterval]:
        if professional_id is None:
            return None
        booked = [
            BookedInterval.from_appointment(a)
            for a in self.repo.get_active_for_professional(
                self.db, owner_id, professional_id, start, end, exclude_id
            )
        ]
        return find_conflict(professional_id, start, end, booked, exclude_id)

    def check_conflict(self, data: ConflictCheckRequest, ctx: AuthContext) -> bool:
        """Whether the professional is already booked during the service's interval"""
        service = self.catalog.get_service(data.serviceId, ctx.owner_scope_id)
        start = data.date
        end = end_of(start, service)
        return self._find_conflict(ctx.owner_scope_id, data.professionalId, start, end, data.excludeId) is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _lock_professional(self, professional_id: Optional[int], owner_id: int) -> None:
        if professional_id is None:
            return
        if not self.repo.lock_professional(self.db, professional_id, owner_id):
            raise NotFoundError("Professional not found")

    def _ensure_free(
        self,
        owner_id: int,
        professional_id: Optional[int],
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> None:
        conflict = self._find_conflict(owner_id, professional_id, start, end, exclude_id)
        if conflict:
            logger.warning(
                f"⚠️ Booking conflict for professional {professional_id} "
                f"{start:%Y-%m-%d %H:%M}-{end:%H:%M} with appointment {conflict.appointment_id}"
            )
            raise ConflictError("The professional already has an appointment at this time")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Integrity error on appointment write: {e.orig}")
            raise ConflictError("The appointment could not be saved due to a concurrent change") from e

    def create_appointment(self, data: AppointmentCreate, ctx: AuthContext) -> Appointment:
        owner_id = ctx.owner_scope_id
        try:
            client = self.clients.get_client(data.clientId, ctx)
            service = self.catalog.get_service(data.serviceId, owner_id)
            start = data.date
            end = end_of(start, service)

            self._lock_professional(data.professionalId, owner_id)
            self._ensure_free(owner_id, data.professionalId, start, end)

            appointment = Appointment(
                owner_id=owner_id,
                client_id=client.id,
                service_id=service.id,
                professional_id=data.professionalId,
                date=start,
                end_date=end,
                notes=data.notes,
                status=data.status,
                payment_status=PENDING,
            )
            self.repo.add_appointment(self.db, appointment)
        except Exception:
            self.db.rollback()
            raise
        self._commit()

        logger.info(
            f"📅 Appointment {appointment.id} created for client {client.id} "
            f"on {start:%Y-%m-%d %H:%M} (professional: {data.professionalId})"
        )
        return self.get_appointment(appointment.id, ctx)

    def update_appointment(self, appointment_id: int, data: AppointmentUpdate, ctx: AuthContext) -> Appointment:
        """
        Partially update an appointment.

        The conflict check runs only when the date, service or professional
        changes and the appointment stays active.
        """
        owner_id = ctx.owner_scope_id
        try:
            appointment = self.get_appointment(appointment_id, ctx)
            fields = data.model_dump(exclude_unset=True)

            new_status = fields.get("status") or appointment.status
            validate_status_transition(appointment.status, new_status)

            client_id = appointment.client_id
            if fields.get("clientId") is not None:
                client_id = self.clients.get_client(fields["clientId"], ctx).id

            service = appointment.service
            if fields.get("serviceId") is not None and fields["serviceId"] != appointment.service_id:
                service = self.catalog.get_service(fields["serviceId"], owner_id)

            professional_id = appointment.professional_id
            if "professionalId" in fields:
                professional_id = fields["professionalId"]

            start = fields.get("date") or appointment.date
            schedule_changed = (
                start != appointment.date
                or service.id != appointment.service_id
                or professional_id != appointment.professional_id
            )
            end = end_of(start, service) if schedule_changed else appointment.end_date

            if schedule_changed and new_status != CANCELLED:
                self._lock_professional(professional_id, owner_id)
                self._ensure_free(owner_id, professional_id, start, end, exclude_id=appointment.id)

            appointment.client_id = client_id
            appointment.service_id = service.id
            appointment.professional_id = professional_id
            appointment.date = start
            appointment.end_date = end
            appointment.status = new_status
            if "notes" in fields:
                appointment.notes = fields["notes"]
        except Exception:
            self.db.rollback()
            raise
        self._commit()

        logger.info(f"✏️ Appointment {appointment_id} updated (status: {new_status})")
        self.db.expire_all()
        return self.get_appointment(appointment_id, ctx)

    def delete_appointment(self, appointment_id: int, ctx: AuthContext) -> None:
        appointment = self.get_appointment(appointment_id, ctx)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Appointment {appointment_id} deleted")

    def mark_paid(self, appointment_id: int, ctx: AuthContext) -> Appointment:
        """
        Record payment for an appointment.

        Flips ``payment_status`` to paid and appends the matching revenue
        entry in one transaction. Free services are marked paid without a
        ledger entry. A repeated call raises AlreadyPaidError and
        leaves the ledger untouched.
        """
        owner_id = ctx.owner_scope_id
        appointment = self.get_appointment(appointment_id, ctx)
        if appointment.payment_status == "paid":
            raise AlreadyPaidError("Appointment is already paid")
        if appointment.status == CANCELLED:
            raise ValidationError("Cancelled appointments cannot be paid")

        service = appointment.service
        client = appointment.client
        try:
            # Conditional update: only one concurrent caller sees pending
            if not self.repo.mark_paid_if_pending(self.db, appointment_id, owner_id):
                raise AlreadyPaidError("Appointment is already paid")
            # Ledger amounts are positive; free services record nothing
            if service.price > 0:
                TransactionRepository.add_transaction(
                    self.db,
                    owner_id,
                    commit=False,
                    type="revenue",
                    category=SERVICE_PAYMENT_CATEGORY,
                    amount=service.price,
                    description=f"Service payment: {service.name} - {client.name}",
                    transaction_date=local_now(),
                    appointment_id=appointment_id,
                )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Duplicate payment attempt for appointment {appointment_id}")
            raise AlreadyPaidError("Appointment is already paid") from e
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"💰 Appointment {appointment_id} paid: {service.price:.2f} recorded as revenue")
        self.db.expire_all()
        return self.get_appointment(appointment_id, ctx)
