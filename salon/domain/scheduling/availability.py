"""
Availability service - Public booking page

Resolves the salon exposed publicly, builds its time-slot grid and takes
bookings from clients. Public bookings are created pending and unassigned;
an admin assigns a professional later.
"""

import logging
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from ... import config
from ...errors import ConflictError, NotFoundError, ValidationError
from ...models import Appointment, Service, User
from ...shared.clock import local_now
from ..catalog.service import CatalogService
from ..clients.service import ClientService
from ..professionals.service import ProfessionalService
from .overlap import BookedInterval
from .repository import AppointmentRepository
from .schemas import PublicBookingRequest
from .slots import TimeSlot, count_available_professionals, generate_slots, working_days

logger = logging.getLogger(__name__)


def get_public_owner(db: Session) -> User:
    """The admin whose salon the public endpoints serve"""
    query = db.query(User).filter(User.role == "admin")
    if config.PUBLIC_OWNER_USERNAME:
        owner = query.filter(User.username == config.PUBLIC_OWNER_USERNAME).first()
    else:
        owner = query.order_by(User.id.asc()).first()
    if not owner:
        raise NotFoundError("Salon not found")
    return owner


class AvailabilityService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.catalog = CatalogService(db)
        self.professionals = ProfessionalService(db)

    def get_services(self, owner_id: int) -> list[Service]:
        return self.catalog.get_services(owner_id)

    def get_working_days(self, owner_id: int) -> list[int]:
        return working_days(self.professionals.get_schedules(owner_id))

    def _booked_on(self, owner_id: int, day: date) -> list[BookedInterval]:
        start = datetime.combine(day, datetime.min.time())
        return [
            BookedInterval.from_appointment(a)
            for a in self.repo.get_assigned_between(self.db, owner_id, start, start + timedelta(days=1))
        ]

    def get_time_slots(self, owner_id: int, day: date, service_id: int) -> list[TimeSlot]:
        service = self.catalog.get_service(service_id, owner_id)
        try:
            return generate_slots(
                day,
                service.duration,
                self.professionals.get_schedules(owner_id),
                self._booked_on(owner_id, day),
                granularity=config.SLOT_GRANULARITY_MINUTES,
                not_before=local_now(),
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

    def count_available(self, owner_id: int, start: datetime, duration_minutes: int) -> int:
        """Professionals free for exactly ``[start, start + duration)``; 0 off the slot grid"""
        day = start.date()
        start_minute = start.hour * 60 + start.minute
        if start.second or start.microsecond or start_minute % config.SLOT_GRANULARITY_MINUTES:
            return 0
        return count_available_professionals(
            day,
            start_minute,
            duration_minutes,
            self.professionals.get_schedules(owner_id),
            self._booked_on(owner_id, day),
        )

    def book(self, data: PublicBookingRequest) -> Appointment:
        owner = get_public_owner(self.db)
        service = self.catalog.get_service(data.serviceId, owner.id)
        start = data.appointmentDate

        if start <= local_now():
            raise ValidationError("Appointment time must be in the future")
        if self.count_available(owner.id, start, service.duration) == 0:
            logger.warning(f"⚠️ Public booking rejected: no professional free at {start:%Y-%m-%d %H:%M}")
            raise ConflictError("This time is no longer available")

        try:
            client = ClientService(self.db).find_or_create_by_phone(
                owner.id, data.clientName, data.clientPhone, data.clientEmail
            )
            appointment = Appointment(
                owner_id=owner.id,
                client_id=client.id,
                service_id=service.id,
                professional_id=None,
                date=start,
                end_date=start + timedelta(minutes=service.duration),
                notes=data.notes,
                status="pending",
                payment_status="pending",
            )
            self.repo.add_appointment(self.db, appointment)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"🌐 Public booking {appointment.id} for {start:%Y-%m-%d %H:%M} ({service.name})")
        self.db.refresh(appointment)
        return appointment
