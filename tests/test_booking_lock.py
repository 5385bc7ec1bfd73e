from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from salon.database import Base, configure_sqlite
from salon.domain.scheduling.service import AppointmentService
from salon.errors import ConflictError
from salon.models import Appointment, Client, Professional, Service, User

START = datetime(2030, 6, 3, 10, 0)
END = START + timedelta(hours=1)


@pytest.fixture
def file_session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'salon.db'}",
        connect_args={"check_same_thread": False, "timeout": 0.2},
    )
    configure_sqlite(engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def seed(session_factory) -> dict:
    db = session_factory()
    try:
        owner = User(username="owner", password_hash="x", name="Owner", role="admin")
        db.add(owner)
        db.flush()
        customer = Client(owner_id=owner.id, name="Maria", phone="11987654321")
        service = Service(owner_id=owner.id, name="Haircut", duration=60, price=50.0)
        professional = Professional(owner_id=owner.id, name="Ana", specialty="Hair", phone="11911112222")
        db.add_all([customer, service, professional])
        db.flush()
        ids = {
            "owner": owner.id,
            "client": customer.id,
            "service": service.id,
            "professional": professional.id,
        }
        db.commit()
        return ids
    finally:
        db.close()


def claim_slot(appointments: AppointmentService, ids: dict) -> None:
    appointments._lock_professional(ids["professional"], ids["owner"])
    appointments._ensure_free(ids["owner"], ids["professional"], START, END)


def insert(appointments: AppointmentService, ids: dict) -> None:
    appointments.repo.add_appointment(
        appointments.db,
        Appointment(
            owner_id=ids["owner"],
            client_id=ids["client"],
            service_id=ids["service"],
            professional_id=ids["professional"],
            date=START,
            end_date=END,
            status="confirmed",
            payment_status="pending",
        ),
    )
    appointments._commit()


def test_second_booking_waits_for_the_first_and_then_conflicts(file_session_factory):
    ids = seed(file_session_factory)
    first = AppointmentService(file_session_factory())
    second = AppointmentService(file_session_factory())
    try:
        claim_slot(first, ids)

        # The first session holds the write lock until it commits
        with pytest.raises(OperationalError):
            claim_slot(second, ids)
        second.db.close()

        insert(first, ids)

        second = AppointmentService(file_session_factory())
        with pytest.raises(ConflictError):
            claim_slot(second, ids)
    finally:
        first.db.close()
        second.db.close()

    db = file_session_factory()
    try:
        assert db.query(Appointment).filter_by(professional_id=ids["professional"]).count() == 1
    finally:
        db.close()


def test_sessions_run_one_after_another_without_waiting(file_session_factory):
    ids = seed(file_session_factory)
    first = AppointmentService(file_session_factory())
    try:
        claim_slot(first, ids)
        insert(first, ids)
    finally:
        first.db.close()

    # Lock released at commit
    second = AppointmentService(file_session_factory())
    try:
        with pytest.raises(ConflictError):
            claim_slot(second, ids)
    finally:
        second.db.close()
