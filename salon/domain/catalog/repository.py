"""Service catalog repository - Database operations for salon services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, Service


class ServiceRepository:
    """Repository for salon service database operations"""

    @staticmethod
    def get_services(db: Session, owner_id: int) -> list[Service]:
        return db.query(Service).filter(Service.owner_id == owner_id).order_by(Service.name.asc()).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int, owner_id: int) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.owner_id == owner_id)
            .first()
        )

    @staticmethod
    def create_service(db: Session, owner_id: int, **service_data) -> Service:
        service = Service(owner_id=owner_id, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def count_appointments(db: Session, service_id: int) -> int:
        return db.query(Appointment).filter(Appointment.service_id == service_id).count()

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()
