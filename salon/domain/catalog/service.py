"""Service catalog - Business logic for the services a salon offers"""

import logging

from sqlalchemy.orm import Session

from ...auth import AuthContext
from ...errors import NotFoundError, SalonError
from ...models import Service
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class ServiceInUseError(SalonError):
    status_code = 409
    code = "service_in_use"


class CatalogService:
    """Service layer for the salon service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self, owner_id: int) -> list[Service]:
        return self.repo.get_services(self.db, owner_id)

    def get_service(self, service_id: int, owner_id: int) -> Service:
        """Look up a service in an owner scope, raising NotFoundError when absent"""
        service = self.repo.get_service_by_id(self.db, service_id, owner_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    def create_service(self, data: ServiceCreate, ctx: AuthContext) -> Service:
        logger.info(f"📥 Creating service '{data.name}' for owner_id: {ctx.owner_scope_id}")
        return self.repo.create_service(
            self.db,
            ctx.owner_scope_id,
            name=data.name.strip(),
            duration=data.duration,
            price=round(data.price, 2),
        )

    def update_service(self, service_id: int, data: ServiceUpdate, ctx: AuthContext) -> Service:
        """
        Update a service.

        Changing the duration does not move existing appointments; their end
        time is recomputed the next time their date or service changes.
        """
        service = self.get_service(service_id, ctx.owner_scope_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("price") is not None:
            updates["price"] = round(updates["price"], 2)
        return self.repo.update_service(self.db, service, **updates)

    def delete_service(self, service_id: int, ctx: AuthContext) -> None:
        service = self.get_service(service_id, ctx.owner_scope_id)
        in_use = self.repo.count_appointments(self.db, service.id)
        if in_use:
            logger.warning(f"⚠️ Refusing to delete service {service_id}: {in_use} appointment(s)")
            raise ServiceInUseError(
                f"Service is used by {in_use} appointment(s) and cannot be deleted"
            )
        self.repo.delete_service(self.db, service)
