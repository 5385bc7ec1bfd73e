"""Service catalog router - FastAPI endpoints for salon services"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...auth import AuthContext, require_permission
from ...database import get_db
from ...permissions import Permission
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])

can_view = require_permission(Permission.VIEW_SERVICES)
can_manage = require_permission(Permission.MANAGE_SERVICES)


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=list[ServiceResponse])
async def get_services(
    ctx: AuthContext = Depends(can_view),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return [ServiceResponse.from_model(s) for s in catalog.get_services(ctx.owner_scope_id)]


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    ctx: AuthContext = Depends(can_view),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.from_model(catalog.get_service(service_id, ctx.owner_scope_id))


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    ctx: AuthContext = Depends(can_manage),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.from_model(catalog.create_service(data, ctx))


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    ctx: AuthContext = Depends(can_manage),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.from_model(catalog.update_service(service_id, data, ctx))


@router.delete("/{service_id}", status_code=204)
async def delete_service(
    service_id: int,
    ctx: AuthContext = Depends(can_manage),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Delete a service that no appointment references"""
    catalog.delete_service(service_id, ctx)
    return Response(status_code=204)
