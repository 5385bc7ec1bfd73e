"""Professional router - Admin endpoints for professionals and their system access"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...auth import AuthContext, require_admin
from ...database import get_db
from .schemas import (
    GrantAccessRequest,
    PermissionResponse,
    PermissionsUpdate,
    ProfessionalCreate,
    ProfessionalResponse,
    ProfessionalUpdate,
)
from .service import ProfessionalService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/professionals", tags=["Professionals"])


def get_professional_service(db: Session = Depends(get_db)) -> ProfessionalService:
    """Dependency injection for ProfessionalService"""
    return ProfessionalService(db)


@router.get("", response_model=list[ProfessionalResponse])
async def get_professionals(
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    return [ProfessionalResponse.from_model(p) for p in service.get_professionals(ctx.owner_scope_id)]


@router.get("/{professional_id}", response_model=ProfessionalResponse)
async def get_professional(
    professional_id: int,
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    return ProfessionalResponse.from_model(service.get_professional(professional_id, ctx.owner_scope_id))


@router.post("", response_model=ProfessionalResponse, status_code=201)
async def create_professional(
    data: ProfessionalCreate,
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    """Create a professional. Schedule defaults to Monday-Friday 08:00-18:00."""
    return ProfessionalResponse.from_model(service.create_professional(data, ctx))


@router.put("/{professional_id}", response_model=ProfessionalResponse)
async def update_professional(
    professional_id: int,
    data: ProfessionalUpdate,
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    return ProfessionalResponse.from_model(service.update_professional(professional_id, data, ctx))


@router.delete("/{professional_id}", status_code=204)
async def delete_professional(
    professional_id: int,
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    service.delete_professional(professional_id, ctx)
    return Response(status_code=204)


@router.post("/{professional_id}/grant-access", response_model=ProfessionalResponse)
async def grant_access(
    professional_id: int,
    data: GrantAccessRequest,
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    """Create a login account for the professional with default view permissions"""
    service.grant_access(professional_id, data, ctx)
    return ProfessionalResponse.from_model(service.get_professional(professional_id, ctx.owner_scope_id))


@router.post("/{professional_id}/revoke-access", response_model=ProfessionalResponse)
async def revoke_access(
    professional_id: int,
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    return ProfessionalResponse.from_model(service.revoke_access(professional_id, ctx))


@router.get("/{professional_id}/permissions", response_model=list[PermissionResponse])
async def get_permissions(
    professional_id: int,
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    return [PermissionResponse(permission=p) for p in service.get_permissions(professional_id, ctx)]


@router.put("/{professional_id}/permissions", response_model=list[PermissionResponse])
async def update_permissions(
    professional_id: int,
    data: PermissionsUpdate,
    ctx: AuthContext = Depends(require_admin),
    service: ProfessionalService = Depends(get_professional_service),
):
    """Replace the permission set, e.g. ``{"permissions": ["view_clients"]}``"""
    granted = service.update_permissions(professional_id, data.permissions, ctx)
    return [PermissionResponse(permission=p) for p in granted]
