"""Client router - FastAPI endpoints for client operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import AuthContext, require_permission
from ...database import get_db
from ...permissions import Permission
from .schemas import ClientCreate, ClientResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])

can_view = require_permission(Permission.VIEW_CLIENTS)
can_manage = require_permission(Permission.MANAGE_CLIENTS)


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


@router.get("", response_model=list[ClientResponse])
async def get_clients(
    ctx: AuthContext = Depends(can_view),
    service: ClientService = Depends(get_client_service),
):
    """Get all clients in the caller's salon"""
    return [ClientResponse.from_model(c) for c in service.get_clients(ctx)]


@router.get("/search", response_model=list[ClientResponse])
async def search_clients(
    q: Optional[str] = Query(None),
    ctx: AuthContext = Depends(can_view),
    service: ClientService = Depends(get_client_service),
):
    """Search clients by name or phone"""
    return [ClientResponse.from_model(c) for c in service.search_clients(q, ctx)]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    ctx: AuthContext = Depends(can_view),
    service: ClientService = Depends(get_client_service),
):
    return ClientResponse.from_model(service.get_client(client_id, ctx))


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    data: ClientCreate,
    ctx: AuthContext = Depends(can_manage),
    service: ClientService = Depends(get_client_service),
):
    """Create a new client"""
    return ClientResponse.from_model(service.create_client(data, ctx))


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    ctx: AuthContext = Depends(can_manage),
    service: ClientService = Depends(get_client_service),
):
    """Update a client"""
    return ClientResponse.from_model(service.update_client(client_id, data, ctx))


@router.delete("/{client_id}", status_code=204)
async def delete_client(
    client_id: int,
    ctx: AuthContext = Depends(can_manage),
    service: ClientService = Depends(get_client_service),
):
    """Delete a client together with their appointments"""
    service.delete_client(client_id, ctx)
    return Response(status_code=204)
