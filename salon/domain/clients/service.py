"""Client service - Business logic for client operations"""

import logging
import re
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import AuthContext
from ...errors import NotFoundError, ValidationError
from ...models import Client
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(self, ctx: AuthContext) -> list[Client]:
        return self.repo.get_clients(self.db, ctx.owner_scope_id)

    def get_client(self, client_id: int, ctx: AuthContext) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id, ctx.owner_scope_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    def search_clients(self, query: Optional[str], ctx: AuthContext) -> list[Client]:
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query required")
        phone_digits = re.sub(r"\D", "", query)
        return self.repo.search_clients(self.db, ctx.owner_scope_id, query, phone_digits or None)

    def create_client(self, data: ClientCreate, ctx: AuthContext) -> Client:
        logger.info(f"📥 Creating client for owner_id: {ctx.owner_scope_id}")
        return self.repo.create_client(
            self.db, ctx.owner_scope_id, name=data.name.strip(), phone=data.phone, email=data.email
        )

    def find_or_create_by_phone(
        self, owner_id: int, name: str, phone: str, email: Optional[str] = None
    ) -> Client:
        """
        Reuse the owner's client with this phone number, or add a new one.

        Does not commit; the caller's transaction decides.
        """
        client = self.repo.get_client_by_phone(self.db, phone, owner_id)
        if client:
            if email and not client.email:
                client.email = email
            return client
        logger.info(f"🆕 New client from public booking for owner_id: {owner_id}")
        return self.repo.create_client(
            self.db, owner_id, commit=False, name=name.strip(), phone=phone, email=email
        )

    def update_client(self, client_id: int, data: ClientUpdate, ctx: AuthContext) -> Client:
        client = self.get_client(client_id, ctx)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("name") is None:
            updates.pop("name", None)
        if updates.get("phone") is None:
            updates.pop("phone", None)
        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: int, ctx: AuthContext) -> None:
        client = self.get_client(client_id, ctx)
        logger.info(f"🗑️ Deleting client {client_id} with {len(client.appointments)} appointment(s)")
        self.repo.delete_client(self.db, client)
