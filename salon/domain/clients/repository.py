"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session, owner_id: int) -> list[Client]:
        """Get all clients for an owner"""
        return db.query(Client).filter(Client.owner_id == owner_id).order_by(Client.name.asc()).all()

    @staticmethod
    def count_clients(db: Session, owner_id: int) -> int:
        return db.query(Client).filter(Client.owner_id == owner_id).count()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int, owner_id: int) -> Optional[Client]:
        """Get a specific client by ID"""
        return (
            db.query(Client)
            .filter(Client.id == client_id, Client.owner_id == owner_id)
            .first()
        )

    @staticmethod
    def get_client_by_phone(db: Session, phone: str, owner_id: int) -> Optional[Client]:
        return (
            db.query(Client)
            .filter(Client.phone == phone, Client.owner_id == owner_id)
            .order_by(Client.id.asc())
            .first()
        )

    @staticmethod
    def search_clients(
        db: Session, owner_id: int, query: str, phone_digits: Optional[str] = None
    ) -> list[Client]:
        """Match name (case-insensitive substring) or phone digits (substring)"""
        conditions = [Client.name.ilike(f"%{query}%")]
        if phone_digits:
            conditions.append(Client.phone.like(f"%{phone_digits}%"))
        return (
            db.query(Client)
            .filter(Client.owner_id == owner_id, or_(*conditions))
            .order_by(Client.name.asc())
            .all()
        )

    @staticmethod
    def create_client(db: Session, owner_id: int, commit: bool = True, **client_data) -> Client:
        """Create a new client"""
        client = Client(owner_id=owner_id, **client_data)
        db.add(client)
        if commit:
            db.commit()
            db.refresh(client)
        else:
            db.flush()
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        """Delete a client and their appointments"""
        db.delete(client)
        db.commit()
