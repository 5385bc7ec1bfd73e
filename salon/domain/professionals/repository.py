"""Professional repository - Database operations for professionals and their accounts"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Professional, User, UserPermission


class ProfessionalRepository:
    """Repository for professional database operations"""

    @staticmethod
    def get_professionals(db: Session, owner_id: int) -> list[Professional]:
        return (
            db.query(Professional)
            .options(joinedload(Professional.user))
            .filter(Professional.owner_id == owner_id)
            .order_by(Professional.name.asc())
            .all()
        )

    @staticmethod
    def get_professional_by_id(
        db: Session, professional_id: int, owner_id: int
    ) -> Optional[Professional]:
        return (
            db.query(Professional)
            .options(joinedload(Professional.user))
            .filter(Professional.id == professional_id, Professional.owner_id == owner_id)
            .first()
        )

    @staticmethod
    def create_professional(db: Session, owner_id: int, **data) -> Professional:
        professional = Professional(owner_id=owner_id, **data)
        db.add(professional)
        db.commit()
        db.refresh(professional)
        return professional

    @staticmethod
    def update_professional(db: Session, professional: Professional, **updates) -> Professional:
        for key, value in updates.items():
            if hasattr(professional, key):
                setattr(professional, key, value)
        db.commit()
        db.refresh(professional)
        return professional

    @staticmethod
    def delete_professional(db: Session, professional: Professional) -> None:
        """Delete a professional; their appointments become unassigned"""
        if professional.user is not None:
            db.delete(professional.user)
        db.delete(professional)
        db.commit()

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def create_professional_user(
        db: Session,
        professional: Professional,
        username: str,
        password_hash: str,
        permissions: list[str],
    ) -> User:
        user = User(
            username=username,
            password_hash=password_hash,
            name=professional.name,
            email=professional.email,
            role="professional",
            owner_id=professional.owner_id,
        )
        user.permissions = [UserPermission(permission=p) for p in permissions]
        db.add(user)
        db.flush()
        professional.user_id = user.id
        db.commit()
        db.refresh(professional)
        return user

    @staticmethod
    def delete_user(db: Session, professional: Professional) -> None:
        db.delete(professional.user)
        db.commit()
        db.refresh(professional)

    @staticmethod
    def replace_permissions(db: Session, user: User, permissions: set[str]) -> User:
        current = {row.permission: row for row in user.permissions}
        for permission, row in current.items():
            if permission not in permissions:
                user.permissions.remove(row)
        for permission in sorted(permissions - set(current)):
            user.permissions.append(UserPermission(permission=permission))
        db.commit()
        db.refresh(user)
        return user
