"""Professional service - Business logic for professionals, schedules and system access"""

import logging

from sqlalchemy.orm import Session

from ...auth import AuthContext
from ...errors import NotFoundError, ValidationError
from ...models import Professional, User
from ...permissions import (
    DEFAULT_PROFESSIONAL_PERMISSIONS,
    GRANTABLE_PERMISSIONS,
    Permission,
    parse_permissions,
)
from ...security_utils import hash_password
from ..scheduling.timevalues import WorkSchedule, format_work_days
from .repository import ProfessionalRepository
from .schemas import GrantAccessRequest, ProfessionalCreate, ProfessionalUpdate

logger = logging.getLogger(__name__)

DEFAULT_WORK_DAYS = "1,2,3,4,5"
DEFAULT_WORK_START = "08:00"
DEFAULT_WORK_END = "18:00"


def validate_schedule(
    work_days: str,
    work_start_time: str,
    work_end_time: str,
    lunch_start_time,
    lunch_end_time,
) -> WorkSchedule:
    try:
        return WorkSchedule.parse(
            None, work_days, work_start_time, work_end_time, lunch_start_time, lunch_end_time
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


class ProfessionalService:
    """Service layer for professionals"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProfessionalRepository()

    def get_professionals(self, owner_id: int) -> list[Professional]:
        return self.repo.get_professionals(self.db, owner_id)

    def get_schedules(self, owner_id: int) -> list[WorkSchedule]:
        """Parsed work schedules of every professional of an owner"""
        schedules = []
        for professional in self.repo.get_professionals(self.db, owner_id):
            try:
                schedules.append(WorkSchedule.from_professional(professional))
            except ValueError as e:
                # Rows written before validation existed; leave them out of availability
                logger.warning(f"⚠️ Skipping professional {professional.id} with invalid schedule: {e}")
        return schedules

    def get_professional(self, professional_id: int, owner_id: int) -> Professional:
        professional = self.repo.get_professional_by_id(self.db, professional_id, owner_id)
        if not professional:
            raise NotFoundError("Professional not found")
        return professional

    def create_professional(self, data: ProfessionalCreate, ctx: AuthContext) -> Professional:
        work_days = format_work_days(data.workDays) if data.workDays is not None else DEFAULT_WORK_DAYS
        work_start = data.workStartTime or DEFAULT_WORK_START
        work_end = data.workEndTime or DEFAULT_WORK_END
        validate_schedule(work_days, work_start, work_end, data.lunchStartTime, data.lunchEndTime)

        logger.info(f"📥 Creating professional '{data.name}' for owner_id: {ctx.owner_scope_id}")
        return self.repo.create_professional(
            self.db,
            ctx.owner_scope_id,
            name=data.name.strip(),
            specialty=data.specialty.strip(),
            phone=data.phone,
            email=data.email,
            work_days=work_days,
            work_start_time=work_start,
            work_end_time=work_end,
            lunch_start_time=data.lunchStartTime,
            lunch_end_time=data.lunchEndTime,
        )

    def update_professional(
        self, professional_id: int, data: ProfessionalUpdate, ctx: AuthContext
    ) -> Professional:
        professional = self.get_professional(professional_id, ctx.owner_scope_id)
        fields = data.model_dump(exclude_unset=True)

        updates = {}
        for field, column in (
            ("name", "name"),
            ("specialty", "specialty"),
            ("phone", "phone"),
        ):
            if fields.get(field) is not None:
                updates[column] = fields[field]
        if "email" in fields:
            updates["email"] = fields["email"]
        if fields.get("workDays") is not None:
            updates["work_days"] = format_work_days(fields["workDays"])
        if fields.get("workStartTime") is not None:
            updates["work_start_time"] = fields["workStartTime"]
        if fields.get("workEndTime") is not None:
            updates["work_end_time"] = fields["workEndTime"]
        # Explicit null clears the lunch break
        if "lunchStartTime" in fields:
            updates["lunch_start_time"] = fields["lunchStartTime"]
        if "lunchEndTime" in fields:
            updates["lunch_end_time"] = fields["lunchEndTime"]

        validate_schedule(
            updates.get("work_days", professional.work_days),
            updates.get("work_start_time", professional.work_start_time),
            updates.get("work_end_time", professional.work_end_time),
            updates.get("lunch_start_time", professional.lunch_start_time),
            updates.get("lunch_end_time", professional.lunch_end_time),
        )
        return self.repo.update_professional(self.db, professional, **updates)

    def delete_professional(self, professional_id: int, ctx: AuthContext) -> None:
        professional = self.get_professional(professional_id, ctx.owner_scope_id)
        logger.info(
            f"🗑️ Deleting professional {professional_id}; "
            f"{len(professional.appointments)} appointment(s) become unassigned"
        )
        self.repo.delete_professional(self.db, professional)

    # ------------------------------------------------------------------
    # System access
    # ------------------------------------------------------------------

    def grant_access(
        self, professional_id: int, data: GrantAccessRequest, ctx: AuthContext
    ) -> User:
        professional = self.get_professional(professional_id, ctx.owner_scope_id)
        if professional.user is not None:
            raise ValidationError("Professional already has system access")

        username = data.username.strip()
        if self.repo.get_user_by_username(self.db, username):
            raise ValidationError("Username already taken")

        user = self.repo.create_professional_user(
            self.db,
            professional,
            username=username,
            password_hash=hash_password(data.password),
            permissions=sorted(p.value for p in DEFAULT_PROFESSIONAL_PERMISSIONS),
        )
        logger.info(f"🔑 Granted system access to professional {professional_id} as '{username}'")
        return user

    def revoke_access(self, professional_id: int, ctx: AuthContext) -> Professional:
        professional = self.get_professional(professional_id, ctx.owner_scope_id)
        if professional.user is None:
            raise ValidationError("Professional has no system access")
        self.repo.delete_user(self.db, professional)
        logger.info(f"🔒 Revoked system access of professional {professional_id}")
        return professional

    def get_permissions(self, professional_id: int, ctx: AuthContext) -> list[Permission]:
        """Permissions granted to the professional's login, in declaration order"""
        professional = self.get_professional(professional_id, ctx.owner_scope_id)
        if professional.user is None:
            raise NotFoundError("Professional has no system access")
        granted = parse_permissions(p.permission for p in professional.user.permissions)
        return [p for p in Permission if p in granted and p in GRANTABLE_PERMISSIONS]

    def update_permissions(
        self, professional_id: int, permissions: list[Permission], ctx: AuthContext
    ) -> list[Permission]:
        """Replace the professional's permissions with ``permissions``"""
        professional = self.get_professional(professional_id, ctx.owner_scope_id)
        if professional.user is None:
            raise NotFoundError("Professional has no system access")

        denied = sorted({p.value for p in permissions if p not in GRANTABLE_PERMISSIONS})
        if denied:
            raise ValidationError(f"Permission(s) cannot be granted to professionals: {', '.join(denied)}")

        granted = {p.value for p in permissions}
        self.repo.replace_permissions(self.db, professional.user, granted)
        logger.info(f"🛡️ Updated permissions of professional {professional_id}: {sorted(granted)}")
        return self.get_permissions(professional_id, ctx)
