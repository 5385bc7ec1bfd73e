import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .errors import PermissionDeniedError
from .models import User
from .permissions import Permission, Role, effective_permissions, parse_permissions
from .security_utils import verify_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Who is calling and whose data they act on.

    Resolved once per request; services receive it explicitly and never
    re-derive the owner scope themselves.
    """

    caller_id: int
    owner_scope_id: int
    role: Role
    permissions: frozenset

    def has(self, permission: Permission) -> bool:
        return permission in self.permissions


def build_auth_context(user: User) -> AuthContext:
    role = Role(user.role)
    if role is Role.ADMIN:
        owner_scope_id = user.id
        granted = set()
    else:
        owner_scope_id = user.owner_id
        granted = parse_permissions(p.permission for p in user.permissions)
    return AuthContext(
        caller_id=user.id,
        owner_scope_id=owner_scope_id,
        role=role,
        permissions=effective_permissions(role, granted),
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the Bearer access token"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    payload = verify_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        logger.warning("⚠️ Rejected invalid or expired access token")
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token. Please sign in again.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token claims") from None

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        # Account deleted after the token was issued (e.g. revoked access)
        logger.warning(f"⚠️ Token for missing user {user_id}")
        raise HTTPException(status_code=401, detail="Account no longer exists")

    logger.debug(f"✅ User authenticated: {user.username}")
    return user


async def get_auth_context(user: User = Depends(get_current_user)) -> AuthContext:
    return build_auth_context(user)


def require_permission(permission: Permission):
    """
    Create a dependency that resolves the AuthContext and checks one permission.

    Example usage:
        @router.post("")
        async def create_client(ctx: AuthContext = Depends(require_permission(Permission.MANAGE_CLIENTS))):
            ...
    """

    async def checker(ctx: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if not ctx.has(permission):
            logger.warning(f"🚫 User {ctx.caller_id} lacks permission {permission.value}")
            raise PermissionDeniedError(f"Permission required: {permission.value}")
        return ctx

    return checker


require_admin = require_permission(Permission.MANAGE_PROFESSIONALS)
