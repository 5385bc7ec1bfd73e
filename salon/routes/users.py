import logging

from fastapi import APIRouter, Depends

from ..auth import AuthContext, get_auth_context, get_current_user
from ..models import User
from ..permissions import permission_map
from ..schemas import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])


@router.get("", response_model=UserResponse)
async def get_user(current_user: User = Depends(get_current_user)):
    """Get the signed-in user"""
    return UserResponse.from_model(current_user)


@router.get("/permissions", response_model=dict[str, bool])
async def get_user_permissions(ctx: AuthContext = Depends(get_auth_context)):
    """Every permission kind with whether the caller holds it"""
    return permission_map(ctx.permissions)
