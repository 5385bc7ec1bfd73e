import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..config import ALLOW_REGISTRATION
from ..database import get_db
from ..errors import ValidationError
from ..models import User
from ..rate_limiter import create_rate_limiter
from ..schemas import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from ..security_utils import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])

rate_limit_login = create_rate_limiter(limit=10, window_seconds=300, key_prefix="login")
rate_limit_register = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="register")


@router.post("/register", response_model=LoginResponse, status_code=201)
async def register(
    data: RegisterRequest,
    _: None = Depends(rate_limit_register),
    db: Session = Depends(get_db),
):
    """Create a salon owner (admin) account and sign it in"""
    if not ALLOW_REGISTRATION:
        raise HTTPException(status_code=403, detail="Registration is disabled")

    username = data.username.strip()
    if db.query(User).filter(User.username == username).first():
        raise ValidationError("Username already taken")

    user = User(
        username=username,
        password_hash=hash_password(data.password),
        name=data.name.strip(),
        email=data.email,
        role="admin",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"✅ Registered admin account '{username}' (id: {user.id})")

    return LoginResponse(
        accessToken=create_access_token(user.id, user.role),
        user=UserResponse.from_model(user),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    _: None = Depends(rate_limit_login),
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.username == data.username.strip()).first()
    if not user or not verify_password(data.password, user.password_hash):
        logger.warning(f"⚠️ Failed login for username '{data.username}'")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    logger.info(f"🔐 User {user.id} signed in ({user.role})")
    return LoginResponse(
        accessToken=create_access_token(user.id, user.role),
        user=UserResponse.from_model(user),
    )
