"""Signup, login and current-user endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from kimi_kitchen.api.deps import get_current_user
from kimi_kitchen.database import get_db
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.user import (
    CurrentUserResponse,
    LoginRequest,
    TokenResponse,
    UserRegister,
    UserResponse,
)
from kimi_kitchen.services.auth import create_access_token, hash_password, verify_password
from kimi_kitchen.services.roles import Role, get_role_display_name, get_role_permissions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    data: UserRegister,
    db: Session = Depends(get_db),
):
    """Create a CUSTOMER account."""
    if db.query(User).filter(User.username == data.username).first():
        raise HTTPException(status_code=409, detail="Username already exists")
    if data.email and db.query(User).filter(User.email == data.email).first():
        raise HTTPException(status_code=409, detail="Email already registered")

    user = User(
        username=data.username,
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=Role.CUSTOMER,
        active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.username}")
    return user


@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
):
    """Exchange username/password for an access token."""
    user = db.query(User).filter(User.username == data.username).first()
    if not user or not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid username or password")
    if not user.active:
        raise HTTPException(status_code=401, detail="Account is deactivated")

    token = create_access_token(user.id, user.username, user.role)
    return TokenResponse(access_token=token, user=user)


@router.get("/me", response_model=CurrentUserResponse)
def me(user: User = Depends(get_current_user)):
    """Return the signed-in user with role details."""
    return CurrentUserResponse(
        id=user.id,
        username=user.username,
        name=user.name,
        email=user.email,
        role=user.role,
        active=user.active,
        created_at=user.created_at,
        role_display_name=get_role_display_name(user.role),
        permissions=get_role_permissions(user.role),
    )
