"""User administration endpoints."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from kimi_kitchen.api.deps import require_any_role, require_role
from kimi_kitchen.database import get_db
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.user import RoleUpdate, StatusUpdate, UserList, UserUpdateResponse
from kimi_kitchen.services.roles import Role, is_self_modification

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

require_admin_or_manager = require_any_role(
    Role.ADMIN,
    Role.MANAGER,
    message="Access denied. Admin or Manager privileges required.",
)


@router.get("", response_model=UserList)
def list_users(
    db: Session = Depends(get_db),
    user: User = Depends(require_admin_or_manager),
):
    """List all users, newest first."""
    users = db.query(User).order_by(User.created_at.desc()).all()
    return UserList(users=users, count=len(users))


@router.patch("/{user_id}/role", response_model=UserUpdateResponse)
def update_user_role(
    user_id: UUID,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin_or_manager),
):
    """Change another user's role."""
    if is_self_modification(user.id, user_id):
        raise HTTPException(status_code=400, detail="Cannot change your own role")

    target = db.query(User).filter(User.id == user_id).first()
    if not target:
        raise HTTPException(status_code=404, detail="User not found")

    target.role = data.role
    db.commit()
    db.refresh(target)
    logger.info(f"{user.username} set role of {target.username} to {data.role}")
    return UserUpdateResponse(message="User role updated successfully", user=target)


@router.patch("/{user_id}/status", response_model=UserUpdateResponse)
def update_user_status(
    user_id: UUID,
    data: StatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_role(Role.ADMIN, message="Access denied. Admin privileges required.")),
):
    """Activate or deactivate another user."""
    if is_self_modification(user.id, user_id):
        raise HTTPException(status_code=400, detail="Cannot change your own active status")

    target = db.query(User).filter(User.id == user_id).first()
    if not target:
        raise HTTPException(status_code=404, detail="User not found")

    target.active = data.active
    db.commit()
    db.refresh(target)
    action = "activated" if data.active else "deactivated"
    logger.info(f"{user.username} {action} {target.username}")
    return UserUpdateResponse(message=f"User {action} successfully", user=target)
