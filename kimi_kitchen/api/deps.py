"""Shared route dependencies: current user and role guards."""
from uuid import UUID

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from kimi_kitchen.database import get_db
from kimi_kitchen.models.user import User
from kimi_kitchen.services.auth import decode_access_token
from kimi_kitchen.services.roles import has_any_role, has_role

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user, or fail with 401."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise HTTPException(status_code=401, detail="Unauthorized")

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.active:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_any_role(*roles: str, message: str | None = None):
    """Dependency factory: the user's role must be one of roles."""
    detail = message or f"Access denied. Requires one of: {', '.join(roles)}."

    def _check(user: User = Depends(get_current_user)) -> User:
        if not has_any_role(user.role, roles):
            raise HTTPException(status_code=403, detail=detail)
        return user

    return _check


def require_role(required_role: str, message: str | None = None):
    """Dependency factory: the user's role must rank at or above required_role."""
    detail = message or f"Access denied. {required_role.title()} privileges required."

    def _check(user: User = Depends(get_current_user)) -> User:
        if not has_role(user.role, required_role):
            raise HTTPException(status_code=403, detail=detail)
        return user

    return _check
