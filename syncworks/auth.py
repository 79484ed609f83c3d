import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import User
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def resolve_token_user(token: str, db: Session) -> Optional[User]:
    """Return the active user a session token belongs to, or None"""
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        return None

    user = db.query(User).filter(User.id == payload["sub"]).first()
    if not user or not user.is_active:
        return None
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer session token"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    user = resolve_token_user(credentials.credentials, db)
    if not user:
        logger.warning("Rejected bearer token: invalid, expired or user inactive")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return user


def require_roles(*roles: str):
    """
    Dependency factory restricting a route to the given roles.

    Example:
        @router.post("", dependencies=[Depends(require_roles("system_admin"))])
    """

    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(f"User {user.id} with role {user.role} denied (requires {roles})")
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return role_checker
