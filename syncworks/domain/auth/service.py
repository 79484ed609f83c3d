"""Auth service - Password login and session resolution"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import resolve_token_user
from ...models import User
from ...security_utils import (
    create_access_token,
    hash_password,
    mask_email,
    needs_rehash,
    verify_password,
)
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Service layer for authentication"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def login(self, email: Optional[str], password: Optional[str]) -> tuple[User, str]:
        """
        Verify credentials and issue a session token.

        Returns:
            Tuple of (user, access_token)
        """
        if not email or not password:
            raise HTTPException(status_code=400, detail="Email and password are required")

        user = self.repo.get_user_by_email(self.db, email)
        if not user or not user.is_active:
            logger.warning(f"Login rejected for {mask_email(email)}: unknown or inactive user")
            raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login rejected for {mask_email(email)}: wrong password")
            raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

        updates = {"last_login_at": datetime.now(timezone.utc).replace(tzinfo=None)}
        if needs_rehash(user.password_hash):
            # Upgrade legacy and deprecated hashes while the plain password is at hand
            updates["password_hash"] = hash_password(password)
            logger.info(f"Upgraded password hash for user {user.id}")

        user = self.repo.update_user(self.db, user, **updates)
        token = create_access_token({"sub": user.id, "role": user.role})
        logger.info(f"User {user.id} logged in")
        return user, token

    def resolve_user(
        self,
        token: Optional[str] = None,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Optional[User]:
        """Active user identified by a bearer token, a user id or an email"""
        if token:
            return resolve_token_user(token, self.db)

        user = None
        if user_id:
            user = self.repo.get_user_by_id(self.db, user_id)
        elif email:
            user = self.repo.get_user_by_email(self.db, email)

        if not user or not user.is_active:
            return None
        return user
