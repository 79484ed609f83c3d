"""User service - Business logic for user accounts"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import User
from ...security_utils import hash_password, mask_email
from .repository import UserRepository
from .schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"email", "password_hash", "role", "is_active", "email_verified"}


class UserService:
    """Service layer for users"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def get_users(self, role: Optional[str] = None, is_active: Optional[bool] = None) -> list[User]:
        return self.repo.get_users(self.db, role, is_active)

    def get_user(self, user_id: str) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def create_user(self, data: UserCreate) -> User:
        if self.repo.get_user_by_email(self.db, data.email):
            raise HTTPException(status_code=409, detail="Email already exists")

        user_data = data.model_dump(exclude={"password"})
        if data.password:
            user_data["password_hash"] = hash_password(data.password)

        try:
            user = self.repo.create_user(self.db, **user_data)
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail="Email already exists") from e

        logger.info(f"Created user {user.id} ({mask_email(user.email)}) with role {user.role}")
        return user

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        user = self.get_user(user_id)
        updates = data.model_dump(exclude_unset=True)

        password = updates.pop("password", None)
        if password:
            updates["password_hash"] = hash_password(password)

        for field, value in updates.items():
            if value is None and field in REQUIRED_COLUMNS:
                raise HTTPException(status_code=400, detail=f"Field cannot be null: {field}")

        email = updates.get("email")
        if email and email != user.email:
            if self.repo.get_user_by_email(self.db, email):
                raise HTTPException(status_code=409, detail="Email already exists")

        user = self.repo.update_user(self.db, user, **updates)
        logger.info(f"Updated user {user_id}: {sorted(k for k in updates if k != 'password_hash')}")
        return user

    def delete_user(self, user_id: str) -> dict:
        """
        Deactivate the user, then try to remove the row.

        Users still referenced by companies, referrers or employees stay in
        the table as inactive accounts.
        """
        user = self.get_user(user_id)
        self.repo.update_user(self.db, user, is_active=False)

        try:
            self.repo.delete_user(self.db, user)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Physical delete of user {user_id} failed, user is deactivated: {e}")
            return {
                "deleted": False,
                "message": "User deactivated successfully (cannot delete due to foreign key constraints)",
                "data": {"id": user_id, "is_active": False},
            }

        logger.info(f"Deleted user {user_id}")
        return {"deleted": True, "message": "User deleted successfully"}
