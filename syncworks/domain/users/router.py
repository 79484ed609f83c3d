"""User router - FastAPI endpoints for user accounts"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from .schemas import UserCreate, UserResponse, UserUpdate
from .service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])

# Account writes are limited to system admins
user_admin = require_roles("system_admin")


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


def _dump(user) -> dict:
    return UserResponse.model_validate(user).model_dump(mode="json")


@router.get("")
async def list_users(
    role: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    service: UserService = Depends(get_user_service),
):
    """Users, newest first"""
    users = service.get_users(role, is_active)
    return {"success": True, "data": [_dump(u) for u in users], "count": len(users)}


@router.post("", status_code=201, dependencies=[Depends(user_admin)])
async def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    user = service.create_user(data)
    return {"success": True, "data": _dump(user), "message": "User created successfully"}


@router.get("/{user_id}")
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return {"success": True, "data": _dump(service.get_user(user_id))}


@router.put("/{user_id}", dependencies=[Depends(user_admin)])
async def update_user(
    user_id: str,
    data: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    user = service.update_user(user_id, data)
    return {"success": True, "data": _dump(user), "message": "User updated successfully"}


@router.delete("/{user_id}", dependencies=[Depends(user_admin)])
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    result = service.delete_user(user_id)
    response = {"success": True, "message": result["message"]}
    if "data" in result:
        response["data"] = result["data"]
    return response
