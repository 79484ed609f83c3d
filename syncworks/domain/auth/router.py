"""Auth router - Login and session check endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ...auth import security
from ...config import LOGIN_RATE_LIMIT, LOGIN_RATE_WINDOW_SECONDS
from ...database import get_db
from ...errors import error_response
from ...rate_limiter import create_rate_limiter
from ..users.schemas import UserResponse
from .schemas import LoginRequest
from .service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])

login_limiter = create_rate_limiter(
    limit=LOGIN_RATE_LIMIT, window_seconds=LOGIN_RATE_WINDOW_SECONDS, key_prefix="login"
)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/login", dependencies=[Depends(login_limiter)])
async def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    user, token = service.login(data.email, data.password)
    return {
        "success": True,
        "data": UserResponse.model_validate(user).model_dump(mode="json"),
        "access_token": token,
        "token_type": "bearer",
        "message": "Login successful",
    }


@router.get("/check")
async def check_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    x_user_id: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
    service: AuthService = Depends(get_auth_service),
):
    """Resolve the caller from a bearer token or the x-user-id / x-user-email headers"""
    token = credentials.credentials if credentials else None
    if not token and not x_user_id and not x_user_email:
        return error_response(
            401, "No authentication information provided", authenticated=False
        )

    user = service.resolve_user(token=token, user_id=x_user_id, email=x_user_email)
    if not user:
        return error_response(401, "User not found or inactive", authenticated=False)

    return {
        "success": True,
        "authenticated": True,
        "data": UserResponse.model_validate(user).model_dump(mode="json"),
    }
