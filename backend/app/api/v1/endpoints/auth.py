# backend/app/api/v1/endpoints/auth.py
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api import deps
from backend.app.core.exceptions import APIError, QuizoraError
from backend.app.db.base import get_db
from backend.app.models.user import User
from backend.app.schemas.user import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserResponse,
)
from backend.app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_in: RegisterRequest, db: AsyncSession = Depends(get_db)):
    try:
        user, token = await AuthService.register(
            db, name=user_in.name, msisdn=user_in.msisdn, password=user_in.password
        )
    except QuizoraError as exc:
        raise APIError(exc.status_code, "Registration Failed", exc.message) from exc

    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    try:
        user, token = await AuthService.login(
            db, msisdn=credentials.msisdn, password=credentials.password
        )
    except QuizoraError as exc:
        raise APIError(exc.status_code, "Login Failed", exc.message) from exc

    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/profile", response_model=UserResponse)
async def profile(current_user: User = Depends(deps.get_current_user)):
    return current_user


@router.post("/logout", response_model=MessageResponse)
async def logout(token: Optional[str] = Depends(deps.get_optional_bearer_token)):
    # Stateless JWT: nothing to revoke, the client drops the token
    message = await AuthService.logout(token)
    return MessageResponse(message=message)
