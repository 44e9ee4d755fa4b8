# backend/app/schemas/user.py
"""
Request/response schemas for the auth API.

The request models are the first validation pass: presence, emptiness and
length only. Format rules (MSISDN pattern, allowed name characters) are
checked by the auth service.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    msisdn: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    msisdn: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


# Returned to clients (NO password hash)
class UserResponse(BaseModel):
    id: int
    name: str
    msisdn: str
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class TokenPayload(BaseModel):
    sub: Optional[str] = None
    msisdn: Optional[str] = None
    exp: Optional[int] = None


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    message: str
