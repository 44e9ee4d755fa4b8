# backend/app/api/deps.py
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import (
    AuthorizationHeaderMalformed,
    AuthorizationHeaderMissing,
    TokenInvalidError,
)
from backend.app.db.base import get_db
from backend.app.models.user import User
from backend.app.security import jwt
from backend.app.services.auth_service import AuthService


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    """
    Extract the token from ``Authorization: Bearer <token>``.

    Raises 401 when the header is absent or not in Bearer form.
    """
    if not authorization or not authorization.strip():
        raise AuthorizationHeaderMissing()

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthorizationHeaderMalformed()
    return parts[1]


def get_optional_bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Like get_bearer_token, but a missing or odd header just yields None."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) == 2 and parts[0] == "Bearer" and parts[1]:
        return parts[1]
    return None


async def get_current_user(
        request: Request,
        db: AsyncSession = Depends(get_db),
        token: str = Depends(get_bearer_token),
) -> User:
    token_data = jwt.decode_access_token(token)
    try:
        user_id = int(token_data.sub)
    except (TypeError, ValueError):
        raise TokenInvalidError()

    # Make sure the account still exists and is active
    user = await AuthService.get_profile(db, user_id)

    # Picked up by the request logging middleware
    request.state.user_id = user.id
    return user
