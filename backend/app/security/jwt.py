# backend/app/security/jwt.py
"""
JWT issuance and verification (python-jose).

Tokens are stateless: signature and expiry are the only checks, there is
no revocation list.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from backend.app.core.config import settings
from backend.app.core.exceptions import TokenInvalidError
from backend.app.schemas.user import TokenPayload


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign ``data`` into a JWT.

    Args:
        data: claims to embed, normally {"sub": "<user id>", "msisdn": ...}
        expires_delta: lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded token string
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user) -> str:
    """Token for a persisted user: subject is the user id."""
    return create_access_token(data={"sub": str(user.id), "msisdn": user.msisdn})


def decode_access_token(token: str) -> TokenPayload:
    """
    Verify signature and expiry and return the claims.

    Raises:
        TokenInvalidError: malformed, tampered or expired token
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        token_data = TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise TokenInvalidError()

    if not token_data.sub:
        raise TokenInvalidError()
    return token_data
