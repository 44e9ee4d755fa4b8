# backend/app/services/auth_service.py
"""
Authentication business logic: register, login, profile, logout.

Validation here is the second pass. By the time a call arrives, request
binding has already rejected missing/empty fields; this layer enforces
format rules and raises BusinessValidationError for them.
"""
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import (
    AuthenticationError,
    BusinessValidationError,
    ConflictError,
    InactiveUserError,
    TokenInvalidError,
)
from backend.app.core.logging import get_logger
from backend.app.models.user import User
from backend.app.repositories.user_repository import (
    DUPLICATE_MSISDN_MESSAGE,
    UserRepository,
)
from backend.app.security import hashing, jwt
from backend.app.security.validation import (
    normalize_msisdn,
    validate_msisdn,
    validate_name,
    validate_password,
)

logger = get_logger(__name__)

INVALID_CREDENTIALS = "invalid credentials"
LOGOUT_MESSAGE = "Logged out successfully. Please remove the token from client."


class AuthService:

    @staticmethod
    async def register(db: AsyncSession, name: str, msisdn: str, password: str) -> Tuple[User, str]:
        """
        Create a user and mint its first token.

        Raises:
            BusinessValidationError: name, MSISDN or password breaks a format rule
            ConflictError: the canonical MSISDN is already registered
        """
        if not validate_name(name):
            raise BusinessValidationError("invalid name format")
        if not validate_msisdn(msisdn):
            raise BusinessValidationError("invalid MSISDN format")
        if not validate_password(password):
            raise BusinessValidationError("password must be at least 6 characters long")

        canonical_msisdn = normalize_msisdn(msisdn)

        # Fast path for the common duplicate; the unique index still arbitrates races
        if await UserRepository.exists_by_msisdn(db, canonical_msisdn):
            raise ConflictError(DUPLICATE_MSISDN_MESSAGE)

        user = User(
            name=name.strip(),
            msisdn=canonical_msisdn,
            hashed_password=await hashing.get_password_hash_async(password),
            is_active=True,
        )
        user = await UserRepository.create(db, user)

        token = jwt.create_user_token(user)
        logger.info("Registered user %s", user.id, extra={"user_id": user.id})
        return user, token

    @staticmethod
    async def login(db: AsyncSession, msisdn: str, password: str) -> Tuple[User, str]:
        """
        Verify credentials and mint a token.

        Unknown number, inactive account, malformed number and wrong password
        all raise the same AuthenticationError.
        """
        if not validate_msisdn(msisdn):
            logger.info("Login rejected: malformed MSISDN")
            raise AuthenticationError(INVALID_CREDENTIALS)

        user = await UserRepository.get_by_msisdn(db, normalize_msisdn(msisdn), active_only=True)
        if user is None:
            # Spend the same bcrypt time as a real check
            await hashing.burn_verify_time_async(password)
            logger.info("Login rejected: invalid credentials")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not await hashing.verify_password_async(password, user.hashed_password):
            logger.info("Login rejected: invalid credentials")
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = jwt.create_user_token(user)
        logger.info("User %s logged in", user.id, extra={"user_id": user.id})
        return user, token

    @staticmethod
    async def get_profile(db: AsyncSession, user_id: int) -> User:
        user = await UserRepository.get_active_by_id(db, user_id)
        if user is None:
            raise InactiveUserError()
        return user

    @staticmethod
    async def logout(token: Optional[str] = None) -> str:
        """
        Always succeeds. Tokens are stateless, so there is nothing to revoke
        server-side; the client discards its copy.
        """
        user_id = None
        if token:
            try:
                user_id = jwt.decode_access_token(token).sub
            except TokenInvalidError:
                user_id = None
        logger.info("Logout (user=%s)", user_id or "anonymous")
        return LOGOUT_MESSAGE

