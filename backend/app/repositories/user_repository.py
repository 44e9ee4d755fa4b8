# backend/app/repositories/user_repository.py
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import ConflictError
from backend.app.models.user import User

DUPLICATE_MSISDN_MESSAGE = "user already exists with this MSISDN"


class UserRepository:
    """Identity store: users keyed by canonical MSISDN."""

    @staticmethod
    async def get_by_msisdn(db: AsyncSession, msisdn: str, active_only: bool = False) -> Optional[User]:
        query = select(User).where(User.msisdn == msisdn)
        if active_only:
            query = query.where(User.is_active.is_(True))
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_active_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
        result = await db.execute(
            select(User).where(User.id == user_id, User.is_active.is_(True))
        )
        return result.scalars().first()

    @staticmethod
    async def exists_by_msisdn(db: AsyncSession, msisdn: str) -> bool:
        result = await db.execute(select(User.id).where(User.msisdn == msisdn))
        return result.first() is not None

    @staticmethod
    async def create(db: AsyncSession, user: User) -> User:
        """
        Insert ``user`` unless its MSISDN is taken.

        The unique index decides between concurrent writers: the loser's
        commit fails with IntegrityError, surfaced as ConflictError.
        """
        msisdn = user.msisdn
        db.add(user)
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            if "msisdn" in str(exc.orig).lower():
                raise ConflictError(DUPLICATE_MSISDN_MESSAGE) from exc
            raise
        except OperationalError as exc:
            # SQLite aborts a writer that lost the lock race instead of
            # queueing it; the row it lost to is visible once it rolls back
            await db.rollback()
            if await UserRepository.exists_by_msisdn(db, msisdn):
                raise ConflictError(DUPLICATE_MSISDN_MESSAGE) from exc
            raise
        await db.refresh(user)
        return user
