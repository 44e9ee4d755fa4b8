# backend/app/db/__init__.py
import logging

logger = logging.getLogger(__name__)


async def init_models(drop: bool = False) -> None:
    """
    Create every table registered on ``Base.metadata``.

    ``drop=True`` wipes existing tables first (development/tests only).
    """
    from backend.app.db.base import Base, engine
    # Registers the model tables on Base.metadata
    from backend.app import models  # noqa: F401

    try:
        async with engine.begin() as conn:
            if drop:
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")
    except Exception as e:
        logger.error("Failed to create database tables: %s", e)
        raise
