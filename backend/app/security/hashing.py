# backend/app/security/hashing.py
"""
Password hashing with bcrypt.

bcrypt is deliberately slow, so the async helpers run it in Starlette's
worker thread pool. The pool's capacity limiter bounds how many hashes
run at once and keeps the event loop free for other requests.
"""
import base64
import hashlib
from functools import lru_cache

import bcrypt
from starlette.concurrency import run_in_threadpool

from backend.app.core.config import settings


def _encode(password: str) -> bytes:
    # bcrypt ignores input past 72 bytes; a base64 SHA-256 digest is 44
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def get_password_hash(password: str) -> str:
    """Hash a password (auto-salted, cost factor from BCRYPT_ROUNDS)."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a password against a bcrypt hash."""
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except (ValueError, TypeError):
        return False


async def get_password_hash_async(password: str) -> str:
    return await run_in_threadpool(get_password_hash, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return get_password_hash("not-a-real-password")


def burn_verify_time(password: str) -> bool:
    """
    Run a full bcrypt check that never succeeds.

    Used when no user matches, so the response time does not reveal
    whether the number is registered.
    """
    verify_password(password, _dummy_hash())
    return False


async def burn_verify_time_async(password: str) -> bool:
    return await run_in_threadpool(burn_verify_time, password)
