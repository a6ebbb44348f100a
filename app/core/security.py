# File: app/core/security.py

"""
Password hashing helpers.

Hashes are salted bcrypt digests stored as UTF-8 strings. bcrypt is
CPU-bound, so `hash_password` runs it in the threadpool and can be awaited
from request handlers without holding the event loop.
"""

import bcrypt
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings


def _hash(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


async def hash_password(password: str) -> str:
    """
    Return a salted one-way hash of `password`.

    No length or complexity rules are applied here; the request schema
    enforces those before we get called.
    """
    return await run_in_threadpool(_hash, password, settings.bcrypt_rounds)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )
