"""Password hashing for user accounts: bcrypt over a SHA-256 pre-hash.

bcrypt only reads the first 72 bytes of its input; hashing the password
with SHA-256 first (base64, 44 bytes) keeps long passphrases significant.
The async helpers run bcrypt in a worker thread.
"""

import asyncio
import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password (False on malformed hashes)."""
    try:
        return bool(bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """bcrypt hash (with fresh salt) of the pre-hashed password."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(get_password_hash, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    return await asyncio.to_thread(verify_password, plain_password, hashed_password)
