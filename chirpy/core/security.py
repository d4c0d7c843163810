"""Security helpers (hashing and verification)."""

from __future__ import annotations

from functools import lru_cache

from argon2 import PasswordHasher, exceptions as argon_exc

from chirpy.core.config import get_settings
from chirpy.core.errors import HashingError, MalformedHashError


@lru_cache
def _hasher_for(time_cost: int, memory_cost: int, parallelism: int) -> PasswordHasher:
    return PasswordHasher(time_cost=time_cost, memory_cost=memory_cost, parallelism=parallelism)


def _hasher() -> PasswordHasher:
    settings = get_settings()
    return _hasher_for(settings.argon2_time_cost, settings.argon2_memory_cost, settings.argon2_parallelism)


def hash_password(password: str) -> str:
    """Create a salted Argon2id hash; the encoded string carries its own parameters."""
    try:
        return _hasher().hash(password)
    except (argon_exc.HashingError, ValueError) as exc:
        raise HashingError("Couldn't hash the password") from exc


def verify_password(password_hash: str, password: str) -> bool:
    """
    Check ``password`` against a stored hash.

    A mismatch is a plain False; only a stored value that is not an Argon2
    hash raises MalformedHashError.
    """
    try:
        return _hasher().verify(password_hash, password)
    except argon_exc.VerifyMismatchError:
        return False
    except (argon_exc.InvalidHashError, argon_exc.VerificationError, UnicodeError) as exc:
        raise MalformedHashError("Stored password hash is malformed") from exc


def needs_rehash(password_hash: str) -> bool:
    try:
        return _hasher().check_needs_rehash(password_hash)
    except (argon_exc.InvalidHashError, ValueError) as exc:
        raise MalformedHashError("Stored password hash is malformed") from exc
