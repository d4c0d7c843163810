"""
JSON file persistence for chirps and users.

The whole store is one document, so every operation takes the same lock and
every write rewrites the full file (temp file + atomic rename). Memory is only
updated once the file write succeeded.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
import threading
from dataclasses import asdict
from pathlib import Path
from typing import Callable, TypeVar

from chirpy.core.errors import EmailTakenError, NotFoundError, PersistenceError, StorageInitError
from chirpy.core.logger import logger
from chirpy.domain.models import Chirp, User

T = TypeVar("T")


def _field(data: dict, name: str, kind: type):
    value = data[name]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"{name} must be {kind.__name__}")
    return value


def _chirp_from_dict(data: dict) -> Chirp:
    return Chirp(id=_field(data, "id", int), body=_field(data, "body", str))


def _user_from_dict(data: dict) -> User:
    return User(
        id=_field(data, "id", int),
        email=_field(data, "email", str),
        password_hash=_field(data, "password_hash", str),
    )


def _decode_section(raw: dict, name: str, build: Callable[[dict], T]) -> dict[int, T]:
    section = raw.get(name, {})
    if not isinstance(section, dict):
        raise TypeError(f"{name} must be an object")
    entities: dict[int, T] = {}
    for key, value in section.items():
        if not isinstance(value, dict):
            raise TypeError(f"{name}[{key}] must be an object")
        entity = build(value)
        if entity.id < 1 or int(key) != entity.id:
            raise ValueError(f"{name}[{key}] has mismatched id {entity.id}")
        entities[entity.id] = entity
    return dict(sorted(entities.items()))


def _encode(chirps: dict[int, Chirp], users: dict[int, User]) -> dict:
    return {
        "chirps": {str(cid): asdict(chirps[cid]) for cid in sorted(chirps)},
        "users": {str(uid): asdict(users[uid]) for uid in sorted(users)},
    }


def _next_id(entities: dict[int, object]) -> int:
    return max(entities, default=0) + 1


class JSONStore:
    """CRUD for chirps and users, mirrored in memory and persisted to one JSON file."""

    def __init__(
        self,
        path: Path,
        chirps: dict[int, Chirp] | None = None,
        users: dict[int, User] | None = None,
        *,
        unique_emails: bool = False,
    ) -> None:
        self._path = Path(path)
        self._chirps: dict[int, Chirp] = dict(chirps or {})
        self._users: dict[int, User] = dict(users or {})
        self._unique_emails = unique_emails
        self._lock = threading.Lock()

    # -------------------------------------- lifecycle --------------------------------------
    @classmethod
    def open(cls, path: str | os.PathLike, *, unique_emails: bool = False) -> "JSONStore":
        """Load ``path`` when it exists, otherwise create an empty store file there."""
        target = Path(path)
        if target.exists():
            chirps, users = cls._load(target)
            logger.info("Loaded {} chirps and {} users from {}", len(chirps), len(users), target)
            return cls(target, chirps, users, unique_emails=unique_emails)

        store = cls(target, unique_emails=unique_emails)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            store._persist({}, {})
        except (OSError, PersistenceError) as exc:
            raise StorageInitError(f"Couldn't create database file {target}") from exc
        logger.info("Created empty database file {}", target)
        return store

    @staticmethod
    def _load(target: Path) -> tuple[dict[int, Chirp], dict[int, User]]:
        try:
            with target.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageInitError(f"Couldn't read database file {target}") from exc
        try:
            if not isinstance(raw, dict):
                raise TypeError("database document must be an object")
            return _decode_section(raw, "chirps", _chirp_from_dict), _decode_section(raw, "users", _user_from_dict)
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageInitError(f"Malformed database file {target}: {exc}") from exc

    def _persist(self, chirps: dict[int, Chirp], users: dict[int, User]) -> None:
        try:
            payload = json.dumps(_encode(chirps, users), ensure_ascii=False, indent=2).encode("utf-8")
        except (UnicodeError, ValueError) as exc:
            logger.error("Encoding {} failed: {}", self._path, exc)
            raise PersistenceError("Couldn't encode database document") from exc

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent)
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            logger.error("Writing {} failed: {}", self._path, exc)
            raise PersistenceError("Couldn't write database file") from exc
        finally:
            if tmp_name:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_chirp_id(self) -> int:
        with self._lock:
            return _next_id(self._chirps)

    @property
    def next_user_id(self) -> int:
        with self._lock:
            return _next_id(self._users)

    # -------------------------------------- chirps --------------------------------------
    def create_chirp(self, body: str) -> Chirp:
        with self._lock:
            chirp = Chirp(id=_next_id(self._chirps), body=body)
            chirps = {**self._chirps, chirp.id: chirp}
            self._persist(chirps, self._users)
            self._chirps = chirps
        logger.debug("Created chirp {}", chirp.id)
        return chirp

    def get_chirps(self) -> list[Chirp]:
        with self._lock:
            return sorted(self._chirps.values(), key=lambda chirp: chirp.id)

    def get_chirp(self, chirp_id: int) -> Chirp:
        with self._lock:
            chirp = self._chirps.get(chirp_id)
        if chirp is None:
            raise NotFoundError(f"Chirp {chirp_id} not found")
        return chirp

    # -------------------------------------- users --------------------------------------
    def _email_owner(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, email: str, password_hash: str) -> User:
        with self._lock:
            if self._unique_emails and self._email_owner(email) is not None:
                raise EmailTakenError("Email already registered")
            user = User(id=_next_id(self._users), email=email, password_hash=password_hash)
            users = {**self._users, user.id: user}
            self._persist(self._chirps, users)
            self._users = users
        logger.debug("Created user {}", user.id)
        return user

    def find_user_by_email(self, email: str) -> User:
        with self._lock:
            user = self._email_owner(email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def find_user_by_id(self, user_id: int) -> User:
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def update_user(self, user_id: int, email: str, password_hash: str) -> User:
        with self._lock:
            if user_id not in self._users:
                raise NotFoundError(f"User {user_id} not found")
            if self._unique_emails:
                owner = self._email_owner(email)
                if owner is not None and owner.id != user_id:
                    raise EmailTakenError("Email already registered")
            user = User(id=user_id, email=email, password_hash=password_hash)
            users = {**self._users, user_id: user}
            self._persist(self._chirps, users)
            self._users = users
        logger.debug("Updated user {}", user_id)
        return user

    def replace_password_hash(self, user_id: int, expected_hash: str, new_hash: str) -> User | None:
        """Swap the hash only if it still equals ``expected_hash``; returns None when it changed meanwhile."""
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                raise NotFoundError(f"User {user_id} not found")
            if current.password_hash != expected_hash:
                return None
            user = User(id=user_id, email=current.email, password_hash=new_hash)
            users = {**self._users, user_id: user}
            self._persist(self._chirps, users)
            self._users = users
        return user
