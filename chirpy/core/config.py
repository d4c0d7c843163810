"""
Configuration helpers for the Chirpy backend.

Settings are read from environment variables once (after loading an optional
``.env`` file) so that routers/services never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    jwt_secret: str
    database_path: str
    static_root: str
    port: int
    unique_emails: bool
    log_level: str
    argon2_time_cost: int
    argon2_memory_cost: int
    argon2_parallelism: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    load_dotenv()

    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        jwt_secret=os.getenv("JWT_SECRET", ""),
        database_path=os.getenv("DATABASE_PATH", "database.json"),
        static_root=os.getenv("STATIC_ROOT", "."),
        port=_int(os.getenv("PORT", "8080"), 8080),
        unique_emails=_bool(os.getenv("UNIQUE_EMAILS"), False),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        argon2_time_cost=_int(os.getenv("ARGON2_TIME_COST", "3"), 3),
        argon2_memory_cost=_int(os.getenv("ARGON2_MEMORY_COST", "65536"), 65536),
        argon2_parallelism=_int(os.getenv("ARGON2_PARALLELISM", "4"), 4),
    )
