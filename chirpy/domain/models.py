"""Entities held by the datastore."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Chirp:
    id: int
    body: str


@dataclass(frozen=True)
class User:
    id: int
    email: str
    password_hash: str = field(repr=False)
