"""
Chirp use cases (post, list, look up).
"""

from __future__ import annotations

from chirpy.domain.chirps import validate_chirp
from chirpy.domain.models import Chirp
from chirpy.repositories.json_storage import JSONStore


class ChirpService:
    def __init__(self, store: JSONStore) -> None:
        self.store = store

    def create(self, body: str) -> Chirp:
        cleaned = validate_chirp(body)
        return self.store.create_chirp(cleaned)

    def list(self) -> list[Chirp]:
        return self.store.get_chirps()

    def get(self, chirp_id: int) -> Chirp:
        return self.store.get_chirp(chirp_id)
