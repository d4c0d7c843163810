"""Explicitly constructed per-process state shared by every request handler."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from chirpy.core.config import Settings
from chirpy.core.metrics import HitCounter
from chirpy.core.tokens import TokenIssuer
from chirpy.repositories.json_storage import JSONStore
from chirpy.services.auth_service import AuthService
from chirpy.services.chirp_service import ChirpService


@dataclass
class ApiContext:
    settings: Settings
    store: JSONStore
    tokens: TokenIssuer
    hits: HitCounter

    @property
    def chirps(self) -> ChirpService:
        return ChirpService(self.store)

    @property
    def auth(self) -> AuthService:
        return AuthService(self.store, self.tokens)


def build_context(settings: Settings) -> ApiContext:
    """Open the store and set up the token issuer; refuses to start without a secret."""
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET must be configured to issue session tokens.")
    store = JSONStore.open(settings.database_path, unique_emails=settings.unique_emails)
    return ApiContext(
        settings=settings,
        store=store,
        tokens=TokenIssuer(settings.jwt_secret),
        hits=HitCounter(),
    )


def get_context(request: Request) -> ApiContext:
    """FastAPI dependency returning the context attached by the app factory."""
    return request.app.state.ctx
