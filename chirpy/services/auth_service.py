"""
Account and authentication use cases.
"""

from __future__ import annotations

from dataclasses import dataclass

from chirpy.core.errors import InvalidCredentialsError, InvalidTokenError, NotFoundError
from chirpy.core.logger import logger
from chirpy.core.security import hash_password, needs_rehash, verify_password
from chirpy.core.tokens import TokenClaims, TokenIssuer
from chirpy.domain.models import User
from chirpy.repositories.json_storage import JSONStore


@dataclass
class LoginResult:
    user: User
    token: str


def subject_user_id(claims: TokenClaims) -> int:
    """Parse the token subject as a positive user id."""
    subject = claims.subject or ""
    if not subject.isdecimal() or int(subject) < 1:
        raise InvalidTokenError("Invalid token subject")
    return int(subject)


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    scheme, _, token = (authorization or "").strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise InvalidTokenError("Missing bearer token")
    return token


@dataclass
class AuthService:
    """Handles registration, login and account updates."""

    store: JSONStore
    tokens: TokenIssuer

    # -------------------------------------- registration --------------------------------------
    def register(self, email: str, password: str) -> User:
        password_hash = hash_password(password)
        return self.store.create_user(email, password_hash)

    # -------------------------------------- login --------------------------------------
    def login(self, email: str, password: str, expires_in_seconds: int | None = None) -> LoginResult:
        try:
            user = self.store.find_user_by_email(email)
        except NotFoundError:
            raise InvalidCredentialsError("Incorrect email or password") from None
        if not verify_password(user.password_hash, password):
            raise InvalidCredentialsError("Incorrect email or password")
        if needs_rehash(user.password_hash):
            upgraded = self.store.replace_password_hash(user.id, user.password_hash, hash_password(password))
            if upgraded is None:
                # account changed since it was read; keep that change
                user = self.store.find_user_by_id(user.id)
            else:
                user = upgraded
                logger.info("Upgraded password hash for user {}", user.id)
        token = self.tokens.issue(str(user.id), expires_in_seconds)
        return LoginResult(user=user, token=token)

    # -------------------------------------- session --------------------------------------
    def authenticate(self, token: str) -> User:
        claims = self.tokens.verify(token)
        return self.store.find_user_by_id(subject_user_id(claims))

    def update(self, token: str, email: str, password: str) -> User:
        user = self.authenticate(token)
        return self.store.update_user(user.id, email, hash_password(password))
