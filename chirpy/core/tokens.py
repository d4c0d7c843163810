"""Session tokens: signed, time-bounded HS256 JWTs."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from jose import ExpiredSignatureError, JWTError, jwt

from chirpy.core.errors import InvalidTokenError, TokenExpiredError, TokenSigningError

ISSUER = "chirpy"
ALGORITHM = "HS256"
# Both the default lifetime and the hard ceiling.
MAX_TTL_SECONDS = 86400

_DECODE_OPTIONS = {
    # expiry is checked against the issuer's own clock below; a require_exp
    # entry would switch jose's wall-clock check back on
    "verify_exp": False,
    "require_iss": True,
    "require_sub": True,
}


@dataclass(frozen=True)
class TokenClaims:
    issuer: str
    subject: str
    issued_at: datetime
    expires_at: datetime


def effective_ttl(ttl_seconds: int | None) -> int:
    """Clamp a requested lifetime: absent or non-positive means the default, anything above is capped."""
    if not ttl_seconds or ttl_seconds <= 0:
        return MAX_TTL_SECONDS
    return min(int(ttl_seconds), MAX_TTL_SECONDS)


@dataclass
class TokenIssuer:
    """Issues and validates tokens signed with one shared, read-only secret."""

    secret: str
    clock: Callable[[], float] = time.time
    issuer: str = ISSUER

    def issue(self, subject: str, ttl_seconds: int | None = None) -> str:
        now = int(self.clock())
        claims = {
            "iss": self.issuer,
            "sub": str(subject),
            "iat": now,
            "exp": now + effective_ttl(ttl_seconds),
        }
        try:
            return jwt.encode(claims, self.secret, algorithm=ALGORITHM)
        except JWTError as exc:
            raise TokenSigningError("Token could not be signed") from exc

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                issuer=self.issuer,
                options=_DECODE_OPTIONS,
            )
            issued_at = int(payload["iat"])
            expires_at = int(payload["exp"])
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except (JWTError, KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Invalid token") from exc
        if self.clock() > expires_at:
            raise TokenExpiredError("Token has expired")
        return TokenClaims(
            issuer=payload["iss"],
            subject=payload["sub"],
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
        )
