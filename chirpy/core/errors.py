"""Error taxonomy shared by the core and mapped to responses by the app."""

from __future__ import annotations


class ChirpyError(Exception):
    """Base class for every failure the core reports to its callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ChirpyError):
    status_code = 400


class EmailTakenError(ValidationError):
    status_code = 409


class NotFoundError(ChirpyError):
    status_code = 404


class AuthError(ChirpyError):
    """Base class for authentication failures."""

    status_code = 401


class InvalidCredentialsError(AuthError):
    pass


class InvalidTokenError(AuthError):
    pass


class TokenExpiredError(InvalidTokenError):
    pass


class InternalError(ChirpyError):
    """Server-side failures; the message is logged but not shown to clients."""

    status_code = 500
    public_message = "Something went wrong"


class StorageInitError(InternalError):
    pass


class PersistenceError(InternalError):
    pass


class HashingError(InternalError):
    pass


class MalformedHashError(InternalError):
    pass


class TokenSigningError(InternalError):
    pass
