"""Request and response bodies for the JSON API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ChirpCreate(BaseModel):
    body: str


class ChirpOut(BaseModel):
    id: int
    body: str


class Credentials(BaseModel):
    email: str
    password: str


class LoginRequest(Credentials):
    expires_in_seconds: Optional[int] = None


class UserOut(BaseModel):
    """Public projection of a user; the password hash never leaves the store."""

    id: int
    email: str


class LoginOut(UserOut):
    token: str
