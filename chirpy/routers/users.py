from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header

from chirpy.context import ApiContext, get_context
from chirpy.schemas import Credentials, LoginOut, LoginRequest, UserOut
from chirpy.services.auth_service import bearer_token

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users", response_model=UserOut, status_code=201)
def create_user(payload: Credentials, ctx: ApiContext = Depends(get_context)):
    user = ctx.auth.register(payload.email, payload.password)
    return UserOut(id=user.id, email=user.email)


@router.post("/login", response_model=LoginOut)
def login(payload: LoginRequest, ctx: ApiContext = Depends(get_context)):
    result = ctx.auth.login(payload.email, payload.password, payload.expires_in_seconds)
    return LoginOut(id=result.user.id, email=result.user.email, token=result.token)


@router.put("/users", response_model=UserOut)
def update_user(
    payload: Credentials,
    authorization: Optional[str] = Header(None),
    ctx: ApiContext = Depends(get_context),
):
    user = ctx.auth.update(bearer_token(authorization), payload.email, payload.password)
    return UserOut(id=user.id, email=user.email)
