from __future__ import annotations

from fastapi import APIRouter, Depends

from chirpy.context import ApiContext, get_context
from chirpy.domain.models import Chirp
from chirpy.schemas import ChirpCreate, ChirpOut

router = APIRouter(prefix="/api/chirps", tags=["chirps"])


def _to_out(chirp: Chirp) -> ChirpOut:
    return ChirpOut(id=chirp.id, body=chirp.body)


@router.post("", response_model=ChirpOut, status_code=201)
def create_chirp(payload: ChirpCreate, ctx: ApiContext = Depends(get_context)):
    return _to_out(ctx.chirps.create(payload.body))


@router.get("", response_model=list[ChirpOut])
def list_chirps(ctx: ApiContext = Depends(get_context)):
    return [_to_out(chirp) for chirp in ctx.chirps.list()]


@router.get("/{chirp_id}", response_model=ChirpOut)
def get_chirp(chirp_id: int, ctx: ApiContext = Depends(get_context)):
    return _to_out(ctx.chirps.get(chirp_id))
