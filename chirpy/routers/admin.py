"""Health check and the file-server hit counter."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from chirpy.context import ApiContext, get_context

router = APIRouter(tags=["admin"])


@router.get("/api/healthz", response_class=PlainTextResponse)
def healthz():
    return "OK"


@router.get("/admin/metrics", response_class=HTMLResponse)
def metrics(ctx: ApiContext = Depends(get_context)):
    return f"<h1>Welcome, Chirpy Admin</h1>Chirpy has been visited {ctx.hits.value} times!"


@router.get("/api/reset", response_class=PlainTextResponse)
def reset_hits(ctx: ApiContext = Depends(get_context)):
    ctx.hits.reset()
    return "Hits reset"
