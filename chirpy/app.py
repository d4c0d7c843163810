from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from chirpy.context import ApiContext, build_context
from chirpy.core.config import Settings, get_settings
from chirpy.core.errors import ChirpyError, InternalError
from chirpy.core.logger import logger, setup_logging
from chirpy.core.metrics import HitCounter
from chirpy.routers import admin as admin_router
from chirpy.routers import chirps as chirps_router
from chirpy.routers import users as users_router

# Static mounts; /admin routes registered first (metrics) take precedence over its files.
FILESERVER_PREFIXES = ("/app", "/admin")


class CountingStaticFiles(StaticFiles):
    """Static file server that counts every request it handles."""

    def __init__(self, *args, counter: HitCounter, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._counter = counter

    async def __call__(self, scope, receive, send) -> None:
        if scope["type"] == "http":
            self._counter.increment()
        await super().__call__(scope, receive, send)


async def _chirpy_error_handler(request: Request, exc: ChirpyError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.opt(exception=exc).error("{} {} failed: {}", request.method, request.url.path, exc.message)
        return JSONResponse({"error": exc.public_message}, status_code=exc.status_code)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def create_app(settings: Settings | None = None, context: ApiContext | None = None) -> FastAPI:
    """Factory compatible with ``uvicorn --factory chirpy.app:create_app``."""
    settings = settings or (context.settings if context else get_settings())
    setup_logging(settings.log_level)
    ctx = context or build_context(settings)

    app = FastAPI(title="Chirpy API")
    app.state.ctx = ctx
    app.add_exception_handler(ChirpyError, _chirpy_error_handler)

    app.include_router(admin_router.router)
    app.include_router(chirps_router.router)
    app.include_router(users_router.router)
    for prefix in FILESERVER_PREFIXES:
        app.mount(
            prefix,
            CountingStaticFiles(directory=settings.static_root, html=True, check_dir=False, counter=ctx.hits),
            name=prefix.strip("/"),
        )
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    app = create_app(settings)
    logger.info("Serving {} on port {}", settings.database_path, settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
