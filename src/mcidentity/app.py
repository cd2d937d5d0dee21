"""mcidentity — FastAPI gateway application.

Exposes the identity resolver over HTTP. The lookup cache lives for the
lifetime of the app and is shared by every request.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from mcidentity.auth import make_api_key_checker
from mcidentity.cache import LookupCache
from mcidentity.config import IdentityConfig, load_config
from mcidentity.errors import DecodeError, IdentityError, NotFoundError, TransportError
from mcidentity.resolver import IdentityResolver
from mcidentity.routes import meta, players

logger = logging.getLogger("mcidentity")
audit_logger = logging.getLogger("mcidentity.audit")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build client, cache and resolver. Shutdown: close them."""
    config: IdentityConfig = app.state.config
    logger.info(
        "Resolving against %s (cache ttl %.0fs)", config.api_base, config.cache_ttl
    )
    client = httpx.Client(timeout=config.http_timeout)
    cache = LookupCache(cleanup_interval=config.cleanup_interval)
    cache.start()
    app.state.resolver = IdentityResolver(
        client,
        cache,
        api_base=config.api_base,
        cache_ttl=config.cache_ttl,
    )
    logger.info("mcidentity gateway ready")
    yield
    cache.close()
    client.close()
    logger.info("mcidentity gateway shut down")


def install_exception_handlers(app: FastAPI) -> None:
    """Map resolver errors to HTTP responses."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(TransportError)
    async def transport_handler(request: Request, exc: TransportError):
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(DecodeError)
    async def decode_handler(request: Request, exc: DecodeError):
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(IdentityError)
    async def identity_handler(request: Request, exc: IdentityError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(config: IdentityConfig | None = None) -> FastAPI:
    """Application factory."""
    if config is None:
        config = load_config()

    app = FastAPI(
        title="mcidentity",
        description="Minecraft player identity lookups with a shared expiring cache",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    check_key = make_api_key_checker(config.api_key)

    install_exception_handlers(app)

    # ── Audit middleware ──────────────────────────────────────

    @app.middleware("http")
    async def audit_log(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        elapsed = time.monotonic() - start
        audit_logger.info(
            "%s %s %d %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response

    # ── Routers ───────────────────────────────────────────────

    app.include_router(meta.router, dependencies=[Depends(check_key)])
    app.include_router(players.router, dependencies=[Depends(check_key)])

    return app
