#!/usr/bin/env python3

import contextlib
import logging
from collections.abc import AsyncIterator

import click
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from dash_cache.cache.manager import CacheManager
from dash_cache.core.asgi_wrapper import PageCacheASGIWrapper
from dash_cache.core.page_transition import PageTransitionTracker
from dash_cache.core.route_preloader import RoutePreloader
from dash_cache.core.session_manager import AuthSessionManager
from dash_cache.identity.base import AuthenticationError, InMemoryIdentityProvider
from dash_cache.utils.config import DashCacheConfig

logger = logging.getLogger(__name__)


@click.command()
@click.option("--port", default=3000, help="Port to listen on for HTTP")
@click.option("--max-size", default=None, type=int, help="Cache capacity (entries); overrides DASH_CACHE_MAX_SIZE")
@click.option(
    "--log-level",
    default="INFO",
    help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
def main(port: int, max_size: int | None, log_level: str) -> int:
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = DashCacheConfig.from_env()
    if max_size is not None:
        config.cache.max_size = max_size

    # Composition root: one cache per process, shared by every collaborator
    cache = CacheManager.from_config(config.cache)
    tracker = PageTransitionTracker(cache, RoutePreloader(cache))
    auth = AuthSessionManager.from_config(InMemoryIdentityProvider(), cache, config.resilience)

    async def page(request: Request) -> JSONResponse:
        path = request.url.path
        return JSONResponse({"path": path, "cached": tracker.cached_state(path)})

    async def stats(request: Request) -> JSONResponse:
        return JSONResponse(cache.stats())

    async def sign_up(request: Request) -> JSONResponse:
        body = await request.json()
        try:
            profile = await auth.sign_up(body["email"], body["password"], body.get("full_name", ""), body["role"])
        except (KeyError, ValueError, AuthenticationError) as exc:
            return JSONResponse({"error": str(exc)}, status_code=400)
        return JSONResponse({"id": profile.id, "email": profile.email})

    async def sign_in(request: Request) -> JSONResponse:
        body = await request.json()
        try:
            session = await auth.sign_in(body["email"], body["password"])
        except (KeyError, AuthenticationError) as exc:
            return JSONResponse({"error": str(exc)}, status_code=401)
        return JSONResponse({"user_id": session.user_id})

    async def health(request: Request) -> JSONResponse:
        healthy = await auth.is_healthy()
        return JSONResponse(
            {"status": "ok" if healthy else "degraded", "cache": cache.stats()},
            status_code=200 if healthy else 503,
        )

    async def restore(request: Request) -> JSONResponse:
        body = await request.json()
        try:
            session = await auth.restore(body["access_token"])
        except KeyError as exc:
            return JSONResponse({"error": str(exc)}, status_code=400)
        if session is None:
            return JSONResponse({"error": "session expired"}, status_code=401)
        return JSONResponse({"user_id": session.user_id})

    async def sign_out(request: Request) -> JSONResponse:
        await auth.sign_out()
        return JSONResponse({"signed_out": True, "cache_size": len(cache)})

    @contextlib.asynccontextmanager
    async def lifespan(starlette_app: Starlette) -> AsyncIterator[None]:
        logger.info("Dashboard cache ready (max_size=%d)", cache.max_size)
        try:
            yield
        finally:
            logger.info("Application shutting down...")

    starlette_app = Starlette(
        debug=True,
        routes=[
            Route("/_health", health),
            Route("/_cache/stats", stats),
            Route("/auth/sign-up", sign_up, methods=["POST"]),
            Route("/auth/sign-in", sign_in, methods=["POST"]),
            Route("/auth/restore", restore, methods=["POST"]),
            Route("/auth/sign-out", sign_out, methods=["POST"]),
            Route("/{path:path}", page),
        ],
        lifespan=lifespan,
    )

    import uvicorn

    uvicorn.run(PageCacheASGIWrapper(tracker).wrap(starlette_app), host="127.0.0.1", port=port)
    return 0


if __name__ == "__main__":
    main()
