"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_gateway
from core.config import Config
from core.cors import CorsPolicy
from core.headers import HeaderBuilder
from core.hosts import HostAllowList
from core.protocols import RequestLogger
from core.router import KUGOU_BACKEND, PRIMARY_BACKEND, RouteDecider
from services.routing_service import RoutingService
from services.targets import AudioTarget
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.limits.max_connections,
            max_keepalive_connections=config.limits.max_keepalive_connections,
        )

        def client(**kwargs) -> httpx.AsyncClient:
            return httpx.AsyncClient(
                timeout=config.limits.timeout,
                limits=limits,
                follow_redirects=True,
                transport=transport,
                **kwargs,
            )

        allow_list = HostAllowList(config.audio.host_suffix)
        header_builder = HeaderBuilder()
        app.state.upstream_client = UpstreamClient(
            {
                # Every hop of the audio relay, redirects included, stays on the trusted domain
                AudioTarget.name: client(event_hooks={"request": [allow_list.check_request]}),
                PRIMARY_BACKEND: client(),
                KUGOU_BACKEND: client(),
            },
            cors=CorsPolicy(),
        )
        app.state.routing_service = RoutingService(
            config=config,
            logger=logger,
            decider=RouteDecider(),
            header_builder=header_builder,
            audio_target=AudioTarget(config, logger, header_builder, allow_list),
        )
        try:
            yield
        finally:
            await app.state.upstream_client.aclose()

    app = FastAPI(
        title="Music Gateway",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    async def gateway(request: Request):
        return await handle_gateway(request, logger)

    # No method list: the gateway itself answers disallowed methods
    app.add_route("/{path:path}", gateway)

    return app
