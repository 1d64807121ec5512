"""FastAPI route handlers."""

from fastapi import Request, Response

from core.cors import CorsPolicy
from core.exceptions import InvalidTargetError, MissingParameterError
from core.protocols import RequestLogger
from core.router import AUDIO, METHOD_NOT_ALLOWED, PREFLIGHT


def _plain_text(content: str, status_code: int) -> Response:
    return Response(
        content=content,
        status_code=status_code,
        media_type="text/plain",
        headers={"Access-Control-Allow-Origin": "*"},
    )


async def handle_gateway(request: Request, logger: RequestLogger) -> Response:
    """Serve one gateway request: preflight, audio relay, or API backend."""
    routing_service = request.app.state.routing_service
    query = request.query_params.multi_items()
    decision = routing_service.decide(request.method, query)

    if decision.route == PREFLIGHT:
        return Response(status_code=204, headers=CorsPolicy.preflight_headers())

    if decision.route == METHOD_NOT_ALLOWED:
        logger.log_rejected(405, request.method)
        return _plain_text("Method not allowed", 405)

    try:
        if decision.route == AUDIO:
            prepared = routing_service.prepare_audio(
                decision.target, request.method, request.headers
            )
        else:
            prepared = routing_service.prepare_backend(
                decision.backend, query, request.headers
            )
        # A redirect off the trusted audio domain is refused mid-flight as an invalid target
        return await request.app.state.upstream_client.proxy(prepared, logger)
    except (InvalidTargetError, MissingParameterError) as e:
        logger.log_rejected(e.status_code, str(e))
        return _plain_text(str(e), e.status_code)
