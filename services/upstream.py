"""HTTP proxying utilities for upstream requests."""

import httpx
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask
from starlette.responses import Response

from core.cors import CorsPolicy
from core.exceptions import ConfigurationError, UpstreamConnectionError
from core.protocols import RequestLogger
from core.request_types import PreparedRequest

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
UPSTREAM_FAILURE_MESSAGE = "Kugou API request failed"


class UpstreamClient:
    """Relay requests to upstream services as unbuffered streams."""

    def __init__(
        self,
        clients: dict[str, httpx.AsyncClient],
        cors: CorsPolicy | None = None,
        default_route: str | None = None,
    ) -> None:
        if not clients:
            raise ConfigurationError("at least one upstream client is required")
        self._clients = clients
        self._cors = cors or CorsPolicy()
        self._default_route = default_route or next(iter(clients))

    async def proxy(
        self,
        prepared: PreparedRequest,
        logger: RequestLogger,
    ) -> Response:
        """Issue the prepared request once and stream the upstream body back."""
        client = self._client_for(prepared.route_name)
        request = client.build_request(
            prepared.method,
            prepared.target_url,
            headers=prepared.headers,
        )
        try:
            response = await client.send(request, stream=True)
        except httpx.RequestError as e:
            description = str(e) or type(e).__name__
            logger.log_error(prepared.route_name, 500, description)
            if not prepared.json_errors:
                raise UpstreamConnectionError(
                    description, provider=prepared.route_name, url=prepared.target_url
                ) from e
            return self._error_response(prepared, description)

        if response.is_error:
            logger.log_error(prepared.route_name, response.status_code, response.reason_phrase)

        headers = self._response_headers(prepared, response.headers)
        # Content-Encoding is not relayed, so a compressed body is decoded and loses its length
        if _is_encoded(response.headers):
            body = response.aiter_bytes()
            headers.pop("content-length", None)
        else:
            body = response.aiter_raw()

        return StreamingResponse(
            body,
            status_code=response.status_code,
            headers=headers,
            background=BackgroundTask(self._cleanup_streaming, response),
        )

    def _response_headers(
        self,
        prepared: PreparedRequest,
        upstream_headers: httpx.Headers,
    ) -> dict[str, str]:
        """Filter upstream headers and apply the route's cache and content defaults."""
        headers = self._cors.build_headers(upstream_headers, prepared.cache_control)
        if prepared.force_cache:
            headers["cache-control"] = prepared.cache_control
        if prepared.default_json and "content-type" not in headers:
            headers["content-type"] = JSON_CONTENT_TYPE
        return headers

    @staticmethod
    def _error_response(prepared: PreparedRequest, description: str) -> JSONResponse:
        """Diagnostic body for a transport failure; there are no upstream headers to filter."""
        return JSONResponse(
            content={
                "code": 500,
                "message": UPSTREAM_FAILURE_MESSAGE,
                "error": description,
                "url": prepared.target_url,
            },
            status_code=500,
            headers={"Access-Control-Allow-Origin": "*"},
        )

    async def _cleanup_streaming(self, response: httpx.Response) -> None:
        """Release the upstream connection once the client is done or gone."""
        await response.aclose()

    async def aclose(self) -> None:
        for client in self._clients.values():
            await client.aclose()

    def _client_for(self, route_name: str) -> httpx.AsyncClient:
        """Select the appropriate cached client."""
        return self._clients.get(route_name, self._clients[self._default_route])


def _is_encoded(headers: httpx.Headers) -> bool:
    """True when the upstream ignored ``Accept-Encoding: identity``."""
    encoding = headers.get("content-encoding", "").strip().lower()
    return encoding not in ("", "identity")
