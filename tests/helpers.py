"""Helpers for building upstream responses in tests."""

import json as jsonlib

import httpx


class ChunkedBody(httpx.AsyncByteStream):
    """Async body delivered in chunks, like a live upstream connection."""

    def __init__(self, content: bytes, chunk_size: int = 2):
        self._chunks = [content[i : i + chunk_size] for i in range(0, len(content), chunk_size)]
        self.closed = False

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk

    async def aclose(self) -> None:
        self.closed = True


def stream_response(
    status_code: int = 200,
    content: bytes = b"",
    *,
    json=None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build an unread upstream response whose body must be streamed."""
    headers = dict(headers or {})
    if json is not None:
        content = jsonlib.dumps(json).encode()
        headers.setdefault("Content-Type", "application/json")
    if content:
        headers.setdefault("Content-Length", str(len(content)))
    return httpx.Response(status_code, headers=headers, stream=ChunkedBody(content))
