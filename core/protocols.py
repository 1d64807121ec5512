"""Shared protocol definitions."""

from collections.abc import Mapping
from typing import Protocol

from core.request_types import PreparedRequest
from core.transform import QueryItems


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_audio(self, url: str, method: str, *, byte_range: str | None = None) -> None: ...
    def log_backend(self, backend: str, url: str) -> None: ...
    def log_rejected(self, status: int, reason: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...


class BackendTarget(Protocol):
    """An upstream music-data API with its own parameter schema."""

    name: str

    def resolve_path(self, query: QueryItems) -> str: ...
    def map_parameters(self, query: QueryItems) -> dict[str, str]: ...
    def default_cache(self, query: QueryItems) -> str | None: ...
    def prepare(self, query: QueryItems, headers: Mapping[str, str]) -> PreparedRequest: ...
