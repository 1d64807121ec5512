"""Upstream target handlers for the audio host and the API backends."""

from collections.abc import Mapping

import httpx

from core.config import Config
from core.cors import NO_STORE
from core.exceptions import InvalidTargetError, MissingParameterError
from core.headers import HeaderBuilder
from core.hosts import HostAllowList
from core.protocols import RequestLogger
from core.request_types import PreparedRequest
from core.router import KUGOU_BACKEND, PRIMARY_BACKEND
from core.transform import (
    KUGOU_PARAMS,
    KUGOU_PATHS,
    KUGOU_RESERVED,
    PRIMARY_RESERVED,
    SEARCH_DEFAULTS,
    ParameterTranslator,
    PathResolver,
    QueryItems,
    first_value,
)

AUDIO_CACHE = "public, max-age=3600"

KUGOU_CACHE_TIERS = {
    "search": "public, max-age=300",
    "url": "public, max-age=3600",
}
KUGOU_DEFAULT_CACHE = "public, max-age=1800"


class AudioTarget:
    """Kuwo audio host request preparation."""

    name = "kuwo"

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
        allow_list: HostAllowList | None = None,
    ) -> None:
        self._config = config
        self._logger = logger
        self._headers = header_builder
        self._allow_list = allow_list or HostAllowList(config.audio.host_suffix)

    def prepare(
        self,
        target: str,
        method: str,
        headers: Mapping[str, str],
    ) -> PreparedRequest:
        """Validate the target and prepare a ranged passthrough request."""
        normalized = self._allow_list.normalize(target)
        if normalized is None:
            raise InvalidTargetError(target)

        upstream_headers = self._headers.build_audio_headers(
            headers,
            referer=self._config.audio.referer,
            default_user_agent=self._config.audio.default_user_agent,
        )
        self._logger.log_audio(normalized, method, byte_range=upstream_headers.get("Range"))
        return PreparedRequest(
            self.name,
            normalized,
            upstream_headers,
            method=method,
            cache_control=AUDIO_CACHE,
            default_json=False,
        )


class PrimaryTarget:
    """GD Studio API: generic passthrough that insists on ``types``."""

    name = PRIMARY_BACKEND

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
        translator: ParameterTranslator | None = None,
    ) -> None:
        self._config = config
        self._logger = logger
        self._headers = header_builder
        self._translator = translator or ParameterTranslator(reserved=PRIMARY_RESERVED)

    def resolve_path(self, query: QueryItems) -> str:
        return httpx.URL(self._config.primary.base_url).path

    def map_parameters(self, query: QueryItems) -> dict[str, str]:
        params = self._translator.translate(query)
        if "types" not in params:
            raise MissingParameterError("types")
        return params

    def default_cache(self, query: QueryItems) -> str | None:
        return None

    def prepare(self, query: QueryItems, headers: Mapping[str, str]) -> PreparedRequest:
        """Prepare a GD Studio request; raises MissingParameterError without ``types``."""
        query = list(query)
        params = self.map_parameters(query)
        url = httpx.URL(self._config.primary.base_url).copy_with(
            path=self.resolve_path(query), params=params
        )
        upstream_headers = self._headers.build_api_headers(
            headers, default_user_agent=self._config.primary.default_user_agent
        )
        self._logger.log_backend(self.name, str(url))
        return PreparedRequest(
            self.name,
            str(url),
            upstream_headers,
            cache_control=self.default_cache(query) or NO_STORE,
        )


class KugouTarget:
    """Kugou API: schema-mapped parameters, per-type paths and cache tiers."""

    name = KUGOU_BACKEND

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
        translator: ParameterTranslator | None = None,
        paths: PathResolver | None = None,
    ) -> None:
        self._config = config
        self._logger = logger
        self._headers = header_builder
        self._translator = translator or ParameterTranslator(KUGOU_PARAMS, KUGOU_RESERVED)
        self._paths = paths or PathResolver(KUGOU_PATHS)

    @staticmethod
    def operation(query: QueryItems) -> str:
        return first_value(query, "type") or "search"

    def resolve_path(self, query: QueryItems) -> str:
        return self._paths.resolve(self.operation(query))

    def map_parameters(self, query: QueryItems) -> dict[str, str]:
        query = list(query)
        params = self._translator.translate(query)

        if self.operation(query) == "search":
            for key, value in SEARCH_DEFAULTS.items():
                params.setdefault(key, value)

        name = first_value(query, "name")
        if "keywords" not in params and name is not None:
            params["keywords"] = name
        return params

    def default_cache(self, query: QueryItems) -> str | None:
        return KUGOU_CACHE_TIERS.get(self.operation(query), KUGOU_DEFAULT_CACHE)

    def prepare(self, query: QueryItems, headers: Mapping[str, str]) -> PreparedRequest:
        """Prepare a Kugou request with translated parameters."""
        query = list(query)
        url = httpx.URL(self._config.kugou.base_url).copy_with(
            path=self.resolve_path(query), params=self.map_parameters(query)
        )
        settings = self._config.kugou
        upstream_headers = self._headers.build_api_headers(
            headers,
            default_user_agent=settings.default_user_agent,
            referer=settings.referer,
            origin=settings.origin,
        )
        self._logger.log_backend(self.name, str(url))
        return PreparedRequest(
            self.name,
            str(url),
            upstream_headers,
            cache_control=self.default_cache(query),
            force_cache=True,
            json_errors=True,
        )
