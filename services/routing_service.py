"""Routing orchestration for gateway requests."""

from collections.abc import Mapping

from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import BackendTarget, RequestLogger
from core.request_types import PreparedRequest
from core.router import RouteDecider, RouteDecision
from core.transform import QueryItems
from services.targets import AudioTarget, KugouTarget, PrimaryTarget


class RoutingService:
    """Prepare requests for the audio host or one of the API backends."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        decider: RouteDecider,
        header_builder: HeaderBuilder,
        audio_target: AudioTarget | None = None,
        backends: Mapping[str, BackendTarget] | None = None,
    ) -> None:
        self._decider = decider
        self._audio = audio_target or AudioTarget(config, logger, header_builder)
        if backends is None:
            backends = {
                target.name: target
                for target in (
                    PrimaryTarget(config, logger, header_builder),
                    KugouTarget(config, logger, header_builder),
                )
            }
        self._backends = dict(backends)

    def decide(self, method: str, query: QueryItems) -> RouteDecision:
        """Delegate to the route decider."""
        return self._decider.decide(method, query)

    def prepare_audio(
        self,
        target: str,
        method: str,
        headers: Mapping[str, str],
    ) -> PreparedRequest:
        """Prepare a relay request to the allow-listed audio host."""
        return self._audio.prepare(target, method, headers)

    def prepare_backend(
        self,
        backend: str,
        query: QueryItems,
        headers: Mapping[str, str],
    ) -> PreparedRequest:
        """Prepare an API request for the selected backend."""
        target = self._backends.get(backend) or self._backends[self._decider.default_backend]
        return target.prepare(query, headers)
