"""Request routing logic - preflight, audio proxy, or an API backend."""

from dataclasses import dataclass

from core.transform import QueryItems, first_value

ALLOWED_METHODS = frozenset({"GET", "HEAD"})

PREFLIGHT = "preflight"
METHOD_NOT_ALLOWED = "method_not_allowed"
AUDIO = "audio"
BACKEND = "backend"

PRIMARY_BACKEND = "gdstudio"
KUGOU_BACKEND = "kugou"

BACKEND_ALIASES = {
    "gdstudio": PRIMARY_BACKEND,
    "kugo": KUGOU_BACKEND,
    "kugou": KUGOU_BACKEND,
}


@dataclass(frozen=True)
class RouteDecision:
    """Routing decision for a request."""

    route: str
    backend: str | None = None
    target: str | None = None


class RouteDecider:
    """Decide how an inbound request is served."""

    def __init__(
        self,
        aliases: dict[str, str] | None = None,
        default_backend: str = PRIMARY_BACKEND,
    ) -> None:
        self.aliases = aliases or BACKEND_ALIASES
        self.default_backend = default_backend

    def decide(self, method: str, query: QueryItems) -> RouteDecision:
        """Return the route based on method and query shape."""
        method = method.upper()
        if method == "OPTIONS":
            return RouteDecision(route=PREFLIGHT)
        if method not in ALLOWED_METHODS:
            return RouteDecision(route=METHOD_NOT_ALLOWED)

        query = list(query)
        target = first_value(query, "target")
        if target:
            return RouteDecision(route=AUDIO, target=target)

        return RouteDecision(route=BACKEND, backend=self.select_backend(query))

    def select_backend(self, query: QueryItems) -> str:
        """Map the ``api`` selector onto a backend name; unknown values use the default."""
        selector = first_value(query, "api") or ""
        return self.aliases.get(selector.lower(), self.default_backend)
