"""Cross-origin response headers."""

from collections.abc import Iterable, Mapping

SAFE_RESPONSE_HEADERS = frozenset(
    {
        "content-type",
        "cache-control",
        "accept-ranges",
        "content-length",
        "content-range",
        "etag",
        "last-modified",
        "expires",
    }
)

NO_STORE = "no-store"
PREFLIGHT_MAX_AGE = 24 * 60 * 60


class CorsPolicy:
    """Filter upstream headers to a safe allow-list and open cross-origin access."""

    def __init__(self, allowed_headers: Iterable[str] = SAFE_RESPONSE_HEADERS) -> None:
        self.allowed_headers = frozenset(name.lower() for name in allowed_headers)

    def build_headers(
        self,
        upstream_headers: Mapping[str, str] | None = None,
        default_cache: str = NO_STORE,
    ) -> dict[str, str]:
        """Return response headers safe to hand to a browser.

        Only allow-listed upstream headers survive. A ``Cache-Control``
        directive is always present and the origin is always ``*``.
        """
        headers: dict[str, str] = {}
        if upstream_headers:
            for key, value in upstream_headers.items():
                key_lower = key.lower()
                if key_lower in self.allowed_headers:
                    headers[key_lower] = value
        if "cache-control" not in headers:
            headers["cache-control"] = default_cache
        headers["access-control-allow-origin"] = "*"
        return headers

    @staticmethod
    def preflight_headers() -> dict[str, str]:
        """Headers answering an OPTIONS preflight."""
        return {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET,HEAD,OPTIONS",
            "Access-Control-Allow-Headers": "*",
            "Access-Control-Max-Age": str(PREFLIGHT_MAX_AGE),
        }
