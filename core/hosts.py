"""Allow-list for the audio host the gateway is willing to relay."""

import httpx

from core.exceptions import InvalidTargetError


class HostAllowList:
    """Accept only http(s) URLs whose host is the trusted domain or a subdomain of it."""

    def __init__(self, suffix: str = "kuwo.cn") -> None:
        self.suffix = suffix.lower().strip(".")

    def is_allowed_host(self, hostname: str) -> bool:
        """Dot-boundary suffix match, case-insensitive."""
        if not hostname:
            return False
        hostname = hostname.lower()
        return hostname == self.suffix or hostname.endswith("." + self.suffix)

    def normalize(self, raw: str) -> str | None:
        """Return ``raw`` rewritten to plain http, or None when it is not allowed."""
        try:
            parsed = httpx.URL(raw)
        except httpx.InvalidURL:
            return None

        if not parsed.is_absolute_url:
            return None
        if not self.is_allowed_host(parsed.host):
            return None
        if parsed.scheme not in ("http", "https"):
            return None

        # The audio host is reached over plaintext regardless of the caller's scheme
        return str(parsed.copy_with(scheme="http"))

    async def check_request(self, request: httpx.Request) -> None:
        """httpx request hook; refuses any hop off the trusted domain, redirects included."""
        if not self.is_allowed_host(request.url.host):
            raise InvalidTargetError(str(request.url))
