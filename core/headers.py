"""Header construction for upstream requests."""

from collections.abc import Mapping

# Bodies are relayed byte-for-byte, so upstreams must not compress them
IDENTITY_ENCODING = {"Accept-Encoding": "identity"}


class HeaderBuilder:
    """Build upstream headers for the audio host and the API backends."""

    def build_audio_headers(
        self,
        headers: Mapping[str, str],
        *,
        referer: str,
        default_user_agent: str,
    ) -> dict[str, str]:
        """Pass through User-Agent and Range; pin the audio host's Referer."""
        upstream = {
            "User-Agent": headers.get("user-agent") or default_user_agent,
            "Referer": referer,
            **IDENTITY_ENCODING,
        }
        range_header = headers.get("range")
        if range_header:
            upstream["Range"] = range_header
        return upstream

    def build_api_headers(
        self,
        headers: Mapping[str, str],
        *,
        default_user_agent: str,
        referer: str | None = None,
        origin: str | None = None,
    ) -> dict[str, str]:
        """Build JSON API headers, optionally posing as the backend's own site."""
        upstream = {
            "User-Agent": headers.get("user-agent") or default_user_agent,
            "Accept": "application/json",
            **IDENTITY_ENCODING,
        }
        if referer:
            upstream["Referer"] = referer
        if origin:
            upstream["Origin"] = origin
        return upstream
