"""Shared request data types."""

from dataclasses import dataclass

from core.cors import NO_STORE


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    route_name: str
    target_url: str
    headers: dict[str, str]
    method: str = "GET"
    cache_control: str = NO_STORE
    # Replace any upstream Cache-Control instead of only filling a gap
    force_cache: bool = False
    default_json: bool = True
    # Report transport failures as a JSON 500 instead of raising
    json_errors: bool = False
