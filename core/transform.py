"""Query parameter translation for upstream API backends."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from urllib.parse import quote

QueryItems = Iterable[tuple[str, str]]

KUGOU_PATHS = MappingProxyType(
    {
        "search": "/search",
        "song": "/song",
        "url": "/url",
        "lyric": "/lyric",
        "playlist": "/playlist",
        "album": "/album",
        "artist": "/artist",
        "top": "/top",
        "hot": "/hot",
        "suggest": "/suggest",
    }
)

KUGOU_PARAMS = MappingProxyType(
    {
        # search
        "keywords": "keywords",
        "name": "keywords",
        "id": "keywords",
        "type": "type",
        "page": "page",
        "pages": "page",
        "count": "pagesize",
        "pagesize": "pagesize",
        "limit": "pagesize",
        # song
        "songid": "id",
        "mid": "mid",
        "hash": "hash",
        "br": "br",
        "quality": "br",
        # collections
        "playlistid": "id",
        "albumid": "id",
        "artistid": "id",
        "topid": "id",
    }
)

PRIMARY_RESERVED = frozenset({"target", "callback", "api"})
KUGOU_RESERVED = frozenset({"target", "callback", "type", "api"})

SEARCH_DEFAULTS = MappingProxyType({"pagesize": "20", "page": "1"})


def first_value(query: QueryItems, name: str) -> str | None:
    """Return the first value for ``name``, like URLSearchParams.get."""
    for key, value in query:
        if key == name:
            return value
    return None


class ParameterTranslator:
    """Rename caller-facing query parameters to a backend's canonical names."""

    def __init__(
        self,
        mapping: Mapping[str, str] | None = None,
        reserved: Iterable[str] = (),
    ) -> None:
        self.mapping = MappingProxyType(dict(mapping or {}))
        self.reserved = frozenset(reserved)

    def translate(self, query: QueryItems) -> dict[str, str]:
        """Copy query items under their mapped names, skipping reserved ones.

        Later items replace earlier ones that map to the same name while the
        first occurrence keeps its position.
        """
        params: dict[str, str] = {}
        for key, value in query:
            if key in self.reserved:
                continue
            params[self.mapping.get(key, key)] = value
        return params


class PathResolver:
    """Resolve an operation type to an upstream path."""

    def __init__(self, paths: Mapping[str, str] = KUGOU_PATHS) -> None:
        self.paths = MappingProxyType(dict(paths))

    def resolve(self, operation: str) -> str:
        """Known types use the table; anything else becomes ``/<type>``, percent-encoded."""
        return self.paths.get(operation) or f"/{quote(operation, safe='/')}"
