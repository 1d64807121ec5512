"""Tests for query parameter translation tables."""

import pytest

from core.transform import (
    KUGOU_PARAMS,
    KUGOU_RESERVED,
    PRIMARY_RESERVED,
    ParameterTranslator,
    PathResolver,
    first_value,
)


class TestFirstValue:
    """Tests for first_value."""

    def test_returns_first_occurrence(self):
        query = [("type", "song"), ("type", "search")]
        assert first_value(query, "type") == "song"

    def test_missing(self):
        assert first_value([("a", "1")], "b") is None

    def test_empty_value_is_returned(self):
        assert first_value([("target", "")], "target") == ""


class TestParameterTranslator:
    """Tests for ParameterTranslator.translate."""

    def test_passthrough_without_mapping(self):
        translator = ParameterTranslator(reserved=PRIMARY_RESERVED)
        query = [("types", "search"), ("name", "foo"), ("count", "10")]
        assert translator.translate(query) == {"types": "search", "name": "foo", "count": "10"}

    def test_reserved_are_dropped(self):
        translator = ParameterTranslator(reserved=PRIMARY_RESERVED)
        query = [("target", "x"), ("callback", "cb"), ("api", "gdstudio"), ("types", "url")]
        assert translator.translate(query) == {"types": "url"}

    def test_synonyms_are_renamed(self):
        translator = ParameterTranslator(KUGOU_PARAMS, KUGOU_RESERVED)
        query = [
            ("name", "foo"),
            ("limit", "5"),
            ("pages", "2"),
            ("quality", "320"),
            ("songid", "123"),
        ]
        assert translator.translate(query) == {
            "keywords": "foo",
            "pagesize": "5",
            "page": "2",
            "br": "320",
            "id": "123",
        }

    def test_unmapped_names_pass_through(self):
        translator = ParameterTranslator(KUGOU_PARAMS, KUGOU_RESERVED)
        assert translator.translate([("format", "json")]) == {"format": "json"}

    def test_later_synonym_replaces_earlier_value(self):
        """Test that two names mapping to the same field keep the last value."""
        translator = ParameterTranslator(KUGOU_PARAMS, KUGOU_RESERVED)
        params = translator.translate([("keywords", "a"), ("page", "3"), ("name", "b")])
        assert params == {"keywords": "b", "page": "3"}
        assert list(params) == ["keywords", "page"]

    def test_translation_is_deterministic(self):
        """Test that identical queries always translate identically."""
        translator = ParameterTranslator(KUGOU_PARAMS, KUGOU_RESERVED)
        query = [("name", "foo"), ("count", "10"), ("type", "search")]
        assert translator.translate(query) == translator.translate(query)

    def test_mapping_is_read_only(self):
        translator = ParameterTranslator({"a": "b"})
        with pytest.raises(TypeError):
            translator.mapping["c"] = "d"


class TestPathResolver:
    """Tests for PathResolver.resolve."""

    def test_known_types(self):
        resolver = PathResolver()
        for operation in ("search", "song", "url", "lyric", "playlist", "album", "artist", "top", "hot", "suggest"):
            assert resolver.resolve(operation) == f"/{operation}"

    def test_unknown_type_becomes_path(self):
        assert PathResolver().resolve("rank") == "/rank"

    def test_custom_table(self):
        assert PathResolver({"search": "/api/v2/search"}).resolve("search") == "/api/v2/search"

    @pytest.mark.parametrize(
        ("operation", "path"),
        [
            ("a?b", "/a%3Fb"),
            ("a#b", "/a%23b"),
            ("a\nb", "/a%0Ab"),
            ("top list", "/top%20list"),
            ("charts/daily", "/charts/daily"),
        ],
    )
    def test_unknown_type_is_percent_encoded(self, operation, path):
        assert PathResolver().resolve(operation) == path
