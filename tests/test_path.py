"""Tests for jsonmutator/path.py path grammar and parsing."""

from typing import List, Tuple

import pytest
from hypothesis import given
from hypothesis import strategies as st

from jsonmutator.errors import ParseError
from jsonmutator.path import Attribute, Index, Segment, format_path, parse_path


# =============================================================================
# Strategies
# =============================================================================


attribute_names = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-",
    min_size=1,
    max_size=12,
)
segments_strategy = st.lists(
    st.one_of(
        attribute_names.map(Attribute),
        st.integers(min_value=0, max_value=10_000).map(Index),
    ),
    min_size=1,
    max_size=8,
)


# =============================================================================
# Valid paths
# =============================================================================


class TestParsePath:
    """Tests for parse_path on well-formed input."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("name", (Attribute("name"),)),
            ("manager.name", (Attribute("manager"), Attribute("name"))),
            ("knights[0]", (Attribute("knights"), Index(0))),
            (
                "knights[0].name",
                (Attribute("knights"), Index(0), Attribute("name")),
            ),
            (
                "manager.titles[0].fr",
                (Attribute("manager"), Attribute("titles"), Index(0), Attribute("fr")),
            ),
            ("[3]", (Index(3),)),
            ("[2][0]", (Index(2), Index(0))),
            ("[1].name", (Index(1), Attribute("name"))),
            ("matrix[10][20]", (Attribute("matrix"), Index(10), Index(20))),
            ("snake_case.kebab-case", (Attribute("snake_case"), Attribute("kebab-case"))),
            ("0", (Attribute("0"),)),
            ("a.0.b", (Attribute("a"), Attribute("0"), Attribute("b"))),
            ("[007]", (Index(7),)),
        ],
    )
    def test_parses_valid_paths(self, path: str, expected: Tuple[Segment, ...]) -> None:
        """Test that valid paths split into the expected segments."""
        assert parse_path(path) == expected

    def test_returns_fresh_tuple_each_call(self) -> None:
        """Test that parsing is pure and repeatable."""
        first = parse_path("a.b[1]")
        second = parse_path("a.b[1]")

        assert first == second
        assert isinstance(first, tuple)


# =============================================================================
# Invalid paths
# =============================================================================


class TestParsePathErrors:
    """Tests for parse_path rejecting malformed input."""

    @pytest.mark.parametrize(
        "path",
        [
            "",
            ".",
            "a..b",
            "a.",
            ".a",
            "a.[0]",
            "a[]",
            "a[x]",
            "a[-1]",
            "a[1",
            "a]",
            "a0]",
            "a b",
            "a/b",
            "a.b.",
            "[0]name",
            "a[0]b",
            "name\n",
            "a[٣]",
            "ünïcode",
        ],
    )
    def test_rejects_malformed_paths(self, path: str) -> None:
        """Test that paths outside the grammar raise ParseError."""
        with pytest.raises(ParseError, match="malformed path"):
            parse_path(path)

    def test_error_keeps_path_verbatim(self) -> None:
        """Test that the offending path is kept on the error."""
        with pytest.raises(ParseError) as exc_info:
            parse_path("knights..name")

        assert exc_info.value.path == "knights..name"
        assert "knights..name" in str(exc_info.value)

    def test_rejects_non_string(self) -> None:
        """Test that non-string input is a parse error, not a crash."""
        with pytest.raises(ParseError):
            parse_path(None)  # type: ignore[arg-type]

    def test_rejects_index_too_long_to_convert(self) -> None:
        """Test that an index past the int conversion limit is a malformed index."""
        path = "[" + "1" * 5000 + "]"

        with pytest.raises(ParseError, match="malformed index") as exc_info:
            parse_path(path)

        assert exc_info.value.path == path


# =============================================================================
# Segments and formatting
# =============================================================================


class TestSegments:
    """Tests for segment types and format_path."""

    def test_segment_str(self) -> None:
        """Test that segments render as path text."""
        assert str(Attribute("name")) == "name"
        assert str(Index(4)) == "[4]"

    def test_index_rejects_negative(self) -> None:
        """Test that Index cannot hold a negative position."""
        with pytest.raises(ValueError, match="non-negative"):
            Index(-1)

    def test_index_rejects_bool(self) -> None:
        """Test that Index requires a real int."""
        with pytest.raises(TypeError):
            Index(True)

    @pytest.mark.parametrize(
        "segments,expected",
        [
            ([Attribute("name")], "name"),
            ([Attribute("knights"), Index(0), Attribute("name")], "knights[0].name"),
            ([Index(2), Index(0)], "[2][0]"),
            ([Index(1), Attribute("name")], "[1].name"),
        ],
    )
    def test_format_path(self, segments: List[Segment], expected: str) -> None:
        """Test that format_path uses '.' before attributes and nothing before indices."""
        assert format_path(segments) == expected

    @given(segments_strategy)
    def test_format_then_parse_round_trips(self, segments: List[Segment]) -> None:
        """Test that formatted segments parse back to the same segments."""
        assert parse_path(format_path(segments)) == tuple(segments)

    @given(st.text(max_size=20))
    def test_parsing_is_total(self, text: str) -> None:
        """Test that any string either parses to segments or raises ParseError."""
        try:
            segments = parse_path(text)
        except ParseError:
            return
        assert len(segments) >= 1
        assert parse_path(format_path(segments)) == segments
