"""Path parsing for addressing values inside a JSON tree.

Paths are a small dotted grammar, not JSON Pointer or JSONPath:

- "name" -> (Attribute("name"),)
- "knights[0].name" -> (Attribute("knights"), Index(0), Attribute("name"))
- "[2][0]" -> (Index(2), Index(0))

Attribute names are limited to letters, digits, '_' and '-'. There is no
escaping, so a key containing '.' or '[' cannot be addressed.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from .errors import ParseError

_ATTRIBUTE = r"[A-Za-z0-9_\-]+"
_INDEX = r"\[[0-9]+\]"

# First segment has no separator, later attributes need a '.', indices none.
PATH_PATTERN = re.compile(rf"(?:{_ATTRIBUTE}|{_INDEX})(?:\.{_ATTRIBUTE}|{_INDEX})*")

_ATTRIBUTE_RUN = re.compile(r"[^.\[]+")


@dataclass(frozen=True)
class Attribute:
    """Object member access."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Index:
    """Array element access."""

    index: int

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise TypeError(f"Index must be an int, got {type(self.index).__name__}")
        if self.index < 0:
            raise ValueError(f"Index must be non-negative, got {self.index}")

    def __str__(self) -> str:
        return f"[{self.index}]"


Segment = Union[Attribute, Index]


def parse_path(path: str) -> Tuple[Segment, ...]:
    """Parse a path string into its segments.

    Args:
        path: Path text such as "manager.titles[0].fr"

    Returns:
        Non-empty tuple of Attribute and Index segments

    Raises:
        ParseError: If the path does not match the grammar
    """
    if not isinstance(path, str) or not PATH_PATTERN.fullmatch(path):
        raise ParseError(path)

    segments = []
    remaining = path
    while remaining:
        try:
            segment, remaining = _split_first_segment(remaining)
        except ParseError as e:
            raise ParseError(path, f"failed to parse path {path!r}: {e}") from e
        segments.append(segment)

    return tuple(segments)


def _split_first_segment(path: str) -> Tuple[Segment, str]:
    """Read one segment off the front of an already validated path."""
    if path.startswith("."):
        path = path[1:]

    if path.startswith("["):
        end = path.index("]")
        digits = path[1:end]
        try:
            index = int(digits)
        except ValueError as e:
            raise ParseError(path, f"malformed index {digits!r}") from e
        return Index(index), path[end + 1 :]

    name = _ATTRIBUTE_RUN.match(path).group(0)
    return Attribute(name), path[len(name) :]


def format_path(segments: Iterable[Segment]) -> str:
    """Render segments back into path text.

    Attributes after the first segment get a '.' separator, indices are
    appended directly.
    """
    parts = []
    for segment in segments:
        if isinstance(segment, Attribute) and parts:
            parts.append(".")
        parts.append(str(segment))
    return "".join(parts)
