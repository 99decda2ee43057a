"""Exceptions raised while parsing paths and mutating JSON trees."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .path import Segment


class MutationError(Exception):
    """Base exception for all path and mutation errors."""

    pass


class ParseError(MutationError):
    """Raised when a path string does not match the path grammar.

    Attributes:
        path: The offending path text, verbatim
    """

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        if message:
            super().__init__(message)
        else:
            super().__init__(f"malformed path {path!r}: it doesn't seem valid")


class AddressError(MutationError):
    """Raised when a segment kind does not match the node it addresses.

    An index was used on an object, or an attribute on an array.

    Attributes:
        segment: The segment that could not be applied
    """

    def __init__(self, message: str, segment: Optional["Segment"] = None):
        self.segment = segment
        super().__init__(message)


class BoundsError(MutationError):
    """Raised when a set targets an index past the end of an array.

    Attributes:
        index: The requested index
        length: Length of the array at the time of the set
    """

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(
            f"out of bounds insertion index: [{index}] on an array of length {length}"
        )


class PathError(MutationError):
    """Raised when a path continues past a scalar value.

    Attributes:
        segment: The segment that could not be descended into
    """

    def __init__(self, segment: Optional["Segment"] = None):
        self.segment = segment
        if segment is None:
            super().__init__("invalid path")
        else:
            super().__init__(f"invalid path: cannot descend into a scalar at '{segment}'")


class PathNotFoundError(MutationError, LookupError):
    """Raised by lookups when the addressed value does not exist."""

    def __init__(self, segment: "Segment"):
        self.segment = segment
        super().__init__(f"no value at '{segment}'")
