"""Path-addressed mutations over untyped JSON trees.

A tree is whatever json.loads produces: dicts, lists, str, int, float,
bool and None. Every operation returns the (possibly new) node, and callers
must use the returned value in place of the one they passed in.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .errors import AddressError, BoundsError, PathError, PathNotFoundError
from .path import Attribute, Index, Segment, parse_path

_MISSING = object()


@dataclass(frozen=True)
class RawJSON:
    """A value given as JSON text, decoded when the mutation is applied."""

    text: str

    def decode(self) -> Any:
        return json.loads(self.text)


def _clone_containers(value: Any, memo: Dict[int, Any]) -> Any:
    """Copy dicts, lists and tuples, keeping leaves as they are.

    Tuples become lists, as the encoder writes them as arrays anyway.
    Shared and cyclic containers map to the same clone through memo, so a
    cycle in the value is still a cycle for the encoder to refuse.
    """
    if not isinstance(value, (dict, list, tuple)):
        return value
    if id(value) in memo:
        return memo[id(value)]

    if isinstance(value, dict):
        cloned_dict: Dict[Any, Any] = {}
        memo[id(value)] = cloned_dict
        for key, item in value.items():
            cloned_dict[key] = _clone_containers(item, memo)
        return cloned_dict

    cloned_list: List[Any] = []
    memo[id(value)] = cloned_list
    for item in value:
        cloned_list.append(_clone_containers(item, memo))
    return cloned_list


def _attribute_of(segment: Segment) -> str:
    if not isinstance(segment, Attribute):
        raise AddressError("cannot address object by index", segment)
    return segment.name


def _index_of(segment: Segment) -> int:
    if not isinstance(segment, Index):
        raise AddressError("cannot address array by attribute", segment)
    return segment.index


def remove_value(node: Any, segments: Sequence[Segment]) -> Any:
    """Remove the value addressed by segments.

    Missing keys, out-of-range indices and None along the way are no-ops.

    Args:
        node: Current tree node
        segments: Remaining path segments, at least one

    Returns:
        The node to store in place of the given one

    Raises:
        AddressError: If a segment kind does not match the node kind
        PathError: If the path continues past a scalar
    """
    head, rest = segments[0], segments[1:]

    if isinstance(node, dict):
        key = _attribute_of(head)
        if not rest:
            node.pop(key, None)
            return node
        if key not in node:
            return node
        node[key] = remove_value(node[key], rest)
        return node

    if isinstance(node, list):
        index = _index_of(head)
        if index >= len(node):
            return node
        if not rest:
            del node[index]
            return node
        node[index] = remove_value(node[index], rest)
        return node

    if node is None:
        return node

    raise PathError(head)


def set_value(node: Any, segments: Sequence[Segment], value: Any) -> Any:
    """Write value at the location addressed by segments.

    Missing containers are created on the way: None (or an absent key)
    becomes a dict before an attribute and a list before an index.

    Args:
        node: Current tree node
        segments: Remaining path segments
        value: Value to install

    Returns:
        The node to store in place of the given one

    Raises:
        AddressError: If a segment kind does not match the node kind
        BoundsError: If an index is past the end of an array
        PathError: If the path continues past a scalar
    """
    if not segments:
        return value

    head, rest = segments[0], segments[1:]

    if isinstance(node, dict):
        key = _attribute_of(head)
        node[key] = set_value(node.get(key), rest, value)
        return node

    if isinstance(node, list):
        index = _index_of(head)
        if index < 0 or index > len(node):
            raise BoundsError(index, len(node))
        if index == len(node):
            node.append(set_value(None, rest, value))
        else:
            node[index] = set_value(node[index], rest, value)
        return node

    if node is None:
        created: Any = {} if isinstance(head, Attribute) else []
        return set_value(created, segments, value)

    raise PathError(head)


def get_value(node: Any, segments: Sequence[Segment]) -> Any:
    """Read the value addressed by segments.

    Raises:
        PathNotFoundError: If a key, index or intermediate value is missing
        AddressError: If a segment kind does not match the node kind
        PathError: If the path continues past a scalar
    """
    current = node
    for segment in segments:
        if isinstance(current, dict):
            key = _attribute_of(segment)
            if key not in current:
                raise PathNotFoundError(segment)
            current = current[key]
        elif isinstance(current, list):
            index = _index_of(segment)
            if index >= len(current):
                raise PathNotFoundError(segment)
            current = current[index]
        elif current is None:
            raise PathNotFoundError(segment)
        else:
            raise PathError(segment)
    return current


def lookup(tree: Any, path: str, default: Any = _MISSING) -> Any:
    """Read the value at a path string.

    Returns default when the path is absent and a default was given.
    """
    try:
        return get_value(tree, parse_path(path))
    except PathNotFoundError:
        if default is _MISSING:
            raise
        return default


class Mutation(ABC):
    """A deferred change to a JSON tree.

    To add a new mutation:
    1. Create a frozen dataclass inheriting from Mutation
    2. Implement apply and describe
    """

    @abstractmethod
    def apply(self, tree: Any) -> Any:
        """Apply the change and return the new tree root.

        Args:
            tree: Decoded JSON tree, owned by the caller

        Returns:
            New tree root; it may or may not be the same object

        Raises:
            MutationError: If the path is malformed or cannot be applied
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable label (e.g., 'remove name')."""
        pass


@dataclass(frozen=True)
class Remove(Mutation):
    """Delete the value at path, if there is one."""

    path: str

    def apply(self, tree: Any) -> Any:
        return remove_value(tree, parse_path(self.path))

    def describe(self) -> str:
        return f"remove {self.path}"


@dataclass(frozen=True)
class Set(Mutation):
    """Write value at path, creating intermediate objects and arrays."""

    path: str
    value: Any = None

    def apply(self, tree: Any) -> Any:
        segments = parse_path(self.path)
        if isinstance(self.value, RawJSON):
            value = self.value.decode()
        else:
            # The tree must never share structure with caller-held values
            value = _clone_containers(self.value, {})
        return set_value(tree, segments, value)

    def describe(self) -> str:
        if isinstance(self.value, RawJSON):
            return f"set {self.path} = {self.value.text}"
        return f"set {self.path} = {self.value!r}"
