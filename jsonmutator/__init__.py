"""Path-addressed set/remove mutations for untyped JSON documents."""

from .config import (
    MutationScript,
    OutputConfig,
    load_script,
    parse_mutation,
    validate_script_file,
)
from .errors import (
    AddressError,
    BoundsError,
    MutationError,
    ParseError,
    PathError,
    PathNotFoundError,
)
from .modify import EncodeOptions, apply_mutations, encode, modify
from .mutations import (
    Mutation,
    RawJSON,
    Remove,
    Set,
    get_value,
    lookup,
    remove_value,
    set_value,
)
from .path import Attribute, Index, Segment, format_path, parse_path

__all__ = [
    # Config
    "MutationScript",
    "OutputConfig",
    "load_script",
    "parse_mutation",
    "validate_script_file",
    # Errors
    "AddressError",
    "BoundsError",
    "MutationError",
    "ParseError",
    "PathError",
    "PathNotFoundError",
    # Pipeline
    "EncodeOptions",
    "apply_mutations",
    "encode",
    "modify",
    # Mutations
    "Mutation",
    "RawJSON",
    "Remove",
    "Set",
    "get_value",
    "lookup",
    "remove_value",
    "set_value",
    # Paths
    "Attribute",
    "Index",
    "Segment",
    "format_path",
    "parse_path",
]
