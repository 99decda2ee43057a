"""Decode, mutate and re-encode JSON documents."""

import json
from dataclasses import dataclass
from logging import getLogger
from typing import Any, Iterable, Optional

from .mutations import Mutation

logger = getLogger(__name__)


@dataclass
class EncodeOptions:
    """How the mutated tree is written back to text."""

    indent: Optional[int] = None
    sort_keys: bool = False
    ensure_ascii: bool = False


def apply_mutations(tree: Any, mutations: Iterable[Mutation]) -> Any:
    """Apply mutations in order and return the new tree root.

    The first failing mutation aborts the fold; later ones never run.
    """
    for position, mutation in enumerate(mutations, start=1):
        logger.debug("Applying mutation %d: %s", position, mutation.describe())
        tree = mutation.apply(tree)
    return tree


def encode(tree: Any, options: Optional[EncodeOptions] = None) -> str:
    """Serialize a tree to JSON text.

    Non-finite floats, cycles and non-JSON types raise the json module's
    own ValueError or TypeError.
    """
    options = options or EncodeOptions()
    separators = (",", ":") if options.indent is None else (",", ": ")
    return json.dumps(
        tree,
        indent=options.indent,
        separators=separators,
        sort_keys=options.sort_keys,
        ensure_ascii=options.ensure_ascii,
        allow_nan=False,
    )


def modify(
    input_text: str,
    *mutations: Mutation,
    options: Optional[EncodeOptions] = None,
) -> str:
    """Apply mutations to a JSON document.

    Args:
        input_text: JSON text to modify
        *mutations: Mutations applied left to right
        options: Output formatting, compact by default

    Returns:
        The re-encoded document

    Raises:
        json.JSONDecodeError: If input_text is not valid JSON
        MutationError: From the first mutation that fails
        ValueError, TypeError: If the result cannot be encoded
    """
    tree = json.loads(input_text)
    logger.debug("Decoded %d characters of input", len(input_text))

    tree = apply_mutations(tree, mutations)

    output = encode(tree, options)
    logger.debug("Encoded result after %d mutation(s)", len(mutations))
    return output
