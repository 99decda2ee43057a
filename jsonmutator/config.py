"""Mutation script dataclasses and YAML loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .modify import EncodeOptions
from .mutations import Mutation, RawJSON, Remove, Set

SCRIPT_TYPE = "json-mutations"
SCRIPT_VERSION = 1


@dataclass
class OutputConfig:
    """Output formatting for a mutation script."""

    indent: Optional[int] = None
    sort_keys: bool = False
    ensure_ascii: bool = False

    def to_encode_options(self) -> EncodeOptions:
        return EncodeOptions(
            indent=self.indent,
            sort_keys=self.sort_keys,
            ensure_ascii=self.ensure_ascii,
        )


@dataclass
class MutationScript:
    """A named, ordered list of mutations loaded from YAML."""

    name: str
    mutations: List[Mutation] = field(default_factory=list)
    output: OutputConfig = field(default_factory=OutputConfig)


def parse_mutation(entry: Dict[str, Any]) -> Mutation:
    """Parse one mutation entry from a script.

    Accepted shapes:
    - {"remove": "path"}
    - {"set": "path", "value": <any YAML value>}
    - {"set": "path", "raw": "<JSON text>"}

    Raises:
        ValueError: If the entry is not one of the shapes above
    """
    if not isinstance(entry, dict):
        raise ValueError(f"Mutation must be a mapping, got {type(entry).__name__}")

    has_set = "set" in entry
    has_remove = "remove" in entry

    if has_set and has_remove:
        raise ValueError("Mutation cannot have both 'set' and 'remove' fields")
    if not has_set and not has_remove:
        raise ValueError("Mutation requires either 'set' or 'remove' field")

    path = entry["set"] if has_set else entry["remove"]
    if not isinstance(path, str) or not path:
        raise ValueError(f"Mutation path must be a non-empty string, got {path!r}")

    if has_remove:
        extra = set(entry) - {"remove"}
        if extra:
            raise ValueError(
                f"Unexpected field(s) for remove: {', '.join(sorted(extra))}"
            )
        return Remove(path)

    extra = set(entry) - {"set", "value", "raw"}
    if extra:
        raise ValueError(f"Unexpected field(s) for set: {', '.join(sorted(extra))}")

    has_value = "value" in entry
    has_raw = "raw" in entry

    if has_value and has_raw:
        raise ValueError("Set mutation cannot have both 'value' and 'raw' fields")
    if not has_value and not has_raw:
        raise ValueError("Set mutation requires either 'value' or 'raw' field")

    if has_raw:
        if not isinstance(entry["raw"], str):
            raise ValueError("Set mutation 'raw' field must be JSON text")
        return Set(path, RawJSON(entry["raw"]))

    return Set(path, entry["value"])


def _parse_output(output_data: Dict[str, Any]) -> OutputConfig:
    indent = output_data.get("indent")
    if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int)):
        raise ValueError(f"Output 'indent' must be an integer, got {indent!r}")

    return OutputConfig(
        indent=indent,
        sort_keys=bool(output_data.get("sort_keys", False)),
        ensure_ascii=bool(output_data.get("ensure_ascii", False)),
    )


def load_script(script_path: Path) -> MutationScript:
    """Load and parse a mutation script.

    Args:
        script_path: Path to the YAML script

    Raises:
        FileNotFoundError: If the script does not exist
        ValueError: If the script is not a valid mutation script
    """
    if not script_path.exists():
        raise FileNotFoundError(f"Mutation script not found at:\n  {script_path}")

    is_valid, error = validate_script_file(script_path)
    if not is_valid:
        raise ValueError(f"Invalid mutation script {script_path}: {error}")

    with open(script_path, "r") as f:
        data = yaml.safe_load(f)

    mutations: List[Mutation] = []
    for position, entry in enumerate(data.get("mutations") or [], start=1):
        try:
            mutations.append(parse_mutation(entry))
        except ValueError as e:
            raise ValueError(f"Mutation {position} in {script_path}: {e}") from e

    return MutationScript(
        name=data.get("name", script_path.stem),
        mutations=mutations,
        output=_parse_output(data.get("output") or {}),
    )


def validate_script_file(file_path: Path) -> tuple[bool, Optional[str]]:
    """Validate that a file is a mutation script with required type and version.

    Args:
        file_path: Path to the script file

    Returns:
        Tuple of (is_valid, error_message). If valid, error_message is None.
    """
    if not file_path.exists():
        return False, f"File not found: {file_path}"

    if not file_path.is_file():
        return False, f"Not a file: {file_path}"

    try:
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, f"Invalid YAML: {e}"

    if not isinstance(data, dict):
        return False, "Mutation script must contain a YAML dictionary"

    if data.get("type") != SCRIPT_TYPE:
        return False, f"Missing or invalid 'type' field (must be '{SCRIPT_TYPE}')"

    if data.get("version") != SCRIPT_VERSION:
        return False, f"Missing or invalid 'version' field (must be {SCRIPT_VERSION})"

    mutations = data.get("mutations")
    if mutations is not None and not isinstance(mutations, list):
        return False, "'mutations' must be a list"

    output = data.get("output")
    if output is not None and not isinstance(output, dict):
        return False, "'output' must be a mapping"

    return True, None
