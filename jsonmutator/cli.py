"""
jsonmutator CLI

Apply path-addressed set/remove mutations to a JSON document.

Usage:
    jsonmutator fixture.json --set "manager.titles[0].fr=Suzerain"
    jsonmutator fixture.json -s tweaks.yml -i
    cat fixture.json | jsonmutator --remove knights[1]
"""

import argparse
import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import List, NoReturn, Optional

from rich.logging import RichHandler

from jsonmutator.config import load_script
from jsonmutator.display import ICONS, console, print_error, print_summary
from jsonmutator.errors import MutationError
from jsonmutator.modify import EncodeOptions, apply_mutations, encode
from jsonmutator.mutations import Mutation, Remove, Set

logger = logging.getLogger(__name__)


def _parse_set_argument(argument: str) -> Set:
    """Turn 'PATH=VALUE' into a Set mutation.

    VALUE is decoded as JSON when possible, otherwise kept as a string.
    """
    path, sep, raw_value = argument.partition("=")
    if not sep or not path:
        raise argparse.ArgumentTypeError(
            f"expected PATH=VALUE, got {argument!r}"
        )

    try:
        value = json.loads(raw_value)
    except json.JSONDecodeError:
        value = raw_value

    return Set(path, value)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonmutator",
        description="Set or remove values in a JSON document by path",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
{ICONS['info']} Examples:
    jsonmutator fixture.json --set "manager.titles[0].fr=Suzerain"
    jsonmutator fixture.json --remove "knights[1]" -o out.json
    jsonmutator fixture.json -s tweaks.yml --in-place

{ICONS['file']} Paths:
    name, manager.name, knights[0].name, [2][0]
        """,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="JSON file to modify, or '-' for stdin (default: stdin)",
    )
    parser.add_argument(
        "-s",
        "--script",
        dest="script",
        default=None,
        help="YAML mutation script, applied before --set/--remove",
    )
    parser.add_argument(
        "--set",
        dest="mutations",
        action="append",
        type=_parse_set_argument,
        metavar="PATH=VALUE",
        help="Set the value at PATH (VALUE is parsed as JSON when valid)",
    )
    parser.add_argument(
        "--remove",
        dest="mutations",
        action="append",
        type=Remove,
        metavar="PATH",
        help="Remove the value at PATH",
    )
    destination = parser.add_mutually_exclusive_group()
    destination.add_argument(
        "-o",
        "--output",
        dest="output",
        default=None,
        help="Write the result to this file instead of stdout",
    )
    destination.add_argument(
        "-i",
        "--in-place",
        action="store_true",
        default=False,
        help="Overwrite the input file with the result",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print with this indent (default: compact)",
    )
    parser.add_argument(
        "--sort-keys",
        action="store_true",
        default=False,
        help="Sort object keys in the output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Log each mutation as it is applied",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _write_atomic(path: Path, content: str) -> None:
    """Write content to path via a temp file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=path.name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def _fail(title: str, message: str) -> NoReturn:
    print_error(title, message)
    sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    from_stdin = args.input == "-"
    if args.in_place and from_stdin:
        parser.error("--in-place requires an input file")

    mutations: List[Mutation] = []
    options = EncodeOptions()

    if args.script:
        try:
            script = load_script(Path(args.script))
        except (FileNotFoundError, ValueError) as e:
            _fail("Invalid mutation script", str(e))
        logger.debug("Loaded script '%s' with %d mutation(s)", script.name, len(script.mutations))
        mutations.extend(script.mutations)
        options = script.output.to_encode_options()

    mutations.extend(args.mutations or [])

    if args.indent is not None:
        options.indent = args.indent
    if args.sort_keys:
        options.sort_keys = True

    if from_stdin:
        input_text = sys.stdin.read()
    else:
        input_path = Path(args.input)
        try:
            input_text = input_path.read_text(encoding="utf-8")
        except OSError as e:
            _fail("Cannot read input", str(e))

    try:
        tree = json.loads(input_text)
    except json.JSONDecodeError as e:
        _fail("Invalid JSON input", str(e))

    try:
        tree = apply_mutations(tree, mutations)
    except (MutationError, ValueError) as e:
        _fail("Mutation failed", str(e))

    try:
        output = encode(tree, options)
    except (ValueError, TypeError) as e:
        _fail("Cannot encode result", str(e))

    if args.in_place or args.output:
        target = Path(args.input) if args.in_place else Path(args.output)
        try:
            _write_atomic(target, output + "\n")
        except OSError as e:
            _fail("Cannot write output", str(e))
        print_summary([m.describe() for m in mutations], str(target))
    else:
        sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
