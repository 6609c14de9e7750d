"""
seedlab CLI: Command-line interface for seedlab utilities.

Provides commands for:
- draw: Print values from a seeded generator, optionally saving its state
- derive: Print seeds derived from a root seed
- inspect: Show the contents of a saved generator state file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from seedlab.config import SeedlabConfig
from seedlab.derive import SeedDeriver
from seedlab.errors import SeedlabError
from seedlab.generator import VERSION_TAG, SeededGenerator

logger = logging.getLogger(__name__)

DRAW_KINDS = ("uint32", "uint64", "real")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="seedlab",
        description="seedlab: Seeded random generators with exact save/restore",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # draw
    draw_parser = subparsers.add_parser(
        "draw",
        help="Print values drawn from a seeded generator",
    )
    draw_parser.add_argument(
        "--seed", "-s",
        type=int,
        default=0,
        help="Generator seed (default: 0, resolved from config)",
    )
    draw_parser.add_argument(
        "--kind", "-k",
        choices=DRAW_KINDS,
        default="uint32",
        help="Value type to draw (default: uint32)",
    )
    draw_parser.add_argument(
        "-n", "--count",
        type=int,
        default=1,
        help="Number of values to draw (default: 1)",
    )
    draw_parser.add_argument(
        "--state",
        help="Start from a saved state file instead of --seed",
    )
    draw_parser.add_argument(
        "--save",
        help="Write the generator state to this file after drawing",
    )

    # derive
    derive_parser = subparsers.add_parser(
        "derive",
        help="Print seeds derived from a root seed",
    )
    derive_parser.add_argument(
        "--root", "-r",
        type=int,
        default=0,
        help="Root seed (default: 0, resolved from config)",
    )
    derive_parser.add_argument(
        "-n", "--count",
        type=int,
        default=1,
        help="Number of seeds to derive (default: 1)",
    )

    # inspect
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show the fields of a saved generator state file",
    )
    inspect_parser.add_argument("path", help="State file written by 'draw --save'")
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output as JSON",
    )

    args = parser.parse_args(argv)

    # Setup logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "draw":
            return handle_draw(args)
        elif args.command == "derive":
            return handle_derive(args)
        elif args.command == "inspect":
            return handle_inspect(args)
        else:
            parser.print_help()
            return 0
    except (SeedlabError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _count(value: int) -> int:
    if value < 0:
        raise SeedlabError(f"Count must be non-negative, got {value}")
    return value


def handle_draw(args: argparse.Namespace) -> int:
    """Handle the draw command."""
    count = _count(args.count)
    if args.state:
        rng = SeededGenerator.from_file(Path(args.state))
    else:
        config = SeedlabConfig.load_or_default()
        rng = SeededGenerator(args.seed, seed_source=config.seed_source())

    draw = {
        "uint32": rng.draw_uint32,
        "uint64": rng.draw_uint64,
        "real": rng.draw_real64,
    }[args.kind]
    for _ in range(count):
        print(repr(draw()) if args.kind == "real" else draw())

    if args.save:
        rng.save(Path(args.save))
    return 0


def handle_derive(args: argparse.Namespace) -> int:
    """Handle the derive command."""
    count = _count(args.count)
    config = SeedlabConfig.load_or_default()
    deriver = SeedDeriver(SeededGenerator(args.root, seed_source=config.seed_source()))
    for _ in range(count):
        print(deriver.derive())
    return 0


def describe(rng: SeededGenerator) -> dict[str, Any]:
    """Return the fields of a generator's serialized state as a dict."""
    state, inc, has_uint32, uinteger = rng.engine.get_state()
    return {
        "version": VERSION_TAG,
        "seed": rng.seed,
        "engine": {
            "name": "pcg64",
            "state": state,
            "inc": inc,
            "has_uint32": has_uint32,
            "uinteger": uinteger,
        },
        "uint32": [rng.uint32_distribution.low, rng.uint32_distribution.high],
        "uint64": [rng.uint64_distribution.low, rng.uint64_distribution.high],
        "real": [rng.real_distribution.low, rng.real_distribution.high],
    }


def handle_inspect(args: argparse.Namespace) -> int:
    """Handle the inspect command."""
    rng = SeededGenerator.from_file(Path(args.path))
    info = describe(rng)

    if not args.json_output:
        try:
            from rich.console import Console
            from rich.table import Table
        except ImportError:
            logger.warning(
                "rich is not installed, printing JSON instead. "
                "Install it with: pip install seedlab[rich]"
            )
            args.json_output = True

    if args.json_output:
        print(json.dumps(info, indent=2))
        return 0

    table = Table(title=str(args.path), show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value", overflow="fold")
    table.add_row("version", info["version"])
    table.add_row("seed", str(info["seed"]))
    for key, value in info["engine"].items():
        table.add_row(f"engine.{key}", str(value))
    table.add_row("uint32", f"[{info['uint32'][0]}, {info['uint32'][1]}]")
    table.add_row("uint64", f"[{info['uint64'][0]}, {info['uint64'][1]}]")
    table.add_row("real", f"[{info['real'][0]!r}, {info['real'][1]!r})")
    Console().print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
