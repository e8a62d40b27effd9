#!/usr/bin/env python3
"""
CLI tool for resolving entity ancestry.

Usage:
    python -m ancestry_svc.cli ancestors hierarchy.yaml K
    python -m ancestry_svc.cli entities hierarchy.yaml
    python -m ancestry_svc.cli demo
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from colorama import Fore, Style, just_fix_windows_console

from .demo import D, K, REGISTRY
from .hierarchy.loader import load_hierarchy_from_yaml
from .hierarchy.types import HierarchyError
from .resolver import native_derives_from, resolve_ancestors
from .walker import WalkTrace, walk

logger = logging.getLogger(__name__)

EXIT_USAGE = 1
EXIT_HIERARCHY = 2


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}"


def print_chain(names: list[str]) -> None:
    """Print an ancestor chain, base first."""
    if not names:
        print(colorize("  (no registered ancestors)", Style.DIM))
        return

    for i, name in enumerate(names):
        indent = "  " * i
        marker = "└─" if i == len(names) - 1 else "├─"
        print(f"  {indent}{colorize(marker, Style.DIM)} {colorize(name, Fore.CYAN)}")


def cmd_ancestors(args) -> int:
    """Resolve and print the ancestors of an entity."""
    registry = load_hierarchy_from_yaml(args.file)
    names = [entity.name for entity in registry.resolve(args.name)]
    logger.debug(f"Resolved {args.name}: {names}")

    if args.json:
        print(json.dumps({"query": args.name, "ancestors": names}, indent=2))
        return 0

    print(colorize("\nQuery:", Style.BRIGHT), colorize(args.name, Fore.YELLOW))
    print(colorize("Ancestors (base first):", Style.BRIGHT))
    print_chain(names)
    return 0


def cmd_entities(args) -> int:
    """List the registry order and entity definitions."""
    registry = load_hierarchy_from_yaml(args.file)

    print(colorize("\nRegistry:", Style.BRIGHT), ", ".join(e.name for e in registry.registration_order()))
    print(colorize("\nEntities:", Style.BRIGHT))
    for entity in registry.all_entities():
        parents = ", ".join(entity.parents) if entity.parents else colorize("(root)", Style.DIM)
        print(f"  {colorize('•', Fore.CYAN)} {entity.label}: {parents}")
    return 0


def cmd_demo(args) -> int:
    """Walk the demonstration hierarchy for D and K."""
    for query in (D, K):
        print(colorize(f"\n{query.__name__}:", Style.BRIGHT))
        trace = WalkTrace(action=lambda base, _: print(f"  base = {base.__name__}"))
        walk(resolve_ancestors(REGISTRY, query, native_derives_from), query(), trace)
        summary = f"{len(trace.narrowed_names)} of {len(trace.steps)} ancestors narrowed"
        print(colorize(f"  ({summary})", Style.DIM))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve the ordered ancestry of an entity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each resolution step",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    anc_parser = subparsers.add_parser("ancestors", help="Resolve the ancestors of an entity")
    anc_parser.add_argument("file", help="Hierarchy definition file (YAML or JSON)")
    anc_parser.add_argument("name", help="Entity to resolve")
    anc_parser.add_argument("--json", action="store_true", help="Print JSON output")

    ent_parser = subparsers.add_parser("entities", help="List registered entities")
    ent_parser.add_argument("file", help="Hierarchy definition file (YAML or JSON)")

    subparsers.add_parser("demo", help="Walk the demonstration hierarchy")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse uses exit status 2 for usage errors
        if e.code:
            return EXIT_USAGE
        raise

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    just_fix_windows_console()

    commands = {
        "ancestors": cmd_ancestors,
        "entities": cmd_entities,
        "demo": cmd_demo,
    }
    if args.command not in commands:
        parser.print_help()
        return EXIT_USAGE

    try:
        return commands[args.command](args)
    except (HierarchyError, FileNotFoundError) as e:
        print(colorize(f"Error: {e}", Fore.RED), file=sys.stderr)
        return EXIT_HIERARCHY


if __name__ == "__main__":
    sys.exit(main())
