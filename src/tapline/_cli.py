"""Tapline CLI — tapline resolve / tapline config.

Entry point for the ``tapline`` command-line interface.  ``resolve`` runs
the component-tree resolver over a tree described in YAML or JSON, which
is handy for checking how labels and opt-outs play out before shipping.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml

from tapline._errors import ConfigError, TaplineError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the tapline CLI."""
    parser = argparse.ArgumentParser(
        prog="tapline",
        description="Component-tree autocapture and live feature-flag bindings.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tapline resolve
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve a touch against a component chain described in a file",
    )
    resolve_parser.add_argument("file", help="YAML/JSON list of nodes, touched node first")
    resolve_parser.add_argument("--x", type=float, default=0.0, help="Touch page x")
    resolve_parser.add_argument("--y", type=float, default=0.0, help="Touch page y")
    resolve_parser.add_argument("--root", default=".", help="Directory holding tapline config")
    resolve_parser.add_argument(
        "--max-tree-size", type=int, default=None, help="Override the ancestor walk bound",
    )

    # tapline config
    config_parser = subparsers.add_parser(
        "config",
        help="Print the effective configuration",
    )
    config_parser.add_argument("root", nargs="?", default=".", help="Directory holding tapline config")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from tapline import __version__

    return __version__


def _load_chain(path: Path) -> Any:
    """Build a ComponentNode chain from a YAML/JSON node list."""
    from tapline.capture.tree import ComponentNode, ElementType

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise TaplineError(msg) from exc

    if isinstance(data, dict):
        data = data.get("nodes")
    if not isinstance(data, list):
        msg = f"{path} must hold a list of nodes (or a mapping with 'nodes')"
        raise TaplineError(msg)

    nodes = []
    for entry in data:
        if not isinstance(entry, dict):
            msg = f"Each node in {path} must be a mapping, got {entry!r}"
            raise TaplineError(msg)
        element_type = None
        if entry.get("display_name") is not None or entry.get("name") is not None:
            element_type = ElementType(
                display_name=entry.get("display_name"),
                name=entry.get("name"),
            )
        nodes.append(ComponentNode(element_type=element_type, memoized_props=entry.get("props")))
    return ComponentNode.chain(*nodes)


def _resolve(args: argparse.Namespace) -> int:
    from tapline.capture.resolver import ComponentTreeResolver
    from tapline.capture.tree import TouchEvent
    from tapline.config_loader import load_config

    config = load_config(Path(args.root), max_tree_size=args.max_tree_size)
    target = _load_chain(Path(args.file))
    resolution = ComponentTreeResolver(config).resolve(
        TouchEvent(target=target, page_x=args.x, page_y=args.y)
    )
    out: dict[str, Any] = {
        "captured": resolution.captured,
        "nodes_visited": resolution.nodes_visited,
    }
    if resolution.payload is None:
        out["reason"] = resolution.skip_reason
    else:
        out.update(resolution.payload.to_dict())
    print(json.dumps(out, indent=2))
    return 0


def _config(args: argparse.Namespace) -> int:
    from tapline.config_loader import load_config

    config = load_config(Path(args.root))
    print(json.dumps(asdict(config), indent=2))
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "resolve":
            code = _resolve(args)
        else:
            code = _config(args)
    except ConfigError as exc:
        print(f"  Config error: {exc}", file=sys.stderr)
        sys.exit(1)
    except TaplineError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
