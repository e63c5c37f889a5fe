#!/usr/bin/env python3
"""
UE Dependency Tree - command line

Usage:
    unreal-deptree tree <asset.uasset>                Build and print the dependency tree
    unreal-deptree tree <asset> --max-depth 3         Limit recursion depth
    unreal-deptree tree <asset> --dot deptree.dot     Also write a Graphviz DOT file
    unreal-deptree tree <asset> --json                Print the graph as JSON

    unreal-deptree resolve <reference> --asset <a>    Resolve one import reference
    unreal-deptree roots <asset>                      Show the discovered directories
    unreal-deptree config --engine <dir>              Save default engine directory
"""

import argparse
import json
import logging
import os
import sys
import time as time_module
from datetime import datetime

from unreal_deptree.asset_dirs import discover_root_directories
from unreal_deptree.assets.errors import AssetReadError, AssetResolutionError
from unreal_deptree.assets.reader import get_default_reader
from unreal_deptree.core import config
from unreal_deptree.graph import (
    build_dependency_graph,
    format_failure_report,
    format_node_report,
    to_dot,
)
from unreal_deptree.locator import AssetLocator

logger = logging.getLogger("unreal-deptree")


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose or config.DEBUG else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _check_asset_arg(asset: str) -> str:
    asset = os.path.abspath(os.path.expanduser(asset))
    if not asset.lower().endswith(".uasset"):
        print(f"ERROR: Expected .uasset file, got: {asset}")
        sys.exit(1)
    if not os.path.exists(asset):
        print(f"ERROR: Asset not found: {asset}")
        sys.exit(1)
    return asset


def _make_progress():
    """Progress callback writing ``message: current/total`` lines."""
    _is_tty = sys.stdout.isatty()
    state = {"last": ""}

    def timestamp():
        return datetime.now().strftime("%H:%M:%S")

    def progress(status_msg, current, total):
        if total > 0:
            line = f"[{timestamp()}] {current:,}/{total:,} {status_msg}"
        else:
            line = f"[{timestamp()}] {status_msg}"

        if _is_tty:
            sys.stdout.write("\r" + line[:120].ljust(120))
        elif status_msg != state["last"] and not status_msg.startswith("Resolv"):
            sys.stdout.write(line + "\n")
        state["last"] = status_msg
        sys.stdout.flush()

    def finish():
        if _is_tty and state["last"]:
            sys.stdout.write("\n")
            sys.stdout.flush()

    return progress, finish


def cmd_tree(args):
    """Build the dependency tree of an asset."""
    asset = _check_asset_arg(args.asset)
    max_depth = config.get_max_depth(args.max_depth)
    if max_depth < 0:
        print(f"ERROR: --max-depth must be >= 0, got {max_depth}")
        sys.exit(1)

    roots = discover_root_directories(asset, args.engine)
    if roots.project_content_dir is None:
        logger.warning("Asset is not inside a Content folder; /Game references will fail")
    if roots.engine_content_dir is None:
        logger.warning("Engine directory is not set; /Engine references will fail")

    progress, finish = (None, None)
    if not args.json and not args.no_progress:
        progress, finish = _make_progress()

    start = time_module.time()
    try:
        graph = build_dependency_graph(
            asset, roots, max_depth, reader=get_default_reader(), progress=progress
        )
    except AssetReadError as e:
        if finish:
            finish()
        print(f"ERROR: {e}")
        sys.exit(1)
    if finish:
        finish()
    elapsed = time_module.time() - start

    if args.json:
        print(json.dumps(graph.to_dict(), indent=2))
    else:
        print(format_node_report(graph))
        if graph.failures:
            print(format_failure_report(graph))

        counts = graph.count_by_origin()
        by_origin = ", ".join(
            f"{origin.value}: {count}" for origin, count in sorted(
                counts.items(), key=lambda item: item[0].value
            )
        )
        print(
            f"{len(graph):,} assets ({by_origin}), {len(graph.failures)} failures, "
            f"max depth {graph.max_depth}, {elapsed:.1f}s"
        )

    if args.dot:
        with open(args.dot, "w", encoding="utf-8") as f:
            f.write(to_dot(graph))
        if not args.json:
            print(f"Wrote {args.dot}")


def cmd_resolve(args):
    """Resolve a single import reference."""
    asset = _check_asset_arg(args.asset)
    roots = discover_root_directories(asset, args.engine)
    locator = AssetLocator(roots)

    try:
        path = locator.locate(args.reference)
    except AssetResolutionError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(path)


def cmd_roots(args):
    """Show the directories references are resolved against."""
    asset = _check_asset_arg(args.asset)
    roots = discover_root_directories(asset, args.engine)

    print(f"Asset: {asset}")
    print(f"  Game root: {roots.game_root or '(not found)'}")
    print(f"  Content: {roots.project_content_dir or '(not found)'}")
    print(f"  Engine: {roots.engine_dir or '(not set)'}")
    print(f"  Engine content: {roots.engine_content_dir or '(not set)'}")
    print("  Plugin roots:")
    for plugin_dir in roots.plugin_dirs:
        marker = "" if plugin_dir.is_dir() else " (missing)"
        print(f"    {plugin_dir}{marker}")


def cmd_config(args):
    """Show or update saved defaults."""
    if args.engine is not None or args.max_depth is not None:
        try:
            config.set_defaults(engine_dir=args.engine, max_depth=args.max_depth)
        except (ValueError, OSError) as e:
            print(f"ERROR: {e}")
            sys.exit(1)
        print(f"Saved to {config.CONFIG_FILE}")

    print(f"Config: {config.CONFIG_FILE}")
    print(f"  Engine: {config.get_engine_dir() or '(not set)'}")
    print(f"  Max depth: {config.get_max_depth()}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="UE Dependency Tree - map what a .uasset references",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Examples:
  unreal-deptree tree "/path/to/MyGame/Content/Maps/L_Main.uasset"
  unreal-deptree tree L_Main.uasset --engine "/opt/UnrealEngine/UE_5.4"
  unreal-deptree tree L_Main.uasset --max-depth 2 --dot deptree.dot
  unreal-deptree resolve /Game/UI/W_Menu --asset L_Main.uasset
  unreal-deptree config --engine "/opt/UnrealEngine/UE_5.4" --max-depth 16
""",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command")

    tree_parser = subparsers.add_parser("tree", help="Build a dependency tree")
    tree_parser.add_argument("asset", help="Path to the root .uasset file")
    tree_parser.add_argument(
        "-e", "--engine", help="Engine install or Engine directory (default: config/detected)"
    )
    tree_parser.add_argument(
        "-r",
        "--max-depth",
        type=int,
        default=None,
        help=f"Maximum recursion depth (default: {config.DEFAULT_MAX_DEPTH})",
    )
    tree_parser.add_argument("--dot", help="Write the graph as Graphviz DOT to this file")
    tree_parser.add_argument(
        "--json", action="store_true", help="Print the graph as JSON"
    )
    tree_parser.add_argument(
        "--no-progress", action="store_true", help="Don't print progress updates"
    )

    resolve_parser = subparsers.add_parser("resolve", help="Resolve one reference")
    resolve_parser.add_argument("reference", help="Import reference, e.g. /Game/UI/W_Menu")
    resolve_parser.add_argument(
        "--asset", required=True, help="Any .uasset inside the project"
    )
    resolve_parser.add_argument("-e", "--engine", help="Engine directory")

    roots_parser = subparsers.add_parser("roots", help="Show resolution directories")
    roots_parser.add_argument("asset", help="Any .uasset inside the project")
    roots_parser.add_argument("-e", "--engine", help="Engine directory")

    config_parser = subparsers.add_parser("config", help="Show or save defaults")
    config_parser.add_argument(
        "--engine", help="Default engine directory (empty string clears it)"
    )
    config_parser.add_argument("--max-depth", type=int, help="Default maximum depth")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == "tree":
        cmd_tree(args)
    elif args.command == "resolve":
        cmd_resolve(args)
    elif args.command == "roots":
        cmd_roots(args)
    elif args.command == "config":
        cmd_config(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
