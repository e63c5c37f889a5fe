"""MCP Server for Unreal asset dependency trees.

Two tools:
  - dependency_tree: Everything an asset references, recursively, plus failures
  - resolve_reference: Map one import reference (/Game/...) to its file

Usage:
    # Run directly (stdio transport)
    python -m unreal_deptree.mcp_server

    # Add to an MCP client config:
    {
        "mcpServers": {
            "unreal-deptree": {
                "command": "unreal-deptree-mcp"
            }
        }
    }
"""

import asyncio
import json
import logging
import os
import sys
from typing import Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from unreal_deptree.asset_dirs import discover_root_directories
from unreal_deptree.assets.errors import AssetReadError, AssetResolutionError
from unreal_deptree.assets.reader import get_default_reader
from unreal_deptree.core.config import get_engine_dir, get_max_depth
from unreal_deptree.graph import build_dependency_graph
from unreal_deptree.locator import AssetLocator

logger = logging.getLogger("unreal-deptree")

# Create the MCP server
server = Server("unreal-deptree")


def _validate_asset_path(asset_path: str) -> Optional[dict]:
    if not asset_path:
        return {"error": "asset_path is required"}
    if not asset_path.lower().endswith(".uasset"):
        return {"error": f"Expected a .uasset file, got: {asset_path}"}
    if not os.path.isfile(asset_path):
        return {"error": f"Asset not found: {asset_path}"}
    return None


# =============================================================================
# Tool functions
# =============================================================================


def dependency_tree(
    asset_path: str,
    engine_dir: Optional[str] = None,
    max_depth: Optional[int] = None,
) -> dict:
    """
    Build the dependency tree of a .uasset file.

    Args:
        asset_path: Filesystem path to the root .uasset
        engine_dir: Engine install or Engine directory (defaults to config/detection)
        max_depth: Recursion bound (defaults to config, 64)

    Returns:
        Graph dict (root_id, nodes with origin/depth/children, failures) plus
        the directories used, or {"error": ...}
    """
    invalid = _validate_asset_path(asset_path)
    if invalid:
        return invalid

    max_depth = get_max_depth(max_depth)
    if max_depth < 0:
        return {"error": f"max_depth must be >= 0, got {max_depth}"}

    roots = discover_root_directories(asset_path, engine_dir)
    try:
        graph = build_dependency_graph(
            asset_path, roots, max_depth, reader=get_default_reader()
        )
    except AssetReadError as e:
        return {"error": str(e), "path": e.path}

    result = graph.to_dict()
    result["roots"] = roots.to_dict()
    result["summary"] = {
        "assets": len(graph),
        "failures": len(graph.failures),
        "by_origin": {
            origin.value: count for origin, count in graph.count_by_origin().items()
        },
    }
    return result


def resolve_reference(
    reference: str, asset_path: str, engine_dir: Optional[str] = None
) -> dict:
    """
    Resolve one import reference in the context of a project asset.

    Args:
        reference: Import reference, e.g. /Game/UI/W_Menu or /ShooterCore/Weapons/B_Rifle
        asset_path: Any .uasset inside the project (used to find its directories)
        engine_dir: Engine install or Engine directory

    Returns:
        {"reference", "path"} on success, {"reference", "error", "path"} otherwise
    """
    invalid = _validate_asset_path(asset_path)
    if invalid:
        return invalid

    locator = AssetLocator(discover_root_directories(asset_path, engine_dir))
    try:
        path = locator.locate(reference)
    except AssetResolutionError as e:
        return {"reference": reference, "error": e.reason, "path": e.path}

    return {"reference": reference, "path": str(path)}


# =============================================================================
# MCP Tool Definitions
# =============================================================================


@server.list_tools()
async def list_tools() -> list[Tool]:
    """Return available tools."""
    return [
        Tool(
            name="dependency_tree",
            description="""Map everything an Unreal asset depends on.

Reads the .uasset import table, resolves each reference to a file in the
project, engine, or a plugin, and recurses up to max_depth.

Returns nodes (path, origin: Project/Engine/ProjectPlugin/EnginePlugin,
depth, children) and the references that could not be resolved.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "asset_path": {
                        "type": "string",
                        "description": "Filesystem path to the root .uasset",
                    },
                    "engine_dir": {
                        "type": "string",
                        "description": "Engine install or Engine directory (optional)",
                    },
                    "max_depth": {
                        "type": "integer",
                        "description": "Maximum recursion depth (default 64)",
                        "minimum": 0,
                    },
                },
                "required": ["asset_path"],
            },
        ),
        Tool(
            name="resolve_reference",
            description="""Resolve one import reference (/Game/..., /Engine/..., /PluginName/...)
to the .uasset file it points at, or explain why it can't be found.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "reference": {
                        "type": "string",
                        "description": "Import reference, e.g. /Game/UI/W_Menu",
                    },
                    "asset_path": {
                        "type": "string",
                        "description": "Any .uasset inside the project",
                    },
                    "engine_dir": {
                        "type": "string",
                        "description": "Engine install or Engine directory (optional)",
                    },
                },
                "required": ["reference", "asset_path"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    try:
        # Builds block on file I/O and parser subprocesses
        if name == "dependency_tree":
            result = await asyncio.to_thread(
                dependency_tree,
                asset_path=arguments.get("asset_path", ""),
                engine_dir=arguments.get("engine_dir"),
                max_depth=arguments.get("max_depth"),
            )
        elif name == "resolve_reference":
            result = await asyncio.to_thread(
                resolve_reference,
                reference=arguments.get("reference", ""),
                asset_path=arguments.get("asset_path", ""),
                engine_dir=arguments.get("engine_dir"),
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [
            TextContent(type="text", text=json.dumps(result, indent=2, default=str))
        ]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


# =============================================================================
# Main
# =============================================================================


async def main():
    """Run the MCP server."""
    # Enable debug logging when UNREAL_MCP_DEBUG is set
    if os.environ.get("UNREAL_MCP_DEBUG"):
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s %(levelname)s: %(message)s",
            stream=sys.stderr,
        )
    else:
        logging.basicConfig(level=logging.WARNING, stream=sys.stderr)

    print("Unreal Dependency Tree MCP Server", file=sys.stderr)
    print(f"Engine: {get_engine_dir() or '(auto-detect per project)'}", file=sys.stderr)
    print("Tools: dependency_tree, resolve_reference", file=sys.stderr)

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


def cli_main():
    """Entry point for the unreal-deptree-mcp command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
