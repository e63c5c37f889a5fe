"""AssetParser binary path resolution.

Resolution order:
1. UE_ASSETPARSER_PATH environment variable
2. local_config.json (``asset_parser_path``)
3. In-tree platform-specific build output (repo checkout)
"""

import json
import logging
import os
import platform
from pathlib import Path

logger = logging.getLogger("unreal-deptree")


def _runtime_id() -> str:
    """Platform runtime identifier matching .NET RIDs."""
    system = platform.system()
    machine = platform.machine()

    if system == "Windows":
        return "win-x64"
    if system == "Darwin":
        return "osx-arm64" if machine == "arm64" else "osx-x64"
    return "linux-arm64" if machine == "aarch64" else "linux-x64"


def _from_local_config(local_config_dir: Path) -> str | None:
    local_config_path = local_config_dir / "local_config.json"
    if not local_config_path.exists():
        return None

    try:
        with open(local_config_path, "r") as f:
            local_config = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.debug("Ignoring unreadable %s: %s", local_config_path, e)
        return None

    parser_path = local_config.get("asset_parser_path")
    if parser_path and os.path.exists(parser_path):
        return parser_path
    return None


def resolve_parser_path(local_config_dir: Path | None = None) -> str:
    """Resolve the AssetParser binary path.

    Args:
        local_config_dir: Directory containing local_config.json.
            Defaults to the unreal_deptree package directory.

    Returns:
        Path to the AssetParser binary. When nothing is found the preferred
        in-tree candidate is returned anyway so error messages can name it.
    """
    env_path = os.environ.get("UE_ASSETPARSER_PATH", "")
    if env_path and os.path.exists(env_path):
        return env_path

    if local_config_dir is None:
        local_config_dir = Path(__file__).parent

    configured = _from_local_config(local_config_dir)
    if configured:
        return configured

    parser_dir = local_config_dir / ".." / "AssetParser" / "bin" / "Release" / "net8.0"
    rid = _runtime_id()

    if rid.startswith("win"):
        return str(parser_dir / "AssetParser.exe")

    # Self-contained publish first, then framework-dependent build
    self_contained = parser_dir / rid / "publish" / "AssetParser"
    framework_dependent = parser_dir / "AssetParser"
    for candidate in (self_contained, framework_dependent):
        if candidate.exists():
            return str(candidate)

    return str(self_contained)
