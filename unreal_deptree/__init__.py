# Dependency graphs for Unreal Engine .uasset files
# Resolves import references to files, classifies them by origin and
# collects the references that could not be resolved.

from .asset_dirs import RootDirectories, discover_root_directories
from .assets import (
    AssetHeader,
    AssetNode,
    AssetOrigin,
    AssetParserReader,
    AssetReader,
    AssetReadError,
    AssetResolutionError,
    AssetResolutionFailure,
    classify_origin,
    create_asset_node,
)
from .graph import (
    DependencyGraph,
    DependencyGraphBuilder,
    NodeIdAllocator,
    build_dependency_graph,
)
from .locator import AssetLocator, Namespace

__version__ = "0.1.0"

__all__ = [
    "RootDirectories",
    "discover_root_directories",
    "AssetHeader",
    "AssetNode",
    "AssetOrigin",
    "AssetParserReader",
    "AssetReader",
    "AssetReadError",
    "AssetResolutionError",
    "AssetResolutionFailure",
    "classify_origin",
    "create_asset_node",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "NodeIdAllocator",
    "build_dependency_graph",
    "AssetLocator",
    "Namespace",
]
