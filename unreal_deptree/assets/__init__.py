from .errors import AssetResolutionFailure, AssetReadError, AssetResolutionError
from .origin import AssetOrigin, classify_origin
from .reader import AssetHeader, AssetReader, AssetParserReader, get_default_reader
from .node import AssetNode, create_asset_node

__all__ = [
    "AssetResolutionFailure",
    "AssetReadError",
    "AssetResolutionError",
    "AssetOrigin",
    "classify_origin",
    "AssetHeader",
    "AssetReader",
    "AssetParserReader",
    "get_default_reader",
    "AssetNode",
    "create_asset_node",
]
