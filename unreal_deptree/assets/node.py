import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from unreal_deptree.pathutil import ASSET_EXTENSION

from .errors import AssetReadError
from .origin import AssetOrigin, classify_origin
from .reader import AssetHeader, AssetReader


@dataclass(frozen=True)
class AssetNode:
    """One resolved asset file in a dependency graph."""

    path: Path
    origin: AssetOrigin
    header: AssetHeader = field(repr=False, compare=False)

    @property
    def file_name(self) -> str:
        return self.path.name

    def dependency_names(self) -> Iterator[str]:
        """Import references declared by the asset, not yet resolved to paths."""
        return self.header.package_imports()

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "name": self.path.stem,
            "origin": self.origin.value,
        }


def create_asset_node(path: str | Path, reader: AssetReader) -> AssetNode:
    """Read ``path`` into an AssetNode.

    Raises:
        AssetReadError: the file is missing, not a regular file, not a
            .uasset, or its header cannot be parsed.
    """
    path = Path(os.path.abspath(path))

    if not path.exists():
        raise AssetReadError(path, "Could not find asset")
    if not path.is_file():
        raise AssetReadError(path, "Not a regular file")
    if path.suffix.lower() != ASSET_EXTENSION:
        raise AssetReadError(path, f"Not a {ASSET_EXTENSION} file")

    header = reader.read_header(path)
    return AssetNode(path=path, origin=classify_origin(path), header=header)
