"""Import-table access for .uasset files.

The binary format itself is handled by AssetParser (C#, built on UAssetAPI).
This module runs its ``references`` command and exposes the package imports
as a plain iterator of reference strings such as ``/Game/UI/W_Menu`` or
``/Script/Engine``.

Environment variables:
- UE_ASSETPARSER_PATH: Explicit AssetParser binary
- UE_DEPTREE_PARSER_TIMEOUT: Per-asset timeout in seconds (default: 60)
"""

import logging
import os
import subprocess
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Iterator, Optional

from unreal_deptree.core.config import get_parser_timeout
from unreal_deptree.parser_resolver import resolve_parser_path

from .errors import AssetReadError

logger = logging.getLogger("unreal-deptree")


class AssetHeader:
    """Parsed header of one asset: the package imports it declares."""

    def __init__(self, path: str | Path, imports: Iterable[str]):
        self.path = Path(path)
        self._imports = imports

    def package_imports(self) -> Iterator[str]:
        return iter(self._imports)

    def __repr__(self) -> str:
        return f"AssetHeader({str(self.path)!r})"


class AssetReader:
    """Reads asset headers. Subclasses plug in a concrete parser."""

    def read_header(self, path: Path) -> AssetHeader:
        raise NotImplementedError


class AssetParserReader(AssetReader):
    """Reader backed by the AssetParser ``references`` command."""

    def __init__(self, parser_path: Optional[str] = None, timeout: Optional[int] = None):
        self.parser_path = Path(parser_path or resolve_parser_path())
        self.timeout = timeout if timeout is not None else get_parser_timeout()

    def read_header(self, path: Path) -> AssetHeader:
        output = self._run_parser("references", path)
        return AssetHeader(path, self._parse_references(path, output))

    def _run_parser(self, command: str, path: Path) -> str:
        if not self.parser_path.exists():
            raise AssetReadError(
                path,
                f"AssetParser not found at {self.parser_path} "
                "(build it with: cd AssetParser && dotnet build -c Release)",
            )

        logger.debug("AssetParser %s %s", command, path)
        try:
            result = subprocess.run(
                [str(self.parser_path), command, os.fspath(path)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise AssetReadError(path, f"AssetParser timed out after {self.timeout}s")
        except OSError as e:
            raise AssetReadError(path, f"Failed to run AssetParser: {e}")

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()[:500]
            raise AssetReadError(
                path,
                f"Failed to read asset: AssetParser {command} exited with "
                f"{result.returncode}" + (f": {stderr}" if stderr else ""),
            )

        return result.stdout

    @staticmethod
    def _parse_references(path: Path, output: str) -> list[str]:
        try:
            root = ET.fromstring(output)
        except ET.ParseError as e:
            raise AssetReadError(path, f"Failed to read asset: malformed parser output ({e})")

        refs = []
        # Class refs are bare class names, not packages; only package paths count
        for xpath in (".//asset-refs/ref", ".//script-refs/ref"):
            for ref in root.findall(xpath):
                if ref.text and ref.text.strip():
                    refs.append(ref.text.strip())
        return refs


def get_default_reader() -> AssetReader:
    """Reader used by the CLI and MCP server."""
    return AssetParserReader()
