"""Map logical import references to files on disk.

An import reference such as ``/Game/UI/W_Menu`` starts with a mount point:

- ``Game``    the project's Content folder
- ``Engine``  the engine's Content folder
- ``Script``  native C++ modules (no .uasset on disk)
- anything else is a plugin name, mounted at ``<Plugin>/Content``
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from unreal_deptree.asset_dirs import RootDirectories
from unreal_deptree.assets.errors import AssetResolutionError, AssetResolutionFailure
from unreal_deptree.assets.origin import CONTENT_DIR_NAME
from unreal_deptree.pathutil import normalize_reference, split_reference

logger = logging.getLogger("unreal-deptree")

# How deep plugin folders are searched for under each plugin root
# (Plugins/GameFeatures/<Name> and similar groupings stay well within this).
MAX_PLUGIN_SEARCH_DEPTH = 10


class Namespace(Enum):
    GAME = "Game"
    ENGINE = "Engine"
    SCRIPT = "Script"
    PLUGIN = "Plugin"

    @classmethod
    def of(cls, mount_point: str) -> "Namespace":
        for namespace in (cls.GAME, cls.ENGINE, cls.SCRIPT):
            if mount_point == namespace.value:
                return namespace
        return cls.PLUGIN


class AssetLocator:
    """Resolves import references against a fixed set of RootDirectories."""

    def __init__(self, roots: RootDirectories):
        self.roots = roots
        self._plugin_content_dirs: dict[str, list[Path]] = {}
        self._strategies = {
            Namespace.GAME: self._locate_game,
            Namespace.ENGINE: self._locate_engine,
            Namespace.SCRIPT: self._locate_script,
            Namespace.PLUGIN: self._locate_plugin,
        }

    def locate(self, reference: str) -> Path:
        """Resolve one reference to an existing file.

        Raises:
            AssetResolutionError: the reference is malformed or no file exists
                for it under the configured roots.
        """
        normalized = normalize_reference(reference or "")
        segments = split_reference(normalized)
        if len(segments) < 2:
            raise AssetResolutionError(
                normalized or reference or "<empty>", "Malformed asset reference"
            )

        mount_point, rest = segments[0], segments[1:]
        strategy = self._strategies[Namespace.of(mount_point)]
        return Path(os.path.abspath(strategy(normalized, mount_point, rest)))

    def resolve_all(
        self, references: Iterable[str]
    ) -> tuple[list[Path], list[AssetResolutionFailure]]:
        """Resolve every reference, splitting outcomes into paths and failures."""
        paths: list[Path] = []
        failures: list[AssetResolutionFailure] = []

        for reference in references:
            try:
                paths.append(self.locate(reference))
            except AssetResolutionError as e:
                failures.append(e.failure)

        logger.debug(
            "Successfully got asset paths: %d, Failed: %d", len(paths), len(failures)
        )
        return paths, failures

    # Namespace strategies

    @staticmethod
    def _exists(path: Path) -> bool:
        # Over-long names raise ENAMETOOLONG instead of returning False
        try:
            return path.exists()
        except OSError as e:
            raise AssetResolutionError(path, f"Invalid asset path ({e.strerror or e})")

    def _in_content_dir(
        self, content_dir: Optional[Path], rest: list[str], missing_reason: str
    ) -> Path:
        path = content_dir.joinpath(*rest)
        if self._exists(path):
            return path
        raise AssetResolutionError(path, missing_reason)

    def _locate_game(self, reference: str, mount_point: str, rest: list[str]) -> Path:
        if self.roots.project_content_dir is None:
            raise AssetResolutionError(reference, "Game content directory is not set")
        return self._in_content_dir(
            self.roots.project_content_dir,
            rest,
            "The asset doesn't exist in the game content directory",
        )

    def _locate_engine(self, reference: str, mount_point: str, rest: list[str]) -> Path:
        if self.roots.engine_content_dir is None:
            raise AssetResolutionError(reference, "Engine content directory is not set")
        return self._in_content_dir(
            self.roots.engine_content_dir,
            rest,
            "The asset doesn't exist in the engine content directory",
        )

    def _locate_script(self, reference: str, mount_point: str, rest: list[str]) -> Path:
        raise AssetResolutionError(
            reference, "/Script packages are native modules and have no .uasset file"
        )

    def _locate_plugin(self, reference: str, mount_point: str, rest: list[str]) -> Path:
        for content_dir in self.plugin_content_dirs(mount_point):
            path = content_dir.joinpath(*rest)
            if self._exists(path):
                return path

        raise AssetResolutionError(
            reference, "Couldn't find the asset in any of the plugins directories"
        )

    def plugin_content_dirs(self, plugin_name: str) -> list[Path]:
        """Content folders of every plugin directory named ``plugin_name``."""
        if plugin_name not in self._plugin_content_dirs:
            self._plugin_content_dirs[plugin_name] = self._find_plugin_content_dirs(
                plugin_name
            )
        return self._plugin_content_dirs[plugin_name]

    def _find_plugin_content_dirs(self, plugin_name: str) -> list[Path]:
        # Several plugin roots may reach the same physical folder
        found: set[Path] = set()

        for plugin_root in self.roots.plugin_dirs:
            if not plugin_root.is_dir():
                continue

            base_depth = len(plugin_root.parts)
            for dirpath, dirnames, _ in os.walk(plugin_root):
                current = Path(dirpath)
                if current.name == plugin_name:
                    content_dir = current / CONTENT_DIR_NAME
                    if content_dir.is_dir():
                        found.add(content_dir)

                # Plugins never live inside a Content tree
                dirnames[:] = [d for d in dirnames if d != CONTENT_DIR_NAME]
                if len(current.parts) - base_depth >= MAX_PLUGIN_SEARCH_DEPTH:
                    dirnames.clear()

        logger.debug("Plugin %s content dirs: %s", plugin_name, sorted(found))
        return sorted(found)
