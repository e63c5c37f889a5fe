"""Root directories that import references are resolved against.

Given the asset a user picked, walk up to the project's Content folder, work
out the engine directory and list the plugin roots of both.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from unreal_deptree.assets.origin import (
    CONTENT_DIR_NAME,
    ENGINE_DIR_NAME,
    PLUGINS_DIR_NAME,
)
from unreal_deptree.core.config import get_engine_dir
from unreal_deptree.engine_detect import detect_engine_dir

logger = logging.getLogger("unreal-deptree")


def _abs(path) -> Optional[Path]:
    if path is None or path == "":
        return None
    return Path(os.path.abspath(os.path.expanduser(os.fspath(path))))


@dataclass(frozen=True)
class RootDirectories:
    """Directories used by AssetLocator. Fixed for the duration of a build."""

    project_content_dir: Optional[Path] = None
    engine_content_dir: Optional[Path] = None
    plugin_dirs: tuple[Path, ...] = ()
    game_root: Optional[Path] = field(default=None, compare=False)
    engine_dir: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self):
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "project_content_dir", _abs(self.project_content_dir))
        object.__setattr__(self, "engine_content_dir", _abs(self.engine_content_dir))
        object.__setattr__(self, "plugin_dirs", tuple(_abs(p) for p in self.plugin_dirs))
        object.__setattr__(self, "game_root", _abs(self.game_root))
        object.__setattr__(self, "engine_dir", _abs(self.engine_dir))

    def to_dict(self) -> dict:
        def _str(path):
            return str(path) if path else None

        return {
            "game_root": _str(self.game_root),
            "project_content_dir": _str(self.project_content_dir),
            "engine_dir": _str(self.engine_dir),
            "engine_content_dir": _str(self.engine_content_dir),
            "plugin_dirs": [str(p) for p in self.plugin_dirs],
        }


def find_project_content_dir(asset_path: str | Path) -> Optional[Path]:
    """Find the Content folder an asset lives in.

    Prefers the Content folder of the nearest ancestor holding a .uproject
    (so plugin assets resolve to the project's Content), else the nearest
    ``Content`` ancestor at all.
    """
    parents = _abs(asset_path).parents
    for parent in parents:
        content_dir = parent / CONTENT_DIR_NAME
        if content_dir.is_dir() and any(parent.glob("*.uproject")):
            return content_dir

    for parent in parents:
        if parent.name == CONTENT_DIR_NAME:
            return parent
    return None


def find_uproject(game_root: Optional[Path]) -> Optional[Path]:
    if game_root is None or not game_root.is_dir():
        return None
    uprojects = sorted(game_root.glob("*.uproject"))
    if len(uprojects) > 1:
        logger.debug("Multiple .uproject files in %s, using %s", game_root, uprojects[0])
    return uprojects[0] if uprojects else None


def normalize_engine_dir(engine_dir: str | Path) -> Path:
    """Accept either the engine install root or its ``Engine`` folder."""
    engine_dir = _abs(engine_dir)
    if engine_dir.name == ENGINE_DIR_NAME:
        return engine_dir
    return engine_dir / ENGINE_DIR_NAME


def discover_root_directories(
    asset_path: str | Path, engine_dir: Optional[str | Path] = None
) -> RootDirectories:
    """Work out the RootDirectories for a root asset.

    Engine directory cascade: ``engine_dir`` argument > UE_ENGINE_DIR >
    config.json > EngineAssociation of the project's .uproject.
    """
    content_dir = find_project_content_dir(asset_path)
    game_root = content_dir.parent if content_dir else None

    engine_source = get_engine_dir(os.fspath(engine_dir) if engine_dir else None)
    if not engine_source:
        uproject = find_uproject(game_root)
        if uproject:
            engine_source = detect_engine_dir(uproject)
            if engine_source:
                logger.info("Detected engine from %s: %s", uproject.name, engine_source)

    engine = normalize_engine_dir(engine_source) if engine_source else None

    plugin_dirs = []
    if game_root:
        plugin_dirs.append(game_root / PLUGINS_DIR_NAME)
    if engine:
        plugin_dirs.append(engine / PLUGINS_DIR_NAME)

    roots = RootDirectories(
        project_content_dir=content_dir,
        engine_content_dir=engine / CONTENT_DIR_NAME if engine else None,
        plugin_dirs=tuple(plugin_dirs),
        game_root=game_root,
        engine_dir=engine,
    )
    logger.debug("Root directories: %s", roots.to_dict())
    return roots
