"""Asset origin classification (project / engine / plugin of either)."""

from enum import Enum
from pathlib import Path

ENGINE_DIR_NAME = "Engine"
PLUGINS_DIR_NAME = "Plugins"
CONTENT_DIR_NAME = "Content"


class AssetOrigin(str, Enum):
    PROJECT = "Project"
    ENGINE = "Engine"
    PROJECT_PLUGIN = "ProjectPlugin"
    ENGINE_PLUGIN = "EnginePlugin"

    @classmethod
    def from_flags(cls, is_engine: bool, is_plugin: bool) -> "AssetOrigin":
        if is_engine:
            return cls.ENGINE_PLUGIN if is_plugin else cls.ENGINE
        return cls.PROJECT_PLUGIN if is_plugin else cls.PROJECT


def classify_origin(path: str | Path) -> AssetOrigin:
    """Classify a file by the directories it lives under.

    A folder literally named ``Engine`` only counts when it holds a
    ``Content`` directory, since projects are free to have their own
    ``Engine`` folders. ``Plugins`` must exist as a real directory.
    """
    is_engine = False
    is_plugin = False

    for parent in Path(path).parents:
        if not is_engine and parent.name == ENGINE_DIR_NAME:
            is_engine = (parent / CONTENT_DIR_NAME).is_dir()
        if not is_plugin and parent.name == PLUGINS_DIR_NAME:
            is_plugin = parent.is_dir()

    return AssetOrigin.from_flags(is_engine, is_plugin)
