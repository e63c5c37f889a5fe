"""Shared fixtures: a fake header reader and an on-disk project layout."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from unreal_deptree.asset_dirs import RootDirectories
from unreal_deptree.assets.errors import AssetReadError
from unreal_deptree.assets.reader import AssetHeader, AssetReader

# Package file tag; content doesn't matter to the fake reader
_UASSET_MAGIC = b"\xc1\x83\x2a\x9e"


class FakeReader(AssetReader):
    """Serves import lists registered per file instead of running AssetParser."""

    def __init__(self):
        self.imports: dict[Path, list[str]] = {}
        self.broken: dict[Path, str] = {}
        self.reads: list[Path] = []

    def add(self, path, refs=()) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(_UASSET_MAGIC)
        self.imports[path] = list(refs)
        return path

    def break_asset(self, path, reason="Failed to read asset: invalid package tag"):
        self.broken[Path(path)] = reason

    def read_header(self, path: Path) -> AssetHeader:
        path = Path(path)
        self.reads.append(path)
        if path in self.broken:
            raise AssetReadError(path, self.broken[path])
        return AssetHeader(path, self.imports.get(path, []))


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real config.json and UE_* environment."""
    monkeypatch.setattr(
        "unreal_deptree.core.config.CONFIG_FILE", str(tmp_path / "config.json")
    )
    for var in (
        "UE_ENGINE_DIR",
        "UE_DEPTREE_MAX_DEPTH",
        "UE_DEPTREE_PARSER_TIMEOUT",
        "UE_ASSETPARSER_PATH",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def reader():
    return FakeReader()


@pytest.fixture()
def project(tmp_path, reader):
    """A project next to an engine install, both with a Plugins folder.

    tmp/MyGame/MyGame.uproject
    tmp/MyGame/Content/
    tmp/MyGame/Plugins/
    tmp/UE_5.4/Engine/Content/
    tmp/UE_5.4/Engine/Plugins/
    """
    game_root = tmp_path / "MyGame"
    content = game_root / "Content"
    plugins = game_root / "Plugins"
    engine = tmp_path / "UE_5.4" / "Engine"
    engine_content = engine / "Content"
    engine_plugins = engine / "Plugins"

    for folder in (content, plugins, engine_content, engine_plugins):
        folder.mkdir(parents=True)
    (game_root / "MyGame.uproject").write_text("{}")

    roots = RootDirectories(
        project_content_dir=content,
        engine_content_dir=engine_content,
        plugin_dirs=(plugins, engine_plugins),
        game_root=game_root,
        engine_dir=engine,
    )

    return SimpleNamespace(
        game_root=game_root,
        content=content,
        plugins=plugins,
        engine=engine,
        engine_content=engine_content,
        engine_plugins=engine_plugins,
        roots=roots,
        reader=reader,
    )
