"""Tests for AssetNode creation."""

from pathlib import Path

import pytest

from unreal_deptree.assets.errors import AssetReadError
from unreal_deptree.assets.node import create_asset_node
from unreal_deptree.assets.origin import AssetOrigin


class TestCreateAssetNode:
    def test_reads_header(self, project, reader):
        path = reader.add(project.content / "UI" / "W_Menu.uasset", ["/Game/UI/T_Bg"])

        node = create_asset_node(path, reader)

        assert node.path == path
        assert node.file_name == "W_Menu.uasset"
        assert node.origin is AssetOrigin.PROJECT
        assert list(node.dependency_names()) == ["/Game/UI/T_Bg"]
        assert reader.reads == [path]

    def test_relative_path_made_absolute(self, project, reader, monkeypatch):
        reader.add(project.content / "Root.uasset")
        monkeypatch.chdir(project.content)

        node = create_asset_node("Root.uasset", reader)

        assert node.path.is_absolute()
        assert node.path == project.content / "Root.uasset"

    def test_missing(self, project, reader):
        with pytest.raises(AssetReadError) as exc_info:
            create_asset_node(project.content / "Nope.uasset", reader)
        assert exc_info.value.reason == "Could not find asset"
        assert reader.reads == []

    def test_not_a_file(self, project, reader):
        folder = project.content / "Folder.uasset"
        folder.mkdir()
        with pytest.raises(AssetReadError, match="Not a regular file"):
            create_asset_node(folder, reader)

    def test_wrong_extension(self, project, reader):
        other = project.content / "Readme.txt"
        other.write_text("hi")
        with pytest.raises(AssetReadError) as exc_info:
            create_asset_node(other, reader)
        assert exc_info.value.reason == "Not a .uasset file"

    def test_upper_case_extension(self, project, reader):
        path = reader.add(project.content / "Loud.UASSET")
        assert create_asset_node(path, reader).path == path

    def test_reader_error_propagates(self, project, reader):
        path = reader.add(project.content / "Bad.uasset")
        reader.break_asset(path, "Failed to read asset: truncated header")
        with pytest.raises(AssetReadError, match="truncated header"):
            create_asset_node(path, reader)


class TestAssetNode:
    def test_to_dict(self, project, reader):
        path = reader.add(project.engine_content / "Cube.uasset")
        node = create_asset_node(path, reader)

        assert node.to_dict() == {
            "path": str(path),
            "name": "Cube",
            "origin": "Engine",
        }

    def test_equality_ignores_header(self, project, reader):
        path = reader.add(project.content / "A.uasset")
        assert create_asset_node(path, reader) == create_asset_node(Path(str(path)), reader)
