"""Tests for asset origin classification."""

import pytest

from unreal_deptree.assets.origin import AssetOrigin, classify_origin


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


class TestClassifyOrigin:
    def test_project(self, project):
        asset = _touch(project.content / "Maps" / "L_Main.uasset")
        assert classify_origin(asset) is AssetOrigin.PROJECT

    def test_engine(self, project):
        asset = _touch(project.engine_content / "BasicShapes" / "Cube.uasset")
        assert classify_origin(asset) is AssetOrigin.ENGINE

    def test_project_plugin(self, project):
        asset = _touch(project.plugins / "ShooterCore" / "Content" / "B_Rifle.uasset")
        assert classify_origin(asset) is AssetOrigin.PROJECT_PLUGIN

    def test_engine_plugin(self, project):
        asset = _touch(project.engine_plugins / "FX" / "Niagara" / "Content" / "Spawn.uasset")
        assert classify_origin(asset) is AssetOrigin.ENGINE_PLUGIN

    def test_project_folder_named_engine(self, project):
        # No Content folder inside, so it is just a project subfolder
        asset = _touch(project.content / "Engine" / "Parts" / "Piston.uasset")
        assert classify_origin(asset) is AssetOrigin.PROJECT

    def test_accepts_strings(self, project):
        asset = _touch(project.engine_content / "Cube.uasset")
        assert classify_origin(str(asset)) is AssetOrigin.ENGINE

    def test_deterministic(self, project):
        asset = _touch(project.plugins / "ShooterCore" / "Content" / "B_Rifle.uasset")
        assert classify_origin(asset) is classify_origin(asset)


class TestAssetOrigin:
    @pytest.mark.parametrize(
        "is_engine, is_plugin, expected",
        [
            (False, False, AssetOrigin.PROJECT),
            (True, False, AssetOrigin.ENGINE),
            (False, True, AssetOrigin.PROJECT_PLUGIN),
            (True, True, AssetOrigin.ENGINE_PLUGIN),
        ],
    )
    def test_from_flags(self, is_engine, is_plugin, expected):
        assert AssetOrigin.from_flags(is_engine, is_plugin) is expected

    def test_values_are_display_names(self):
        assert [o.value for o in AssetOrigin] == [
            "Project",
            "Engine",
            "ProjectPlugin",
            "EnginePlugin",
        ]
        assert AssetOrigin.ENGINE_PLUGIN == "EnginePlugin"
