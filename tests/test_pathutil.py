"""Tests for the path utility module."""

import pytest

from unreal_deptree.pathutil import (
    normalize_reference,
    split_reference,
    strip_object_name,
    to_game_path_sep,
)


# ---------------------------------------------------------------------------
# Unit tests: to_game_path_sep
# ---------------------------------------------------------------------------


class TestToGamePathSep:
    def test_forward_slashes_unchanged(self):
        assert to_game_path_sep("/Game/UI/Widget") == "/Game/UI/Widget"

    def test_backslashes_converted(self):
        assert to_game_path_sep("UI\\HUD\\Widget") == "UI/HUD/Widget"

    def test_mixed_separators(self):
        assert to_game_path_sep("UI/HUD\\Widget") == "UI/HUD/Widget"

    def test_empty_string(self):
        assert to_game_path_sep("") == ""


# ---------------------------------------------------------------------------
# Reference normalization
# ---------------------------------------------------------------------------


class TestStripObjectName:
    def test_object_path_reduced_to_package(self):
        assert strip_object_name("/Game/UI/W_Menu.W_Menu") == "/Game/UI/W_Menu"

    def test_package_path_unchanged(self):
        assert strip_object_name("/Game/UI/W_Menu") == "/Game/UI/W_Menu"

    def test_uasset_suffix_kept(self):
        assert strip_object_name("/Game/UI/W_Menu.uasset") == "/Game/UI/W_Menu.uasset"

    def test_dots_in_folders_ignored(self):
        assert strip_object_name("/Game/v1.2/Thing") == "/Game/v1.2/Thing"


class TestNormalizeReference:
    @pytest.mark.parametrize(
        "reference, expected",
        [
            ("/Game/Foo/Bar", "/Game/Foo/Bar.uasset"),
            ("/Game/Foo/Bar.uasset", "/Game/Foo/Bar.uasset"),
            ("/Game/Foo/Bar.Bar", "/Game/Foo/Bar.uasset"),
            ("  /Engine/Basic/Cube  ", "/Engine/Basic/Cube.uasset"),
            ("\\Game\\Foo\\Bar", "/Game/Foo/Bar.uasset"),
        ],
    )
    def test_normalized(self, reference, expected):
        assert normalize_reference(reference) == expected

    def test_empty_stays_empty(self):
        assert normalize_reference("") == ""
        assert normalize_reference("   ") == ""


class TestSplitReference:
    def test_namespace_first(self):
        assert split_reference("/Game/Foo/Bar.uasset") == ["Game", "Foo", "Bar.uasset"]

    def test_empty_segments_dropped(self):
        assert split_reference("//Game//Foo.uasset") == ["Game", "Foo.uasset"]

    def test_empty(self):
        assert split_reference("") == []
