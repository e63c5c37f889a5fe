"""Tests for graph/export.py: text reports and DOT output."""

import pytest

from unreal_deptree.graph import (
    build_dependency_graph,
    format_failure_report,
    format_node_report,
    to_dot,
)
from unreal_deptree.graph.export import dot_identifier


@pytest.fixture()
def graph(project, reader):
    reader.add(project.content / "Meshes" / "SM_Rock.uasset")
    reader.add(project.content / "UI" / "W_Menu.uasset", ["/Game/Meshes/SM_Rock"])
    root = reader.add(
        project.content / "Maps" / "L_Main.uasset",
        ["/Game/UI/W_Menu", "/Game/Meshes/SM_Rock", "/Script/Engine", "/Game/Gone"],
    )
    return build_dependency_graph(root, project.roots, 10, reader=reader)


class TestNodeReport:
    def test_sorted_by_path(self, graph, project):
        report = format_node_report(graph)
        lines = report.strip("\n").splitlines()

        assert lines[0] == "===== Loaded Asset Paths ====="
        assert lines[-1] == "=" * len(lines[0])
        body = lines[1:-1]
        assert body == sorted(body, key=lambda line: line.split(" - ", 1)[1])
        assert f"Node 0 - {project.content / 'Maps' / 'L_Main.uasset'}" in body
        assert len(body) == len(graph)


class TestFailureReport:
    def test_lists_each_failure(self, graph):
        report = format_failure_report(graph)

        assert "===== Errors during the building of the dependency tree =====" in report
        assert 'Failed to read asset ("/Script/Engine.uasset"). Reason: ' in report
        assert "Gone.uasset" in report
        assert report.count("Failed to read asset") == 2


class TestDotIdentifier:
    @pytest.mark.parametrize(
        "file_name, expected",
        [
            ("BP_Hero.uasset", "BP_Hero"),
            ("BP Hero-Main.uasset", "BP_Hero_Main"),
            ("3DModel.uasset", "_3DModel"),
            ("M_Rock+Wet.uasset", "M_Rock_Wet"),
        ],
    )
    def test_identifier(self, file_name, expected):
        assert dot_identifier(file_name) == expected


class TestToDot:
    def test_structure(self, graph):
        dot = to_dot(graph)
        lines = dot.splitlines()

        assert lines[0] == "strict digraph Dep_Tree_L_Main {"
        assert lines[-1] == "}"
        assert "  L_Main;" in lines
        assert "  L_Main -> W_Menu;" in lines
        assert "  L_Main -> SM_Rock;" in lines
        assert sum("->" in line for line in lines) == len(list(graph.edges()))

    def test_name_collisions_disambiguated(self, project, reader):
        reader.add(project.content / "A" / "Icon.uasset")
        reader.add(project.content / "B" / "Icon.uasset")
        root = reader.add(project.content / "Root.uasset", ["/Game/A/Icon", "/Game/B/Icon"])

        dot = to_dot(build_dependency_graph(root, project.roots, 3, reader=reader))

        assert "  Root -> Icon;" in dot
        assert "  Root -> Icon_2;" in dot
