"""Text renderings of a DependencyGraph: reports and Graphviz DOT."""

import re

from .model import DependencyGraph

_NODES_HEADER = "===== Loaded Asset Paths ====="
_FAILURES_HEADER = "===== Errors during the building of the dependency tree ====="


def format_node_report(graph: DependencyGraph) -> str:
    lines = ["", _NODES_HEADER]
    for node_id, node in sorted(graph.items(), key=lambda item: str(item[1].path)):
        lines.append(f"Node {node_id} - {node.path}")
    lines.append("=" * len(_NODES_HEADER))
    return "\n".join(lines) + "\n"


def format_failure_report(graph: DependencyGraph) -> str:
    lines = ["", _FAILURES_HEADER]
    for failure in sorted(graph.failures, key=lambda f: f.path):
        lines.append(str(failure))
    lines.append("=" * len(_FAILURES_HEADER))
    return "\n".join(lines) + "\n"


def dot_identifier(file_name: str) -> str:
    """Turn an asset file name into a bare DOT identifier.

    ``BP Hero-Main.uasset`` -> ``BP_Hero_Main``.
    """
    stem = file_name.split(".", 1)[0]
    ident = re.sub(r"[^0-9A-Za-z_]", "_", stem.replace(" ", "_").replace("-", "_"))
    if not ident or ident[0].isdigit():
        ident = f"_{ident}"
    return ident


def to_dot(graph: DependencyGraph) -> str:
    """Render the graph as a strict Graphviz digraph."""
    names: dict[int, str] = {}
    used: set[str] = set()
    for node_id, node in graph.items():
        name = dot_identifier(node.file_name)
        if name in used:
            name = f"{name}_{node_id}"
        used.add(name)
        names[node_id] = name

    root_name = dot_identifier(graph.get_root_node().file_name).lstrip("_")
    lines = [f"strict digraph Dep_Tree_{root_name} {{"]
    for node_id in graph:
        lines.append(f"  {names[node_id]};")
        for child_id in graph.get_children(node_id):
            lines.append(f"  {names[node_id]} -> {names[child_id]};")
    lines.append("}")
    return "\n".join(lines) + "\n"
