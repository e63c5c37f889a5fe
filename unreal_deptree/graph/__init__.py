from .model import DependencyGraph, NodeID
from .builder import (
    DependencyGraphBuilder,
    NodeIdAllocator,
    ProgressCallback,
    build_dependency_graph,
)
from .export import format_node_report, format_failure_report, to_dot

__all__ = [
    "DependencyGraph",
    "NodeID",
    "DependencyGraphBuilder",
    "NodeIdAllocator",
    "ProgressCallback",
    "build_dependency_graph",
    "format_node_report",
    "format_failure_report",
    "to_dot",
]
