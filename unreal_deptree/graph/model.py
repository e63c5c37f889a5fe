"""The dependency graph produced by a build."""

import os
from collections import Counter
from pathlib import Path
from typing import Iterator, Optional, Sequence

from unreal_deptree.assets.errors import AssetResolutionFailure
from unreal_deptree.assets.node import AssetNode
from unreal_deptree.assets.origin import AssetOrigin

NodeID = int


class DependencyGraph:
    """Read-only result of a dependency build.

    Nodes live in an arena indexed by NodeID (``0..len-1``, root first).
    Edges are recorded parent -> children in discovery order. A node reached
    from several parents is only ever attached to the first one that
    discovered it, so every non-root node has exactly one parent.
    """

    def __init__(
        self,
        root_id: NodeID,
        nodes: Sequence[AssetNode],
        children: dict[NodeID, list[NodeID]],
        depths: dict[NodeID, int],
        failures: Sequence[AssetResolutionFailure],
        max_depth: int,
    ):
        self._root_id = root_id
        self._nodes = tuple(nodes)
        self._children = {parent: tuple(ids) for parent, ids in children.items()}
        self._depths = dict(depths)
        self._failures = tuple(failures)
        self._max_depth = max_depth

        self._parents: dict[NodeID, NodeID] = {}
        for parent, ids in self._children.items():
            for child in ids:
                if not 0 <= child < len(self._nodes):
                    raise RuntimeError(f"Child {child} of node {parent} is not in the graph")
                if child in self._parents:
                    raise RuntimeError(f"Node {child} is attached to more than one parent")
                self._parents[child] = parent

        self._ids_by_path = {node.path: node_id for node_id, node in enumerate(self._nodes)}

    # Properties

    @property
    def root_id(self) -> NodeID:
        return self._root_id

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def failures(self) -> tuple[AssetResolutionFailure, ...]:
        return self._failures

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self._nodes)

    def __iter__(self) -> Iterator[NodeID]:
        return iter(range(len(self._nodes)))

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(root={self.get_root_node().path.name!r}, "
            f"nodes={len(self)}, failures={len(self._failures)})"
        )

    # Queries

    def node_ids(self) -> list[NodeID]:
        return list(range(len(self._nodes)))

    def items(self) -> Iterator[tuple[NodeID, AssetNode]]:
        return enumerate(self._nodes)

    def get_node(self, node_id: NodeID) -> Optional[AssetNode]:
        if node_id in self:
            return self._nodes[node_id]
        return None

    def get_root_node(self) -> AssetNode:
        return self._nodes[self._root_id]

    def get_children(self, node_id: NodeID) -> list[NodeID]:
        return list(self._children.get(node_id, ()))

    def dependency_count(self, node_id: NodeID) -> int:
        return len(self._children.get(node_id, ()))

    def get_depth(self, node_id: NodeID) -> Optional[int]:
        return self._depths.get(node_id)

    def get_parent(self, node_id: NodeID) -> Optional[NodeID]:
        """The node whose expansion discovered ``node_id``; None for the root."""
        return self._parents.get(node_id)

    def get_parent_node(self, node_id: NodeID) -> Optional[AssetNode]:
        parent_id = self.get_parent(node_id)
        return None if parent_id is None else self._nodes[parent_id]

    def find_id_by_path(self, path: str | Path) -> Optional[NodeID]:
        return self._ids_by_path.get(Path(os.path.abspath(path)))

    def find_by_path(self, path: str | Path) -> Optional[AssetNode]:
        node_id = self.find_id_by_path(path)
        return None if node_id is None else self._nodes[node_id]

    def edges(self) -> Iterator[tuple[NodeID, NodeID]]:
        for parent, ids in self._children.items():
            for child in ids:
                yield parent, child

    def count_by_origin(self) -> dict[AssetOrigin, int]:
        return dict(Counter(node.origin for node in self._nodes))

    def to_dict(self) -> dict:
        return {
            "root_id": self._root_id,
            "max_depth": self._max_depth,
            "nodes": [
                {
                    "id": node_id,
                    **node.to_dict(),
                    "depth": self._depths.get(node_id),
                    "children": self.get_children(node_id),
                }
                for node_id, node in self.items()
            ],
            "failures": [failure.to_dict() for failure in self._failures],
        }
