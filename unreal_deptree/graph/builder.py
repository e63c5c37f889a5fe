"""Dependency graph construction.

Starting from a root asset, repeatedly take a node off the frontier, resolve
its import references to files, and turn every file not seen before into a
new child node. Unresolvable references are collected as failures instead of
aborting the build; only an unreadable root asset is fatal.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from unreal_deptree.asset_dirs import RootDirectories
from unreal_deptree.assets.errors import AssetReadError, AssetResolutionFailure
from unreal_deptree.assets.node import AssetNode, create_asset_node
from unreal_deptree.assets.reader import AssetReader, get_default_reader
from unreal_deptree.locator import AssetLocator

from .model import DependencyGraph, NodeID

logger = logging.getLogger("unreal-deptree")

# progress(message, current, total)
ProgressCallback = Callable[[str, int, int], None]


class NodeIdAllocator:
    """Hands out dense node ids for a single build."""

    def __init__(self):
        self._next = 0

    def next(self) -> NodeID:
        node_id = self._next
        self._next += 1
        return node_id

    def __len__(self) -> int:
        return self._next


class _FailureLog:
    """Ordered failures, at most one per path."""

    def __init__(self):
        self.failures: list[AssetResolutionFailure] = []
        self.paths: set[str] = set()

    def add(self, failure: AssetResolutionFailure) -> bool:
        if failure.path in self.paths:
            return False
        self.paths.add(failure.path)
        self.failures.append(failure)
        return True

    def __contains__(self, path) -> bool:
        return str(path) in self.paths


class DependencyGraphBuilder:
    """Builds a DependencyGraph for one root asset.

    Args:
        roots: Directories references are resolved against.
        max_depth: Nodes at this depth or deeper are not expanded. 0 means
            only the root is loaded.
        reader: Header reader; defaults to the AssetParser-backed reader.
        progress: Optional ``progress(message, current, total)`` callback.
    """

    def __init__(
        self,
        roots: RootDirectories,
        max_depth: int,
        reader: Optional[AssetReader] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative integer, got {max_depth!r}")

        self.roots = roots
        self.max_depth = max_depth
        self.reader = reader if reader is not None else get_default_reader()
        self.progress = progress

    def _report(self, message: str, current: int = 0, total: int = 0):
        if self.progress:
            self.progress(message, current, total)

    def build(self, root_asset_path: str | Path) -> DependencyGraph:
        """Build the graph.

        Raises:
            AssetReadError: the root asset itself cannot be read.
        """
        logger.debug('Building the dependency tree of "%s"...', root_asset_path)

        ids = NodeIdAllocator()
        locator = AssetLocator(self.roots)

        root = create_asset_node(root_asset_path, self.reader)
        root_id = ids.next()

        nodes: list[AssetNode] = [root]
        children: dict[NodeID, list[NodeID]] = {}
        depths: dict[NodeID, int] = {root_id: 0}
        known_paths: set[Path] = {root.path}
        failures = _FailureLog()
        frontier: list[NodeID] = [root_id]

        self._report(
            "Building the network of dependencies recursively with maximum "
            f"recurse depth of {self.max_depth} ...",
            0,
            1,
        )

        while frontier:
            cur_id = frontier.pop()
            cur_depth = depths[cur_id]

            if cur_depth >= self.max_depth:
                continue

            cur_node = nodes[cur_id]
            self._report(
                f"Getting the dependency paths of node with ID {cur_id} ({cur_node.path}) ...",
                len(nodes) - len(frontier),
                len(nodes),
            )

            dep_paths, fails = locator.resolve_all(cur_node.dependency_names())
            for failure in fails:
                failures.add(failure)

            # Drop anything already materialized or already known to fail;
            # dict keeps first-seen order while collapsing repeats
            unresolved = list(
                dict.fromkeys(
                    path
                    for path in dep_paths
                    if path not in known_paths and path not in failures
                )
            )

            new_nodes: list[AssetNode] = []
            for dep_path in unresolved:
                try:
                    new_nodes.append(create_asset_node(dep_path, self.reader))
                except AssetReadError as e:
                    failures.add(e.failure)

            for node in new_nodes:
                known_paths.add(node.path)
                node_id = ids.next()
                assert node_id == len(nodes), "node ids must index the node arena"

                nodes.append(node)
                children.setdefault(cur_id, []).append(node_id)
                depths[node_id] = cur_depth + 1
                frontier.append(node_id)

            logger.debug(
                "Node %d (%s): %d new dependencies, %d unresolved so far",
                cur_id,
                cur_node.path.name,
                len(new_nodes),
                len(failures.failures),
            )
            self._report(
                f"Resolved node with ID {cur_id}", len(nodes) - len(frontier), len(nodes)
            )

        self._report("Done", len(nodes), len(nodes))
        logger.info(
            "Dependency tree of %s: %d assets, %d failures",
            root.path.name,
            len(nodes),
            len(failures.failures),
        )

        return DependencyGraph(
            root_id=root_id,
            nodes=nodes,
            children=children,
            depths=depths,
            failures=failures.failures,
            max_depth=self.max_depth,
        )


def build_dependency_graph(
    root_asset_path: str | Path,
    roots: RootDirectories,
    max_depth: int,
    reader: Optional[AssetReader] = None,
    progress: Optional[ProgressCallback] = None,
) -> DependencyGraph:
    """Build the dependency graph of ``root_asset_path``. See DependencyGraphBuilder."""
    builder = DependencyGraphBuilder(roots, max_depth, reader=reader, progress=progress)
    return builder.build(root_asset_path)
