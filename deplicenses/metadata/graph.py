"""Resolved dependency graph backed by networkx.

Nodes are package ids carrying their Dependency under the ``dependency``
attribute; edges follow the ``resolve`` section of the metadata
(package -> package it depends on).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

import networkx as nx

from deplicenses.core.errors import MetadataError
from deplicenses.core.models import Dependency
from deplicenses.engine.pipeline import filter_external
from deplicenses.metadata.cargo import dependency_from_package

logger = logging.getLogger("deplicenses.metadata.graph")


class DependencyGraph:
    """Packages of a resolved build graph plus its workspace members."""

    def __init__(
        self,
        dependencies: Iterable[Dependency] = (),
        workspace_members: Iterable[str] = (),
    ) -> None:
        self._graph: nx.DiGraph = nx.DiGraph()
        for dep in dependencies:
            self.add_dependency(dep)
        self.workspace_members: FrozenSet[str] = frozenset(workspace_members)

    @property
    def native_graph(self) -> nx.DiGraph:
        return self._graph

    def add_dependency(self, dependency: Dependency) -> None:
        if self._graph.has_node(dependency.id):
            logger.debug("Duplicate package id %s ignored", dependency.id)
            return
        self._graph.add_node(dependency.id, dependency=dependency)

    def add_edge(self, source_id: str, target_id: str) -> None:
        """Record that ``source_id`` depends on ``target_id``.

        Edges to unknown packages are ignored.
        """
        if self._graph.has_node(source_id) and self._graph.has_node(target_id):
            self._graph.add_edge(source_id, target_id)
        else:
            logger.debug("Ignoring edge with unknown endpoint: %s -> %s", source_id, target_id)

    def get(self, package_id: str) -> Optional[Dependency]:
        if not self._graph.has_node(package_id):
            return None
        return self._graph.nodes[package_id]["dependency"]

    @property
    def dependencies(self) -> List[Dependency]:
        """All packages in insertion order."""
        return [attrs["dependency"] for _, attrs in self._graph.nodes(data=True)]

    def reachable_ids(self) -> FrozenSet[str]:
        """Package ids reachable from any workspace member (members included)."""
        reachable = set()
        for member in self.workspace_members:
            if self._graph.has_node(member):
                reachable.add(member)
                reachable.update(nx.descendants(self._graph, member))
        return frozenset(reachable)

    def external_dependencies(self, only_reachable: bool = False) -> List[Dependency]:
        """Return the non-workspace packages.

        Args:
            only_reachable: Drop packages that no workspace member depends
                on, directly or transitively.
        """
        deps = self.dependencies
        if only_reachable:
            reachable = self.reachable_ids()
            deps = [dep for dep in deps if dep.id in reachable]
        return filter_external(deps, self.workspace_members)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    @classmethod
    def from_metadata(cls, data: Dict[str, Any]) -> "DependencyGraph":
        """Build a graph from parsed ``cargo metadata`` output.

        Raises:
            MetadataError: If the document lacks a ``packages`` list.
        """
        packages = data.get("packages")
        if not isinstance(packages, list):
            raise MetadataError("Metadata has no 'packages' list")

        graph = cls(
            (dependency_from_package(pkg) for pkg in packages),
            data.get("workspace_members") or (),
        )

        resolve = data.get("resolve") or {}
        for node in resolve.get("nodes") or ():
            source_id = node.get("id")
            for target_id in node.get("dependencies") or ():
                graph.add_edge(source_id, target_id)

        logger.debug(
            "Loaded %d packages (%d workspace members, %d edges)",
            len(graph),
            len(graph.workspace_members),
            graph.native_graph.number_of_edges(),
        )
        return graph


__all__ = ["DependencyGraph"]
