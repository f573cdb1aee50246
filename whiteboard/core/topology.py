"""
Chain Topology
==============

Structural analysis of the lower_id graph using networkx.

Edges point downward: item -> the item it sits on. In a valid board every
node has out-degree <= 1, so each weakly connected component is one
chain and each node with out-degree 0 is a bottom.

ALLOWED:
- Graph construction from board items
- Connected components (disjoint chains)
- Cycle detection (diagnostic)
- Structural metrics (counts, longest chain)

This module DIAGNOSES. Construction-time validation lives in the engine
and raises typed errors; the topology never raises on bad structure.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Set, Tuple

import networkx as nx

from ..contracts.base import BoardItem
from ..contracts.events import ChainMetrics


class ChainTopology:
    """
    Wraps a networkx DiGraph of lower_id links.

    Dangling references are recorded but never become graph nodes, so the
    node set is always exactly the set of known item ids.
    """

    def __init__(self):
        self._graph = nx.DiGraph()
        self._dangling: List[Tuple[str, str]] = []

    def build(self, items: Iterable[BoardItem]) -> None:
        """
        Build graph from items.

        Replaces internal graph state.
        """
        items = list(items)
        self._graph = nx.DiGraph()
        self._dangling = []

        for item in items:
            self._graph.add_node(item.id)

        for item in items:
            if item.lower_id is None:
                continue
            if item.lower_id in self._graph:
                self._graph.add_edge(item.id, item.lower_id)
            else:
                self._dangling.append((item.id, item.lower_id))

    def chains(self) -> List[Set[str]]:
        """
        Identify disjoint chains (weakly connected components).

        Returned in arbitrary order.
        """
        if not self._graph:
            return []
        return [set(c) for c in nx.weakly_connected_components(self._graph)]

    def bottoms(self) -> Set[str]:
        return {node for node, degree in self._graph.out_degree() if degree == 0}

    def branch_points(self) -> Set[str]:
        """Items with more than one item directly on top of them."""
        return {node for node, degree in self._graph.in_degree() if degree > 1}

    def dangling_references(self) -> List[Tuple[str, str]]:
        """(item_id, missing_lower_id) pairs seen during build."""
        return list(self._dangling)

    def find_cycle(self) -> Optional[List[str]]:
        """Return the ids along one cycle, or None if the graph is acyclic."""
        try:
            edges = nx.find_cycle(self._graph)
        except nx.NetworkXNoCycle:
            return None
        return [source for source, _target in edges]

    def has_cycle(self) -> bool:
        return self.find_cycle() is not None

    def compute_metrics(self) -> ChainMetrics:
        if not self._graph:
            return ChainMetrics(0, 0, 0, 0, 0, 0)

        longest = 0
        if nx.is_directed_acyclic_graph(self._graph):
            # Path length counts edges; a chain of n items has n - 1 links
            longest = nx.dag_longest_path_length(self._graph) + 1

        return ChainMetrics(
            item_count=self._graph.number_of_nodes(),
            link_count=self._graph.number_of_edges(),
            chain_count=nx.number_weakly_connected_components(self._graph),
            bottom_count=len(self.bottoms()),
            branch_point_count=len(self.branch_points()),
            longest_chain=longest,
        )

    def clear(self):
        self._graph.clear()
        self._dangling = []
