#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Graph utilities for dependency queries around a circular dependency.

The upstream DependencyGraph is converted once into a NetworkX DiGraph with an
edge package -> dependency for every upstream edge. Queries about "who is affected
by this cycle" walk the graph against edge direction (predecessors), because a
package is affected when it depends on a cycle member.
"""

import logging
from collections import deque
from typing import Any, Deque, Iterable, List, Optional, Set

import networkx as nx

from cyclecheck.analysis_types import DependencyGraph, RippleEffect
from cyclecheck.constants import RIPPLE_ROOT_LABEL
from cyclecheck.diagnostic_types import RippleNode
from cyclecheck.thresholds import DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)


def build_dependency_digraph(graph: DependencyGraph) -> "nx.DiGraph[Any]":
    """Build a NetworkX directed graph from an upstream dependency graph.

    Edges are added in upstream order, so predecessor iteration follows the
    order in which dependents first appear in the edge list.

    Args:
        graph: Upstream dependency graph (not modified)

    Returns:
        Directed graph with an edge (from, to) per dependency
    """
    G: nx.DiGraph[str] = nx.DiGraph()
    G.add_nodes_from(graph.nodes.keys())
    for edge in graph.edges:
        G.add_edge(edge.from_package, edge.to_package, type=edge.edge_type, version_range=edge.version_range)

    logger.debug("Built dependency graph with %d nodes and %d edges", G.number_of_nodes(), G.number_of_edges())
    return G


def _dependents_of(G: "nx.DiGraph[Any]", package: str) -> List[str]:
    if package not in G:
        return []
    return list(G.predecessors(package))


def find_indirect_dependents(cycle_packages: List[str], G: "nx.DiGraph[Any]") -> List[str]:
    """Find every package that transitively depends on a cycle.

    Breadth-first search over reverse edges, seeded with the cycle members. The
    members themselves are marked visited up front and never reported.

    Args:
        cycle_packages: Packages in the cycle (open form)
        G: Dependency graph from build_dependency_digraph()

    Returns:
        Dependent packages in discovery order
    """
    visited: Set[str] = set(cycle_packages)
    queue: Deque[str] = deque(cycle_packages)
    dependents: List[str] = []

    while queue:
        current = queue.popleft()
        for dependent in _dependents_of(G, current):
            if dependent not in visited:
                visited.add(dependent)
                dependents.append(dependent)
                queue.append(dependent)

    return dependents


def _expand_ripple_node(
    package: str, G: "nx.DiGraph[Any]", depth: int, max_depth: int, max_fanout: int, visited: Set[str]
) -> RippleNode:
    if depth >= max_depth:
        return RippleNode(package=package, depth=depth)

    # Candidates are fixed before recursing; deeper levels may claim later siblings
    candidates = [dep for dep in _dependents_of(G, package) if dep not in visited]
    children: List[RippleNode] = []
    for dependent in candidates[:max_fanout]:
        visited.add(dependent)
        children.append(_expand_ripple_node(dependent, G, depth + 1, max_depth, max_fanout, visited))

    return RippleNode(package=package, depth=depth, dependents=children)


def build_ripple_tree(
    cycle_packages: List[str],
    G: "nx.DiGraph[Any]",
    max_depth: Optional[int] = None,
    max_fanout: Optional[int] = None,
) -> RippleNode:
    """Build the depth and fan-out bounded tree of packages affected by a cycle.

    The root (depth 0) stands for the cycle itself, each cycle member is a child
    at depth 1, and their dependents are expanded below them. A package appears
    at most once in the tree.

    Args:
        cycle_packages: Packages in the cycle (open form)
        G: Dependency graph from build_dependency_digraph()
        max_depth: Deepest level to expand (default from thresholds: 3)
        max_fanout: Maximum children per node (default from thresholds: 5)

    Returns:
        Root RippleNode
    """
    if max_depth is None:
        max_depth = DEFAULT_THRESHOLDS.ripple_max_depth
    if max_fanout is None:
        max_fanout = DEFAULT_THRESHOLDS.ripple_max_fanout

    visited: Set[str] = set(cycle_packages)
    children = [_expand_ripple_node(pkg, G, 1, max_depth, max_fanout, visited) for pkg in cycle_packages]
    return RippleNode(package=RIPPLE_ROOT_LABEL, depth=0, dependents=children)


def build_ripple_tree_from_layers(
    direct_participants: List[str], ripple_effect: Optional[RippleEffect], max_fanout: Optional[int] = None
) -> RippleNode:
    """Reshape precomputed ripple layers into a ripple tree.

    Direct participants become depth 1 children of the root. Packages of every
    layer farther than one hop are appended to the root as well (up to max_fanout
    per layer), carrying the layer distance as their depth.
    """
    if max_fanout is None:
        max_fanout = DEFAULT_THRESHOLDS.ripple_max_fanout

    children = [RippleNode(package=pkg, depth=1) for pkg in direct_participants]
    if ripple_effect is not None:
        for layer in ripple_effect.layers:
            if layer.distance <= 1:
                continue
            children.extend(RippleNode(package=pkg, depth=layer.distance) for pkg in layer.packages[:max_fanout])

    return RippleNode(package=RIPPLE_ROOT_LABEL, depth=0, dependents=children)


def count_ripple_nodes(node: RippleNode) -> int:
    """Count the packages in a ripple tree, excluding the root."""
    return sum(1 + count_ripple_nodes(child) for child in node.dependents)


def extract_cycle_subgraph(G: "nx.DiGraph[Any]", cycles: Iterable[List[str]]) -> "nx.DiGraph[Any]":
    """Return a copy of the subgraph induced by all packages taking part in cycles."""
    members: Set[str] = set()
    for cycle in cycles:
        members.update(cycle)
    return G.subgraph(members & set(G.nodes())).copy()
