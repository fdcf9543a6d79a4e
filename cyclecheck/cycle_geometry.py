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
"""Cycle geometry: circular layout, cycle edges and breaking point selection."""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from cyclecheck.analysis_types import CircularDependencyInfo, ImportTrace, short_package_name
from cyclecheck.classification import format_number
from cyclecheck.constants import LAYOUT_CENTER_X, LAYOUT_CENTER_Y, LAYOUT_RADIUS
from cyclecheck.diagnostic_types import BreakingPoint, CycleEdge, CycleNode, CyclePathVisualization, NodePosition
from cyclecheck.diagram_renderers import AsciiDiagramRenderer, DiagramRenderer, SvgDiagramRenderer

logger = logging.getLogger(__name__)

FALLBACK_BREAK_REASON = "This edge has the least downstream impact based on dependency analysis."


def cycle_edge_pairs(packages: Sequence[str]) -> List[Tuple[str, str]]:
    """Return the consecutive (from, to) pairs of a cycle, including the wraparound edge."""
    n = len(packages)
    return [(packages[i], packages[(i + 1) % n]) for i in range(n)]


def layout_cycle_nodes(packages: List[str]) -> List[CycleNode]:
    """Place cycle packages evenly on a circle, first package at the top.

    Angle of node i is 2*pi*i/n - pi/2 around (200, 200) with radius 150;
    coordinates are rounded to whole pixels (halves up).
    """
    n = len(packages)
    if n == 0:
        return []

    angles = 2 * np.pi * np.arange(n) / n - np.pi / 2
    xs = np.floor(LAYOUT_CENTER_X + LAYOUT_RADIUS * np.cos(angles) + 0.5).astype(int)
    ys = np.floor(LAYOUT_CENTER_Y + LAYOUT_RADIUS * np.sin(angles) + 0.5).astype(int)

    return [
        CycleNode(
            id=pkg,
            name=short_package_name(pkg),
            path=pkg,
            is_in_cycle=True,
            position=NodePosition(x=int(x), y=int(y)),
        )
        for pkg, x, y in zip(packages, xs, ys)
    ]


def build_cycle_edges(packages: List[str], import_traces: List[ImportTrace], breaking_point: Optional[BreakingPoint] = None) -> List[CycleEdge]:
    """Build one edge per consecutive pair, attaching the first matching import trace."""
    traces: Dict[Tuple[str, str], ImportTrace] = {}
    for trace in import_traces:
        traces.setdefault((trace.from_package, trace.to_package), trace)

    edges = []
    marked = False
    for from_pkg, to_pkg in cycle_edge_pairs(packages):
        trace = traces.get((from_pkg, to_pkg))
        # Only the first matching edge is flagged when a pair repeats
        is_breaking = (
            not marked
            and breaking_point is not None
            and breaking_point.from_package == from_pkg
            and breaking_point.to_package == to_pkg
        )
        marked = marked or is_breaking
        edges.append(
            CycleEdge(
                from_package=from_pkg,
                to_package=to_pkg,
                is_breaking_point=is_breaking,
                import_statement=trace.statement if trace else None,
                file_path=trace.file_path if trace else None,
                line_number=trace.line_number if trace else None,
            )
        )
    return edges


def select_breaking_point(cycle: CircularDependencyInfo, packages: List[str]) -> BreakingPoint:
    """Pick the edge to break.

    The root cause's critical edge wins when it is one of the cycle's own edges.
    Otherwise the edge closing the loop (last -> first) is used.
    """
    root_cause = cycle.root_cause
    if root_cause is not None and root_cause.critical_edge is not None:
        critical = root_cause.critical_edge
        if (critical.from_package, critical.to_package) in cycle_edge_pairs(packages):
            return BreakingPoint(
                from_package=critical.from_package,
                to_package=critical.to_package,
                reason=f"Critical edge identified by root cause analysis (confidence: {format_number(root_cause.confidence)}%).",
            )
        logger.warning(
            "Critical edge %s -> %s is not part of cycle %s, falling back to the closing edge",
            critical.from_package,
            critical.to_package,
            " -> ".join(packages),
        )

    return BreakingPoint(from_package=packages[-1], to_package=packages[0], reason=FALLBACK_BREAK_REASON)


def generate_cycle_path(
    cycle: CircularDependencyInfo,
    svg_renderer: Optional[DiagramRenderer] = None,
    text_renderer: Optional[DiagramRenderer] = None,
) -> CyclePathVisualization:
    """Lay out a cycle and render its diagrams.

    Args:
        cycle: Cycle to visualize (must contain at least one package)
        svg_renderer: Vector renderer (default: light SvgDiagramRenderer)
        text_renderer: Text renderer (default: AsciiDiagramRenderer)

    Returns:
        CyclePathVisualization with exactly one breaking edge
    """
    if svg_renderer is None:
        svg_renderer = SvgDiagramRenderer()
    if text_renderer is None:
        text_renderer = AsciiDiagramRenderer()

    packages = cycle.packages
    nodes = layout_cycle_nodes(packages)
    breaking_point = select_breaking_point(cycle, packages)
    edges = build_cycle_edges(packages, cycle.import_traces, breaking_point)

    return CyclePathVisualization(
        nodes=nodes,
        edges=edges,
        breaking_point=breaking_point,
        svg_diagram=svg_renderer.render(nodes, edges, breaking_point),
        ascii_diagram=text_renderer.render(nodes, edges, breaking_point),
    )
