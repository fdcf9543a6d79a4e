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
"""Diagram renderers for cycle path visualizations.

Both renderers consume the same laid-out geometry (nodes with positions and
edges with a breaking point flag). The assembler picks renderers explicitly:
SvgDiagramRenderer for a scalable image, AsciiDiagramRenderer for plain text.
"""

import html
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from cyclecheck.analysis_types import short_package_name
from cyclecheck.classification import format_number
from cyclecheck.constants import DIAGRAM_HEIGHT, DIAGRAM_WIDTH, EDGE_NODE_OFFSET, NODE_LABEL_MAX_CHARS, NODE_RADIUS
from cyclecheck.diagnostic_types import BreakingPoint, CycleEdge, CycleNode

logger = logging.getLogger(__name__)


class DiagramRenderer(ABC):
    """Renders a laid-out cycle into a textual diagram format."""

    @abstractmethod
    def render(self, nodes: List[CycleNode], edges: List[CycleEdge], breaking_point: BreakingPoint) -> str:
        """Render the cycle.

        Args:
            nodes: Cycle nodes in cycle order, with positions
            edges: Cycle edges in cycle order, breaking edge flagged
            breaking_point: The recommended breaking edge

        Returns:
            Diagram source text
        """


@dataclass(frozen=True)
class SvgPalette:
    """Color set of the SVG diagram."""

    background: str
    node: str
    node_stroke: str
    text: str
    edge: str
    breaking_edge: str
    breaking_edge_glow: str


LIGHT_PALETTE = SvgPalette(
    background="#ffffff",
    node="#3b82f6",
    node_stroke="#2563eb",
    text="#1f2937",
    edge="#9ca3af",
    breaking_edge="#ef4444",
    breaking_edge_glow="#fecaca",
)

DARK_PALETTE = SvgPalette(
    background="#1f2937",
    node="#3b82f6",
    node_stroke="#60a5fa",
    text="#f9fafb",
    edge="#6b7280",
    breaking_edge="#ef4444",
    breaking_edge_glow="#fca5a5",
)


class SvgDiagramRenderer(DiagramRenderer):
    """Render a cycle as a standalone SVG document with a theme-aware palette."""

    def __init__(self, dark_mode: bool = False):
        self.palette = DARK_PALETTE if dark_mode else LIGHT_PALETTE

    def _render_node(self, node: CycleNode) -> str:
        label = html.escape(node.name[:NODE_LABEL_MAX_CHARS])
        return (
            f'\n    <g transform="translate({node.position.x}, {node.position.y})">'
            f'\n      <circle r="{NODE_RADIUS}" fill="{self.palette.node}" stroke="{self.palette.node_stroke}" stroke-width="2"/>'
            f'\n      <text y="5" text-anchor="middle" fill="white" font-size="10" font-weight="500">'
            f"\n        {label}"
            f"\n      </text>"
            f"\n    </g>"
        )

    def _render_edge(self, edge: CycleEdge, positions: Dict[str, np.ndarray]) -> str:
        start_node = positions.get(edge.from_package)
        end_node = positions.get(edge.to_package)
        if start_node is None or end_node is None:
            logger.debug("Skipping edge %s -> %s without laid-out nodes", edge.from_package, edge.to_package)
            return ""

        delta = end_node - start_node
        dist = float(np.hypot(*delta))
        if dist == 0:
            return ""

        # Shorten the line at both ends so it starts and stops outside the node circles
        start = start_node + delta * (EDGE_NODE_OFFSET / dist)
        end = start_node + delta * ((dist - EDGE_NODE_OFFSET) / dist)
        x1, y1, x2, y2 = (format_number(float(v)) for v in (*start, *end))

        p = self.palette
        if edge.is_breaking_point:
            glow = (
                f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}"'
                f'\n                stroke="{p.breaking_edge_glow}" stroke-width="8" opacity="0.5"/>'
            )
            color, width, dash, marker, css = p.breaking_edge, 3, "5,5", "arrowhead-red", "edge breaking-point"
        else:
            glow = ""
            color, width, dash, marker, css = p.edge, 2, "none", "arrowhead", "edge"

        return (
            f'\n      <g class="{css}">'
            f"\n        {glow}"
            f'\n        <line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}"'
            f'\n              stroke="{color}" stroke-width="{width}"'
            f'\n              stroke-dasharray="{dash}"'
            f'\n              marker-end="url(#{marker})"/>'
            f"\n      </g>"
        )

    def render(self, nodes: List[CycleNode], edges: List[CycleEdge], breaking_point: BreakingPoint) -> str:
        p = self.palette
        positions = {node.id: np.array([node.position.x, node.position.y], dtype=float) for node in nodes}

        edge_elements = "\n".join(self._render_edge(edge, positions) for edge in edges)
        node_elements = "\n".join(self._render_node(node) for node in nodes)
        legend = (
            f'\n    <g transform="translate(10, {DIAGRAM_HEIGHT - 50})">'
            f'\n      <line x1="0" y1="0" x2="30" y2="0" stroke="{p.breaking_edge}" stroke-width="3" stroke-dasharray="5,5"/>'
            f'\n      <text x="40" y="4" fill="{p.text}" font-size="11">Recommended breaking point</text>'
            f"\n    </g>"
        )

        return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="{DIAGRAM_WIDTH}" height="{DIAGRAM_HEIGHT}" viewBox="0 0 {DIAGRAM_WIDTH} {DIAGRAM_HEIGHT}">
  <defs>
    <marker id="arrowhead" markerWidth="10" markerHeight="7" refX="9" refY="3.5" orient="auto">
      <polygon points="0 0, 10 3.5, 0 7" fill="{p.edge}"/>
    </marker>
    <marker id="arrowhead-red" markerWidth="10" markerHeight="7" refX="9" refY="3.5" orient="auto">
      <polygon points="0 0, 10 3.5, 0 7" fill="{p.breaking_edge}"/>
    </marker>
  </defs>

  <rect width="{DIAGRAM_WIDTH}" height="{DIAGRAM_HEIGHT}" fill="{p.background}"/>

  {edge_elements}
  {node_elements}
  {legend}
</svg>"""


class AsciiDiagramRenderer(DiagramRenderer):
    """Render a cycle as a fenced, fixed-width text diagram.

    Example (breaking edge c -> a):

        a ------> b
              |
              v
        b ------> c
              |
              v
        c ==X==> a [BREAK HERE]
    """

    def render(self, nodes: List[CycleNode], edges: List[CycleEdge], breaking_point: BreakingPoint) -> str:
        short_names = {node.id: short_package_name(node.id) for node in nodes}
        width = max((len(name) for name in short_names.values()), default=0)
        padding = " " * width

        lines = ["```", "Cycle Path:", ""]
        for i, edge in enumerate(edges):
            current = short_names.get(edge.from_package, short_package_name(edge.from_package))
            target = short_names.get(edge.to_package, short_package_name(edge.to_package))
            arrow = " ==X==> " if edge.is_breaking_point else " ------> "
            label = " [BREAK HERE]" if edge.is_breaking_point else ""
            lines.append(f"  {current.ljust(width)}{arrow}{target}{label}")

            if i < len(edges) - 1:
                lines.append(f"  {padding}   |")
                lines.append(f"  {padding}   v")

        lines.append("")
        lines.append("  (cycle repeats)")
        lines.append("```")
        return "\n".join(lines) + "\n"
