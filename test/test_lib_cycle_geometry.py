#!/usr/bin/env python3
"""Tests for cyclecheck/cycle_geometry.py"""

from cyclecheck.analysis_types import CircularDependencyInfo, ImportTrace, parse_circular_dependency
from cyclecheck.cycle_geometry import (
    FALLBACK_BREAK_REASON,
    build_cycle_edges,
    cycle_edge_pairs,
    generate_cycle_path,
    layout_cycle_nodes,
    select_breaking_point,
)
from cyclecheck.diagnostic_types import BreakingPoint


class TestLayout:
    """Tests for layout_cycle_nodes."""

    def test_three_nodes(self) -> None:
        """Test a triangle starts at the top and runs clockwise."""
        nodes = layout_cycle_nodes(["a", "b", "c"])
        assert [(n.position.x, n.position.y) for n in nodes] == [(200, 50), (330, 275), (70, 275)]

    def test_four_nodes(self) -> None:
        """Test a square layout."""
        nodes = layout_cycle_nodes(["a", "b", "c", "d"])
        assert [(n.position.x, n.position.y) for n in nodes] == [(200, 50), (350, 200), (200, 350), (50, 200)]

    def test_node_fields(self) -> None:
        """Test node identity and short names."""
        node = layout_cycle_nodes(["@app/ui"])[0]
        assert node.id == "@app/ui"
        assert node.name == "ui"
        assert node.path == "@app/ui"
        assert node.is_in_cycle is True
        assert isinstance(node.position.x, int)

    def test_empty(self) -> None:
        """Test an empty cycle has no nodes."""
        assert layout_cycle_nodes([]) == []


class TestEdges:
    """Tests for cycle_edge_pairs and build_cycle_edges."""

    def test_pairs_wrap_around(self) -> None:
        """Test the last package links back to the first."""
        assert cycle_edge_pairs(["a", "b", "c"]) == [("a", "b"), ("b", "c"), ("c", "a")]

    def test_import_trace_attached(self) -> None:
        """Test the first matching trace is attached to its edge."""
        traces = [
            ImportTrace("a", "b", "src/a.ts", 4, "import b"),
            ImportTrace("a", "b", "src/other.ts", 9, "import b again"),
        ]
        edges = build_cycle_edges(["a", "b"], traces)
        assert edges[0].file_path == "src/a.ts"
        assert edges[0].line_number == 4
        assert edges[1].import_statement is None

    def test_single_breaking_edge(self) -> None:
        """Test exactly one edge is flagged even when the pair repeats."""
        breaking = BreakingPoint("a", "b", "reason")
        edges = build_cycle_edges(["a", "b", "a", "b"], [], breaking)
        assert [e.is_breaking_point for e in edges] == [True, False, False, False]


class TestSelectBreakingPoint:
    """Tests for select_breaking_point."""

    def test_critical_edge(self, triangle_cycle: CircularDependencyInfo) -> None:
        """Test the root cause critical edge is used."""
        breaking = select_breaking_point(triangle_cycle, triangle_cycle.packages)
        assert (breaking.from_package, breaking.to_package) == ("@app/api", "@app/auth")
        assert breaking.reason == "Critical edge identified by root cause analysis (confidence: 65%)."

    def test_fallback_closing_edge(self, direct_cycle: CircularDependencyInfo) -> None:
        """Test the closing edge is used without a root cause."""
        breaking = select_breaking_point(direct_cycle, direct_cycle.packages)
        assert (breaking.from_package, breaking.to_package) == ("@app/auth", "@app/api")
        assert breaking.reason == FALLBACK_BREAK_REASON

    def test_critical_edge_outside_cycle(self) -> None:
        """Test a critical edge that is not a cycle edge falls back."""
        cycle = parse_circular_dependency(
            {
                "cycle": ["a", "b", "c"],
                "rootCause": {
                    "originatingPackage": "a",
                    "confidence": 90,
                    "criticalEdge": {"from": "x", "to": "y"},
                },
            }
        )
        breaking = select_breaking_point(cycle, cycle.packages)
        assert (breaking.from_package, breaking.to_package) == ("c", "a")
        assert breaking.reason == FALLBACK_BREAK_REASON


class TestGenerateCyclePath:
    """Tests for generate_cycle_path."""

    def test_visualization(self, triangle_cycle: CircularDependencyInfo) -> None:
        """Test nodes, edges and both diagrams are produced."""
        path = generate_cycle_path(triangle_cycle)

        assert len(path.nodes) == 3
        assert len(path.edges) == 3
        assert sum(1 for e in path.edges if e.is_breaking_point) == 1
        assert path.edges[1].is_breaking_point
        assert path.edges[1].line_number == 3
        assert path.svg_diagram.startswith("<?xml")
        assert path.ascii_diagram.startswith("```")

    def test_two_package_cycle(self, direct_cycle: CircularDependencyInfo) -> None:
        """Test a direct cycle has two edges, the closing one flagged."""
        path = generate_cycle_path(direct_cycle)
        assert [(e.from_package, e.to_package) for e in path.edges] == [
            ("@app/api", "@app/auth"),
            ("@app/auth", "@app/api"),
        ]
        assert path.edges[1].is_breaking_point
