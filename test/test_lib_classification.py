#!/usr/bin/env python3
"""Tests for cyclecheck/classification.py"""

from typing import Any, Dict, List

import pytest

from cyclecheck.analysis_types import CircularDependencyInfo, parse_circular_dependency
from cyclecheck.classification import (
    bucket_risk_level,
    bucket_upstream_severity,
    classify_risk,
    classify_severity,
    classify_strategy_impact,
    compute_affected_percentage,
    describe_cycle,
    describe_risk,
    estimate_effort,
    format_number,
    is_quick_win,
    recommend_action,
    round_half_up,
)
from cyclecheck.thresholds import DiagnosticThresholds


def make_cycle(packages: List[str], **extra: Any) -> CircularDependencyInfo:
    """Build a parsed cycle from package names plus raw upstream keys."""
    data: Dict[str, Any] = {"cycle": packages}
    data.update(extra)
    return parse_circular_dependency(data)


class TestNumbers:
    """Tests for round_half_up and format_number."""

    def test_round_half_up(self) -> None:
        """Test halves round up, unlike banker's rounding."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2
        assert round_half_up(66.666) == 67

    def test_format_number(self) -> None:
        """Test integral floats drop the trailing .0."""
        assert format_number(8.0) == "8"
        assert format_number(7) == "7"
        assert format_number(7.5) == "7.5"


class TestClassifySeverity:
    """Tests for classify_severity."""

    def test_core_package_is_critical(self) -> None:
        """Test core markers escalate even a two-package cycle."""
        assert classify_severity(make_cycle(["@app/core", "@app/ui"])) == "critical"
        assert classify_severity(make_cycle(["@app/shared-utils", "@app/ui"])) == "critical"

    def test_long_cycle_is_critical(self) -> None:
        """Test cycles longer than five packages are critical."""
        assert classify_severity(make_cycle(["a", "b", "c", "d", "e", "f"])) == "critical"

    def test_four_packages_high(self) -> None:
        """Test cycles of four or five packages are high."""
        assert classify_severity(make_cycle(["a", "b", "c", "d"])) == "high"
        assert classify_severity(make_cycle(["a", "b", "c", "d", "e"])) == "high"

    def test_priority_raises_to_high(self) -> None:
        """Test a priority score above seven raises severity."""
        assert classify_severity(make_cycle(["a", "b"], priorityScore=8)) == "high"
        assert classify_severity(make_cycle(["a", "b"], priorityScore=7)) == "low"

    def test_three_packages_medium(self, triangle_cycle: CircularDependencyInfo) -> None:
        """Test a three-package cycle is medium."""
        assert classify_severity(triangle_cycle) == "medium"

    def test_closed_form_counts_once(self) -> None:
        """Test the closing repeat does not count as an extra package."""
        assert classify_severity(make_cycle(["a", "b", "c", "a"])) == "medium"
        assert classify_severity(make_cycle(["a", "b", "a"])) == "low"

    def test_custom_markers(self) -> None:
        """Test core markers come from the thresholds."""
        thresholds = DiagnosticThresholds(core_package_markers=("platform",))
        assert classify_severity(make_cycle(["@app/platform", "b"]), thresholds) == "critical"
        assert classify_severity(make_cycle(["@app/core", "b"]), thresholds) == "low"


class TestEstimateEffort:
    """Tests for estimate_effort."""

    def test_simple_pair_low(self, direct_cycle: CircularDependencyInfo) -> None:
        """Test a simple two-package cycle is low effort."""
        assert estimate_effort(direct_cycle) == "low"

    def test_complex_pair_medium(self) -> None:
        """Test a two-package cycle with complexity three is medium."""
        assert estimate_effort(make_cycle(["a", "b"], complexity=3)) == "medium"

    def test_long_cycle_high(self) -> None:
        """Test more than four packages is high effort."""
        assert estimate_effort(make_cycle(["a", "b", "c", "d", "e"])) == "high"

    def test_high_complexity(self) -> None:
        """Test complexity above seven is high effort."""
        assert estimate_effort(make_cycle(["a", "b", "c"], complexity=8)) == "high"

    def test_triangle_medium(self, triangle_cycle: CircularDependencyInfo) -> None:
        """Test the sample triangle cycle is medium effort."""
        assert estimate_effort(triangle_cycle) == "medium"


class TestRisk:
    """Tests for compute_affected_percentage, classify_risk and describe_risk."""

    def test_percentage(self) -> None:
        """Test percentages round half up."""
        assert compute_affected_percentage(6, 20) == 30
        assert compute_affected_percentage(1, 8) == 13
        assert compute_affected_percentage(3, 0) == 0

    @pytest.mark.parametrize(
        "affected,expected",
        [(11, "critical"), (10, "high"), (6, "high"), (5, "medium"), (3, "medium"), (2, "low")],
    )
    def test_risk_levels(self, affected: int, expected: str) -> None:
        """Test thresholds are exclusive (50/25/10 percent)."""
        assert classify_risk(affected, 20, ["a", "b"]) == expected

    def test_core_package_raises_risk(self) -> None:
        """Test a core package makes a small cycle high risk."""
        assert classify_risk(2, 100, ["@app/core", "b"]) == "high"

    def test_core_does_not_lower_critical(self) -> None:
        """Test a critical share stays critical with core packages."""
        assert classify_risk(60, 100, ["@app/core", "b"]) == "critical"

    def test_empty_monorepo_low(self) -> None:
        """Test zero packages is always low risk."""
        assert classify_risk(5, 0, ["@app/core"]) == "low"

    def test_describe_risk(self) -> None:
        """Test the risk explanation embeds the numbers."""
        text = describe_risk("high", 6, 30)
        assert text.startswith("High risk: 6 packages (30% of monorepo) are affected.")
        assert describe_risk("bogus", 1, 1) == "Unknown risk level."


class TestDescriptions:
    """Tests for describe_cycle and recommend_action."""

    def test_direct_description(self, direct_cycle: CircularDependencyInfo) -> None:
        """Test direct cycles name both packages."""
        text = describe_cycle(direct_cycle)
        assert text.startswith("Direct circular dependency between `@app/api`, `@app/auth`.")

    def test_indirect_description_truncates(self) -> None:
        """Test only three packages are named."""
        text = describe_cycle(make_cycle(["a", "b", "c", "d", "e"], type="indirect"))
        assert "`a`, `b`, `c` and 2 more" in text
        assert "This 5-package cycle" in text

    def test_recommend_best_strategy(self, triangle_cycle: CircularDependencyInfo) -> None:
        """Test the first upstream strategy is recommended."""
        text = recommend_action(triangle_cycle, "medium")
        assert text == (
            "Recommended fix: Extract Shared Module. "
            "This is a medium-severity issue with medium estimated effort."
        )

    def test_recommend_without_strategies(self) -> None:
        """Test the fallbacks depend on cycle length."""
        assert "dependency injection" in recommend_action(make_cycle(["a", "b"]), "low")
        assert "extracting shared code" in recommend_action(make_cycle(["a", "b", "c"]), "medium")


class TestStrategyAndBuckets:
    """Tests for strategy impact, quick wins and severity buckets."""

    def test_strategy_impact(self) -> None:
        """Test suitability maps to impact."""
        assert classify_strategy_impact(9) == "high"
        assert classify_strategy_impact(7) == "high"
        assert classify_strategy_impact(4) == "medium"
        assert classify_strategy_impact(3.5) == "low"

    def test_quick_win(self) -> None:
        """Test quick wins need low effort and high suitability."""
        assert is_quick_win("low", 9) is True
        assert is_quick_win("low", 6) is False
        assert is_quick_win("medium", 9) is False

    def test_upstream_buckets(self) -> None:
        """Test upstream severity buckets."""
        assert bucket_upstream_severity("critical") == "critical"
        assert bucket_upstream_severity("warning") == "high"
        assert bucket_upstream_severity("info") == "medium"
        assert bucket_upstream_severity("other") == "low"

    def test_risk_buckets(self) -> None:
        """Test risk level buckets."""
        assert bucket_risk_level("high") == "high"
        assert bucket_risk_level("medium") == "medium"
        assert bucket_risk_level("warning") == "low"
