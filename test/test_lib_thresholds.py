#!/usr/bin/env python3
"""Tests for cyclecheck/thresholds.py"""

import dataclasses

import pytest

from cyclecheck.thresholds import DEFAULT_THRESHOLDS, DiagnosticThresholds


class TestDiagnosticThresholds:
    """Tests for DiagnosticThresholds."""

    def test_defaults(self) -> None:
        """Test the default cut-offs."""
        assert DEFAULT_THRESHOLDS.critical_cycle_length == 5
        assert DEFAULT_THRESHOLDS.high_cycle_length == 4
        assert DEFAULT_THRESHOLDS.critical_risk_percentage == 50
        assert DEFAULT_THRESHOLDS.high_risk_percentage == 25
        assert DEFAULT_THRESHOLDS.medium_risk_percentage == 10
        assert DEFAULT_THRESHOLDS.ripple_max_depth == 3
        assert DEFAULT_THRESHOLDS.ripple_max_fanout == 5
        assert DEFAULT_THRESHOLDS.core_package_markers == ("core", "shared")

    def test_immutable(self) -> None:
        """Test thresholds cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_THRESHOLDS.ripple_max_depth = 10  # type: ignore[misc]

    def test_custom_values(self) -> None:
        """Test thresholds can be overridden."""
        thresholds = DiagnosticThresholds(ripple_max_depth=5, fix_together_overlap=50)
        assert thresholds.ripple_max_depth == 5
        assert thresholds.fix_together_overlap == 50

    def test_rejects_unordered_risk_percentages(self) -> None:
        """Test risk percentages must be strictly increasing."""
        with pytest.raises(AssertionError, match="strictly increasing"):
            DiagnosticThresholds(medium_risk_percentage=30, high_risk_percentage=25)

    def test_rejects_non_positive_depth(self) -> None:
        """Test the ripple depth must be positive."""
        with pytest.raises(AssertionError):
            DiagnosticThresholds(ripple_max_depth=0)

    def test_rejects_inverted_lengths(self) -> None:
        """Test the high length must not exceed the critical length."""
        with pytest.raises(AssertionError):
            DiagnosticThresholds(high_cycle_length=6, critical_cycle_length=5)

    def test_is_core_package_substring(self) -> None:
        """Test core detection is a plain substring match."""
        assert DEFAULT_THRESHOLDS.is_core_package("@app/core") is True
        assert DEFAULT_THRESHOLDS.is_core_package("@app/hardcore-mode") is True
        assert DEFAULT_THRESHOLDS.is_core_package("@app/shared") is True
        assert DEFAULT_THRESHOLDS.is_core_package("@app/ui") is False
