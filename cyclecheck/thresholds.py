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
"""Threshold configuration for cycle classification and report heuristics.

This module provides type-safe configuration of the numeric cut-offs used when
classifying a circular dependency (severity, effort, risk) and when building
the derived report sections (ripple tree bounds, related cycles, quick wins).

Example usage:
    from cyclecheck.thresholds import DEFAULT_THRESHOLDS

    if len(packages) > DEFAULT_THRESHOLDS.critical_cycle_length:
        severity = "critical"
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DiagnosticThresholds:
    """Immutable thresholds for cycle diagnosis.

    Attributes:
        critical_cycle_length: Cycles longer than this are critical
        high_cycle_length: Cycles at least this long are high severity
        high_priority_score: Priority scores above this raise severity to high
        low_effort_max_complexity: Two-package cycles below this complexity are low effort
        high_effort_cycle_length: Cycles longer than this are high effort
        high_effort_complexity: Complexity above this is high effort
        critical_risk_percentage: Affected share (%) above which risk is critical
        high_risk_percentage: Affected share (%) above which risk is high
        medium_risk_percentage: Affected share (%) above which risk is medium
        core_package_markers: Name substrings that mark a package as core infrastructure
        ripple_max_depth: Maximum depth of the ripple effect tree
        ripple_max_fanout: Maximum dependents expanded per ripple tree node
        alternative_confidence_cutoff: Root cause confidence below which alternatives are listed
        alternative_confidence_penalty: Confidence subtracted for each alternative candidate
        fix_together_overlap: Overlap percentage at which related cycles should be fixed together
        fix_together_shared: Shared package count at which related cycles should be fixed together
        high_impact_suitability: Strategy suitability at which impact is high (and quick wins qualify)
        medium_impact_suitability: Strategy suitability at which impact is medium
    """

    critical_cycle_length: int = 5
    high_cycle_length: int = 4
    high_priority_score: float = 7
    low_effort_max_complexity: float = 3
    high_effort_cycle_length: int = 4
    high_effort_complexity: float = 7
    critical_risk_percentage: float = 50
    high_risk_percentage: float = 25
    medium_risk_percentage: float = 10
    core_package_markers: Tuple[str, ...] = ("core", "shared")
    ripple_max_depth: int = 3
    ripple_max_fanout: int = 5
    alternative_confidence_cutoff: float = 80
    alternative_confidence_penalty: float = 20
    fix_together_overlap: int = 30
    fix_together_shared: int = 2
    high_impact_suitability: float = 7
    medium_impact_suitability: float = 4

    def __post_init__(self) -> None:
        """Validate threshold values are positive and logically consistent."""
        assert self.critical_cycle_length > 0, "critical_cycle_length must be positive"
        assert self.high_cycle_length > 0, "high_cycle_length must be positive"
        assert self.ripple_max_depth > 0, "ripple_max_depth must be positive"
        assert self.ripple_max_fanout > 0, "ripple_max_fanout must be positive"
        assert self.fix_together_shared > 0, "fix_together_shared must be positive"
        assert self.alternative_confidence_penalty >= 0, "alternative_confidence_penalty must not be negative"

        assert self.high_cycle_length <= self.critical_cycle_length, "high length must not exceed critical length"
        assert (
            self.medium_risk_percentage < self.high_risk_percentage < self.critical_risk_percentage
        ), "risk percentages must be strictly increasing"
        assert 0 <= self.fix_together_overlap <= 100, "fix_together_overlap must be a percentage"
        assert 0 <= self.alternative_confidence_cutoff <= 100, "alternative_confidence_cutoff must be a percentage"
        assert self.medium_impact_suitability <= self.high_impact_suitability, "medium suitability must not exceed high"

    def is_core_package(self, package_name: str) -> bool:
        """Return True if a package name matches one of the core markers."""
        return any(marker in package_name for marker in self.core_package_markers)


DEFAULT_THRESHOLDS = DiagnosticThresholds()
