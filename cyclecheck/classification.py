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
"""Deterministic classification heuristics for circular dependencies.

Severity, effort and risk are derived from the cycle shape and the upstream
metadata only. Package names containing one of the core markers ("core",
"shared") escalate severity and risk. The marker match is a plain substring test.
"""

import math
from typing import List, Union

from cyclecheck.analysis_types import CircularDependencyInfo
from cyclecheck.constants import SUMMARY_PACKAGE_PREVIEW
from cyclecheck.thresholds import DEFAULT_THRESHOLDS, DiagnosticThresholds

Number = Union[int, float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3, 0.5 -> 1)."""
    return int(math.floor(value + 0.5))


def format_number(value: Number) -> str:
    """Render a number without a trailing ".0" for integral values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def classify_severity(cycle: CircularDependencyInfo, thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS) -> str:
    """Classify the severity of a cycle for the executive summary.

    Rules, first match wins:
        1. any package name contains a core marker -> critical
        2. more than critical_cycle_length packages -> critical
        3. at least high_cycle_length packages or priority above high_priority_score -> high
        4. exactly three packages -> medium
        5. otherwise -> low
    """
    packages = cycle.packages

    if any(thresholds.is_core_package(p) for p in packages):
        return "critical"
    if len(packages) > thresholds.critical_cycle_length:
        return "critical"
    if len(packages) >= thresholds.high_cycle_length or cycle.priority_score > thresholds.high_priority_score:
        return "high"
    if len(packages) == 3:
        return "medium"
    return "low"


def estimate_effort(cycle: CircularDependencyInfo, thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS) -> str:
    """Estimate the effort needed to resolve a cycle (low/medium/high)."""
    packages = cycle.packages

    if len(packages) == 2 and cycle.complexity < thresholds.low_effort_max_complexity:
        return "low"
    if len(packages) > thresholds.high_effort_cycle_length or cycle.complexity > thresholds.high_effort_complexity:
        return "high"
    return "medium"


def compute_affected_percentage(total_affected: int, total_packages: int) -> int:
    """Affected share of the monorepo as a whole percentage (0 for an empty monorepo)."""
    if total_packages <= 0:
        return 0
    return round_half_up(total_affected / total_packages * 100)


def classify_risk(
    total_affected: int,
    total_packages: int,
    cycle_packages: List[str],
    thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS,
) -> str:
    """Classify the blast radius risk of a cycle.

    The unrounded affected percentage is compared against the thresholds. Core
    packages raise risk to at least high unless the share is already critical.
    An empty monorepo is always low risk.
    """
    if total_packages <= 0:
        return "low"

    percentage = total_affected / total_packages * 100
    if percentage > thresholds.critical_risk_percentage:
        return "critical"
    if percentage > thresholds.high_risk_percentage:
        return "high"
    if any(thresholds.is_core_package(p) for p in cycle_packages):
        return "high"
    if percentage > thresholds.medium_risk_percentage:
        return "medium"
    return "low"


_RISK_TEMPLATES = {
    "critical": (
        "Critical risk: {total} packages ({pct}% of monorepo) are affected. "
        "This cycle impacts core infrastructure and should be prioritized immediately."
    ),
    "high": (
        "High risk: {total} packages ({pct}% of monorepo) are affected. "
        "This cycle has significant downstream impact and should be addressed soon."
    ),
    "medium": (
        "Medium risk: {total} packages ({pct}% of monorepo) are affected. "
        "This cycle has moderate impact and should be scheduled for resolution."
    ),
    "low": (
        "Low risk: {total} packages ({pct}% of monorepo) are affected. "
        "This cycle has limited blast radius but should still be fixed to improve architecture health."
    ),
}


def describe_risk(risk_level: str, total_affected: int, percentage: int) -> str:
    """Explain a risk level in one or two sentences."""
    template = _RISK_TEMPLATES.get(risk_level)
    if template is None:
        return "Unknown risk level."
    return template.format(total=total_affected, pct=percentage)


def describe_cycle(cycle: CircularDependencyInfo) -> str:
    """Describe a cycle, naming at most the first three packages."""
    packages = cycle.packages
    package_list = ", ".join(f"`{p}`" for p in packages[:SUMMARY_PACKAGE_PREVIEW])
    and_more = f" and {len(packages) - SUMMARY_PACKAGE_PREVIEW} more" if len(packages) > SUMMARY_PACKAGE_PREVIEW else ""

    if cycle.cycle_type == "direct":
        return (
            f"Direct circular dependency between {package_list}{and_more}. "
            "These packages import each other, creating a tight coupling that should be resolved."
        )

    return (
        f"Indirect circular dependency involving {package_list}{and_more}. "
        f"This {len(packages)}-package cycle creates complex inter-dependencies that affect architecture health."
    )


def recommend_action(cycle: CircularDependencyInfo, severity: str) -> str:
    """Recommend the next action, preferring the best upstream fix strategy."""
    if cycle.fix_strategies:
        best = cycle.fix_strategies[0]
        return (
            f"Recommended fix: {best.name}. "
            f"This is a {severity}-severity issue with {best.effort} estimated effort."
        )

    if len(cycle.packages) == 2:
        return (
            "Recommend using dependency injection to break the direct dependency. "
            "Consider which package should own the shared functionality."
        )

    return (
        "Recommend extracting shared code into a new package to eliminate the cycle. "
        "This will improve architecture clarity and testability."
    )


def classify_strategy_impact(suitability: Number, thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS) -> str:
    """Map a strategy suitability score to an impact level."""
    if suitability >= thresholds.high_impact_suitability:
        return "high"
    if suitability >= thresholds.medium_impact_suitability:
        return "medium"
    return "low"


def is_quick_win(effort: str, suitability: Number, thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS) -> bool:
    """A quick win is a low effort fix with high suitability."""
    return effort == "low" and suitability >= thresholds.high_impact_suitability


def bucket_upstream_severity(severity: str) -> str:
    """Map upstream severity (critical/warning/info) onto the report scale."""
    return {"critical": "critical", "warning": "high", "info": "medium"}.get(severity, "low")


def bucket_risk_level(risk_level: str) -> str:
    """Map a risk level (critical/high/medium) onto the report scale; anything else is low."""
    return risk_level if risk_level in ("critical", "high", "medium") else "low"

