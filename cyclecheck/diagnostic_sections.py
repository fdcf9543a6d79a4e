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
"""Section builders of the diagnostic report.

Each builder is a pure function of the cycle (plus graph data where needed) and
degrades to documented defaults when optional upstream enrichments are absent.
"""

import logging
from typing import Any, List, Optional, Tuple

from cyclecheck.analysis_types import CircularDependencyInfo, FixStrategy, build_cycle_id
from cyclecheck.classification import (
    classify_risk,
    classify_severity,
    compute_affected_percentage,
    describe_cycle,
    describe_risk,
    estimate_effort,
    recommend_action,
    round_half_up,
)
from cyclecheck.diagnostic_types import (
    AlternativeCandidate,
    CodeReference,
    CodeSnippets,
    ExecutiveSummary,
    FixStrategyGuide,
    FixStrategyStep,
    ImpactAssessmentDetails,
    RelatedCycleInfo,
    RootCauseDetails,
)
from cyclecheck.graph_utils import build_ripple_tree, build_ripple_tree_from_layers, find_indirect_dependents
from cyclecheck.thresholds import DEFAULT_THRESHOLDS, DiagnosticThresholds

logger = logging.getLogger(__name__)

EFFORT_TIME_ESTIMATES = {
    "low": "15-30 minutes",
    "medium": "1-2 hours",
    "high": "2-4 hours",
}


# =============================================================================
# Executive summary
# =============================================================================


def generate_executive_summary(
    cycle: CircularDependencyInfo, thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS
) -> ExecutiveSummary:
    """Build the executive summary of a cycle."""
    packages = cycle.packages
    severity = classify_severity(cycle, thresholds)

    if cycle.impact_assessment is not None:
        affected = cycle.impact_assessment.total_affected
    else:
        affected = len(packages)

    return ExecutiveSummary(
        description=describe_cycle(cycle),
        severity=severity,
        recommendation=recommend_action(cycle, severity),
        estimated_effort=estimate_effort(cycle, thresholds),
        affected_packages_count=affected,
        cycle_length=len(packages),
    )


# =============================================================================
# Root cause
# =============================================================================


def _code_references(cycle: CircularDependencyInfo) -> List[CodeReference]:
    return [
        CodeReference(file=trace.file_path, line=trace.line_number, import_statement=trace.statement)
        for trace in cycle.import_traces
    ]


def render_root_cause_analysis(
    cycle: CircularDependencyInfo, thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS
) -> RootCauseDetails:
    """Format the upstream root cause, or an explicit "not available" record.

    Alternative candidates are listed only when confidence is below the cutoff
    (80). They are the critical chain edges whose source is not the originating
    package, each with the confidence lowered by the penalty (20, floored at 0).
    """
    root_cause = cycle.root_cause
    if root_cause is None:
        return RootCauseDetails(
            explanation="Root cause analysis not available for this cycle.",
            confidence_score=0,
            originating_package=cycle.cycle[0] if cycle.cycle else "",
            originating_reason="Unable to determine root cause with available information.",
            alternative_candidates=[],
            code_references=_code_references(cycle),
        )

    alternatives: List[AlternativeCandidate] = []
    if root_cause.confidence < thresholds.alternative_confidence_cutoff:
        for edge in root_cause.chain:
            if edge.from_package != root_cause.originating_package and edge.critical:
                alternatives.append(
                    AlternativeCandidate(
                        package=edge.from_package,
                        reason=f"Also contributes to the cycle via dependency on {edge.to_package}.",
                        confidence=max(0, root_cause.confidence - thresholds.alternative_confidence_penalty),
                    )
                )

    problematic = root_cause.problematic_dependency
    return RootCauseDetails(
        explanation=root_cause.explanation,
        confidence_score=root_cause.confidence,
        originating_package=root_cause.originating_package,
        originating_reason=(
            f"This package introduces the problematic dependency from "
            f"`{problematic.from_package}` to `{problematic.to_package}`."
        ),
        alternative_candidates=alternatives,
        code_references=_code_references(cycle),
    )


# =============================================================================
# Fix strategies
# =============================================================================


def resolve_guide_details(strategy: FixStrategy) -> Tuple[List[FixStrategyStep], str]:
    """Resolve the steps and time estimate of a strategy.

    An attached guide supplies both (the time estimate falls back to the effort
    table when the guide has none). Without a guide there are no steps and the
    time comes from the effort table alone.
    """
    fallback_time = EFFORT_TIME_ESTIMATES.get(strategy.effort, "Unknown")
    guide = strategy.guide
    if guide is None:
        return [], fallback_time

    steps = [
        FixStrategyStep(
            number=step.number,
            title=step.title,
            description=step.description,
            code_snippet=step.code_after,
            file_path=step.file_path,
            is_optional=False,
        )
        for step in guide.steps
    ]
    return steps, guide.estimated_time if guide.estimated_time is not None else fallback_time


def _code_snippets(strategy: FixStrategy) -> CodeSnippets:
    if not strategy.import_diffs:
        return CodeSnippets()
    first = strategy.import_diffs[0]
    return CodeSnippets(
        before=first.imports_to_remove[0] if first.imports_to_remove else "",
        after=first.imports_to_add[0] if first.imports_to_add else "",
    )


def render_fix_strategies(cycle: CircularDependencyInfo) -> List[FixStrategyGuide]:
    """Map upstream fix strategies, in order, to fix strategy guides."""
    guides = []
    for strategy in cycle.fix_strategies:
        steps, estimated_time = resolve_guide_details(strategy)
        guides.append(
            FixStrategyGuide(
                strategy=strategy.strategy_type,
                title=strategy.name,
                description=strategy.description,
                suitability_score=strategy.suitability,
                estimated_effort=strategy.effort,
                estimated_time=estimated_time,
                pros=list(strategy.pros),
                cons=list(strategy.cons),
                steps=steps,
                code_snippets=_code_snippets(strategy),
            )
        )
    return guides


# =============================================================================
# Impact assessment
# =============================================================================


def generate_impact_assessment(
    cycle: CircularDependencyInfo,
    G: Any,
    total_packages: int,
    thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS,
) -> ImpactAssessmentDetails:
    """Assess the blast radius of a cycle.

    A precomputed upstream assessment is trusted and reshaped as is. Otherwise
    dependents are found by reverse breadth-first search over the graph.

    Args:
        cycle: Cycle to assess
        G: NetworkX dependency graph from build_dependency_digraph()
        total_packages: Number of packages in the monorepo
        thresholds: Classification thresholds

    Returns:
        ImpactAssessmentDetails
    """
    precomputed = cycle.impact_assessment
    if precomputed is not None:
        logger.debug("Using precomputed impact assessment for %s", build_cycle_id(cycle.cycle))
        return ImpactAssessmentDetails(
            direct_participants=list(precomputed.direct_participants),
            direct_participants_count=len(precomputed.direct_participants),
            indirect_dependents=[dep.package_name for dep in precomputed.indirect_dependents],
            indirect_dependents_count=len(precomputed.indirect_dependents),
            total_affected_count=precomputed.total_affected,
            percentage_of_monorepo=round_half_up(precomputed.affected_percentage * 100),
            risk_level=precomputed.risk_level,
            risk_explanation=precomputed.risk_explanation,
            ripple_effect_tree=build_ripple_tree_from_layers(
                precomputed.direct_participants, precomputed.ripple_effect, thresholds.ripple_max_fanout
            ),
        )

    packages = cycle.packages
    indirect = find_indirect_dependents(packages, G)
    total_affected = len(set(packages) | set(indirect))
    percentage = compute_affected_percentage(total_affected, total_packages)
    risk_level = classify_risk(total_affected, total_packages, packages, thresholds)

    return ImpactAssessmentDetails(
        direct_participants=packages,
        direct_participants_count=len(packages),
        indirect_dependents=indirect,
        indirect_dependents_count=len(indirect),
        total_affected_count=total_affected,
        percentage_of_monorepo=percentage,
        risk_level=risk_level,
        risk_explanation=describe_risk(risk_level, total_affected, percentage),
        ripple_effect_tree=build_ripple_tree(packages, G, thresholds.ripple_max_depth, thresholds.ripple_max_fanout),
    )


# =============================================================================
# Related cycles
# =============================================================================


def find_related_cycles(
    target: CircularDependencyInfo,
    all_cycles: List[CircularDependencyInfo],
    thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS,
) -> List[RelatedCycleInfo]:
    """Find other cycles sharing packages with the target cycle.

    The target is skipped by identity, so a value-equal duplicate elsewhere in
    the list is still reported.

    Args:
        target: The diagnosed cycle
        all_cycles: Every known cycle, possibly including the target
        thresholds: Fix-together thresholds

    Returns:
        Related cycles in the order of all_cycles
    """
    target_packages = set(target.packages)
    related: List[RelatedCycleInfo] = []

    for other in all_cycles:
        if other is target:
            continue

        other_packages = other.packages
        shared = [pkg for pkg in other_packages if pkg in target_packages]
        if not shared:
            continue

        overlap = round_half_up(len(shared) / max(len(target_packages), len(other_packages)) * 100)
        together = overlap >= thresholds.fix_together_overlap or len(shared) >= thresholds.fix_together_shared

        reason = f"These cycles share {len(shared)} package(s): {', '.join(shared)}."
        if together:
            reason += " Fixing them together can reduce total refactoring effort."

        related.append(
            RelatedCycleInfo(
                cycle_id=build_cycle_id(other.cycle),
                shared_packages=shared,
                overlap_percentage=min(100, overlap),
                recommend_fix_together=together,
                reason=reason,
            )
        )

    return related


def find_cycle_index(cycle_id: str, all_cycles: List[CircularDependencyInfo]) -> Optional[int]:
    """Return the position of the first cycle with the given id, or None."""
    for index, cycle in enumerate(all_cycles):
        if build_cycle_id(cycle.cycle) == cycle_id:
            return index
    return None
