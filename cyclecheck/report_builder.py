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
"""Build canonical ReportData from the upstream analysis result shapes.

Two shapes are accepted: AnalysisResult (full analyzer output) and
ComprehensiveAnalysisResult (stored analysis record, whose health score is a
number or a structured object). Both are normalized into the same ReportData.
"""

import logging
from typing import Iterable, List

from cyclecheck.analysis_types import (
    AnalysisResult,
    CircularDependencyInfo,
    ComprehensiveAnalysisResult,
    HealthScoreDetails,
    HealthScoreFactor,
    VersionConflictInfo,
)
from cyclecheck.classification import (
    Number,
    bucket_risk_level,
    bucket_upstream_severity,
    classify_strategy_impact,
    is_quick_win,
    round_half_up,
)
from cyclecheck.constants import TOOL_VERSION
from cyclecheck.report_types import (
    RATING_THRESHOLDS,
    CircularDependencyReport,
    ConflictSummary,
    CycleSummary,
    FixRecommendation,
    FixRecommendationReport,
    HealthScoreBreakdown,
    HealthScoreReport,
    ReportData,
    ReportMetadata,
    SeverityCounts,
    VersionConflictReport,
    get_health_score_rating,
    utc_now_iso,
)
from cyclecheck.thresholds import DEFAULT_THRESHOLDS, DiagnosticThresholds

logger = logging.getLogger(__name__)


def _count_buckets(buckets: Iterable[str]) -> SeverityCounts:
    counts = {"critical": 0, "high": 0, "medium": 0, "low": 0}
    for bucket in buckets:
        counts[bucket] += 1
    return SeverityCounts(**counts)


def _breakdown(factors: List[HealthScoreFactor]) -> List[HealthScoreBreakdown]:
    return [HealthScoreBreakdown(category=f.name, score=f.score, weight=round_half_up(f.weight * 100)) for f in factors]


def _single_category_score(score: Number) -> HealthScoreReport:
    return HealthScoreReport(
        overall=score,
        breakdown=[HealthScoreBreakdown(category="Overall", score=score, weight=100)],
        rating=get_health_score_rating(score),
        rating_thresholds=dict(RATING_THRESHOLDS),
    )


def _cycle_summaries(cycles: List[CircularDependencyInfo]) -> List[CycleSummary]:
    return [
        CycleSummary(id=f"cycle-{index}", packages=list(dep.cycle), severity=dep.severity, type=dep.cycle_type)
        for index, dep in enumerate(cycles, start=1)
    ]


def _conflict_summaries(conflicts: List[VersionConflictInfo]) -> List[ConflictSummary]:
    return [
        ConflictSummary(
            package_name=c.package_name,
            versions=[v.version for v in c.conflicting_versions],
            risk_level=c.severity,
            recommended_version=c.resolution,
        )
        for c in conflicts
    ]


def build_fix_recommendations(
    cycles: List[CircularDependencyInfo], thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS
) -> FixRecommendationReport:
    """Flatten every cycle's fix strategies into one priority-sorted list.

    The sort is stable, so recommendations with equal priority keep their input order.
    """
    recommendations: List[FixRecommendation] = []
    for dep in cycles:
        for strategy in dep.fix_strategies:
            recommendations.append(
                FixRecommendation(
                    id=f"fix-{'-'.join(dep.cycle)}-{strategy.strategy_type}",
                    title=strategy.name,
                    description=strategy.description,
                    effort=strategy.effort,
                    impact=classify_strategy_impact(strategy.suitability, thresholds),
                    priority=strategy.suitability,
                    affected_packages=list(strategy.target_packages),
                    quick_win=is_quick_win(strategy.effort, strategy.suitability, thresholds),
                )
            )

    recommendations.sort(key=lambda rec: rec.priority, reverse=True)
    return FixRecommendationReport(
        total_count=len(recommendations),
        quick_wins=sum(1 for rec in recommendations if rec.quick_win),
        recommendations=recommendations,
    )


def build_report_data(
    analysis: AnalysisResult, project_name: str, thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS
) -> ReportData:
    """Build report data from an AnalysisResult.

    Args:
        analysis: Analyzer output
        project_name: Project name for the report
        thresholds: Thresholds for recommendation impact and quick wins

    Returns:
        ReportData with every section filled in
    """
    graph = analysis.graph
    metadata = ReportMetadata(
        generated_at=utc_now_iso(),
        tool_version=TOOL_VERSION,
        project_name=project_name,
        analysis_duration=analysis.duration_ms,
        package_count=analysis.packages,
        node_count=len(graph.nodes) if graph is not None else 0,
        edge_count=len(graph.edges) if graph is not None else 0,
    )

    details = analysis.health_score_details
    if details is not None:
        health_score = HealthScoreReport(
            overall=details.overall,
            breakdown=_breakdown(details.factors),
            rating=details.rating or get_health_score_rating(details.overall),
            rating_thresholds=dict(RATING_THRESHOLDS),
        )
    else:
        health_score = _single_category_score(analysis.health_score)

    cycles = analysis.circular_dependencies
    conflicts = analysis.version_conflicts
    logger.debug("Building report data: %d cycles, %d version conflicts", len(cycles), len(conflicts))

    return ReportData(
        metadata=metadata,
        health_score=health_score,
        circular_dependencies=CircularDependencyReport(
            total_count=len(cycles),
            by_severity=_count_buckets(bucket_upstream_severity(dep.severity) for dep in cycles),
            cycles=_cycle_summaries(cycles),
        ),
        version_conflicts=VersionConflictReport(
            total_count=len(conflicts),
            by_risk_level=_count_buckets(bucket_upstream_severity(c.severity) for c in conflicts),
            conflicts=_conflict_summaries(conflicts),
        ),
        fix_recommendations=build_fix_recommendations(cycles, thresholds),
    )


def build_report_data_from_comprehensive(analysis: ComprehensiveAnalysisResult, project_name: str) -> ReportData:
    """Build report data from a ComprehensiveAnalysisResult.

    A structured health score with factors yields a full breakdown; a plain
    number (or a structured score without factors, or the summary score) yields
    a single "Overall" category. Cycles are bucketed by their own severity
    (critical/high/medium, anything else low) and conflicts by risk level. This
    shape carries no fix strategies, so the recommendation list is empty.
    """
    raw = analysis.health_score
    if isinstance(raw, HealthScoreDetails) and raw.factors:
        health_score = HealthScoreReport(
            overall=raw.overall,
            breakdown=_breakdown(raw.factors),
            rating=get_health_score_rating(raw.overall),
            rating_thresholds=dict(RATING_THRESHOLDS),
        )
    else:
        if isinstance(raw, HealthScoreDetails):
            score: Number = raw.overall
        elif raw is not None:
            score = raw
        elif analysis.summary_health_score is not None:
            score = analysis.summary_health_score
        else:
            score = 0
        health_score = _single_category_score(score)

    cycles = analysis.circular_dependencies
    conflicts = analysis.version_conflicts
    metadata = ReportMetadata(
        generated_at=utc_now_iso(),
        tool_version=TOOL_VERSION,
        project_name=project_name,
        analysis_duration=0,
        package_count=analysis.summary_total_packages or 0,
        node_count=0,
        edge_count=0,
    )

    return ReportData(
        metadata=metadata,
        health_score=health_score,
        circular_dependencies=CircularDependencyReport(
            total_count=len(cycles),
            by_severity=_count_buckets(bucket_risk_level(dep.severity) for dep in cycles),
            cycles=_cycle_summaries(cycles),
        ),
        version_conflicts=VersionConflictReport(
            total_count=len(conflicts),
            by_risk_level=_count_buckets(bucket_risk_level(c.severity) for c in conflicts),
            conflicts=_conflict_summaries(conflicts),
        ),
        fix_recommendations=FixRecommendationReport(total_count=0, quick_wins=0, recommendations=[]),
    )
