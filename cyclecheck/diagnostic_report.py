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
"""Diagnostic report assembly and HTML export.

generate_diagnostic_report() runs every section builder for one cycle and
stamps the result with identity and timing metadata. The report is built from
read-only inputs and nothing is cached between calls.
"""

import logging
import time
from typing import List

from cyclecheck.analysis_types import CircularDependencyInfo, DependencyGraph, build_cycle_id
from cyclecheck.classification import round_half_up
from cyclecheck.constants import ANALYSIS_CONFIG_HASH, TOOL_VERSION, AnalysisInputError
from cyclecheck.cycle_geometry import generate_cycle_path
from cyclecheck.diagnostic_html import render_diagnostic_html
from cyclecheck.diagnostic_sections import (
    find_related_cycles,
    generate_executive_summary,
    generate_impact_assessment,
    render_fix_strategies,
    render_root_cause_analysis,
)
from cyclecheck.diagnostic_types import DiagnosticMetadata, DiagnosticReport
from cyclecheck.diagram_renderers import AsciiDiagramRenderer, SvgDiagramRenderer
from cyclecheck.graph_utils import build_dependency_digraph
from cyclecheck.report_types import ReportResult, build_diagnostic_filename, utc_now_iso
from cyclecheck.thresholds import DEFAULT_THRESHOLDS, DiagnosticThresholds

logger = logging.getLogger(__name__)


def generate_diagnostic_report(
    cycle: CircularDependencyInfo,
    graph: DependencyGraph,
    all_cycles: List[CircularDependencyInfo],
    total_packages: int,
    project_name: str,
    is_dark_mode: bool = False,
    thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS,
) -> DiagnosticReport:
    """Generate the full diagnostic report for one circular dependency.

    Args:
        cycle: The cycle to diagnose
        graph: Dependency graph of the monorepo (read only)
        all_cycles: Every detected cycle, used to find related cycles
        total_packages: Number of packages in the monorepo
        project_name: Project name for the report header
        is_dark_mode: Render the SVG diagram with the dark palette
        thresholds: Classification thresholds

    Returns:
        Immutable DiagnosticReport

    Raises:
        AnalysisInputError: If the cycle has no packages
    """
    if not cycle.packages:
        raise AnalysisInputError("Cannot diagnose an empty cycle")

    start = time.perf_counter()

    cycle_id = build_cycle_id(cycle.cycle)
    report_id = f"diag-{cycle_id}-{int(time.time() * 1000)}"
    logger.debug("Generating diagnostic report %s", report_id)

    executive_summary = generate_executive_summary(cycle, thresholds)
    cycle_path = generate_cycle_path(cycle, SvgDiagramRenderer(dark_mode=is_dark_mode), AsciiDiagramRenderer())
    root_cause = render_root_cause_analysis(cycle, thresholds)
    fix_strategies = render_fix_strategies(cycle)
    impact_assessment = generate_impact_assessment(cycle, build_dependency_digraph(graph), total_packages, thresholds)
    related_cycles = find_related_cycles(cycle, all_cycles, thresholds)

    duration_ms = max(0, round_half_up((time.perf_counter() - start) * 1000))
    logger.info("Generated diagnostic report for cycle %s in %d ms", cycle_id, duration_ms)

    # generated_at is stamped twice on purpose; the two values may differ slightly
    return DiagnosticReport(
        id=report_id,
        cycle_id=cycle_id,
        generated_at=utc_now_iso(),
        tool_version=TOOL_VERSION,
        project_name=project_name,
        executive_summary=executive_summary,
        cycle_path=cycle_path,
        root_cause=root_cause,
        fix_strategies=fix_strategies,
        impact_assessment=impact_assessment,
        related_cycles=related_cycles,
        metadata=DiagnosticMetadata(
            generated_at=utc_now_iso(),
            generation_duration_ms=duration_ms,
            tool_version=TOOL_VERSION,
            project_name=project_name,
            analysis_config_hash=ANALYSIS_CONFIG_HASH,
        ),
    )


def export_diagnostic_report_as_html(report: DiagnosticReport) -> ReportResult:
    """Render a diagnostic report as a self-contained HTML file.

    Returns:
        ReportResult named {project}-diagnostic-{cycleId}-{YYYY-MM-DD}.html
    """
    html_text = render_diagnostic_html(report)
    filename = build_diagnostic_filename(report.project_name, report.cycle_id)
    return ReportResult.from_text(html_text, filename, "html")
