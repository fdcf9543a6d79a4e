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
"""Serialize ReportData to JSON, HTML and Markdown.

Each generator renders only the sections enabled in ReportOptions and returns
a ReportResult holding the encoded bytes and the suggested file name.
"""

import html
import json
import logging
from dataclasses import asdict
from typing import Any, Callable, Dict, List

from cyclecheck.classification import format_number
from cyclecheck.constants import TOOL_NAME, TOOL_VERSION, UnsupportedFormatError
from cyclecheck.report_sections import (
    escape_md_cell,
    escape_md_text,
    render_circular_dependencies_html,
    render_circular_dependencies_md,
    render_fix_recommendations_html,
    render_fix_recommendations_md,
    render_health_score_html,
    render_health_score_md,
    render_version_conflicts_html,
    render_version_conflicts_md,
)
from cyclecheck.report_styles import ANALYSIS_REPORT_STYLES, COLLAPSIBLE_SECTIONS_SCRIPT
from cyclecheck.report_types import (
    ReportData,
    ReportFormat,
    ReportOptions,
    ReportResult,
    ReportSection,
    build_report_filename,
    utc_now_iso,
)

logger = logging.getLogger(__name__)


def generate_json_report(data: ReportData, options: ReportOptions) -> ReportResult:
    """Generate a pretty-printed JSON report.

    Only enabled sections are emitted. Metadata is included when
    options.include_metadata is set, with generated_at stamped at render time.
    """
    report: Dict[str, Any] = {}

    if options.include_metadata:
        metadata = asdict(data.metadata)
        metadata["tool_version"] = TOOL_VERSION
        metadata["generated_at"] = utc_now_iso()
        report["metadata"] = metadata
    if options.has_section(ReportSection.HEALTH_SCORE):
        report["health_score"] = asdict(data.health_score)
    if options.has_section(ReportSection.CIRCULAR_DEPENDENCIES):
        report["circular_dependencies"] = asdict(data.circular_dependencies)
    if options.has_section(ReportSection.VERSION_CONFLICTS):
        report["version_conflicts"] = asdict(data.version_conflicts)
    if options.has_section(ReportSection.FIX_RECOMMENDATIONS):
        report["fix_recommendations"] = asdict(data.fix_recommendations)

    text = json.dumps(report, indent=2, ensure_ascii=False)
    filename = build_report_filename(options.project_name, ReportFormat.JSON.value)
    return ReportResult.from_text(text, filename, ReportFormat.JSON.value)


def _html_sections(data: ReportData, options: ReportOptions) -> List[str]:
    sections = []
    if options.has_section(ReportSection.HEALTH_SCORE):
        sections.append(render_health_score_html(data.health_score))
    if options.has_section(ReportSection.CIRCULAR_DEPENDENCIES):
        sections.append(render_circular_dependencies_html(data.circular_dependencies))
    if options.has_section(ReportSection.VERSION_CONFLICTS):
        sections.append(render_version_conflicts_html(data.version_conflicts))
    if options.has_section(ReportSection.FIX_RECOMMENDATIONS):
        sections.append(render_fix_recommendations_html(data.fix_recommendations))
    return sections


def generate_html_report(data: ReportData, options: ReportOptions) -> ReportResult:
    """Generate a self-contained HTML report with inline styles and script."""
    project = html.escape(options.project_name)
    meta_items = []
    if options.include_timestamp:
        meta_items.append(f"<span>Generated: {html.escape(utc_now_iso())}</span>")
    if options.include_metadata:
        meta = data.metadata
        meta_items.append(f"<span>Packages: {meta.package_count}</span>")
        meta_items.append(f"<span>Duration: {html.escape(format_number(meta.analysis_duration))}ms</span>")

    text = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{project} - Dependency Analysis Report</title>
  <style>{ANALYSIS_REPORT_STYLES}</style>
</head>
<body>
  <div class="container">
    <header class="report-header">
      <div class="logo">{TOOL_NAME}</div>
      <h1>{project} - Dependency Analysis Report</h1>
      <div class="report-meta">{"".join(meta_items)}</div>
    </header>
{"".join(_html_sections(data, options))}
    <footer class="report-footer">
      Generated by {TOOL_NAME} v{TOOL_VERSION}
    </footer>
  </div>
  <script>{COLLAPSIBLE_SECTIONS_SCRIPT}</script>
</body>
</html>
"""
    filename = build_report_filename(options.project_name, ReportFormat.HTML.value)
    return ReportResult.from_text(text, filename, ReportFormat.HTML.value)


def generate_markdown_report(data: ReportData, options: ReportOptions) -> ReportResult:
    """Generate a GitHub-flavored Markdown report."""
    byline = f"Generated by {TOOL_NAME} v{TOOL_VERSION}"
    if options.include_timestamp:
        byline += f" on {utc_now_iso()}"
    parts = [f"# {escape_md_text(options.project_name)} - Dependency Analysis Report\n\n> {byline}\n"]

    if options.include_metadata:
        meta = data.metadata
        parts.append(
            "## Report Metadata\n\n"
            "| Property | Value |\n"
            "|----------|-------|\n"
            f"| Project | {escape_md_cell(meta.project_name)} |\n"
            f"| Packages Analyzed | {meta.package_count} |\n"
            f"| Analysis Duration | {format_number(meta.analysis_duration)}ms |\n"
            f"| Tool Version | {TOOL_VERSION} |\n"
        )

    if options.has_section(ReportSection.HEALTH_SCORE):
        parts.append(render_health_score_md(data.health_score))
    if options.has_section(ReportSection.CIRCULAR_DEPENDENCIES):
        parts.append(render_circular_dependencies_md(data.circular_dependencies))
    if options.has_section(ReportSection.VERSION_CONFLICTS):
        parts.append(render_version_conflicts_md(data.version_conflicts))
    if options.has_section(ReportSection.FIX_RECOMMENDATIONS):
        parts.append(render_fix_recommendations_md(data.fix_recommendations))

    text = "\n---\n\n".join(part.rstrip("\n") + "\n" for part in parts)
    filename = build_report_filename(options.project_name, ReportFormat.MARKDOWN.value)
    return ReportResult.from_text(text, filename, ReportFormat.MARKDOWN.value)


_GENERATORS: Dict[str, Callable[[ReportData, ReportOptions], ReportResult]] = {
    ReportFormat.JSON.value: generate_json_report,
    ReportFormat.HTML.value: generate_html_report,
    ReportFormat.MARKDOWN.value: generate_markdown_report,
}


def generate_report(data: ReportData, options: ReportOptions) -> ReportResult:
    """Render a report in options.format.

    Raises:
        UnsupportedFormatError: If options.format is not json, html or markdown
    """
    generator = _GENERATORS.get(options.format)
    if generator is None:
        raise UnsupportedFormatError(options.format)

    result = generator(data, options)
    logger.info("Generated %s report %s (%d bytes)", result.format, result.filename, result.size_bytes)
    return result
