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
"""Per-section HTML and Markdown renderers for analysis reports.

HTML output escapes every upstream string with html.escape. Markdown output
escapes markup characters in every upstream string as well, and additionally
the table cell separator inside tables.
"""

import html
from typing import Dict, List

from cyclecheck.analysis_types import normalize_cycle
from cyclecheck.classification import format_number
from cyclecheck.report_types import (
    CircularDependencyReport,
    FixRecommendationReport,
    HealthScoreReport,
    VersionConflictReport,
)

# Report severity/risk label -> CSS class
_SEVERITY_CLASSES: Dict[str, str] = {
    "critical": "critical",
    "high": "high",
    "warning": "high",
    "medium": "medium",
    "info": "medium",
}

_RATING_EMOJI: Dict[str, str] = {
    "excellent": ":white_check_mark:",
    "good": ":heavy_check_mark:",
    "fair": ":warning:",
    "poor": ":x:",
    "critical": ":rotating_light:",
}


def _e(value: object) -> str:
    return html.escape(str(value))


def escape_md_text(value: object) -> str:
    """Escape markup characters in upstream text placed in Markdown.

    Quotes are kept as is.
    """
    return html.escape(str(value), quote=False)


def escape_md_cell(value: object) -> str:
    """Escape upstream text for a GFM table cell, including the cell separator."""
    return escape_md_text(value).replace("|", "\\|")


def severity_css_class(label: str) -> str:
    """Map an upstream severity or risk label to a CSS severity class."""
    return _SEVERITY_CLASSES.get(label, "low")


def _cycle_path_text(packages: List[str]) -> str:
    # Closed and open cycles render the same way
    members = normalize_cycle(packages)
    if not members:
        return ""
    return " → ".join(members + members[:1])


def _section(title: str, badge: str, content: str) -> str:
    return f"""
    <section class="section">
      <div class="section-header">
        <h2>{title}</h2>
        <span class="badge">{badge}</span>
      </div>
      <div class="section-content">{content}
      </div>
    </section>"""


# =============================================================================
# HTML
# =============================================================================


def render_health_score_html(data: HealthScoreReport) -> str:
    items = "".join(
        f"""
          <div class="breakdown-item">
            <div class="label">{_e(item.category)}</div>
            <div class="value">{_e(format_number(item.score))}</div>
            <div class="label">{item.weight}% weight</div>
          </div>"""
        for item in data.breakdown
    )
    overall = _e(format_number(data.overall))
    content = f"""
        <div class="health-score {_e(data.rating)}">
          <div class="score">{overall}</div>
          <div class="rating">{_e(data.rating)}</div>
        </div>
        <div class="breakdown-grid">{items}
        </div>"""
    return _section("Health Score", f"{overall}/100", content)


def render_circular_dependencies_html(data: CircularDependencyReport) -> str:
    if data.total_count == 0:
        return _section("Circular Dependencies", "0 found", "\n        <p>No circular dependencies detected.</p>")

    counts = data.by_severity
    severity_rows = "".join(
        f'<tr><td>{label}</td><td class="severity-{css}">{count}</td></tr>'
        for label, css, count in (
            ("Critical", "critical", counts.critical),
            ("High", "high", counts.high),
            ("Medium", "medium", counts.medium),
            ("Low", "low", counts.low),
        )
    )
    cycle_rows = "".join(
        f"""
          <tr>
            <td>{_e(cycle.id)}</td>
            <td><code>{_e(_cycle_path_text(cycle.packages))}</code></td>
            <td class="severity-{severity_css_class(cycle.severity)}">{_e(cycle.severity)}</td>
            <td>{_e(cycle.type)}</td>
          </tr>"""
        for cycle in data.cycles
    )
    content = f"""
        <table>
          <thead><tr><th>Severity</th><th>Count</th></tr></thead>
          <tbody>{severity_rows}</tbody>
        </table>
        <h3>Detected Cycles</h3>
        <table>
          <thead><tr><th>ID</th><th>Path</th><th>Severity</th><th>Type</th></tr></thead>
          <tbody>{cycle_rows}</tbody>
        </table>"""
    return _section("Circular Dependencies", f"{data.total_count} found", content)


def render_version_conflicts_html(data: VersionConflictReport) -> str:
    if data.total_count == 0:
        return _section("Version Conflicts", "0 found", "\n        <p>No version conflicts detected.</p>")

    rows = "".join(
        f"""
          <tr>
            <td><code>{_e(conflict.package_name)}</code></td>
            <td>{_e(", ".join(conflict.versions))}</td>
            <td class="severity-{severity_css_class(conflict.risk_level)}">{_e(conflict.risk_level)}</td>
            <td>{_e(conflict.recommended_version)}</td>
          </tr>"""
        for conflict in data.conflicts
    )
    content = f"""
        <table>
          <thead><tr><th>Package</th><th>Conflicting Versions</th><th>Risk</th><th>Recommended</th></tr></thead>
          <tbody>{rows}</tbody>
        </table>"""
    return _section("Version Conflicts", f"{data.total_count} found", content)


def render_fix_recommendations_html(data: FixRecommendationReport) -> str:
    if data.total_count == 0:
        return _section("Fix Recommendations", "None", "\n        <p>No fix recommendations at this time.</p>")

    cards = []
    for rec in data.recommendations:
        packages = ", ".join(f"<code>{_e(p)}</code>" for p in rec.affected_packages)
        badge = ' <span class="quick-win-badge">⚡ Quick Win</span>' if rec.quick_win else ""
        cards.append(
            f"""
        <div class="fix-card{' quick-win' if rec.quick_win else ''}">
          <div class="title">{_e(format_number(rec.priority))}. {_e(rec.title)}{badge}</div>
          <p>{_e(rec.description)}</p>
          <div class="meta">
            <span>Effort: {_e(rec.effort)}</span>
            <span>Impact: {_e(rec.impact)}</span>
            <span>Packages: {packages}</span>
          </div>
        </div>"""
        )
    badge_text = f"{data.total_count} total, {data.quick_wins} quick wins"
    return _section("Fix Recommendations", badge_text, "".join(cards))


# =============================================================================
# Markdown
# =============================================================================


def render_health_score_md(data: HealthScoreReport) -> str:
    emoji = _RATING_EMOJI.get(data.rating, "")
    lines = [
        "## Health Score",
        "",
        f"**Overall Score: {format_number(data.overall)}/100** {emoji} {escape_md_text(data.rating.upper())}",
        "",
        "### Score Breakdown",
        "",
        "| Category | Score | Weight |",
        "|----------|-------|--------|",
    ]
    for item in data.breakdown:
        lines.append(f"| {escape_md_cell(item.category)} | {format_number(item.score)} | {item.weight}% |")
    lines.append("")
    return "\n".join(lines) + "\n"


def render_circular_dependencies_md(data: CircularDependencyReport) -> str:
    lines = ["## Circular Dependencies", "", f"**Total: {data.total_count}**", ""]
    if data.total_count == 0:
        lines += ["> :tada: No circular dependencies detected!", ""]
        return "\n".join(lines) + "\n"

    counts = data.by_severity
    lines += [
        "### Summary by Severity",
        "",
        "| Severity | Count |",
        "|----------|-------|",
        f"| Critical | {counts.critical} |",
        f"| High | {counts.high} |",
        f"| Medium | {counts.medium} |",
        f"| Low | {counts.low} |",
        "",
        "### Detected Cycles",
        "",
    ]
    for cycle in data.cycles:
        lines += [
            f"#### Cycle: {escape_md_text(cycle.id)}",
            f"- **Severity:** {escape_md_text(cycle.severity)}",
            f"- **Type:** {escape_md_text(cycle.type)}",
            f"- **Path:** `{escape_md_text(_cycle_path_text(cycle.packages))}`",
            "",
        ]
    return "\n".join(lines) + "\n"


def render_version_conflicts_md(data: VersionConflictReport) -> str:
    lines = ["## Version Conflicts", "", f"**Total: {data.total_count}**", ""]
    if data.total_count == 0:
        lines += ["> :white_check_mark: No version conflicts detected!", ""]
        return "\n".join(lines) + "\n"

    lines += [
        "| Package | Conflicting Versions | Risk | Recommended |",
        "|---------|---------------------|------|-------------|",
    ]
    for conflict in data.conflicts:
        lines.append(
            f"| `{escape_md_cell(conflict.package_name)}` | {escape_md_cell(', '.join(conflict.versions))} "
            f"| {escape_md_cell(conflict.risk_level)} | {escape_md_cell(conflict.recommended_version)} |"
        )
    lines.append("")
    return "\n".join(lines) + "\n"


def render_fix_recommendations_md(data: FixRecommendationReport) -> str:
    lines = [
        "## Fix Recommendations",
        "",
        f"**Total Recommendations: {data.total_count}**",
        f"**Quick Wins: {data.quick_wins}** :zap:",
        "",
    ]
    if data.total_count == 0:
        lines += ["> No fix recommendations at this time.", ""]
        return "\n".join(lines) + "\n"

    lines += ["### Priority Fixes", ""]
    for rec in data.recommendations:
        badge = " :zap: Quick Win" if rec.quick_win else ""
        packages = ", ".join(f"`{escape_md_text(p)}`" for p in rec.affected_packages)
        lines += [
            f"#### {format_number(rec.priority)}. {escape_md_text(rec.title)}{badge}",
            "",
            escape_md_text(rec.description),
            "",
            f"- **Effort:** {escape_md_text(rec.effort)}",
            f"- **Impact:** {escape_md_text(rec.impact)}",
            f"- **Affected Packages:** {packages}",
            "",
        ]
    return "\n".join(lines) + "\n"
