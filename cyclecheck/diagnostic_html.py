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
"""Self-contained HTML rendering of a diagnostic report.

Every string that originates from upstream data (package names, file paths,
explanations, strategy text) is escaped before it reaches the markup.
"""

import html
import re
from typing import List

from cyclecheck.classification import format_number
from cyclecheck.constants import TOOL_NAME
from cyclecheck.diagnostic_types import (
    CyclePathVisualization,
    DiagnosticReport,
    ExecutiveSummary,
    FixStrategyGuide,
    ImpactAssessmentDetails,
    RelatedCycleInfo,
    RippleNode,
    RootCauseDetails,
)
from cyclecheck.report_styles import DIAGNOSTIC_REPORT_STYLES

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>\s*")

TOC_ENTRIES = [
    ("executive-summary", "Executive Summary"),
    ("cycle-path", "Cycle Path"),
    ("root-cause", "Root Cause Analysis"),
    ("fix-strategies", "Fix Strategies"),
    ("impact-assessment", "Impact Assessment"),
    ("related-cycles", "Related Cycles"),
]


def _e(value: object) -> str:
    return html.escape(str(value))


def _metric(value: object, label: str) -> str:
    return f'<div class="metric-card"><div class="metric-value">{_e(value)}</div><div class="metric-label">{_e(label)}</div></div>'


def _render_summary(summary: ExecutiveSummary) -> str:
    return f"""
  <section class="section" id="executive-summary">
    <h2>Executive Summary</h2>
    <p>
      <span class="severity-badge severity-{_e(summary.severity)}">{_e(summary.severity)}</span>
      <span class="effort-badge">Effort: {_e(summary.estimated_effort)}</span>
    </p>
    <p>{_e(summary.description)}</p>
    <div class="metric-grid">
      {_metric(summary.cycle_length, "Packages in Cycle")}
      {_metric(summary.affected_packages_count, "Affected Packages")}
    </div>
    <p><strong>Recommendation:</strong> {_e(summary.recommendation)}</p>
  </section>"""


def _render_cycle_path(path: CyclePathVisualization) -> str:
    svg = _XML_DECLARATION.sub("", path.svg_diagram)
    bp = path.breaking_point
    return f"""
  <section class="section" id="cycle-path">
    <h2>Cycle Path</h2>
    <div class="cycle-diagram">{svg}</div>
    <p><strong>Recommended breaking point:</strong> <code>{_e(bp.from_package)}</code> &rarr; <code>{_e(bp.to_package)}</code></p>
    <p>{_e(bp.reason)}</p>
    <pre class="code-block">{_e(path.ascii_diagram)}</pre>
  </section>"""


def _render_root_cause(root_cause: RootCauseDetails) -> str:
    parts = [
        f"""
  <section class="section" id="root-cause">
    <h2>Root Cause Analysis</h2>
    <p>{_e(root_cause.explanation)}</p>
    <div class="metric-grid">
      {_metric(format_number(root_cause.confidence_score) + "%", "Confidence")}
    </div>
    <p><strong>Originating package:</strong> <code>{_e(root_cause.originating_package)}</code></p>
    <p>{_e(root_cause.originating_reason)}</p>"""
    ]

    if root_cause.alternative_candidates:
        rows = "".join(
            f"<tr><td><code>{_e(c.package)}</code></td><td>{_e(c.reason)}</td><td>{_e(format_number(c.confidence))}%</td></tr>"
            for c in root_cause.alternative_candidates
        )
        parts.append(
            "\n    <h3>Alternative Candidates</h3>"
            "\n    <table><thead><tr><th>Package</th><th>Reason</th><th>Confidence</th></tr></thead>"
            f"<tbody>{rows}</tbody></table>"
        )

    if root_cause.code_references:
        refs = "\n".join(f"{ref.file}:{ref.line}  {ref.import_statement}" for ref in root_cause.code_references)
        parts.append(f'\n    <h3>Code References</h3>\n    <pre class="code-block">{_e(refs)}</pre>')

    parts.append("\n  </section>")
    return "".join(parts)


def _render_strategy(guide: FixStrategyGuide) -> str:
    pros = "".join(f"<li>{_e(p)}</li>" for p in guide.pros)
    cons = "".join(f"<li>{_e(c)}</li>" for c in guide.cons)

    steps = ""
    if guide.steps:
        items = []
        for step in guide.steps:
            item = f"<strong>{_e(step.title)}</strong><br>{_e(step.description)}"
            if step.file_path:
                item += f"<br><code>{_e(step.file_path)}</code>"
            if step.code_snippet:
                item += f'<pre class="code-block">{_e(step.code_snippet)}</pre>'
            items.append(f"<li>{item}</li>")
        steps = f'\n      <h4>Steps</h4>\n      <ol class="step-list">{"".join(items)}</ol>'

    snippets = ""
    if guide.code_snippets.before or guide.code_snippets.after:
        snippets = (
            "\n      <h4>Code Changes</h4>"
            f'\n      <p>Before:</p><pre class="code-block">{_e(guide.code_snippets.before)}</pre>'
            f'\n      <p>After:</p><pre class="code-block">{_e(guide.code_snippets.after)}</pre>'
        )

    return f"""
    <div class="strategy-card">
      <h3>{_e(guide.title)}</h3>
      <p>
        <span class="effort-badge">Effort: {_e(guide.estimated_effort)}</span>
        <span class="effort-badge">Time: {_e(guide.estimated_time)}</span>
        <span class="effort-badge">Suitability: {_e(format_number(guide.suitability_score))}/10</span>
      </p>
      <p>{_e(guide.description)}</p>
      <div class="pros-cons">
        <ul class="pros">{pros}</ul>
        <ul class="cons">{cons}</ul>
      </div>{steps}{snippets}
    </div>"""


def _render_fix_strategies(strategies: List[FixStrategyGuide]) -> str:
    if strategies:
        body = "".join(_render_strategy(guide) for guide in strategies)
    else:
        body = "\n    <p>No fix strategies available for this cycle.</p>"
    return f"""
  <section class="section" id="fix-strategies">
    <h2>Fix Strategies</h2>{body}
  </section>"""


def _render_ripple_node(node: RippleNode) -> str:
    children = ""
    if node.dependents:
        children = "<ul>" + "".join(_render_ripple_node(child) for child in node.dependents) + "</ul>"
    return f"<li><code>{_e(node.package)}</code>{children}</li>"


def _render_impact(impact: ImpactAssessmentDetails) -> str:
    indirect = ""
    if impact.indirect_dependents:
        items = "".join(f"<li><code>{_e(pkg)}</code></li>" for pkg in impact.indirect_dependents)
        indirect = f"\n    <h3>Indirect Dependents</h3>\n    <ul>{items}</ul>"

    direct = ", ".join(f"<code>{_e(pkg)}</code>" for pkg in impact.direct_participants)
    return f"""
  <section class="section" id="impact-assessment">
    <h2>Impact Assessment</h2>
    <p><span class="severity-badge severity-{_e(impact.risk_level)}">{_e(impact.risk_level)} risk</span></p>
    <div class="metric-grid">
      {_metric(impact.direct_participants_count, "Direct Participants")}
      {_metric(impact.indirect_dependents_count, "Indirect Dependents")}
      {_metric(impact.total_affected_count, "Total Affected")}
      {_metric(f"{impact.percentage_of_monorepo}%", "Of Monorepo")}
    </div>
    <p>{_e(impact.risk_explanation)}</p>
    <h3>Direct Participants</h3>
    <p>{direct}</p>{indirect}
    <h3>Ripple Effect</h3>
    <div class="ripple-tree"><ul>{_render_ripple_node(impact.ripple_effect_tree)}</ul></div>
  </section>"""


def _render_related(related: List[RelatedCycleInfo]) -> str:
    if not related:
        body = "\n    <p>No related cycles detected.</p>"
    else:
        rows = "".join(
            "<tr>"
            f"<td><code>{_e(info.cycle_id)}</code></td>"
            f"<td>{', '.join(f'<code>{_e(p)}</code>' for p in info.shared_packages)}</td>"
            f"<td>{info.overlap_percentage}%</td>"
            f"<td>{'✅ Yes' if info.recommend_fix_together else 'No'}</td>"
            f"<td>{_e(info.reason) if info.reason else '-'}</td>"
            "</tr>"
            for info in related
        )
        body = (
            "\n    <table><thead><tr><th>Cycle</th><th>Shared Packages</th><th>Overlap</th>"
            f"<th>Fix Together?</th><th>Reason</th></tr></thead><tbody>{rows}</tbody></table>"
        )
    return f"""
  <section class="section" id="related-cycles">
    <h2>Related Cycles</h2>{body}
  </section>"""


def render_diagnostic_html(report: DiagnosticReport) -> str:
    """Render a diagnostic report as a standalone HTML document.

    Args:
        report: Generated diagnostic report

    Returns:
        Complete HTML document with inline styles and inline SVG
    """
    toc = "".join(f'<li><a href="#{anchor}">{title}</a></li>' for anchor, title in TOC_ENTRIES)
    sections = "".join(
        [
            _render_summary(report.executive_summary),
            _render_cycle_path(report.cycle_path),
            _render_root_cause(report.root_cause),
            _render_fix_strategies(report.fix_strategies),
            _render_impact(report.impact_assessment),
            _render_related(report.related_cycles),
        ]
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Diagnostic Report - {_e(report.cycle_id)} - {_e(report.project_name)}</title>
  <style>{DIAGNOSTIC_REPORT_STYLES}</style>
</head>
<body>
  <header class="report-header">
    <h1>Circular Dependency Diagnostic Report</h1>
    <div class="subtitle">Project: {_e(report.project_name)} | Cycle: <code>{_e(report.cycle_id)}</code> | Generated: {_e(report.generated_at)}</div>
  </header>
  <nav class="toc">
    <h2>Contents</h2>
    <ul>{toc}</ul>
  </nav>{sections}
  <footer class="report-footer">
    Generated by {TOOL_NAME} v{_e(report.tool_version)} in {report.metadata.generation_duration_ms}ms | Report ID: {_e(report.id)}
  </footer>
</body>
</html>
"""
