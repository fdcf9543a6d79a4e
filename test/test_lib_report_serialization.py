#!/usr/bin/env python3
"""Tests for cyclecheck/report_serialization.py"""

import json
import re
from typing import Any, Dict

import pytest

from cyclecheck.analysis_types import AnalysisResult, parse_analysis_result
from cyclecheck.constants import EXIT_INVALID_ARGS, TOOL_VERSION, UnsupportedFormatError
from cyclecheck.report_builder import build_report_data
from cyclecheck.report_serialization import (
    generate_html_report,
    generate_json_report,
    generate_markdown_report,
    generate_report,
)
from cyclecheck.report_types import ReportData, ReportOptions, ReportSection


@pytest.fixture
def report_data(analysis_result: AnalysisResult) -> ReportData:
    """Report data built from the sample analysis result."""
    return build_report_data(analysis_result, "demo")


def decode(content: bytes) -> Dict[str, Any]:
    """Decode a JSON report."""
    return json.loads(content.decode("utf-8"))


class TestJsonReport:
    """Tests for generate_json_report."""

    def test_all_sections(self, report_data: ReportData) -> None:
        """Test every section and the metadata are present."""
        result = generate_json_report(report_data, ReportOptions(project_name="demo"))
        report = decode(result.content)

        assert list(report) == ["metadata", "health_score", "circular_dependencies", "version_conflicts", "fix_recommendations"]
        assert report["metadata"]["tool_version"] == TOOL_VERSION
        assert report["metadata"]["package_count"] == 20
        assert report["health_score"]["overall"] == 72
        assert report["circular_dependencies"]["by_severity"]["critical"] == 1
        assert report["fix_recommendations"]["quick_wins"] == 1

    def test_pretty_printed(self, report_data: ReportData) -> None:
        """Test two-space indentation."""
        text = generate_json_report(report_data, ReportOptions()).content.decode("utf-8")
        assert text.startswith('{\n  "metadata"')

    def test_section_filter(self, report_data: ReportData) -> None:
        """Test disabled sections are omitted."""
        options = ReportOptions(sections=ReportSection.HEALTH_SCORE | ReportSection.VERSION_CONFLICTS)
        report = decode(generate_json_report(report_data, options).content)
        assert list(report) == ["metadata", "health_score", "version_conflicts"]

    def test_without_metadata(self, report_data: ReportData) -> None:
        """Test the metadata block can be omitted."""
        report = decode(generate_json_report(report_data, ReportOptions(include_metadata=False)).content)
        assert "metadata" not in report

    def test_non_ascii_preserved(self, analysis_result: AnalysisResult) -> None:
        """Test non-ASCII text is written as UTF-8, not escaped."""
        data = build_report_data(analysis_result, "проект")
        result = generate_json_report(data, ReportOptions(project_name="проект"))
        text = result.content.decode("utf-8")

        assert '"project_name": "проект"' in text
        assert "\\u" not in text
        assert result.filename.startswith("проект-analysis-report-")

    def test_result_fields(self, report_data: ReportData) -> None:
        """Test format, file name and size."""
        result = generate_json_report(report_data, ReportOptions(project_name="demo"))
        assert result.format == "json"
        assert re.fullmatch(r"demo-analysis-report-\d{4}-\d{2}-\d{2}\.json", result.filename)
        assert result.size_bytes == len(result.content)


class TestHtmlReport:
    """Tests for generate_html_report."""

    def test_document(self, report_data: ReportData) -> None:
        """Test the HTML shell, header and footer."""
        text = generate_html_report(report_data, ReportOptions(project_name="demo")).content.decode("utf-8")

        assert text.startswith("<!DOCTYPE html>")
        assert '<html lang="en">' in text
        assert "<title>demo - Dependency Analysis Report</title>" in text
        assert "<h1>demo - Dependency Analysis Report</h1>" in text
        assert "<span>Packages: 20</span>" in text
        assert "<span>Duration: 1234ms</span>" in text
        assert "Generated: " in text
        assert f"Generated by cycleCheck v{TOOL_VERSION}" in text
        assert "<script>" in text

    def test_sections_in_order(self, report_data: ReportData) -> None:
        """Test sections follow the fixed order."""
        text = generate_html_report(report_data, ReportOptions()).content.decode("utf-8")
        positions = [text.index(f"<h2>{title}</h2>") for title in ("Health Score", "Circular Dependencies", "Version Conflicts", "Fix Recommendations")]
        assert positions == sorted(positions)

    def test_toggles(self, report_data: ReportData) -> None:
        """Test timestamp, metadata and sections can be switched off."""
        options = ReportOptions(
            sections=ReportSection.FIX_RECOMMENDATIONS, include_metadata=False, include_timestamp=False
        )
        text = generate_html_report(report_data, options).content.decode("utf-8")

        assert "Generated: " not in text
        assert "<span>Packages: 20</span>" not in text
        assert "<h2>Health Score</h2>" not in text
        assert "<h2>Fix Recommendations</h2>" in text

    def test_project_escaped(self, report_data: ReportData) -> None:
        """Test the project name is escaped."""
        text = generate_html_report(report_data, ReportOptions(project_name="<x>")).content.decode("utf-8")
        assert "<x>" not in text
        assert "&lt;x&gt; - Dependency Analysis Report" in text


class TestMarkdownReport:
    """Tests for generate_markdown_report."""

    def test_header_and_metadata(self, report_data: ReportData) -> None:
        """Test the title, byline and metadata table."""
        text = generate_markdown_report(report_data, ReportOptions(project_name="demo")).content.decode("utf-8")

        assert text.startswith("# demo - Dependency Analysis Report\n\n> Generated by cycleCheck v")
        assert re.search(r"> Generated by cycleCheck v\S+ on \d{4}-\d{2}-\d{2}T", text)
        assert "## Report Metadata" in text
        assert "| Packages Analyzed | 20 |" in text
        assert "| Analysis Duration | 1234ms |" in text

    def test_sections_separated(self, report_data: ReportData) -> None:
        """Test parts are separated by horizontal rules."""
        text = generate_markdown_report(report_data, ReportOptions()).content.decode("utf-8")

        assert text.count("\n---\n\n") == 5
        assert text.index("## Health Score") < text.index("## Circular Dependencies")
        assert text.index("## Version Conflicts") < text.index("## Fix Recommendations")

    def test_minimal(self, report_data: ReportData) -> None:
        """Test a single section without metadata or timestamp."""
        options = ReportOptions(sections=ReportSection.HEALTH_SCORE, include_metadata=False, include_timestamp=False)
        text = generate_markdown_report(report_data, options).content.decode("utf-8")

        assert "> Generated by cycleCheck v" + TOOL_VERSION + "\n" in text
        assert "Report Metadata" not in text
        assert "## Health Score" in text
        assert "## Circular Dependencies" not in text
        assert text.count("\n---\n\n") == 1

    def test_file_extension(self, report_data: ReportData) -> None:
        """Test Markdown reports use the .md extension."""
        result = generate_markdown_report(report_data, ReportOptions())
        assert result.filename.endswith(".md")
        assert result.format == "markdown"


class TestGenerateReport:
    """Tests for generate_report."""

    @pytest.mark.parametrize("report_format", ["json", "html", "markdown"])
    def test_dispatch(self, report_data: ReportData, report_format: str) -> None:
        """Test each supported format is dispatched."""
        result = generate_report(report_data, ReportOptions(format=report_format))
        assert result.format == report_format

    def test_unsupported_format(self, report_data: ReportData) -> None:
        """Test unknown formats are rejected."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            generate_report(report_data, ReportOptions(format="pdf"))

        assert str(exc_info.value) == "Unknown format: pdf"
        assert exc_info.value.exit_code == EXIT_INVALID_ARGS


XSS = "<script>alert(1)</script>"


@pytest.fixture
def hostile_data() -> ReportData:
    """Report data whose package, strategy and conflict names carry markup."""
    document = {
        "healthScore": 50,
        "packages": 3,
        "circularDependencies": [
            {
                "cycle": [XSS, "b", XSS],
                "type": "direct",
                "severity": "critical",
                "fixStrategies": [
                    {
                        "type": "dependency-injection",
                        "name": XSS,
                        "description": XSS,
                        "suitability": 9,
                        "effort": "low",
                        "targetPackages": [XSS],
                    }
                ],
            }
        ],
        "versionConflicts": [
            {"packageName": XSS, "conflictingVersions": [{"version": XSS}], "severity": "warning", "resolution": XSS}
        ],
    }
    return build_report_data(parse_analysis_result(document), XSS)


class TestMarkupEscaping:
    """Tests that upstream strings never reach the output as markup."""

    def test_markdown(self, hostile_data: ReportData) -> None:
        """Test the Markdown report escapes project, package and strategy names."""
        text = generate_markdown_report(hostile_data, ReportOptions(project_name=XSS)).content.decode("utf-8")

        assert "<script>alert" not in text
        assert text.startswith("# &lt;script&gt;alert(1)&lt;/script&gt; - Dependency Analysis Report")
        assert "- **Path:** `&lt;script&gt;alert(1)&lt;/script&gt; → b → &lt;script&gt;" in text
        assert "#### 9. &lt;script&gt;alert(1)&lt;/script&gt; :zap: Quick Win" in text

    def test_html(self, hostile_data: ReportData) -> None:
        """Test the HTML report escapes project, package and strategy names."""
        text = generate_html_report(hostile_data, ReportOptions(project_name=XSS)).content.decode("utf-8")

        assert "<script>alert" not in text
        assert "&lt;script&gt;alert(1)&lt;/script&gt; - Dependency Analysis Report" in text
        assert "<code>&lt;script&gt;alert(1)&lt;/script&gt;</code>" in text


class TestEmptyJsonReport:
    """Tests for a JSON report with nothing selected."""

    def test_no_sections_no_metadata(self, report_data: ReportData) -> None:
        """Test disabling every section and the metadata yields an empty object."""
        options = ReportOptions(sections=ReportSection.NONE, include_metadata=False)
        assert decode(generate_json_report(report_data, options).content) == {}
