#!/usr/bin/env python3
"""Tests for cyclecheck/report_types.py"""

from datetime import datetime, timedelta, timezone

import pytest

from cyclecheck.report_types import (
    DEFAULT_REPORT_SECTIONS,
    ReportOptions,
    ReportResult,
    ReportSection,
    build_diagnostic_filename,
    build_report_filename,
    get_health_score_rating,
    parse_sections,
    sanitize_filename,
    utc_date_stamp,
    utc_now_iso,
)

FIXED_TIME = datetime(2025, 3, 7, 9, 5, 3, 42000, tzinfo=timezone.utc)


class TestHealthScoreRating:
    """Tests for get_health_score_rating."""

    @pytest.mark.parametrize(
        "score,rating",
        [(100, "excellent"), (85, "excellent"), (84.9, "good"), (70, "good"), (50, "fair"), (30, "poor"), (29, "critical"), (0, "critical")],
    )
    def test_boundaries(self, score: float, rating: str) -> None:
        """Test rating boundaries are inclusive minimums."""
        assert get_health_score_rating(score) == rating


class TestSections:
    """Tests for parse_sections and ReportOptions."""

    def test_parse_names(self) -> None:
        """Test names combine into a flag."""
        sections = parse_sections(["health-score", "fix-recommendations"])
        assert sections == ReportSection.HEALTH_SCORE | ReportSection.FIX_RECOMMENDATIONS

    def test_parse_unknown(self) -> None:
        """Test unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown report section"):
            parse_sections(["health-score", "bogus"])

    def test_parse_empty(self) -> None:
        """Test no names means no sections."""
        assert parse_sections([]) == ReportSection.NONE

    def test_default_options(self) -> None:
        """Test the defaults enable every section."""
        options = ReportOptions()
        assert options.format == "json"
        assert options.sections == DEFAULT_REPORT_SECTIONS
        assert options.include_metadata is True
        assert options.include_timestamp is True
        for section in (
            ReportSection.HEALTH_SCORE,
            ReportSection.CIRCULAR_DEPENDENCIES,
            ReportSection.VERSION_CONFLICTS,
            ReportSection.FIX_RECOMMENDATIONS,
        ):
            assert options.has_section(section)

    def test_has_section(self) -> None:
        """Test disabled sections are reported as such."""
        options = ReportOptions(sections=ReportSection.HEALTH_SCORE)
        assert options.has_section(ReportSection.HEALTH_SCORE)
        assert not options.has_section(ReportSection.VERSION_CONFLICTS)


class TestTimestampsAndFilenames:
    """Tests for timestamps, file names and ReportResult."""

    def test_utc_now_iso(self) -> None:
        """Test the ISO format has milliseconds and a Z suffix."""
        assert utc_now_iso(FIXED_TIME) == "2025-03-07T09:05:03.042Z"

    def test_non_utc_input(self) -> None:
        """Test aware times in other zones are converted to UTC."""
        local = FIXED_TIME.astimezone(timezone(timedelta(hours=-10)))
        assert utc_date_stamp(local) == "2025-03-07"
        assert utc_now_iso(local) == "2025-03-07T09:05:03.042Z"

    def test_report_filename(self) -> None:
        """Test report file names per format."""
        assert build_report_filename("demo", "json", FIXED_TIME) == "demo-analysis-report-2025-03-07.json"
        assert build_report_filename("demo", "markdown", FIXED_TIME) == "demo-analysis-report-2025-03-07.md"

    def test_diagnostic_filename(self) -> None:
        """Test diagnostic file names."""
        assert build_diagnostic_filename("demo", "ui-api", FIXED_TIME) == "demo-diagnostic-ui-api-2025-03-07.html"

    def test_sanitize_filename(self) -> None:
        """Test path separators and reserved characters are replaced."""
        assert sanitize_filename("@app/ui:report?.md") == "@app_ui_report_.md"
        assert sanitize_filename("plain-name.json") == "plain-name.json"

    def test_result_from_text(self) -> None:
        """Test the size counts UTF-8 bytes."""
        result = ReportResult.from_text("→", "x.md", "markdown")
        assert result.content == "→".encode("utf-8")
        assert result.size_bytes == 3
