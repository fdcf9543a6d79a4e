#!/usr/bin/env python3
"""Tests for cyclecheck/diagnostic_session.py"""

from pathlib import Path
from typing import List

import pytest

from cyclecheck.analysis_types import AnalysisResult, CircularDependencyInfo, DependencyGraph, parse_circular_dependency
from cyclecheck.constants import UnsupportedFormatError
from cyclecheck.diagnostic_session import (
    GENERATE_FAILED_MESSAGE,
    DiagnosticSession,
    ExportProgress,
    ReportExportSession,
)
from cyclecheck.report_builder import build_report_data
from cyclecheck.report_types import ReportOptions


@pytest.fixture
def session(sample_graph: DependencyGraph, all_cycles: List[CircularDependencyInfo]) -> DiagnosticSession:
    """Diagnostic session over the sample analysis."""
    return DiagnosticSession(sample_graph, all_cycles, 20, "demo")


class TestDiagnosticSession:
    """Tests for DiagnosticSession."""

    def test_initial_state(self, session: DiagnosticSession) -> None:
        """Test a new session is idle."""
        assert session.report is None
        assert session.is_generating is False
        assert session.is_open is False
        assert session.error is None

    def test_generate(self, session: DiagnosticSession, triangle_cycle: CircularDependencyInfo) -> None:
        """Test a successful generation opens the session."""
        report = session.generate(triangle_cycle)

        assert report is not None
        assert session.report is report
        assert report.cycle_id == "ui-api-auth"
        assert session.is_generating is False
        assert session.is_open is True
        assert session.error is None

    def test_generate_failure_keeps_previous_report(
        self, session: DiagnosticSession, triangle_cycle: CircularDependencyInfo
    ) -> None:
        """Test a failure records the error and keeps the last report."""
        first = session.generate(triangle_cycle)
        result = session.generate(parse_circular_dependency({"cycle": []}))

        assert result is None
        assert session.report is first
        assert session.is_open is False
        assert session.is_generating is False
        assert session.error == "Cannot diagnose an empty cycle"

    def test_generate_failure_without_message(
        self, session: DiagnosticSession, triangle_cycle: CircularDependencyInfo, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test an exception without a message falls back to the generic text."""

        def fail(*args: object, **kwargs: object) -> None:
            raise RuntimeError()

        monkeypatch.setattr("cyclecheck.diagnostic_session.generate_diagnostic_report", fail)
        assert session.generate(triangle_cycle) is None
        assert session.error == GENERATE_FAILED_MESSAGE

    def test_dark_mode(self, sample_graph: DependencyGraph, triangle_cycle: CircularDependencyInfo) -> None:
        """Test the dark mode flag reaches the diagram."""
        session = DiagnosticSession(sample_graph, [triangle_cycle], 20, "demo", is_dark_mode=True)
        report = session.generate(triangle_cycle)
        assert report is not None
        assert 'fill="#1f2937"' in report.cycle_path.svg_diagram

    def test_export_without_report(self, session: DiagnosticSession, tmp_path: Path) -> None:
        """Test exporting before generating is a no-op."""
        assert session.export_html(str(tmp_path)) is None
        assert list(tmp_path.iterdir()) == []

    def test_export_html(self, session: DiagnosticSession, triangle_cycle: CircularDependencyInfo, tmp_path: Path) -> None:
        """Test the report is written as HTML."""
        session.generate(triangle_cycle)
        path = session.export_html(str(tmp_path))

        assert path is not None
        assert Path(path).name.startswith("demo-diagnostic-ui-api-auth-")
        assert Path(path).read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

    def test_export_failure(self, session: DiagnosticSession, triangle_cycle: CircularDependencyInfo, tmp_path: Path) -> None:
        """Test an export failure is recorded, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        session.generate(triangle_cycle)

        assert session.export_html(str(blocker)) is None
        assert session.error is not None
        assert session.report is not None

    def test_close(self, session: DiagnosticSession, triangle_cycle: CircularDependencyInfo) -> None:
        """Test closing keeps the report."""
        session.generate(triangle_cycle)
        session.close()

        assert session.is_open is False
        assert session.report is not None


class TestReportExportSession:
    """Tests for ReportExportSession."""

    def test_progress_sequence(self, analysis_result: AnalysisResult, tmp_path: Path) -> None:
        """Test progress moves through every stage."""
        updates: List[ExportProgress] = []
        export = ReportExportSession(on_progress=updates.append)
        path = export.start_export(build_report_data(analysis_result, "demo"), ReportOptions(project_name="demo"), str(tmp_path))

        assert Path(path).exists()
        assert [(u.progress, u.stage, u.is_exporting) for u in updates] == [
            (10, "preparing", True),
            (30, "generating", True),
            (90, "generating", True),
            (100, "complete", False),
        ]
        assert export.progress == ExportProgress(is_exporting=False, progress=100, stage="complete")

    def test_failure_resets(self, analysis_result: AnalysisResult, tmp_path: Path) -> None:
        """Test a failure resets progress and propagates."""
        export = ReportExportSession()
        with pytest.raises(UnsupportedFormatError):
            export.start_export(build_report_data(analysis_result, "demo"), ReportOptions(format="pdf"), str(tmp_path))

        assert export.progress == ExportProgress()
        assert list(tmp_path.iterdir()) == []

    def test_cancel(self) -> None:
        """Test cancel returns to idle."""
        updates: List[ExportProgress] = []
        export = ReportExportSession(on_progress=updates.append)
        export.cancel()

        assert export.progress.is_exporting is False
        assert export.progress.progress == 0
        assert updates == [ExportProgress()]
