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
"""Caller-facing state holders for report generation and export.

DiagnosticSession tracks one diagnostic report through generation, export and
closing. ReportExportSession tracks progress while an analysis report is
rendered and written.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from cyclecheck.analysis_types import CircularDependencyInfo, DependencyGraph
from cyclecheck.diagnostic_report import export_diagnostic_report_as_html, generate_diagnostic_report
from cyclecheck.diagnostic_types import DiagnosticReport
from cyclecheck.export_utils import write_report_result
from cyclecheck.report_serialization import generate_report
from cyclecheck.report_types import ReportData, ReportOptions
from cyclecheck.thresholds import DEFAULT_THRESHOLDS, DiagnosticThresholds

logger = logging.getLogger(__name__)

GENERATE_FAILED_MESSAGE = "Failed to generate report"
EXPORT_FAILED_MESSAGE = "Failed to export report"


class DiagnosticSession:
    """Generate, export and close diagnostic reports for one analysis.

    Attributes:
        report: Last successfully generated report, or None
        is_generating: True while a report is being generated
        is_open: True while a generated report is being shown
        error: Message of the last failure, or None
    """

    def __init__(
        self,
        graph: DependencyGraph,
        all_cycles: List[CircularDependencyInfo],
        total_packages: int,
        project_name: str,
        is_dark_mode: bool = False,
        thresholds: DiagnosticThresholds = DEFAULT_THRESHOLDS,
    ):
        self.graph = graph
        self.all_cycles = all_cycles
        self.total_packages = total_packages
        self.project_name = project_name
        self.is_dark_mode = is_dark_mode
        self.thresholds = thresholds

        self.report: Optional[DiagnosticReport] = None
        self.is_generating = False
        self.is_open = False
        self.error: Optional[str] = None

    def generate(self, cycle: CircularDependencyInfo) -> Optional[DiagnosticReport]:
        """Generate the report for a cycle.

        Failures never propagate: the message is stored in error, the session
        is closed and the previously generated report is kept.

        Returns:
            The new report, or None on failure
        """
        self.is_generating = True
        self.is_open = True
        self.error = None

        try:
            report = generate_diagnostic_report(
                cycle,
                self.graph,
                self.all_cycles,
                self.total_packages,
                self.project_name,
                is_dark_mode=self.is_dark_mode,
                thresholds=self.thresholds,
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Diagnostic report generation failed: %s", e)
            self.is_generating = False
            self.is_open = False
            self.error = str(e) or GENERATE_FAILED_MESSAGE
            return None

        self.report = report
        self.is_generating = False
        self.is_open = True
        return report

    def export_html(self, output_dir: str = ".") -> Optional[str]:
        """Write the current report as HTML into output_dir.

        Returns:
            Path of the written file, or None if there is no report or the export failed
        """
        if self.report is None:
            return None

        try:
            return write_report_result(export_diagnostic_report_as_html(self.report), output_dir)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Diagnostic report export failed: %s", e)
            self.error = str(e) or EXPORT_FAILED_MESSAGE
            return None

    def close(self) -> None:
        """Close the report view; the report itself is kept."""
        self.is_open = False


@dataclass(frozen=True)
class ExportProgress:
    """Progress of a report export."""

    is_exporting: bool = False
    progress: int = 0
    stage: str = "preparing"  # preparing | generating | complete


_IDLE = ExportProgress()


class ReportExportSession:
    """Render and write analysis reports while tracking progress.

    Args:
        on_progress: Optional callback invoked with every progress update
    """

    def __init__(self, on_progress: Optional[Callable[[ExportProgress], None]] = None):
        self.progress = _IDLE
        self._on_progress = on_progress

    def _set(self, progress: ExportProgress) -> None:
        self.progress = progress
        if self._on_progress is not None:
            self._on_progress(progress)

    def start_export(self, data: ReportData, options: ReportOptions, output_dir: str = ".") -> str:
        """Render data in options.format and write it into output_dir.

        Progress moves preparing (10) -> generating (30) -> 90 -> complete (100).
        On failure the progress is reset and the exception re-raised.

        Returns:
            Path of the written file
        """
        self._set(ExportProgress(is_exporting=True, progress=10, stage="preparing"))
        try:
            self._set(ExportProgress(is_exporting=True, progress=30, stage="generating"))
            result = generate_report(data, options)

            self._set(ExportProgress(is_exporting=True, progress=90, stage="generating"))
            path = write_report_result(result, output_dir)
        except Exception:
            self._set(_IDLE)
            raise

        self._set(ExportProgress(is_exporting=False, progress=100, stage="complete"))
        return path

    def cancel(self) -> None:
        """Reset progress to idle."""
        self._set(_IDLE)
