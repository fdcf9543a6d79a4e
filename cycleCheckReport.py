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
"""Render a dependency analysis result as a JSON, HTML or Markdown report.

This script reads analyzer output in either of its two shapes (a full analysis
result or a stored analysis record), normalizes it into report data and writes
a shareable report containing the selected sections: health score, circular
dependencies, version conflicts and fix recommendations.

Requirements:
    - Python 3.8+
    - networkx, numpy, colorama

Usage:
    cycleCheckReport.py <analysis.json> [--format json|html|markdown] [--sections LIST] [--output-dir DIR]

Exit Codes:
    0: Success
    1: Invalid arguments, unknown format or invalid analysis input
    2: Report export failed
    130: Interrupted
"""

import sys
import logging
import argparse
from typing import List, Optional

__version__ = "0.1.0"
__author__ = "Mana Battery"

from cyclecheck.analysis_types import (
    is_comprehensive_document,
    load_analysis_json,
    parse_analysis_result,
    parse_comprehensive_result,
)
from cyclecheck.color_utils import Colors, print_error, print_info, print_warning, progress_bar, should_use_color
from cyclecheck.constants import (
    EXIT_KEYBOARD_INTERRUPT,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    SUPPORTED_REPORT_FORMATS,
    ArgumentError,
    UnsupportedFormatError,
)
from cyclecheck.diagnostic_session import ExportProgress, ReportExportSession
from cyclecheck.report_builder import build_report_data, build_report_data_from_comprehensive
from cyclecheck.report_types import SECTION_NAMES, ReportData, ReportOptions, ReportSection, parse_sections

# Export for tests
__all__ = ["EXIT_SUCCESS", "main", "build_options", "load_report_data"]


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a dependency analysis result as a shareable report.",
        epilog=f"Version {__version__}\n\nExamples:\n"
        "  %(prog)s analysis.json\n"
        "  %(prog)s analysis.json --format html --output-dir reports/\n"
        "  %(prog)s analysis.json --format markdown --sections health-score,circular-dependencies\n"
        "  %(prog)s record.json --format json --no-metadata\n\n"
        f"Sections: {', '.join(SECTION_NAMES)}\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("analysis_file", metavar="ANALYSIS_JSON", help="Analyzer output (AnalysisResult or analysis record JSON)")
    parser.add_argument("--format", "-f", default="json", help=f"Report format: {', '.join(SUPPORTED_REPORT_FORMATS)} (default: json)")
    parser.add_argument("--sections", metavar="LIST", help="Comma-separated sections to include (default: all)")
    parser.add_argument("--project", metavar="NAME", default="project", help="Project name used in the report (default: project)")
    parser.add_argument("--output-dir", metavar="DIR", default=".", help="Directory for the report file (default: current directory)")
    parser.add_argument("--no-metadata", action="store_true", help="Omit the report metadata block")
    parser.add_argument("--no-timestamp", action="store_true", help="Omit the generation time from the report header")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output (also off when stdout is not a terminal or NO_COLOR is set)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show export progress")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def setup_logging(log_level_str: str) -> None:
    """Configure logging settings."""
    logging.basicConfig(
        level=getattr(logging, log_level_str),
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_options(args: argparse.Namespace) -> ReportOptions:
    """Build report options from parsed arguments.

    Raises:
        ArgumentError: If a section name is unknown or no section is selected
    """
    sections = ReportOptions().sections
    if args.sections:
        names = [name.strip() for name in args.sections.split(",") if name.strip()]
        try:
            sections = parse_sections(names)
        except ValueError as e:
            raise ArgumentError(f"{e}. Valid sections: {', '.join(SECTION_NAMES)}") from e
        if sections == ReportSection.NONE:
            raise ArgumentError("No report sections selected")

    return ReportOptions(
        format=args.format.lower(),
        sections=sections,
        include_metadata=not args.no_metadata,
        include_timestamp=not args.no_timestamp,
        project_name=args.project,
    )


def load_report_data(path: str, project_name: str) -> ReportData:
    """Load analyzer output and build report data from whichever shape it has."""
    document = load_analysis_json(path)
    if is_comprehensive_document(document):
        logging.debug("Reading %s as an analysis record", path)
        return build_report_data_from_comprehensive(parse_comprehensive_result(document), project_name)
    return build_report_data(parse_analysis_result(document), project_name)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_arguments(argv)
    setup_logging(args.log_level)
    if not should_use_color(no_color=args.no_color):
        Colors.disable()

    options = build_options(args)
    data = load_report_data(args.analysis_file, options.project_name)

    def show_progress(progress: ExportProgress) -> None:
        print_info(f"{progress_bar(progress.progress, 100, width=30, color=Colors.GREEN)} {progress.stage}")

    session = ReportExportSession(on_progress=show_progress if args.verbose else None)
    try:
        session.start_export(data, options, args.output_dir)
    except UnsupportedFormatError as e:
        print_error(str(e))
        print_warning(f"Supported formats: {', '.join(SUPPORTED_REPORT_FORMATS)}", prefix=False)
        return e.exit_code

    return EXIT_SUCCESS


if __name__ == "__main__":
    from cyclecheck.constants import CycleCheckError

    try:
        exit_code = main()
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print_warning("Interrupted.", prefix=False)
        sys.exit(EXIT_KEYBOARD_INTERRUPT)
    except CycleCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)
    except Exception as e:  # pylint: disable=broad-exception-caught
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)
