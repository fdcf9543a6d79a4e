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
"""Generate a diagnostic report for a circular dependency.

This script reads the JSON output of the dependency analyzer, picks one of the
detected circular dependencies and explains it: where the cycle runs, which
edge to break, the likely root cause, candidate fix strategies, how much of the
monorepo is affected and which other cycles share packages with it. The report
is printed as a terminal summary and exported as a self-contained HTML file.

Requirements:
    - Python 3.8+
    - networkx, numpy, colorama

Usage:
    cycleCheckDiagnose.py <analysis.json> [--cycle ID | --index N] [--output-dir DIR]
    cycleCheckDiagnose.py <analysis.json> --list

Exit Codes:
    0: Success
    1: Invalid arguments or analysis input
    2: Report generation or export failed
    130: Interrupted
"""

import sys
import logging
import argparse
from typing import List, Optional

__version__ = "0.1.0"
__author__ = "Mana Battery"

from cyclecheck.analysis_types import (
    AnalysisResult,
    CircularDependencyInfo,
    DependencyGraph,
    build_cycle_id,
    load_analysis_json,
    parse_analysis_result,
)
from cyclecheck.classification import bucket_upstream_severity, format_number
from cyclecheck.color_utils import (
    Colors,
    colored,
    print_info,
    print_severity,
    print_success,
    print_warning,
    should_use_color,
)
from cyclecheck.constants import (
    EXIT_KEYBOARD_INTERRUPT,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    AnalysisInputError,
    ArgumentError,
    ReportExportError,
    ReportGenerationError,
)
from cyclecheck.diagnostic_sections import find_cycle_index
from cyclecheck.diagnostic_session import DiagnosticSession
from cyclecheck.diagnostic_types import DiagnosticReport
from cyclecheck.export_utils import export_cycle_graph, write_json_file
from cyclecheck.graph_utils import build_dependency_digraph, count_ripple_nodes

# Export for tests
__all__ = ["EXIT_SUCCESS", "main", "select_cycle"]


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Explain a circular dependency found by the dependency analyzer.",
        epilog=f"Version {__version__}\n\nExamples:\n"
        "  %(prog)s analysis.json --list\n"
        "  %(prog)s analysis.json --cycle core-ui\n"
        "  %(prog)s analysis.json --index 2 --output-dir reports/ --dark\n"
        "  %(prog)s analysis.json --export-graph cycles.graphml --cycle-only\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("analysis_file", metavar="ANALYSIS_JSON", help="Analyzer output (AnalysisResult JSON)")

    selection = parser.add_mutually_exclusive_group()
    selection.add_argument("--cycle", metavar="ID", help="Cycle id to diagnose (e.g. core-ui)")
    selection.add_argument("--index", type=int, metavar="N", help="1-based position of the cycle to diagnose (default: 1)")
    selection.add_argument("--list", action="store_true", help="List detected cycles and exit")

    parser.add_argument("--project", metavar="NAME", default="project", help="Project name used in the report (default: project)")
    parser.add_argument("--output-dir", metavar="DIR", default=".", help="Directory for the HTML report (default: current directory)")
    parser.add_argument("--no-html", action="store_true", help="Do not export the HTML report")
    parser.add_argument("--json", metavar="FILE", help="Also write the diagnostic report as JSON")
    parser.add_argument("--dark", action="store_true", help="Render the cycle diagram with the dark palette")
    parser.add_argument("--export-graph", metavar="FILE", help="Export the dependency graph (.graphml, .gexf, .json)")
    parser.add_argument("--cycle-only", action="store_true", help="With --export-graph, export only packages taking part in cycles")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output (also off when stdout is not a terminal or NO_COLOR is set)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show the ripple tree and code references")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def setup_logging(log_level_str: str) -> None:
    """Configure logging settings.

    Args:
        log_level_str: Logging level as string (DEBUG, INFO, etc.)
    """
    logging.basicConfig(
        level=getattr(logging, log_level_str),
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def select_cycle(cycles: List[CircularDependencyInfo], cycle_id: Optional[str], index: Optional[int]) -> CircularDependencyInfo:
    """Pick the cycle to diagnose by id or 1-based index (first cycle by default).

    Raises:
        ArgumentError: If the id is unknown or the index is out of range
        AnalysisInputError: If the selected cycle has no packages
    """
    if cycle_id is not None:
        position = find_cycle_index(cycle_id, cycles)
        if position is None:
            raise ArgumentError(f"No cycle with id '{cycle_id}'. Use --list to see detected cycles")
    else:
        number = 1 if index is None else index
        if not 1 <= number <= len(cycles):
            raise ArgumentError(f"Cycle index {number} out of range (1-{len(cycles)})")
        position = number - 1

    if not cycles[position].packages:
        raise AnalysisInputError(f"Cycle {position + 1} in the analysis result has no packages")
    return cycles[position]


def print_cycle_list(cycles: List[CircularDependencyInfo]) -> None:
    """Print every detected cycle with its id and severity."""
    print(colored(f"Detected circular dependencies: {len(cycles)}", Colors.CYAN, Colors.BRIGHT))
    for number, cycle in enumerate(cycles, start=1):
        path = " → ".join(cycle.packages + cycle.packages[:1])
        print_severity(f"  {number:>3}. [{cycle.severity}] {build_cycle_id(cycle.cycle)}: {path}", bucket_upstream_severity(cycle.severity))


def print_report_summary(report: DiagnosticReport, verbose: bool) -> None:
    """Print the terminal summary of a diagnostic report."""
    summary = report.executive_summary
    impact = report.impact_assessment
    breaking = report.cycle_path.breaking_point

    print()
    print(colored(f"Diagnostic report: {report.cycle_id}", Colors.CYAN, Colors.BRIGHT))
    print_severity(f"Severity: {summary.severity.upper()}  |  Effort: {summary.estimated_effort}", summary.severity)
    print(summary.description)
    print()
    print(report.cycle_path.ascii_diagram)
    print()
    print(f"{Colors.BRIGHT}Break:{Colors.RESET} {breaking.from_package} → {breaking.to_package}")
    print(f"  {breaking.reason}")
    print(f"{Colors.BRIGHT}Root cause:{Colors.RESET} {report.root_cause.originating_package} ({format_number(report.root_cause.confidence_score)}% confidence)")

    if report.fix_strategies:
        print(f"{Colors.BRIGHT}Fix strategies:{Colors.RESET}")
        for guide in report.fix_strategies:
            print(f"  - {guide.title} (effort {guide.estimated_effort}, {guide.estimated_time}, suitability {format_number(guide.suitability_score)}/10)")

    print_severity(
        f"Impact: {impact.risk_level} risk, {impact.total_affected_count} packages affected ({impact.percentage_of_monorepo}% of monorepo)",
        impact.risk_level,
    )
    if verbose:
        print(f"  Ripple tree: {count_ripple_nodes(impact.ripple_effect_tree)} packages")
        for ref in report.root_cause.code_references:
            print(f"  {ref.file}:{ref.line}  {ref.import_statement}")

    together = [r for r in report.related_cycles if r.recommend_fix_together]
    print(f"Related cycles: {len(report.related_cycles)} ({len(together)} recommended to fix together)")
    print_info(f"Recommendation: {summary.recommendation}")


def run_diagnosis(args: argparse.Namespace, analysis: AnalysisResult) -> int:
    """Generate, print and export the diagnostic report for the selected cycle."""
    cycles = analysis.circular_dependencies
    graph = analysis.graph or DependencyGraph()
    cycle = select_cycle(cycles, args.cycle, args.index)
    total_packages = analysis.packages or len(graph.nodes)

    session = DiagnosticSession(graph, cycles, total_packages, args.project, is_dark_mode=args.dark)
    report = session.generate(cycle)
    if report is None:
        raise ReportGenerationError(session.error or "Failed to generate report")

    print_report_summary(report, args.verbose)

    if not args.no_html:
        path = session.export_html(args.output_dir)
        if path is None:
            raise ReportExportError(session.error or "Failed to export report")
    session.close()

    if args.json:
        write_json_file(args.json, report.to_dict())

    return EXIT_SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_arguments(argv)
    setup_logging(args.log_level)
    if not should_use_color(no_color=args.no_color):
        Colors.disable()

    analysis = parse_analysis_result(load_analysis_json(args.analysis_file))
    cycles = analysis.circular_dependencies

    if args.export_graph:
        G = build_dependency_digraph(analysis.graph or DependencyGraph())
        export_cycle_graph(args.export_graph, G, [c.packages for c in cycles], cycle_only=args.cycle_only)

    if not cycles:
        print_success("No circular dependencies detected.")
        return EXIT_SUCCESS

    if args.list:
        print_cycle_list(cycles)
        return EXIT_SUCCESS

    if analysis.graph is None:
        print_warning("Analysis result has no dependency graph; impact assessment uses precomputed data only", prefix=False)

    return run_diagnosis(args, analysis)


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
