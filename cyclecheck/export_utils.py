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
"""Export utilities for writing reports and dependency graphs to disk."""

import os
import json
import logging
from typing import Any, Iterable, List

import networkx as nx
from networkx.readwrite import json_graph

from cyclecheck.analysis_types import short_package_name
from cyclecheck.color_utils import print_error, print_success
from cyclecheck.constants import SUPPORTED_GRAPH_FORMATS, ReportExportError
from cyclecheck.graph_utils import extract_cycle_subgraph
from cyclecheck.report_types import ReportResult, sanitize_filename

logger = logging.getLogger(__name__)


def write_report_result(result: ReportResult, output_dir: str = ".") -> str:
    """Write a rendered report into output_dir under its suggested file name.

    Args:
        result: Rendered report
        output_dir: Target directory, created if missing

    Returns:
        Path of the written file

    Raises:
        ReportExportError: If the file cannot be written
    """
    path = os.path.join(output_dir, sanitize_filename(result.filename))
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(path, "wb") as f:
            f.write(result.content)
    except OSError as e:
        logger.error("Failed to write report %s: %s", path, e)
        print_error(f"Failed to write report to {path}: {e}")
        raise ReportExportError(f"Failed to write report to {path}: {e}") from e

    size_kb = result.size_bytes / 1024
    logger.info("Wrote %s report: %s (%.1f KB)", result.format, path, size_kb)
    print_success(f"Saved {result.format} report to {path} ({size_kb:.1f} KB)")
    return path


def write_json_file(filename: str, data: Any) -> None:
    """Write data as pretty-printed UTF-8 JSON.

    Raises:
        ReportExportError: If the file cannot be written
    """
    try:
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("Failed to write JSON file %s: %s", filename, e)
        print_error(f"Failed to write {filename}: {e}")
        raise ReportExportError(f"Failed to write {filename}: {e}") from e

    logger.info("Wrote JSON file %s", filename)
    print_success(f"Exported JSON to {filename}")


def export_cycle_graph(
    filename: str,
    directed_graph: "nx.DiGraph[Any]",
    cycles: Iterable[List[str]],
    cycle_only: bool = False,
) -> None:
    """Export a dependency graph for external visualization tools.

    Supports: GraphML (.graphml), GEXF (.gexf), node-link JSON (.json)

    Node attributes:
        - label: Short package name
        - in_cycle: Whether the package participates in a circular dependency
        - fan_in, fan_out: Number of dependents / dependencies

    Args:
        filename: Output filename (extension determines format)
        directed_graph: Dependency graph (edges point from dependent to dependency)
        cycles: Cycles whose members get in_cycle=True
        cycle_only: Export only the subgraph induced by cycle members

    Raises:
        ReportExportError: If the format is unsupported or the file cannot be written
    """
    ext = os.path.splitext(filename)[1].lower()
    if ext not in SUPPORTED_GRAPH_FORMATS:
        raise ReportExportError(f"Unsupported graph format: {ext or filename}. Use one of {', '.join(SUPPORTED_GRAPH_FORMATS)}")

    cycles = [list(cycle) for cycle in cycles]
    in_cycle = {package for cycle in cycles for package in cycle}

    G = extract_cycle_subgraph(directed_graph, cycles) if cycle_only else directed_graph.copy()
    for node in G.nodes():
        G.nodes[node]["label"] = short_package_name(node)
        G.nodes[node]["in_cycle"] = node in in_cycle
        G.nodes[node]["fan_in"] = directed_graph.in_degree(node)
        G.nodes[node]["fan_out"] = directed_graph.out_degree(node)

    try:
        if ext == ".graphml":
            nx.write_graphml(G, filename)
        elif ext == ".gexf":
            nx.write_gexf(G, filename)
        else:
            data = json_graph.node_link_data(G)
            with open(filename, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
    except OSError as e:
        logger.error("Failed to export graph: %s", e)
        print_error(f"Failed to export graph: {e}")
        raise ReportExportError(f"Failed to export graph to {filename}: {e}") from e

    logger.info("Exported dependency graph to %s (%d nodes, %d edges)", filename, G.number_of_nodes(), G.number_of_edges())
    print_success(f"Exported dependency graph to {filename}")
