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
"""Type definitions for upstream analysis data.

The circular dependency detector and the dependency graph builder run upstream
and hand their results over as camelCase JSON documents. This module parses those
documents once, at the boundary, into immutable dataclasses. Everything downstream
works on these objects and never touches the raw dictionaries.

Missing optional keys never raise; they fall back to empty values. A document
that is structurally unusable (not an object, no cycle list) raises
AnalysisInputError.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from cyclecheck.constants import AnalysisInputError

logger = logging.getLogger(__name__)


def _number(value: Any, default: Union[int, float] = 0) -> Union[int, float]:
    """Coerce a JSON number, collapsing integral floats to int."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _dict_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _optional_dict(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


# =============================================================================
# Cycle helpers
# =============================================================================


def normalize_cycle(packages: List[str]) -> List[str]:
    """Drop the closing repeat from a cycle given as [a, b, c, a].

    Open cycles ([a, b, c]) are returned unchanged (as a copy).
    """
    if len(packages) > 1 and packages[-1] == packages[0]:
        return list(packages[:-1])
    return list(packages)


def short_package_name(package: str) -> str:
    """Return the final path segment of a package name (@scope/ui -> ui)."""
    return package.split("/")[-1] or package


def build_cycle_id(packages: List[str]) -> str:
    """Build the stable identifier of a cycle, e.g. "a-b-c".

    The identifier is the same whether or not the cycle is given closed.
    """
    return "-".join(short_package_name(p) for p in normalize_cycle(packages))


# =============================================================================
# Circular dependency records
# =============================================================================


@dataclass(frozen=True)
class ImportTrace:
    """Source location of an import that creates one edge of a cycle.

    Attributes:
        from_package: Package containing the import
        to_package: Package being imported
        file_path: File containing the import statement
        line_number: Line of the import statement
        statement: The import statement text
        import_type: Kind of import (esm-named, require, dynamic, ...)
        symbols: Imported symbol names when known
    """

    from_package: str
    to_package: str
    file_path: str
    line_number: int
    statement: str
    import_type: str = ""
    symbols: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RootCauseEdge:
    """One dependency edge in a root cause chain."""

    from_package: str
    to_package: str
    edge_type: str = ""
    critical: bool = False


@dataclass(frozen=True)
class RootCauseAnalysis:
    """Upstream attribution of which package introduced a cycle.

    Attributes:
        originating_package: Package most likely responsible for the cycle
        problematic_dependency: The dependency edge that introduced the cycle
        confidence: Confidence score 0-100
        explanation: Human readable explanation
        chain: Dependency chain that forms the cycle
        critical_edge: Edge recommended for breaking the cycle, if any
    """

    originating_package: str
    problematic_dependency: RootCauseEdge
    confidence: Union[int, float]
    explanation: str
    chain: List[RootCauseEdge] = field(default_factory=list)
    critical_edge: Optional[RootCauseEdge] = None


@dataclass(frozen=True)
class FixStep:
    """Single step of a fix guide."""

    number: int
    title: str
    description: str
    file_path: Optional[str] = None
    code_before: Optional[str] = None
    code_after: Optional[str] = None


@dataclass(frozen=True)
class FixGuide:
    """Step-by-step guide attached to a fix strategy."""

    title: str
    summary: str
    steps: List[FixStep] = field(default_factory=list)
    estimated_time: Optional[str] = None


@dataclass(frozen=True)
class ImportDiff:
    """Import changes in one file, part of a before/after explanation."""

    file_path: str
    package_name: str
    imports_to_remove: List[str] = field(default_factory=list)
    imports_to_add: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class FixStrategy:
    """Upstream recommendation for resolving a cycle.

    Attributes:
        strategy_type: extract-module, dependency-injection or boundary-refactoring
        name: Display name
        description: What the strategy does
        suitability: Suitability score 1-10
        effort: low, medium or high
        pros: Advantages
        cons: Disadvantages
        recommended: Whether upstream marked this as the recommended strategy
        target_packages: Packages the strategy touches
        guide: Optional step-by-step guide
        import_diffs: Optional import changes from the before/after explanation
    """

    strategy_type: str
    name: str
    description: str
    suitability: Union[int, float]
    effort: str
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)
    recommended: bool = False
    target_packages: List[str] = field(default_factory=list)
    guide: Optional[FixGuide] = None
    import_diffs: List[ImportDiff] = field(default_factory=list)


@dataclass(frozen=True)
class IndirectDependent:
    """Package that depends on a cycle through one or more hops."""

    package_name: str
    depends_on: str
    distance: int
    dependency_path: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RippleLayer:
    """Packages at the same distance from a cycle."""

    distance: int
    packages: List[str] = field(default_factory=list)
    count: int = 0


@dataclass(frozen=True)
class RippleEffect:
    """Layered view of how far a cycle's impact spreads."""

    layers: List[RippleLayer] = field(default_factory=list)
    total_layers: int = 0


@dataclass(frozen=True)
class ImpactAssessment:
    """Precomputed impact of a cycle, supplied by the upstream analyzer.

    Attributes:
        direct_participants: Packages in the cycle
        indirect_dependents: Packages depending on the cycle
        total_affected: Number of affected packages
        affected_percentage: Affected share of the monorepo as a fraction (0-1)
        risk_level: critical, high, medium or low
        risk_explanation: Human readable explanation of the risk
        ripple_effect: Optional layered ripple data
    """

    direct_participants: List[str]
    indirect_dependents: List[IndirectDependent]
    total_affected: int
    affected_percentage: float
    risk_level: str
    risk_explanation: str
    ripple_effect: Optional[RippleEffect] = None


@dataclass(frozen=True, eq=False)
class CircularDependencyInfo:
    """A detected circular dependency with optional enrichments.

    Instances compare by identity so that a cycle can be told apart from a
    value-equal duplicate in the list of all cycles.

    Attributes:
        cycle: Ordered package names, closed ([a, b, a]) or open ([a, b])
        cycle_type: direct or indirect
        severity: critical, warning or info
        depth: Cycle depth reported upstream
        complexity: Complexity score reported upstream
        priority_score: Fix priority score (0 when absent)
        impact: Free text impact description
        root_cause: Optional root cause attribution
        import_traces: Import statements forming each edge
        fix_strategies: Recommended fix strategies, best first
        impact_assessment: Optional precomputed impact
    """

    cycle: List[str]
    cycle_type: str = "indirect"
    severity: str = "info"
    depth: int = 0
    complexity: Union[int, float] = 0
    priority_score: Union[int, float] = 0
    impact: str = ""
    root_cause: Optional[RootCauseAnalysis] = None
    import_traces: List[ImportTrace] = field(default_factory=list)
    fix_strategies: List[FixStrategy] = field(default_factory=list)
    impact_assessment: Optional[ImpactAssessment] = None

    @property
    def packages(self) -> List[str]:
        """Cycle packages without the closing repeat."""
        return normalize_cycle(self.cycle)


# =============================================================================
# Graph and analysis results
# =============================================================================


@dataclass(frozen=True)
class DependencyEdge:
    """Directed dependency between two workspace packages."""

    from_package: str
    to_package: str
    edge_type: str = "production"
    version_range: str = ""


@dataclass(frozen=True)
class PackageNode:
    """Workspace package as seen by the dependency graph."""

    name: str
    version: str = ""
    path: str = ""
    dependencies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DependencyGraph:
    """Read-only dependency graph of the workspace.

    Attributes:
        nodes: Packages keyed by name
        edges: Dependency edges in upstream order
        root_path: Workspace root directory
        workspace_type: npm, yarn, pnpm, ...
    """

    nodes: Dict[str, PackageNode] = field(default_factory=dict)
    edges: List[DependencyEdge] = field(default_factory=list)
    root_path: str = ""
    workspace_type: str = ""


@dataclass(frozen=True)
class ConflictingVersion:
    """One of the versions involved in a version conflict."""

    version: str
    packages: List[str] = field(default_factory=list)
    is_breaking: bool = False


@dataclass(frozen=True)
class VersionConflictInfo:
    """External dependency required at incompatible versions.

    Attributes:
        package_name: Name of the conflicting dependency
        conflicting_versions: Versions in use
        severity: Upstream severity (critical/warning/info) or risk level
            (critical/high/medium/low) depending on the result shape
        resolution: Recommended resolution or version
        impact: Free text impact description
    """

    package_name: str
    conflicting_versions: List[ConflictingVersion] = field(default_factory=list)
    severity: str = ""
    resolution: str = ""
    impact: str = ""


@dataclass(frozen=True)
class HealthScoreFactor:
    """Weighted factor contributing to the health score."""

    name: str
    score: Union[int, float]
    weight: float
    description: str = ""


@dataclass(frozen=True)
class HealthScoreDetails:
    """Detailed health score with its factor breakdown."""

    overall: Union[int, float]
    rating: str = ""
    factors: List[HealthScoreFactor] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Result of a dependency analysis run.

    Attributes:
        health_score: Overall health score 0-100
        packages: Number of packages analyzed
        circular_dependencies: Detected cycles
        version_conflicts: Detected version conflicts
        health_score_details: Optional factor breakdown
        graph: Optional dependency graph
        duration_ms: Analysis duration in milliseconds
    """

    health_score: Union[int, float]
    packages: int
    circular_dependencies: List[CircularDependencyInfo] = field(default_factory=list)
    version_conflicts: List[VersionConflictInfo] = field(default_factory=list)
    health_score_details: Optional[HealthScoreDetails] = None
    graph: Optional[DependencyGraph] = None
    duration_ms: Union[int, float] = 0


@dataclass(frozen=True)
class ComprehensiveAnalysisResult:
    """Analysis record as stored by the analysis service.

    The health score arrives either as a plain number or as a structured object,
    both shapes are kept as given.

    Attributes:
        analysis_id: Identifier of the analysis run
        status: Status of the analysis run
        health_score: Number, structured details, or None when absent
        summary_total_packages: Package count from the summary block
        summary_health_score: Health score from the summary block
        circular_dependencies: Detected cycles
        version_conflicts: Detected version conflicts (severity holds the risk level)
    """

    analysis_id: str = ""
    status: str = ""
    health_score: Union[int, float, HealthScoreDetails, None] = None
    summary_total_packages: Optional[int] = None
    summary_health_score: Optional[Union[int, float]] = None
    circular_dependencies: List[CircularDependencyInfo] = field(default_factory=list)
    version_conflicts: List[VersionConflictInfo] = field(default_factory=list)


# =============================================================================
# Parsing
# =============================================================================


def _parse_root_cause_edge(data: Dict[str, Any]) -> RootCauseEdge:
    return RootCauseEdge(
        from_package=str(data.get("from", "")),
        to_package=str(data.get("to", "")),
        edge_type=str(data.get("type", "")),
        critical=bool(data.get("critical", False)),
    )


def _parse_root_cause(data: Dict[str, Any]) -> RootCauseAnalysis:
    critical_edge = _optional_dict(data.get("criticalEdge"))
    return RootCauseAnalysis(
        originating_package=str(data.get("originatingPackage", "")),
        problematic_dependency=_parse_root_cause_edge(_optional_dict(data.get("problematicDependency")) or {}),
        confidence=_number(data.get("confidence")),
        explanation=str(data.get("explanation", "")),
        chain=[_parse_root_cause_edge(edge) for edge in _dict_list(data.get("chain"))],
        critical_edge=_parse_root_cause_edge(critical_edge) if critical_edge else None,
    )


def _parse_import_trace(data: Dict[str, Any]) -> ImportTrace:
    return ImportTrace(
        from_package=str(data.get("fromPackage", "")),
        to_package=str(data.get("toPackage", "")),
        file_path=str(data.get("filePath", "")),
        line_number=int(_number(data.get("lineNumber"))),
        statement=str(data.get("statement", "")),
        import_type=str(data.get("importType", "")),
        symbols=_string_list(data.get("symbols")),
    )


def _code_of(sample: Any) -> Optional[str]:
    sample = _optional_dict(sample)
    if sample is None or sample.get("code") is None:
        return None
    return str(sample["code"])


def _parse_fix_guide(data: Dict[str, Any]) -> FixGuide:
    steps = []
    for step in _dict_list(data.get("steps")):
        file_path = step.get("filePath")
        steps.append(
            FixStep(
                number=int(_number(step.get("number"))),
                title=str(step.get("title", "")),
                description=str(step.get("description", "")),
                file_path=str(file_path) if file_path is not None else None,
                code_before=_code_of(step.get("codeBefore")),
                code_after=_code_of(step.get("codeAfter")),
            )
        )
    estimated_time = data.get("estimatedTime")
    return FixGuide(
        title=str(data.get("title", "")),
        summary=str(data.get("summary", "")),
        steps=steps,
        estimated_time=str(estimated_time) if estimated_time is not None else None,
    )


def _statements(value: Any) -> List[str]:
    return [str(item.get("statement", "")) for item in _dict_list(value)]


def _parse_fix_strategy(data: Dict[str, Any]) -> FixStrategy:
    guide = _optional_dict(data.get("guide"))
    explanation = _optional_dict(data.get("beforeAfterExplanation")) or {}
    import_diffs = [
        ImportDiff(
            file_path=str(diff.get("filePath", "")),
            package_name=str(diff.get("packageName", "")),
            imports_to_remove=_statements(diff.get("importsToRemove")),
            imports_to_add=_statements(diff.get("importsToAdd")),
        )
        for diff in _dict_list(explanation.get("importDiffs"))
    ]
    return FixStrategy(
        strategy_type=str(data.get("type", "")),
        name=str(data.get("name", "")),
        description=str(data.get("description", "")),
        suitability=_number(data.get("suitability")),
        effort=str(data.get("effort", "")),
        pros=_string_list(data.get("pros")),
        cons=_string_list(data.get("cons")),
        recommended=bool(data.get("recommended", False)),
        target_packages=_string_list(data.get("targetPackages")),
        guide=_parse_fix_guide(guide) if guide else None,
        import_diffs=import_diffs,
    )


def _parse_impact_assessment(data: Dict[str, Any]) -> ImpactAssessment:
    ripple = _optional_dict(data.get("rippleEffect"))
    ripple_effect = None
    if ripple is not None:
        layers = [
            RippleLayer(
                distance=int(_number(layer.get("distance"))),
                packages=_string_list(layer.get("packages")),
                count=int(_number(layer.get("count"))),
            )
            for layer in _dict_list(ripple.get("layers"))
        ]
        ripple_effect = RippleEffect(layers=layers, total_layers=int(_number(ripple.get("totalLayers"), len(layers))))

    return ImpactAssessment(
        direct_participants=_string_list(data.get("directParticipants")),
        indirect_dependents=[
            IndirectDependent(
                package_name=str(dep.get("packageName", "")),
                depends_on=str(dep.get("dependsOn", "")),
                distance=int(_number(dep.get("distance"))),
                dependency_path=_string_list(dep.get("dependencyPath")),
            )
            for dep in _dict_list(data.get("indirectDependents"))
        ],
        total_affected=int(_number(data.get("totalAffected"))),
        affected_percentage=float(_number(data.get("affectedPercentage"))),
        risk_level=str(data.get("riskLevel", "low")),
        risk_explanation=str(data.get("riskExplanation", "")),
        ripple_effect=ripple_effect,
    )


def parse_circular_dependency(data: Any) -> CircularDependencyInfo:
    """Parse one circular dependency record.

    Args:
        data: Decoded JSON object in upstream (camelCase) shape

    Returns:
        Immutable CircularDependencyInfo

    Raises:
        AnalysisInputError: If the record is not an object or has no cycle list
    """
    if not isinstance(data, dict):
        raise AnalysisInputError(f"Circular dependency must be an object, got {type(data).__name__}")
    if not isinstance(data.get("cycle"), list):
        raise AnalysisInputError("Circular dependency is missing its 'cycle' package list")

    root_cause = _optional_dict(data.get("rootCause"))
    impact_assessment = _optional_dict(data.get("impactAssessment"))
    return CircularDependencyInfo(
        cycle=_string_list(data["cycle"]),
        cycle_type=str(data.get("type", "indirect")),
        severity=str(data.get("severity", "info")),
        depth=int(_number(data.get("depth"))),
        complexity=_number(data.get("complexity")),
        priority_score=_number(data.get("priorityScore")),
        impact=str(data.get("impact", "")),
        root_cause=_parse_root_cause(root_cause) if root_cause else None,
        import_traces=[_parse_import_trace(t) for t in _dict_list(data.get("importTraces"))],
        fix_strategies=[_parse_fix_strategy(s) for s in _dict_list(data.get("fixStrategies"))],
        impact_assessment=_parse_impact_assessment(impact_assessment) if impact_assessment else None,
    )


def parse_dependency_graph(data: Any) -> DependencyGraph:
    """Parse a dependency graph document.

    Node dependency lists are taken from "dependencies" when given as a list,
    or from the keys when given as a name -> version mapping.
    """
    if not isinstance(data, dict):
        raise AnalysisInputError(f"Dependency graph must be an object, got {type(data).__name__}")

    nodes: Dict[str, PackageNode] = {}
    raw_nodes = _optional_dict(data.get("nodes")) or {}
    for name, node in raw_nodes.items():
        node = _optional_dict(node) or {}
        deps = node.get("dependencies")
        dependencies = list(deps.keys()) if isinstance(deps, dict) else _string_list(deps)
        nodes[str(name)] = PackageNode(
            name=str(node.get("name", name)),
            version=str(node.get("version", "")),
            path=str(node.get("path", "")),
            dependencies=dependencies,
        )

    edges = [
        DependencyEdge(
            from_package=str(edge.get("from", "")),
            to_package=str(edge.get("to", "")),
            edge_type=str(edge.get("type", "production")),
            version_range=str(edge.get("versionRange", "")),
        )
        for edge in _dict_list(data.get("edges"))
    ]

    return DependencyGraph(
        nodes=nodes,
        edges=edges,
        root_path=str(data.get("rootPath", "")),
        workspace_type=str(data.get("workspaceType", "")),
    )


def _parse_version_conflict(data: Dict[str, Any], severity_key: str) -> VersionConflictInfo:
    return VersionConflictInfo(
        package_name=str(data.get("packageName", "")),
        conflicting_versions=[
            ConflictingVersion(
                version=str(v.get("version", "")),
                packages=_string_list(v.get("packages")),
                is_breaking=bool(v.get("isBreaking", False)),
            )
            for v in _dict_list(data.get("conflictingVersions"))
        ],
        severity=str(data.get(severity_key, "")),
        resolution=str(data.get("resolution", "")),
        impact=str(data.get("impact", "")),
    )


def _parse_health_details(data: Dict[str, Any]) -> HealthScoreDetails:
    return HealthScoreDetails(
        overall=_number(data.get("overall")),
        rating=str(data.get("rating", "")),
        factors=[
            HealthScoreFactor(
                name=str(f.get("name", "")),
                score=_number(f.get("score")),
                weight=float(_number(f.get("weight"))),
                description=str(f.get("description", "")),
            )
            for f in _dict_list(data.get("factors"))
        ],
    )


def parse_analysis_result(data: Any) -> AnalysisResult:
    """Parse an AnalysisResult document.

    Raises:
        AnalysisInputError: If the document is not an object or a cycle is malformed
    """
    if not isinstance(data, dict):
        raise AnalysisInputError(f"Analysis result must be an object, got {type(data).__name__}")

    details = _optional_dict(data.get("healthScoreDetails"))
    graph = _optional_dict(data.get("graph"))
    metadata = _optional_dict(data.get("metadata")) or {}
    return AnalysisResult(
        health_score=_number(data.get("healthScore")),
        packages=int(_number(data.get("packages"))),
        circular_dependencies=[parse_circular_dependency(c) for c in _dict_list(data.get("circularDependencies"))],
        version_conflicts=[_parse_version_conflict(v, "severity") for v in _dict_list(data.get("versionConflicts"))],
        health_score_details=_parse_health_details(details) if details else None,
        graph=parse_dependency_graph(graph) if graph else None,
        duration_ms=_number(metadata.get("durationMs")),
    )


def parse_comprehensive_result(data: Any) -> ComprehensiveAnalysisResult:
    """Parse a ComprehensiveAnalysisResult document.

    Cycles and conflicts are read from "results" and, when absent there, from
    the nested "results.dependencyAnalysis" block.
    """
    if not isinstance(data, dict):
        raise AnalysisInputError(f"Analysis record must be an object, got {type(data).__name__}")

    results = _optional_dict(data.get("results"))
    if results is None:
        logger.debug("Analysis record %s has no results block", data.get("id", ""))
        return ComprehensiveAnalysisResult(analysis_id=str(data.get("id", "")), status=str(data.get("status", "")))

    nested = _optional_dict(results.get("dependencyAnalysis")) or {}

    def pick(key: str) -> List[Dict[str, Any]]:
        if isinstance(results.get(key), list):
            return _dict_list(results[key])
        return _dict_list(nested.get(key))

    raw_score = results.get("healthScore")
    health_score: Union[int, float, HealthScoreDetails, None]
    if isinstance(raw_score, dict):
        health_score = _parse_health_details(raw_score)
    elif isinstance(raw_score, (int, float)) and not isinstance(raw_score, bool):
        health_score = _number(raw_score)
    else:
        health_score = None

    summary = _optional_dict(results.get("summary")) or {}
    summary_packages = summary.get("totalPackages")
    summary_score = summary.get("healthScore")
    return ComprehensiveAnalysisResult(
        analysis_id=str(data.get("id", "")),
        status=str(data.get("status", "")),
        health_score=health_score,
        summary_total_packages=int(_number(summary_packages)) if summary_packages is not None else None,
        summary_health_score=_number(summary_score) if summary_score is not None else None,
        circular_dependencies=[parse_circular_dependency(c) for c in pick("circularDependencies")],
        version_conflicts=[_parse_version_conflict(v, "riskLevel") for v in pick("versionConflicts")],
    )


def is_comprehensive_document(data: Any) -> bool:
    """Return True if a decoded document has the ComprehensiveAnalysisResult shape."""
    return isinstance(data, dict) and ("results" in data or "status" in data) and "packages" not in data


def load_analysis_json(path: Union[str, Path]) -> Any:
    """Read and decode a JSON document produced by the upstream analyzer.

    Args:
        path: Path to the JSON file

    Returns:
        Decoded JSON value

    Raises:
        AnalysisInputError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise AnalysisInputError(f"Cannot read analysis file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise AnalysisInputError(f"Invalid JSON in '{path}': {e}") from e

    logger.debug("Loaded analysis document from %s", path)
    return data
