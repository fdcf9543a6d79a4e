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
"""Type definitions for diagnostic reports.

A DiagnosticReport is an immutable aggregate built fresh for each request. All
members are plain dataclasses so the whole report converts to JSON-safe
dictionaries with dataclasses.asdict().
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class ExecutiveSummary:
    """Headline summary of a cycle.

    Attributes:
        description: Plain language description of the cycle
        severity: critical, high, medium or low
        recommendation: Recommended next action
        estimated_effort: low, medium or high
        affected_packages_count: Number of packages affected by the cycle
        cycle_length: Number of packages in the cycle
    """

    description: str
    severity: str
    recommendation: str
    estimated_effort: str
    affected_packages_count: int
    cycle_length: int


@dataclass(frozen=True)
class NodePosition:
    """Position of a node in diagram coordinates."""

    x: int
    y: int


@dataclass(frozen=True)
class CycleNode:
    """Package node of a cycle diagram."""

    id: str
    name: str
    path: str
    is_in_cycle: bool
    position: NodePosition


@dataclass(frozen=True)
class CycleEdge:
    """Edge between two consecutive packages of a cycle.

    Attributes:
        from_package: Importing package
        to_package: Imported package
        is_breaking_point: True for the single edge recommended for removal
        import_statement: Import statement creating this edge, when traced
        file_path: File containing the import, when traced
        line_number: Line of the import, when traced
    """

    from_package: str
    to_package: str
    is_breaking_point: bool = False
    import_statement: Optional[str] = None
    file_path: Optional[str] = None
    line_number: Optional[int] = None


@dataclass(frozen=True)
class BreakingPoint:
    """Edge recommended for breaking a cycle, with its justification."""

    from_package: str
    to_package: str
    reason: str


@dataclass(frozen=True)
class CyclePathVisualization:
    """Geometry and rendered diagrams of a cycle."""

    nodes: List[CycleNode]
    edges: List[CycleEdge]
    breaking_point: BreakingPoint
    svg_diagram: str
    ascii_diagram: str


@dataclass(frozen=True)
class AlternativeCandidate:
    """Package that may also be responsible for a cycle."""

    package: str
    reason: str
    confidence: Union[int, float]


@dataclass(frozen=True)
class CodeReference:
    """Location of an import statement that participates in a cycle."""

    file: str
    line: int
    import_statement: str


@dataclass(frozen=True)
class RootCauseDetails:
    """Root cause section of a diagnostic report.

    Attributes:
        explanation: Why the cycle exists
        confidence_score: Confidence in the attribution, 0-100
        originating_package: Package most likely responsible
        originating_reason: Why that package is blamed
        alternative_candidates: Other plausible culprits (low confidence only)
        code_references: Import statements forming the cycle
    """

    explanation: str
    confidence_score: Union[int, float]
    originating_package: str
    originating_reason: str
    alternative_candidates: List[AlternativeCandidate] = field(default_factory=list)
    code_references: List[CodeReference] = field(default_factory=list)


@dataclass(frozen=True)
class FixStrategyStep:
    """Numbered step of a fix strategy guide."""

    number: int
    title: str
    description: str
    code_snippet: Optional[str] = None
    file_path: Optional[str] = None
    is_optional: bool = False


@dataclass(frozen=True)
class CodeSnippets:
    """Representative import before and after applying a fix."""

    before: str = ""
    after: str = ""


@dataclass(frozen=True)
class FixStrategyGuide:
    """Fix strategy section entry.

    Attributes:
        strategy: Strategy type identifier
        title: Display name
        description: What the strategy does
        suitability_score: Suitability 1-10
        estimated_effort: low, medium or high
        estimated_time: Human readable time estimate
        pros: Advantages
        cons: Disadvantages
        steps: Ordered steps (empty when no guide is attached)
        code_snippets: Example import change
    """

    strategy: str
    title: str
    description: str
    suitability_score: Union[int, float]
    estimated_effort: str
    estimated_time: str
    pros: List[str]
    cons: List[str]
    steps: List[FixStrategyStep]
    code_snippets: CodeSnippets


@dataclass(frozen=True)
class RippleNode:
    """Node of the ripple effect tree (depth 0 is the cycle itself)."""

    package: str
    depth: int
    dependents: List["RippleNode"] = field(default_factory=list)


@dataclass(frozen=True)
class ImpactAssessmentDetails:
    """Impact section of a diagnostic report.

    Attributes:
        direct_participants: Packages in the cycle
        direct_participants_count: Number of packages in the cycle
        indirect_dependents: Packages depending on the cycle, in discovery order
        indirect_dependents_count: Number of indirect dependents
        total_affected_count: Distinct affected packages
        percentage_of_monorepo: Affected share of the monorepo, whole percent
        risk_level: critical, high, medium or low
        risk_explanation: Human readable explanation of the risk
        ripple_effect_tree: Depth bounded tree of dependents
    """

    direct_participants: List[str]
    direct_participants_count: int
    indirect_dependents: List[str]
    indirect_dependents_count: int
    total_affected_count: int
    percentage_of_monorepo: int
    risk_level: str
    risk_explanation: str
    ripple_effect_tree: RippleNode


@dataclass(frozen=True)
class RelatedCycleInfo:
    """Another cycle that shares packages with the diagnosed one."""

    cycle_id: str
    shared_packages: List[str]
    overlap_percentage: int
    recommend_fix_together: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class DiagnosticMetadata:
    """Generation metadata of a diagnostic report."""

    generated_at: str
    generation_duration_ms: int
    tool_version: str
    project_name: str
    analysis_config_hash: str


@dataclass(frozen=True)
class DiagnosticReport:
    """Complete diagnostic report for one circular dependency."""

    id: str
    cycle_id: str
    generated_at: str
    tool_version: str
    project_name: str
    executive_summary: ExecutiveSummary
    cycle_path: CyclePathVisualization
    root_cause: RootCauseDetails
    fix_strategies: List[FixStrategyGuide]
    impact_assessment: ImpactAssessmentDetails
    related_cycles: List[RelatedCycleInfo]
    metadata: DiagnosticMetadata

    def to_dict(self) -> Dict[str, Any]:
        """Convert the report to JSON-safe nested dictionaries."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Serialize the report as a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
