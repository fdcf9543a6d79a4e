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
"""Type definitions for analysis reports.

ReportData is the canonical, format independent payload built from either
upstream analysis shape. The serializers render it as JSON, HTML or Markdown
according to ReportOptions.
"""

import enum
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from cyclecheck.constants import REPORT_FILE_EXTENSIONS

Number = Union[int, float]


class ReportFormat(enum.Enum):
    """Supported report output formats."""

    JSON = "json"
    HTML = "html"
    MARKDOWN = "markdown"


class ReportSection(enum.Flag):
    """Report sections that can be toggled on or off."""

    NONE = 0
    HEALTH_SCORE = enum.auto()
    CIRCULAR_DEPENDENCIES = enum.auto()
    VERSION_CONFLICTS = enum.auto()
    FIX_RECOMMENDATIONS = enum.auto()


DEFAULT_REPORT_SECTIONS = (
    ReportSection.HEALTH_SCORE
    | ReportSection.CIRCULAR_DEPENDENCIES
    | ReportSection.VERSION_CONFLICTS
    | ReportSection.FIX_RECOMMENDATIONS
)

SECTION_NAMES: Dict[str, ReportSection] = {
    "health-score": ReportSection.HEALTH_SCORE,
    "circular-dependencies": ReportSection.CIRCULAR_DEPENDENCIES,
    "version-conflicts": ReportSection.VERSION_CONFLICTS,
    "fix-recommendations": ReportSection.FIX_RECOMMENDATIONS,
}

# Minimum score for each rating, best first
RATING_THRESHOLDS: Dict[str, int] = {
    "excellent": 85,
    "good": 70,
    "fair": 50,
    "poor": 30,
    "critical": 0,
}


def get_health_score_rating(score: Number) -> str:
    """Map a 0-100 health score to its rating."""
    for rating in ("excellent", "good", "fair", "poor"):
        if score >= RATING_THRESHOLDS[rating]:
            return rating
    return "critical"


def parse_sections(names: List[str]) -> ReportSection:
    """Combine section names (e.g. "health-score") into a ReportSection flag.

    Raises:
        ValueError: If a name is not a known section
    """
    sections = ReportSection.NONE
    for name in names:
        if name not in SECTION_NAMES:
            raise ValueError(f"Unknown report section: {name}")
        sections |= SECTION_NAMES[name]
    return sections


@dataclass(frozen=True)
class ReportOptions:
    """Options controlling report rendering.

    Attributes:
        format: "json", "html" or "markdown"; kept as text so unsupported
            values reach the serializer and fail there
        sections: Enabled sections
        include_metadata: Whether to render the metadata block
        include_timestamp: Whether to print the generation time in the header
        project_name: Project name used in titles and the file name
    """

    format: str = ReportFormat.JSON.value
    sections: ReportSection = DEFAULT_REPORT_SECTIONS
    include_metadata: bool = True
    include_timestamp: bool = True
    project_name: str = "project"

    def has_section(self, section: ReportSection) -> bool:
        """Return True if a section is enabled."""
        return bool(self.sections & section)


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata of a report."""

    generated_at: str
    tool_version: str
    project_name: str
    analysis_duration: Number = 0
    package_count: int = 0
    node_count: int = 0
    edge_count: int = 0


@dataclass(frozen=True)
class HealthScoreBreakdown:
    """Weighted category of the health score (weight in whole percent)."""

    category: str
    score: Number
    weight: int


@dataclass(frozen=True)
class HealthScoreReport:
    """Health score section."""

    overall: Number
    breakdown: List[HealthScoreBreakdown]
    rating: str
    rating_thresholds: Dict[str, int] = field(default_factory=lambda: dict(RATING_THRESHOLDS))


@dataclass(frozen=True)
class SeverityCounts:
    """Counts per report severity bucket."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


@dataclass(frozen=True)
class CycleSummary:
    """One cycle as listed in a report."""

    id: str
    packages: List[str]
    severity: str
    type: str


@dataclass(frozen=True)
class CircularDependencyReport:
    """Circular dependency section."""

    total_count: int
    by_severity: SeverityCounts
    cycles: List[CycleSummary]


@dataclass(frozen=True)
class ConflictSummary:
    """One version conflict as listed in a report."""

    package_name: str
    versions: List[str]
    risk_level: str
    recommended_version: str


@dataclass(frozen=True)
class VersionConflictReport:
    """Version conflict section."""

    total_count: int
    by_risk_level: SeverityCounts
    conflicts: List[ConflictSummary]


@dataclass(frozen=True)
class FixRecommendation:
    """One fix recommendation as listed in a report."""

    id: str
    title: str
    description: str
    effort: str
    impact: str
    priority: Number
    affected_packages: List[str]
    quick_win: bool = False


@dataclass(frozen=True)
class FixRecommendationReport:
    """Fix recommendation section, sorted by priority (highest first)."""

    total_count: int
    quick_wins: int
    recommendations: List[FixRecommendation]


@dataclass(frozen=True)
class ReportData:
    """Complete report payload."""

    metadata: ReportMetadata
    health_score: HealthScoreReport
    circular_dependencies: CircularDependencyReport
    version_conflicts: VersionConflictReport
    fix_recommendations: FixRecommendationReport


@dataclass(frozen=True)
class ReportResult:
    """Rendered report ready to be persisted.

    Attributes:
        content: Encoded report bytes (UTF-8)
        filename: Suggested file name
        format: "json", "html" or "markdown"
        size_bytes: Length of content in bytes
    """

    content: bytes
    filename: str
    format: str
    size_bytes: int

    @classmethod
    def from_text(cls, text: str, filename: str, report_format: str) -> "ReportResult":
        """Encode text content and fill in the size."""
        content = text.encode("utf-8")
        return cls(content=content, filename=filename, format=report_format, size_bytes=len(content))


# =============================================================================
# Timestamps and file names
# =============================================================================


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g. 2025-01-31T12:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def utc_date_stamp(now: Optional[datetime] = None) -> str:
    """Current UTC date as YYYY-MM-DD."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%d")


_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def sanitize_filename(filename: str) -> str:
    """Replace characters that are not allowed in file names with "_"."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


def build_report_filename(project_name: str, report_format: str, now: Optional[datetime] = None) -> str:
    """Report file name: {project}-analysis-report-{YYYY-MM-DD}.{ext}."""
    extension = REPORT_FILE_EXTENSIONS[report_format]
    return f"{project_name}-analysis-report-{utc_date_stamp(now)}.{extension}"


def build_diagnostic_filename(project_name: str, cycle_id: str, now: Optional[datetime] = None) -> str:
    """Diagnostic file name: {project}-diagnostic-{cycleId}-{YYYY-MM-DD}.html."""
    return f"{project_name}-diagnostic-{cycle_id}-{utc_date_stamp(now)}.html"
