#!/usr/bin/env python3
"""Pytest configuration and shared fixtures for cycleCheck tests.

Upstream documents are provided both as raw camelCase dictionaries (as the
analyzer writes them) and as parsed dataclasses.

Sample monorepo (edges point from dependent to dependency):

    @app/ui -> @app/api -> @app/auth -> @app/ui      (indirect cycle)
    @app/api <-> @app/auth                           (direct cycle, upstream record)
    @app/web -> @app/ui, @app/admin -> @app/web, @app/docs -> @app/admin
    @app/api -> @app/utils
"""

import sys
import json
import copy
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cyclecheck.analysis_types import (
    AnalysisResult,
    CircularDependencyInfo,
    DependencyGraph,
    parse_analysis_result,
    parse_circular_dependency,
    parse_dependency_graph,
)
from cyclecheck.color_utils import Colors

UI = "@app/ui"
API = "@app/api"
AUTH = "@app/auth"
WEB = "@app/web"
ADMIN = "@app/admin"
DOCS = "@app/docs"
UTILS = "@app/utils"

TOTAL_PACKAGES = 20

GRAPH_DATA: Dict[str, Any] = {
    "nodes": {
        name: {"name": name, "version": "1.0.0", "path": f"packages/{name.split('/')[-1]}", "dependencies": []}
        for name in (UI, API, AUTH, WEB, ADMIN, DOCS, UTILS)
    },
    "edges": [
        {"from": UI, "to": API, "type": "production", "versionRange": "workspace:*"},
        {"from": API, "to": AUTH, "type": "production", "versionRange": "workspace:*"},
        {"from": AUTH, "to": UI, "type": "production", "versionRange": "workspace:*"},
        {"from": WEB, "to": UI, "type": "production", "versionRange": "workspace:*"},
        {"from": ADMIN, "to": WEB, "type": "production", "versionRange": "workspace:*"},
        {"from": DOCS, "to": ADMIN, "type": "development", "versionRange": "workspace:*"},
        {"from": API, "to": UTILS, "type": "production", "versionRange": "^1.0.0"},
    ],
    "rootPath": "/repo",
    "workspaceType": "pnpm",
}

TRIANGLE_CYCLE_DATA: Dict[str, Any] = {
    "cycle": [UI, API, AUTH, UI],
    "type": "indirect",
    "severity": "warning",
    "depth": 3,
    "complexity": 5,
    "priorityScore": 6,
    "impact": "Three packages are tightly coupled",
    "rootCause": {
        "originatingPackage": API,
        "problematicDependency": {"from": API, "to": AUTH, "type": "production", "critical": True},
        "confidence": 65,
        "explanation": "@app/api imports session helpers from @app/auth.",
        "chain": [
            {"from": UI, "to": API, "type": "production", "critical": False},
            {"from": API, "to": AUTH, "type": "production", "critical": True},
            {"from": AUTH, "to": UI, "type": "production", "critical": True},
        ],
        "criticalEdge": {"from": API, "to": AUTH, "type": "production", "critical": True},
    },
    "importTraces": [
        {
            "fromPackage": UI,
            "toPackage": API,
            "filePath": "packages/ui/src/client.ts",
            "lineNumber": 7,
            "statement": "import { fetchUser } from '@app/api'",
            "importType": "esm-named",
            "symbols": ["fetchUser"],
        },
        {
            "fromPackage": API,
            "toPackage": AUTH,
            "filePath": "packages/api/src/index.ts",
            "lineNumber": 3,
            "statement": "import { verify } from '@app/auth'",
            "importType": "esm-named",
            "symbols": ["verify"],
        },
    ],
    "fixStrategies": [
        {
            "type": "extract-module",
            "name": "Extract Shared Module",
            "description": "Move the session helpers into a new package.",
            "suitability": 8,
            "effort": "medium",
            "pros": ["Clean separation"],
            "cons": ["New package to maintain"],
            "recommended": True,
            "targetPackages": [API, AUTH],
            "guide": {
                "title": "Extract session helpers",
                "summary": "Create @app/session and move the helpers there.",
                "steps": [
                    {
                        "number": 1,
                        "title": "Create package",
                        "description": "Create the @app/session package.",
                        "filePath": "packages/session/package.json",
                        "codeAfter": {"code": '{ "name": "@app/session" }'},
                    },
                    {
                        "number": 2,
                        "title": "Update imports",
                        "description": "Import verify from the new package.",
                    },
                ],
                "estimatedTime": "2-3 hours",
            },
            "beforeAfterExplanation": {
                "importDiffs": [
                    {
                        "filePath": "packages/api/src/index.ts",
                        "packageName": API,
                        "importsToRemove": [{"statement": "import { verify } from '@app/auth'"}],
                        "importsToAdd": [{"statement": "import { verify } from '@app/session'"}],
                    }
                ]
            },
        },
        {
            "type": "dependency-injection",
            "name": "Dependency Injection",
            "description": "Pass the verifier into @app/api at startup.",
            "suitability": 6,
            "effort": "low",
            "pros": ["No new package"],
            "cons": ["More wiring"],
            "recommended": False,
            "targetPackages": [API],
        },
    ],
}

DIRECT_CYCLE_DATA: Dict[str, Any] = {
    "cycle": [API, AUTH],
    "type": "direct",
    "severity": "critical",
    "depth": 2,
    "complexity": 2,
    "priorityScore": 9,
    "impact": "API and auth import each other",
    "fixStrategies": [
        {
            "type": "dependency-injection",
            "name": "Invert auth dependency",
            "description": "Inject the API client into @app/auth.",
            "suitability": 9,
            "effort": "low",
            "pros": [],
            "cons": [],
            "recommended": True,
            "targetPackages": [AUTH],
        }
    ],
}

ANALYSIS_RESULT_DATA: Dict[str, Any] = {
    "healthScore": 72,
    "packages": TOTAL_PACKAGES,
    "circularDependencies": [TRIANGLE_CYCLE_DATA, DIRECT_CYCLE_DATA],
    "versionConflicts": [
        {
            "packageName": "lodash",
            "conflictingVersions": [
                {"version": "4.17.21", "packages": [UI], "isBreaking": False},
                {"version": "3.10.1", "packages": [API], "isBreaking": True},
            ],
            "severity": "warning",
            "resolution": "4.17.21",
            "impact": "Two major versions bundled",
        }
    ],
    "healthScoreDetails": {
        "overall": 72,
        "rating": "good",
        "factors": [
            {"name": "Circular Dependencies", "score": 60, "weight": 0.4, "description": "Two cycles"},
            {"name": "Version Consistency", "score": 80, "weight": 0.35, "description": "One conflict"},
            {"name": "Architecture", "score": 78, "weight": 0.25, "description": "Layering mostly intact"},
        ],
    },
    "graph": GRAPH_DATA,
    "metadata": {"durationMs": 1234, "filesProcessed": 42},
}

COMPREHENSIVE_RESULT_DATA: Dict[str, Any] = {
    "id": "analysis-1",
    "status": "completed",
    "results": {
        "healthScore": 65,
        "summary": {"totalPackages": 12, "healthScore": 65},
        "dependencyAnalysis": {
            "circularDependencies": [
                {"cycle": ["a", "b"], "type": "direct", "severity": "high"},
                {"cycle": ["c", "d", "e"], "type": "indirect", "severity": "unusual"},
            ],
            "versionConflicts": [
                {
                    "packageName": "react",
                    "conflictingVersions": [{"version": "17.0.2"}, {"version": "18.2.0"}],
                    "riskLevel": "medium",
                    "resolution": "18.2.0",
                }
            ],
        },
    },
}


@pytest.fixture(autouse=True)
def restore_colors() -> Any:
    """Restore color codes that a test (or a --no-color CLI run) disabled."""
    saved = {name: getattr(Colors, name) for name in vars(Colors) if name.isupper()}
    yield
    for name, value in saved.items():
        setattr(Colors, name, value)


@pytest.fixture
def graph_data() -> Dict[str, Any]:
    """Raw upstream dependency graph."""
    return copy.deepcopy(GRAPH_DATA)


@pytest.fixture
def sample_graph() -> DependencyGraph:
    """Parsed sample dependency graph."""
    return parse_dependency_graph(copy.deepcopy(GRAPH_DATA))


@pytest.fixture
def triangle_cycle_data() -> Dict[str, Any]:
    """Raw upstream record of the ui -> api -> auth cycle (closed form)."""
    return copy.deepcopy(TRIANGLE_CYCLE_DATA)


@pytest.fixture
def triangle_cycle() -> CircularDependencyInfo:
    """Parsed ui -> api -> auth cycle with root cause, traces and fix strategies."""
    return parse_circular_dependency(copy.deepcopy(TRIANGLE_CYCLE_DATA))


@pytest.fixture
def direct_cycle() -> CircularDependencyInfo:
    """Parsed api <-> auth cycle without root cause."""
    return parse_circular_dependency(copy.deepcopy(DIRECT_CYCLE_DATA))


@pytest.fixture
def all_cycles(triangle_cycle: CircularDependencyInfo, direct_cycle: CircularDependencyInfo) -> List[CircularDependencyInfo]:
    """Both sample cycles, triangle first."""
    return [triangle_cycle, direct_cycle]


@pytest.fixture
def analysis_result_data() -> Dict[str, Any]:
    """Raw AnalysisResult document."""
    return copy.deepcopy(ANALYSIS_RESULT_DATA)


@pytest.fixture
def analysis_result() -> AnalysisResult:
    """Parsed AnalysisResult."""
    return parse_analysis_result(copy.deepcopy(ANALYSIS_RESULT_DATA))


@pytest.fixture
def comprehensive_result_data() -> Dict[str, Any]:
    """Raw ComprehensiveAnalysisResult document with nested dependencyAnalysis."""
    return copy.deepcopy(COMPREHENSIVE_RESULT_DATA)


@pytest.fixture
def analysis_file(tmp_path: Path) -> Path:
    """AnalysisResult document written to disk."""
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps(ANALYSIS_RESULT_DATA), encoding="utf-8")
    return path


@pytest.fixture
def comprehensive_file(tmp_path: Path) -> Path:
    """ComprehensiveAnalysisResult document written to disk."""
    path = tmp_path / "record.json"
    path.write_text(json.dumps(COMPREHENSIVE_RESULT_DATA), encoding="utf-8")
    return path
