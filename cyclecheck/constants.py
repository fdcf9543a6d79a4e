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
"""Shared constants for cycleCheck tools.

This module provides centralized constants used across the diagnostic and report
tools to ensure consistency and make it easy to adjust defaults.
"""

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_INVALID_ARGS = 1
EXIT_RUNTIME_ERROR = 2
EXIT_KEYBOARD_INTERRUPT = 130

# =============================================================================
# Tool Identity
# =============================================================================

TOOL_NAME = "cycleCheck"
TOOL_VERSION = "0.1.0"
ANALYSIS_CONFIG_HASH = "default"  # Identifies the threshold set used for a report

# =============================================================================
# Cycle Layout Constants
# =============================================================================

DIAGRAM_WIDTH = 400
DIAGRAM_HEIGHT = 400
LAYOUT_CENTER_X = 200
LAYOUT_CENTER_Y = 200
LAYOUT_RADIUS = 150
NODE_RADIUS = 30
EDGE_NODE_OFFSET = 35  # Edge end points stop this far from node centers
NODE_LABEL_MAX_CHARS = 10

RIPPLE_ROOT_LABEL = "Cycle"

# =============================================================================
# Display Limits
# =============================================================================

SUMMARY_PACKAGE_PREVIEW = 3  # Packages named in the executive summary description

# =============================================================================
# Report Constants
# =============================================================================

SUPPORTED_REPORT_FORMATS = ["json", "html", "markdown"]
REPORT_FILE_EXTENSIONS = {
    "json": "json",
    "html": "html",
    "markdown": "md",
}

SUPPORTED_GRAPH_FORMATS = [".graphml", ".gexf", ".json"]

# =============================================================================
# Exception Classes
# =============================================================================


class CycleCheckError(Exception):
    """Base exception for all cycleCheck errors.

    All cycleCheck exceptions carry an exit_code attribute that indicates
    what exit code the program should use when this error is caught at the
    main entry point.
    """

    def __init__(self, message: str, exit_code: int = EXIT_RUNTIME_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


# Validation errors (EXIT_INVALID_ARGS)
class ValidationError(CycleCheckError):
    """Raised when input validation fails (arguments, paths, etc)."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_INVALID_ARGS)


class AnalysisInputError(ValidationError):
    """Raised when upstream analysis data is missing or malformed."""


class ArgumentError(ValidationError):
    """Raised when command-line arguments are invalid."""


# Report errors (EXIT_RUNTIME_ERROR)
class ReportError(CycleCheckError):
    """Base class for report generation and export failures."""

    def __init__(self, message: str, exit_code: int = EXIT_RUNTIME_ERROR):  # pylint: disable=useless-parent-delegation
        super().__init__(message, exit_code)


class ReportGenerationError(ReportError):
    """Raised when a diagnostic or analysis report cannot be generated."""


class ReportExportError(ReportError):
    """Raised when a generated report cannot be written."""


class UnsupportedFormatError(ReportError):
    """Raised when a report is requested in a format that is not supported."""

    def __init__(self, report_format: object):
        super().__init__(f"Unknown format: {report_format}", EXIT_INVALID_ARGS)
        self.report_format = report_format
