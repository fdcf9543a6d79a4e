#!/usr/bin/env python3
"""Tests for cyclecheck/color_utils.py"""

import io
import sys

import pytest

from cyclecheck.color_utils import (
    Colors,
    colored,
    get_severity_color,
    print_error,
    print_info,
    print_severity,
    print_success,
    print_warning,
    progress_bar,
    should_use_color,
)


class _TerminalOutput(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestColored:
    """Tests for colored function."""

    def test_wraps_text(self) -> None:
        """Test color and reset codes surround the text."""
        result = colored("test", Colors.RED, Colors.BRIGHT)
        assert result == f"{Colors.BRIGHT}{Colors.RED}test{Colors.RESET}"

    def test_no_color(self) -> None:
        """Test text without a color is returned unchanged."""
        assert colored("test") == "test"

    def test_disabled(self) -> None:
        """Test disabling colors strips all codes."""
        Colors.disable()
        assert colored("test", Colors.RED) == "test"
        assert Colors.RESET == ""


class TestPrintFunctions:
    """Tests for print_* convenience functions."""

    def test_print_success(self) -> None:
        """Test print_success writes the message."""
        output = io.StringIO()
        print_success("Saved", file=output)
        assert "Saved" in output.getvalue()

    def test_print_error_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test errors go to stderr with a prefix."""
        print_error("broken")
        captured = capsys.readouterr()
        assert "Error: broken" in captured.err
        assert captured.out == ""

    def test_print_warning_without_prefix(self) -> None:
        """Test the warning prefix can be omitted."""
        output = io.StringIO()
        print_warning("careful", file=output, prefix=False)
        assert "Warning:" not in output.getvalue()
        assert "careful" in output.getvalue()

    def test_print_info(self) -> None:
        """Test print_info writes the message."""
        output = io.StringIO()
        print_info("note", file=output)
        assert "note" in output.getvalue()


class TestSeverity:
    """Tests for severity coloring."""

    def test_known_levels(self) -> None:
        """Test severity levels map to colors."""
        assert get_severity_color("critical")[0] == Colors.RED
        assert get_severity_color("HIGH")[0] == Colors.RED
        assert get_severity_color("medium")[0] == Colors.YELLOW
        assert get_severity_color("low")[0] == Colors.GREEN

    def test_unknown_level(self) -> None:
        """Test unknown levels fall back to white."""
        assert get_severity_color("unknown")[0] == Colors.WHITE

    def test_print_severity(self) -> None:
        """Test print_severity writes the text."""
        output = io.StringIO()
        print_severity("Severity: HIGH", "high", file=output)
        assert "Severity: HIGH" in output.getvalue()


class TestShouldUseColor:
    """Tests for should_use_color."""

    def test_flags(self) -> None:
        """Test explicit flags win."""
        assert should_use_color(no_color=True) is False
        assert should_use_color(force_color=True) is True

    def test_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a terminal gets color unless NO_COLOR is set."""
        monkeypatch.setattr(sys, "stdout", _TerminalOutput())
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert should_use_color() is True

        monkeypatch.setenv("NO_COLOR", "1")
        assert should_use_color() is False

    def test_not_a_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test redirected output gets no color."""
        monkeypatch.setattr(sys, "stdout", io.StringIO())
        assert should_use_color() is False


class TestProgressBar:
    """Tests for progress_bar."""

    def test_half(self) -> None:
        """Test a half filled bar without color."""
        assert progress_bar(50, 100, width=10, color="") == "[█████░░░░░] 50%"

    def test_zero_total(self) -> None:
        """Test a zero total renders an empty bar."""
        assert progress_bar(0, 0, width=4, color="") == "[░░░░] 0%"

    def test_complete(self) -> None:
        """Test a complete bar."""
        assert progress_bar(100, 100, width=4, color="").endswith("100%")
