"""Tests for the diagnostic output system.

Covers:
- NO_COLOR / TERM=dumb color disabling
- Diagnostics never reaching stdout
- Verbose gating of debug output
- Global instance management
"""

from __future__ import annotations

import pytest

from apifetch.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


# ------------------------------------------------------------------ #
# NO_COLOR / TERM=dumb detection
# ------------------------------------------------------------------ #


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False

    def test_no_color_env_forces_plain_prefix(self, capfd, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        mgr = OutputManager(verbose=True)
        assert mgr.no_color is True
        mgr.debug("plain")
        assert capfd.readouterr().err == "[debug] plain\n"


# ------------------------------------------------------------------ #
# stderr discipline
# ------------------------------------------------------------------ #


class TestStderrDiscipline:
    """Diagnostics go to stderr; stdout stays untouched."""

    def test_debug_goes_to_stderr(self, capfd):
        OutputManager(no_color=True, verbose=True).debug("some message")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "some message" in captured.err

    def test_rich_console_keeps_brackets(self, capfd, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(verbose=True)
        mgr.debug("Cache hit: GET [https://api.example.com/users][] [bold]x")
        err = capfd.readouterr().err
        assert "[https://api.example.com/users][]" in err
        assert "[bold]x" in err


# ------------------------------------------------------------------ #
# Verbose
# ------------------------------------------------------------------ #


class TestVerboseMode:
    """Test that verbose enables debug output."""

    def test_debug_hidden_by_default(self, capfd):
        mgr = OutputManager(no_color=True)
        mgr.debug("should not appear")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd):
        mgr = OutputManager(no_color=True, verbose=True)
        mgr.debug("trace info")
        assert "[debug] trace info" in capfd.readouterr().err

    def test_verbose_property(self):
        assert OutputManager(verbose=True).is_verbose is True
        assert OutputManager().is_verbose is False


# ------------------------------------------------------------------ #
# Global instance management
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    """Test get_output / set_output / reset_output."""

    def test_get_output_creates_default(self):
        instance = get_output()
        assert isinstance(instance, OutputManager)
        assert instance.is_verbose is False

    def test_get_output_is_stable(self):
        assert get_output() is get_output()

    def test_set_output_overrides(self):
        custom = OutputManager(no_color=True)
        set_output(custom)
        assert get_output() is custom

    def test_set_then_reset_then_get(self):
        first = OutputManager(no_color=True)
        set_output(first)
        reset_output()
        assert get_output() is not first
