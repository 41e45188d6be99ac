"""Diagnostic output for apifetch.

apifetch is a library, so it never writes to stdout.  Diagnostics (cache
hits, cache stores, outgoing requests, raised expire events) are debug
lines written to stderr through a Rich :class:`~rich.console.Console`:

* Nothing is printed unless ``verbose`` is enabled, which is off by
  default, so an unconfigured client is silent.
* Colour respects ``NO_COLOR``, ``TERM=dumb`` and the ``no_color`` flag.

Install a configured :class:`OutputManager` with :func:`set_output`; the
clients look it up through :func:`get_output` on every request.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console


class OutputManager:
    """Routes apifetch debug lines to stderr.

    Args:
        no_color: Disable all colour and Rich styling.
        verbose: Enable debug-level messages.

    Example::

        from apifetch.output import OutputManager, set_output

        set_output(OutputManager(verbose=True))
    """

    def __init__(self, no_color: bool = False, verbose: bool = False) -> None:
        self._no_color = no_color or _should_disable_color()
        self._verbose = verbose

        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def no_color(self) -> bool:
        """Whether colour output is disabled."""
        return self._no_color

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when ``verbose`` is active.

        Args:
            message: The debug text (prefixed with ``[debug]`` on output).
        """
        if not self._verbose:
            return
        if self._no_color:
            print(f"[debug] {message}", file=sys.stderr, flush=True)
        else:
            # Cache keys contain square brackets, so never parse markup.
            self._stderr.print(f"[debug] {message}", style="dim", markup=False)


def _should_disable_color() -> bool:
    """Check if color should be disabled.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    If no instance has been installed via :func:`set_output`, a default
    (non-verbose) ``OutputManager`` is created lazily.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None
