"""Diagnostics channel and result rendering for pokesdk.

The SDK has no logger of its own. The fetch client and the resolver report
what they do (request URL, HTTP status, cache hit, miss or discarded
entry) through :meth:`OutputManager.debug` on a process-wide manager,
which writes nothing unless it was created with ``verbose=True``::

    from pokesdk.output import OutputManager, set_output

    set_output(OutputManager(verbose=True))
    resolver.pokemon("pikachu").get()   # traces appear on stderr

The ``pokesdk`` command line builds its manager from ``--verbose``,
``--quiet``, ``--json``, ``--plain`` and ``--no-color``, and renders
decoded resources and name lists with :meth:`OutputManager.format_response`.
Results always go to stdout and diagnostics to stderr, so piping the
command into ``jq`` keeps working with ``--verbose`` on.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """How results are rendered on stdout.

    ``AUTO`` picks ``RICH`` for a colour-capable terminal and ``PLAIN``
    when stdout is piped or colour is off.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes results to stdout and SDK diagnostics to stderr.

    Args:
        format: Rendering for :meth:`format_response`.
        no_color: Never emit colour. Also implied by ``NO_COLOR`` or
            ``TERM=dumb``.
        quiet: Drop :meth:`info` messages.
        verbose: Show :meth:`debug` traces from the fetch client and resolver.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Render a dumped resource (dict) or a list of names to stdout."""
        if self._format == OutputFormat.JSON:
            self._write(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        elif self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self._write(line)
        else:
            self._render_rich(data)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        """Progress note such as a page count. Hidden by ``quiet``."""
        if not self._quiet:
            self._diagnostic(message, message)

    def error(self, message: str) -> None:
        """Always shown, whatever ``quiet`` says."""
        self._diagnostic(f"Error: {message}", f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Trace line from the SDK internals. Shown only when ``verbose``."""
        if self._verbose:
            self._diagnostic(f"[debug] {message}", f"[dim]\\[debug] {escape(message)}[/dim]")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _write(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def _diagnostic(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    def _render_rich(self, data: Any) -> None:
        if isinstance(data, (dict, list)):
            text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(str(data))


def _plain_lines(data: Any) -> list[str]:
    """Tab-separated ``key value`` lines for a resource, one line per name for a list."""
    if isinstance(data, dict):
        return [
            f"{key}\t{json.dumps(value, ensure_ascii=False, default=str)}"
            if isinstance(value, (dict, list))
            else f"{key}\t{value}"
            for key, value in data.items()
        ]
    if isinstance(data, list):
        return [
            "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
            for item in data
        ]
    return [str(data)]


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the process-wide manager. The default one is silent on debug."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager so the next :func:`get_output` builds a fresh one."""
    global _output
    _output = None


def error(message: str) -> None:
    """Report *message* through the installed manager's :meth:`OutputManager.error`."""
    get_output().error(message)
