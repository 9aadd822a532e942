"""Status-line helpers shared by the CLI and the orchestrator.

Messages are rich markup. Callers escape anything that came from the
operator or from an exception before passing it in.
"""
from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape


def _status_line(console: Console, style: str, symbol: str, message: str) -> None:
    console.print(f"[{style}]{symbol}[/{style}] {message}")


def print_success(console: Console, message: str) -> None:
    """Print a completed step, e.g. a finished download."""
    _status_line(console, "green", "✓", message)


def print_error(console: Console, message: str) -> None:
    """Print the reason a run stopped."""
    _status_line(console, "red", "✗", message)


def print_warning(console: Console, message: str) -> None:
    """Print a non-fatal problem; the run carries on."""
    _status_line(console, "yellow", "⚠", message)


def print_info(console: Console, message: str) -> None:
    _status_line(console, "cyan", "ℹ", message)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Report an exception that escaped the scaffold run and exit.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    print_error(console, f"Unexpected error: {escape(str(e))}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)
