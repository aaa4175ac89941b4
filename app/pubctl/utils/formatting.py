"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.table import Table

from pubctl.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_summary_table(title: str) -> Table:
    """Create a pre-configured two-column key/value table.

    Args:
        title: Table title.

    Returns:
        Rich Table with Field and Value columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Field", style="muted", no_wrap=True)
    table.add_column("Value", style="text")
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def print_error_result(code: int | None, body: Any) -> None:
    """Print a failed registry response.

    Registry error bodies carry a ``message`` and, for validation errors,
    an ``errors`` mapping of field name to message or nested mapping. Any
    other body is printed as-is.

    Args:
        code: HTTP status code of the response, or None if no response
            was received.
        body: Decoded response body.
    """
    if isinstance(body, Mapping) and ("message" in body or "errors" in body):
        message = body.get("message")
        if message:
            err_console.print(f"  {message}", markup=False)
        errors = body.get("errors")
        if isinstance(errors, Mapping):
            _print_error_fields(errors, depth=1)
    elif body:
        err_console.print(f"  {body}", markup=False)

    if code is not None:
        err_console.print(f"  [muted]({code})[/]")


def _print_error_fields(errors: Mapping[str, Any], depth: int) -> None:
    """Print field-level validation errors, indenting nested mappings."""
    indent = "  " * depth
    for field, value in errors.items():
        if isinstance(value, Mapping):
            err_console.print(f"{indent}{field}:", markup=False)
            _print_error_fields(value, depth + 1)
        else:
            err_console.print(f"{indent}{field}: {value}", markup=False)
