"""CLI package for pubctl.

This package contains the Typer application and all commands.
"""

from pubctl.cli.main import app

__all__ = ["app"]
