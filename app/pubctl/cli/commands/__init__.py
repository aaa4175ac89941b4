"""CLI commands for pubctl.

This package contains all command implementations.
"""

from pubctl.cli.commands import auth, publish

__all__ = ["auth", "publish"]
