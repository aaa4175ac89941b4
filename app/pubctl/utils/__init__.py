"""Utility modules for pubctl.

This module exports commonly used utility functions.
"""

from pubctl.utils.formatting import (
    console,
    create_summary_table,
    err_console,
    print_error,
    print_error_result,
    print_info,
    print_success,
    print_warning,
)
from pubctl.utils.shell import command_exists, run_interactive

__all__ = [
    "command_exists",
    "console",
    "create_summary_table",
    "err_console",
    "print_error",
    "print_error_result",
    "print_info",
    "print_success",
    "print_warning",
    "run_interactive",
]
