"""Utility modules for pkgreq.

This module exports commonly used utility functions.
"""

from pkgreq.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from pkgreq.utils.shell import CommandResult, command_exists, find_command, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "find_command",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
