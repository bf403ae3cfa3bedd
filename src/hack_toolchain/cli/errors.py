"""
CLI Exit Codes
==============

hackasm and hackvm report failures the same way: located toolchain
errors go to stderr as-is and exit 1, unusable paths exit 2, anything
else is a bug and exits 3.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from hack_toolchain.errors import HackError


class ExitCode(IntEnum):
    """Exit codes shared by hackasm and hackvm."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Translation or assembly error
    INVALID_ARGS = 2     # Unreadable input or unwritable output
    INTERNAL_ERROR = 3


def exit_code_for(error: Exception) -> ExitCode:
    if isinstance(error, HackError):
        return ExitCode.BUILD_ERROR
    if isinstance(error, (click.BadParameter, OSError)):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report error on stderr and exit with its ExitCode.

    Args:
        error: The exception that ended the run
        verbose: Print a traceback for internal errors
        error_type: Stage name for the "<stage> failed" line, e.g. "Assembly"
    """
    code = exit_code_for(error)

    if code is ExitCode.BUILD_ERROR:
        if error_type:
            click.echo(f"{error_type} failed", err=True)
        click.echo(str(error), err=True)
    elif code is ExitCode.INVALID_ARGS:
        click.echo(f"Error: {error}", err=True)
    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(code)
