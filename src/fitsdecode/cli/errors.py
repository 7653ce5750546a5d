"""
fitsdump Error Reporting
========================

Maps decoder, renderer and argument errors to messages and exit codes.

Exit Codes
----------
    0  success
    1  the file could not be decoded (malformed or truncated FITS)
    2  bad arguments, missing or unreadable files
    3  unexpected internal error
    4  the entry could not be rendered as an image
    5  the requested keyword is not in the entry

Decode errors carry the byte offset of the failing entry and an
optional hint, and are printed as they format themselves:

    offset 2880: error: missing NAXIS2 keyword
    hint: NAXIS = 2 requires NAXIS1..NAXIS2
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from fitsdecode.errors import FitsError, FitsFormatError, RenderError


class ExitCode(IntEnum):
    """Exit codes of the fitsdump tool."""
    SUCCESS = 0
    DECODE_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3
    RENDER_ERROR = 4
    KEYWORD_NOT_FOUND = 5


# Argument and file-system errors reported as INVALID_ARGS
_ARGUMENT_ERRORS = (click.BadParameter, FileNotFoundError, PermissionError, IsADirectoryError)


def exit_code_for(error: BaseException) -> ExitCode:
    """Classify an exception raised by a fitsdump command."""
    # RenderError is a FitsError, so it is checked first
    if isinstance(error, RenderError):
        return ExitCode.RENDER_ERROR
    if isinstance(error, FitsError):
        return ExitCode.DECODE_ERROR
    if isinstance(error, _ARGUMENT_ERRORS):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def format_error(error: BaseException, error_type: str | None = None) -> str:
    """
    Build the message printed for an exception.

    FitsFormatError already reads "offset N: error: ..." and is printed
    unchanged. Other errors get an "<error_type> error:" prefix, or
    "Internal error:" when they are not expected at all.
    """
    if isinstance(error, FitsFormatError):
        return str(error)
    if exit_code_for(error) is ExitCode.INTERNAL_ERROR:
        return f"Internal error: {error}"
    prefix = f"{error_type} error" if error_type else "Error"
    return f"{prefix}: {error}"


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception from a fitsdump command and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print the traceback of internal errors
        error_type: Optional message prefix (e.g., "Render")

    Raises:
        SystemExit: Always, with the code from exit_code_for()
    """
    code = exit_code_for(error)
    click.echo(format_error(error, error_type), err=True)
    if verbose and code is ExitCode.INTERNAL_ERROR:
        traceback.print_exc()
    sys.exit(code)
