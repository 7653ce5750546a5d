"""
fitsdump - FITS Inspection Command-Line Interface
=================================================

This module implements the command-line interface for the FITS decoder.
It provides tools for inspecting headers and previewing images.

Commands
--------
- **dump**: Print every entry with its header cards and data size
- **info**: One summary line per entry
- **keyword**: Print the value of a header keyword
- **render**: Write a grayscale PNG preview of an image entry

Usage Examples
--------------
Dump all headers:
    $ fitsdump dump m31.fits

Summarize entries:
    $ fitsdump info m31.fits

Look up a keyword in the second entry:
    $ fitsdump keyword m31.fits EXTNAME --entry 1

Render the Primary image at 2x:
    $ fitsdump render m31.fits -o m31.png -s 2

Decode floating-point images (negative BITPIX):
    $ fitsdump --absolute-bitpix info float.fits
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from fitsdecode import __version__
from fitsdecode.cli.errors import ExitCode, handle_cli_exception
from fitsdecode.config import DecoderConfig
from fitsdecode.errors import RenderError
from fitsdecode.fits import (
    EntryKind,
    FitsParser,
    format_param,
    iter_dump_lines,
    render_image,
)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the decoder configuration and verbosity.
    """

    def __init__(self) -> None:
        self.verbose: bool = False
        self.config: DecoderConfig = DecoderConfig.from_env()

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s",
            force=True,
        )

    def load(self, fits_file: Path) -> FitsParser:
        """Read and decode a FITS file with the current configuration."""
        return FitsParser.from_file(fits_file, self.config)


pass_context = click.make_pass_decorator(Context, ensure=True)


def _select_entry(fits: FitsParser, index: Optional[int]):
    """Pick an entry by index, or the Primary entry when index is None."""
    if index is None:
        entry = fits.get_primary()
        if entry is None:
            raise click.BadParameter("file contains no entries")
        return entry
    if not 0 <= index < len(fits):
        raise click.BadParameter(
            f"entry {index} out of range (file has {len(fits)} entries)"
        )
    return fits[index]


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="fitsdump")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging)",
)
@click.option(
    "--absolute-bitpix",
    is_flag=True,
    help="Size floating-point data by |BITPIX| instead of failing on negative BITPIX",
)
@pass_context
def main(ctx: Context, verbose: bool, absolute_bitpix: bool) -> None:
    """
    FITS file inspector.

    Decode FITS files and inspect their headers and data.

    \b
    Commands:
      dump      Print all entries and header cards
      info      Summarize entries
      keyword   Print a header keyword value
      render    Write a PNG preview of an image

    \b
    Examples:
      fitsdump dump m31.fits
      fitsdump info m31.fits
      fitsdump keyword m31.fits NAXIS1
      fitsdump render m31.fits -o m31.png
    """
    ctx.verbose = verbose
    if absolute_bitpix:
        ctx.config.absolute_bitpix = True
    ctx.setup_logging()


# =============================================================================
# Dump Command
# =============================================================================

@main.command("dump")
@click.argument(
    "fits_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_dump(ctx: Context, fits_file: Path) -> None:
    """
    Print every entry with its header cards and data size.

    \b
    Output format:
      FITS Entry: Primary
      Header:
      SIMPLE = T // conforms to FITS standard
      BITPIX = 16
      Data: 2880 bytes
    """
    try:
        fits = ctx.load(fits_file)
        for line in iter_dump_lines(fits.entries):
            click.echo(line)
    except Exception as e:
        handle_cli_exception(e, ctx.verbose, "Decode")


# =============================================================================
# Info Command
# =============================================================================

@main.command("info")
@click.argument(
    "fits_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_info(ctx: Context, fits_file: Path) -> None:
    """
    Summarize the entries of a FITS file.

    \b
    Example:
      fitsdump info m31.fits
    """
    try:
        fits = ctx.load(fits_file)
        info = fits.get_info()

        click.echo(f"FITS Information: {fits_file}")
        click.echo("=" * 40)
        click.echo(f"File size:   {info['file_size']} bytes")
        click.echo(f"Entries:     {info['entry_count']}")
        click.echo()

        click.echo(f"{'#':<3} {'Kind':<22} {'Offset':>10} {'Header':>8} {'Data':>10}  State")
        click.echo("-" * 68)
        for index, entry in enumerate(fits.entries):
            click.echo(
                f"{index:<3} {entry.kind.value:<22} {entry.offset:>10} "
                f"{entry.header_size:>8} {len(entry.data):>10}  "
                f"{entry.header_state.value}"
            )

        if info["truncated_headers"]:
            click.echo(f"\nWarning: {info['truncated_headers']} header(s) without END card")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose, "Decode")


# =============================================================================
# Keyword Command
# =============================================================================

@main.command("keyword")
@click.argument(
    "fits_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("name")
@click.option(
    "-e", "--entry",
    "entry_index",
    type=int,
    default=None,
    help="Entry index (default: Primary)",
)
@click.option(
    "-a", "--all",
    "show_all",
    is_flag=True,
    help="Show every card with this keyword, not just the first",
)
@click.option(
    "-t", "--typed",
    is_flag=True,
    help="Show the decoded value and its type instead of the raw text",
)
@pass_context
def cmd_keyword(
    ctx: Context,
    fits_file: Path,
    name: str,
    entry_index: Optional[int],
    show_all: bool,
    typed: bool,
) -> None:
    """
    Print the value of a header keyword.

    \b
    Examples:
      fitsdump keyword m31.fits NAXIS1
      fitsdump keyword m31.fits HISTORY --all
      fitsdump keyword m31.fits BITPIX --typed
      fitsdump keyword m31.fits XTENSION -e 1
    """
    try:
        fits = ctx.load(fits_file)
        entry = _select_entry(fits, entry_index)
        name = name.upper()

        if not entry.param_exists(name):
            click.echo(f"Error: Keyword '{name}' not found in {entry.kind.value} entry", err=True)
            sys.exit(ExitCode.KEYWORD_NOT_FOUND)

        params = list(entry.iter_params(name)) if show_all else [entry.get_param(name)]
        for param in params:
            if typed:
                click.echo(f"{param.name} = {param.value.format()} ({param.value.kind.value})")
            else:
                click.echo(format_param(param))

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Render Command
# =============================================================================

@main.command("render")
@click.argument(
    "fits_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output PNG file path (required)",
)
@click.option(
    "-s", "--scale",
    type=click.IntRange(min=1),
    default=1,
    help="Pixel scale factor (default: 1)",
)
@click.option(
    "-e", "--entry",
    "entry_index",
    type=int,
    default=None,
    help="Entry index (default: Primary)",
)
@click.option(
    "--invert",
    is_flag=True,
    help="Draw bright samples dark",
)
@pass_context
def cmd_render(
    ctx: Context,
    fits_file: Path,
    output: Path,
    scale: int,
    entry_index: Optional[int],
    invert: bool,
) -> None:
    """
    Write a grayscale PNG preview of an image entry.

    Samples are scaled linearly between their minimum and maximum.

    \b
    Examples:
      fitsdump render m31.fits -o m31.png
      fitsdump render m31.fits -o m31.png -s 4 --invert
    """
    try:
        fits = ctx.load(fits_file)
        entry = _select_entry(fits, entry_index)

        if entry.kind not in (EntryKind.PRIMARY, EntryKind.IMAGE_EXTENSION):
            raise RenderError(f"{entry.kind.value} entry is not an image")

        png = render_image(entry, scale=scale, invert=invert)
        if png is None:
            raise RenderError("Image rendering requires PIL. Install with: pip install Pillow")

        output.write_bytes(png)
        click.echo(
            f"Rendered {entry.get_int('NAXIS1')}x{entry.get_int('NAXIS2')} "
            f"image to {output}"
        )

    except Exception as e:
        handle_cli_exception(e, ctx.verbose, "Render")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
