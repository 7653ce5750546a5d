"""
FITS File Decoding
==================

This module decodes FITS (Flexible Image Transport System) files held
in memory. A FITS file is a sequence of 2880-byte blocks holding a
Primary record and zero or more extensions, each made of a text header
and a binary data segment.

This module provides:
- **FitsParser**: Decode a whole buffer into an ordered list of entries
- **decode_entry**: Decode a single entry and get the next offset
- **parse_card**: Decode one 80-character header card
- **Record types**: Entry, Param, ParamValue and their enums
- **Collaborators**: a text dumper and a grayscale image renderer

Quick Start
-----------
Decoding a file:

    >>> from fitsdecode.fits import FitsParser
    >>> fits = FitsParser.from_file("m31.fits")
    >>> primary = fits.get_primary()
    >>> primary.get_int("BITPIX")
    16

Looking at the header:

    >>> for param in primary.header:
    ...     print(param.name, param.raw_value, param.comment)

Supported Entry Kinds
---------------------
- **Primary**: always the first entry
- **IMAGE**, **TABLE**, **BINTABLE**: standard extensions
- Anything else is decoded as an Unresolved entry whose data runs up to
  the next block starting with XTENSION

Reference
---------
- FITS Standard 4.0: https://fits.gsfc.nasa.gov/fits_standard.html
"""

# =============================================================================
# Public API Exports
# =============================================================================

# Block arithmetic
from fitsdecode.fits.blocks import (
    BLOCK_SIZE,
    CARD_SIZE,
    CARDS_PER_BLOCK,
    round_up_to_block,
    is_block_aligned,
)

# Record type definitions and enums
from fitsdecode.fits.records import (
    # Enums
    EntryKind,
    ValueKind,
    HeaderState,
    # Data structures
    ParamValue,
    Param,
    Entry,
)

# Card parser
from fitsdecode.fits.cards import (
    parse_card,
    coerce_value,
)

# Parser classes and functions
from fitsdecode.fits.parser import (
    FitsParser,
    decode_entry,
    iter_entries,
    parse_fits,
    parse_fits_file,
)

# Collaborators
from fitsdecode.fits.dump import (
    format_param,
    format_dump,
    iter_dump_lines,
)
from fitsdecode.fits.render import (
    decode_samples,
    render_image,
)

# =============================================================================
# Module-level __all__ for explicit exports
# =============================================================================

__all__ = [
    # Block arithmetic
    "BLOCK_SIZE",
    "CARD_SIZE",
    "CARDS_PER_BLOCK",
    "round_up_to_block",
    "is_block_aligned",
    # Enums
    "EntryKind",
    "ValueKind",
    "HeaderState",
    # Data structures
    "ParamValue",
    "Param",
    "Entry",
    # Card parser
    "parse_card",
    "coerce_value",
    # Parser
    "FitsParser",
    "decode_entry",
    "iter_entries",
    "parse_fits",
    "parse_fits_file",
    # Dump
    "format_param",
    "format_dump",
    "iter_dump_lines",
    # Render
    "decode_samples",
    "render_image",
]
