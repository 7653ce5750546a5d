"""
fitsdecode - FITS File Decoder
==============================

This package decodes FITS astronomical files from an in-memory byte
buffer into an ordered list of entries (the Primary record followed by
any extensions), each with its parsed header cards and raw data bytes.

Main Components
---------------
- **fits**: Block segmentation, card parsing and keyword lookup
    Decodes a buffer into Entry objects (FitsParser)

- **config**: Decoder settings (DecoderConfig)

- **cli**: Command-line tools (fitsdump)
    Dumps headers, summarizes entries, renders image previews

Quick Start
-----------
Decode a file:
    >>> from fitsdecode import FitsParser
    >>> fits = FitsParser.from_file("m31.fits")
    >>> for entry in fits:
    ...     print(entry.kind.value, len(entry.header), len(entry.data))

Or use the command-line tool:
    $ fitsdump dump m31.fits
    $ fitsdump render m31.fits -o m31.png

Reference Documentation
-----------------------
- FITS Standard: https://fits.gsfc.nasa.gov/fits_standard.html
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from fitsdecode.config import DecoderConfig
from fitsdecode.errors import (
    FitsError,
    FitsFormatError,
    MissingKeywordError,
    KeywordTypeError,
    NegativeDataSizeError,
    TruncatedDataError,
    RenderError,
)

from fitsdecode.fits import (
    BLOCK_SIZE,
    CARD_SIZE,
    EntryKind,
    ValueKind,
    HeaderState,
    ParamValue,
    Param,
    Entry,
    FitsParser,
    decode_entry,
    parse_card,
    parse_fits,
    parse_fits_file,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "DecoderConfig",
    # Exception hierarchy
    "FitsError",
    "FitsFormatError",
    "MissingKeywordError",
    "KeywordTypeError",
    "NegativeDataSizeError",
    "TruncatedDataError",
    "RenderError",
    # Decoder
    "BLOCK_SIZE",
    "CARD_SIZE",
    "EntryKind",
    "ValueKind",
    "HeaderState",
    "ParamValue",
    "Param",
    "Entry",
    "FitsParser",
    "decode_entry",
    "parse_card",
    "parse_fits",
    "parse_fits_file",
]
