"""
Diagnostic Dump
===============

Text listing of a decoded FITS file: for each entry its kind, every
header card and the size of the data segment.

Output format:

    FITS Entry: Primary
    Header:
    SIMPLE = T // conforms
    BITPIX = 16
    END =
    Data: 2880 bytes
"""

from typing import Iterable, Iterator

from fitsdecode.fits.records import Entry, Param


def format_param(param: Param) -> str:
    """Format one card as 'NAME = VALUE // COMMENT' or 'NAME = VALUE'."""
    if param.comment is not None:
        return f"{param.name} = {param.raw_value} // {param.comment}"
    return f"{param.name} = {param.raw_value}"


def iter_dump_lines(entries: Iterable[Entry]) -> Iterator[str]:
    """Yield the dump listing line by line."""
    for entry in entries:
        yield f"FITS Entry: {entry.kind.value}"
        yield "Header:"
        for param in entry.header:
            yield format_param(param)
        yield f"Data: {len(entry.data)} bytes"
        yield " "


def format_dump(entries: Iterable[Entry]) -> str:
    """Return the whole dump listing as one string."""
    return "\n".join(iter_dump_lines(entries))
