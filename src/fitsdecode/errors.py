"""
fitsdecode Error Hierarchy
==========================

This module defines the exception hierarchy for the FITS decoder.
All exceptions inherit from FitsError, allowing callers to catch all
decoder-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
FitsError (base)
├── FitsFormatError (malformed file, decode aborted)
│   ├── MissingKeywordError - required structural keyword absent
│   ├── KeywordTypeError - structural keyword has a non-integer value
│   ├── NegativeDataSizeError - BITPIX/NAXISn produce a negative size
│   └── TruncatedDataError - data segment runs past the end of the buffer
└── RenderError (pixel rendering)

Design Philosophy
-----------------
Only structural problems that make the rest of the buffer impossible to
segment are raised. Everything else (unparseable cards, headers without
END, unknown extension kinds) is absorbed into the decoded entries and
reported through logging.

Error messages follow this format:
    offset 2880: error: description
    hint: suggestion for fixing (when available)
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class FitsError(Exception):
    """
    Base exception for all fitsdecode errors.

        try:
            fits = FitsParser.from_bytes(data)
        except FitsError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Format Exceptions
# =============================================================================

class FitsFormatError(FitsError):
    """
    Invalid FITS file structure.

    Attributes:
        message: The error description
        offset: Byte offset of the entry being decoded (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.offset = offset
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with offset and hint.

        Example output:
            offset 2880: error: missing NAXIS2 keyword
            hint: NAXIS = 2 requires NAXIS1..NAXIS2
        """
        parts = []

        if self.offset is not None:
            parts.append(f"offset {self.offset}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class MissingKeywordError(FitsFormatError):
    """
    A keyword required to size the data segment is missing.

    Raised for Primary, IMAGE, TABLE and BINTABLE entries lacking
    BITPIX, NAXIS, or one of NAXIS1..NAXISn.
    """

    def __init__(
        self,
        keyword: str,
        offset: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        self.keyword = keyword
        super().__init__(f"missing {keyword} keyword", offset=offset, hint=hint)


class KeywordTypeError(FitsFormatError):
    """A structural keyword is present but its value is not an integer."""

    def __init__(
        self,
        keyword: str,
        raw_value: str,
        offset: Optional[int] = None,
    ):
        self.keyword = keyword
        self.raw_value = raw_value
        super().__init__(
            f"{keyword} must be an integer, got {raw_value!r}",
            offset=offset,
        )


class NegativeDataSizeError(FitsFormatError):
    """
    The data size computed from BITPIX and NAXISn is negative.

    Floating-point images use a negative BITPIX; the literal
    BITPIX / 8 element size then goes negative. Decoding such files
    requires DecoderConfig(absolute_bitpix=True).
    """

    def __init__(self, size: int, offset: Optional[int] = None):
        self.size = size
        super().__init__(
            f"computed data size is negative ({size} bytes)",
            offset=offset,
            hint="negative BITPIX denotes floating-point samples; "
                 "enable absolute_bitpix to size them by |BITPIX|",
        )


class TruncatedDataError(FitsFormatError):
    """The data segment declared by the header extends past the buffer."""

    def __init__(
        self,
        expected: int,
        available: int,
        offset: Optional[int] = None,
    ):
        self.expected = expected
        self.available = available
        super().__init__(
            f"data segment needs {expected} bytes but only "
            f"{available} remain",
            offset=offset,
        )


# =============================================================================
# Rendering Exceptions
# =============================================================================

class RenderError(FitsError):
    """
    The entry cannot be rendered as an image.

    Raised when an entry lacks a 2-D image (NAXIS < 2), uses an
    unsupported BITPIX, or its data segment is too short for the
    declared dimensions.
    """
    pass
