"""
FITS Record Type Definitions
============================

This module defines the data structures produced by the decoder. These
records are the fundamental building blocks of a decoded FITS file.

File Structure Overview
-----------------------
A FITS file contains one or more entries (HDUs):
1. Primary entry: always first, header starts with SIMPLE
2. Extensions (optional): header starts with XTENSION

Each entry is:
   - Header (1+ blocks): 80-character cards, terminated by END
   - Data (0+ blocks): size derived from BITPIX and NAXISn

Header Card Format
------------------
    Columns 1-8:   Keyword
    Columns 9-10:  "= " value indicator
    Columns 11-80: Value, optionally followed by "/ comment"

Value Types
-----------
- Logical:  T or F
- String:   'text', quotes doubled inside ('it''s')
- Integer:  optionally signed decimal
- Float:    decimal with "." and optional E/D exponent
- Complex:  (real, imaginary), integer or floating

Reference
---------
- FITS Standard 4.0: https://fits.gsfc.nasa.gov/fits_standard.html
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union


# =============================================================================
# Enumeration Types
# =============================================================================

class EntryKind(Enum):
    """
    Classification of a decoded entry.

    The first entry in a file is always PRIMARY. Later entries are
    classified by their XTENSION keyword; anything the decoder does not
    know how to size is UNRESOLVED.
    """
    PRIMARY = "Primary"
    IMAGE_EXTENSION = "ImageExtension"
    ASCII_TABLE_EXTENSION = "AsciiTableExtension"
    BINARY_TABLE_EXTENSION = "BinaryTableExtension"
    UNRESOLVED = "Unresolved"

    @classmethod
    def from_xtension(cls, xtension: str) -> "EntryKind":
        """
        Map an XTENSION value to an extension kind.

        Trailing blanks are insignificant ('IMAGE   ' is IMAGE).
        """
        kinds = {
            "IMAGE": cls.IMAGE_EXTENSION,
            "TABLE": cls.ASCII_TABLE_EXTENSION,
            "BINTABLE": cls.BINARY_TABLE_EXTENSION,
        }
        return kinds.get(xtension.rstrip(), cls.UNRESOLVED)

    @property
    def is_known(self) -> bool:
        """True if the data size can be computed from keywords."""
        return self is not EntryKind.UNRESOLVED

    def get_description(self) -> str:
        """Get a human-readable description of the entry kind."""
        descriptions = {
            EntryKind.PRIMARY: "Primary HDU",
            EntryKind.IMAGE_EXTENSION: "IMAGE extension",
            EntryKind.ASCII_TABLE_EXTENSION: "ASCII TABLE extension",
            EntryKind.BINARY_TABLE_EXTENSION: "BINTABLE extension",
            EntryKind.UNRESOLVED: "Unresolved extension",
        }
        return descriptions[self]


class ValueKind(Enum):
    """Variants of a decoded keyword value."""
    ABSENT = "absent"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOATING = "floating"
    STRING = "string"
    COMPLEX_INTEGER = "complex-integer"
    COMPLEX_FLOATING = "complex-floating"


class HeaderState(Enum):
    """
    States of the per-entry header scan.

    SCANNING is only observed while cards are being read. A finished
    entry is TERMINATED (END card found) or TRUNCATED (buffer ran out).
    """
    SCANNING = "scanning"
    TERMINATED = "terminated"
    TRUNCATED = "truncated"


# Names of synthetic keywords produced by the card parser
END_KEYWORD = "END"
COMMENT_KEYWORD = "COMMENT"
HISTORY_KEYWORD = "HISTORY"
GARBAGE_KEYWORD = "GARBAGE"

# 64-bit signed integer range
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# =============================================================================
# Keyword Value
# =============================================================================

Payload = Union[None, bool, int, float, str, tuple[int, int], tuple[float, float]]


@dataclass(frozen=True)
class ParamValue:
    """
    Tagged keyword value.

    The kind tag says which Python type the payload holds:

        ABSENT            None
        BOOLEAN           bool
        INTEGER           int (64-bit signed range)
        FLOATING          float
        STRING            str
        COMPLEX_INTEGER   tuple[int, int]
        COMPLEX_FLOATING  tuple[float, float]

    Use the constructors (ParamValue.integer(16), ...) rather than the
    raw initializer so the payload always matches the tag.
    """
    kind: ValueKind = ValueKind.ABSENT
    payload: Payload = None

    @classmethod
    def absent(cls) -> "ParamValue":
        return cls()

    @classmethod
    def boolean(cls, value: bool) -> "ParamValue":
        return cls(ValueKind.BOOLEAN, bool(value))

    @classmethod
    def integer(cls, value: int) -> "ParamValue":
        if not INT64_MIN <= value <= INT64_MAX:
            raise OverflowError(f"{value} does not fit in a signed 64-bit integer")
        return cls(ValueKind.INTEGER, int(value))

    @classmethod
    def floating(cls, value: float) -> "ParamValue":
        return cls(ValueKind.FLOATING, float(value))

    @classmethod
    def string(cls, value: str) -> "ParamValue":
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def complex_integer(cls, real: int, imag: int) -> "ParamValue":
        for part in (real, imag):
            if not INT64_MIN <= part <= INT64_MAX:
                raise OverflowError(f"{part} does not fit in a signed 64-bit integer")
        return cls(ValueKind.COMPLEX_INTEGER, (int(real), int(imag)))

    @classmethod
    def complex_floating(cls, real: float, imag: float) -> "ParamValue":
        return cls(ValueKind.COMPLEX_FLOATING, (float(real), float(imag)))

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT

    def format(self) -> str:
        """
        Render the value for display.

        Strings are shown quoted, complex pairs as (a, b), booleans as
        T/F, matching how they are written in a header.
        """
        kind = self.kind
        if kind is ValueKind.ABSENT:
            return ""
        if kind is ValueKind.BOOLEAN:
            return "T" if self.payload else "F"
        if kind is ValueKind.STRING:
            return "'" + str(self.payload).replace("'", "''") + "'"
        if kind in (ValueKind.COMPLEX_INTEGER, ValueKind.COMPLEX_FLOATING):
            real, imag = self.payload
            return f"({real!r}, {imag!r})"
        if kind in (ValueKind.INTEGER, ValueKind.FLOATING):
            return repr(self.payload)
        raise AssertionError(f"Unhandled value kind {kind}")


# =============================================================================
# Header Card
# =============================================================================

@dataclass(frozen=True)
class Param:
    """
    One decoded header card.

    Attributes:
        name: Keyword (END, COMMENT, HISTORY and GARBAGE are synthetic)
        raw_value: Trimmed value text exactly as it appeared on the card
        value: Typed value (ABSENT for commentary and unparseable cards)
        comment: Text after "/", or the whole remainder for commentary
            and GARBAGE cards; None when the card has no comment
    """
    name: str
    raw_value: str = ""
    value: ParamValue = field(default_factory=ParamValue)
    comment: Optional[str] = None

    @property
    def is_end(self) -> bool:
        return self.name == END_KEYWORD

    @property
    def is_garbage(self) -> bool:
        return self.name == GARBAGE_KEYWORD

    @property
    def is_commentary(self) -> bool:
        return self.name in (COMMENT_KEYWORD, HISTORY_KEYWORD)


# =============================================================================
# Entry (HDU)
# =============================================================================

@dataclass(frozen=True)
class Entry:
    """
    One Primary record or extension.

    The decoded entries partition the buffer: every entry's
    offset + header_size + len(data) is the next entry's offset.

    Attributes:
        kind: Entry classification
        header: Decoded cards in file order, END card included if present
        offset: Byte offset of the first header card (block aligned)
        header_size: Header length rounded up to whole blocks
        data: Raw data segment, whole blocks (bytes or memoryview)
        header_state: How the header scan ended
    """
    kind: EntryKind
    header: tuple[Param, ...] = ()
    offset: int = 0
    header_size: int = 0
    data: Union[bytes, memoryview] = field(default=b"", repr=False)
    header_state: HeaderState = HeaderState.TERMINATED

    @property
    def data_offset(self) -> int:
        """Byte offset of the first data byte."""
        return self.offset + self.header_size

    @property
    def end_offset(self) -> int:
        """Byte offset just past this entry (start of the next one)."""
        return self.offset + self.header_size + len(self.data)

    # =========================================================================
    # Keyword Lookup
    # =========================================================================

    def param_exists(self, name: str) -> bool:
        """True if any card in the header has this keyword."""
        for param in self.header:
            if param.name == name:
                return True
        return False

    def get_param(self, name: str) -> Optional[Param]:
        """
        Get the first card with this keyword.

        Later duplicates (repeated HISTORY cards, for instance) are only
        reachable through iter_params() or the header tuple.
        """
        for param in self.header:
            if param.name == name:
                return param
        return None

    def iter_params(self, name: str) -> Iterator[Param]:
        """Iterate over every card with this keyword, in file order."""
        for param in self.header:
            if param.name == name:
                yield param

    def get_value(
        self,
        name: str,
        kind: Optional[ValueKind] = None,
        default: Any = None,
    ) -> Any:
        """
        Get the value of the first card with this keyword.

        Args:
            name: Keyword to look up
            kind: Required value kind; any kind is accepted when None
            default: Returned when the keyword is missing, its value is
                absent, or its value is not of the requested kind

        Returns:
            The value payload, or default

        Example:
            >>> entry.get_value("NAXIS1", ValueKind.INTEGER)
            100
        """
        param = self.get_param(name)
        if param is None or param.value.is_absent:
            return default
        if kind is not None and param.value.kind is not kind:
            return default
        return param.value.payload

    def get_int(self, name: str, default: Optional[int] = None) -> Optional[int]:
        return self.get_value(name, ValueKind.INTEGER, default)

    def get_float(self, name: str, default: Optional[float] = None) -> Optional[float]:
        return self.get_value(name, ValueKind.FLOATING, default)

    def get_str(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.get_value(name, ValueKind.STRING, default)

    def get_bool(self, name: str, default: Optional[bool] = None) -> Optional[bool]:
        return self.get_value(name, ValueKind.BOOLEAN, default)
