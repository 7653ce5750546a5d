"""
FITS Entry Segmenter and Parser
===============================

This module walks a FITS byte buffer block by block and splits it into
entries (the Primary record followed by any extensions).

Segmentation
------------
For each entry the segmenter:

1. Reads 80-byte cards from the entry offset until an END card (or the
   end of the buffer) and rounds the header up to whole blocks.
2. Resolves the entry kind: the first entry is Primary, later entries
   are classified by XTENSION (IMAGE, TABLE, BINTABLE).
3. Sizes the data segment. Known kinds use
       |data| = NAXIS1 * ... * NAXISn * BITPIX / 8
   Unresolved kinds scan forward, one block at a time, for the next
   block starting with "XTENSION".
4. Rounds the data size up to whole blocks, extracts the bytes and
   returns the offset of the next entry.

Missing BITPIX, NAXIS or NAXISn on a known kind aborts the decode;
everything else is absorbed into the decoded entries.

Usage Examples
--------------
Decoding a buffer:
    >>> from fitsdecode.fits import FitsParser
    >>> fits = FitsParser.from_bytes(data)
    >>> primary = fits.get_primary()
    >>> print(primary.get_int("NAXIS1"), primary.get_int("NAXIS2"))

Decoding one entry at a time:
    >>> entry, next_offset = decode_entry(data, 0)

Reference
---------
- FITS Standard 4.0, sections 3 and 4
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union
import logging

from fitsdecode.config import DecoderConfig
from fitsdecode.errors import (
    FitsError,
    FitsFormatError,
    KeywordTypeError,
    MissingKeywordError,
    NegativeDataSizeError,
    TruncatedDataError,
)
from fitsdecode.fits.blocks import (
    BLOCK_SIZE,
    CARD_SIZE,
    XTENSION_MARKER,
    is_block_aligned,
    round_up_to_block,
)
from fitsdecode.fits.cards import parse_card
from fitsdecode.fits.records import (
    Entry,
    EntryKind,
    HeaderState,
    Param,
    ValueKind,
)

# Logger for this module
logger = logging.getLogger(__name__)

BufferLike = Union[bytes, bytearray, memoryview]


# =============================================================================
# Header Scan
# =============================================================================

def _scan_header(
    buffer: BufferLike, offset: int
) -> tuple[list[Param], int, HeaderState]:
    """
    Decode cards from offset until END or the end of the buffer.

    Returns:
        Tuple of (cards, offset just past the last card read, final state)
    """
    header: list[Param] = []
    state = HeaderState.SCANNING

    while state is HeaderState.SCANNING:
        if offset >= len(buffer):
            state = HeaderState.TRUNCATED
            break

        raw = bytes(buffer[offset:offset + CARD_SIZE])
        param = parse_card(raw.decode("latin-1"))
        header.append(param)
        offset += len(raw)

        if param.is_end:
            state = HeaderState.TERMINATED
        elif param.is_garbage:
            logger.debug(f"Unparseable card at offset {offset - len(raw)}: {param.comment!r}")

    return header, offset, state


def _resolve_kind(header: list[Param], is_first: bool) -> EntryKind:
    """Classify an entry from its position and XTENSION keyword."""
    if is_first:
        return EntryKind.PRIMARY

    for param in header:
        if param.name == "XTENSION":
            if param.value.kind is ValueKind.STRING:
                return EntryKind.from_xtension(param.value.payload)
            return EntryKind.UNRESOLVED

    return EntryKind.UNRESOLVED


# =============================================================================
# Data Sizing
# =============================================================================

def _require_int(header: list[Param], keyword: str, offset: int, hint: Optional[str] = None) -> int:
    """Get the integer value of the first card named keyword."""
    for param in header:
        if param.name == keyword:
            if param.value.kind is not ValueKind.INTEGER:
                raise KeywordTypeError(keyword, param.raw_value, offset=offset)
            return param.value.payload
    raise MissingKeywordError(keyword, offset=offset, hint=hint)


def _computed_data_size(
    header: list[Param], offset: int, config: DecoderConfig
) -> int:
    """
    Data size of a known-kind entry from BITPIX and NAXISn.

    The element size is BITPIX / 8 truncated toward zero; the sign of
    BITPIX is kept unless config.absolute_bitpix is set.
    """
    bitpix = _require_int(header, "BITPIX", offset)
    naxis = _require_int(header, "NAXIS", offset)

    if config.absolute_bitpix:
        bitpix = abs(bitpix)
    element_size = int(bitpix / 8)

    num_elements = 0 if naxis == 0 else 1
    for axis in range(1, naxis + 1):
        num_elements *= _require_int(
            header,
            f"NAXIS{axis}",
            offset,
            hint=f"NAXIS = {naxis} requires NAXIS1..NAXIS{naxis}",
        )

    size = num_elements * element_size
    logger.debug(
        f"Entry at {offset}: BITPIX={bitpix} NAXIS={naxis} "
        f"elements={num_elements} size={size}"
    )
    return size


def _scan_for_next_extension(buffer: BufferLike, data_offset: int) -> int:
    """
    Data size of an unresolved entry, found by searching for XTENSION.

    Looks at the first 8 bytes of every block from data_offset on. The
    data runs up to the first block that starts with "XTENSION", or to
    the end of the buffer when there is none.
    """
    candidate = data_offset
    while candidate < len(buffer):
        if bytes(buffer[candidate:candidate + len(XTENSION_MARKER)]) == XTENSION_MARKER:
            logger.debug(f"Next XTENSION found at offset {candidate}")
            return candidate - data_offset
        candidate += BLOCK_SIZE
    return max(0, len(buffer) - data_offset)


# =============================================================================
# Entry Segmenter
# =============================================================================

def _pad_to_block(buffer: BufferLike) -> BufferLike:
    """Zero-pad a buffer whose length is not a whole number of blocks."""
    if is_block_aligned(len(buffer)):
        return buffer
    padding = round_up_to_block(len(buffer)) - len(buffer)
    logger.warning(
        f"Buffer length {len(buffer)} is not a multiple of {BLOCK_SIZE}; "
        f"padding with {padding} zero bytes"
    )
    return bytes(buffer) + bytes(padding)


def decode_entry(
    buffer: BufferLike,
    offset: int,
    config: Optional[DecoderConfig] = None,
) -> tuple[Entry, int]:
    """
    Decode the entry starting at offset.

    A buffer that is not block aligned is zero-padded to the next block
    boundary first; the entry at offset 0 is the Primary record.

    Args:
        buffer: The whole file contents
        offset: Byte offset of the entry's first card
        config: Decoder settings (defaults when None)

    Returns:
        Tuple of (entry, offset of the next entry)

    Raises:
        MissingKeywordError: BITPIX, NAXIS or NAXISn absent on a known kind
        KeywordTypeError: One of those keywords is not an integer
        NegativeDataSizeError: The computed data size is negative
        TruncatedDataError: The data segment runs past the buffer
    """
    if config is None:
        config = DecoderConfig()

    buffer = _pad_to_block(buffer)
    header, header_end, state = _scan_header(buffer, offset)
    if state is HeaderState.TRUNCATED:
        logger.warning(f"Entry at offset {offset}: header has no END card")

    header_size = round_up_to_block(header_end) - offset
    data_offset = offset + header_size

    kind = _resolve_kind(header, is_first=(offset == 0))

    if kind.is_known:
        data_size = _computed_data_size(header, offset, config)
        if data_size < 0:
            raise NegativeDataSizeError(data_size, offset=offset)
    else:
        xtension = next((p.raw_value for p in header if p.name == "XTENSION"), None)
        logger.info(
            f"Entry at offset {offset}: unresolved extension "
            f"(XTENSION={xtension}), searching for next XTENSION block"
        )
        data_size = _scan_for_next_extension(buffer, data_offset)

    data_size = round_up_to_block(data_size)
    available = max(0, len(buffer) - data_offset)
    if data_size > available:
        raise TruncatedDataError(data_size, available, offset=offset)

    if config.copy_data:
        data = bytes(buffer[data_offset:data_offset + data_size])
    else:
        data = memoryview(buffer)[data_offset:data_offset + data_size]

    entry = Entry(
        kind=kind,
        header=tuple(header),
        offset=offset,
        header_size=header_size,
        data=data,
        header_state=state,
    )
    logger.debug(
        f"Decoded {kind.value} at offset {offset}: "
        f"{len(header)} cards, header {header_size} bytes, data {data_size} bytes"
    )
    return entry, data_offset + data_size


def iter_entries(
    buffer: BufferLike, config: Optional[DecoderConfig] = None
) -> Iterator[Entry]:
    """
    Decode entries one at a time, in file order.

    A buffer shorter than one block yields nothing. A buffer whose
    length is not a whole number of blocks is decoded as if it were
    zero-padded to the next block boundary.
    """
    if config is None:
        config = DecoderConfig()

    if len(buffer) < BLOCK_SIZE:
        logger.debug(f"Buffer too small for FITS ({len(buffer)} bytes)")
        return

    buffer = _pad_to_block(buffer)

    offset = 0
    while offset < len(buffer):
        entry, offset = decode_entry(buffer, offset, config)
        yield entry


# =============================================================================
# FITS Parser
# =============================================================================

@dataclass
class FitsParser:
    """
    Decoded FITS file.

    Decoding happens once, at construction. A fatal structural error
    is re-raised and no partial result is kept.

    Attributes:
        data: The raw file bytes
        config: Decoder settings
        entries: Decoded entries, in file order
        is_valid: True when decoding completed
        error_message: Message of the error that aborted decoding

    Example:
        >>> fits = FitsParser.from_file("m31.fits")
        >>> for entry in fits.entries:
        ...     print(entry.kind.value, len(entry.data))
    """
    # Raw file data (private, not exposed in repr)
    data: BufferLike = field(repr=False)

    config: DecoderConfig = field(default_factory=DecoderConfig)

    entries: list[Entry] = field(default_factory=list)

    is_valid: bool = False

    error_message: Optional[str] = None

    def __post_init__(self) -> None:
        """Decode the buffer after initialization."""
        self._parse()

    @classmethod
    def from_file(
        cls, filepath: Union[str, Path], config: Optional[DecoderConfig] = None
    ) -> "FitsParser":
        """
        Create a FitsParser from a file path.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FitsFormatError: If the file cannot be decoded
        """
        filepath = Path(filepath)
        data = filepath.read_bytes()
        return cls.from_bytes(data, config)

    @classmethod
    def from_bytes(
        cls, data: BufferLike, config: Optional[DecoderConfig] = None
    ) -> "FitsParser":
        """Create a FitsParser from raw bytes."""
        if config is None:
            config = DecoderConfig()
        return cls(data=data, config=config)

    def _parse(self) -> None:
        """Decode every entry in the buffer."""
        try:
            self.entries = list(iter_entries(self.data, self.config))
            self.is_valid = True
        except FitsError as e:
            self.entries = []
            self.is_valid = False
            self.error_message = str(e)
            logger.error(f"Failed to decode FITS: {e}")
            raise
        except Exception as e:
            self.entries = []
            self.is_valid = False
            self.error_message = str(e)
            logger.error(f"Unexpected error decoding FITS: {e}")
            raise FitsFormatError(f"Failed to decode FITS: {e}") from e

    # =========================================================================
    # Public Query Methods
    # =========================================================================

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def find_by_kind(self, kind: EntryKind) -> Optional[Entry]:
        """
        Get the first entry of the given kind.

        Returns:
            The Entry if found, None otherwise
        """
        for entry in self.entries:
            if entry.kind == kind:
                return entry
        return None

    def get_primary(self) -> Optional[Entry]:
        """Get the Primary entry, None for an empty result."""
        return self.find_by_kind(EntryKind.PRIMARY)

    def iter_kind(self, kind: EntryKind) -> Iterator[Entry]:
        """Iterate over all entries of the given kind."""
        for entry in self.entries:
            if entry.kind == kind:
                yield entry

    def get_info(self) -> dict:
        """
        Get summary information about the file.

        Returns:
            Dictionary with file information
        """
        kinds: dict[str, int] = {}
        for entry in self.entries:
            kinds[entry.kind.value] = kinds.get(entry.kind.value, 0) + 1

        return {
            "file_size": len(self.data),
            "entry_count": len(self.entries),
            "kinds": kinds,
            "header_bytes": sum(e.header_size for e in self.entries),
            "data_bytes": sum(len(e.data) for e in self.entries),
            "truncated_headers": sum(
                1 for e in self.entries if e.header_state is HeaderState.TRUNCATED
            ),
        }


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_fits(data: BufferLike, config: Optional[DecoderConfig] = None) -> FitsParser:
    """
    Decode a FITS file from bytes.

    Raises:
        FitsFormatError: If the data is not a decodable FITS file
    """
    return FitsParser.from_bytes(data, config)


def parse_fits_file(
    filepath: Union[str, Path], config: Optional[DecoderConfig] = None
) -> FitsParser:
    """
    Decode a FITS file from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        FitsFormatError: If the file is not a decodable FITS file
    """
    return FitsParser.from_file(filepath, config)
