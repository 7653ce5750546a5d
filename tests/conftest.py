"""
FITS Test Configuration
=======================

Fixtures that build synthetic FITS buffers block by block.

Cards are written the way FITS writers lay them out: keyword padded to
8 columns, "= " in columns 9-10, value right-justified to column 30.
"""

from typing import Callable, Optional

import pytest

BLOCK = 2880
CARD = 80


def _card(key: str, value: Optional[str] = None, comment: Optional[str] = None) -> str:
    """Format one 80-character card."""
    if value is None:
        text = key
    else:
        text = f"{key:<8}= {value:>20}"
        if comment is not None:
            text += f" / {comment}"
    return text.ljust(CARD)[:CARD]


def _header(*cards: str, end: bool = True) -> bytes:
    """Join cards, append END and pad with blanks to whole blocks."""
    text = "".join(c.ljust(CARD)[:CARD] for c in cards)
    if end:
        text += "END".ljust(CARD)
    padding = -len(text) % BLOCK
    return (text + " " * padding).encode("latin-1")


def _data(payload: bytes) -> bytes:
    """Pad a data payload with zeros to whole blocks."""
    return payload + bytes(-len(payload) % BLOCK)


@pytest.fixture
def card() -> Callable[..., str]:
    """Factory fixture: card("BITPIX", "16") -> 80-character card."""
    return _card


@pytest.fixture
def header() -> Callable[..., bytes]:
    """Factory fixture: header(card1, card2, ...) -> header blocks."""
    return _header


@pytest.fixture
def data_blocks() -> Callable[[bytes], bytes]:
    """Factory fixture: data_blocks(payload) -> zero-padded data blocks."""
    return _data


@pytest.fixture
def simple_fits() -> bytes:
    """
    One Primary entry: a 2x2 8-bit image holding bytes 1, 2, 3, 4.

    Layout:
        0     header block (SIMPLE, BITPIX, NAXIS, NAXIS1, NAXIS2, END)
        2880  data block (4 bytes + padding)
    """
    return _header(
        _card("SIMPLE", "T", "conforms"),
        _card("BITPIX", "8"),
        _card("NAXIS", "2"),
        _card("NAXIS1", "2"),
        _card("NAXIS2", "2"),
    ) + _data(bytes([1, 2, 3, 4]))


@pytest.fixture
def multi_entry_fits() -> bytes:
    """
    Primary + IMAGE + TABLE + BINTABLE.

    Layout:
        0      Primary header (NAXIS = 0, no data)
        2880   IMAGE header, 16-bit 10x300 image (6000 bytes -> 3 blocks)
        14400  TABLE header, 20x5 ASCII table (1 block)
        20160  BINTABLE header, 12x3 binary table (1 block)
        25920  end
    """
    primary = _header(
        _card("SIMPLE", "T"),
        _card("BITPIX", "8"),
        _card("NAXIS", "0"),
        _card("EXTEND", "T"),
        "HISTORY first",
        "HISTORY second",
    )
    image = _header(
        _card("XTENSION", "'IMAGE   '", "image extension"),
        _card("BITPIX", "16"),
        _card("NAXIS", "2"),
        _card("NAXIS1", "10"),
        _card("NAXIS2", "300"),
    ) + _data(bytes(6000))
    table = _header(
        _card("XTENSION", "'TABLE   '"),
        _card("BITPIX", "8"),
        _card("NAXIS", "2"),
        _card("NAXIS1", "20"),
        _card("NAXIS2", "5"),
    ) + _data(b"x" * 100)
    bintable = _header(
        _card("XTENSION", "'BINTABLE'"),
        _card("BITPIX", "8"),
        _card("NAXIS", "2"),
        _card("NAXIS1", "12"),
        _card("NAXIS2", "3"),
        _card("PCOUNT", "0"),
        _card("GCOUNT", "1"),
    ) + _data(bytes(range(36)))
    return primary + image + table + bintable
