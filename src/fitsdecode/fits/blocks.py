"""
FITS Block Arithmetic
=====================

A FITS file is a sequence of 2880-byte blocks. Headers are made of
80-byte cards (36 per block) and every header and data segment starts
on a block boundary, so all sizes derived from keywords are rounded up
to the next multiple of BLOCK_SIZE.

Reference
---------
- FITS Standard 4.0, section 3.1 (overall file structure)
"""

# Size of one FITS block in bytes
BLOCK_SIZE = 2880

# Size of one header card in bytes (characters)
CARD_SIZE = 80

# Number of header cards that fit in one block
CARDS_PER_BLOCK = BLOCK_SIZE // CARD_SIZE

# Marker at the start of every extension header
XTENSION_MARKER = b"XTENSION"


def round_up_to_block(size: int) -> int:
    """
    Round a byte count up to the next multiple of BLOCK_SIZE.

    Sizes already on a boundary are returned unchanged, so
    round_up_to_block(0) == 0 and round_up_to_block(2880) == 2880.
    Negative sizes are returned unchanged; callers decide whether a
    negative size is an error.

    Args:
        size: Byte count to align

    Returns:
        Aligned byte count

    Example:
        >>> round_up_to_block(4)
        2880
        >>> round_up_to_block(2881)
        5760
    """
    if size <= 0:
        return size
    return -(-size // BLOCK_SIZE) * BLOCK_SIZE


def is_block_aligned(value: int) -> bool:
    """Check whether an offset or size lies on a block boundary."""
    return value % BLOCK_SIZE == 0
