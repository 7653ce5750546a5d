"""
Primary Image Rendering
=======================

Turns the data segment of an image entry into a grayscale preview.

Samples are stored row-major, NAXIS1 samples per row, NAXIS2 rows, and
every multi-byte sample is big-endian (most significant byte first):

    BITPIX   Sample type
    ------   -----------
      8      unsigned byte
     16      signed 16-bit integer
     32      signed 32-bit integer
     64      signed 64-bit integer
    -32      IEEE 754 single precision
    -64      IEEE 754 double precision

Only the first NAXIS1 x NAXIS2 plane is rendered; higher axes are ignored.
"""

from typing import Optional, Union
import io
import logging
import math
import struct

from fitsdecode.errors import RenderError
from fitsdecode.fits.records import Entry

# Logger for this module
logger = logging.getLogger(__name__)

# struct format characters by BITPIX
SAMPLE_FORMATS = {
    8: "B",
    16: "h",
    32: "i",
    64: "q",
    -32: "f",
    -64: "d",
}

Sample = Union[int, float]


def decode_samples(entry: Entry) -> tuple[int, int, list[Sample]]:
    """
    Decode the first image plane of an entry.

    Args:
        entry: A Primary or IMAGE entry with NAXIS >= 2

    Returns:
        Tuple of (width, height, samples in row-major order)

    Raises:
        RenderError: If the entry has no 2-D image or too little data
    """
    bitpix = entry.get_int("BITPIX")
    naxis = entry.get_int("NAXIS", 0)
    width = entry.get_int("NAXIS1", 0)
    height = entry.get_int("NAXIS2", 0)

    if bitpix not in SAMPLE_FORMATS:
        raise RenderError(f"Unsupported BITPIX {bitpix}")
    if naxis < 2 or width <= 0 or height <= 0:
        raise RenderError(
            f"Entry has no 2-D image (NAXIS={naxis}, NAXIS1={width}, NAXIS2={height})"
        )

    fmt = SAMPLE_FORMATS[bitpix]
    count = width * height
    needed = count * struct.calcsize(fmt)
    if len(entry.data) < needed:
        raise RenderError(
            f"Data segment too short: {len(entry.data)} bytes, {needed} needed"
        )

    samples = list(struct.unpack(f">{count}{fmt}", bytes(entry.data[:needed])))
    return width, height, samples


def _is_finite(sample: Sample) -> bool:
    """Integer samples are always finite; floats may be NaN or infinite."""
    return not isinstance(sample, float) or math.isfinite(sample)


def to_gray_levels(samples: list[Sample], invert: bool = False) -> list[int]:
    """
    Scale samples linearly to 0-255 between their minimum and maximum.

    Non-finite samples (NaN, infinities in float images) map to 0.
    A constant image maps to 0 everywhere.
    """
    finite = [s for s in samples if _is_finite(s)]
    if not finite:
        return [0] * len(samples)

    low = min(finite)
    high = max(finite)
    span = high - low

    levels = []
    for sample in samples:
        if not _is_finite(sample):
            level = 0
        elif span == 0:
            level = 0
        else:
            level = int(round((sample - low) * 255 / span))
        if invert:
            level = 255 - level
        levels.append(level)
    return levels


def render_image(
    entry: Entry, scale: int = 1, invert: bool = False
) -> Optional[bytes]:
    """
    Render an image entry as a grayscale PNG (requires PIL).

    Args:
        entry: A Primary or IMAGE entry with NAXIS >= 2
        scale: Integer pixel scale factor (default 1)
        invert: Draw bright samples dark (default False)

    Returns:
        PNG image bytes, or None if PIL not available

    Raises:
        RenderError: If the entry cannot be interpreted as an image
    """
    try:
        from PIL import Image
    except ImportError:
        logger.warning("Image rendering requires PIL. Install with: pip install Pillow")
        return None

    if scale < 1:
        raise RenderError(f"Scale must be at least 1, got {scale}")

    width, height, samples = decode_samples(entry)
    levels = to_gray_levels(samples, invert=invert)

    img = Image.new("L", (width, height))
    img.putdata(levels)
    if scale > 1:
        img = img.resize((width * scale, height * scale), Image.Resampling.NEAREST)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    logger.debug(f"Rendered {width}x{height} image at scale {scale}")
    return buffer.getvalue()
