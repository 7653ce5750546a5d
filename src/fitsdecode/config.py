"""
fitsdecode - Decoder Configuration
==================================

Settings that alter how the entry segmenter sizes and extracts data.
Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (see fitsdecode.cli.fitsdump)
"""

from dataclasses import dataclass
from typing import Optional
import os


_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str) -> Optional[bool]:
    """Read a boolean environment variable, None when unset."""
    value = os.environ.get(name)
    if value is None:
        return None
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class DecoderConfig:
    """
    Configuration for a single decode.

    Attributes:
        absolute_bitpix: Size elements by |BITPIX| / 8 instead of the
            literal BITPIX / 8 (default: False). With the literal rule a
            floating-point image (negative BITPIX) has a negative size
            and aborts the decode.
        copy_data: Copy each data segment out of the input buffer
            (default: True). When False, Entry.data is a zero-copy
            memoryview and the input buffer must outlive the entries.
    """

    absolute_bitpix: bool = False
    copy_data: bool = True

    @classmethod
    def from_env(cls) -> "DecoderConfig":
        """
        Create DecoderConfig from environment variables.

        Environment variables (all optional):
            FITSDECODE_ABSOLUTE_BITPIX: 1/true/yes/on to enable
            FITSDECODE_COPY_DATA: 0/false/no/off for zero-copy slices

        Returns:
            DecoderConfig with values from environment variables
        """
        config = cls()

        if (absolute := _env_flag("FITSDECODE_ABSOLUTE_BITPIX")) is not None:
            config.absolute_bitpix = absolute

        if (copy_data := _env_flag("FITSDECODE_COPY_DATA")) is not None:
            config.copy_data = copy_data

        return config
