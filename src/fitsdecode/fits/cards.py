"""
FITS Header Card Parser
=======================

Decodes one 80-character header card into a Param.

The parser never raises. Cards are tried against the following rules,
in order, and the first rule that matches wins:

1. END           -> terminal sentinel, no value, no comment
2. COMMENT text  -> commentary card, whole remainder is the comment
   HISTORY text
3. KEY = VALUE / COMMENT
4. anything else -> GARBAGE card, whole text kept as the comment

Value tokens are then coerced by looking at which characters they
contain (see coerce_value()). A token that looks like a number but
does not parse as one keeps its keyword and raw text with an absent
value.

Usage Examples
--------------
    >>> param = parse_card("SIMPLE  =                    T / conforms")
    >>> param.name, param.value.payload, param.comment
    ('SIMPLE', True, 'conforms')

    >>> parse_card("NAXIS1  =                  100").value.payload
    100
"""

import logging
import re

from fitsdecode.fits.records import (
    COMMENT_KEYWORD,
    END_KEYWORD,
    GARBAGE_KEYWORD,
    HISTORY_KEYWORD,
    Param,
    ParamValue,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Card Grammar
# =============================================================================

# COMMENT / HISTORY followed by optional freeform text
_COMMENTARY_RE = re.compile(
    rf"^(?P<key>{COMMENT_KEYWORD}|{HISTORY_KEYWORD})(?=\s|$)\s*(?P<comment>.*)$",
    re.DOTALL,
)

# KEY = VALUE [/ COMMENT]
# The value is a quoted string (quotes doubled inside), a parenthesised
# complex pair, or a bare token of word/sign/dot/comma characters.
_KEY_VALUE_RE = re.compile(
    r"^\s*(?P<key>[\w-]+)\s*=\s*"
    r"(?P<value>'(?:[^']|'')*'|\([^)]*\)|[\w.+\-,]+)?"
    r"\s*(?:/(?P<comment>.*))?",
    re.DOTALL,
)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[Ee][+-]?\d+)?$")


# =============================================================================
# Literal Parsers
# =============================================================================

def _parse_int(text: str) -> int:
    """Parse a decimal integer, rejecting Python-only forms like 1_000."""
    text = text.strip()
    if not _INT_RE.match(text):
        raise ValueError(f"invalid integer literal {text!r}")
    return int(text)


def _parse_float(text: str) -> float:
    """Parse a decimal float; Fortran D exponents are accepted."""
    text = text.strip().replace("D", "E").replace("d", "e")
    if not _FLOAT_RE.match(text):
        raise ValueError(f"invalid floating-point literal {text!r}")
    return float(text)


def _split_complex(text: str) -> tuple[str, str]:
    """Split '(a,b)' into its two halves."""
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"invalid complex literal {text!r}")
    real = parts[0].replace("(", " ").strip()
    imag = parts[1].replace(")", " ").strip()
    return real, imag


def _parse_string(text: str) -> str:
    """
    Strip the surrounding quotes of a string literal.

    Doubled quotes inside the literal stand for one quote, and trailing
    blanks are not significant.
    """
    if len(text) >= 2 and text.startswith("'") and text.endswith("'"):
        text = text[1:-1]
    else:
        text = text.strip("'")
    return text.replace("''", "'").rstrip(" ")


def coerce_value(token: str) -> ParamValue:
    """
    Convert a value token into a typed ParamValue.

    The rules are applied in this exact order:

        T or F                  -> boolean
        contains a quote        -> string
        contains "." but no "," -> floating
        contains "," but no "." -> complex integer
        contains "," and "."    -> complex floating
        otherwise               -> integer

    An empty token yields an absent value.

    Args:
        token: Trimmed value text

    Returns:
        The typed value

    Raises:
        ValueError: If the token does not parse as its inferred type
        OverflowError: If an integer does not fit in 64 bits
    """
    if token == "":
        return ParamValue.absent()

    if token in ("T", "F"):
        return ParamValue.boolean(token == "T")

    if "'" in token:
        return ParamValue.string(_parse_string(token))

    has_dot = "." in token
    has_comma = "," in token

    if has_dot and not has_comma:
        return ParamValue.floating(_parse_float(token))

    if has_comma and not has_dot:
        real, imag = _split_complex(token)
        return ParamValue.complex_integer(_parse_int(real), _parse_int(imag))

    if has_comma and has_dot:
        real, imag = _split_complex(token)
        return ParamValue.complex_floating(_parse_float(real), _parse_float(imag))

    return ParamValue.integer(_parse_int(token))


# =============================================================================
# Card Parser
# =============================================================================

def parse_card(text: str) -> Param:
    """
    Decode one header card.

    Args:
        text: The card text (normally exactly 80 characters)

    Returns:
        The decoded Param; GARBAGE when the card is not understood
    """
    # END sentinel
    if text.strip() == END_KEYWORD:
        return Param(name=END_KEYWORD)

    # Commentary cards
    match = _COMMENTARY_RE.match(text)
    if match:
        return Param(
            name=match.group("key"),
            comment=match.group("comment").strip(),
        )

    # KEY = VALUE / COMMENT
    match = _KEY_VALUE_RE.match(text)
    if match is None:
        return Param(name=GARBAGE_KEYWORD, comment=text)

    name = match.group("key")
    raw_value = (match.group("value") or "").strip()

    comment = match.group("comment")
    if comment is not None:
        comment = comment.strip() or None

    try:
        value = coerce_value(raw_value)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Keyword {name}: cannot interpret value {raw_value!r}: {e}")
        value = ParamValue.absent()

    return Param(name=name, raw_value=raw_value, value=value, comment=comment)
