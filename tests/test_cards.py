"""
Header Card Parser Tests
========================

Tests for decoding single 80-character header cards.

Test Categories
---------------
1. Sentinels: END, COMMENT, HISTORY, GARBAGE
2. Key/value cards: keyword, raw value and comment extraction
3. Value coercion: boolean, string, integer, float, complex
4. Degraded values: literals that do not parse
"""

import pytest

from fitsdecode.fits import ParamValue, ValueKind, coerce_value, parse_card


def pad(text: str) -> str:
    return text.ljust(80)


# =============================================================================
# Sentinel Tests
# =============================================================================

class TestSentinels:
    """Tests for END, commentary and unparseable cards."""

    def test_end_card(self):
        """END has no value and no comment."""
        param = parse_card(pad("END"))
        assert param.name == "END"
        assert param.is_end
        assert param.value.is_absent
        assert param.comment is None
        assert param.raw_value == ""

    def test_end_with_leading_blanks(self):
        """Trimmed text equal to END is the sentinel."""
        assert parse_card(pad("   END")).is_end

    def test_comment_card(self):
        """COMMENT keeps the remainder as its comment."""
        param = parse_card(pad("COMMENT   This file is part of a test"))
        assert param.name == "COMMENT"
        assert param.comment == "This file is part of a test"
        assert param.value.is_absent
        assert param.is_commentary

    def test_history_card(self):
        """HISTORY behaves like COMMENT."""
        param = parse_card(pad("HISTORY flat-fielded = yes / twice"))
        assert param.name == "HISTORY"
        assert param.comment == "flat-fielded = yes / twice"
        assert param.value.is_absent

    def test_empty_history(self):
        """A bare HISTORY keyword has an empty comment."""
        param = parse_card(pad("HISTORY"))
        assert param.name == "HISTORY"
        assert param.comment == ""

    def test_comment_word_inside_value(self):
        """COMMENT inside a string value does not make a commentary card."""
        param = parse_card(pad("OBJECT  = 'NO COMMENT'"))
        assert param.name == "OBJECT"
        assert param.value == ParamValue.string("NO COMMENT")

    def test_keyword_starting_with_comment(self):
        """COMMENTARY is an ordinary keyword, not COMMENT."""
        param = parse_card(pad("COMMENTARY=                    5"))
        assert param.name == "COMMENTARY"
        assert param.value == ParamValue.integer(5)

    def test_garbage_card(self):
        """Text without KEY = VALUE is kept whole as GARBAGE."""
        text = pad("this card makes no sense")
        param = parse_card(text)
        assert param.name == "GARBAGE"
        assert param.is_garbage
        assert param.comment == text
        assert param.value.is_absent

    def test_blank_card_is_garbage(self):
        """An all-blank card has no keyword."""
        text = " " * 80
        param = parse_card(text)
        assert param.name == "GARBAGE"
        assert param.comment == text


# =============================================================================
# Key/Value Card Tests
# =============================================================================

class TestKeyValueCards:
    """Tests for KEY = VALUE / COMMENT cards."""

    def test_simple_round_trip(self):
        """SIMPLE = T / conforms."""
        param = parse_card(pad("SIMPLE  =                    T / conforms"))
        assert param.name == "SIMPLE"
        assert param.value.kind is ValueKind.BOOLEAN
        assert param.value.payload is True
        assert param.comment == "conforms"
        assert param.raw_value == "T"

    def test_bitpix(self):
        """BITPIX = 16 is an integer."""
        param = parse_card(pad("BITPIX  =                   16"))
        assert param.name == "BITPIX"
        assert param.value == ParamValue.integer(16)
        assert param.comment is None

    def test_naxis1(self):
        """NAXIS1 = 100 is an integer."""
        param = parse_card(pad("NAXIS1  =                  100"))
        assert param.value.kind is ValueKind.INTEGER
        assert param.value.payload == 100

    def test_negative_integer(self):
        """Signed integers keep their sign."""
        assert parse_card(pad("BITPIX  =                  -32")).value.payload == -32

    def test_float(self):
        """3.14 is a float."""
        param = parse_card(pad("PI      =                 3.14 / circle"))
        assert param.value.kind is ValueKind.FLOATING
        assert param.value.payload == pytest.approx(3.14)
        assert param.comment == "circle"

    def test_float_with_exponent(self):
        """Exponent notation with a dot is a float."""
        assert parse_card(pad("EXPTIME =              1.5E+03")).value.payload == 1500.0

    def test_fortran_exponent(self):
        """D exponents are accepted for floats."""
        assert parse_card(pad("EXPTIME =               1.5D-1")).value.payload == pytest.approx(0.15)

    def test_complex_integer(self):
        """(1,2) is a complex integer pair."""
        param = parse_card(pad("CINT    =                (1,2)"))
        assert param.value.kind is ValueKind.COMPLEX_INTEGER
        assert param.value.payload == (1, 2)

    def test_complex_integer_with_blanks(self):
        """Blanks inside the parentheses are ignored."""
        param = parse_card(pad("CINT    =              (-3, 4)"))
        assert param.value == ParamValue.complex_integer(-3, 4)

    def test_complex_floating(self):
        """(1.5,2.5) is a complex float pair."""
        param = parse_card(pad("CFLT    =            (1.5,2.5)"))
        assert param.value.kind is ValueKind.COMPLEX_FLOATING
        assert param.value.payload == (1.5, 2.5)

    def test_string(self):
        """Quotes are stripped and trailing blanks dropped."""
        param = parse_card(pad("XTENSION= 'IMAGE   '           / extension type"))
        assert param.name == "XTENSION"
        assert param.value == ParamValue.string("IMAGE")
        assert param.raw_value == "'IMAGE   '"
        assert param.comment == "extension type"

    def test_empty_string(self):
        """'' is an empty string, not an absent value."""
        param = parse_card(pad("OBSERVER= ''"))
        assert param.value.kind is ValueKind.STRING
        assert param.value.payload == ""

    def test_escaped_quote(self):
        """Doubled quotes stand for one quote."""
        param = parse_card(pad("OBJECT  = 'Barnard''s star'"))
        assert param.value.payload == "Barnard's star"

    def test_slash_inside_string(self):
        """A slash inside quotes is not the comment separator."""
        param = parse_card(pad("FILTER  = 'B / V'              / colour"))
        assert param.value.payload == "B / V"
        assert param.comment == "colour"

    def test_leading_blanks_in_string_kept(self):
        """Leading blanks in a string are significant."""
        assert parse_card(pad("NAME    = '  x'")).value.payload == "  x"

    def test_hyphenated_keyword(self):
        """DATE-OBS is one keyword."""
        param = parse_card(pad("DATE-OBS= '2021-03-04T05:06:07'"))
        assert param.name == "DATE-OBS"
        assert param.value.payload == "2021-03-04T05:06:07"

    def test_false(self):
        """F is boolean false."""
        assert parse_card(pad("EXTEND  =                    F")).value == ParamValue.boolean(False)

    def test_absent_value(self):
        """A keyword with nothing after = has an absent value."""
        param = parse_card(pad("BLANK   ="))
        assert param.name == "BLANK"
        assert param.value.is_absent
        assert param.raw_value == ""

    def test_empty_comment_is_none(self):
        """A slash with nothing after it leaves no comment."""
        assert parse_card(pad("NAXIS   =                    2 /")).comment is None


# =============================================================================
# Degraded Value Tests
# =============================================================================

class TestDegradedValues:
    """Literals that look like values but do not parse."""

    def test_exponent_without_dot(self):
        """1E5 has no dot, so it is read as an integer and fails."""
        param = parse_card(pad("EXPO    =                  1E5"))
        assert param.name == "EXPO"
        assert param.raw_value == "1E5"
        assert param.value.is_absent

    def test_integer_overflow(self):
        """Integers beyond 64 bits keep the keyword with no value."""
        param = parse_card(pad("HUGE    =  9223372036854775808"))
        assert param.name == "HUGE"
        assert param.value.is_absent

    def test_int64_limit(self):
        """The largest signed 64-bit integer still parses."""
        param = parse_card(pad("HUGE    =  9223372036854775807"))
        assert param.value.payload == 2 ** 63 - 1

    def test_bare_word(self):
        """An unquoted word is not a valid integer."""
        param = parse_card(pad("MODE    =                 FAST"))
        assert param.name == "MODE"
        assert param.value.is_absent

    def test_underscore_digits_rejected(self):
        """Python-only digit separators are not FITS integers."""
        assert parse_card(pad("COUNT   =                1_000")).value.is_absent

    def test_degraded_value_logs_warning(self, caplog):
        """Coercion failures are reported through logging."""
        with caplog.at_level("WARNING", logger="fitsdecode.fits.cards"):
            parse_card(pad("EXPO    =                  1E5"))
        assert "EXPO" in caplog.text


# =============================================================================
# Coercion Order Tests
# =============================================================================

class TestCoerceValue:
    """Tests for the literal coercion rules and their order."""

    @pytest.mark.parametrize(
        "token, expected",
        [
            ("T", ParamValue.boolean(True)),
            ("F", ParamValue.boolean(False)),
            ("'T'", ParamValue.string("T")),
            ("'1.5'", ParamValue.string("1.5")),
            ("1.5", ParamValue.floating(1.5)),
            (".5", ParamValue.floating(0.5)),
            ("(1,2)", ParamValue.complex_integer(1, 2)),
            ("1,2", ParamValue.complex_integer(1, 2)),
            ("(1.0,-2.5)", ParamValue.complex_floating(1.0, -2.5)),
            ("-7", ParamValue.integer(-7)),
            ("+7", ParamValue.integer(7)),
            ("", ParamValue.absent()),
        ],
    )
    def test_coercion(self, token, expected):
        """Each token shape maps to its value kind."""
        assert coerce_value(token) == expected

    def test_invalid_integer_raises(self):
        """coerce_value itself reports parse failures."""
        with pytest.raises(ValueError):
            coerce_value("12abc")

    def test_complex_with_three_parts_raises(self):
        """Complex literals have exactly two parts."""
        with pytest.raises(ValueError):
            coerce_value("(1,2,3)")
