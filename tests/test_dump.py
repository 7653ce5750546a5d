"""
Diagnostic Dump Tests
=====================
"""

from fitsdecode.fits import Param, ParamValue, format_dump, format_param, iter_dump_lines, parse_fits


class TestFormatParam:
    """Tests for single card formatting."""

    def test_with_comment(self):
        param = Param("SIMPLE", "T", ParamValue.boolean(True), "conforms")
        assert format_param(param) == "SIMPLE = T // conforms"

    def test_without_comment(self):
        param = Param("BITPIX", "16", ParamValue.integer(16))
        assert format_param(param) == "BITPIX = 16"

    def test_raw_text_kept(self):
        """Strings are shown as written, quotes and padding included."""
        param = Param("XTENSION", "'IMAGE   '", ParamValue.string("IMAGE"))
        assert format_param(param) == "XTENSION = 'IMAGE   '"

    def test_commentary(self):
        assert format_param(Param("HISTORY", comment="reduced")) == "HISTORY =  // reduced"


class TestDump:
    """Tests for whole-file listings."""

    def test_dump_lines(self, simple_fits):
        lines = list(iter_dump_lines(parse_fits(simple_fits)))
        assert lines == [
            "FITS Entry: Primary",
            "Header:",
            "SIMPLE = T // conforms",
            "BITPIX = 8",
            "NAXIS = 2",
            "NAXIS1 = 2",
            "NAXIS2 = 2",
            "END = ",
            "Data: 2880 bytes",
            " ",
        ]

    def test_dump_every_entry(self, multi_entry_fits):
        text = format_dump(parse_fits(multi_entry_fits))
        assert text.count("FITS Entry:") == 4
        assert "FITS Entry: BinaryTableExtension" in text
        assert "Data: 8640 bytes" in text
        assert "HISTORY =  // second" in text
