"""Tests for source decoding and line splitting."""

import codecs

from autocorrector.scanner.source import MSG_NOT_UTF8, decode_source, split_lines, utf8_error


def test_split_lines_only_breaks_on_line_endings():
    assert split_lines("a\x0cb\nc\r\nd\re\x1cf g\n") == ["a\x0cb", "c", "d", "e\x1cf g"]


def test_split_lines_edges():
    assert split_lines("") == []
    assert split_lines("x") == ["x"]
    assert split_lines("x\n\n") == ["x", ""]


def test_decode_strips_bom():
    assert decode_source(codecs.BOM_UTF8 + b"x = 1\n") == "x = 1\n"


def test_valid_utf8_has_no_error():
    assert utf8_error("# café\n".encode()) is None
    assert utf8_error(codecs.BOM_UTF8 + b"x = 1\n") is None


def test_utf8_error_location():
    finding = utf8_error(b"x = 1\r\ny = '\xff'\n")
    assert finding is not None
    assert (finding.location.row, finding.location.column) == (2, 6)
    assert finding.end_location.column == 7
    assert finding.message == f"{MSG_NOT_UTF8} (byte 0xff)"
    assert finding.code is None
