"""
Unit tests for replace and replacen.
"""

import pytest

from strops.replace import replace, replacen
from strops.units import CharWidth
from strops.utils.errors import SequenceTypeError


class TestReplace:
    """Tests for substring replacement."""

    def test_known_cases(self):
        """Test the library's reference cases."""
        assert replace("", "TT", "MM") == ""
        assert replace("A", "A", "BBB") == "BBB"
        assert replace("A", "A", "BBBB") == "BBBB"
        assert replace("TESTTEST", "STT", "mmm") == "TEmmmEST"

    def test_not_cascading(self):
        """Test inserted text is never rescanned."""
        assert replacen("123", "3", "34") == ("1234", 1)
        assert replacen("aa", "a", "aa") == ("aaaa", 2)

    def test_non_overlapping(self):
        """Test matches are consumed left to right."""
        assert replacen("aaaa", "aa", "b") == ("bb", 2)
        assert replacen("aaa", "aa", "b") == ("ba", 1)

    def test_empty_pattern(self):
        """Test an empty pattern occurs nowhere."""
        assert replacen("A", "", "X") == ("A", 0)
        assert replacen("", "", "X") == ("", 0)

    def test_no_match_returns_input(self):
        """Test the input is returned untouched when nothing matches."""
        raw = "ABC"
        result, count = replacen(raw, "X", "Y")
        assert count == 0
        assert result is raw

    def test_delete(self):
        """Test replacing with an empty sequence."""
        assert replacen("A-B-C", "-", "") == ("ABC", 2)

    def test_bytes(self):
        """Test bytes input."""
        assert replacen(b"a.b.c", b".", b"::") == (b"a::b::c", 2)

    def test_units(self, units_factory):
        """Test UnitString input."""
        width = CharWidth.UTF16
        result, count = replacen(units_factory("123", width), units_factory("3", width), units_factory("34", width))
        assert result == units_factory("1234", width)
        assert count == 1

    def test_mixed_types(self):
        """Test pattern and replacement must match the input type."""
        with pytest.raises(SequenceTypeError):
            replace("A", "A", b"B")
