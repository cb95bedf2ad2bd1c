"""
Unit tests for split, split_into and join.
"""

import pytest

from strops.config import EmptySeparatorPolicy, default_config
from strops.split import join, split, split_into
from strops.units import CharWidth, UnitString
from strops.utils.errors import ConfigError, SequenceTypeError


class TestSplit:
    """Tests for splitting at a non-empty separator."""

    def test_basic_split(self):
        """Test the canonical example."""
        assert split("A|B|C", "|") == ["A", "B", "C"]

    def test_no_occurrence(self):
        """Test input without the separator is one fragment."""
        assert split("ABC", ">") == ["ABC"]
        assert split("", "|") == [""]

    def test_trailing_separator(self):
        """Test a trailing separator yields an empty last fragment."""
        assert split("A|B|C|", "|") == ["A", "B", "C", ""]
        assert split("A|", "|") == ["A", ""]

    def test_leading_and_adjacent_separators(self):
        """Test empty fragments are kept everywhere."""
        assert split("|A||B", "|") == ["", "A", "", "B"]

    def test_multi_unit_separator(self):
        """Test separators longer than one character."""
        assert split("A<>B<>C<>", "<>") == ["A", "B", "C", ""]
        assert split("A<B>C", "<>") == ["A<B>C"]

    def test_count_is_occurrences_plus_one(self):
        """Test the fragment count for several inputs."""
        cases = [
            ("A", "|", 1),
            ("A|B", "|", 2),
            ("A>B>C>", ">", 4),
            ("T,E,S,T", ",", 4),
            ("A<>B<>C", "<>", 3),
        ]
        for raw, sep, expected in cases:
            assert len(split(raw, sep)) == expected

    def test_non_overlapping(self):
        """Test overlapping candidates are consumed left to right."""
        assert split("aaa", "aa") == ["", "a"]

    def test_bytes(self):
        """Test bytes input."""
        assert split(b"A|B", b"|") == [b"A", b"B"]

    def test_units(self, units_factory):
        """Test UnitString input keeps its width."""
        fragments = split(units_factory("A|B", CharWidth.UTF16), units_factory("|", CharWidth.UTF16))
        assert fragments == [units_factory("A", CharWidth.UTF16), units_factory("B", CharWidth.UTF16)]
        assert all(fragment.width is CharWidth.UTF16 for fragment in fragments)

    def test_mixed_types(self):
        """Test separator and input must share a type."""
        with pytest.raises(SequenceTypeError):
            split("A|B", b"|")


class TestSplitEmptySeparator:
    """Tests for both empty-separator policies."""

    def test_per_character(self, per_character_config):
        """Test one fragment per unit."""
        assert split("AB", "", config=per_character_config) == ["A", "B"]
        assert split("ABC", "", config=per_character_config) == ["A", "B", "C"]
        assert split("", "", config=per_character_config) == []

    def test_literal(self, literal_config):
        """Test the empty separator never matches."""
        assert split("AB", "", config=literal_config) == ["AB"]
        assert split("", "", config=literal_config) == [""]

    def test_policy_override(self, literal_config):
        """Test the per-call policy wins over the configuration."""
        assert split("AB", "", policy=EmptySeparatorPolicy.PER_CHARACTER, config=literal_config) == ["A", "B"]
        assert split("AB", "", policy="literal") == ["AB"]

    def test_bad_policy(self):
        """Test an unknown policy name."""
        with pytest.raises(ConfigError):
            split("AB", "", policy="sometimes")

    def test_default_is_per_character(self):
        """Test the default configuration."""
        assert split("AB", "") == ["A", "B"]

    def test_policy_from_environment(self, monkeypatch):
        """Test the default configuration reads the environment."""
        monkeypatch.setenv("STROPS_EMPTY_SEPARATOR", "literal")
        default_config.cache_clear()
        assert split("AB", "") == ["AB"]

    def test_units_per_character(self, units_factory):
        """Test single-unit fragments of a UnitString."""
        units = units_factory("AB", CharWidth.UTF32)
        fragments = split(units, UnitString.empty(CharWidth.UTF32))
        assert fragments == [units_factory("A", CharWidth.UTF32), units_factory("B", CharWidth.UTF32)]


class TestSplitInto:
    """Tests for split_into."""

    def test_replaces_contents(self):
        """Test the container is cleared before filling."""
        container = ["old", "values", "here"]
        count = split_into(container, "T,E,S,T", ",")
        assert count == 4
        assert container == ["T", "E", "S", "T"]

    def test_empty_result(self, per_character_config):
        """Test a zero-fragment split empties the container."""
        container = ["old"]
        assert split_into(container, "", "", config=per_character_config) == 0
        assert container == []


class TestJoin:
    """Tests for join."""

    def test_basic_join(self):
        """Test the canonical example."""
        assert join(["A", "B", "C"], "|") == "A|B|C"

    def test_no_fragments(self):
        """Test joining nothing gives an empty sequence of the separator's type."""
        assert join([], "|") == ""
        assert join([], b"|") == b""
        assert join([], UnitString.from_text("|", CharWidth.UTF16)) == UnitString.empty(CharWidth.UTF16)

    def test_single_fragment(self):
        """Test one fragment comes back unchanged."""
        assert join(["A"], "<>") == "A"
        assert join([""], "|") == ""

    def test_empty_fragments(self):
        """Test empty fragments still get separators."""
        assert join(["", "A", ""], "|") == "|A|"

    def test_generator_input(self):
        """Test any iterable of fragments."""
        assert join((c for c in "ABC"), "-") == "A-B-C"

    def test_bytes_and_units(self, units_factory):
        """Test non-str sequences."""
        assert join([b"A", b"B"], b"|") == b"A|B"
        parts = [units_factory("A", CharWidth.UTF16), units_factory("B", CharWidth.UTF16)]
        assert join(parts, units_factory("|", CharWidth.UTF16)) == units_factory("A|B", CharWidth.UTF16)

    def test_mixed_types(self):
        """Test fragments must match the separator type."""
        with pytest.raises(SequenceTypeError):
            join(["A", b"B"], "|")


class TestRoundTrip:
    """Tests for join(split(s, sep), sep) == s."""

    def test_round_trip(self):
        """Test many inputs and separators."""
        inputs = ["", "A", "A|", "A|B|C|", "||", "A<>B<>C<>", "ABC", "<><>"]
        for raw in inputs:
            for sep in ("|", "<>", ">", ","):
                assert join(split(raw, sep), sep) == raw

    def test_round_trip_empty_separator(self, per_character_config, literal_config):
        """Test the law also holds for an empty separator under both policies."""
        for raw in ("", "A", "ABC"):
            assert join(split(raw, "", config=per_character_config), "") == raw
            assert join(split(raw, "", config=literal_config), "") == raw

    def test_round_trip_units(self, units_factory):
        """Test the law for each width."""
        for width in CharWidth:
            raw = units_factory("A|B|\U0001f600|", width)
            sep = units_factory("|", width)
            assert join(split(raw, sep), sep) == raw
