"""Tests for the buffer-level scanning algorithms."""

from __future__ import annotations

import pytest

from textvalue import InvalidArgumentError, TextSpan
from textvalue.core import scanning


def test_copy_range_copies_a_window() -> None:
    assert scanning.copy_range("bengal", 1, 3) == ("e", "n", "g")
    assert scanning.copy_range("bengal", 6, 0) == ()


def test_index_searches_work_on_any_character_sequence() -> None:
    assert scanning.index_of(list("abcabc"), ("b", "c"), 2) == 4
    assert scanning.last_index_of(tuple("abcabc"), "ab", 5) == 3
    assert scanning.index_of("abc", "", 7) == 7


def test_match_offsets_skip_the_matched_region() -> None:
    assert list(scanning.match_offsets("aaaa", "aa")) == [0, 2]
    assert list(scanning.match_offsets("bengal", "cat")) == []
    with pytest.raises(InvalidArgumentError):
        list(scanning.match_offsets("aaaa", ""))


def test_split_spans_cover_the_whole_source() -> None:
    spans = scanning.split_spans("a,,b", ",")

    assert spans == [TextSpan(0, 1), TextSpan(2, 2), TextSpan(3, 4)]
    with pytest.raises(InvalidArgumentError):
        scanning.split_spans("a,b", "")


def test_buffer_builders_return_tuples() -> None:
    assert scanning.replace_first("cat", "c", "b") == tuple("bat")
    assert scanning.replace_all("a-b-c", "-", "+") == tuple("a+b+c")
    assert scanning.insert("ct", 1, "a") == tuple("cat")
    assert scanning.concat("ben", "gal") == tuple("bengal")


def test_compare_normalizes_to_unit_steps() -> None:
    assert scanning.compare("abc", "abd") == -1
    assert scanning.compare("abz", "aba") == 1
    assert scanning.compare("ab", "abc") == -1
    assert scanning.compare("", "") == 0
