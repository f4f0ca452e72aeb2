"""Tests for containment, prefix and index searches."""

from __future__ import annotations

import pytest

from textvalue import NOT_FOUND, InvalidArgumentError, NullReferenceError, TextValue


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("cat", ""),
        ("cat", "c"),
        ("cat", "ca"),
        ("cat", "cat"),
        ("catch", "ca"),
        ("catch", "ch"),
        ("catcher", "cher"),
        ("catcher", "tch"),
        ("bengal cat", "cat"),
        ("bengal cat", "l c"),
        ("lucky bengal cat", "l c"),
    ],
)
def test_contains_match(source: str, target: str) -> None:
    assert TextValue(source).contains(target)


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("cat", "b"),
        ("cat", "bat"),
        ("cat", "ate"),
        ("cat", "cater"),
        ("chat", "ouch"),
    ],
)
def test_contains_no_match(source: str, target: str) -> None:
    assert not TextValue(source).contains(target)


def test_contains_rejects_none(bengal: TextValue) -> None:
    with pytest.raises(NullReferenceError):
        bengal.contains(None)  # type: ignore[arg-type]


def test_contains_accepts_text_value_targets(bengal: TextValue) -> None:
    assert bengal.contains(TextValue("gal"))
    assert not bengal.contains(TextValue("dog"))


def test_in_operator_uses_contains(bengal: TextValue) -> None:
    assert "bengal" in bengal
    assert TextValue("cat") in bengal
    assert "dog" not in bengal
    assert 5 not in bengal


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("cat", ""),
        ("cat", "c"),
        ("cat", "ca"),
        ("cat", "cat"),
        (" catch", " ca"),
        ("lucky bengal cat", "lucky bengal"),
    ],
)
def test_starts_with_match(source: str, target: str) -> None:
    assert TextValue(source).starts_with(target)


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("cat", "b"),
        ("cat", "bat"),
        ("cat", "ate"),
        ("cat", "cater"),
        ("chat", "ouch"),
        (" chat", "ouch"),
        ("chat", " ouch"),
        ("scat", "cat"),
    ],
)
def test_starts_with_no_match(source: str, target: str) -> None:
    assert not TextValue(source).starts_with(target)


def test_starts_with_rejects_none(bengal: TextValue) -> None:
    with pytest.raises(NullReferenceError):
        bengal.starts_with(None)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("source", "token", "start_index", "expected"),
    [
        ("bat", "", 0, 0),
        ("bat", "", 1, 1),
        ("bat", "b", 0, 0),
        ("bat", "a", 0, 1),
        ("bat", "t", 0, 2),
        ("bat", "x", 0, -1),
        ("battalion", "a", 0, 1),
        ("aaaaaa", "a", 0, 0),
        ("aaaaab", "b", 0, 5),
        ("aaaaa", "a", 0, 0),
        ("aaabbaaa", "aaa", 0, 0),
        ("bbaaabbaaa", "aaa", 0, 2),
        ("aaaaa", "a", 1, 1),
        ("aaaaa", "a", 2, 2),
        ("aaaaa", "a", 3, 3),
        ("aaaaa", "a", 4, 4),
        ("ababa", "a", 0, 0),
        ("ababa", "a", 1, 2),
        ("ababa", "a", 2, 2),
        ("ababa", "a", 3, 4),
        ("abbb", "a", 1, -1),
        ("abbaaa", "aaa", 3, 3),
        ("abba", "aaa", 3, -1),
        ("bbaaabbaaa", "aaa", 3, 7),
        ("bat", "b", 5, -1),
        ("cat", "cater", 0, -1),
    ],
)
def test_index_of(source: str, token: str, start_index: int, expected: int) -> None:
    assert TextValue(source).index_of(token, start_index) == expected


@pytest.mark.parametrize("start_index", [0, 3, 4, 10, 250])
def test_index_of_empty_token_returns_start_verbatim(start_index: int) -> None:
    assert TextValue("bat").index_of("", start_index) == start_index


def test_index_of_defaults_to_the_beginning(bengal: TextValue) -> None:
    assert bengal.index_of("bengal") == 6
    assert bengal.index_of(TextValue("cat")) == 13


def test_index_of_rejects_bad_arguments(bengal: TextValue) -> None:
    with pytest.raises(NullReferenceError):
        bengal.index_of(None, 0)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        bengal.index_of("cat", -1)
    with pytest.raises(InvalidArgumentError):
        bengal.index_of(5, 0)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        bengal.index_of("cat", "0")  # type: ignore[arg-type]


def test_index_of_finds_a_single_occurrence_or_nothing() -> None:
    source = TextValue("the bengal sat")

    assert source.index_of("bengal", 0) == 4
    assert source.index_of("tabby", 0) == NOT_FOUND


def test_index_of_never_moves_left_as_start_advances() -> None:
    source = TextValue("cat hat cat rat cat")
    previous = 0

    for start_index in range(len(source)):
        found = source.index_of("cat", start_index)
        if found == NOT_FOUND:
            continue
        assert found >= start_index
        assert found >= previous
        previous = found


@pytest.mark.parametrize(
    ("source", "token", "start_index", "expected"),
    [
        ("bat", "t", 2, 2),
        ("bat", "b", 2, 0),
        ("bat", "x", 2, -1),
        ("ababa", "a", 4, 4),
        ("ababa", "a", 3, 2),
        ("ababa", "aba", 4, 2),
        ("ababa", "aba", 2, 2),
        ("ababa", "aba", 1, -1),
        ("bbaaabbaaa", "aaa", 9, 7),
        ("bbaaabbaaa", "aaa", 6, 2),
        ("cat", "cater", 2, -1),
        ("cat hat", "hat", 1, -1),
        ("bat", "", 1, 1),
    ],
)
def test_last_index_of(source: str, token: str, start_index: int, expected: int) -> None:
    assert TextValue(source).last_index_of(token, start_index) == expected


def test_last_index_of_defaults_to_the_last_character() -> None:
    assert TextValue("cat hat cat").last_index_of("cat") == 8
    assert TextValue("cat hat cat").last_index_of("") == 10


@pytest.mark.parametrize("start_index", [-1, 3, 10])
def test_last_index_of_rejects_out_of_range_start(start_index: int) -> None:
    with pytest.raises(InvalidArgumentError):
        TextValue("bat").last_index_of("", start_index)


def test_last_index_of_rejects_none_token() -> None:
    with pytest.raises(NullReferenceError):
        TextValue("bat").last_index_of(None, 0)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("source", "token", "expected"),
    [
        ("cat hat cat", "cat", 2),
        ("aaaa", "aa", 2),
        ("aaa", "aa", 1),
        ("bengal", "cat", 0),
    ],
)
def test_count_walks_non_overlapping_matches(source: str, token: str, expected: int) -> None:
    assert TextValue(source).count(token) == expected


def test_count_rejects_empty_token() -> None:
    with pytest.raises(InvalidArgumentError):
        TextValue("cat").count("")
