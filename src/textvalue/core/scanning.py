"""Index-arithmetic algorithms over flat character buffers.

Every function here works on any ``Sequence[str]`` whose elements are single
characters and returns either an offset or a freshly built tuple. Argument
validation (``None`` checks, index bounds) is the caller's job; see
:class:`~textvalue.core.text_value.TextValue`. Search is O(n*m) and split
re-copies a delimiter-sized window at every position.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from .errors import InvalidArgumentError
from .ranges import TextSpan

NOT_FOUND = -1
FIRST_CHAR_INDEX = 0

Buffer = Tuple[str, ...]


def copy_range(source: Sequence[str], start: int, length: int) -> Buffer:
    """Return ``length`` characters of ``source`` starting at ``start``."""

    result = [""] * length
    copy_index = 0
    for source_index in range(start, start + length):
        result[copy_index] = source[source_index]
        copy_index += 1
    return tuple(result)


def index_of(source: Sequence[str], token: Sequence[str], start_index: int = 0) -> int:
    """Return the first offset at or after ``start_index`` where ``token`` occurs.

    An empty token is a member of every sequence and matches at ``start_index``
    itself, even when ``start_index`` lies past the end of ``source``.
    """

    if len(token) == 0:
        return start_index

    source_length = len(source)
    token_length = len(token)
    if source_length < token_length:
        return NOT_FOUND

    for source_offset in range(start_index, source_length):
        if source[source_offset] != token[FIRST_CHAR_INDEX]:
            continue

        for token_index in range(FIRST_CHAR_INDEX, token_length):
            match_index = source_offset + token_index
            if match_index >= source_length or source[match_index] != token[token_index]:
                break
            if token_index == token_length - 1:
                return source_offset

    return NOT_FOUND


def last_index_of(source: Sequence[str], token: Sequence[str], start_index: int) -> int:
    """Return the rightmost match of ``token`` starting at or before ``start_index``."""

    if len(token) == 0:
        return start_index

    source_length = len(source)
    token_length = len(token)
    if source_length < token_length:
        return NOT_FOUND
    if start_index < token_length - 1:
        return NOT_FOUND

    # No match can start after (end of source - token length).
    last_candidate = min(start_index, source_length - token_length)

    for source_index in range(last_candidate, -1, -1):
        if source[source_index] != token[FIRST_CHAR_INDEX]:
            continue

        token_index = FIRST_CHAR_INDEX
        while token_index < token_length:
            if source[source_index + token_index] != token[token_index]:
                break
            token_index += 1

        if token_index == token_length:
            return source_index

    return NOT_FOUND


def match_offsets(source: Sequence[str], token: Sequence[str]) -> Iterator[int]:
    """Yield the start of each non-overlapping occurrence of ``token``, left to right.

    The cursor resumes ``len(token)`` characters past each match start, so it
    never moves backwards and never revisits a matched region.
    """

    token_length = len(token)
    if token_length == 0:
        raise InvalidArgumentError("An empty token has no distinct occurrences", parameter="token")

    match = index_of(source, token, FIRST_CHAR_INDEX)
    while match != NOT_FOUND:
        yield match
        match = index_of(source, token, match + token_length)


def split_spans(source: Sequence[str], delimiter: Sequence[str]) -> List[TextSpan]:
    """Return the spans of ``source`` that lie around or between ``delimiter``.

    Leading, trailing and adjacent delimiters produce empty spans, so joining
    the spans back with the delimiter always reconstructs ``source``.
    """

    delimiter_length = len(delimiter)
    if delimiter_length == 0:
        raise InvalidArgumentError("Cannot split on an empty delimiter", parameter="delimiter")

    expected = tuple(delimiter)
    spans: List[TextSpan] = []
    source_length = len(source)
    source_index = 0
    tokenized_offset = 0

    while source_index <= source_length - delimiter_length:
        if copy_range(source, source_index, delimiter_length) != expected:
            source_index += 1
            continue

        spans.append(TextSpan(tokenized_offset, source_index))
        source_index += delimiter_length
        tokenized_offset = source_index

    # Whatever follows the last delimiter, possibly nothing.
    spans.append(TextSpan(tokenized_offset, source_length))
    return spans


def replace_first(source: Sequence[str], search: Sequence[str], replacement: Sequence[str]) -> Buffer:
    """Return ``source`` with its first occurrence of ``search`` swapped for ``replacement``."""

    first_match = index_of(source, search, FIRST_CHAR_INDEX)
    if first_match == NOT_FOUND:
        return tuple(source)

    # "123456" with "1" -> "12": (6 + 2) - 1 == 7 == len("1223456")
    result_length = len(source) + len(replacement) - len(search)
    result = [""] * result_length
    result_index = 0

    while result_index < first_match:
        result[result_index] = source[result_index]
        result_index += 1

    replace_index = 0
    while replace_index < len(replacement):
        result[result_index] = replacement[replace_index]
        result_index += 1
        replace_index += 1

    source_index = first_match + len(search)
    while result_index < result_length:
        result[result_index] = source[source_index]
        result_index += 1
        source_index += 1

    return tuple(result)


def replace_all(source: Sequence[str], search: Sequence[str], replacement: Sequence[str]) -> Buffer:
    """Return ``source`` with every non-overlapping ``search`` occurrence replaced.

    A single left-to-right pass over the original buffer: text introduced by
    ``replacement`` is never searched again.
    """

    result: List[str] = []
    copy_index = 0

    for match in match_offsets(source, search):
        while copy_index < match:
            result.append(source[copy_index])
            copy_index += 1
        result.extend(replacement)
        copy_index = match + len(search)

    while copy_index < len(source):
        result.append(source[copy_index])
        copy_index += 1

    return tuple(result)


def insert(source: Sequence[str], start_index: int, value: Sequence[str]) -> Buffer:
    """Return ``source`` with ``value`` placed at ``[start_index, start_index + len(value))``."""

    value_length = len(value)
    result = [""] * (len(source) + value_length)

    for source_index in range(start_index):
        result[source_index] = source[source_index]
    for value_index in range(value_length):
        result[start_index + value_index] = value[value_index]
    for source_index in range(start_index, len(source)):
        result[source_index + value_length] = source[source_index]

    return tuple(result)


def concat(first: Sequence[str], second: Sequence[str]) -> Buffer:
    """Return the characters of ``first`` followed by those of ``second``."""

    result = [""] * (len(first) + len(second))
    first_index = 0
    while first_index < len(first):
        result[first_index] = first[first_index]
        first_index += 1

    second_index = 0
    while second_index < len(second):
        result[first_index + second_index] = second[second_index]
        second_index += 1

    return tuple(result)


def compare(first: Sequence[str], second: Sequence[str]) -> int:
    """Order two buffers by code point, returning exactly -1, 0 or 1.

    When one buffer is a proper prefix of the other the shorter sorts first.
    """

    shared = min(len(first), len(second))
    for index in range(shared):
        difference = ord(first[index]) - ord(second[index])
        if difference:
            return 1 if difference > 0 else -1

    if len(first) == len(second):
        return 0
    return -1 if len(first) < len(second) else 1


__all__ = [
    "NOT_FOUND",
    "copy_range",
    "index_of",
    "last_index_of",
    "match_offsets",
    "split_spans",
    "replace_first",
    "replace_all",
    "insert",
    "concat",
    "compare",
]
