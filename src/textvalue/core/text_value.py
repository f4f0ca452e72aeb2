"""Immutable text value backed by an explicit character buffer."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Iterator, List, Optional, Tuple, Union

from . import scanning
from .errors import IndexOutOfRangeError, InvalidArgumentError, NullReferenceError, null_guard
from .ranges import TextSpan

LOGGER = logging.getLogger(__name__)

NOT_FOUND = scanning.NOT_FOUND

TokenLike = Union["TextValue", str]


@functools.total_ordering
@dataclass(slots=True, frozen=True, eq=False, repr=False)
class TextValue:
    """A fixed sequence of characters with hand-rolled search and transform operations.

    Build instances with :meth:`from_text` or :meth:`from_chars` (calling the
    class directly dispatches on the argument type). Both reject empty input;
    empty results of derived operations are represented by :attr:`EMPTY`.

    Token arguments accept either another :class:`TextValue` or a plain
    ``str``. Plain string tokens may be empty: the empty token is a member of
    every value and matches wherever a search begins.
    """

    characters: Tuple[str, ...]

    EMPTY: ClassVar[TextValue]

    def __post_init__(self) -> None:
        raw: Any = self.characters
        if raw is None:
            raise NullReferenceError("value")
        if isinstance(raw, str):
            buffer = _text_buffer(raw)
        else:
            buffer = _chars_buffer(raw)
        object.__setattr__(self, "characters", buffer)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_text(cls, value: str) -> TextValue:
        """Create a value from a primitive string.

        Raises:
            NullReferenceError: ``value`` is ``None``.
            InvalidArgumentError: ``value`` is not a string, is empty or only whitespace.
        """

        null_guard("value", value)
        if not isinstance(value, str):
            raise InvalidArgumentError("value must be a str", parameter="value", value=value)
        return _wrap(_text_buffer(value))

    @classmethod
    def from_chars(cls, chars: Iterable[str]) -> TextValue:
        """Create a value from a sequence of single characters.

        Raises:
            NullReferenceError: ``chars`` is ``None``.
            InvalidArgumentError: ``chars`` is empty or holds anything but single characters.
        """

        return _wrap(_chars_buffer(chars))

    # ------------------------------------------------------------------
    # Basic protocol
    # ------------------------------------------------------------------
    @property
    def length(self) -> int:
        """Return the number of characters in the value."""

        return len(self.characters)

    def __len__(self) -> int:
        return len(self.characters)

    def __iter__(self) -> Iterator[str]:
        return iter(self.characters)

    def __contains__(self, target: object) -> bool:
        if not isinstance(target, (TextValue, str)):
            return False
        return self.contains(target)

    def to_text(self) -> str:
        """Return the value as a primitive string."""

        return "".join(self.characters)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"TextValue({self.to_text()!r})"

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def contains(self, target: TokenLike) -> bool:
        """Return ``True`` when ``target`` occurs anywhere in this value."""

        return self.index_of(target, 0) != NOT_FOUND

    def starts_with(self, target: TokenLike) -> bool:
        """Return ``True`` when this value begins with ``target``."""

        return self.index_of(target, 0) == 0

    def index_of(self, token: TokenLike, start_index: int = 0) -> int:
        """Return the first offset at or after ``start_index`` where ``token`` begins.

        An empty token returns ``start_index`` unchanged, even past the end of
        the value. Returns :data:`NOT_FOUND` when there is no match.
        """

        buffer = _token_buffer(token, "token")
        start_index = _require_index(start_index, "start_index")
        if start_index < 0:
            raise InvalidArgumentError(
                "start_index must not be negative", parameter="start_index", value=start_index
            )
        return scanning.index_of(self.characters, buffer, start_index)

    def last_index_of(self, token: TokenLike, start_index: Optional[int] = None) -> int:
        """Return the rightmost offset at or before ``start_index`` where ``token`` begins.

        ``start_index`` defaults to the last character and must address an
        existing character.
        """

        buffer = _token_buffer(token, "token")
        if start_index is None:
            start_index = len(self.characters) - 1
        start_index = _require_index(start_index, "start_index")
        if start_index < 0 or start_index > len(self.characters) - 1:
            raise InvalidArgumentError(
                f"start_index must address a character of a value of length {len(self.characters)}",
                parameter="start_index",
                value=start_index,
            )
        return scanning.last_index_of(self.characters, buffer, start_index)

    def count(self, token: TokenLike) -> int:
        """Return the number of non-overlapping occurrences of ``token``."""

        buffer = _token_buffer(token, "token")
        if not buffer:
            raise InvalidArgumentError("token must not be empty", parameter="token")
        return sum(1 for _ in scanning.match_offsets(self.characters, buffer))

    # ------------------------------------------------------------------
    # Slicing
    # ------------------------------------------------------------------
    def substring(self, start: int, length: int) -> TextValue:
        """Return the ``length`` characters beginning at ``start``.

        ``length`` must be positive; a zero-length request is an error rather
        than an empty result.
        """

        start = _require_index(start, "start")
        length = _require_index(length, "length")
        source_length = len(self.characters)

        if start < 0 or source_length < start:
            raise InvalidArgumentError(
                f"start must fall within [0, {source_length}]", parameter="start", value=start
            )
        if length <= 0 or source_length < length:
            raise InvalidArgumentError(
                f"length must fall within [1, {source_length}]", parameter="length", value=length
            )
        if source_length < start + length:
            raise InvalidArgumentError(
                "start + length exceeds the value length", parameter="length", value=length
            )

        return _wrap(scanning.copy_range(self.characters, start, length))

    def split_spans(self, delimiter: TokenLike) -> List[TextSpan]:
        """Return the spans around and between each ``delimiter`` occurrence."""

        buffer = _token_buffer(delimiter, "delimiter")
        if not buffer:
            raise InvalidArgumentError("delimiter must not be empty", parameter="delimiter")
        return scanning.split_spans(self.characters, buffer)

    def split(self, delimiter: TokenLike) -> List[TextValue]:
        """Return the tokens around and between each ``delimiter`` occurrence.

        ``"a,b,"`` split on ``","`` yields ``a``, ``b`` and an empty token;
        a value without the delimiter yields itself as the only token.
        """

        tokens = [
            TextValue.EMPTY if span.is_empty else self.substring(span.start, span.length)
            for span in self.split_spans(delimiter)
        ]
        LOGGER.debug("Split %d characters into %d tokens", len(self.characters), len(tokens))
        return tokens

    # ------------------------------------------------------------------
    # Replacement
    # ------------------------------------------------------------------
    def replace_first(self, search_token: TokenLike, replace_token: TokenLike) -> TextValue:
        """Return a new value with the first ``search_token`` swapped for ``replace_token``."""

        search = _token_buffer(search_token, "search_token")
        replacement = _token_buffer(replace_token, "replace_token")
        return _wrap(scanning.replace_first(self.characters, search, replacement))

    def replace(self, search_token: TokenLike, replace_token: TokenLike) -> TextValue:
        """Return a new value with every ``search_token`` swapped for ``replace_token``.

        Matches are found in one left-to-right pass over this value, so text
        introduced by the replacement is never matched again.
        """

        search = _token_buffer(search_token, "search_token")
        replacement = _token_buffer(replace_token, "replace_token")
        if not search:
            raise InvalidArgumentError("search_token must not be empty", parameter="search_token")
        result = scanning.replace_all(self.characters, search, replacement)
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug(
                "Replace swapped %d occurrences, rewriting %d characters into %d",
                sum(1 for _ in scanning.match_offsets(self.characters, search)),
                len(self.characters),
                len(result),
            )
        return _wrap(result)

    def insert(self, start_index: int, value: TokenLike) -> TextValue:
        """Return a new value with ``value`` placed at ``start_index``."""

        buffer = _token_buffer(value, "value")
        start_index = _require_index(start_index, "start_index")
        if start_index < 0 or start_index > len(self.characters):
            raise IndexOutOfRangeError(start_index, len(self.characters), parameter="start_index")
        return _wrap(scanning.insert(self.characters, start_index, buffer))

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------
    def char_at(self, index: int) -> str:
        """Return the character at ``index``."""

        return self.characters[self._checked_position(index)]

    def __getitem__(self, index: int) -> str:
        return self.char_at(index)

    def with_char_at(self, index: int, char: str) -> TextValue:
        """Return a copy of this value with the character at ``index`` replaced."""

        position = self._checked_position(index)
        null_guard("char", char)
        if not isinstance(char, str) or len(char) != 1:
            raise InvalidArgumentError("char must be a single character", parameter="char", value=char)
        buffer = list(self.characters)
        buffer[position] = char
        return _wrap(tuple(buffer))

    def _checked_position(self, index: int) -> int:
        index = _require_index(index, "index")
        if index < 0 or index >= len(self.characters):
            raise IndexOutOfRangeError(index, len(self.characters))
        return index

    # ------------------------------------------------------------------
    # Equality, ordering and concatenation
    # ------------------------------------------------------------------
    @staticmethod
    def compare(a: TokenLike, b: TokenLike) -> int:
        """Order ``a`` against ``b`` by code point, returning -1, 0 or 1."""

        first = _token_buffer(a, "a")
        second = _token_buffer(b, "b")
        if a is b:
            return 0
        return scanning.compare(first, second)

    def compare_to(self, other: TokenLike) -> int:
        """Order this value against ``other``; see :meth:`compare`."""

        return TextValue.compare(self, other)

    def equals(self, other: object) -> bool:
        """Return ``True`` when ``other`` is a text value holding the same characters."""

        if other is None or not isinstance(other, TextValue):
            return False
        if len(other.characters) != len(self.characters):
            return False
        for index in range(len(self.characters)):
            if other.characters[index] != self.characters[index]:
                return False
        return True

    def not_equals(self, other: object) -> bool:
        """Return the negation of :meth:`equals`."""

        return not self.equals(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextValue):
            return NotImplemented
        return self.equals(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TextValue):
            return NotImplemented
        return TextValue.compare(self, other) < 0

    def __hash__(self) -> int:
        return hash(self.characters)

    def concat(self, other: TokenLike) -> TextValue:
        """Return this value followed by ``other``."""

        buffer = _token_buffer(other, "other")
        return _wrap(scanning.concat(self.characters, buffer))

    def __add__(self, other: object) -> TextValue:
        if not isinstance(other, (TextValue, str)):
            return NotImplemented
        return self.concat(other)


def _wrap(buffer: Tuple[str, ...]) -> TextValue:
    """Build a value around an already validated buffer."""

    if not buffer:
        return TextValue.EMPTY
    instance = object.__new__(TextValue)
    object.__setattr__(instance, "characters", buffer)
    return instance


def _text_buffer(value: str) -> Tuple[str, ...]:
    if len(value) == 0:
        raise InvalidArgumentError("value must not be empty", parameter="value")
    if value.isspace():
        raise InvalidArgumentError("value must not be only whitespace", parameter="value", value=value)
    return tuple(value)


def _chars_buffer(chars: Iterable[str]) -> Tuple[str, ...]:
    null_guard("chars", chars)
    try:
        buffer = tuple(chars)
    except TypeError as exc:
        raise InvalidArgumentError("chars must be an iterable of characters", parameter="chars") from exc
    if len(buffer) == 0:
        raise InvalidArgumentError("chars must not be empty", parameter="chars")
    for char in buffer:
        if not isinstance(char, str) or len(char) != 1:
            raise InvalidArgumentError("chars must hold single characters", parameter="chars", value=char)
    return buffer


def _token_buffer(token: Any, parameter: str) -> Tuple[str, ...]:
    null_guard(parameter, token)
    if isinstance(token, TextValue):
        return token.characters
    if isinstance(token, str):
        return tuple(token)
    raise InvalidArgumentError(
        f"{parameter} must be a TextValue or str", parameter=parameter, value=token
    )


def _require_index(value: Any, parameter: str) -> int:
    null_guard(parameter, value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{parameter} must be an integer", parameter=parameter, value=value)
    return value


_empty = object.__new__(TextValue)
object.__setattr__(_empty, "characters", ())
TextValue.EMPTY = _empty
del _empty


__all__ = ["TextValue", "NOT_FOUND"]
