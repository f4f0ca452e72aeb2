"""Structured helpers for representing spans of a character buffer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Iterator

from .errors import InvalidArgumentError


@dataclass(slots=True, frozen=True)
class TextSpan(Sequence[int]):
    """Half-open ``[start, end)`` offsets into a character buffer.

    Offsets are never clamped or swapped; a span that cannot describe a
    region of a buffer is rejected outright.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        start = self._coerce_offset(self.start, "start")
        end = self._coerce_offset(self.end, "end")
        if end < start:
            raise InvalidArgumentError(
                f"TextSpan end ({end}) precedes start ({start})", parameter="end", value=end
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @staticmethod
    def _coerce_offset(value: Any, label: str) -> int:
        if isinstance(value, bool):
            raise InvalidArgumentError(f"TextSpan {label} must be an integer", parameter=label, value=value)
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(
                f"TextSpan {label} must be an integer", parameter=label, value=value
            ) from exc
        if number < 0:
            raise InvalidArgumentError(f"TextSpan {label} must not be negative", parameter=label, value=number)
        return number

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int) -> int:  # type: ignore[override]
        if index == 0:
            return self.start
        if index == 1:
            return self.end
        raise IndexError("TextSpan index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.start
        yield self.end

    @property
    def length(self) -> int:
        """Return the number of characters covered by the span."""

        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the span covers no characters."""

        return self.start == self.end

    def to_list(self) -> list[int]:
        """Return the span as a JSON-friendly list."""

        return [self.start, self.end]


__all__ = ["TextSpan"]
