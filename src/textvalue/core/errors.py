"""Error types raised by :class:`~textvalue.core.text_value.TextValue` operations."""

from __future__ import annotations

from typing import Any


class TextValueError(Exception):
    """Base class for precondition failures reported by text value operations."""

    code = "text_value_error"

    def __init__(self, message: str, *, parameter: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.parameter = parameter
        self.value = value

    def details(self) -> dict[str, Any]:
        """Return a JSON-friendly description of the failure."""

        result: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.parameter is not None:
            result["parameter"] = self.parameter
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class NullReferenceError(TextValueError, TypeError):
    """Raised when a required argument is ``None``."""

    code = "null_reference"

    def __init__(self, parameter: str) -> None:
        super().__init__(f"{parameter} must not be None", parameter=parameter)


class InvalidArgumentError(TextValueError, ValueError):
    """Raised when an argument is present but violates a precondition."""

    code = "invalid_argument"


class IndexOutOfRangeError(TextValueError, IndexError):
    """Raised when a character position falls outside the buffer."""

    code = "index_out_of_range"

    def __init__(self, index: int, length: int, *, parameter: str = "index") -> None:
        super().__init__(
            f"{parameter} {index} is out of range for length {length}",
            parameter=parameter,
            value=index,
        )
        self.index = index
        self.length = length


def null_guard(parameter: str, value: Any) -> None:
    """Raise :class:`NullReferenceError` when ``value`` is ``None``."""

    if value is None:
        raise NullReferenceError(parameter)


__all__ = [
    "TextValueError",
    "NullReferenceError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "null_guard",
]
