"""Core value type and the buffer algorithms behind it."""

from .errors import IndexOutOfRangeError, InvalidArgumentError, NullReferenceError, TextValueError
from .ranges import TextSpan
from .scanning import NOT_FOUND
from .text_value import TextValue

__all__ = [
    "TextValue",
    "TextSpan",
    "NOT_FOUND",
    "TextValueError",
    "NullReferenceError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
]
