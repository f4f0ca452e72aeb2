"""A text value type with explicit, index-arithmetic string operations."""

from .core import (
    NOT_FOUND,
    IndexOutOfRangeError,
    InvalidArgumentError,
    NullReferenceError,
    TextSpan,
    TextValue,
    TextValueError,
)

__version__ = "0.1.0"

__all__ = [
    "TextValue",
    "TextSpan",
    "NOT_FOUND",
    "TextValueError",
    "NullReferenceError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "__version__",
]
