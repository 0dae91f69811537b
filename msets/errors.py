"""Exceptions that may be raised by multiset operations."""

from numbers import Integral


class MultisetError(Exception):
    """Base class for all errors raised by msets."""


class InvalidArgument(MultisetError, ValueError):
    """An argument is missing or has a value the operation cannot accept.

    Attributes:
        name: The name of the offending parameter.
        value: The value that was given for it.
    """

    def __init__(self, name, value, reason):
        """Initialize an InvalidArgument."""
        message = f"Invalid value for '{name}': {value!r} ({reason})"
        super().__init__(message)
        self.name = name
        self.value = value
        self.reason = reason


class Unsupported(MultisetError, TypeError):
    """The operation is not available on this kind of multiset."""


def check_count(name, n):
    """Return n if it is a strictly positive integer.

    Raise InvalidArgument otherwise. Booleans are not accepted even though
    they are integers.
    """
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise InvalidArgument(name, n, "expected an integer")
    if n <= 0:
        raise InvalidArgument(name, n, "must be strictly positive")
    return int(n)


def check_operand(name, value):
    """Return value if it is an iterable, raise InvalidArgument otherwise."""
    if value is None:
        raise InvalidArgument(name, value, "a value is required")
    try:
        iter(value)
    except TypeError:
        raise InvalidArgument(name, value, "expected an iterable") from None
    return value


__all__ = [
    "InvalidArgument",
    "MultisetError",
    "Unsupported",
    "check_count",
    "check_operand",
]
