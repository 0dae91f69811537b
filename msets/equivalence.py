"""Equivalence relations used to decide when two elements are the same."""

import operator
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class Equivalence:
    """A pair of equality and hash functions.

    Two elements `a` and `b` are the same entry of a multiset if
    `equals(a, b)` is true. The hash function must be consistent with it:
    `equals(a, b)` implies `hash(a) == hash(b)`.

    Attributes:
        equals: Binary predicate deciding if two elements are equivalent.
        hash: Function mapping an element to an integer.
        name: Name used in the representation of multisets.

    """

    equals: Callable[[Any, Any], bool]
    hash: Callable[[Any], int]
    name: Optional[str] = None

    def key(self, value):
        """Wrap value so that it can be used as a dictionary key."""
        return ElementKey(self, value)

    def __str__(self):
        return self.name or repr(self)


class ElementKey:
    """Dictionary key comparing its value through an Equivalence.

    Keys built from unequal Equivalence instances never compare equal.
    """

    __slots__ = ("equivalence", "value", "_hash")

    def __init__(self, equivalence, value):
        """Initialize an ElementKey."""
        self.equivalence = equivalence
        self.value = value
        self._hash = equivalence.hash(value)

    def __hash__(self):
        return self._hash

    def __eq__(self, other):
        if not isinstance(other, ElementKey):
            return NotImplemented
        return (
            self.equivalence == other.equivalence
            and self._hash == other._hash
            and bool(self.equivalence.equals(self.value, other.value))
        )

    def __repr__(self):
        return f"ElementKey({self.value!r})"


def by_key(fn, name=None):
    """Return an Equivalence comparing elements on fn(element).

    >>> caseless = by_key(str.lower)
    >>> caseless.equals("Apple", "APPLE")
    True
    """
    if name is None:
        name = f"by_key({getattr(fn, '__qualname__', fn)})"
    return Equivalence(
        equals=lambda a, b: fn(a) == fn(b),
        hash=lambda a: hash(fn(a)),
        name=name,
    )


NATURAL = Equivalence(equals=operator.eq, hash=hash, name="NATURAL")
IDENTITY = Equivalence(equals=operator.is_, hash=id, name="IDENTITY")


__all__ = [
    "ElementKey",
    "Equivalence",
    "IDENTITY",
    "NATURAL",
    "by_key",
]
