"""Implementation of Multiset and FrozenMultiset."""

from collections.abc import Mapping
from itertools import chain, repeat

from ovld import ovld

from .equivalence import NATURAL, Equivalence
from .errors import InvalidArgument, Unsupported, check_count, check_operand


def _check_equivalence(equivalence):
    if equivalence is None:
        raise InvalidArgument("equivalence", None, "a value is required")
    if not isinstance(equivalence, Equivalence):
        raise InvalidArgument(
            "equivalence", equivalence, "expected an Equivalence"
        )
    return equivalence


class CountMap(Mapping):
    """Read-only mapping from elements to multiplicities.

    Lookups go through an Equivalence rather than the elements' own
    equality and hash, so elements that are unhashable or equal under ==
    can still be distinct keys.
    """

    def __init__(self, entries, equivalence):
        """Initialize a CountMap from a dict of ElementKey to count."""
        self._d = dict(entries)
        self._equivalence = equivalence

    @property
    def equivalence(self):
        """The Equivalence used to look up elements."""
        return self._equivalence

    def __getitem__(self, e):
        return self._d[self._equivalence.key(e)]

    def __iter__(self):
        return (key.value for key in self._d)

    def __len__(self):
        return len(self._d)

    def __repr__(self):
        contents = ", ".join(f"{e!r}: {n}" for e, n in self.items())
        return f"CountMap({{{contents}}}, equivalence={self._equivalence})"


class Multiset:
    """Like set(), but each element has a multiplicity.

    Elements are compared with the Equivalence given at construction. When
    an operation takes another collection, that collection is interpreted
    with the equivalence of the multiset the method is called on.

    Iteration yields each element as many times as its multiplicity, in an
    unspecified order. Mutating a multiset while iterating over it is not
    supported.
    """

    is_read_only = False

    def __init__(self, iterable=None, equivalence=NATURAL):
        """Create a Multiset, counting each element of iterable once."""
        self._equivalence = _check_equivalence(equivalence)
        self._d = {}
        self._count = 0
        if iterable is not None:
            check_operand("iterable", iterable)
            key = self._equivalence.key
            for e in iterable:
                self._incr(key(e), 1)

    @classmethod
    def from_counts(cls, counts, equivalence=NATURAL):
        """Create a multiset from a mapping of elements to multiplicities."""
        if not isinstance(counts, Mapping):
            raise InvalidArgument("counts", counts, "expected a mapping")
        res = cls(equivalence=equivalence)
        for e, n in counts.items():
            res._incr(res._equivalence.key(e), check_count("counts", n))
        return res

    @property
    def equivalence(self):
        """The Equivalence used to compare elements."""
        return self._equivalence

    ########################
    # Internal bookkeeping #
    ########################

    def _incr(self, key, n):
        self._d[key] = self._d.get(key, 0) + n
        self._count += n

    def _decr(self, key, n):
        """Remove up to n occurrences of key, return how many were removed."""
        current = self._d.get(key, 0)
        if current == 0:
            return 0
        if n >= current:
            del self._d[key]
            n = current
        else:
            self._d[key] = current - n
        self._count -= n
        return n

    def _copy_as(self, cls):
        res = cls.__new__(cls)
        res._equivalence = self._equivalence
        res._d = dict(self._d)
        res._count = self._count
        return res

    def _union(self, other):
        for key, n in list(other._d.items()):
            self._incr(key, n)
        return self

    def _intersect(self, other):
        for key, n in list(self._d.items()):
            keep = min(n, other._d.get(key, 0))
            if keep < n:
                self._decr(key, n - keep)
        return self

    def _except(self, other):
        for key, n in list(other._d.items()):
            self._decr(key, n)
        return self

    def _symmetric_except(self, other):
        # Shared occurrences leave both sides before the residue of other
        # is added.
        residue = other._copy_as(Multiset)
        for key, n in list(residue._d.items()):
            shared = min(self._d.get(key, 0), n)
            if shared:
                self._decr(key, shared)
                residue._decr(key, shared)
        return self._union(residue)

    ############
    # Mutators #
    ############

    def add(self, e, n=1):
        """Add n occurrences of e."""
        n = check_count("n", n)
        self._incr(self._equivalence.key(e), n)
        return self

    def remove(self, e, n=1):
        """Remove n occurrences of e.

        If e has n or fewer occurrences, it is removed entirely. Nothing
        happens if e is not present.
        """
        n = check_count("n", n)
        self._decr(self._equivalence.key(e), n)
        return self

    def discard(self, e, n=1):
        """Remove n occurrences of e, return whether anything was removed."""
        n = check_count("n", n)
        return self._decr(self._equivalence.key(e), n) > 0

    def remove_all(self, e):
        """Remove every occurrence of e."""
        key = self._equivalence.key(e)
        self._count -= self._d.pop(key, 0)
        return self

    def clear(self):
        """Remove all entries."""
        self._d.clear()
        self._count = 0
        return self

    def union_with(self, other):
        """Add every occurrence of every element of other."""
        return self._union(materialize(other, self._equivalence))

    def intersect_with(self, other):
        """Keep min(self[e], other[e]) occurrences of each element."""
        return self._intersect(materialize(other, self._equivalence))

    def except_with(self, other):
        """Remove one occurrence for each occurrence in other."""
        return self._except(materialize(other, self._equivalence))

    def symmetric_except_with(self, other):
        """Keep only the occurrences that are not shared with other.

        For every element, min(self[e], other[e]) occurrences are removed
        from both sides, and what remains of other is added to self.
        """
        return self._symmetric_except(materialize(other, self._equivalence))

    def __iadd__(self, other):
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.union_with(other)

    def __isub__(self, other):
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.except_with(other)

    def __imul__(self, other):
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.intersect_with(other)

    ###########
    # Queries #
    ###########

    def count(self):
        """Return the total number of occurrences."""
        return self._count

    def is_empty(self):
        """Return True if there are no elements."""
        return self._count == 0

    def multiplicity_of(self, e):
        """Return the number of occurrences of e, 0 if absent."""
        return self._d.get(self._equivalence.key(e), 0)

    def contains(self, e):
        """Return True if e occurs at least once."""
        return self.multiplicity_of(e) > 0

    def distinct(self):
        """Iterate over the distinct elements."""
        return (key.value for key in self._d)

    def items(self):
        """Iterate over (element, multiplicity) pairs."""
        return ((key.value, n) for key, n in self._d.items())

    def to_set(self):
        """Return a new collection of the distinct elements.

        With the NATURAL equivalence this is a plain set. Otherwise it is a
        Multiset using the same equivalence, holding each distinct element
        once, since a set would compare elements with their own ==.
        """
        if self._equivalence == NATURAL:
            return set(self.distinct())
        return Multiset(self.distinct(), self._equivalence)

    def to_counts(self):
        """Return a new mapping of each element to its multiplicity.

        With the NATURAL equivalence this is a plain dict, otherwise a
        CountMap looking up elements through the same equivalence.
        """
        if self._equivalence == NATURAL:
            return dict(self.items())
        return CountMap(self._d, self._equivalence)

    def copy(self):
        """Return a shallow copy."""
        return self._copy_as(type(self))

    def freeze(self):
        """Return a read-only snapshot of this multiset."""
        return self._copy_as(FrozenMultiset)

    def thaw(self):
        """Return a mutable copy of this multiset."""
        return self._copy_as(Multiset)

    __len__ = count
    __getitem__ = multiplicity_of
    __contains__ = contains

    def __iter__(self):
        return chain.from_iterable(
            repeat(key.value, n) for key, n in self._d.items()
        )

    def __bool__(self):
        return self._count > 0

    def __repr__(self):
        name = type(self).__name__
        contents = ", ".join(f"{e!r}: {n}" for e, n in self.items())
        if self._equivalence == NATURAL:
            return f"{name}({{{contents}}})"
        return f"{name}({{{contents}}}, equivalence={self._equivalence})"

    ##############
    # Predicates #
    ##############

    def is_subset_of(self, other):
        """Test whether no element occurs more often here than in other."""
        other = materialize(other, self._equivalence)
        return all(n <= other._d.get(key, 0) for key, n in self._d.items())

    def is_proper_subset_of(self, other):
        """Test for a subset with fewer occurrences than other.

        Some element must occur strictly fewer times here than in other,
        and the total count of other must be strictly larger.
        """
        other = materialize(other, self._equivalence)
        if not all(n <= other._d.get(key, 0) for key, n in self._d.items()):
            return False
        smaller = any(self._d.get(key, 0) < n for key, n in other._d.items())
        return smaller and other._count > self._count

    def is_superset_of(self, other):
        """Test whether every distinct element of other is present here.

        Multiplicities are not compared.
        """
        other = materialize(other, self._equivalence)
        return all(key in self._d for key in other._d)

    def is_proper_superset_of(self, other):
        """Test for a superset with more occurrences than other.

        Every distinct element of other must be present here, some element
        must occur strictly more often here, and the total count here must
        be strictly larger.
        """
        other = materialize(other, self._equivalence)
        if not all(key in self._d for key in other._d):
            return False
        larger = any(other._d.get(key, 0) < n for key, n in self._d.items())
        return larger and self._count > other._count

    def overlaps(self, other):
        """Return True if there is at least one element in common."""
        other = materialize(other, self._equivalence)
        return any(key in other._d for key in self._d)

    def multiset_equals(self, other):
        """Test whether other has exactly the same multiplicities."""
        other = materialize(other, self._equivalence)
        if self._count != other._count:
            return False
        return all(n == other._d.get(key, 0) for key, n in self._d.items())

    def __eq__(self, other):
        if not isinstance(other, Multiset):
            return NotImplemented
        if self._equivalence != other._equivalence:
            return False
        return self.multiset_equals(other)

    __hash__ = None

    ##########
    # Binary #
    ##########

    def __add__(self, other):
        if not isinstance(other, Multiset):
            return NotImplemented
        return union(self, other)

    def __sub__(self, other):
        if not isinstance(other, Multiset):
            return NotImplemented
        return difference(self, other)

    def __mul__(self, other):
        if not isinstance(other, Multiset):
            return NotImplemented
        return intersection(self, other)


def _read_only(name):
    def method(self, *args, **kwargs):
        raise Unsupported(f"{type(self).__name__} does not support {name}()")

    method.__name__ = name
    return method


class FrozenMultiset(Multiset):
    """A Multiset that cannot be modified once created.

    Every mutator raises Unsupported. Unlike Multiset, instances are
    hashable.
    """

    is_read_only = True

    add = _read_only("add")
    remove = _read_only("remove")
    discard = _read_only("discard")
    remove_all = _read_only("remove_all")
    clear = _read_only("clear")
    union_with = _read_only("union_with")
    intersect_with = _read_only("intersect_with")
    except_with = _read_only("except_with")
    symmetric_except_with = _read_only("symmetric_except_with")
    __iadd__ = _read_only("__iadd__")
    __isub__ = _read_only("__isub__")
    __imul__ = _read_only("__imul__")

    def freeze(self):
        """Return self, which is already read-only."""
        return self

    def __hash__(self):
        return hash(frozenset((hash(key), n) for key, n in self._d.items()))


###############
# materialize #
###############


@ovld
def materialize(other: object, equivalence):
    """Return other as a Multiset that uses the given equivalence.

    A mapping is read as elements to multiplicities, like from_counts.
    A Multiset that already uses it is returned as is and must not be
    modified by the caller.
    """
    check_operand("other", other)
    return Multiset(other, equivalence)


@ovld  # noqa: F811
def materialize(other: type(None), equivalence):
    raise InvalidArgument("other", other, "a value is required")


@ovld  # noqa: F811
def materialize(other: (dict, Mapping), equivalence):
    return Multiset.from_counts(other, equivalence)


@ovld  # noqa: F811
def materialize(other: Multiset, equivalence):
    if other._equivalence == equivalence:
        return other
    res = Multiset(equivalence=equivalence)
    for e, n in other.items():
        res._incr(equivalence.key(e), n)
    return res


##########
# Binary #
##########


def _check_multiset(name, value):
    if not isinstance(value, Multiset):
        raise InvalidArgument(name, value, "expected a Multiset")
    return value


def union(a, b):
    """Return a new multiset with a[e] + b[e] occurrences of each element."""
    _check_multiset("a", a)
    return a.copy()._union(materialize(b, a.equivalence))


def difference(a, b):
    """Return a new multiset with max(0, a[e] - b[e]) occurrences."""
    _check_multiset("a", a)
    return a.copy()._except(materialize(b, a.equivalence))


def intersection(a, b):
    """Return a new multiset with min(a[e], b[e]) occurrences."""
    _check_multiset("a", a)
    return a.copy()._intersect(materialize(b, a.equivalence))


def symmetric_difference(a, b):
    """Return a new multiset with the occurrences a and b do not share."""
    _check_multiset("a", a)
    return a.copy()._symmetric_except(materialize(b, a.equivalence))


__all__ = [
    "CountMap",
    "FrozenMultiset",
    "Multiset",
    "difference",
    "intersection",
    "materialize",
    "symmetric_difference",
    "union",
]
