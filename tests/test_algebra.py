import pytest

from msets import (
    Multiset,
    difference,
    intersection,
    symmetric_difference,
    union,
)

samples = [
    "",
    "a",
    "aab",
    "abc",
    "bbbcd",
    "aaabbc",
    "abcdabcd",
]

pairs = [(a, b) for a in samples for b in samples]


def _all_elements(*msets):
    return set().union(*[m.to_set() for m in msets])


@pytest.mark.parametrize("data", samples)
def test_count_invariant(data):
    mset = Multiset(data)
    assert mset.count() == sum(mset[e] for e in mset.to_set())
    assert mset.count() == len(list(mset))
    assert mset.count() == len(data)


@pytest.mark.parametrize("data", samples)
@pytest.mark.parametrize("n", [1, 2, 7])
def test_add_remove_round_trip(data, n):
    mset = Multiset(data)
    before = mset.to_counts()
    for e in "az":
        mset.add(e, n).remove(e, n)
    assert mset.to_counts() == before
    assert mset.count() == len(data)


@pytest.mark.parametrize("a,b", pairs)
def test_algebra_identities(a, b):
    A = Multiset(a)
    B = Multiset(b)

    assert (A * B).count() + (A - B).count() + (B - A).count() == (
        A + B
    ).count() - (A * B).count()

    for e in _all_elements(A, B):
        assert (A * B)[e] == min(A[e], B[e])
        assert (A - B)[e] == max(0, A[e] - B[e])
        assert (A + B)[e] == A[e] + B[e]


@pytest.mark.parametrize("a,b", pairs)
def test_named_functions(a, b):
    A = Multiset(a)
    B = Multiset(b)

    assert union(A, B) == A + B
    assert difference(A, B) == A - B
    assert intersection(A, B) == A * B
    assert union(A, b) == A + B
    assert symmetric_difference(A, B) == A.copy().symmetric_except_with(B)
    assert A == Multiset(a)
    assert B == Multiset(b)


@pytest.mark.parametrize("a,b", pairs)
def test_mutating_matches_binary(a, b):
    A = Multiset(a)
    B = Multiset(b)

    assert A.copy().union_with(B) == A + B
    assert A.copy().except_with(B) == A - B
    assert A.copy().intersect_with(B) == A * B


@pytest.mark.parametrize("data", samples)
def test_idempotence(data):
    A = Multiset(data)

    assert A.copy().intersect_with(A) == A
    assert A.copy().union_with(Multiset()) == A
    assert A.copy().union_with([]) == A


@pytest.mark.parametrize("a,b", pairs)
def test_symmetric_except_twice(a, b):
    A = Multiset(a)
    B = Multiset(b)

    once = A.copy().symmetric_except_with(B)
    twice = once.copy().symmetric_except_with(B)
    for e in _all_elements(A, B):
        assert once[e] == abs(A[e] - B[e])
        assert twice[e] == abs(once[e] - B[e])

    # Applying it twice restores A when no element occurs more often in A
    # than in B, except for elements B does not have at all.
    if all(A[e] <= B[e] or B[e] == 0 for e in _all_elements(A, B)):
        assert twice == A


def test_symmetric_except_self_inverse_disjoint():
    A = Multiset.from_counts({"a": 1, "b": 1, "c": 1})
    B = Multiset.from_counts({"b": 1, "c": 1, "d": 1})

    once = A.copy().symmetric_except_with(B)
    assert once.to_counts() == {"a": 1, "d": 1}

    twice = once.copy().symmetric_except_with(B)
    assert twice == A


@pytest.mark.parametrize("a,b", pairs)
def test_subset_predicates(a, b):
    A = Multiset(a)
    B = Multiset(b)
    elements = _all_elements(A, B)

    subset = all(A[e] <= B[e] for e in elements)
    assert A.is_subset_of(B) == subset
    assert A.is_proper_subset_of(B) == (subset and B.count() > A.count())

    superset = all(e in A for e in B.to_set())
    assert A.is_superset_of(B) == superset
    assert A.is_proper_superset_of(B) == (
        superset
        and any(B[e] < A[e] for e in elements)
        and A.count() > B.count()
    )


@pytest.mark.parametrize("a,b", pairs)
def test_equality_and_overlap(a, b):
    A = Multiset(a)
    B = Multiset(b)

    assert A.multiset_equals(B) == (sorted(a) == sorted(b))
    assert (A == B) == (sorted(a) == sorted(b))
    assert A.overlaps(B) == bool(set(a) & set(b))


def test_union_scenario():
    A = Multiset.from_counts({"a": 1, "b": 1})
    A.union_with(Multiset.from_counts({"b": 1, "c": 1}))
    assert A.to_counts() == {"a": 1, "b": 2, "c": 1}
    assert A.count() == 4


def test_intersect_scenario():
    A = Multiset.from_counts({"a": 1, "b": 2, "c": 1})
    A.intersect_with(Multiset.from_counts({"b": 1, "c": 2}))
    assert A.to_counts() == {"b": 1, "c": 1}
    assert A.count() == 2


def test_equals_scenario():
    A = Multiset.from_counts({"a": 1, "b": 2})
    B = Multiset.from_counts({"b": 2, "a": 1})
    assert A.multiset_equals(B)
    B.remove("b")
    assert not A.multiset_equals(B)


def test_binary_results_do_not_alias():
    A = Multiset("ab")
    B = Multiset("bc")

    for result in (A + B, A - B, A * B):
        result.add("z")
        assert "z" not in A
        assert "z" not in B
