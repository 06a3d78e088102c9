import random

import pytest

from maze_graph.datastructures.disjoint_set import (
    DISJOINT_SET_INITIAL_CAPACITY,
    DisjointSet,
)
from maze_graph.errors import InvalidArgumentError, UnknownElementError


def _assert_forest_invariants(disjoint_set: DisjointSet) -> None:
    """every parent chain ends at a root, and no tree is taller than its root's rank"""
    for slot in disjoint_set._slot_index.values():
        height: int = 0
        while disjoint_set._parent[slot] != slot:
            slot = int(disjoint_set._parent[slot])
            height += 1
            assert height <= len(disjoint_set), "cycle in parent pointers"
        assert height <= disjoint_set._rank[slot]


def test_make_set_singletons():
    disjoint_set: DisjointSet[str] = DisjointSet()
    for item in "abc":
        disjoint_set.make_set(item)

    assert len(disjoint_set) == 3
    assert disjoint_set.n_sets == 3
    assert "a" in disjoint_set
    assert "z" not in disjoint_set
    assert len({disjoint_set.find_set(item) for item in "abc"}) == 3


def test_make_set_twice_fails():
    disjoint_set: DisjointSet[str] = DisjointSet()
    disjoint_set.make_set("a")
    with pytest.raises(InvalidArgumentError):
        disjoint_set.make_set("a")
    # still usable afterwards
    assert len(disjoint_set) == 1


def test_unknown_element_fails():
    disjoint_set: DisjointSet[str] = DisjointSet.from_items(["a"])
    with pytest.raises(UnknownElementError):
        disjoint_set.find_set("b")
    with pytest.raises(UnknownElementError):
        disjoint_set.union("a", "b")
    with pytest.raises(UnknownElementError):
        disjoint_set.union("b", "a")


def test_invalid_capacity():
    with pytest.raises(InvalidArgumentError):
        DisjointSet(initial_capacity=0)


def test_default_capacity():
    disjoint_set: DisjointSet[int] = DisjointSet()
    assert disjoint_set.capacity == DISJOINT_SET_INITIAL_CAPACITY == 10_000
    assert DisjointSet.from_items(range(3)).capacity == DISJOINT_SET_INITIAL_CAPACITY


def test_union_and_find():
    disjoint_set: DisjointSet[int] = DisjointSet.from_items(range(6))
    disjoint_set.union(0, 1)
    disjoint_set.union(2, 3)
    disjoint_set.union(1, 3)

    assert disjoint_set.connected(0, 2)
    assert disjoint_set.connected(3, 0)
    assert not disjoint_set.connected(0, 4)
    assert disjoint_set.find_set(0) == disjoint_set.find_set(3)
    assert disjoint_set.n_sets == 3

    sets: dict[int, list[int]] = disjoint_set.get_sets()
    assert sorted(sorted(members) for members in sets.values()) == [
        [0, 1, 2, 3],
        [4],
        [5],
    ]


def test_union_same_set_is_noop():
    disjoint_set: DisjointSet[str] = DisjointSet.from_items("ab")
    root: int = disjoint_set.union("a", "b")
    rank_before: int = int(disjoint_set._rank[root])

    assert disjoint_set.union("b", "a") == root
    assert disjoint_set.union("a", "a") == root
    assert disjoint_set._rank[root] == rank_before
    assert disjoint_set.n_sets == 1


def test_union_by_rank():
    disjoint_set: DisjointSet[str] = DisjointSet.from_items("abcde")

    # equal ranks: surviving root's rank goes up by one
    root_ab: int = disjoint_set.union("a", "b")
    assert disjoint_set._rank[root_ab] == 1

    # lower rank root goes under the higher rank root, rank unchanged
    root_abc: int = disjoint_set.union("c", "a")
    assert root_abc == root_ab
    assert disjoint_set._rank[root_abc] == 1

    root_de: int = disjoint_set.union("d", "e")
    assert disjoint_set._rank[root_de] == 1

    root_all: int = disjoint_set.union("a", "e")
    assert disjoint_set._rank[root_all] == 2
    assert all(disjoint_set.find_set(item) == root_all for item in "abcde")


def test_find_set_compresses_path():
    disjoint_set: DisjointSet[int] = DisjointSet.from_items(range(8))
    # build a tree of height 3 by unioning equal rank trees
    for a, b in [(0, 1), (2, 3), (4, 5), (6, 7), (0, 2), (4, 6), (0, 4)]:
        disjoint_set.union(a, b)
    _assert_forest_invariants(disjoint_set)

    root: int = disjoint_set.find_set(0)
    for item in range(8):
        assert disjoint_set.find_set(item) == root

    # after a find, every element points straight at the root
    for item in range(8):
        assert disjoint_set._parent[disjoint_set._slot_index[item]] == root


def test_find_set_idempotent():
    disjoint_set: DisjointSet[int] = DisjointSet.from_items(range(10))
    for a, b in [(0, 1), (1, 2), (5, 6), (6, 9)]:
        disjoint_set.union(a, b)

    first: list[int] = [disjoint_set.find_set(item) for item in range(10)]
    second: list[int] = [disjoint_set.find_set(item) for item in range(10)]
    assert first == second


def test_grows_past_initial_capacity():
    disjoint_set: DisjointSet[int] = DisjointSet(initial_capacity=2)
    for item in range(9):
        disjoint_set.make_set(item)

    assert disjoint_set.capacity == 16
    assert len(disjoint_set) == 9
    for item in range(8):
        disjoint_set.union(item, item + 1)
    assert disjoint_set.n_sets == 1
    assert len({disjoint_set.find_set(item) for item in range(9)}) == 1


def test_random_unions_match_naive_partition():
    rng: random.Random = random.Random(0)
    n: int = 200
    disjoint_set: DisjointSet[int] = DisjointSet(initial_capacity=16)
    naive: dict[int, set[int]] = dict()
    for item in range(n):
        disjoint_set.make_set(item)
        naive[item] = {item}

    for _ in range(150):
        a, b = rng.randrange(n), rng.randrange(n)
        disjoint_set.union(a, b)
        merged: set[int] = naive[a] | naive[b]
        for item in merged:
            naive[item] = merged

    _assert_forest_invariants(disjoint_set)
    for _ in range(500):
        a, b = rng.randrange(n), rng.randrange(n)
        assert disjoint_set.connected(a, b) == (b in naive[a])
    assert disjoint_set.n_sets == len({id(members) for members in naive.values()})
