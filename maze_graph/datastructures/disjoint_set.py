import typing
from typing import Generic, Hashable, TypeVar

import numpy as np
from jaxtyping import Int

from maze_graph.errors import InvalidArgumentError, UnknownElementError

T = TypeVar("T", bound=Hashable)

# slots allocated up front by a fresh `DisjointSet`, doubled whenever exhausted
DISJOINT_SET_INITIAL_CAPACITY: int = 10_000


class DisjointSet(Generic[T]):
    """partition of registered elements into disjoint sets

    each element gets a stable integer slot the first time it is registered.
    slots are stored as a forest in two parallel arrays:

    - `_parent[slot]` is the slot's parent, and equal to `slot` for a root
    - `_rank[slot]` bounds the height of the tree below `slot` (only read for roots)

    `find_set` does full path compression and `union` attaches the lower rank
    root under the higher rank root, giving amortized near-constant time per
    operation. both arrays double in size when they run out of slots.

    the ids returned by `find_set` and `union` are slot indices: only compare
    them against other ids from the same instance.
    """

    def __init__(self, initial_capacity: int = DISJOINT_SET_INITIAL_CAPACITY) -> None:
        if initial_capacity < 1:
            raise InvalidArgumentError(
                f"initial_capacity must be positive, got {initial_capacity = }"
            )
        self._parent: Int[np.ndarray, "slot"] = np.zeros(initial_capacity, dtype=np.int64)
        self._rank: Int[np.ndarray, "slot"] = np.zeros(initial_capacity, dtype=np.int64)
        self._slot_index: dict[T, int] = dict()
        self._n_sets: int = 0

    def __len__(self) -> int:
        return len(self._slot_index)

    def __contains__(self, item: T) -> bool:
        return item in self._slot_index

    @property
    def capacity(self) -> int:
        return len(self._parent)

    @property
    def n_sets(self) -> int:
        """number of disjoint sets currently in the partition"""
        return self._n_sets

    def _grow(self) -> None:
        padding: Int[np.ndarray, "slot"] = np.zeros(self.capacity, dtype=np.int64)
        self._parent = np.concatenate([self._parent, padding])
        self._rank = np.concatenate([self._rank, padding.copy()])

    def _get_slot(self, item: T) -> int:
        try:
            return self._slot_index[item]
        except KeyError:
            raise UnknownElementError(
                f"element {item!r} was never registered with `make_set`"
            ) from None

    def make_set(self, item: T) -> None:
        """register `item` as a new singleton set"""
        if item in self._slot_index:
            raise InvalidArgumentError(f"element {item!r} is already registered")

        slot: int = len(self._slot_index)
        if slot == self.capacity:
            self._grow()

        self._parent[slot] = slot
        self._rank[slot] = 0
        self._slot_index[item] = slot
        self._n_sets += 1

    def find_set(self, item: T) -> int:
        """return the id of the representative of the set containing `item`

        every slot visited on the way to the root is repointed directly at it
        """
        slot: int = self._get_slot(item)

        root: int = slot
        while self._parent[root] != root:
            root = int(self._parent[root])

        # path compression
        while slot != root:
            next_slot: int = int(self._parent[slot])
            self._parent[slot] = root
            slot = next_slot

        return root

    def union(self, item1: T, item2: T) -> int:
        """merge the sets containing `item1` and `item2`, returning the id of the merged set"""
        root1: int = self.find_set(item1)
        root2: int = self.find_set(item2)
        if root1 == root2:
            return root1

        # keep `root1` as the higher rank root
        if self._rank[root1] < self._rank[root2]:
            root1, root2 = root2, root1

        self._parent[root2] = root1
        if self._rank[root1] == self._rank[root2]:
            self._rank[root1] += 1

        self._n_sets -= 1
        return root1

    def connected(self, item1: T, item2: T) -> bool:
        """whether `item1` and `item2` are in the same set"""
        return self.find_set(item1) == self.find_set(item2)

    def get_sets(self) -> dict[int, list[T]]:
        """map from each representative id to the members of its set, in registration order"""
        sets: dict[int, list[T]] = dict()
        item: T
        for item in self._slot_index:
            sets.setdefault(self.find_set(item), list()).append(item)
        return sets

    @classmethod
    def from_items(
        cls,
        items: typing.Iterable[T],
        initial_capacity: int = DISJOINT_SET_INITIAL_CAPACITY,
    ) -> "DisjointSet[T]":
        """create a disjoint set with every item in `items` registered as a singleton"""
        output: DisjointSet[T] = cls(initial_capacity=initial_capacity)
        for item in items:
            output.make_set(item)
        return output
