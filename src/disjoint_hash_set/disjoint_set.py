# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Incremental disjoint set keyed by element hash.

https://en.wikipedia.org/wiki/Disjoint-set_data_structure

Elements and links between them can be added as they are discovered; the
total number of elements need not be known up front. Joins are by rank and
lookups compress paths, giving the usual near-constant amortized cost.
"""

from absl import logging
from typing import (
    Dict,
    FrozenSet,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Tuple,
    TypeVar,
)

T = TypeVar("T", bound=Hashable)


class DisjointHashSet(Generic[T]):
    """Union-find over hashable elements.

    Note that is_linked registers elements it hasn't seen and compresses
    paths, so it mutates the structure even though it reads like a query.
    Use contains (or `in`) to test membership without inserting.

    sets() and sorted() consume the structure; any later use raises
    ValueError.
    """

    def __init__(self, links: Iterable[Tuple[T, T]] = ()):
        self._ids: Dict[T, int] = {}
        self._elements: List[T] = []
        self._parent: List[int] = []
        self._rank: List[int] = []
        self._consumed = False
        for a, b in links:
            self.link(a, b)

    @classmethod
    def from_links(cls, links: Iterable[Tuple[T, T]]) -> "DisjointHashSet[T]":
        return cls(links)

    def __len__(self):
        self._check_live()
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        self._check_live()
        return iter(tuple(self._elements))

    def __contains__(self, e: T) -> bool:
        return self.contains(e)

    def __repr__(self):
        if self._consumed:
            return f"{type(self).__name__}(<consumed>)"
        num_roots = sum(1 for i, p in enumerate(self._parent) if i == p)
        name = type(self).__name__
        return f"{name}({len(self._elements)} elements in {num_roots} sets)"

    def contains(self, e: T) -> bool:
        self._check_live()
        return e in self._ids

    def insert(self, e: T) -> bool:
        """Adds e as a singleton set. Returns True if e was not already present."""
        self._check_live()
        if e in self._ids:
            return False
        self._id_or_insert(e)
        return True

    def link(self, a: T, b: T):
        """Joins the sets of a and b, inserting either if new."""
        self._check_live()
        hash(a), hash(b)  # fail before inserting either
        self._union(self._id_or_insert(a), self._id_or_insert(b))

    def is_linked(self, a: T, b: T) -> bool:
        """Whether a and b are in the same set.

        Unseen elements are inserted as singletons first, so asking about two
        distinct new elements returns False and leaves two new sets behind.
        """
        self._check_live()
        hash(a), hash(b)  # fail before inserting either
        a_id = self._id_or_insert(a)
        b_id = self._id_or_insert(b)
        return self._find(a_id) == self._find(b_id)

    def sets(self) -> Tuple[FrozenSet[T], ...]:
        """Consumes self, returning one frozenset per disjoint set.

        Sets come out in the order their roots are first reached scanning
        elements in insertion order.
        """
        self._check_live()
        result = self._groups()
        self._consume(len(result))
        return result

    def sorted(self) -> Tuple[Tuple[T, ...], ...]:
        """Sorted tuple of sorted tuples edition of sets().

        Elements must be mutually orderable. If they are not, the TypeError
        from sorting is raised and self is left intact.
        """
        self._check_live()
        groups = self._groups()
        result = tuple(sorted(tuple(sorted(s)) for s in groups))
        self._consume(len(groups))
        return result

    def _check_live(self):
        if self._consumed:
            raise ValueError(f"{type(self).__name__} already consumed by sets()")

    def _groups(self) -> Tuple[FrozenSet[T], ...]:
        groups: Dict[int, List[T]] = {}
        for i, e in enumerate(self._elements):
            groups.setdefault(self._find(i), []).append(e)
        return tuple(frozenset(g) for g in groups.values())

    def _consume(self, num_sets: int):
        logging.debug(
            "DisjointHashSet consumed: %d elements in %d sets",
            len(self._elements),
            num_sets,
        )
        self._consumed = True
        self._ids = {}
        self._elements = []
        self._parent = []
        self._rank = []

    def _id_or_insert(self, e: T) -> int:
        e_id = self._ids.get(e)
        if e_id is None:
            e_id = len(self._elements)
            self._ids[e] = e_id
            self._elements.append(e)
            self._parent.append(e_id)
            self._rank.append(0)
        return e_id

    # find with path compression
    def _find(self, i: int) -> int:
        root = i
        while self._parent[root] != root:
            root = self._parent[root]
        while i != root:
            parent = self._parent[i]
            self._parent[i] = root
            i = parent
        return root

    # union by rank; ties attach b under a
    def _union(self, a: int, b: int):
        a_root = self._find(a)
        b_root = self._find(b)
        if a_root == b_root:
            return  # already in the same set
        if self._rank[a_root] < self._rank[b_root]:
            a_root, b_root = b_root, a_root

        self._parent[b_root] = a_root
        if self._rank[a_root] == self._rank[b_root]:
            self._rank[a_root] += 1
