"""Permutation tree data model.

A permutation tree encodes which groups of observations may be
reordered, and at which nesting level.  Two node types exist:

* :class:`Leaf` — holds observation indices directly, in a fixed
  relative order.  Leaves never reorder their own contents.
* :class:`Branch` — a branch point over child nodes.  A **free**
  branch carries an :class:`OrderTable` and its children may be
  rearranged; a **fixed** branch has ``order=None`` and its children
  keep their relative order forever (their descendants may still be
  free).

Example — four observations in two blocks of two, where the blocks
may be swapped as units and each block may be shuffled internally::

    tree = branch(
        branch(leaf(0), leaf(1)),
        branch(leaf(2), leaf(3)),
    )

Marking the second block ``fixed=True`` freezes the order of 2 and 3
while still allowing the two blocks to trade places.

All node types are frozen dataclasses.  The functions in
:mod:`permutation_trees.mutators` never modify a node in place; they
return a new node, so a tree handed to the sampler is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np

# Column layout of an order table.
CURRENT = 0
ORIGINAL = 1
SORT_KEY = 2


@dataclass(frozen=True, eq=False)
class OrderTable:
    """Ordering state of one free branch point.

    One row per immediate child, rows listed in the children's
    *current* order.

    Columns:
        CURRENT: Value the lexicographic enumeration runs over.  It is
            initialised to the construction-time position and travels
            with its row, so it is always a permutation of ORIGINAL.
        ORIGINAL: Construction-time position of the row's child.
        SORT_KEY: Scratch.  After a reorder it holds, for every new
            row position, the row position it came from.  Carries no
            meaning between operations.
    """

    rows: np.ndarray

    def __post_init__(self) -> None:
        rows = np.array(self.rows, dtype=np.intp, copy=True)
        if rows.ndim != 2 or rows.shape[1] != 3:
            raise ValueError(
                f"Order table rows must have shape (k, 3), got {rows.shape}."
            )
        rows.setflags(write=False)
        object.__setattr__(self, "rows", rows)

    @classmethod
    def identity(cls, size: int) -> OrderTable:
        """Return the construction-time table for *size* children."""
        positions = np.arange(size, dtype=np.intp)
        return cls(np.column_stack([positions, positions, positions]))

    def __len__(self) -> int:
        return self.rows.shape[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderTable):
            return NotImplemented
        # SORT_KEY is scratch and does not take part in equality.
        return np.array_equal(
            self.rows[:, [CURRENT, ORIGINAL]], other.rows[:, [CURRENT, ORIGINAL]]
        )

    def __hash__(self) -> int:
        return hash(self.rows[:, [CURRENT, ORIGINAL]].tobytes())

    @property
    def current(self) -> np.ndarray:
        return self.rows[:, CURRENT]

    @property
    def original(self) -> np.ndarray:
        return self.rows[:, ORIGINAL]

    @property
    def sort_key(self) -> np.ndarray:
        return self.rows[:, SORT_KEY]

    @property
    def is_identity(self) -> bool:
        """``True`` when every row sits at its construction-time position."""
        return bool(np.array_equal(self.original, np.arange(len(self))))


@dataclass(frozen=True)
class Leaf:
    """Terminal node holding observation indices in fixed order."""

    indices: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "indices", tuple(int(i) for i in self.indices))


@dataclass(frozen=True)
class Branch:
    """Branch point over ``children``, listed in current order.

    Attributes:
        children: Child nodes in their current arrangement.
        order: Order table for a free branch point, or ``None`` when the
            branch is fixed.
    """

    children: tuple[Node, ...]
    order: OrderTable | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))
        if self.order is not None and len(self.order) != len(self.children):
            raise ValueError(
                f"Order table has {len(self.order)} rows but the branch "
                f"has {len(self.children)} children."
            )

    @property
    def fixed(self) -> bool:
        return self.order is None


Node = Union[Leaf, Branch]


def leaf(*indices: int) -> Leaf:
    """Build a leaf holding *indices*."""
    return Leaf(indices)


def branch(*children: Node, fixed: bool = False) -> Branch:
    """Build a branch point over *children*.

    Args:
        *children: Child nodes in construction order.
        fixed: If ``True`` the children's relative order is frozen and no
            order table is attached.

    Returns:
        A :class:`Branch` in its identity state.
    """
    order = None if fixed else OrderTable.identity(len(children))
    return Branch(children, order)


def n_observations(node: Node) -> int:
    """Return the number of observation indices stored under *node*."""
    if isinstance(node, Leaf):
        return len(node.indices)
    return sum(n_observations(child) for child in node.children)
