"""Reordering primitives over a single order table.

Each primitive returns a *new* :class:`~permutation_trees.tree.OrderTable`
whose ``SORT_KEY`` column records, for every new row position, the row
position it was taken from.  Callers apply the same move to the branch's
children with :func:`reorder`, which keeps a child glued to its row.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from .tree import CURRENT, ORIGINAL, SORT_KEY, OrderTable

T = TypeVar("T")


def _moved(table: OrderTable, source: np.ndarray) -> OrderTable:
    rows = table.rows[source].copy()
    rows[:, SORT_KEY] = source
    return OrderTable(rows)


def next_order(table: OrderTable) -> tuple[OrderTable, bool]:
    """Advance *table* to its next lexicographic row arrangement.

    Rows are compared on the ``CURRENT`` column.  This is the textbook
    next-permutation step: find the rightmost ascent ``i``, swap row
    ``i`` with the rightmost row greater than it, then reverse the
    suffix after ``i``.

    Args:
        table: The order table in its current arrangement.

    Returns:
        ``(table', True)`` on success.  When *table* is already the last
        (descending) arrangement, ``(table, False)`` is returned and the
        input is left as-is.
    """
    key = table.current
    k = len(key)

    i = k - 2
    while i >= 0 and key[i] >= key[i + 1]:
        i -= 1
    if i < 0:
        return table, False

    j = k - 1
    while key[j] <= key[i]:
        j -= 1

    source = np.arange(k, dtype=np.intp)
    source[i], source[j] = source[j], source[i]
    source[i + 1 :] = source[i + 1 :][::-1].copy()
    return _moved(table, source), True


def restore_order(table: OrderTable) -> OrderTable:
    """Sort rows back to their construction-time arrangement."""
    source = np.lexsort((table.rows[:, ORIGINAL], table.rows[:, CURRENT]))
    return _moved(table, source.astype(np.intp))


def shuffle_order(table: OrderTable, rng: np.random.Generator) -> OrderTable:
    """Rearrange rows by a uniformly random permutation drawn from *rng*."""
    return _moved(table, rng.permutation(len(table)).astype(np.intp))


def reorder(items: Sequence[T], table: OrderTable) -> tuple[T, ...]:
    """Apply the move recorded in ``table.sort_key`` to *items*."""
    return tuple(items[int(s)] for s in table.sort_key)
