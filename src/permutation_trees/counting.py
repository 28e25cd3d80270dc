"""Size of the reference set encoded by a permutation tree."""

from __future__ import annotations

import math

from .tree import Leaf, Node


def count_permutations(node: Node) -> int:
    """Return the number of distinct tree-consistent permutations.

    A leaf contributes a single arrangement.  A fixed branch point
    contributes the product of its children's counts; a free branch
    point with ``k`` children multiplies that product by ``k!``.

    The count is an exact Python integer, so it does not overflow for
    large trees.

    Args:
        node: Root of the tree (or any subtree).

    Returns:
        Number of distinct permutations reachable from *node*.
    """
    if isinstance(node, Leaf):
        return 1
    total = 1
    for child in node.children:
        total *= count_permutations(child)
    if node.order is not None:
        total *= math.factorial(len(node.children))
    return total
