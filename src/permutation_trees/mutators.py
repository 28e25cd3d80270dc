"""State transitions over a permutation tree.

Four operations move a tree between states or observe it:

* :func:`advance` — step to the next configuration in a fixed,
  deterministic enumeration order (an odometer across the tree).
* :func:`reset` — return every free branch point to its
  construction-time order.
* :func:`randomize` — independently shuffle every free branch point.
* :func:`read` — flatten the current state into an index vector.

How the odometer works
----------------------
Think of every free branch point as one digit whose values are the
``k!`` arrangements of its children.  Within a branch, the digits of
the children's subtrees are less significant than the branch's own
table, and earlier children are less significant than later ones.
:func:`advance` tries to tick the least significant digit first; a
digit that cannot tick is exhausted and the carry moves on.  Whenever a
more significant digit ticks, every less significant digit beneath it
rolls back to zero (:func:`reset`).  Starting from the identity state,
repeated calls visit every tree-consistent configuration exactly once.

All functions are pure: they return new nodes and leave their input
untouched.
"""

from __future__ import annotations

import numpy as np

from .ordering import next_order, reorder, restore_order, shuffle_order
from .tree import Branch, Leaf, Node


def advance(node: Node) -> tuple[Node, bool]:
    """Move *node* to its next configuration.

    Args:
        node: Tree (or subtree) in its current state.

    Returns:
        ``(node', advanced)``.  When ``advanced`` is ``False`` every
        configuration under *node* has been visited and *node* is
        returned unchanged; the carry then belongs to the caller.
    """
    if isinstance(node, Leaf):
        return node, False

    children = list(node.children)
    for u, child in enumerate(children):
        child, advanced = advance(child)
        if advanced:
            children[u] = child
            children[:u] = [reset(c) for c in children[:u]]
            return Branch(children, node.order), True

    if node.order is None:
        return node, False

    order, advanced = next_order(node.order)
    if not advanced:
        return node, False

    # Every child gave up above, so all of them roll back to identity
    # before they move with their rows.
    children = reorder([reset(c) for c in children], order)
    return Branch(children, order), True


def reset(node: Node) -> Node:
    """Return *node* with every free branch point back in original order.

    Fixed branch points have no table of their own but are still
    recursed into.  Idempotent.
    """
    if isinstance(node, Leaf):
        return node

    children = [reset(c) for c in node.children]
    if node.order is None:
        return Branch(children, None)

    order = restore_order(node.order)
    return Branch(reorder(children, order), order)


def randomize(node: Node, rng: np.random.Generator) -> Node:
    """Independently shuffle every free branch point under *node*.

    Branch points are visited in pre-order and each free one draws
    ``rng.permutation(k)`` before its children are visited, so a fixed
    seed yields a fixed sequence of trees.

    Args:
        node: Tree (or subtree) in any state.
        rng: NumPy random generator.

    Returns:
        The shuffled tree.
    """
    if isinstance(node, Leaf):
        return node

    order = node.order
    children = node.children
    if order is not None:
        shuffled = shuffle_order(order, rng)
        # A draw that leaves every row in place is a no-op.
        if np.any(shuffled.current != order.current):
            order = shuffled
            children = reorder(children, shuffled)

    return Branch([randomize(c, rng) for c in children], order)


def read(node: Node, out: list[int] | None = None) -> list[int]:
    """Append the observation indices under *node*, in current order.

    Args:
        node: Tree (or subtree) to flatten.
        out: Accumulator to extend.  A new list is used when ``None``.

    Returns:
        The accumulator.  Called on the root with no accumulator this is
        the full length-N permutation vector.
    """
    if out is None:
        out = []
    if isinstance(node, Leaf):
        out.extend(node.indices)
        return out
    for child in node.children:
        read(child, out)
    return out
