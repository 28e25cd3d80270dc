"""Drawing permutation sets from a permutation tree.

:func:`sample_permutations` is the entry point.  It reads the untouched
tree as draw 1 (the identity), picks one of four strategies, and drives
the mutators in :mod:`permutation_trees.mutators` to fill the remaining
draws:

1. **Identity only** (``n_permutations == 1``): nothing is mutated.
2. **Exhaustive** (``n_permutations == 0`` or equal to the size of the
   reference set): the tree is stepped through every configuration
   with :func:`~permutation_trees.mutators.advance`.
3. **Conditional Monte Carlo** (``cmc=True``, or more draws requested
   than distinct permutations exist): each draw randomizes the tree;
   repeats are allowed.
4. **Monte Carlo without replacement**: as above, but a candidate equal
   to any earlier draw (the identity included) is rejected and redrawn.

Why a restore index is needed
-----------------------------
Grouping observations into branches changes the order in which leaves
are read.  Draw 1 is therefore a permutation of ``[0..N-1]`` but not
necessarily ``[0..N-1]`` itself.  Sorting draw 1 gives an index that,
applied to every draw, puts the observations back in canonical order.
The same index has to be applied by any sign-flip walk over the same
tree so that sign-flip draw ``p`` and permutation draw ``p`` stay
correspondent; pass ``return_index=True`` to obtain it.
"""

from __future__ import annotations

import logging
import numbers
import warnings

import numpy as np
from scipy import sparse

from ._config import get_exhaustive_warning_threshold, get_rejection_warning_ratio
from ._typing import RandomState
from .codec import indices_to_matrix
from .counting import count_permutations
from .mutators import advance, randomize, read
from .tree import Node

logger = logging.getLogger(__name__)


def _check_count(name: str, value: int, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"'{name}' must be an integer, got {type(value).__name__}.")
    if value < minimum:
        raise ValueError(f"'{name}' must be >= {minimum}, got {value}.")
    return int(value)


def compute_restore_index(first: np.ndarray) -> np.ndarray:
    """Return the index that sorts the first draw into increasing order.

    Args:
        first: Draw 1 as read from the untouched tree.

    Returns:
        Integer array ``idx`` such that ``first[idx]`` is
        ``[0, 1, ..., n-1]``.  It is itself a permutation.
    """
    return np.argsort(np.asarray(first), kind="stable").astype(np.intp)


def apply_restore_index(perms: np.ndarray, idx: np.ndarray) -> np.ndarray:
    """Reorder every draw in *perms* (shape ``(..., n)``) by *idx*."""
    return np.asarray(perms)[..., idx]


def sample_permutations(
    tree: Node,
    n_permutations: int,
    *,
    cmc: bool = False,
    as_indices: bool = True,
    max_permutations: int | None = None,
    return_index: bool = False,
    random_state: RandomState = None,
) -> (
    np.ndarray
    | list[sparse.csr_matrix]
    | tuple[np.ndarray | list[sparse.csr_matrix], np.ndarray]
):
    """Return a set of tree-consistent permutations.

    Args:
        tree: Root of the permutation tree.  It is not modified.
        n_permutations: Number of draws, identity included.  ``0``
            requests every distinct permutation.
        cmc: If ``True`` use conditional Monte Carlo: draws are
            independent and may repeat.
        as_indices: If ``True`` return an index array; otherwise a list
            of sparse permutation matrices.
        max_permutations: Size of the reference set, when already known.
            Supplying it skips the internal count, silences the advisory
            warnings and lets *n_permutations* exceed it (via CMC).
        return_index: If ``True`` also return the restore index.  When
            it is ``False`` and *max_permutations* is not given,
            *n_permutations* is capped at the size of the reference set.
        random_state: Seed or ``numpy.random.Generator``.

    Returns:
        Array of shape ``(B, n)`` whose first row is the identity, or the
        equivalent list of ``B`` CSR matrices.  With ``return_index`` a
        ``(permutations, restore_index)`` tuple is returned instead.

    Raises:
        TypeError: If a count is not an integer.
        ValueError: If *n_permutations* is negative or
            *max_permutations* is not positive.

    Warns:
        UserWarning: If *max_permutations* was not supplied and either an
            exhaustive run over a very large reference set or a
            without-replacement run close to its size is requested.
    """
    n_permutations = _check_count("n_permutations", n_permutations, 0)
    advise = max_permutations is None
    if advise:
        max_permutations = count_permutations(tree)
        # Only the permutation set is wanted, so a request above the
        # reference set size collapses to exhaustive enumeration.
        if not return_index and n_permutations > max_permutations:
            n_permutations = max_permutations
    else:
        max_permutations = _check_count("max_permutations", max_permutations, 1)

    rng = np.random.default_rng(random_state)
    identity = read(tree)
    n_total = max_permutations if n_permutations == 0 else n_permutations

    perms = np.empty((n_total, len(identity)), dtype=np.intp)
    perms[0] = identity

    if n_permutations == 1:
        logger.debug("Single permutation requested; returning the identity.")

    elif n_permutations == 0 or n_permutations == max_permutations:
        if advise and max_permutations > get_exhaustive_warning_threshold():
            warnings.warn(
                f"Number of possible permutations is {max_permutations}.  "
                f"Performing all exhaustively.",
                UserWarning,
                stacklevel=2,
            )
        logger.debug("Enumerating all %d permutations.", n_total)
        state = tree
        count = 1
        while count < n_total:
            state, advanced = advance(state)
            if not advanced:
                logger.debug(
                    "Tree exhausted after %d of %d permutations.", count, n_total
                )
                break
            perms[count] = read(state)
            count += 1
        perms = perms[:count]

    elif cmc or n_permutations > max_permutations:
        logger.debug(
            "Drawing %d permutations with replacement (%d possible).",
            n_total,
            max_permutations,
        )
        state = tree
        for p in range(1, n_total):
            state = randomize(state, rng)
            perms[p] = read(state)

    else:
        if advise and n_permutations > max_permutations * get_rejection_warning_ratio():
            warnings.warn(
                f"The maximum number of permutations ({max_permutations}) is "
                f"not much larger than the number requested "
                f"({n_permutations}).  Finding non-repeated permutations may "
                f"take a while; consider running all permutations "
                f"exhaustively instead.",
                UserWarning,
                stacklevel=2,
            )
        logger.debug(
            "Drawing %d unique permutations out of %d.", n_total, max_permutations
        )
        seen: set[tuple[int, ...]] = {tuple(identity)}
        state = tree
        for p in range(1, n_total):
            while True:
                state = randomize(state, rng)
                candidate = tuple(read(state))
                if candidate not in seen:
                    break
            seen.add(candidate)
            perms[p] = candidate

    idx = compute_restore_index(perms[0])
    perms = apply_restore_index(perms, idx)

    result = perms if as_indices else [indices_to_matrix(p) for p in perms]
    if return_index:
        return result, idx
    return result
