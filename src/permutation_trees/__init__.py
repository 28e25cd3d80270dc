"""permutation_trees — Permutations under hierarchical exchangeability.

Generates the permutations used by permutation tests when observations
are exchangeable only within a nested block structure (repeated
measures within subjects, siblings within families, sites within a
multi-site study).  The structure is a permutation tree whose free
branch points may be rearranged and whose fixed branch points may not;
sets are drawn exhaustively or by Monte Carlo, with or without
replacement, and always start with the identity.

Public API:
    .. autosummary::
        sample_permutations
        compute_restore_index
        apply_restore_index
        count_permutations
        advance
        reset
        randomize
        read
        next_order
        indices_to_matrix
        matrix_to_indices
        leaf
        branch
        n_observations
        Leaf
        Branch
        OrderTable
        get_exhaustive_warning_threshold
        set_exhaustive_warning_threshold
        get_rejection_warning_ratio
        set_rejection_warning_ratio
"""

from ._config import (
    get_exhaustive_warning_threshold,
    get_rejection_warning_ratio,
    set_exhaustive_warning_threshold,
    set_rejection_warning_ratio,
)
from .codec import indices_to_matrix, matrix_to_indices
from .counting import count_permutations
from .mutators import advance, randomize, read, reset
from .ordering import next_order
from .sampling import apply_restore_index, compute_restore_index, sample_permutations
from .tree import Branch, Leaf, OrderTable, branch, leaf, n_observations

__all__ = [
    "sample_permutations",
    "compute_restore_index",
    "apply_restore_index",
    "count_permutations",
    "advance",
    "reset",
    "randomize",
    "read",
    "next_order",
    "indices_to_matrix",
    "matrix_to_indices",
    "leaf",
    "branch",
    "n_observations",
    "Leaf",
    "Branch",
    "OrderTable",
    "get_exhaustive_warning_threshold",
    "set_exhaustive_warning_threshold",
    "get_rejection_warning_ratio",
    "set_rejection_warning_ratio",
]

__version__ = "0.1.0"
