"""Conversion between index vectors and sparse permutation matrices.

An index vector ``idx`` of length N corresponds to the N x N matrix
``P`` with ``P[i, idx[i]] = 1``, so that ``P @ y`` equals ``y[idx]``.
Linear-model code that multiplies design matrices by permutation
operators can consume the matrix form directly.
"""

from __future__ import annotations

import numpy as np
from scipy import sparse


def indices_to_matrix(idx: np.ndarray) -> sparse.csr_matrix:
    """Build the sparse permutation matrix for index vector *idx*.

    Args:
        idx: Integer array of shape ``(n,)``, a permutation of
            ``[0..n-1]``.

    Returns:
        ``(n, n)`` CSR matrix with a single 1 per row and column.
    """
    idx = np.asarray(idx, dtype=np.intp)
    n = idx.shape[0]
    return sparse.csr_matrix(
        (np.ones(n, dtype=np.int8), (np.arange(n), idx)),
        shape=(n, n),
    )


def matrix_to_indices(matrix: sparse.spmatrix | np.ndarray) -> np.ndarray:
    """Recover the index vector of a permutation matrix.

    Args:
        matrix: Square permutation matrix, sparse or dense.

    Returns:
        Integer array ``idx`` with ``matrix[i, idx[i]] == 1``.

    Raises:
        ValueError: If *matrix* is not a square 0/1 matrix with exactly
            one 1 in every row and every column.
    """
    coo = sparse.coo_matrix(matrix)
    coo.sum_duplicates()
    coo.eliminate_zeros()
    n_rows, n_cols = coo.shape
    if n_rows != n_cols:
        raise ValueError(
            f"A permutation matrix must be square, got shape {coo.shape}."
        )
    if (
        coo.nnz != n_rows
        or not np.all(coo.data == 1)
        or np.unique(coo.row).size != n_rows
        or np.unique(coo.col).size != n_cols
    ):
        raise ValueError(
            "Matrix is not a permutation matrix: every row and column "
            "must hold exactly one entry equal to 1."
        )
    idx = np.empty(n_rows, dtype=np.intp)
    idx[coo.row] = coo.col
    return idx
