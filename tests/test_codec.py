"""Tests for the permutation-matrix codec."""

import numpy as np
import pytest
from scipy import sparse

from permutation_trees.codec import indices_to_matrix, matrix_to_indices


class TestIndicesToMatrix:
    """Tests for indices_to_matrix."""

    def test_matrix_applies_permutation(self):
        idx = np.array([2, 0, 3, 1])
        y = np.array([10.0, 20.0, 30.0, 40.0])
        P = indices_to_matrix(idx)
        np.testing.assert_array_equal(P @ y, y[idx])

    def test_sparse_structure(self):
        P = indices_to_matrix([1, 0, 2])
        assert sparse.issparse(P)
        assert P.shape == (3, 3)
        assert P.nnz == 3
        np.testing.assert_array_equal(
            P.toarray(), [[0, 1, 0], [1, 0, 0], [0, 0, 1]]
        )

    def test_identity(self):
        P = indices_to_matrix(np.arange(5))
        np.testing.assert_array_equal(P.toarray(), np.eye(5))


class TestMatrixToIndices:
    """Tests for matrix_to_indices."""

    def test_recovers_indices(self):
        idx = np.array([3, 1, 4, 0, 2])
        np.testing.assert_array_equal(matrix_to_indices(indices_to_matrix(idx)), idx)

    def test_accepts_dense(self):
        dense = np.array([[0, 0, 1], [1, 0, 0], [0, 1, 0]])
        np.testing.assert_array_equal(matrix_to_indices(dense), [2, 0, 1])

    def test_rejects_non_square(self):
        with pytest.raises(ValueError, match="square"):
            matrix_to_indices(np.ones((2, 3)))

    def test_rejects_repeated_column(self):
        with pytest.raises(ValueError, match="not a permutation matrix"):
            matrix_to_indices(np.array([[1, 0], [1, 0]]))

    def test_rejects_non_unit_entries(self):
        with pytest.raises(ValueError, match="not a permutation matrix"):
            matrix_to_indices(np.array([[2, 0], [0, 1]]))
