"""Shared type aliases for the permutation_trees package."""

import numpy as np

# Seeds and generators accepted wherever randomness is drawn.
RandomState = int | np.random.Generator | None
