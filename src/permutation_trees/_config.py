"""Advisory-threshold configuration for the permutation_trees package.

Two thresholds decide when :func:`~permutation_trees.sample_permutations`
emits a non-fatal ``UserWarning``:

* **Exhaustive threshold** — exhaustive enumeration of more than this
  many permutations is announced before it starts.
* **Rejection ratio** — sampling without replacement warns when the
  requested count exceeds this fraction of the reference set, since
  rejection sampling slows down as the pool empties.

Resolution order for each (first match wins):
    1. Programmatic override via the ``set_*`` functions.
    2. An environment variable
       (``PERMUTATION_TREES_EXHAUSTIVE_WARN``,
       ``PERMUTATION_TREES_REJECTION_WARN_RATIO``).
    3. The built-in default (100 000 and 0.5).

Examples:
    Raise the exhaustive threshold from the shell::

        export PERMUTATION_TREES_EXHAUSTIVE_WARN=1000000

    Or programmatically, and back to the default::

        import permutation_trees
        permutation_trees.set_exhaustive_warning_threshold(1_000_000)
        permutation_trees.set_exhaustive_warning_threshold(None)
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_EXHAUSTIVE_WARNING_THRESHOLD = 100_000
DEFAULT_REJECTION_WARNING_RATIO = 0.5

_EXHAUSTIVE_ENV = "PERMUTATION_TREES_EXHAUSTIVE_WARN"
_RATIO_ENV = "PERMUTATION_TREES_REJECTION_WARN_RATIO"

# ``None`` means "no programmatic override has been set".
_exhaustive_override: int | None = None
_ratio_override: float | None = None


def _from_env(name: str, cast: type) -> int | float | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = cast(raw)
    except ValueError:
        logger.debug("Ignoring unparsable %s=%r", name, raw)
        return None
    if value <= 0:
        logger.debug("Ignoring non-positive %s=%r", name, raw)
        return None
    return value


def get_exhaustive_warning_threshold() -> int:
    """Return the reference-set size above which exhaustive runs warn."""
    if _exhaustive_override is not None:
        return _exhaustive_override
    env = _from_env(_EXHAUSTIVE_ENV, int)
    if env is not None:
        return int(env)
    return DEFAULT_EXHAUSTIVE_WARNING_THRESHOLD


def set_exhaustive_warning_threshold(value: int | None) -> None:
    """Override the exhaustive-enumeration warning threshold.

    Args:
        value: Positive integer, or ``None`` to restore the default
            resolution order.

    Raises:
        ValueError: If *value* is not a positive integer.
    """
    global _exhaustive_override
    if value is not None and (isinstance(value, bool) or int(value) != value or value <= 0):
        raise ValueError(
            f"Exhaustive warning threshold must be a positive integer, got {value!r}."
        )
    _exhaustive_override = None if value is None else int(value)


def get_rejection_warning_ratio() -> float:
    """Return the fraction of the reference set above which rejection sampling warns."""
    if _ratio_override is not None:
        return _ratio_override
    env = _from_env(_RATIO_ENV, float)
    if env is not None:
        return float(env)
    return DEFAULT_REJECTION_WARNING_RATIO


def set_rejection_warning_ratio(value: float | None) -> None:
    """Override the rejection-sampling warning ratio.

    Args:
        value: Ratio in ``(0, 1]``, or ``None`` to restore the default
            resolution order.

    Raises:
        ValueError: If *value* lies outside ``(0, 1]``.
    """
    global _ratio_override
    if value is not None and not 0 < value <= 1:
        raise ValueError(
            f"Rejection warning ratio must lie in (0, 1], got {value!r}."
        )
    _ratio_override = None if value is None else float(value)
