"""Numerical and indexing helpers for the HMM data model.

Provides a log-sum-exp that tolerates all-zero probability mass, a warning-free
logarithm for probability tables, the name-to-index mapping used for states
and symbols, and the stochastic-table checks applied at model construction.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

import numpy as np

from ..errors import MalformedModelError


def logsumexp(a: np.ndarray, axis: Optional[int] = None) -> np.ndarray:
    """Compute log-sum-exp in a numerically stable way.

    Computes log(sum(exp(a))) avoiding overflow/underflow by subtracting
    the maximum before exponentiating. Slices made only of ``-inf`` (zero
    probability mass) yield ``-inf`` rather than ``nan``.

    Args:
        a: Input array of log-values.
        axis: Axis along which to compute. If None, flattens array.

    Returns:
        Log-sum-exp result, same shape as input (with axis removed if specified).

    Examples:
        >>> float(logsumexp(np.array([-10, -11, -12])))
        -9.40760596444438...
        >>> float(logsumexp(np.array([-np.inf, -np.inf])))
        -inf
    """
    a = np.asarray(a, dtype=float)
    if axis is None:
        a_flat = a.ravel()
        if len(a_flat) == 0:
            return np.array(-np.inf)
        a_max = np.max(a_flat)
        if not np.isfinite(a_max):
            return np.array(a_max)
        return a_max + np.log(np.sum(np.exp(a_flat - a_max)))

    a_max = np.max(a, axis=axis, keepdims=True)
    # Shift by zero where the whole slice is -inf so exp() sees -inf, not nan
    shift = np.where(np.isfinite(a_max), a_max, 0.0)
    with np.errstate(divide="ignore"):
        result = np.log(np.sum(np.exp(a - shift), axis=axis, keepdims=True)) + shift
    return np.squeeze(result, axis=axis)


def safe_log(p: np.ndarray) -> np.ndarray:
    """Elementwise natural log with ``log(0) = -inf`` and no runtime warning."""
    with np.errstate(divide="ignore"):
        return np.log(np.asarray(p, dtype=float))


def name_index_map(names: Sequence[str], kind: str) -> Dict[str, int]:
    """
    Map ordered names to dense indices 0..n-1.

    Args:
        names: Ordered names. The order defines the index.
        kind: Label used in error messages ("state", "symbol").

    Returns:
        Dictionary from name to index.

    Raises:
        MalformedModelError: If the list is empty or a name repeats.

    Example:
        >>> name_index_map(["Hot", "Cold"], "state")
        {'Hot': 0, 'Cold': 1}
    """
    if len(names) == 0:
        raise MalformedModelError(f"at least one {kind} is required")

    index: Dict[str, int] = {}
    for i, name in enumerate(names):
        if name in index:
            raise MalformedModelError(
                f"duplicate {kind} name {name!r} at positions {index[name]} and {i}"
            )
        index[name] = i
    return index


def check_stochastic(table: np.ndarray, name: str, atol: float) -> None:
    """
    Check that a 1-D vector or every row of a 2-D table is a distribution.

    Values must be finite, lie in [0, 1], and sum to 1 within ``atol``.

    Args:
        table: 1-D or 2-D float array.
        name: Table name used in error messages.
        atol: Absolute tolerance on the row sums.

    Raises:
        MalformedModelError: On the first offending row.
    """
    rows = table.reshape(1, -1) if table.ndim == 1 else table

    for i, row in enumerate(rows):
        where = name if table.ndim == 1 else f"{name} row {i}"
        if not np.all(np.isfinite(row)):
            raise MalformedModelError(f"{where} contains non-finite values")
        if np.any(row < 0.0) or np.any(row > 1.0):
            raise MalformedModelError(f"{where} has probabilities outside [0, 1]: {row}")
        total = float(np.sum(row))
        if abs(total - 1.0) > atol:
            raise MalformedModelError(
                f"{where} sums to {total!r}, expected 1 within {atol}"
            )


__all__ = ["logsumexp", "safe_log", "name_index_map", "check_stochastic"]
