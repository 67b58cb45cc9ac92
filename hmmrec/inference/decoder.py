"""Most probable state path: the Viterbi algorithm.

The trellis stores, for every (t, i), the best log-probability of any path
ending in state i at time t together with the predecessor state that achieved
it. The path is rebuilt by walking those backpointers from the best final
state down to t = 0 and reversing, so it always has one state per observation.

Ties are broken towards the lowest state index, both for predecessors and for
the final state. Scores that differ only by log-space rounding (relative
``TIE_RTOL``) always count as tied; with ``EvaluationConfig.tie_tolerance`` > 0,
candidates within that many natural-log units of the best score do as well.
The trellis itself always keeps the maximum, so ``log_probability`` is the
best score over all paths whatever the tolerance.

Scale of the returned values:
    - ``ViterbiResult.log_probability``: natural log of P(path, sequence | model).
    - ``ViterbiResult.probability``: the same on the linear scale.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import EvaluationConfig
from ..logging import get_logger
from ..model import HiddenMarkovModel
from .sequence import as_symbol_tuple, encode_sequence

logger = get_logger(__name__)

NO_PREDECESSOR = -1

# Relative slack under which two log scores are the same number up to rounding
TIE_RTOL = 1e-12


@dataclass(frozen=True, eq=False)
class ViterbiResult:
    """
    Most probable state path for one observation sequence.

    Attributes:
        sequence: The observation sequence that was decoded.
        path: State names, one per observation.
        state_indices: The same path as state indices, shape (T,).
        log_probability: Natural log of the maximum joint probability of a
            state path and ``sequence``. ``-inf`` when no path can produce the
            sequence. With a positive ``tie_tolerance`` the returned ``path``
            may score up to that tolerance per step below this maximum.
        log_delta: Best path log-probabilities, shape (T, N).
        backpointers: Predecessor state indices, shape (T, N). Row 0 holds
            ``NO_PREDECESSOR``.
    """

    sequence: Tuple[str, ...]
    path: Tuple[str, ...]
    state_indices: np.ndarray
    log_probability: float
    log_delta: np.ndarray
    backpointers: np.ndarray

    @property
    def probability(self) -> float:
        """P(path, sequence | model) on the linear scale."""
        return math.exp(self.log_probability)

    def __len__(self) -> int:
        return len(self.path)


def _argbest(scores: np.ndarray, axis: Optional[int], tie_tolerance: float) -> np.ndarray:
    """Lowest index whose score is within the tie slack of the maximum.

    The slack is the larger of ``tie_tolerance`` and ``TIE_RTOL * |max|``, so
    products that are equal in probability space but round differently once
    summed in log space still count as tied.
    """
    best = np.max(scores, axis=axis, keepdims=axis is not None)
    # An all -inf slice keeps -inf as threshold, so every index ties
    slack = np.maximum(tie_tolerance, TIE_RTOL * np.abs(best))
    # argmax over booleans returns the first True, i.e. the lowest tied index
    return np.argmax(scores >= best - slack, axis=axis)


def decode(
    model: HiddenMarkovModel,
    sequence: Sequence[str],
    config: Optional[EvaluationConfig] = None,
) -> ViterbiResult:
    """Viterbi algorithm: find the most likely state sequence.

    Args:
        model: The HMM to decode with.
        sequence: Ordered observation symbol names, length T >= 1.
        config: Optional configuration (trellis size ceiling, tie tolerance).

    Returns:
        ViterbiResult with the path, its log-probability and the trellis.

    Raises:
        EmptySequenceError, UnknownSymbolError, SequenceTooLargeError: Before
            any table is built.
    """
    symbols = as_symbol_tuple(sequence)
    obs = encode_sequence(model, symbols, config)
    tie_tolerance = config.tie_tolerance if config is not None else 0.0

    T, N = len(obs), model.n_states
    log_trans = model.log_transition
    log_emit = model.log_emission

    log_delta = np.empty((T, N))
    psi = np.full((T, N), NO_PREDECESSOR, dtype=int)

    # Initialization
    log_delta[0] = model.log_initial + log_emit[:, obs[0]]

    # Recursion: scores[j, i] = log_delta[t-1, j] + log_trans[j, i]
    for t in range(1, T):
        scores = log_delta[t - 1][:, None] + log_trans
        best_prev = _argbest(scores, 0, tie_tolerance)
        log_delta[t] = np.max(scores, axis=0) + log_emit[:, obs[t]]
        psi[t] = best_prev

    # Termination
    best_final = int(_argbest(log_delta[T - 1], None, tie_tolerance))
    log_prob = float(np.max(log_delta[T - 1]))

    # Backtracking
    path = np.empty(T, dtype=int)
    path[T - 1] = best_final
    for t in range(T - 2, -1, -1):
        path[t] = psi[t + 1, path[t + 1]]

    log_delta.setflags(write=False)
    psi.setflags(write=False)
    path.setflags(write=False)

    logger.debug("viterbi: T=%d N=%d log P=%.6g", T, N, log_prob)
    return ViterbiResult(
        sequence=symbols,
        path=tuple(model.state_name(int(i)) for i in path),
        state_indices=path,
        log_probability=log_prob,
        log_delta=log_delta,
        backpointers=psi,
    )


__all__ = ["NO_PREDECESSOR", "ViterbiResult", "decode"]
