"""Sequence likelihood: forward and backward algorithms.

Both algorithms compute P(sequence | model) over a T x N trellis in
O(N^2 T) time. They are independent computations of the same quantity and
serve as cross-checks of each other. All arithmetic happens in natural-log
space with log-sum-exp for additions, so long sequences do not underflow.

Scale of the returned values:
    - ``LikelihoodResult.log_probability``: natural log of P(sequence | model).
    - ``LikelihoodResult.probability``: linear-scale P(sequence | model).
    - ``LikelihoodResult.log_trellis``: natural-log alpha or beta table.
    - ``posterior_marginals``: linear-scale state occupancy probabilities.

References:
    Rabiner, L. R. (1989). A tutorial on hidden Markov models and selected
    applications in speech recognition. Proceedings of the IEEE, 77(2), 257-286.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import EvaluationConfig
from ..errors import ZeroProbabilitySequenceError
from ..logging import get_logger
from ..model import HiddenMarkovModel, logsumexp
from .sequence import as_symbol_tuple, encode_sequence

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class LikelihoodResult:
    """
    Outcome of a forward or backward pass over one observation sequence.

    Attributes:
        algorithm: ``"forward"`` or ``"backward"``.
        sequence: The observation sequence that was evaluated.
        log_probability: Natural log of P(sequence | model). ``-inf`` when the
            model cannot produce the sequence.
        log_trellis: Read-only log alpha (forward) or log beta (backward)
            table, shape (T, N).
    """

    algorithm: str
    sequence: Tuple[str, ...]
    log_probability: float
    log_trellis: np.ndarray

    @property
    def probability(self) -> float:
        """P(sequence | model) on the linear scale."""
        return math.exp(self.log_probability)

    def __len__(self) -> int:
        return len(self.sequence)


def _forward_trellis(model: HiddenMarkovModel, obs: np.ndarray) -> np.ndarray:
    T, N = len(obs), model.n_states
    log_trans = model.log_transition
    log_emit = model.log_emission

    log_alpha = np.empty((T, N))

    # Initialization: t=0
    log_alpha[0] = model.log_initial + log_emit[:, obs[0]]

    # Recursion: log_alpha[t, i] = log_emit[i, o_t] + logsumexp_j(log_alpha[t-1, j] + log_trans[j, i])
    for t in range(1, T):
        log_alpha[t] = logsumexp(log_alpha[t - 1][:, None] + log_trans, axis=0) + log_emit[:, obs[t]]

    return log_alpha


def _backward_trellis(model: HiddenMarkovModel, obs: np.ndarray) -> np.ndarray:
    T, N = len(obs), model.n_states
    log_trans = model.log_transition
    log_emit = model.log_emission

    log_beta = np.empty((T, N))

    # Initialization: t = T-1, log(1) = 0
    log_beta[T - 1] = 0.0

    # Recursion: log_beta[t, i] = logsumexp_j(log_trans[i, j] + log_emit[j, o_{t+1}] + log_beta[t+1, j])
    for t in range(T - 2, -1, -1):
        log_beta[t] = logsumexp(log_trans + (log_emit[:, obs[t + 1]] + log_beta[t + 1])[None, :], axis=1)

    return log_beta


def evaluate_forward(
    model: HiddenMarkovModel,
    sequence: Sequence[str],
    config: Optional[EvaluationConfig] = None,
) -> LikelihoodResult:
    """Forward algorithm: P(sequence | model) by summing over paths forward in time.

    Args:
        model: The HMM to evaluate against.
        sequence: Ordered observation symbol names, length T >= 1.
        config: Optional configuration (trellis size ceiling).

    Returns:
        LikelihoodResult with the log alpha trellis.

    Raises:
        EmptySequenceError, UnknownSymbolError, SequenceTooLargeError: Before
            any table is built.
    """
    symbols = as_symbol_tuple(sequence)
    obs = encode_sequence(model, symbols, config)

    log_alpha = _forward_trellis(model, obs)
    log_likelihood = float(logsumexp(log_alpha[-1]))
    log_alpha.setflags(write=False)

    logger.debug("forward: T=%d N=%d log P=%.6g", len(obs), model.n_states, log_likelihood)
    return LikelihoodResult("forward", symbols, log_likelihood, log_alpha)


def evaluate_backward(
    model: HiddenMarkovModel,
    sequence: Sequence[str],
    config: Optional[EvaluationConfig] = None,
) -> LikelihoodResult:
    """Backward algorithm: P(sequence | model) by summing over paths backward in time.

    Args:
        model: The HMM to evaluate against.
        sequence: Ordered observation symbol names, length T >= 1.
        config: Optional configuration (trellis size ceiling).

    Returns:
        LikelihoodResult with the log beta trellis.

    Raises:
        EmptySequenceError, UnknownSymbolError, SequenceTooLargeError: Before
            any table is built.
    """
    symbols = as_symbol_tuple(sequence)
    obs = encode_sequence(model, symbols, config)

    log_beta = _backward_trellis(model, obs)
    # Fold in the initial step: sum_i pi_i * b_i(o_0) * beta_0(i)
    log_likelihood = float(
        logsumexp(model.log_initial + model.log_emission[:, obs[0]] + log_beta[0])
    )
    log_beta.setflags(write=False)

    logger.debug("backward: T=%d N=%d log P=%.6g", len(obs), model.n_states, log_likelihood)
    return LikelihoodResult("backward", symbols, log_likelihood, log_beta)


def posterior_marginals(
    model: HiddenMarkovModel,
    sequence: Sequence[str],
    config: Optional[EvaluationConfig] = None,
) -> np.ndarray:
    """Posterior state occupancy P(state_t = i | sequence).

    Combines the forward and backward trellises:
    gamma[t, i] = alpha[t, i] * beta[t, i] / P(sequence).

    Args:
        model: The HMM to evaluate against.
        sequence: Ordered observation symbol names, length T >= 1.
        config: Optional configuration (trellis size ceiling).

    Returns:
        Linear-scale array of shape (T, N); every row sums to 1.

    Raises:
        ZeroProbabilitySequenceError: If the model cannot produce the sequence.
    """
    symbols = as_symbol_tuple(sequence)
    obs = encode_sequence(model, symbols, config)

    log_alpha = _forward_trellis(model, obs)
    log_beta = _backward_trellis(model, obs)
    log_likelihood = float(logsumexp(log_alpha[-1]))

    if log_likelihood == -np.inf:
        raise ZeroProbabilitySequenceError(
            "posterior is undefined: the model assigns probability 0 to the sequence"
        )

    return np.exp(log_alpha + log_beta - log_likelihood)


__all__ = [
    "LikelihoodResult",
    "evaluate_forward",
    "evaluate_backward",
    "posterior_marginals",
]
