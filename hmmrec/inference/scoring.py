"""Joint probability of an explicit state path and an observation sequence."""

from __future__ import annotations

from typing import Sequence

from ..errors import EmptySequenceError, UnknownStateError
from ..model import HiddenMarkovModel
from .sequence import as_symbol_tuple, encode_sequence


def score_path(
    model: HiddenMarkovModel,
    states: Sequence[str],
    sequence: Sequence[str],
) -> float:
    """
    Natural log of P(states, sequence | model) for one given path.

        log pi[s_0] + log b[s_0, o_0] + sum_t (log a[s_{t-1}, s_t] + log b[s_t, o_t])

    Args:
        model: The HMM.
        states: State names, one per observation.
        sequence: Observation symbol names.

    Returns:
        Log joint probability, ``-inf`` if the path is impossible.

    Raises:
        ValueError: If ``states`` and ``sequence`` differ in length.
        EmptySequenceError: If both are empty.
        UnknownStateError: For a state name not in the model.
        UnknownSymbolError: For a symbol name not in the model.
    """
    states = as_symbol_tuple(states)
    symbols = as_symbol_tuple(sequence)
    if len(states) != len(symbols):
        raise ValueError(
            f"path has {len(states)} states but the sequence has {len(symbols)} symbols"
        )
    if len(symbols) == 0:
        raise EmptySequenceError()

    obs = encode_sequence(model, symbols)
    idx = []
    for t, name in enumerate(states):
        try:
            idx.append(model.state_index(name))
        except UnknownStateError:
            raise UnknownStateError(name, position=t) from None

    log_prob = model.log_initial[idx[0]] + model.log_emission[idx[0], obs[0]]
    for t in range(1, len(idx)):
        log_prob += model.log_transition[idx[t - 1], idx[t]] + model.log_emission[idx[t], obs[t]]
    return float(log_prob)


__all__ = ["score_path"]
