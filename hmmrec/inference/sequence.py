"""Observation sequence validation and symbol encoding."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import EvaluationConfig
from ..errors import EmptySequenceError, SequenceTooLargeError, UnknownSymbolError
from ..model import HiddenMarkovModel


def as_symbol_tuple(sequence: Sequence[str]) -> Tuple[str, ...]:
    """Copy an observation sequence into a tuple of names.

    Raises:
        TypeError: If ``sequence`` is a bare string; pass a list of symbols.
    """
    if isinstance(sequence, str):
        raise TypeError(
            "observation sequence must be a sequence of symbol names, not a str"
        )
    return tuple(sequence)


def check_trellis_size(n_states: int, length: int, config: Optional[EvaluationConfig]) -> None:
    """Raise SequenceTooLargeError if an N x T trellis exceeds the ceiling."""
    if config is None or config.max_trellis_cells is None:
        return
    cells = n_states * length
    if cells > config.max_trellis_cells:
        raise SequenceTooLargeError(cells, config.max_trellis_cells)


def encode_sequence(
    model: HiddenMarkovModel,
    sequence: Sequence[str],
    config: Optional[EvaluationConfig] = None,
) -> np.ndarray:
    """
    Resolve an observation sequence to symbol indices.

    Every check runs before any trellis is allocated.

    Args:
        model: Model whose symbol set is used.
        sequence: Ordered symbol names.
        config: Optional configuration carrying the trellis size ceiling.

    Returns:
        Integer array of shape (T,).

    Raises:
        EmptySequenceError: If the sequence has no symbols.
        SequenceTooLargeError: If N * T exceeds ``config.max_trellis_cells``.
        UnknownSymbolError: For the first symbol not in the model, with its
            position in the sequence.
    """
    symbols = as_symbol_tuple(sequence)
    if len(symbols) == 0:
        raise EmptySequenceError()

    check_trellis_size(model.n_states, len(symbols), config)

    encoded = np.empty(len(symbols), dtype=int)
    for t, symbol in enumerate(symbols):
        try:
            encoded[t] = model.symbol_index(symbol)
        except UnknownSymbolError:
            raise UnknownSymbolError(symbol, position=t) from None
    return encoded


__all__ = ["as_symbol_tuple", "check_trellis_size", "encode_sequence"]
