"""Raw model tables as produced by a model-definition reader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class ModelTables:
    """
    Named states and symbols plus the three probability tables of an HMM.

    This is the hand-off format between whatever reads a model definition
    (see :mod:`hmmrec.io`) and :meth:`HiddenMarkovModel.load`. No validation
    happens here; the model constructor performs all checks.

    Attributes:
        states: Ordered state names, length N.
        symbols: Ordered observation symbol names, length M.
        transition: N x N nested sequence or array, ``transition[i][j]`` is
            P(next state j | state i).
        emission: N x M nested sequence or array, ``emission[i][k]`` is
            P(symbol k | state i).
        initial: Length-N sequence or array, ``initial[i]`` is P(first state i).
    """

    states: Sequence[str]
    symbols: Sequence[str]
    transition: Sequence[Sequence[float]]
    emission: Sequence[Sequence[float]]
    initial: Sequence[float]


__all__ = ["ModelTables"]
