"""Immutable discrete Hidden Markov Model.

The model holds named states and observation symbols together with the
transition, emission and initial-state tables. Names are resolved to dense
integer indices once, at construction, so the dynamic-programming code only
ever indexes numpy arrays. Log-space copies of the tables are precomputed for
the same reason.

References:
    Rabiner, L. R. (1989). A tutorial on hidden Markov models and selected
    applications in speech recognition. Proceedings of the IEEE, 77(2), 257-286.
"""

from __future__ import annotations

import operator
from typing import Sequence, Tuple

import numpy as np

from ..config import DEFAULT_ATOL
from ..errors import MalformedModelError, UnknownStateError, UnknownSymbolError
from ..logging import get_logger
from .tables import ModelTables
from .utils import check_stochastic, name_index_map, safe_log

logger = get_logger(__name__)


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, dtype=float, copy=True)
    a.setflags(write=False)
    return a


def _check_index(index: int, size: int, kind: str) -> int:
    """Reject indices outside 0..size-1; negative indices do not wrap."""
    index = operator.index(index)
    if not 0 <= index < size:
        raise IndexError(f"{kind} index {index} out of range for {size} {kind}s")
    return index


class HiddenMarkovModel:
    """Hidden Markov Model with a finite set of named states and symbols.

    Instances are immutable: every table is stored as a read-only numpy copy
    and no method changes the model. A single instance can therefore be
    shared by any number of concurrent evaluations.

    Attributes:
        states: Ordered state names, length N.
        symbols: Ordered observation symbol names, length M.
        transition: Transition matrix, shape (N, N).
        emission: Emission matrix, shape (N, M).
        initial: Initial state distribution, shape (N,).
        log_transition, log_emission, log_initial: Natural-log versions of
            the tables, with ``log(0) = -inf``.
    """

    __slots__ = (
        "_states",
        "_symbols",
        "_state_index",
        "_symbol_index",
        "_transition",
        "_emission",
        "_initial",
        "_log_transition",
        "_log_emission",
        "_log_initial",
    )

    def __init__(
        self,
        states: Sequence[str],
        symbols: Sequence[str],
        transition: Sequence[Sequence[float]],
        emission: Sequence[Sequence[float]],
        initial: Sequence[float],
        atol: float = DEFAULT_ATOL,
    ):
        """Build and validate a model.

        Args:
            states: Ordered, unique state names (N).
            symbols: Ordered, unique symbol names (M).
            transition: Transition probabilities, shape (N, N).
            emission: Emission probabilities, shape (N, M).
            initial: Initial state probabilities, shape (N,).
            atol: Tolerance for rows summing to one.

        Raises:
            MalformedModelError: If names repeat, a table has the wrong shape,
                a value lies outside [0, 1], or a row is not normalized.
        """
        states = tuple(str(s) for s in states)
        symbols = tuple(str(s) for s in symbols)
        state_index = name_index_map(states, "state")
        symbol_index = name_index_map(symbols, "symbol")
        n, m = len(states), len(symbols)

        transition = self._as_table(transition, "transition", (n, n))
        emission = self._as_table(emission, "emission", (n, m))
        initial = self._as_table(initial, "initial", (n,))

        check_stochastic(transition, "transition", atol)
        check_stochastic(emission, "emission", atol)
        check_stochastic(initial, "initial", atol)

        object.__setattr__(self, "_states", states)
        object.__setattr__(self, "_symbols", symbols)
        object.__setattr__(self, "_state_index", state_index)
        object.__setattr__(self, "_symbol_index", symbol_index)
        object.__setattr__(self, "_transition", _frozen(transition))
        object.__setattr__(self, "_emission", _frozen(emission))
        object.__setattr__(self, "_initial", _frozen(initial))
        object.__setattr__(self, "_log_transition", _frozen(safe_log(transition)))
        object.__setattr__(self, "_log_emission", _frozen(safe_log(emission)))
        object.__setattr__(self, "_log_initial", _frozen(safe_log(initial)))

        logger.debug("Built HMM with %d states and %d symbols", n, m)

    @staticmethod
    def _as_table(values, name: str, shape: Tuple[int, ...]) -> np.ndarray:
        try:
            table = np.asarray(values, dtype=float)
        except (TypeError, ValueError) as exc:
            raise MalformedModelError(f"{name} is not a numeric table: {exc}")
        if table.shape != shape:
            raise MalformedModelError(f"{name} shape {table.shape} != {shape}")
        return table

    @classmethod
    def load(cls, tables: ModelTables, atol: float = DEFAULT_ATOL) -> "HiddenMarkovModel":
        """Build a model from reader-supplied tables.

        Args:
            tables: States, symbols and the three probability tables.
            atol: Tolerance for rows summing to one.

        Returns:
            Validated, immutable model.

        Raises:
            MalformedModelError: If the tables do not describe a valid HMM.
        """
        return cls(
            tables.states,
            tables.symbols,
            tables.transition,
            tables.emission,
            tables.initial,
            atol=atol,
        )

    def to_tables(self) -> ModelTables:
        """Return the model as plain nested lists."""
        return ModelTables(
            states=list(self._states),
            symbols=list(self._symbols),
            transition=self._transition.tolist(),
            emission=self._emission.tolist(),
            initial=self._initial.tolist(),
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_states={self.n_states}, "
            f"n_symbols={self.n_symbols})"
        )

    # Sizes and names

    @property
    def n_states(self) -> int:
        return len(self._states)

    @property
    def n_symbols(self) -> int:
        return len(self._symbols)

    @property
    def states(self) -> Tuple[str, ...]:
        return self._states

    @property
    def symbols(self) -> Tuple[str, ...]:
        return self._symbols

    def state_index(self, name: str) -> int:
        """Return the index of state ``name``.

        Raises:
            UnknownStateError: If the model has no such state.
        """
        try:
            return self._state_index[name]
        except KeyError:
            raise UnknownStateError(name) from None

    def symbol_index(self, name: str) -> int:
        """Return the index of symbol ``name``.

        Raises:
            UnknownSymbolError: If the model has no such symbol.
        """
        try:
            return self._symbol_index[name]
        except KeyError:
            raise UnknownSymbolError(name) from None

    def state_name(self, i: int) -> str:
        return self._states[_check_index(i, self.n_states, "state")]

    def symbol_name(self, k: int) -> str:
        return self._symbols[_check_index(k, self.n_symbols, "symbol")]

    # Probabilities

    def transition_prob(self, i: int, j: int) -> float:
        """P(next state j | current state i)."""
        i = _check_index(i, self.n_states, "state")
        j = _check_index(j, self.n_states, "state")
        return float(self._transition[i, j])

    def emission_prob(self, i: int, k: int) -> float:
        """P(symbol k | state i)."""
        i = _check_index(i, self.n_states, "state")
        k = _check_index(k, self.n_symbols, "symbol")
        return float(self._emission[i, k])

    def initial_prob(self, i: int) -> float:
        """P(first state i)."""
        return float(self._initial[_check_index(i, self.n_states, "state")])

    @property
    def transition(self) -> np.ndarray:
        return self._transition

    @property
    def emission(self) -> np.ndarray:
        return self._emission

    @property
    def initial(self) -> np.ndarray:
        return self._initial

    @property
    def log_transition(self) -> np.ndarray:
        return self._log_transition

    @property
    def log_emission(self) -> np.ndarray:
        return self._log_emission

    @property
    def log_initial(self) -> np.ndarray:
        return self._log_initial


__all__ = ["HiddenMarkovModel"]
