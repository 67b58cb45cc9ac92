"""Exception hierarchy for hmmrec.

All errors raised on purpose by the package derive from :class:`HMMError`,
itself a ``ValueError`` so callers that only expect bad-input failures keep
working. Lookup misses additionally derive from ``LookupError``.

Model-level errors are fatal at construction time. Sequence-level errors
(unknown symbol, empty or oversized sequence) concern a single observation
sequence and are isolated per sequence by the batch runner.
"""

from __future__ import annotations

from typing import Optional


class HMMError(ValueError):
    """Base class for every domain error raised by hmmrec."""


class MalformedModelError(HMMError):
    """Model tables are inconsistent, out of range or not normalized."""


class UnknownSymbolError(HMMError, LookupError):
    """An observation symbol is not part of the model's symbol set."""

    def __init__(self, symbol: str, position: Optional[int] = None):
        self.symbol = symbol
        self.position = position
        if position is None:
            message = f"unknown symbol {symbol!r}"
        else:
            message = f"unknown symbol {symbol!r} at position {position}"
        super().__init__(message)


class UnknownStateError(HMMError, LookupError):
    """A state name is not part of the model's state set."""

    def __init__(self, state: str, position: Optional[int] = None):
        self.state = state
        self.position = position
        if position is None:
            message = f"unknown state {state!r}"
        else:
            message = f"unknown state {state!r} at position {position}"
        super().__init__(message)


class EmptySequenceError(HMMError):
    """An observation sequence has no symbols."""

    def __init__(self, message: str = "observation sequence is empty"):
        super().__init__(message)


class SequenceTooLargeError(HMMError):
    """A trellis would exceed the configured cell ceiling (N * T)."""

    def __init__(self, cells: int, limit: int):
        self.cells = cells
        self.limit = limit
        super().__init__(
            f"trellis of {cells} cells exceeds the configured limit of {limit}"
        )


class ZeroProbabilitySequenceError(HMMError):
    """The model assigns probability zero to the sequence."""


class ModelFileError(HMMError):
    """A model definition file could not be parsed."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ObservationFileError(HMMError):
    """An observation sequence file could not be parsed."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


__all__ = [
    "HMMError",
    "MalformedModelError",
    "UnknownSymbolError",
    "UnknownStateError",
    "EmptySequenceError",
    "SequenceTooLargeError",
    "ZeroProbabilitySequenceError",
    "ModelFileError",
    "ObservationFileError",
]
