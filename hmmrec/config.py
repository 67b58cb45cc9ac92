"""Evaluation configuration for hmmrec.

Settings can be given explicitly or picked up from the environment:

* ``HMMREC_ATOL``: row-sum tolerance applied when loading models.
* ``HMMREC_MAX_TRELLIS_CELLS``: ceiling on N * T per sequence.
* ``HMMREC_TIE_TOLERANCE``: log-space slack under which Viterbi candidates
  count as tied.
* ``HMMREC_MAX_WORKERS``: worker threads used by the batch runner.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

DEFAULT_ATOL = 1e-6

_ENV_PREFIX = "HMMREC_"

_T = TypeVar("_T")


@dataclass(frozen=True)
class EvaluationConfig:
    """
    Knobs shared by the evaluator, the decoder and the batch runner.

    Args:
        atol: Tolerance for the "rows sum to one" model check.
        max_trellis_cells: Maximum N * T allowed for one sequence. None means
            unbounded.
        tie_tolerance: Viterbi candidates within this distance (in natural-log
            units) of the best score are treated as tied and the lowest state
            index wins. 0.0 still treats scores equal up to log-space
            rounding as tied.
        max_workers: Thread count for batch evaluation. None or 1 runs the
            batch sequentially in the calling thread.
    """

    atol: float = DEFAULT_ATOL
    max_trellis_cells: Optional[int] = None
    tie_tolerance: float = 0.0
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.atol >= 0.0:
            raise ValueError(f"atol must be non-negative, got {self.atol}")
        if self.max_trellis_cells is not None and self.max_trellis_cells < 1:
            raise ValueError(
                f"max_trellis_cells must be positive, got {self.max_trellis_cells}"
            )
        if not self.tie_tolerance >= 0.0:
            raise ValueError(
                f"tie_tolerance must be non-negative, got {self.tie_tolerance}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EvaluationConfig":
        """
        Build a configuration from ``HMMREC_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is set but cannot be parsed.
        """
        if environ is None:
            environ = os.environ

        return cls(
            atol=_read(environ, "ATOL", float, DEFAULT_ATOL),
            max_trellis_cells=_read(environ, "MAX_TRELLIS_CELLS", int, None),
            tie_tolerance=_read(environ, "TIE_TOLERANCE", float, 0.0),
            max_workers=_read(environ, "MAX_WORKERS", int, None),
        )


def _read(
    environ: Mapping[str, str],
    key: str,
    parse: Callable[[str], _T],
    default: Optional[_T],
) -> Optional[_T]:
    raw = environ.get(_ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw.strip())
    except ValueError:
        raise ValueError(f"invalid value for {_ENV_PREFIX}{key}: {raw!r}")


def default_config() -> EvaluationConfig:
    """Return the configuration derived from the current environment."""
    return EvaluationConfig.from_env()


__all__ = ["DEFAULT_ATOL", "EvaluationConfig", "default_config"]
