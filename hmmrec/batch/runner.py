"""Evaluate or decode many observation sequences against one model.

The runner produces exactly one :class:`SequenceOutcome` per input sequence,
in input order. A domain error (any :class:`~hmmrec.errors.HMMError`) raised
for one sequence is recorded on that sequence's outcome and the batch carries
on; every other exception propagates to the caller.

The model is immutable and every trellis is local to one call, so sequences
can be dispatched to worker threads without locking. Set
``EvaluationConfig.max_workers`` above 1 to do so.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..config import EvaluationConfig
from ..errors import HMMError
from ..inference import LikelihoodResult, ViterbiResult, decode, evaluate_backward, evaluate_forward
from ..inference.sequence import as_symbol_tuple
from ..logging import get_logger
from ..model import HiddenMarkovModel

logger = get_logger(__name__)

Result = Union[LikelihoodResult, ViterbiResult]


class Algorithm(Enum):
    """Per-sequence computation performed by the batch runner."""

    FORWARD = "forward"
    BACKWARD = "backward"
    VITERBI = "viterbi"


_DISPATCH: Dict[Algorithm, Callable[..., Result]] = {
    Algorithm.FORWARD: evaluate_forward,
    Algorithm.BACKWARD: evaluate_backward,
    Algorithm.VITERBI: decode,
}


@dataclass(frozen=True, eq=False)
class SequenceOutcome:
    """
    Result or error for one sequence of a batch.

    Attributes:
        index: Position of the sequence in the batch input.
        sequence: The observation sequence.
        result: LikelihoodResult or ViterbiResult on success, else None.
        error: The domain error raised for this sequence, else None.
    """

    index: int
    sequence: Tuple[str, ...]
    result: Optional[Result] = None
    error: Optional[HMMError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, eq=False)
class BatchReport:
    """Outcomes of one batch run, in input order."""

    algorithm: Algorithm
    outcomes: Tuple[SequenceOutcome, ...]

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[SequenceOutcome]:
        return iter(self.outcomes)

    def __getitem__(self, index: int) -> SequenceOutcome:
        return self.outcomes[index]

    @property
    def results(self) -> List[Optional[Result]]:
        """Per-sequence results, None where the sequence failed."""
        return [outcome.result for outcome in self.outcomes]

    @property
    def failures(self) -> List[SequenceOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def n_failed(self) -> int:
        return len(self.failures)


def _run_one(
    run: Callable[..., Result],
    model: HiddenMarkovModel,
    index: int,
    sequence: Tuple[str, ...],
    config: Optional[EvaluationConfig],
) -> SequenceOutcome:
    try:
        result = run(model, sequence, config)
    except HMMError as exc:
        logger.warning("sequence %d failed: %s", index, exc)
        return SequenceOutcome(index=index, sequence=sequence, error=exc)
    return SequenceOutcome(index=index, sequence=sequence, result=result)


def run_batch(
    model: HiddenMarkovModel,
    sequences: Iterable[Sequence[str]],
    algorithm: Union[Algorithm, str] = Algorithm.FORWARD,
    config: Optional[EvaluationConfig] = None,
) -> BatchReport:
    """
    Apply one algorithm to every sequence, isolating per-sequence failures.

    Args:
        model: The HMM, shared read-only by all evaluations.
        sequences: Observation sequences (each an ordered list of symbol names).
        algorithm: Algorithm member or its value ("forward", "backward", "viterbi").
        config: Optional configuration. ``max_workers`` > 1 enables threads.

    Returns:
        BatchReport with one outcome per input sequence, in input order.

    Raises:
        ValueError: If ``algorithm`` is not a known algorithm name.
    """
    algorithm = Algorithm(algorithm)
    run = _DISPATCH[algorithm]
    batch = [as_symbol_tuple(sequence) for sequence in sequences]
    max_workers = config.max_workers if config is not None else None

    logger.debug(
        "running %s over %d sequences (max_workers=%s)", algorithm.value, len(batch), max_workers
    )

    outcomes: List[Optional[SequenceOutcome]] = [None] * len(batch)
    if max_workers is None or max_workers <= 1 or len(batch) <= 1:
        for index, sequence in enumerate(batch):
            outcomes[index] = _run_one(run, model, index, sequence, config)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(_run_one, run, model, index, sequence, config): index
                for index, sequence in enumerate(batch)
            }
            for future in as_completed(futures):
                outcomes[futures[future]] = future.result()

    report = BatchReport(algorithm=algorithm, outcomes=tuple(outcomes))
    if report.n_failed:
        logger.info("%d of %d sequences failed", report.n_failed, len(report))
    return report


def evaluate_forward_batch(
    model: HiddenMarkovModel,
    sequences: Iterable[Sequence[str]],
    config: Optional[EvaluationConfig] = None,
) -> BatchReport:
    """Forward likelihood of every sequence."""
    return run_batch(model, sequences, Algorithm.FORWARD, config)


def evaluate_backward_batch(
    model: HiddenMarkovModel,
    sequences: Iterable[Sequence[str]],
    config: Optional[EvaluationConfig] = None,
) -> BatchReport:
    """Backward likelihood of every sequence."""
    return run_batch(model, sequences, Algorithm.BACKWARD, config)


def decode_batch(
    model: HiddenMarkovModel,
    sequences: Iterable[Sequence[str]],
    config: Optional[EvaluationConfig] = None,
) -> BatchReport:
    """Viterbi path of every sequence."""
    return run_batch(model, sequences, Algorithm.VITERBI, config)


__all__ = [
    "Algorithm",
    "SequenceOutcome",
    "BatchReport",
    "run_batch",
    "evaluate_forward_batch",
    "evaluate_backward_batch",
    "decode_batch",
]
