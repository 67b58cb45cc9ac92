"""Batch evaluation of many observation sequences with per-sequence error isolation."""

from .runner import (
    Algorithm,
    BatchReport,
    SequenceOutcome,
    decode_batch,
    evaluate_backward_batch,
    evaluate_forward_batch,
    run_batch,
)

__all__ = [
    "Algorithm",
    "SequenceOutcome",
    "BatchReport",
    "run_batch",
    "evaluate_forward_batch",
    "evaluate_backward_batch",
    "decode_batch",
]
