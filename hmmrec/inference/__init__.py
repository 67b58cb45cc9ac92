"""Dynamic-programming inference over a fixed HMM.

This module provides:
- Forward and backward algorithms for P(sequence | model)
- Posterior state occupancy from the forward and backward trellises
- Viterbi decoding of the most probable state path
- Scoring of an explicit state path

All trellises are built iteratively in natural-log space.
"""

from .decoder import NO_PREDECESSOR, ViterbiResult, decode
from .evaluator import (
    LikelihoodResult,
    evaluate_backward,
    evaluate_forward,
    posterior_marginals,
)
from .scoring import score_path
from .sequence import encode_sequence

__all__ = [
    "LikelihoodResult",
    "evaluate_forward",
    "evaluate_backward",
    "posterior_marginals",
    "ViterbiResult",
    "NO_PREDECESSOR",
    "decode",
    "score_path",
    "encode_sequence",
]
