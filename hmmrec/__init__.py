"""hmmrec - evaluate a fixed Hidden Markov Model against observation sequences."""

__version__ = "0.1.0"

# Batch evaluation
from .batch import (
    Algorithm,
    BatchReport,
    SequenceOutcome,
    decode_batch,
    evaluate_backward_batch,
    evaluate_forward_batch,
    run_batch,
)

# Configuration
from .config import DEFAULT_ATOL, EvaluationConfig, default_config

# Errors
from .errors import (
    EmptySequenceError,
    HMMError,
    MalformedModelError,
    ModelFileError,
    ObservationFileError,
    SequenceTooLargeError,
    UnknownStateError,
    UnknownSymbolError,
    ZeroProbabilitySequenceError,
)

# Inference
from .inference import (
    LikelihoodResult,
    ViterbiResult,
    decode,
    evaluate_backward,
    evaluate_forward,
    posterior_marginals,
    score_path,
)

# File formats
from .io import (
    format_model,
    format_observations,
    load_model_file,
    parse_model_file,
    parse_model_string,
    parse_observations_file,
    parse_observations_string,
)

# Model
from .model import HiddenMarkovModel, ModelTables, logsumexp

__all__ = [
    # Version
    "__version__",
    # Model
    "HiddenMarkovModel",
    "ModelTables",
    "logsumexp",
    # Inference
    "LikelihoodResult",
    "ViterbiResult",
    "evaluate_forward",
    "evaluate_backward",
    "posterior_marginals",
    "decode",
    "score_path",
    # Batch evaluation
    "Algorithm",
    "SequenceOutcome",
    "BatchReport",
    "run_batch",
    "evaluate_forward_batch",
    "evaluate_backward_batch",
    "decode_batch",
    # Configuration
    "DEFAULT_ATOL",
    "EvaluationConfig",
    "default_config",
    # File formats
    "parse_model_string",
    "parse_model_file",
    "load_model_file",
    "format_model",
    "parse_observations_string",
    "parse_observations_file",
    "format_observations",
    # Errors
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
