"""HMM data model: named states and symbols with validated probability tables."""

from .core import HiddenMarkovModel
from .tables import ModelTables
from .utils import check_stochastic, logsumexp, name_index_map, safe_log

__all__ = [
    "HiddenMarkovModel",
    "ModelTables",
    "logsumexp",
    "safe_log",
    "name_index_map",
    "check_stochastic",
]
