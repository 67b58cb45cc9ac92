"""Readers and writers for ``.hmm`` model files and ``.obs`` observation files."""

from .hmm_file import (
    dump_model_file,
    format_model,
    load_model_file,
    parse_model_file,
    parse_model_string,
)
from .obs_file import format_observations, parse_observations_file, parse_observations_string

__all__ = [
    "parse_model_string",
    "parse_model_file",
    "load_model_file",
    "format_model",
    "dump_model_file",
    "parse_observations_string",
    "parse_observations_file",
    "format_observations",
]
