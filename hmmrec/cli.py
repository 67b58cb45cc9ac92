"""Command-line entry point: evaluate observation files against a model file.

Usage::

    hmmrec model.hmm obs1.obs [obs2.obs ...] [--algorithm forward|backward|viterbi]

For each observation file and each requested algorithm, one line is printed
per sequence: the probability (linear scale unless ``--log-scale``) followed,
for Viterbi, by the decoded state path. Failed sequences print
``error: <message>`` and do not stop the run.

Exit status: 0 when every sequence succeeded, 2 when at least one sequence
failed, 1 when the model or an observation file could not be loaded.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from typing import List, Optional, Sequence, TextIO

from .batch import Algorithm, BatchReport, SequenceOutcome, run_batch
from .config import EvaluationConfig
from .errors import HMMError
from .inference import ViterbiResult
from .io import load_model_file, parse_observations_file
from .logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_SEQUENCE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hmmrec",
        description="Score observation sequences against a Hidden Markov Model.",
    )
    parser.add_argument("model", help="model definition file (.hmm)")
    parser.add_argument("observations", nargs="+", help="one or more observation files (.obs)")
    parser.add_argument(
        "-a",
        "--algorithm",
        action="append",
        choices=[a.value for a in Algorithm],
        help="algorithm to run; repeat for several (default: forward)",
    )
    parser.add_argument(
        "--log-scale",
        action="store_true",
        help="print natural-log probabilities instead of probabilities",
    )
    parser.add_argument("--max-workers", type=int, help="worker threads per batch")
    parser.add_argument(
        "--max-trellis-cells",
        type=int,
        help="reject sequences whose trellis (states x length) exceeds this size",
    )
    parser.add_argument("--atol", type=float, help="tolerance for rows summing to one")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="diagnostic logging level (default: WARNING)",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> EvaluationConfig:
    config = EvaluationConfig.from_env()
    overrides = {
        "atol": args.atol,
        "max_trellis_cells": args.max_trellis_cells,
        "max_workers": args.max_workers,
    }
    return dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})


def format_outcome(outcome: SequenceOutcome, log_scale: bool = False) -> str:
    """One output line for one sequence."""
    if not outcome.ok:
        return f"error: {outcome.error}"

    result = outcome.result
    value = result.log_probability if log_scale else result.probability
    line = f"{value:.6g}"
    if isinstance(result, ViterbiResult):
        line += " " + " ".join(result.path)
    return line


def print_report(report: BatchReport, log_scale: bool, out: TextIO) -> None:
    for outcome in report:
        print(format_outcome(outcome, log_scale), file=out)


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    """Run the command line; returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out if out is not None else sys.stdout

    configure_logging(level=args.log_level)

    try:
        config = _config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    algorithms: List[Algorithm] = [Algorithm(a) for a in (args.algorithm or ["forward"])]

    try:
        model = load_model_file(args.model, atol=config.atol)
    except (OSError, HMMError) as e:
        print(f"hmmrec: cannot load model {args.model}: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    status = EXIT_OK
    for path in args.observations:
        try:
            sequences = parse_observations_file(path)
        except (OSError, HMMError) as e:
            print(f"hmmrec: cannot load observations {path}: {e}", file=sys.stderr)
            status = EXIT_LOAD_ERROR
            continue

        for algorithm in algorithms:
            report = run_batch(model, sequences, algorithm, config)
            print(f"{path} [{algorithm.value}]:", file=out)
            print_report(report, args.log_scale, out)
            if report.n_failed and status == EXIT_OK:
                status = EXIT_SEQUENCE_ERROR

    return status


__all__ = ["build_parser", "format_outcome", "main"]
