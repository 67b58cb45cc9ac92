"""Reader and writer for ``.obs`` observation sequence files.

Format::

    K
    T_1
    o_1 o_2 ... o_T1
    ...
    T_K
    o_1 o_2 ... o_TK

The first line holds the number of sequences. Each sequence takes two lines:
its declared length and its whitespace-separated symbols. The symbol line is
authoritative; a declared length that disagrees is reported as a warning.
An empty symbol line is kept as an empty sequence so that it is reported
per sequence when evaluated.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from ..errors import ObservationFileError
from ..logging import get_logger
from .utils import PathLike, numbered_lines, parse_numbers, read_text

logger = get_logger(__name__)


def parse_observations_string(text: str) -> List[Tuple[str, ...]]:
    """
    Parse the text of an ``.obs`` file.

    Args:
        text: File contents.

    Returns:
        Observation sequences in file order, each a tuple of symbol names.

    Raises:
        ObservationFileError: If the count or a length line is not an
            integer, or the file holds fewer sequences than declared.
    """
    lines = list(numbered_lines(text))
    # Leading blank lines carry no structure
    while lines and not lines[0][1].strip():
        lines.pop(0)
    if not lines:
        raise ObservationFileError("empty observation file")

    lineno, first = lines[0]
    count_tokens = first.split()
    if len(count_tokens) != 1:
        raise ObservationFileError(
            f"first line must hold the sequence count, got {first!r}", line=lineno
        )
    count = parse_numbers(count_tokens, int, lineno, ObservationFileError)[0]
    if count < 0:
        raise ObservationFileError(f"sequence count must be non-negative, got {count}", line=lineno)

    sequences: List[Tuple[str, ...]] = []
    body = lines[1:]
    for k in range(count):
        if 2 * k >= len(body):
            raise ObservationFileError(f"expected {count} sequences, found {k}")
        length_lineno, length_line = body[2 * k]
        length_tokens = length_line.split()
        if len(length_tokens) != 1:
            raise ObservationFileError(
                f"expected the length of sequence {k}, got {length_line!r}", line=length_lineno
            )
        declared = parse_numbers(length_tokens, int, length_lineno, ObservationFileError)[0]

        if 2 * k + 1 < len(body):
            symbols = tuple(body[2 * k + 1][1].split())
        elif declared == 0:
            symbols = ()
        else:
            raise ObservationFileError(f"missing symbols of sequence {k}", line=length_lineno)

        if declared != len(symbols):
            logger.warning(
                "sequence %d declares length %d but has %d symbols (line %d)",
                k,
                declared,
                len(symbols),
                length_lineno,
            )
        sequences.append(symbols)

    extra = [line for _, line in body[2 * count :] if line.strip()]
    if extra:
        logger.warning("ignoring %d lines after the last declared sequence", len(extra))

    return sequences


def parse_observations_file(path: PathLike) -> List[Tuple[str, ...]]:
    """
    Parse an ``.obs`` file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ObservationFileError: If the file cannot be read or parsed.
    """
    sequences = parse_observations_string(read_text(path, ObservationFileError))
    logger.info("loaded %d sequences from %s", len(sequences), path)
    return sequences


def format_observations(sequences: Iterable[Sequence[str]]) -> str:
    """Render sequences in the ``.obs`` format understood by parse_observations_string."""
    sequences = [tuple(s) for s in sequences]
    lines = [str(len(sequences))]
    for symbols in sequences:
        lines.append(str(len(symbols)))
        lines.append(" ".join(symbols))
    return "\n".join(lines) + "\n"


__all__ = ["parse_observations_string", "parse_observations_file", "format_observations"]
