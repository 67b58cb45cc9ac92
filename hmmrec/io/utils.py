"""Shared helpers for the model and observation file readers."""

from __future__ import annotations

import os
from typing import Callable, Iterator, List, Tuple, Type, Union

from ..errors import HMMError

PathLike = Union[str, "os.PathLike[str]"]


def read_text(path: PathLike, error_type: Type[HMMError]) -> str:
    """
    Read a whole text file.

    Raises:
        FileNotFoundError: If the file does not exist.
        error_type: If the file exists but cannot be read or decoded.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"file not found: {os.fspath(path)}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise error_type(f"error reading {os.fspath(path)}: {e}") from e


def numbered_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (1-based line number, line without trailing whitespace)."""
    for lineno, line in enumerate(text.splitlines(), start=1):
        yield lineno, line.rstrip()


def parse_numbers(
    tokens: List[str],
    parse: Callable[[str], float],
    lineno: int,
    error_type: Type[HMMError],
) -> List:
    """Convert whitespace-split tokens with ``parse`` (int or float)."""
    try:
        return [parse(token) for token in tokens]
    except ValueError:
        raise error_type(f"expected numbers, got {' '.join(tokens)!r}", line=lineno) from None


def format_number(value: float) -> str:
    """Shortest text that reads back as the same float."""
    return repr(float(value))
