"""Reader and writer for ``.hmm`` model definition files.

Format::

    N M [T]
    state_1 ... state_N
    symbol_1 ... symbol_M
    a:
    <N rows of N transition probabilities>
    b:
    <N rows of M emission probabilities>
    pi:
    <N initial probabilities>

Blank lines are ignored. The optional ``T`` on the first line (the sequence
length used by some producers of this format) is accepted and ignored.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from ..config import DEFAULT_ATOL
from ..errors import ModelFileError
from ..logging import get_logger
from ..model import HiddenMarkovModel, ModelTables
from .utils import PathLike, format_number, numbered_lines, parse_numbers, read_text

logger = get_logger(__name__)

_SECTIONS = ("a:", "b:", "pi:")


class _TokenLines:
    """Non-blank lines of a model file, split into tokens."""

    def __init__(self, text: str):
        self._lines: Iterator[Tuple[int, List[str]]] = (
            (lineno, line.split()) for lineno, line in numbered_lines(text) if line.strip()
        )
        self.lineno = 0

    def next(self, what: str) -> List[str]:
        try:
            self.lineno, tokens = next(self._lines)
        except StopIteration:
            raise ModelFileError(f"unexpected end of file, expected {what}") from None
        return tokens

    def header(self, name: str) -> None:
        tokens = self.next(f"section header {name!r}")
        if len(tokens) != 1 or tokens[0].lower() != name:
            raise ModelFileError(
                f"expected section header {name!r}, got {' '.join(tokens)!r}", line=self.lineno
            )

    def row(self, width: int, what: str) -> List[float]:
        tokens = self.next(what)
        if len(tokens) != width:
            raise ModelFileError(
                f"{what} has {len(tokens)} values, expected {width}", line=self.lineno
            )
        return parse_numbers(tokens, float, self.lineno, ModelFileError)

    def rest(self) -> List[str]:
        try:
            self.lineno, tokens = next(self._lines)
        except StopIteration:
            return []
        return tokens


def parse_model_string(text: str) -> ModelTables:
    """
    Parse the text of a ``.hmm`` file.

    Args:
        text: File contents.

    Returns:
        ModelTables ready for :meth:`HiddenMarkovModel.load`. Probabilities
        are not validated here.

    Raises:
        ModelFileError: On any syntax or count error, with the line number.
    """
    lines = _TokenLines(text)

    sizes = lines.next("the 'N M' size line")
    if len(sizes) not in (2, 3):
        raise ModelFileError(
            f"size line must be 'N M' or 'N M T', got {' '.join(sizes)!r}", line=lines.lineno
        )
    sizes = parse_numbers(sizes, int, lines.lineno, ModelFileError)
    n_states, n_symbols = sizes[0], sizes[1]
    if n_states < 1 or n_symbols < 1:
        raise ModelFileError(
            f"N and M must be positive, got N={n_states} M={n_symbols}", line=lines.lineno
        )

    states = lines.next("state names")
    if len(states) != n_states:
        raise ModelFileError(
            f"expected {n_states} state names, got {len(states)}", line=lines.lineno
        )

    symbols = lines.next("symbol names")
    if len(symbols) != n_symbols:
        raise ModelFileError(
            f"expected {n_symbols} symbol names, got {len(symbols)}", line=lines.lineno
        )

    lines.header("a:")
    transition = [lines.row(n_states, f"transition row {i}") for i in range(n_states)]

    lines.header("b:")
    emission = [lines.row(n_symbols, f"emission row {i}") for i in range(n_states)]

    lines.header("pi:")
    initial = lines.row(n_states, "initial probabilities")

    trailing = lines.rest()
    if trailing:
        raise ModelFileError(
            f"unexpected content after 'pi:' section: {' '.join(trailing)!r}", line=lines.lineno
        )

    return ModelTables(
        states=states,
        symbols=symbols,
        transition=transition,
        emission=emission,
        initial=initial,
    )


def parse_model_file(path: PathLike) -> ModelTables:
    """
    Parse a ``.hmm`` file into ModelTables.

    Raises:
        FileNotFoundError: If the file does not exist.
        ModelFileError: If the file cannot be read or parsed.
    """
    return parse_model_string(read_text(path, ModelFileError))


def load_model_file(path: PathLike, atol: float = DEFAULT_ATOL) -> HiddenMarkovModel:
    """
    Read and validate a ``.hmm`` file.

    Args:
        path: Path to the model file.
        atol: Tolerance for rows summing to one.

    Returns:
        Validated, immutable model.

    Raises:
        FileNotFoundError: If the file does not exist.
        ModelFileError: If the file cannot be parsed.
        MalformedModelError: If the tables do not describe a valid HMM.
    """
    model = HiddenMarkovModel.load(parse_model_file(path), atol=atol)
    logger.info(
        "loaded model from %s (%d states, %d symbols)", path, model.n_states, model.n_symbols
    )
    return model


def format_model(model: HiddenMarkovModel) -> str:
    """Render a model in the ``.hmm`` format understood by parse_model_string."""

    def row(values) -> str:
        return " ".join(format_number(v) for v in values)

    lines = [
        f"{model.n_states} {model.n_symbols}",
        " ".join(model.states),
        " ".join(model.symbols),
        _SECTIONS[0],
    ]
    lines.extend(row(r) for r in model.transition)
    lines.append(_SECTIONS[1])
    lines.extend(row(r) for r in model.emission)
    lines.append(_SECTIONS[2])
    lines.append(row(model.initial))
    return "\n".join(lines) + "\n"


def dump_model_file(model: HiddenMarkovModel, path: PathLike) -> None:
    """Write a model to ``path`` in the ``.hmm`` format."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_model(model))


__all__ = [
    "parse_model_string",
    "parse_model_file",
    "load_model_file",
    "format_model",
    "dump_model_file",
]
