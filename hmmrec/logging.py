"""Diagnostic logging for hmmrec.

Each module gets its logger from :func:`get_logger`. All of them live under
the ``hmmrec`` namespace, write to stderr by default and stay quiet below
WARNING, so an embedding application only hears about failed sequences and
malformed files unless it asks for more.

What is logged where:
    - DEBUG: model construction and per-sequence trellis sizes.
    - INFO: files loaded and batch failure counts.
    - WARNING: each failed batch sequence and suspicious ``.obs`` content.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_NAMESPACE = "hmmrec"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_level = logging.WARNING
_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _make_handler(stream: TextIO, level: int, format_string: str) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the ``hmmrec`` logger for a module.

    Names outside the package namespace are prefixed with ``hmmrec.``, so
    ``get_logger("x")`` and ``get_logger("hmmrec.x")`` are the same logger.
    Each logger is created once, with its own stderr handler at the current
    package level, and does not propagate to the root logger.

    Args:
        name: Usually ``__name__``. None gives the package logger.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("viterbi: T=%d N=%d", 12, 3)
    """
    if name is None or name == _NAMESPACE:
        full_name = _NAMESPACE
    elif name.startswith(_NAMESPACE + "."):
        full_name = name
    else:
        full_name = f"{_NAMESPACE}.{name}"

    logger = _loggers.get(full_name)
    if logger is not None:
        return logger

    logger = logging.getLogger(full_name)
    if not logger.handlers:
        logger.setLevel(_level)
        logger.addHandler(_make_handler(sys.stderr, _level, _DEFAULT_FORMAT))
        logger.propagate = False

    _loggers[full_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every hmmrec logger and of those created later.

    Args:
        level: A ``logging`` constant or its name, e.g. ``"DEBUG"``.
    """
    global _level
    _level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Route every existing hmmrec logger to ``stream`` at ``level``.

    The command line calls this with ``--log-level``. Loggers created after
    the call pick up the level but keep the default stderr handler.

    Args:
        level: A ``logging`` constant or its name.
        format_string: ``logging.Formatter`` format. Defaults to
            ``[LEVEL] name: message``.
        stream: Destination. Defaults to ``sys.stderr``.
    """
    global _level
    _level = _coerce_level(level)
    stream = stream if stream is not None else sys.stderr
    format_string = format_string or _DEFAULT_FORMAT

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(stream, _level, format_string))


__all__ = ["get_logger", "set_log_level", "configure_logging"]
