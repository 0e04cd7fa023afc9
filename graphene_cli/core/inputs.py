"""
Input Resolution
================

Turns the raw positional arguments into the texts to analyze.

- TEXT: each argument is the text itself.
- FILE: each argument is a path; the file's lines are joined with single
  spaces. Unreadable files yield an empty text and a warning.
- WIKI: recognized but not implemented; the whole invocation fails.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from .errors import InputReadError, UnsupportedInputModeError
from .models import InputSource

log = structlog.get_logger("graphene_cli.inputs")


def read_file(path: str) -> str:
    """Read a file as one line-joined string.

    Every line, including the last, is followed by a single space.

    Raises:
        InputReadError: If the file cannot be opened or decoded
    """
    try:
        with open(path, encoding="utf-8") as f:
            return "".join(line.rstrip("\n") + " " for line in f)
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(path, str(e)) from e


def resolve_inputs(raw_inputs: Sequence[str], mode: InputSource) -> list[str]:
    """Resolve raw input tokens into texts, one per token.

    Args:
        raw_inputs: Positional arguments in command-line order
        mode: Input mode for the whole batch

    Returns:
        List of texts with the same length as ``raw_inputs``

    Raises:
        UnsupportedInputModeError: For WIKI, before anything is read
    """
    if mode == InputSource.WIKI:
        raise UnsupportedInputModeError(mode.value)

    if mode == InputSource.TEXT:
        return list(raw_inputs)

    texts: list[str] = []
    for path in raw_inputs:
        try:
            texts.append(read_file(path))
        except InputReadError as e:
            log.warning("Can't read from file", path=e.path, error=e.reason)
            texts.append("")
    return texts
