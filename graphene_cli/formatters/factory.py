"""
Formatter Factory
=================

Looks up rendering strategies by name.
"""

from __future__ import annotations

from .base import RelationFormatter
from .default import DefaultFormatter
from .flat import FlatFormatter
from .rdf import RDFFormatter

FORMATTERS: dict[str, type[RelationFormatter]] = {
    DefaultFormatter.name: DefaultFormatter,
    FlatFormatter.name: FlatFormatter,
    RDFFormatter.name: RDFFormatter,
}


def get_formatter(name: str) -> RelationFormatter:
    """Return a new formatter instance for ``name``.

    Raises:
        ValueError: If no formatter is registered under ``name``
    """
    try:
        return FORMATTERS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown formatter: {name}\nValid options are: {', '.join(FORMATTERS)}") from None
