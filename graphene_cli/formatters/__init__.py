"""
Graphene CLI Formatters Package
===============================

Rendering of analysis outcomes as text.

Relation formatters (selected by name via ``get_formatter``):
- default: extractions grouped by sentence with indented contexts
- flat: one tab-separated line per extraction
- rdf: N-Triples

``format_content`` chooses the rendering for an outcome from the
invocation request.
"""

from .base import RelationFormatter
from .content import format_content, select_renderer, serialized
from .default import DefaultFormatter
from .factory import FORMATTERS, get_formatter
from .flat import FlatFormatter
from .rdf import RDFFormatter

__all__ = [
    "RelationFormatter",
    "DefaultFormatter",
    "FlatFormatter",
    "RDFFormatter",
    "FORMATTERS",
    "get_formatter",
    "format_content",
    "select_renderer",
    "serialized",
]
