"""
Content Formatter
=================

Maps an analysis outcome and the requested output format to text.

Selection is a lookup on the outcome kind, then on the operation and the
format chosen for it:

- coreference: DEFAULT (substituted text) or SERIALIZED
- simplification under SIM: the outcome's own default/flat renderings
- simplification under RE: the named ``default``/``flat``/``rdf``
  formatters over the extraction sentences

Anything without a table entry falls back to the structured serialization.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

import structlog
from pydantic_core import PydanticSerializationError

from ..core.errors import FormatSerializationError
from ..core.models import (
    AnalysisResult,
    ContentKind,
    CorefFormat,
    InvocationRequest,
    Operation,
    REFormat,
    SimFormat,
    SimplificationContent,
)
from .factory import get_formatter

log = structlog.get_logger("graphene_cli.formatters")

Renderer = Callable[[Any], str]


def serialized(content: AnalysisResult) -> str:
    return content.pretty_print_json()


def _relations(formatter: str, resolve: bool) -> Renderer:
    def render(content: SimplificationContent) -> str:
        return get_formatter(formatter).format(content.sentences, resolve)

    return render


COREF_RENDERERS: dict[Enum, Renderer] = {
    CorefFormat.DEFAULT: lambda c: c.substituted_text,
    CorefFormat.SERIALIZED: serialized,
}

SIM_RENDERERS: dict[Enum, Renderer] = {
    SimFormat.DEFAULT: lambda c: c.default_format(False),
    SimFormat.DEFAULT_RESOLVED: lambda c: c.default_format(True),
    SimFormat.FLAT: lambda c: c.flat_format(False),
    SimFormat.FLAT_RESOLVED: lambda c: c.flat_format(True),
    SimFormat.SERIALIZED: serialized,
}

RE_RENDERERS: dict[Enum, Renderer] = {
    REFormat.DEFAULT: _relations("default", False),
    REFormat.DEFAULT_RESOLVED: _relations("default", True),
    REFormat.FLAT: _relations("flat", False),
    REFormat.FLAT_RESOLVED: _relations("flat", True),
    REFormat.RDF: _relations("rdf", True),
    REFormat.SERIALIZED: serialized,
}

# operation -> (request field holding the chosen format, format -> renderer)
SIMPLIFICATION_TABLES: dict[Operation, tuple[str, dict[Enum, Renderer]]] = {
    Operation.SIM: ("sim_format", SIM_RENDERERS),
    Operation.RE: ("re_format", RE_RENDERERS),
}


def select_renderer(content: AnalysisResult, request: InvocationRequest) -> Renderer:
    """Pick the renderer for ``content`` under ``request``."""
    kind = ContentKind(content.kind)
    renderer: Renderer | None = None

    if kind is ContentKind.COREFERENCE:
        renderer = COREF_RENDERERS.get(request.coref_format)
    elif kind is ContentKind.SIMPLIFICATION:
        table = SIMPLIFICATION_TABLES.get(request.operation)
        if table is not None:
            field_name, renderers = table
            renderer = renderers.get(getattr(request, field_name))

    if renderer is None:
        log.debug("No renderer for outcome, using serialization", kind=kind.value)
        return serialized
    return renderer


def format_content(content: AnalysisResult, request: InvocationRequest, name: str = "") -> str:
    """Render one outcome.

    Args:
        content: Outcome produced by the engine
        request: The invocation request (operation and chosen formats)
        name: Output name of the item, used in error reports

    Raises:
        FormatSerializationError: If the outcome cannot be serialized
    """
    renderer = select_renderer(content, request)
    try:
        return renderer(content)
    except PydanticSerializationError as e:
        raise FormatSerializationError(name, str(e)) from e
