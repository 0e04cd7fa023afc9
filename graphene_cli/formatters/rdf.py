"""
RDF Formatter
=============

Renders extractions as N-Triples. Every extraction becomes a resource with
subject/predicate/object/context-layer properties; simple contexts are
literal-valued properties and linked contexts point at other extraction
resources.

References:
- N-Triples: https://www.w3.org/TR/n-triples/
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.models import Extraction, OutSentence
from .base import RelationFormatter

EXTRACTION_NS = "http://lambda3.org/graphene/extraction#"
VOCABULARY_NS = "http://lambda3.org/graphene/vocabulary#"
XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"

_LITERAL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def literal(value: str) -> str:
    """Quote and escape a plain string literal."""
    return '"' + "".join(_LITERAL_ESCAPES.get(ch, ch) for ch in value) + '"'


def iri(value: str) -> str:
    return f"<{value}>"


class RDFFormatter(RelationFormatter):
    name = "rdf"

    def _triples(self, extraction: Extraction, resolve: bool) -> list[str]:
        subject = iri(EXTRACTION_NS + extraction.id)

        def triple(prop: str, obj: str) -> str:
            return f"{subject} {iri(VOCABULARY_NS + prop)} {obj} ."

        triples = [
            triple("subject", literal(extraction.arg1)),
            triple("predicate", literal(extraction.relation)),
            triple("object", literal(extraction.arg2)),
            triple("context-layer", f"{literal(str(extraction.context_layer))}^^{iri(XSD_INTEGER)}"),
        ]
        for sc in extraction.simple_contexts:
            triples.append(triple(f"S:{sc.classification}", literal(sc.text)))
        for lc in extraction.linked_contexts:
            target = iri(EXTRACTION_NS + lc.target_id) if resolve else literal(lc.target_id)
            triples.append(triple(f"L:{lc.classification}", target))
        return triples

    def format(self, sentences: Sequence[OutSentence], resolve: bool) -> str:
        lines: list[str] = []
        for sentence in sentences:
            lines.append(f"# {sentence.original_sentence}")
            for extraction in sentence.extractions.values():
                lines.extend(self._triples(extraction, resolve))
            lines.append("")
        return "\n".join(lines)
