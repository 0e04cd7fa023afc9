"""
Flat Formatter
==============

One tab-separated line per extraction, without grouping:

    <sentence>  <id>  <context layer>  <arg1>  <relation>  <arg2>  S:<CLASS>(<text>) ...  L:<CLASS>(<target>) ...
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.models import OutSentence
from .base import RelationFormatter


class FlatFormatter(RelationFormatter):
    name = "flat"

    def format(self, sentences: Sequence[OutSentence], resolve: bool) -> str:
        lookup = self.extraction_lookup(sentences)
        lines: list[str] = []

        for sentence in sentences:
            for extraction in sentence.extractions.values():
                columns = [
                    sentence.original_sentence,
                    extraction.id,
                    str(extraction.context_layer),
                    extraction.arg1,
                    extraction.relation,
                    extraction.arg2,
                ]
                columns.extend(f"S:{sc.classification}({sc.text})" for sc in extraction.simple_contexts)
                columns.extend(
                    f"L:{lc.classification}({self.target(lc, lookup, resolve)})" for lc in extraction.linked_contexts
                )
                lines.append("\t".join(columns))

        return "\n".join(lines)
