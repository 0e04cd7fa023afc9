"""
Default Formatter
=================

Groups extractions under their sentence:

    # Although the Treasury will announce details ...

    3a0f...    0    the funding    will be delayed
        S:CONDITION    if Congress and President Bush fail to ...
        L:CONTRAST    9c1e...
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.models import OutSentence
from .base import RelationFormatter


class DefaultFormatter(RelationFormatter):
    name = "default"

    def format(self, sentences: Sequence[OutSentence], resolve: bool) -> str:
        lookup = self.extraction_lookup(sentences)
        lines: list[str] = []

        for sentence in sentences:
            lines.append(f"# {sentence.original_sentence}")
            lines.append("")
            for extraction in sentence.extractions.values():
                lines.append(
                    "\t".join(
                        [
                            extraction.id,
                            str(extraction.context_layer),
                            extraction.arg1,
                            extraction.relation,
                            extraction.arg2,
                        ]
                    )
                )
                for sc in extraction.simple_contexts:
                    lines.append(f"\tS:{sc.classification}\t{sc.text}")
                for lc in extraction.linked_contexts:
                    lines.append(f"\tL:{lc.classification}\t{self.target(lc, lookup, resolve)}")
                lines.append("")

        return "\n".join(lines)
