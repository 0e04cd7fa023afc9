"""
Base Relation Formatter
=======================

Base class for the named rendering strategies applied to relation
extraction outcomes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..core.models import Extraction, LinkedContext, OutSentence


class RelationFormatter(ABC):
    """Render the extractions of a sequence of sentences as text.

    Subclasses implement ``format``. When ``resolve`` is true, linked
    contexts are rendered with the content of the extraction they point at
    instead of its id.
    """

    name: str = ""

    @staticmethod
    def extraction_lookup(sentences: Sequence[OutSentence]) -> dict[str, Extraction]:
        """Map extraction ids to extractions across all sentences."""
        return {eid: ex for sentence in sentences for eid, ex in sentence.extractions.items()}

    @staticmethod
    def target(context: LinkedContext, lookup: dict[str, Extraction], resolve: bool) -> str:
        if resolve and context.target_id in lookup:
            return lookup[context.target_id].text
        return context.target_id

    @abstractmethod
    def format(self, sentences: Sequence[OutSentence], resolve: bool) -> str:
        """Render ``sentences``.

        Args:
            sentences: Sentences carrying relation extractions
            resolve: Substitute linked-context targets with their content

        Returns:
            The rendered text
        """
        pass
