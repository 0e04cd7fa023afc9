"""
Core Data Models
================

Domain models for the batch pipeline.

- Option enums mirror the values accepted on the command line.
- ``InvocationRequest`` is the immutable record built once from the parsed
  arguments and passed explicitly to every component.
- The outcome models describe what the analysis engine returns. They accept
  the engine's camelCase JSON and serialize back to it, so a serialized
  outcome can be reloaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel


class Operation(str, Enum):
    """Analysis selected with ``--operation``."""

    COREF = "COREF"  # Coreference resolution
    SIM = "SIM"  # Discourse simplification
    RE = "RE"  # Relation extraction


class InputSource(str, Enum):
    TEXT = "TEXT"
    FILE = "FILE"
    WIKI = "WIKI"


class OutputSource(str, Enum):
    CMDLINE = "CMDLINE"
    FILE = "FILE"


class CorefFormat(str, Enum):
    DEFAULT = "DEFAULT"
    SERIALIZED = "SERIALIZED"


class SimFormat(str, Enum):
    DEFAULT = "DEFAULT"
    DEFAULT_RESOLVED = "DEFAULT_RESOLVED"
    FLAT = "FLAT"
    FLAT_RESOLVED = "FLAT_RESOLVED"
    SERIALIZED = "SERIALIZED"


class REFormat(str, Enum):
    DEFAULT = "DEFAULT"
    DEFAULT_RESOLVED = "DEFAULT_RESOLVED"
    FLAT = "FLAT"
    FLAT_RESOLVED = "FLAT_RESOLVED"
    RDF = "RDF"
    SERIALIZED = "SERIALIZED"


class ContentKind(str, Enum):
    """Discriminant of the ``AnalysisResult`` union."""

    COREFERENCE = "coreference"
    SIMPLIFICATION = "simplification"


@dataclass(frozen=True)
class InvocationRequest:
    """Everything one invocation needs, fixed for the whole batch.

    Attributes:
        operation: Analysis to run on every input
        input_source: How the raw input tokens are interpreted
        output_source: Where rendered results go
        do_coreference: Run coreference before SIM/RE
        isolate_sentences: Process sentences individually
        do_complex_categories: Extract complex categories (RE only)
        coref_format: Rendering for coreference outcomes
        sim_format: Rendering for simplification outcomes
        re_format: Rendering for relation extraction outcomes
        inputs: Raw input tokens in command-line order
    """

    operation: Operation
    input_source: InputSource
    output_source: OutputSource
    do_coreference: bool = False
    isolate_sentences: bool = False
    do_complex_categories: bool = False
    coref_format: CorefFormat = CorefFormat.DEFAULT
    sim_format: SimFormat = SimFormat.DEFAULT
    re_format: REFormat = REFormat.DEFAULT
    inputs: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Engine outcome models
# ---------------------------------------------------------------------------


class WireModel(BaseModel):
    """Base for models exchanged with the engine (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class SimpleContext(WireModel):
    text: str = ""
    classification: str = Field(
        default="UNKNOWN",
        validation_alias=AliasChoices("classification", "relation"),
        serialization_alias="classification",
    )


class LinkedContext(WireModel):
    target_id: str = Field(
        validation_alias=AliasChoices("targetID", "targetId", "target_id"),
        serialization_alias="targetID",
    )
    classification: str = Field(
        default="UNKNOWN",
        validation_alias=AliasChoices("classification", "relation"),
        serialization_alias="classification",
    )


class Element(WireModel):
    """A simplified proposition produced by discourse simplification."""

    id: str = ""
    text: str = ""
    context_layer: int = 0
    simple_contexts: list[SimpleContext] = Field(default_factory=list)
    linked_contexts: list[LinkedContext] = Field(default_factory=list)


class Extraction(WireModel):
    """A relation (arg1, relation, arg2) produced by relation extraction."""

    id: str = ""
    type: str | None = None
    context_layer: int = 0
    arg1: str = ""
    relation: str = ""
    arg2: str = ""
    simple_contexts: list[SimpleContext] = Field(default_factory=list)
    linked_contexts: list[LinkedContext] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(part for part in (self.arg1, self.relation, self.arg2) if part)


class OutSentence(WireModel):
    original_sentence: str = ""
    sentence_idx: int = 0
    elements: dict[str, Element] = Field(default_factory=dict, alias="elementMap")
    extractions: dict[str, Extraction] = Field(default_factory=dict, alias="extractionMap")

    @model_validator(mode="before")
    @classmethod
    def _ids_from_map_keys(cls, data: Any) -> Any:
        """Fill in element/extraction ids from the map keys when absent."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("elementMap", "elements", "extractionMap", "extractions"):
            entries = data.get(key)
            if isinstance(entries, dict):
                data[key] = {
                    entry_id: ({**entry, "id": entry_id} if isinstance(entry, dict) and not entry.get("id") else entry)
                    for entry_id, entry in entries.items()
                }
        return data


class Mention(WireModel):
    text: str = ""
    sentence_idx: int | None = None


class CoreferenceChain(WireModel):
    id: str = ""
    mentions: list[Mention] = Field(default_factory=list)


class OutcomeBase(WireModel):
    def pretty_print_json(self) -> str:
        """Structured serialization: indented JSON using wire names."""
        return self.model_dump_json(indent=2, by_alias=True)

    @classmethod
    def from_json(cls, text: str):
        """Reload an outcome written by ``pretty_print_json``."""
        return cls.model_validate_json(text)


class CoreferenceContent(OutcomeBase):
    """Outcome of coreference resolution."""

    kind: Literal["coreference"] = "coreference"
    text: str = ""
    substituted_text: str = ""
    chains: list[CoreferenceChain] = Field(default_factory=list)


class SimplificationContent(OutcomeBase):
    """Outcome of discourse simplification or relation extraction.

    Relation extraction fills ``OutSentence.extractions``; discourse
    simplification fills ``OutSentence.elements``.
    """

    kind: Literal["simplification"] = "simplification"
    coreferenced: bool = False
    sentences: list[OutSentence] = Field(default_factory=list)

    @property
    def element_count(self) -> int:
        return sum(len(s.elements) for s in self.sentences)

    @property
    def extraction_count(self) -> int:
        return sum(len(s.extractions) for s in self.sentences)

    def _element_lookup(self) -> dict[str, Element]:
        return {eid: e for s in self.sentences for eid, e in s.elements.items()}

    @staticmethod
    def _target(context: LinkedContext, lookup: dict[str, Element], resolve: bool) -> str:
        if resolve and context.target_id in lookup:
            return lookup[context.target_id].text
        return context.target_id

    def default_format(self, resolve: bool) -> str:
        """Sentence-grouped rendering, one block per element."""
        lookup = self._element_lookup()
        lines: list[str] = []
        for sentence in self.sentences:
            lines.append(f"# {sentence.original_sentence}")
            lines.append("")
            for element in sentence.elements.values():
                lines.append(f"{element.id}\t{element.context_layer}\t{element.text}")
                for sc in element.simple_contexts:
                    lines.append(f"\tS:{sc.classification}\t{sc.text}")
                for lc in element.linked_contexts:
                    lines.append(f"\tL:{lc.classification}\t{self._target(lc, lookup, resolve)}")
                lines.append("")
        return "\n".join(lines)

    def flat_format(self, resolve: bool) -> str:
        """One tab-separated line per element."""
        lookup = self._element_lookup()
        lines: list[str] = []
        for sentence in self.sentences:
            for element in sentence.elements.values():
                columns = [
                    sentence.original_sentence,
                    element.id,
                    str(element.context_layer),
                    element.text,
                ]
                columns.extend(f"S:{sc.classification}({sc.text})" for sc in element.simple_contexts)
                columns.extend(
                    f"L:{lc.classification}({self._target(lc, lookup, resolve)})" for lc in element.linked_contexts
                )
                lines.append("\t".join(columns))
        return "\n".join(lines)


AnalysisResult = Annotated[
    Union[CoreferenceContent, SimplificationContent],
    Field(discriminator="kind"),
]


@dataclass(frozen=True)
class NamedResult:
    """An analysis outcome paired with its derived output name."""

    name: str
    content: AnalysisResult
