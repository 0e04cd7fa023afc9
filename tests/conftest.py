"""
Shared Fixtures and Test Utilities for graphene-cli
===================================================

Provides a stub analysis engine, sample outcomes in the engine's wire
format, and request factories. No fixture performs network I/O.
"""

from dataclasses import replace

import pytest
import structlog

from graphene_cli.core.errors import AnalysisEngineError
from graphene_cli.core.models import (
    CoreferenceContent,
    InputSource,
    InvocationRequest,
    Operation,
    OutputSource,
    SimplificationContent,
)
from graphene_cli.logs import close_log_file

TREASURY_TEXT = (
    "Although the Treasury will announce details of the November refunding on Monday, "
    "the funding will be delayed if Congress and President Bush fail to increase the "
    "Treasury's borrowing capacity."
)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def quiet_structlog():
    """Keep log events out of captured stdout."""
    structlog.configure(
        processors=[structlog.processors.JSONRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
    )
    yield
    close_log_file()
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Sample outcomes (engine wire format)
# ---------------------------------------------------------------------------


def relation_payload(text: str = TREASURY_TEXT) -> dict:
    return {
        "coreferenced": False,
        "sentences": [
            {
                "originalSentence": text,
                "sentenceIdx": 0,
                "extractionMap": {
                    "e1": {
                        "type": "VERB_BASED",
                        "contextLayer": 0,
                        "arg1": "the Treasury",
                        "relation": "will announce",
                        "arg2": "details of the November refunding",
                        "simpleContexts": [{"text": "on Monday", "relation": "TEMPORAL"}],
                        "linkedContexts": [{"targetID": "e2", "classification": "CONTRAST"}],
                    },
                    "e2": {
                        "type": "VERB_BASED",
                        "contextLayer": 0,
                        "arg1": "the funding",
                        "relation": "will be delayed",
                        "arg2": "",
                        "simpleContexts": [
                            {
                                "text": "if Congress and President Bush fail to increase "
                                "the Treasury 's borrowing capacity",
                                "classification": "CONDITION",
                            }
                        ],
                        "linkedContexts": [{"targetID": "e1", "classification": "CONTRAST"}],
                    },
                },
            }
        ],
    }


def simplification_payload(text: str = TREASURY_TEXT) -> dict:
    return {
        "coreferenced": False,
        "sentences": [
            {
                "originalSentence": text,
                "sentenceIdx": 0,
                "elementMap": {
                    "s1": {
                        "text": "The Treasury will announce details of the November refunding .",
                        "contextLayer": 0,
                        "simpleContexts": [{"text": "This was on Monday .", "relation": "TEMPORAL"}],
                        "linkedContexts": [{"targetID": "s2", "relation": "CONTRAST"}],
                    },
                    "s2": {
                        "text": "The funding will be delayed .",
                        "contextLayer": 0,
                        "simpleContexts": [],
                        "linkedContexts": [{"targetID": "s1", "relation": "CONTRAST"}],
                    },
                },
            }
        ],
    }


def coreference_payload(text: str = "Bob left. He was tired.") -> dict:
    return {
        "text": text,
        "substitutedText": text.replace("He ", "Bob "),
        "chains": [
            {
                "id": "c1",
                "mentions": [
                    {"text": "Bob", "sentenceIdx": 0},
                    {"text": "He", "sentenceIdx": 1},
                ],
            }
        ],
    }


@pytest.fixture
def relation_content() -> SimplificationContent:
    return SimplificationContent.model_validate(relation_payload())


@pytest.fixture
def simplification_content() -> SimplificationContent:
    return SimplificationContent.model_validate(simplification_payload())


@pytest.fixture
def coreference_content() -> CoreferenceContent:
    return CoreferenceContent.model_validate(coreference_payload())


# ---------------------------------------------------------------------------
# Stub engine
# ---------------------------------------------------------------------------


class StubEngine:
    """In-memory AnalysisEngine recording every call."""

    def __init__(self, fail_on=(), version=None):
        self.calls = []
        self.fail_on = set(fail_on)
        self.version = version or {"version": "3.0.0", "buildNumber": "test"}
        self.closed = False

    def _check(self, text):
        if text in self.fail_on:
            raise AnalysisEngineError(f"engine failed on {text!r}", status_code=500)

    def coreference(self, text):
        self.calls.append(("coreference", text))
        self._check(text)
        return CoreferenceContent.model_validate(coreference_payload(text))

    def simplify(self, text, do_coreference, isolate_sentences):
        self.calls.append(("simplify", text, do_coreference, isolate_sentences))
        self._check(text)
        return SimplificationContent.model_validate(simplification_payload(text))

    def extract_relations(self, text, do_coreference, isolate_sentences, do_complex_categories):
        self.calls.append(("extract_relations", text, do_coreference, isolate_sentences, do_complex_categories))
        self._check(text)
        return SimplificationContent.model_validate(relation_payload(text))

    def version_info(self):
        return dict(self.version)

    def close(self):
        self.closed = True


@pytest.fixture
def stub_engine() -> StubEngine:
    return StubEngine()


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


def make_request(**overrides) -> InvocationRequest:
    base = InvocationRequest(
        operation=Operation.RE,
        input_source=InputSource.TEXT,
        output_source=OutputSource.CMDLINE,
        inputs=(TREASURY_TEXT,),
    )
    return replace(base, **overrides)


@pytest.fixture
def re_request() -> InvocationRequest:
    return make_request()
