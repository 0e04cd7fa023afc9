"""
Tests for graphene_cli.core.router
==================================

Covers dispatch per operation, batch order, the fail-fast and skip-failed
policies, and the thread pool path.
"""

import time

import pytest
from structlog.testing import capture_logs

from graphene_cli.core.errors import AnalysisEngineError, ConfigurationError
from graphene_cli.core.models import CoreferenceContent, Operation, SimplificationContent
from graphene_cli.core.router import OperationRouter, select_analysis

from conftest import StubEngine, make_request


# ── select_analysis ────────────────────────────────────────────────────────


class TestSelectAnalysis:
    def test_coref(self, stub_engine):
        analyze = select_analysis(stub_engine, make_request(operation=Operation.COREF))
        assert isinstance(analyze("He left."), CoreferenceContent)
        assert stub_engine.calls == [("coreference", "He left.")]

    def test_sim_passes_switches(self, stub_engine):
        request = make_request(operation=Operation.SIM, do_coreference=True, isolate_sentences=True)
        analyze = select_analysis(stub_engine, request)
        assert isinstance(analyze("text"), SimplificationContent)
        assert stub_engine.calls == [("simplify", "text", True, True)]

    def test_re_passes_switches(self, stub_engine):
        request = make_request(operation=Operation.RE, do_complex_categories=True)
        select_analysis(stub_engine, request)("text")
        assert stub_engine.calls == [("extract_relations", "text", False, False, True)]

    def test_unknown_operation(self, stub_engine):
        request = make_request(operation="NER")
        with pytest.raises(ConfigurationError):
            select_analysis(stub_engine, request)
        assert stub_engine.calls == []


# ── Sequential ─────────────────────────────────────────────────────────────


class TestSequentialRouter:
    def test_outcomes_in_input_order(self, stub_engine):
        texts = ["first", "second", "third"]
        results = OperationRouter(stub_engine).run(texts, make_request())
        assert [r.sentences[0].original_sentence for r in results] == texts
        assert [c[1] for c in stub_engine.calls] == texts

    def test_empty_text_still_analyzed(self, stub_engine):
        results = OperationRouter(stub_engine).run([""], make_request())
        assert len(results) == 1
        assert stub_engine.calls[0][1] == ""

    def test_fail_fast_aborts(self):
        engine = StubEngine(fail_on={"second"})
        router = OperationRouter(engine)
        with pytest.raises(AnalysisEngineError) as exc_info:
            router.run(["first", "second", "third"], make_request())
        assert exc_info.value.index == 1
        assert exc_info.value.status_code == 500
        assert [c[1] for c in engine.calls] == ["first", "second"]

    def test_skip_failed_leaves_gap(self):
        engine = StubEngine(fail_on={"second"})
        router = OperationRouter(engine, fail_fast=False)
        with capture_logs() as logs:
            results = router.run(["first", "second", "third"], make_request())
        assert results[1] is None
        assert results[0] is not None and results[2] is not None
        assert any(e["event"] == "Analysis failed, skipping item" and e["index"] == 1 for e in logs)

    def test_invalid_worker_count(self, stub_engine):
        with pytest.raises(ConfigurationError):
            OperationRouter(stub_engine, workers=0)


# ── Pooled ─────────────────────────────────────────────────────────────────


class SlowFirstEngine(StubEngine):
    """Finishes the first item last so completion order differs from input order."""

    def extract_relations(self, text, do_coreference, isolate_sentences, do_complex_categories):
        if text == "t0":
            time.sleep(0.05)
        return super().extract_relations(text, do_coreference, isolate_sentences, do_complex_categories)


class TestPooledRouter:
    def test_order_preserved(self):
        engine = SlowFirstEngine()
        texts = [f"t{i}" for i in range(6)]
        results = OperationRouter(engine, workers=3).run(texts, make_request())
        assert [r.sentences[0].original_sentence for r in results] == texts

    def test_skip_failed(self):
        engine = StubEngine(fail_on={"t2"})
        texts = [f"t{i}" for i in range(5)]
        results = OperationRouter(engine, workers=2, fail_fast=False).run(texts, make_request())
        assert results[2] is None
        assert sum(r is not None for r in results) == 4

    def test_fail_fast_raises_first_failure(self):
        engine = StubEngine(fail_on={"t0"})
        texts = [f"t{i}" for i in range(4)]
        with pytest.raises(AnalysisEngineError) as exc_info:
            OperationRouter(engine, workers=2).run(texts, make_request())
        assert exc_info.value.index == 0
        assert isinstance(exc_info.value.__cause__, AnalysisEngineError)

    def test_fail_fast_cancels_pending_items(self):
        class SlowEngine(StubEngine):
            def extract_relations(self, text, *switches):
                if text != "t0":
                    time.sleep(0.05)
                return super().extract_relations(text, *switches)

        engine = SlowEngine(fail_on={"t0"})
        texts = [f"t{i}" for i in range(20)]

        with pytest.raises(AnalysisEngineError):
            OperationRouter(engine, workers=2).run(texts, make_request())

        analyzed = {c[1] for c in engine.calls}
        assert "t19" not in analyzed
        assert len(analyzed) < len(texts)
