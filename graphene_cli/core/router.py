"""
Operation Router
================

Runs the selected analysis once per input text and returns the outcomes in
batch order.

Failure policy:
- fail-fast (default): the first engine failure aborts the whole batch and
  no outcomes are returned.
- skip-failed: a failing item is logged and its slot is ``None``; the
  remaining items are still analyzed.

With ``workers > 1`` items are analyzed on a thread pool. Outcomes are
reassembled in input order. Under fail-fast a cancellation event stops
queued and not-yet-started items once the first failure is seen.
"""

from __future__ import annotations

import concurrent.futures
import threading
from collections.abc import Callable, Sequence

import structlog

from .engine import AnalysisEngine
from .errors import AnalysisEngineError, ConfigurationError
from .models import AnalysisResult, InvocationRequest, Operation

log = structlog.get_logger("graphene_cli.router")

AnalyzeFn = Callable[[str], AnalysisResult]


class BatchCancelled(Exception):
    """Raised inside a worker that was skipped after an earlier failure."""

    pass


def select_analysis(engine: AnalysisEngine, request: InvocationRequest) -> AnalyzeFn:
    """Bind the engine call for ``request.operation`` to the request switches.

    Raises:
        ConfigurationError: If the operation is not recognized
    """
    if request.operation == Operation.COREF:
        return engine.coreference
    if request.operation == Operation.SIM:
        return lambda text: engine.simplify(
            text,
            request.do_coreference,
            request.isolate_sentences,
        )
    if request.operation == Operation.RE:
        return lambda text: engine.extract_relations(
            text,
            request.do_coreference,
            request.isolate_sentences,
            request.do_complex_categories,
        )
    raise ConfigurationError(f"Unknown operation: {request.operation!r}")


def _engine_failure(index: int, error: Exception) -> AnalysisEngineError:
    status_code = getattr(error, "status_code", None)
    return AnalysisEngineError(
        f"Analysis of item {index + 1} failed: {error}",
        index=index,
        status_code=status_code,
    )


class OperationRouter:
    """Dispatch a batch of texts to the analysis engine.

    Attributes:
        engine: Engine implementing the analysis call contract
        workers: Number of items analyzed concurrently (1 = sequential)
        fail_fast: Abort the batch on the first failing item
    """

    def __init__(
        self,
        engine: AnalysisEngine,
        workers: int = 1,
        fail_fast: bool = True,
    ) -> None:
        if workers < 1:
            raise ConfigurationError("Number of workers must be at least 1")
        self.engine = engine
        self.workers = workers
        self.fail_fast = fail_fast

    def run(self, texts: Sequence[str], request: InvocationRequest) -> list[AnalysisResult | None]:
        """Analyze every text and return outcomes in input order.

        Returns:
            One entry per text. Entries are only ``None`` for failed items
            when ``fail_fast`` is disabled.

        Raises:
            ConfigurationError: Unknown operation, before any analysis runs
            AnalysisEngineError: First failure, when ``fail_fast`` is enabled
        """
        analyze = select_analysis(self.engine, request)
        log.info(
            "Running analysis",
            operation=request.operation.value,
            items=len(texts),
            workers=self.workers,
            fail_fast=self.fail_fast,
        )

        if self.workers == 1 or len(texts) <= 1:
            results = self._run_sequential(texts, analyze)
        else:
            results = self._run_pooled(texts, analyze)

        if len(results) != len(texts):
            log.error("Router produced a wrong number of outcomes", outcomes=len(results), inputs=len(texts))
        return results

    def _handle_failure(self, index: int, error: Exception) -> None:
        failure = _engine_failure(index, error)
        if self.fail_fast:
            raise failure from error
        log.error("Analysis failed, skipping item", index=index, error=str(error))

    def _run_sequential(self, texts: Sequence[str], analyze: AnalyzeFn) -> list[AnalysisResult | None]:
        results: list[AnalysisResult | None] = []
        for index, text in enumerate(texts):
            try:
                results.append(analyze(text))
            except Exception as e:
                self._handle_failure(index, e)
                results.append(None)
        return results

    def _run_pooled(self, texts: Sequence[str], analyze: AnalyzeFn) -> list[AnalysisResult | None]:
        cancelled = threading.Event()
        results: list[AnalysisResult | None] = [None] * len(texts)

        def task(text: str) -> AnalysisResult:
            if cancelled.is_set():
                raise BatchCancelled()
            return analyze(text)

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as pool:
            futures = {pool.submit(task, text): index for index, text in enumerate(texts)}
            first_failure: AnalysisEngineError | None = None

            for future in concurrent.futures.as_completed(futures):
                index = futures[future]
                if future.cancelled():
                    continue
                try:
                    results[index] = future.result()
                except BatchCancelled:
                    continue
                except Exception as e:
                    if not self.fail_fast:
                        self._handle_failure(index, e)
                        continue
                    if first_failure is None:
                        first_failure = _engine_failure(index, e)
                        first_failure.__cause__ = e
                        cancelled.set()
                        for pending in futures:
                            pending.cancel()
                        log.error("Analysis failed, cancelling batch", index=index, error=str(e))

        if first_failure is not None:
            raise first_failure
        return results
