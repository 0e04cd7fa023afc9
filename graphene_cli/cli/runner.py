"""
CLI Runner
==========

Main execution orchestration for graphene-cli.

This module ties together all components:
- Configuration and logging setup
- Input resolution
- Per-item analysis through the engine
- Result naming
- Formatting and output
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import dotenv
import structlog

from graphene_cli import __version__
from graphene_cli.cli.output import EmitSummary, emit_results, print_error, print_version
from graphene_cli.cli.parser import build_request, create_argument_parser, validate_args
from graphene_cli.config import GrapheneConfig, load_config, merge_config_with_args
from graphene_cli.core.engine import AnalysisEngine, EngineConfig, GrapheneClient
from graphene_cli.core.errors import (
    AnalysisEngineError,
    ConfigurationError,
    UnsupportedInputModeError,
)
from graphene_cli.core.inputs import resolve_inputs
from graphene_cli.core.models import AnalysisResult, InvocationRequest, NamedResult
from graphene_cli.core.naming import name_results
from graphene_cli.core.router import OperationRouter
from graphene_cli.logs import configure_logging

log = structlog.get_logger("graphene_cli.runner")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def create_engine(config: GrapheneConfig) -> GrapheneClient:
    """Create the Graphene client described by ``config``."""
    return GrapheneClient(
        EngineConfig(
            url=config.server_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
        )
    )


def check_batch_length(results: Sequence[object], texts: Sequence[str]) -> bool:
    """Log an error when the number of outcomes differs from the inputs.

    Returns:
        True if the lengths match
    """
    if len(results) != len(texts):
        log.error(
            "The output length is not the same as the input size",
            outputs=len(results),
            inputs=len(texts),
        )
        return False
    return True


def name_outcomes(results: Sequence[AnalysisResult | None], request: InvocationRequest) -> list[NamedResult]:
    """Pair outcomes with their names, dropping empty (failed) slots.

    Outcomes beyond the number of input tokens cannot be named and are
    dropped.
    """
    usable = list(results[: len(request.inputs)])
    if len(usable) < len(results):
        log.error("Dropping outcomes without a matching input", dropped=len(results) - len(usable))

    names = name_results(usable, request)
    return [NamedResult(name=name, content=content) for name, content in zip(names, usable) if content is not None]


def process_batch(
    request: InvocationRequest,
    engine: AnalysisEngine,
    workers: int = 1,
    fail_fast: bool = True,
) -> EmitSummary:
    """Run one batch end to end.

    Raises:
        UnsupportedInputModeError: For WIKI input
        ConfigurationError: For an unknown operation or worker count
        AnalysisEngineError: For an engine failure under fail-fast
    """
    texts = resolve_inputs(request.inputs, request.input_source)

    router = OperationRouter(engine, workers=workers, fail_fast=fail_fast)
    results = router.run(texts, request)
    check_batch_length(results, texts)

    named = name_outcomes(results, request)
    summary = emit_results(named, request)

    log.info(
        "Batch complete",
        operation=request.operation.value,
        inputs=len(texts),
        emitted=len(summary.emitted),
        skipped=len(summary.skipped),
    )
    return summary


def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Run graphene-cli for validated arguments.

    Returns:
        Exit code (0 for success, 1 for fatal errors, 2 for usage errors)
    """
    configure_logging(args.log_level or "warning")

    config = load_config(Path(args.config) if args.config else None)
    config = merge_config_with_args(config, args)
    configure_logging(config.log_level, config.log_file)

    engine = create_engine(config)
    try:
        if args.version:
            try:
                version_info = engine.version_info()
            except AnalysisEngineError as e:
                print_error(f"Cannot retrieve Graphene VersionInfo: {e}")
                log.error("Version request failed", error=str(e))
                return EXIT_FAILURE
            print_version(version_info, __version__)
            return EXIT_OK

        request = build_request(args)

        try:
            process_batch(request, engine, workers=config.workers, fail_fast=config.fail_fast)
        except UnsupportedInputModeError as e:
            print_error(str(e))
            log.error("Unsupported input mode", mode=e.mode)
            return EXIT_FAILURE
        except ConfigurationError as e:
            print_error(str(e))
            parser.print_usage(sys.stderr)
            return EXIT_USAGE
        except AnalysisEngineError as e:
            print_error(str(e))
            log.error("Analysis aborted", index=e.index, status_code=e.status_code, error=str(e))
            return EXIT_FAILURE

        return EXIT_OK
    finally:
        engine.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``graphene-cli`` command."""
    dotenv.load_dotenv()

    parser = create_argument_parser()
    args = parser.parse_intermixed_args(argv)

    error = validate_args(args)
    if error:
        print_error(error)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    return run(args, parser)
