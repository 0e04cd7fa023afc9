"""
Command Line Interface Module
=============================

Provides CLI parsing, output handling, and execution orchestration.

Submodules:
- parser: Argument parsing, validation and request construction
- output: Output sink (console blocks or result files) and status display
- runner: Main execution orchestration
"""

from graphene_cli.cli.output import emit_results, print_result, print_version, write_result
from graphene_cli.cli.parser import build_request, create_argument_parser, validate_args
from graphene_cli.cli.runner import main, process_batch, run

__all__ = [
    # Parser
    "create_argument_parser",
    "validate_args",
    "build_request",
    # Output
    "emit_results",
    "print_result",
    "write_result",
    "print_version",
    # Runner
    "main",
    "run",
    "process_batch",
]
