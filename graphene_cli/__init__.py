"""
graphene-cli - Command Line Client for Graphene
===============================================

Sends texts to a Graphene server for coreference resolution, discourse
simplification or relation extraction, and renders the results to the
console or to one file per input.

Key Features:
- TEXT and FILE inputs, batch processing in command-line order
- Several renderings per analysis (default, flat, RDF, serialized JSON)
- Deterministic output file names
- Fail-fast or skip-failed batch policy, optional worker pool

Modules:
- core: Pipeline components (models, inputs, engine client, router, naming)
- formatters: Rendering of analysis outcomes
- cli: Command-line interface

Usage:
    # CLI
    graphene-cli --operation RE --input TEXT --output CMDLINE "Some text."

    # Programmatic
    from graphene_cli.core import GrapheneClient, InvocationRequest
    from graphene_cli.cli import process_batch
"""

__version__ = "1.0.0"

# Re-export key classes for convenience
from graphene_cli.cli import main, process_batch
from graphene_cli.core import (
    GrapheneClient,
    InvocationRequest,
    Operation,
    OperationRouter,
    resolve_inputs,
)
from graphene_cli.formatters import format_content, get_formatter

__all__ = [
    # Version info
    "__version__",
    # Core
    "InvocationRequest",
    "Operation",
    "GrapheneClient",
    "OperationRouter",
    "resolve_inputs",
    # Formatting
    "format_content",
    "get_formatter",
    # CLI
    "main",
    "process_batch",
]
