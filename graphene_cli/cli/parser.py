"""
CLI Argument Parser
===================

Handles command-line argument parsing and validation for graphene-cli.

This module provides:
- Argument parser creation with all supported options
- Argument validation
- Construction of the immutable InvocationRequest
"""

import argparse
from typing import Optional

from graphene_cli.config import LOG_LEVELS
from graphene_cli.core.models import (
    CorefFormat,
    InputSource,
    InvocationRequest,
    Operation,
    OutputSource,
    REFormat,
    SimFormat,
)


def _choices(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all CLI options.

    Returns:
        Configured ArgumentParser instance

    Example:
        >>> parser = create_argument_parser()
        >>> args = parser.parse_args(['--operation', 'RE', '--input', 'TEXT', '--output', 'CMDLINE', 'Some text.'])
    """
    parser = argparse.ArgumentParser(
        prog="graphene-cli",
        description="Run coreference resolution, discourse simplification or relation "
        "extraction on texts using a Graphene server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  graphene-cli --operation RE --input TEXT --output CMDLINE "Although the Treasury ..."
  graphene-cli --operation SIM --doCoreference --simformat FLAT --input FILE --output FILE doc1.txt doc2.txt
  graphene-cli --operation COREF --corefformat SERIALIZED --input TEXT --output CMDLINE "Bob left. He was tired."
  graphene-cli --version
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="Print the version of the Graphene engine and exit",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="INPUT",
        help="Input texts, file paths or article ids (see --input)",
    )

    # Operation arguments
    operation_group = parser.add_argument_group("Operation")

    operation_group.add_argument(
        "--operation",
        type=str.upper,
        choices=_choices(Operation),
        help="Run Coreference-Resolution [COREF], Discourse-Simplification [SIM], or Relation-Extraction [RE]",
    )

    operation_group.add_argument(
        "--input",
        dest="input_source",
        type=str.upper,
        choices=_choices(InputSource),
        help="How the inputs are given [TEXT/FILE/WIKI]",
    )

    operation_group.add_argument(
        "--output",
        dest="output_source",
        type=str.upper,
        choices=_choices(OutputSource),
        help="Create one file per input [FILE] or print results to the command line [CMDLINE]",
    )

    operation_group.add_argument(
        "--doCoreference",
        dest="do_coreference",
        action="store_true",
        help="Run coreference resolution before Discourse-Simplification or Relation-Extraction",
    )

    operation_group.add_argument(
        "--doComplexCategories",
        dest="do_complex_categories",
        action="store_true",
        help="Extract complex categories (Relation-Extraction)",
    )

    operation_group.add_argument(
        "--isolateSentences",
        dest="isolate_sentences",
        action="store_true",
        help="Process the sentences of each input individually. Relations between "
        "neighbouring sentences are not extracted. Use for collections of independent "
        "sentences, not for coherent texts.",
    )

    # Format arguments
    format_group = parser.add_argument_group("Output Format")

    format_group.add_argument(
        "--corefformat",
        type=str.upper,
        choices=_choices(CorefFormat),
        default=CorefFormat.DEFAULT.value,
        help="Representation of Coreference-Resolution results (default: DEFAULT)",
    )

    format_group.add_argument(
        "--simformat",
        type=str.upper,
        choices=_choices(SimFormat),
        default=SimFormat.DEFAULT.value,
        help="Representation of Discourse-Simplification results (default: DEFAULT)",
    )

    format_group.add_argument(
        "--reformat",
        type=str.upper,
        choices=_choices(REFormat),
        default=REFormat.DEFAULT.value,
        help="Representation of Relation-Extraction results (default: DEFAULT)",
    )

    # Engine and batch arguments
    engine_group = parser.add_argument_group("Engine & Batch")

    engine_group.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Configuration file (default: search for .graphene-cli.yaml)",
    )

    engine_group.add_argument(
        "--server",
        type=str,
        metavar="URL",
        help="Base URL of the Graphene server (or set GRAPHENE_URL env var)",
    )

    engine_group.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of inputs analyzed concurrently (default: 1)",
    )

    engine_group.add_argument(
        "--skip-failed",
        action="store_true",
        help="Skip inputs whose analysis fails instead of aborting the batch",
    )

    # Logging arguments
    logging_group = parser.add_argument_group("Logging")

    logging_group.add_argument(
        "--log-level",
        type=str.lower,
        choices=list(LOG_LEVELS),
        help="Minimum level of log events (default: warning)",
    )

    logging_group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Append log events to this file instead of stderr",
    )

    return parser


def validate_args(args: argparse.Namespace) -> Optional[str]:
    """Validate parsed arguments.

    Args:
        args: Parsed argument namespace

    Returns:
        Error message if validation fails, None if valid
    """
    if args.version:
        return None

    missing = [
        flag
        for flag, value in (
            ("--operation", args.operation),
            ("--input", args.input_source),
            ("--output", args.output_source),
        )
        if not value
    ]
    if missing:
        return f"Missing required option(s): {', '.join(missing)}"

    if not args.inputs:
        return "Input must be at least one entry."

    if args.workers is not None and args.workers < 1:
        return "Number of workers must be at least 1"

    return None


def build_request(args: argparse.Namespace) -> InvocationRequest:
    """Build the immutable InvocationRequest from validated arguments."""
    return InvocationRequest(
        operation=Operation(args.operation),
        input_source=InputSource(args.input_source),
        output_source=OutputSource(args.output_source),
        do_coreference=args.do_coreference,
        isolate_sentences=args.isolate_sentences,
        do_complex_categories=args.do_complex_categories,
        coref_format=CorefFormat(args.corefformat),
        sim_format=SimFormat(args.simformat),
        re_format=REFormat(args.reformat),
        inputs=tuple(args.inputs),
    )
