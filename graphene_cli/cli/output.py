"""
CLI Output
==========

Output sink for rendered results plus console status messages.

- CMDLINE: each result is printed to stdout as a delimited block
  (banner, name, text) in batch order.
- FILE: each result is written to ``<name>.txt`` in the working directory,
  overwriting an existing file of that name.

Formatting and write failures are logged per item and never stop the
remaining items.

Uses Rich library for styled status output.
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
from rich.console import Console
from rich.markup import escape

from graphene_cli.core.errors import FormatSerializationError, OutputWriteError
from graphene_cli.core.models import InvocationRequest, NamedResult, OutputSource
from graphene_cli.formatters import format_content

log = structlog.get_logger("graphene_cli.output")

# Module-level console instances
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

BANNER = "############"


@dataclass
class EmitSummary:
    """Outcome of emitting a batch."""

    emitted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def render_block(name: str, text: str) -> str:
    """Console block for one result."""
    return f"{BANNER}\nName: {name} →\n{text}"


def _format(named: NamedResult, request: InvocationRequest) -> str | None:
    try:
        return format_content(named.content, request, named.name)
    except FormatSerializationError as e:
        log.error("Could not convert the result to JSON", name=named.name, error=e.reason)
        return None


def print_result(named: NamedResult, request: InvocationRequest) -> bool:
    """Print one result block to stdout.

    Returns:
        True if the block was printed
    """
    text = _format(named, request)
    if text is None:
        return False
    print(render_block(named.name, text))
    return True


def write_text_file(path: Path, text: str) -> None:
    """Write ``text`` to ``path``, replacing any existing file.

    Raises:
        OutputWriteError: On any filesystem error
    """
    try:
        with path.open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise OutputWriteError(str(path), str(e)) from e


def write_result(named: NamedResult, request: InvocationRequest) -> Path | None:
    """Write one result to ``<name>.txt`` in the working directory.

    The file is only created once the result has been rendered.

    Returns:
        Path of the written file, or None if the item was skipped
    """
    text = _format(named, request)
    if text is None:
        return None

    path = Path(f"{named.name}.txt")
    try:
        write_text_file(path, text)
    except OutputWriteError as e:
        log.error("Could not write file", path=e.path, error=e.reason)
        print_write_status(named.name, path, False, e.reason)
        return None

    log.info("Result written", name=named.name, path=str(path))
    print_write_status(named.name, path, True)
    return path


def emit_results(
    named_results: Sequence[NamedResult],
    request: InvocationRequest,
) -> EmitSummary:
    """Send every named result to the output selected in ``request``."""
    summary = EmitSummary()

    for named in named_results:
        if request.output_source == OutputSource.FILE:
            ok = write_result(named, request) is not None
        else:
            ok = print_result(named, request)

        if ok:
            summary.emitted.append(named.name)
        else:
            summary.skipped.append(named.name)

    if request.output_source == OutputSource.FILE:
        print_emit_summary(summary)

    return summary


def print_write_status(
    name: str,
    path: Path,
    success: bool,
    error: str | None = None,
) -> None:
    """Print status of writing one result file."""
    if success:
        console.print(f"[green]✓ Wrote {escape(str(path))}[/green]")
    else:
        console.print(f"[red]✗ Failed to write {escape(name)}: {escape(error or '')}[/red]")


def print_emit_summary(summary: EmitSummary) -> None:
    total = len(summary.emitted) + len(summary.skipped)
    if summary.skipped:
        console.print(
            f"[yellow]{len(summary.emitted)}/{total} result files written, "
            f"{len(summary.skipped)} skipped (see log)[/yellow]"
        )
    else:
        console.print(f"[bold green]{total} result file(s) written[/bold green]")


def print_version(version_info: dict[str, Any], cli_version: str) -> None:
    """Print the engine version record as indented JSON."""
    print("Graphene VersionInfo: " + json.dumps(version_info, indent=2, ensure_ascii=False, default=str))
    print(f"graphene-cli {cli_version}")


def print_error(message: str) -> None:
    err_console.print(f"[bold red]{escape(message)}[/bold red]")
