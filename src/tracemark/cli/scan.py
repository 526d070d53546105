"""tmk scan command - list requirement markers and the code they document."""

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tracemark.config import TracemarkConfig, load_config
from tracemark.context.index import FileContextIndex
from tracemark.context.models import CodeContext, ScopeFrame
from tracemark.core.errors import ConfigError, ParseError
from tracemark.core.logging import clear_request_id, configure_logging, set_request_id
from tracemark.core.progress import pluralize, status
from tracemark.parsing.treesitter import TreeSitterParser
from tracemark.scan.scanner import Scanner, ScanReport


def _describe(context: CodeContext | None) -> str:
    if context is None:
        return "[dim]-[/dim]"
    label = f"{context.kind} {context.name}" if context.name else f"{context.kind}: {context.text}"
    return f"{escape(label)} [dim]L{context.line}[/dim]"


def _describe_scope(scopes: tuple[ScopeFrame, ...] | list[ScopeFrame]) -> str:
    if not scopes:
        return "[dim]-[/dim]"
    inner = scopes[0]
    return escape(f"{inner.kind} {inner.name}" if inner.name else inner.kind)


def _relative(path: str, root: Path) -> str:
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return path


def _make_report_table(report: ScanReport, root: Path) -> Table:
    table = Table(show_lines=False, pad_edge=False)
    table.add_column("Marker", style="cyan", no_wrap=True)
    table.add_column("Location", style="white")
    table.add_column("Below")
    table.add_column("Inline")
    table.add_column("Above")
    table.add_column("Scope", style="green")

    for record in report.records:
        table.add_row(
            record.marker.id,
            escape(f"{_relative(record.path, root)}:{record.marker.line + 1}"),
            _describe(record.context.below),
            _describe(record.context.inline),
            _describe(record.context.above),
            _describe_scope(record.scopes),
        )
    return table


def _load(repo_root: Path, prefixes: tuple[str, ...]) -> TracemarkConfig:
    overrides: dict[str, Any] = {}
    if prefixes:
        overrides["scan"] = {"marker_prefixes": list(prefixes)}
    try:
        return load_config(repo_root, **overrides)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def _show_line(path: Path, line: int, as_json: bool) -> None:
    """Print block context and scope chain for one 1-indexed line."""
    try:
        result = TreeSitterParser().parse(path)
    except ParseError as e:
        raise click.ClickException(str(e)) from e

    index = FileContextIndex.build(result.root_node, result.lines)
    start, end = index.block(line - 1)
    context = index.block_context(line - 1)
    scopes = index.hierarchy(line - 1)

    if as_json:
        payload = {
            "path": str(path),
            "line": line,
            "language": result.language,
            "block": {"start": start + 1, "end": end + 1},
            "context": context.to_dict(),
            "scopes": [frame.to_dict() for frame in scopes],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"{path}:{line} ({result.language})")
    click.echo(f"Block: lines {start + 1}-{end + 1}")
    for label, found in (
        ("Above", context.above),
        ("Below", context.below),
        ("Inline", context.inline),
    ):
        if found is None:
            click.echo(f"{label}: -")
        else:
            name = f" {found.name}" if found.name else ""
            click.echo(f"{label}: {found.kind}{name} (line {found.line}): {found.text}")
    click.echo("Scopes:")
    for frame in scopes:
        name = f" {frame.name}" if frame.name else ""
        click.echo(f"  {frame.kind}{name} (line {frame.line})")


def _report(report: ScanReport, path: Path, repo_root: Path, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    if not report.records:
        status(f"No markers found under {path}", style="warning")
        return

    Console().print(_make_report_table(report, repo_root))
    status(
        f"{pluralize(report.marker_count, 'marker')} in "
        f"{pluralize(len(report.files), 'file')}",
        style="success",
    )
    for skipped in report.skipped:
        status(f"Skipped {skipped.path}: {skipped.reason}", style="warning", indent=2)


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--prefix",
    "prefixes",
    multiple=True,
    help="Marker prefix to match (repeatable). Overrides scan.marker_prefixes.",
)
@click.option(
    "--line",
    type=click.IntRange(min=1),
    default=None,
    help="Show context for one 1-indexed line of PATH instead of scanning.",
)
@click.pass_context
def scan_command(
    ctx: click.Context,
    path: Path,
    as_json: bool,
    prefixes: tuple[str, ...],
    line: int | None,
) -> None:
    """Scan source files for requirement markers.

    PATH is a source file or directory (default: current directory).
    Each marker is reported with the code below, on and above its comment
    block and the innermost enclosing scope.
    """
    path = path.resolve()
    repo_root = path if path.is_dir() else path.parent
    config = _load(repo_root, prefixes)

    verbose = (ctx.obj or {}).get("verbose", False)
    if not verbose:
        configure_logging(config=config.logging)
    if line is not None and not path.is_file():
        raise click.UsageError("--line requires PATH to be a file")

    set_request_id()
    try:
        if line is not None:
            _show_line(path, line, as_json)
        else:
            _report(Scanner(config.scan).scan(path), path, repo_root, as_json)
    finally:
        clear_request_id()
