"""CLI interface for issuegraph using Typer framework."""

import hashlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from issuegraph import __description__, __version__
from issuegraph.config import ExportConfig, LogLevel, load_config
from issuegraph.dispatch import parse_format, render_graph, write_graph
from issuegraph.errors import IssueGraphError
from issuegraph.models.issue import load_issues
from issuegraph.models.metrics import StaticMetrics

app = typer.Typer(
    name="issuegraph",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _data_hash(path: Path) -> str:
    """Provenance hash of the issues file (first 16 hex chars of SHA-256)."""
    return hashlib.sha256(path.read_bytes()).hexdigest()[:16]


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"issuegraph version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """issuegraph - dependency graph exports for issue trackers."""


@app.command()
def export(
    issues: Annotated[
        Path,
        typer.Argument(help="Issues file (JSON array or JSONL with nested dependencies)")
    ],
    metrics: Annotated[
        Optional[Path],
        typer.Option("--metrics", "-m", help="Metrics JSON (pagerank, betweenness, critical_path, cycles)")
    ] = None,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output file path (default: stdout for json, dot, mermaid)")
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: json, dot, mermaid, svg, png (default: from --out)")
    ] = None,
    label: Annotated[
        Optional[str],
        typer.Option("--label", "-l", help="Only include issues carrying this label")
    ] = None,
    root: Annotated[
        Optional[str],
        typer.Option("--root", "-r", help="Only include issues reachable from this issue")
    ] = None,
    depth: Annotated[
        Optional[int],
        typer.Option("--depth", "-d", help="Maximum traversal depth from --root (0 = unlimited)")
    ] = None,
    preset: Annotated[
        Optional[str],
        typer.Option("--preset", help="Snapshot layout preset: compact, roomy")
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Snapshot title")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .issuegraph.json)")
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Logging level: error, warn, info, debug")
    ] = None,
) -> None:
    """Export the issue dependency graph."""
    try:
        settings = load_config(config)
        _setup_logging(log_level or settings.logging.level)

        overrides = {
            key: value for key, value in {
                "label": label,
                "root": root,
                "depth": depth,
                "preset": preset,
                "title": title,
            }.items() if value is not None
        }
        if format:
            overrides["format"] = parse_format(format)

        nodes, edges = load_issues(issues)
        provider = StaticMetrics.load(metrics) if metrics else None

        export_config = ExportConfig.model_validate({**settings.export.model_dump(), **overrides})
        if not export_config.data_hash:
            export_config = export_config.model_copy(update={"data_hash": _data_hash(issues)})
        if out is None:
            if export_config.format is None or export_config.format.is_snapshot:
                console.print("[red]Error:[/red] --out is required for svg and png output")
                raise typer.Exit(1)
            data = render_graph(nodes, edges, provider, export_config)
            typer.echo(data.decode("utf-8"), nl=False)
            return

        written = write_graph(out, nodes, edges, provider, export_config)
        console.print(f"[green]Graph written:[/green] {written}")

    except (IssueGraphError, FileNotFoundError, ValidationError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
