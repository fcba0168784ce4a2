"""Command-line interface for surveyscope."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from surveyscope import __version__
from surveyscope.analysis import comment_breakdown_mismatches, filter_and_rank
from surveyscope.config import load_settings
from surveyscope.errors import CorruptShareToken, ExportWriteFailure, MalformedResult
from surveyscope.export import (
    ExportPaths,
    to_delimited_text,
    to_detail_text,
    to_document,
    write_export,
)
from surveyscope.logging import setup_logging
from surveyscope.models import AnalysisMode, AnalysisResult, Sentiment, load_result
from surveyscope.share import build_share_url, decode_token, encode_result, token_from_url

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="surveyscope",
    help="Filter, share and export survey comment analyses.",
    no_args_is_help=True,
)
console = Console(width=min(100, Console().width))


class ExportFormat(str, Enum):
    CSV = "csv"
    DETAIL = "detail"
    HTML = "html"
    ALL = "all"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"surveyscope {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Filter, share and export survey comment analyses."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_or_exit(path: Path) -> AnalysisResult:
    try:
        return load_result(path)
    except MalformedResult as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        for error in exc.errors:
            console.print(f"  [dim]{escape(error)}[/dim]")
        raise typer.Exit(1) from exc


def _warn_mismatches(result: AnalysisResult) -> None:
    for name in comment_breakdown_mismatches(result):
        logger.warning("Theme %r counts disagree with its categorized comments", name)


def _summary_table(result: AnalysisResult, min_total: int) -> Table:
    mode = result.analysis_mode
    view = filter_and_rank(result, min_total)
    table = Table(title=mode.section_title)
    table.add_column("Sentiment" if mode is AnalysisMode.SENTIMENT_ONLY else "Theme")
    if mode is AnalysisMode.BOTH:
        for s in Sentiment:
            table.add_column(s.label, justify="right")
        table.add_column("Total", justify="right")
    else:
        table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")

    for theme in view.themes:
        count = mode.theme_count(theme)
        share = f"{view.percentage(count):.1f}%"
        if mode is AnalysisMode.BOTH:
            table.add_row(escape(theme.name), *(str(c) for c in theme.sentiment.as_list()), str(count), share)
        else:
            table.add_row(escape(theme.name), str(count), share)
    table.caption = f"{len(view.themes)} of {len(result.themes)} shown · {view.grand_total} comments"
    return table


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def summary(
    result_path: Annotated[
        Path,
        typer.Argument(help="Analysis result JSON file.", exists=True, dir_okay=False),
    ],
    min_count: Annotated[
        int | None,
        typer.Option("--min-count", "-m", min=0, help="Hide themes with fewer comments."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Print the ranked themes of an analysis result."""
    setup_logging(verbose=verbose)
    settings = load_settings(min_comment_threshold=min_count)
    result = _load_or_exit(result_path)
    _warn_mismatches(result)

    if result.survey_question:
        console.print(f"[bold]{escape(result.survey_question)}[/bold]")
    console.print(_summary_table(result, settings.min_comment_threshold))


@app.command()
def share(
    result_path: Annotated[
        Path,
        typer.Argument(help="Analysis result JSON file.", exists=True, dir_okay=False),
    ],
    base_url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="Base URL to attach the token to."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Print a share token (or full share URL) for an analysis result."""
    setup_logging(verbose=verbose)
    settings = load_settings(share_base_url=base_url)
    result = _load_or_exit(result_path)

    if settings.share_base_url:
        url = build_share_url(
            settings.share_base_url, result, warn_length=settings.share_url_warn_length,
        )
        typer.echo(url)
    else:
        typer.echo(encode_result(result))


@app.command(name="open")
def open_link(
    link: Annotated[
        str,
        typer.Argument(help="Share URL, or the bare token from its fragment."),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the decoded JSON to this file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Decode a share link back into analysis result JSON."""
    setup_logging(verbose=verbose)
    try:
        token = token_from_url(link) if "#" in link else link
        result = decode_token(token)
    except CorruptShareToken as exc:
        logger.debug("Share token rejected: %s", exc.reason)
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    text = json.dumps(result.to_wire(), indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(text)
        return
    try:
        write_export(output, text + "\n")
    except ExportWriteFailure as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc
    console.print(f"Wrote [bold]{output}[/bold]")


@app.command()
def export(
    result_path: Annotated[
        Path,
        typer.Argument(help="Analysis result JSON file.", exists=True, dir_okay=False),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory. [default: output]"),
    ] = None,
    min_count: Annotated[
        int | None,
        typer.Option("--min-count", "-m", min=0, help="Hide themes with fewer comments."),
    ] = None,
    fmt: Annotated[
        ExportFormat,
        typer.Option("--format", "-f", help="Which artifact(s) to write."),
    ] = ExportFormat.ALL,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Write CSV and/or HTML exports of an analysis result."""
    settings = load_settings(output_dir=output_dir, min_comment_threshold=min_count)
    setup_logging(output_dir=settings.output_dir, verbose=verbose)
    result = _load_or_exit(result_path)
    _warn_mismatches(result)

    view = filter_and_rank(result, settings.min_comment_threshold)
    paths = ExportPaths(settings.output_dir)
    written: list[Path] = []

    try:
        if fmt in (ExportFormat.CSV, ExportFormat.ALL):
            written.append(write_export(paths.summary_csv, to_delimited_text(result, view)))
        if fmt in (ExportFormat.DETAIL, ExportFormat.ALL):
            detail = to_detail_text(result)
            if detail is None:
                console.print("[yellow]No categorized comments; skipping detail CSV.[/yellow]")
            else:
                written.append(write_export(paths.detail_csv, detail))
        if fmt in (ExportFormat.HTML, ExportFormat.ALL):
            html = to_document(
                result,
                view,
                title=settings.report_title,
                footer=settings.report_footer,
                chart_cdn_url=settings.chart_cdn_url,
            )
            written.append(write_export(paths.report_html, html))
    except ExportWriteFailure as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    for path in written:
        console.print(f"  [green]✓[/green] {path}")
