"""CLI commands for the size comparison report."""

from __future__ import annotations

import json
import sys
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from bundle_diff_reporter.cli.options import config_options, resolve_config
from bundle_diff_reporter.config import ReporterConfig
from bundle_diff_reporter.core.diff import DiffResult
from bundle_diff_reporter.core.errors import BundleDiffError

console = Console()
_err_console = Console(stderr=True)


def report_options(func: Any) -> Any:
    options = [
        click.option("--output-file", type=str, default=None, help="Markdown report filename."),
        click.option("--failure-file", type=str, default=None, help="Failure marker filename."),
        click.option("--threshold", "change_threshold", type=click.FloatRange(min=0), default=None,
                     help="Minimum percent change for a file to count as changed (default: 5)."),
        click.option("--upper-limit", "splitting_upper_limit", type=click.FloatRange(min=0),
                     default=None, help="Flag files larger than this many KB (default: 250)."),
        click.option("--lower-limit", "splitting_lower_limit", type=click.FloatRange(min=0),
                     default=None, help="Flag files smaller than this many KB (default: 20)."),
        click.option("--allow-large", "above_average_files", multiple=True,
                     help="Exempt a canonical filename from the upper limit. Repeatable."),
        click.option("--allow-small", "below_average_files", multiple=True,
                     help="Exempt a canonical filename from the lower limit. Repeatable."),
        click.option("--format", "-f", "output_format",
                     type=click.Choice(["text", "json", "markdown"]), default="text",
                     help="Console output: text (default), json, or markdown."),
        click.option("--strict", is_flag=True, default=False,
                     help="Also exit 1 when the size check fails."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _split_overrides(overrides: dict[str, Any]) -> dict[str, Any]:
    # ``multiple=True`` options default to an empty tuple, which must not
    # wipe allowlists coming from the config file.
    return {k: (v or None) if isinstance(v, tuple) else v for k, v in overrides.items()}


def _fail(exc: BundleDiffError, output_format: str) -> None:
    """Report a fatal error and exit 1; JSON mode also emits the error envelope on stdout."""
    if output_format == "json":
        click.echo(json.dumps({"error": exc.to_dict()}, indent=2))
    _err_console.print(f"[red]Error:[/red] {exc}")
    sys.exit(1)


def _run_report(cfg: ReporterConfig, output_format: str, strict: bool) -> None:
    """Core report logic shared by ``report`` and ``run``."""
    from bundle_diff_reporter.api import generate_report

    # In JSON/markdown mode every human-readable message goes to stderr so
    # stdout carries only the machine output.
    out = _err_console if output_format in ("json", "markdown") else console

    try:
        result = generate_report(cfg)
    except BundleDiffError as exc:
        _fail(exc, output_format)

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif output_format == "markdown":
        click.echo(result.markdown)
    else:
        _print_summary(result.diff)

    if result.success:
        out.print("[green]✓ Bundle size check passed[/green]")
    else:
        failed = result.failed_files
        out.print(
            f"[red]✗ Bundle size check failed:[/red] "
            f"{len(failed.above_average_files)} above {cfg.splitting_upper_limit:g}KB, "
            f"{len(failed.below_average_files)} below {cfg.splitting_lower_limit:g}KB"
        )
        out.print(f"  Failure marker: {result.failure_path}")
    out.print(f"  Report: {result.report_path}")

    if strict and not result.success:
        sys.exit(1)


def _print_summary(diff: DiffResult) -> None:
    s = diff.summary
    table = Table(title="Bundle Size Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Files added", f"{len(diff.added)} (+{s.total_added:.2f} KB)")
    table.add_row("Files removed", f"{len(diff.removed)} (-{s.total_removed:.2f} KB)")
    table.add_row("Files changed", str(s.count_changed))
    table.add_row("Size increase", f"+{s.size_increase:.2f} KB")
    table.add_row("Size decrease", f"-{s.size_decrease:.2f} KB")
    table.add_row("Net change", f"{s.net_change:.2f} KB")
    console.print(table)


@click.command("report")
@config_options
@report_options
def report(config_path: str | None, output_format: str, strict: bool, **overrides: Any) -> None:
    """Compare master and current stats and write the Markdown report."""
    cfg = resolve_config(config_path, **_split_overrides(overrides))
    _run_report(cfg, output_format, strict)


@click.command("run")
@config_options
@report_options
def run(config_path: str | None, output_format: str, strict: bool, **overrides: Any) -> None:
    """Extract current stats, then compare and report, in one go."""
    from bundle_diff_reporter.api import generate_bundle_stats

    cfg = resolve_config(config_path, **_split_overrides(overrides))
    try:
        generate_bundle_stats(cfg)
    except BundleDiffError as exc:
        _fail(exc, output_format)
    _run_report(cfg, output_format, strict)
