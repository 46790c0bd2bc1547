"""CLI command for extracting bundle stats from a build folder."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from bundle_diff_reporter.cli.options import config_options, resolve_config
from bundle_diff_reporter.core.errors import BundleDiffError

console = Console()
_err_console = Console(stderr=True)


@click.command("stats")
@config_options
def stats(config_path: str | None, **overrides: str | None) -> None:
    """Write the current build's bundle stats to the output folder."""
    from bundle_diff_reporter.api import generate_bundle_stats

    cfg = resolve_config(config_path, **overrides)
    try:
        path = generate_bundle_stats(cfg)
    except BundleDiffError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    console.print(f"[green]✓ Bundle stats written to {path}[/green]")
