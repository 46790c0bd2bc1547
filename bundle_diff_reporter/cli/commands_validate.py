"""``bundle-diff validate`` — validate stats JSON files against the stats schema."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from bundle_diff_reporter.core.errors import MalformedStats
from bundle_diff_reporter.core.schemas import validate_file
from bundle_diff_reporter.core.stats import parse_bundle_stats, read_stats_json

logger = logging.getLogger("bundle_diff_reporter.cli")


def _validate_one(filepath: Path) -> list[str]:
    """Return a list of error messages (empty = valid)."""
    try:
        data = read_stats_json(filepath)
    except ValueError as exc:
        return [f"JSON parse error: {exc}"]
    errors = validate_file("bundle_stats", data)
    if errors:
        return errors
    try:
        parse_bundle_stats(data, str(filepath))
    except MalformedStats as exc:
        return [str(exc)]
    return []


@click.command("validate")
@click.argument("stats_files", nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table",
              help="Output format.")
@click.option("--strict", is_flag=True, default=False,
              help="Exit with non-zero status if any file is invalid.")
def validate(stats_files: tuple[str, ...], fmt: str, strict: bool) -> None:
    """Validate bundle stats JSON files (``{"name.js": {"size": KB}}``)."""
    err_console = Console(stderr=True)

    results: list[dict[str, Any]] = []
    total_errors = 0
    for name in stats_files:
        errs = _validate_one(Path(name))
        logger.debug("Validated %s: %d error(s)", name, len(errs))
        total_errors += len(errs)
        results.append({
            "file": name,
            "status": "invalid" if errs else "valid",
            "errors": errs,
        })

    if fmt == "json":
        click.echo(json.dumps({"results": results, "total_errors": total_errors}, indent=2))
    else:
        table = Table(title="Bundle Stats Validation")
        table.add_column("File", style="cyan")
        table.add_column("Status")
        table.add_column("Errors", style="red")

        for r in results:
            status_style = "[green]valid[/green]" if r["status"] == "valid" else "[red]INVALID[/red]"
            err_text = "\n".join(r["errors"][:3]) if r["errors"] else ""
            if len(r["errors"]) > 3:
                err_text += f"\n... +{len(r['errors']) - 3} more"
            table.add_row(r["file"], status_style, err_text)

        err_console.print(table)
        if total_errors:
            err_console.print(f"\n[red]{total_errors} validation error(s) found.[/red]")
        else:
            err_console.print("\n[green]All files are valid.[/green]")

    if strict and total_errors:
        raise SystemExit(1)
