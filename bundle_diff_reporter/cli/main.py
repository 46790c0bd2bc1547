"""bundle-diff CLI — main entry point.

Usage::

    bundle-diff stats --build-folder dist
    bundle-diff report --threshold 5 --upper-limit 250 --lower-limit 20
    bundle-diff run --config pyproject.toml --strict
    bundle-diff validate bundle-analyzer/master-bundle-stats.json
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bundle_diff_reporter.cli.commands_report import report, run
from bundle_diff_reporter.cli.commands_stats import stats
from bundle_diff_reporter.cli.commands_validate import validate


@click.group()
@click.version_option(package_name="bundle-diff-reporter")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Bundle Diff Reporter — compare JS bundle sizes between two builds."""
    logger = logging.getLogger("bundle_diff_reporter")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


cli.add_command(stats)
cli.add_command(report)
cli.add_command(run)
cli.add_command(validate)

if __name__ == "__main__":
    cli()
