"""Options shared by the commands that read a ``ReporterConfig``."""

from __future__ import annotations

from typing import Any, Callable

import click

from bundle_diff_reporter.config import ReporterConfig, load_config
from bundle_diff_reporter.core.errors import ConfigError


def config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the folder/file options every command accepts."""
    options = [
        click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
                     default=None,
                     help="pyproject.toml holding a [tool.bundle-diff-reporter] table."),
        click.option("--root", type=click.Path(file_okay=False), default=None,
                     help="Directory relative folders resolve against (default: cwd)."),
        click.option("--build-folder", type=str, default=None,
                     help="Folder holding the built .js files."),
        click.option("--output-folder", type=str, default=None,
                     help="Folder for stats files, report and failure marker."),
        click.option("--master-file", type=str, default=None,
                     help="Baseline stats filename."),
        click.option("--current-file", type=str, default=None,
                     help="Current stats filename."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_config(config_path: str | None, **overrides: Any) -> ReporterConfig:
    """Load the config file (or defaults) and apply CLI overrides on top."""
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    return cfg.with_overrides(**overrides)
