"""Reporter configuration: defaults, ``pyproject.toml`` loading and overrides."""

from __future__ import annotations

import dataclasses
import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bundle_diff_reporter.core.errors import ConfigError
from bundle_diff_reporter.core.policy import SizePolicy
from bundle_diff_reporter.core.schemas import validate_file

logger = logging.getLogger("bundle_diff_reporter")

#: Table read from ``pyproject.toml``.
TOOL_TABLE = "bundle-diff-reporter"

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class ReporterConfig:
    """Where to read and write, and which budgets to enforce.

    Relative folders resolve against *root*, which defaults to the current
    working directory at resolution time.
    """

    build_folder: str = "dist"
    output_folder: str = "bundle-analyzer"
    master_file: str = "master-bundle-stats.json"
    current_file: str = "current-bundle-stats.json"
    output_file: str = "bundle-size-report.md"
    failure_file: str = "bundle-diff-stage-failed.txt"
    change_threshold: float = 5  # percent
    splitting_upper_limit: float = 250  # KB
    splitting_lower_limit: float = 20  # KB
    above_average_files: frozenset[str] = field(default_factory=frozenset)
    below_average_files: frozenset[str] = field(default_factory=frozenset)
    root: str | None = None

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def root_dir(self) -> Path:
        return Path(self.root) if self.root else Path.cwd()

    @property
    def build_dir(self) -> Path:
        return self.root_dir / self.build_folder

    @property
    def output_dir(self) -> Path:
        return self.root_dir / self.output_folder

    @property
    def master_path(self) -> Path:
        return self.output_dir / self.master_file

    @property
    def current_path(self) -> Path:
        return self.output_dir / self.current_file

    @property
    def policy(self) -> SizePolicy:
        return SizePolicy(
            upper_limit=self.splitting_upper_limit,
            lower_limit=self.splitting_lower_limit,
            above_allowlist=self.above_average_files,
            below_allowlist=self.below_average_files,
        )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def with_overrides(self, **overrides: Any) -> ReporterConfig:
        """Return a copy with every non-``None`` override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        for key in ("above_average_files", "below_average_files"):
            if key in values:
                values[key] = frozenset(values[key])
        return dataclasses.replace(self, **values)

    def to_dict(self) -> dict[str, Any]:
        d = dataclasses.asdict(self)
        d["above_average_files"] = sorted(self.above_average_files)
        d["below_average_files"] = sorted(self.below_average_files)
        if self.root is None:
            del d["root"]
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ReporterConfig:
        """Build a config from a mapping with snake_case, kebab-case or camelCase keys.

        Raises:
            ConfigError: On unknown keys or wrong value types.
        """
        data = {_normalize_key(k): v for k, v in d.items()}
        errors = validate_file("config", data)
        if errors:
            raise ConfigError("Invalid configuration: " + "; ".join(errors[:5]))
        return cls().with_overrides(**data)


def _normalize_key(key: str) -> str:
    return _CAMEL.sub("_", key.replace("-", "_")).lower()


def load_config(pyproject_path: str | Path | None = None) -> ReporterConfig:
    """Load ``[tool.bundle-diff-reporter]`` from *pyproject_path*.

    Without a path, ``pyproject.toml`` in the working directory is used if it
    exists.  A missing file or missing table yields the defaults.  The config
    root defaults to the directory holding the ``pyproject.toml``.
    """
    explicit = pyproject_path is not None
    path = Path(pyproject_path) if explicit else Path.cwd() / "pyproject.toml"
    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}", path)
        logger.debug("No pyproject.toml at %s — using defaults", path)
        return ReporterConfig()

    try:
        with open(path, "rb") as f:
            doc = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}", path) from exc

    table = doc.get("tool", {}).get(TOOL_TABLE)
    if table is None:
        logger.debug("No [tool.%s] table in %s — using defaults", TOOL_TABLE, path)
        return ReporterConfig(root=str(path.resolve().parent))

    cfg = ReporterConfig.from_dict(dict(table))
    base = path.resolve().parent
    return cfg.with_overrides(root=str(base / cfg.root) if cfg.root else str(base))
