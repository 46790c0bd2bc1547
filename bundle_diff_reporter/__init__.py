"""Bundle Diff Reporter — JS bundle size regression reports for CI."""

from __future__ import annotations

__version__ = "0.1.0"

from bundle_diff_reporter.api import (
    ReportResult,
    compare_bundle_stats,
    generate_bundle_stats,
    generate_report,
)
from bundle_diff_reporter.config import ReporterConfig, load_config

__all__ = [
    "__version__",
    "ReportResult",
    "ReporterConfig",
    "load_config",
    "generate_bundle_stats",
    "compare_bundle_stats",
    "generate_report",
]
