"""Public Python API for the bundle diff reporter.

Usage::

    from bundle_diff_reporter import ReporterConfig, generate_bundle_stats, generate_report

    cfg = ReporterConfig(build_folder="dist", change_threshold=5)
    generate_bundle_stats(cfg)
    result = generate_report(cfg)
    if not result.success:
        ...

Each stage takes its inputs as arguments and returns its outputs; nothing is
kept between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bundle_diff_reporter.config import ReporterConfig
from bundle_diff_reporter.core.artifacts import OutputStore
from bundle_diff_reporter.core.diff import DiffResult, compare_stats
from bundle_diff_reporter.core.policy import FailedFiles, check_file_sizes
from bundle_diff_reporter.core.stats import collect_bundle_stats, load_bundle_stats
from bundle_diff_reporter.report.markdown import render_markdown

logger = logging.getLogger("bundle_diff_reporter")


@dataclass
class ReportResult:
    """Outcome of :func:`generate_report`.

    Attributes:
        success: ``True`` when no file breaks a size budget.
        diff: The classified diff.
        failed_files: Files breaking a size budget.
        markdown: The rendered report.
        report_path: Where the report was written.
        failure_path: Where the failure marker was written, ``None`` on success.
    """

    success: bool
    diff: DiffResult
    failed_files: FailedFiles
    markdown: str
    report_path: Path
    failure_path: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "diff": self.diff.to_dict(),
            "failedFiles": self.failed_files.to_dict(),
            "reportPath": str(self.report_path),
            "failurePath": str(self.failure_path) if self.failure_path else None,
        }


def generate_bundle_stats(config: ReporterConfig | None = None) -> Path:
    """Scan the build folder and write the current stats file.

    Returns:
        Path of the written stats file.

    Raises:
        UnreadableDirectory: If the build folder cannot be read.
        WriteFailure: If the output folder or file cannot be written.
    """
    config = config or ReporterConfig()
    stats = collect_bundle_stats(config.build_dir)
    store = OutputStore(config.output_dir)
    path = store.write_stats(config.current_file, stats)
    logger.info("Wrote stats for %d bundle(s) to %s", len(stats), path)
    return path


def compare_bundle_stats(config: ReporterConfig | None = None) -> DiffResult:
    """Load the master and current stats files and diff them.

    Raises:
        MissingInputFile: If either stats file is absent.
        MalformedStats: If either stats file is not a valid stats mapping.
    """
    config = config or ReporterConfig()
    master = load_bundle_stats(config.master_path)
    current = load_bundle_stats(config.current_path)
    diff = compare_stats(master, current, config.change_threshold)
    logger.debug(
        "Diff: %d added, %d removed, %d changed, %d same",
        len(diff.added), len(diff.removed), len(diff.changed), len(diff.same),
    )
    return diff


def generate_report(config: ReporterConfig | None = None) -> ReportResult:
    """Compare, check budgets, write the failure marker if needed, write the report.

    A failing budget check is a normal outcome: the report is still written in
    full and the marker file signals the failure.  A marker left by an
    earlier failing run is removed when the current run passes.
    """
    config = config or ReporterConfig()
    diff = compare_bundle_stats(config)
    failed = check_file_sizes(diff, config.policy)

    store = OutputStore(config.output_dir)
    failure_path: Path | None = None
    if failed.passed:
        store.clear_failure_marker(config.failure_file)
    else:
        failure_path = store.write_failure_marker(config.failure_file)
        logger.warning(
            "Bundle size check failed: %d above %gKB, %d below %gKB",
            len(failed.above_average_files), config.splitting_upper_limit,
            len(failed.below_average_files), config.splitting_lower_limit,
        )

    md = render_markdown(diff, failed, config)
    report_path = store.write_report(config.output_file, md)
    logger.info("Wrote bundle size report to %s", report_path)

    return ReportResult(
        success=failed.passed,
        diff=diff,
        failed_files=failed,
        markdown=md,
        report_path=report_path,
        failure_path=failure_path,
    )
