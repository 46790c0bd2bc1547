"""Core subpackage — stats extraction, diffing, size policy, schemas, output store."""

from __future__ import annotations

__all__ = [
    "BundleDiffError",
    "DiffResult",
    "DiffSummary",
    "FailedFile",
    "FailedFiles",
    "OutputStore",
    "SizePolicy",
    "check_file_sizes",
    "collect_bundle_stats",
    "compare_stats",
    "load_bundle_stats",
    "normalize_name",
]

from bundle_diff_reporter.core.artifacts import OutputStore
from bundle_diff_reporter.core.diff import DiffResult, DiffSummary, compare_stats
from bundle_diff_reporter.core.errors import BundleDiffError
from bundle_diff_reporter.core.policy import FailedFile, FailedFiles, SizePolicy, check_file_sizes
from bundle_diff_reporter.core.stats import collect_bundle_stats, load_bundle_stats, normalize_name
