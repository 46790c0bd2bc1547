"""Tests for the size-budget checks."""

from __future__ import annotations

from bundle_diff_reporter.core.diff import compare_stats
from bundle_diff_reporter.core.policy import (
    FailedFile,
    FailedFiles,
    SizePolicy,
    check_file_sizes,
    extract_checked_sizes,
)


def _check(baseline: dict, current: dict, policy: SizePolicy | None = None) -> FailedFiles:
    diff = compare_stats(baseline, current, change_threshold=5)
    return check_file_sizes(diff, policy or SizePolicy(upper_limit=250, lower_limit=20))


def test_new_large_file_is_above_average() -> None:
    failed = _check({}, {"c.js": {"size": 300}})
    assert failed.above_average_files == [FailedFile("c.js", 300)]
    assert failed.below_average_files == []
    assert not failed.passed


def test_new_small_file_is_below_average() -> None:
    failed = _check({}, {"tiny.js": {"size": 5}})
    assert failed.below_average_files == [FailedFile("tiny.js", 5)]
    assert failed.above_average_files == []


def test_resolver_chunks_never_below_average() -> None:
    failed = _check({}, {"chunk-resolver.js": {"size": 5}})
    assert failed.below_average_files == []
    assert failed.passed


def test_limits_are_strict() -> None:
    failed = _check({}, {"upper.js": {"size": 250}, "lower.js": {"size": 20}})
    assert failed.passed


def test_allowlists() -> None:
    policy = SizePolicy(
        upper_limit=250,
        lower_limit=20,
        above_allowlist=frozenset({"vendors.js"}),
        below_allowlist=frozenset({"tiny.js"}),
    )
    failed = _check({}, {"vendors.js": {"size": 900}, "tiny.js": {"size": 1}}, policy)
    assert failed.passed


def test_allowlist_is_per_check() -> None:
    policy = SizePolicy(upper_limit=250, lower_limit=20, below_allowlist=frozenset({"big.js"}))
    failed = _check({}, {"big.js": {"size": 900}}, policy)
    assert [f.file_name for f in failed.above_average_files] == ["big.js"]


def test_upper_check_takes_precedence() -> None:
    policy = SizePolicy(upper_limit=10, lower_limit=20)
    failed = _check({}, {"odd.js": {"size": 15}}, policy)
    assert [f.file_name for f in failed.above_average_files] == ["odd.js"]
    assert failed.below_average_files == []


def test_removed_and_same_files_are_not_checked() -> None:
    baseline = {"gone.js": {"size": 1}, "steady.js": {"size": 900}}
    current = {"steady.js": {"size": 901}}
    failed = _check(baseline, current)
    assert failed.passed


def test_changed_files_use_current_size() -> None:
    baseline = {"grown.js": {"size": 200}}
    current = {"grown.js": {"size": 260}}
    failed = _check(baseline, current)
    assert failed.above_average_files == [FailedFile("grown.js", 260)]


def test_extract_checked_sizes() -> None:
    diff = compare_stats(
        {"a.js": {"size": 100}, "b.js": {"size": 100}, "r.js": {"size": 3}},
        {"a.js": {"size": 150}, "b.js": {"size": 101}, "n.js": {"size": 7}},
    )
    assert extract_checked_sizes(diff) == {"n.js": 7, "a.js": 150}


def test_failed_files_to_dict() -> None:
    failed = FailedFiles(above_average_files=[FailedFile("c.js", 300)])
    assert failed.to_dict() == {
        "aboveAverageFiles": [{"fileName": "c.js", "fileSize": 300}],
        "belowAverageFiles": [],
    }
