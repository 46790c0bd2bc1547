"""End-to-end tests for stats extraction and report generation."""

from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from bundle_diff_reporter import ReporterConfig, generate_bundle_stats, generate_report
from bundle_diff_reporter.api import compare_bundle_stats
from bundle_diff_reporter.core.artifacts import FAILURE_MARKER_TEXT
from bundle_diff_reporter.core.errors import MalformedStats, MissingInputFile, UnreadableDirectory, WriteFailure
from bundle_diff_reporter.core.schemas import BUNDLE_DIFF_SCHEMA, FAILED_FILES_SCHEMA


def _make_build(root: Path, files: dict[str, int]) -> None:
    dist = root / "dist"
    dist.mkdir(parents=True, exist_ok=True)
    for name, kb in files.items():
        (dist / name).write_bytes(b"x" * (kb * 1024))


def _write_master(root: Path, stats: dict[str, dict[str, float]]) -> Path:
    out = root / "bundle-analyzer"
    out.mkdir(parents=True, exist_ok=True)
    p = out / "master-bundle-stats.json"
    p.write_text(json.dumps(stats), encoding="utf-8")
    return p


def test_generate_bundle_stats_writes_sorted_json(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.3f2a9c1d.js": 40, "vendors-0123456789ab.js": 120, "page.chunk.js": 25})
    cfg = ReporterConfig(root=str(tmp_path))

    path = generate_bundle_stats(cfg)

    assert path == tmp_path / "bundle-analyzer" / "current-bundle-stats.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"vendors.js": {"size": 120.0}, "main.js": {"size": 40.0}, "page.js": {"size": 25.0}}
    assert list(data) == ["vendors.js", "main.js", "page.js"]


def test_generate_bundle_stats_missing_build_folder(tmp_path: Path) -> None:
    with pytest.raises(UnreadableDirectory):
        generate_bundle_stats(ReporterConfig(root=str(tmp_path)))


def test_generate_bundle_stats_unwritable_output(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.js": 40})
    (tmp_path / "blocked").write_text("not a folder", encoding="utf-8")
    with pytest.raises(WriteFailure):
        generate_bundle_stats(ReporterConfig(root=str(tmp_path), output_folder="blocked"))


def test_report_passing_run(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.3f2a9c1d.js": 40, "vendors-0123456789ab.js": 120})
    _write_master(tmp_path, {"main.js": {"size": 40}, "vendors.js": {"size": 100}})
    cfg = ReporterConfig(root=str(tmp_path))

    generate_bundle_stats(cfg)
    result = generate_report(cfg)

    assert result.success
    assert result.failure_path is None
    assert not (tmp_path / "bundle-analyzer" / "bundle-diff-stage-failed.txt").exists()
    assert result.diff.changed["vendors.js"]["difference"] == 20
    assert result.diff.same == {"main.js": 40.0}
    assert result.report_path.read_text(encoding="utf-8") == result.markdown
    assert "Congrats!" in result.markdown


def test_report_failing_run_writes_marker(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.js": 40, "huge-0123456789ab.js": 300, "tiny.js": 2})
    _write_master(tmp_path, {"main.js": {"size": 40}})
    cfg = ReporterConfig(root=str(tmp_path))

    generate_bundle_stats(cfg)
    result = generate_report(cfg)

    assert not result.success
    marker = tmp_path / "bundle-analyzer" / "bundle-diff-stage-failed.txt"
    assert result.failure_path == marker
    assert marker.read_text(encoding="utf-8") == FAILURE_MARKER_TEXT
    assert [f.file_name for f in result.failed_files.above_average_files] == ["huge.js"]
    assert [f.file_name for f in result.failed_files.below_average_files] == ["tiny.js"]
    assert (tmp_path / "bundle-analyzer" / "bundle-size-report.md").exists()


def test_report_allowlists_from_config(tmp_path: Path) -> None:
    _make_build(tmp_path, {"huge.js": 300, "tiny.js": 2})
    _write_master(tmp_path, {})
    cfg = ReporterConfig(
        root=str(tmp_path),
        above_average_files=frozenset({"huge.js"}),
        below_average_files=frozenset({"tiny.js"}),
    )

    generate_bundle_stats(cfg)
    assert generate_report(cfg).success


def test_passing_run_clears_stale_marker(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.js": 40})
    _write_master(tmp_path, {"main.js": {"size": 40}})
    marker = tmp_path / "bundle-analyzer" / "bundle-diff-stage-failed.txt"
    marker.write_text(FAILURE_MARKER_TEXT, encoding="utf-8")
    cfg = ReporterConfig(root=str(tmp_path))

    generate_bundle_stats(cfg)
    result = generate_report(cfg)

    assert result.success
    assert not marker.exists()


def test_report_missing_master(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.js": 40})
    cfg = ReporterConfig(root=str(tmp_path))
    generate_bundle_stats(cfg)

    with pytest.raises(MissingInputFile):
        generate_report(cfg)
    assert not (tmp_path / "bundle-analyzer" / "bundle-size-report.md").exists()


def test_report_missing_current(tmp_path: Path) -> None:
    _write_master(tmp_path, {"main.js": {"size": 40}})
    with pytest.raises(MissingInputFile):
        compare_bundle_stats(ReporterConfig(root=str(tmp_path)))


def test_report_malformed_master(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.js": 40})
    master = _write_master(tmp_path, {})
    master.write_text("{oops", encoding="utf-8")
    cfg = ReporterConfig(root=str(tmp_path))
    generate_bundle_stats(cfg)

    with pytest.raises(MalformedStats):
        generate_report(cfg)


def test_report_non_finite_master_size(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.js": 40})
    master = _write_master(tmp_path, {})
    master.write_text('{"main.js": {"size": NaN}}', encoding="utf-8")
    cfg = ReporterConfig(root=str(tmp_path))
    generate_bundle_stats(cfg)

    with pytest.raises(MalformedStats):
        generate_report(cfg)
    assert not (tmp_path / "bundle-analyzer" / "bundle-size-report.md").exists()


def test_result_to_dict_matches_schemas(tmp_path: Path) -> None:
    _make_build(tmp_path, {"main.js": 60, "new.js": 300})
    _write_master(tmp_path, {"main.js": {"size": 40}, "old.js": {"size": 10}})
    cfg = ReporterConfig(root=str(tmp_path))

    generate_bundle_stats(cfg)
    d = generate_report(cfg).to_dict()

    jsonschema.validate(instance=d["diff"], schema=BUNDLE_DIFF_SCHEMA)
    jsonschema.validate(instance=d["failedFiles"], schema=FAILED_FILES_SCHEMA)
    assert d["success"] is False
    assert d["failurePath"].endswith("bundle-diff-stage-failed.txt")
