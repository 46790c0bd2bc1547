"""Bundle Diff Reporter end-to-end example: a CI-style run.

Builds two fake ``dist`` folders (baseline and branch), extracts stats for
both, and writes the size report plus the failure marker.
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path


def _fake_build(dist: Path, files: dict[str, int]) -> None:
    dist.mkdir(parents=True, exist_ok=True)
    for old in dist.iterdir():
        old.unlink()
    for name, kb in files.items():
        (dist / name).write_bytes(b"/* js */" * (kb * 128))


def main() -> None:
    from bundle_diff_reporter import ReporterConfig, generate_bundle_stats, generate_report

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)

        # 1. Baseline build, saved as the master stats
        _fake_build(root / "dist", {
            "main.3f2a9c1d.js": 180,
            "vendors-0123456789ab.js": 240,
            "settings.chunk.js": 30,
        })
        generate_bundle_stats(ReporterConfig(root=str(root), current_file="master-bundle-stats.json"))

        # 2. Branch build
        _fake_build(root / "dist", {
            "main.9b8c7d6e.js": 195,
            "vendors-fedcba987654.js": 260,
            "chart-resolver.aabbccdd.js": 4,
            "tooltip.chunk.js": 6,
        })
        cfg = ReporterConfig(root=str(root), change_threshold=5)
        generate_bundle_stats(cfg)

        # 3. Compare and report
        result = generate_report(cfg)

        print("=== Bundle Diff Reporter Demo ===")
        print(result.markdown)
        print(f"Report: {result.report_path}")
        if not result.success:
            print(f"Failure marker written to {result.failure_path}")
            sys.exit(1)


if __name__ == "__main__":
    main()
