"""Output store: writes stats files, the report and the failure marker consistently."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from bundle_diff_reporter.core.errors import WriteFailure

logger = logging.getLogger("bundle_diff_reporter")

FAILURE_MARKER_TEXT = "🔴 Failed to pass bundle size check"


class OutputStore:
    """Manages writing files into the reporter's output folder.

    The folder is created on construction so every later write only has to
    deal with the file itself.
    """

    def __init__(self, output_dir: str | Path) -> None:
        self.root = Path(output_dir)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.debug("Error creating output folder %s: %s", self.root, exc)
            raise WriteFailure(f"Cannot create output folder {self.root}: {exc}", self.root) from exc

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def write_json(self, name: str, data: Any) -> Path:
        """Write a JSON file into the output folder."""
        return self.write_text(name, json.dumps(data, indent=2, ensure_ascii=False) + "\n")

    def write_text(self, name: str, text: str) -> Path:
        """Write a plain-text file into the output folder."""
        p = self.root / name
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.debug("Error writing %s: %s", p, exc)
            raise WriteFailure(f"Cannot write {p}: {exc}", p) from exc
        return p

    # ------------------------------------------------------------------
    # Reporter standard files
    # ------------------------------------------------------------------

    def write_stats(self, name: str, stats: dict[str, dict[str, float]]) -> Path:
        return self.write_json(name, stats)

    def write_report(self, name: str, md: str) -> Path:
        return self.write_text(name, md)

    def write_failure_marker(self, name: str) -> Path:
        return self.write_text(name, FAILURE_MARKER_TEXT)

    def clear_failure_marker(self, name: str) -> bool:
        """Remove a marker left over from an earlier failing run.

        Returns ``True`` when a stale marker was deleted.
        """
        p = self.root / name
        if not p.exists():
            return False
        try:
            p.unlink()
        except OSError as exc:
            logger.debug("Error removing stale failure marker %s: %s", p, exc)
            raise WriteFailure(f"Cannot remove {p}: {exc}", p) from exc
        logger.debug("Removed stale failure marker %s", p)
        return True
