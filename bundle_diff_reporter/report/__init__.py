"""Report rendering."""

from __future__ import annotations

__all__ = ["render_markdown"]

from bundle_diff_reporter.report.markdown import render_markdown
