"""Markdown size report.

The report is a pure function of the diff, the failed files and the config;
it is meant to be posted as a pull-request comment, so optional sections are
folded into ``<details>`` blocks and empty sections are left out.
"""

from __future__ import annotations

from bundle_diff_reporter.config import ReporterConfig
from bundle_diff_reporter.core.diff import DiffResult
from bundle_diff_reporter.core.policy import FailedFile, FailedFiles

HEADER = "## 📦 Bundle Size Comparison Report\n\n"
PASSED_BANNER = "### 🎉 Congrats! Bundle stage has been passed, Great job! 👏\n"
FAILED_BANNER = "### 🤯 Bundle stage has been failed, please check the report below to see the details.\n"

_DETAILS_OPEN = "<details>\n<summary><strong>{title}</strong></summary>\n\n"
_SIZE_TABLE_HEAD = "| File | Size (KB) |\n|------|-----------|\n"


def render_markdown(diff: DiffResult, failed: FailedFiles, config: ReporterConfig) -> str:
    """Render the full report."""
    parts = [
        HEADER,
        PASSED_BANNER if failed.passed else FAILED_BANNER,
        _DETAILS_OPEN.format(title="Read full report"),
        _summary_section(diff),
        _changed_section(diff),
        _failed_section("Above Average Files", config.splitting_upper_limit, failed.above_average_files),
        _failed_section("Below Average Files", config.splitting_lower_limit, failed.below_average_files),
        _added_section(diff),
        _removed_section(diff),
        "\n</details>\n\n",
        _notes_section(diff, config),
    ]
    return "".join(parts)


# ------------------------------------------------------------------
# Sections
# ------------------------------------------------------------------


def _summary_section(diff: DiffResult) -> str:
    s = diff.summary
    rows = [
        "### 📊 Summary",
        "| **Metric**               | **Value**         |",
        "|--------------------------|-------------------|",
        f"| 🚀 Files Added           | {len(diff.added)} (+{s.total_added:.2f} KB) |",
        f"| ❌ Files Removed         | {len(diff.removed)} (-{s.total_removed:.2f} KB) |",
        f"| 🔄 Files Changed         | {s.count_changed} files |",
        f"| 📈 Total Size Increase   | +{s.size_increase:.2f} KB |",
        f"| 📉 Total Size Decrease   | -{s.size_decrease:.2f} KB |",
        f"| 💰 Net Change            | {s.net_change:.2f} KB |",
    ]
    return "\n".join(rows) + "\n\n"


def _changed_section(diff: DiffResult) -> str:
    if not diff.changed:
        return ""
    md = _DETAILS_OPEN.format(title="🔄 Changed Files")
    md += "| File | Master (KB) | PR (KB) | Change | Change % |\n"
    md += "|------|-------------|---------|--------|----------|\n"
    for name, data in diff.changed.items():
        md += format_changed_row(name, data)
    md += "\n</details>\n\n"
    return md


def format_changed_row(name: str, data: dict[str, float]) -> str:
    change = data["difference"]
    arrow = "🔺" if change > 0 else "▼"
    sign = "+" if change > 0 else ""
    return (
        f"| `{name}` | {data['master']:.2f} | {data['current']:.2f} | "
        f"{sign}{change:.2f} KB {arrow} | {format_change_percent(data['master'], change)} |\n"
    )


def format_change_percent(master: float, change: float) -> str:
    """Signed percentage; ``n/a`` when the baseline was empty."""
    if master == 0:
        return "n/a" if change else "0.00%"
    return f"{change / master * 100:.2f}%"


def _failed_section(title: str, limit: float, files: list[FailedFile]) -> str:
    if not files:
        return ""
    md = f"### 🔴 {title}({limit:g}KB): {len(files)} files \n"
    md += _DETAILS_OPEN.format(title="details")
    md += _SIZE_TABLE_HEAD
    for f in files:
        md += f"| `{f.file_name}` | {f.file_size:.2f} |\n"
    md += "\n</details>\n\n"
    return md


def _added_section(diff: DiffResult) -> str:
    if not diff.added:
        return ""
    md = "### 🎉 New Files\n"
    md += _DETAILS_OPEN.format(title="details")
    md += _SIZE_TABLE_HEAD
    for name, entry in diff.added.items():
        md += f"| `{name}` | {entry['size']:.2f} |\n"
    md += "\n\n</details>\n\n"
    return md


def _removed_section(diff: DiffResult) -> str:
    if not diff.removed:
        return ""
    md = "### 🗑️ Removed Files\n"
    md += _DETAILS_OPEN.format(title="details")
    md += _SIZE_TABLE_HEAD
    for name, entry in diff.removed.items():
        md += f"| ~~{name}~~ | {entry['size']:.2f} |\n"
    md += "\n</details>\n\n"
    return md


def _notes_section(diff: DiffResult, config: ReporterConfig) -> str:
    md = ""
    if diff.changed:
        md += "> [!NOTE]\n"
        md += f"> We use a threshold of ±{config.change_threshold:g}% to determine if a change is significant.\n\n"
        md += "\n> [!IMPORTANT]\n"
        md += f"> Keep each chunk under {config.splitting_upper_limit:g}KB raw size to maintain optimal load.\n\n"
    if diff.added:
        md += "> [!IMPORTANT]\n"
        md += (
            f"> Split chunks should be larger than {config.splitting_lower_limit:g}KB; "
            "otherwise, it's recommended not to split them to avoid unnecessary overhead.\n"
        )
    return md
