"""Machine-readable bundle diff: baseline vs current stats, bucketed by change."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from bundle_diff_reporter.core.stats import BundleEntry, BundleMap


@dataclass
class DiffSummary:
    """Aggregate sizes of a diff, in KB rounded to 2 decimals."""

    total_added: float = 0.0
    total_removed: float = 0.0
    size_increase: float = 0.0
    size_decrease: float = 0.0
    count_changed: int = 0

    @property
    def net_change(self) -> float:
        return round(self.size_increase - self.size_decrease, 2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalAdded": self.total_added,
            "totalRemoved": self.total_removed,
            "sizeIncrease": self.size_increase,
            "sizeDecrease": self.size_decrease,
            "countChanged": self.count_changed,
        }


@dataclass
class DiffResult:
    """Every canonical name of either build lands in exactly one bucket.

    Attributes:
        added: Files only in the current build, ``{name: {"size": kb}}``.
        removed: Files only in the baseline, ``{name: {"size": kb}}``.
        changed: Files whose size moved by at least the change threshold,
            ``{name: {"current", "master", "difference"}}`` ordered by
            descending ``difference``.
        same: Files below the threshold, ``{name: current_kb}``.
        summary: Aggregates, see :class:`DiffSummary`.
    """

    added: dict[str, BundleEntry] = field(default_factory=dict)
    removed: dict[str, BundleEntry] = field(default_factory=dict)
    changed: dict[str, dict[str, float]] = field(default_factory=dict)
    same: dict[str, float] = field(default_factory=dict)
    summary: DiffSummary = field(default_factory=DiffSummary)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "added": self.added,
            "removed": self.removed,
            "changed": self.changed,
            "same": self.same,
            "summary": self.summary.to_dict(),
        }


def percent_change(master: float, current: float) -> float:
    """Absolute percentage change from *master* to *current*.

    A zero baseline has no meaningful ratio: it yields ``0.0`` when the file
    is still empty and ``math.inf`` otherwise, so any growth from nothing
    always counts as a change.
    """
    if master == 0:
        return 0.0 if current == 0 else math.inf
    return abs((current - master) / master * 100)


def compare_stats(
    baseline: BundleMap,
    current: BundleMap,
    change_threshold: float = 5,
) -> DiffResult:
    """Classify every file of *baseline* and *current*.

    Parameters:
        baseline: Stats of the reference build (e.g. ``master``).
        current: Stats of the build under review.
        change_threshold: Minimum absolute percentage change for a matched
            file to count as changed.  The boundary is inclusive.

    Returns:
        The populated :class:`DiffResult`.
    """
    diff = DiffResult()
    total_added = 0.0
    total_removed = 0.0
    size_increase = 0.0
    size_decrease = 0.0

    for name, entry in current.items():
        if name not in baseline:
            diff.added[name] = {"size": entry["size"]}
            total_added += entry["size"]
            continue

        cur = entry["size"]
        master = baseline[name]["size"]
        size_diff = cur - master
        if percent_change(master, cur) >= change_threshold:
            diff.changed[name] = {
                "current": cur,
                "master": master,
                "difference": round(size_diff, 2),
            }
            if size_diff > 0:
                size_increase += size_diff
            else:
                size_decrease += abs(size_diff)
        else:
            diff.same[name] = cur

    for name, entry in baseline.items():
        if name not in current:
            diff.removed[name] = {"size": entry["size"]}
            total_removed += entry["size"]

    diff.changed = dict(
        sorted(diff.changed.items(), key=lambda kv: kv[1]["difference"], reverse=True)
    )
    diff.summary = DiffSummary(
        total_added=round(total_added, 2),
        total_removed=round(total_removed, 2),
        size_increase=round(size_increase, 2),
        size_decrease=round(size_decrease, 2),
        count_changed=len(diff.changed),
    )
    return diff
