"""Size-budget checks on new and changed bundles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bundle_diff_reporter.core.diff import DiffResult

#: Resolver chunks are small by construction and never flagged as too small.
RESOLVER_MARKER = "resolver"


@dataclass(frozen=True)
class SizePolicy:
    """Absolute size budgets, in KB.

    Attributes:
        upper_limit: Files strictly larger than this should be split.
        lower_limit: Split chunks strictly smaller than this are not worth it.
        above_allowlist: Names exempt from the upper limit.
        below_allowlist: Names exempt from the lower limit.
    """

    upper_limit: float = 250
    lower_limit: float = 20
    above_allowlist: frozenset[str] = field(default_factory=frozenset)
    below_allowlist: frozenset[str] = field(default_factory=frozenset)


@dataclass
class FailedFile:
    file_name: str
    file_size: float

    def to_dict(self) -> dict[str, Any]:
        return {"fileName": self.file_name, "fileSize": self.file_size}


@dataclass
class FailedFiles:
    """Files breaking a size budget; a file is in at most one list."""

    above_average_files: list[FailedFile] = field(default_factory=list)
    below_average_files: list[FailedFile] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """The verdict: no file breaks either budget."""
        return not self.above_average_files and not self.below_average_files

    def to_dict(self) -> dict[str, Any]:
        return {
            "aboveAverageFiles": [f.to_dict() for f in self.above_average_files],
            "belowAverageFiles": [f.to_dict() for f in self.below_average_files],
        }


def extract_checked_sizes(diff: DiffResult) -> dict[str, float]:
    """Current sizes of added and changed files; removed and same are never checked."""
    sizes = {name: entry["size"] for name, entry in diff.added.items()}
    sizes.update({name: entry["current"] for name, entry in diff.changed.items()})
    return sizes


def is_above_limit(file_name: str, file_size: float, policy: SizePolicy) -> bool:
    return file_size > policy.upper_limit and file_name not in policy.above_allowlist


def is_below_limit(file_name: str, file_size: float, policy: SizePolicy) -> bool:
    return (
        file_size < policy.lower_limit
        and file_name not in policy.below_allowlist
        and RESOLVER_MARKER not in file_name
    )


def check_file_sizes(diff: DiffResult, policy: SizePolicy) -> FailedFiles:
    """Apply *policy* to the added and changed files of *diff*.

    The upper limit is checked first; a file over it is not also checked
    against the lower limit.
    """
    failed = FailedFiles()
    for name, size in extract_checked_sizes(diff).items():
        if is_above_limit(name, size, policy):
            failed.above_average_files.append(FailedFile(name, size))
        elif is_below_limit(name, size, policy):
            failed.below_average_files.append(FailedFile(name, size))
    return failed
