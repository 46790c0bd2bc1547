"""Fatal error kinds raised by the extractor, the loaders and the output store.

Size-budget failures are not errors: they are reported through
:class:`~bundle_diff_reporter.core.policy.FailedFiles` and the failure marker.
"""

from __future__ import annotations

from pathlib import Path


class BundleDiffError(Exception):
    """Base class for every fatal bundle-diff condition."""

    kind: str = "error"

    def __init__(self, msg: str, path: str | Path | None = None) -> None:
        super().__init__(msg)
        self.path = str(path) if path is not None else None

    def to_dict(self) -> dict[str, str | None]:
        return {"kind": self.kind, "path": self.path, "message": str(self)}


class MissingInputFile(BundleDiffError):
    """A baseline or current stats file does not exist."""

    kind = "missing_input_file"


class UnreadableDirectory(BundleDiffError):
    """The build folder is missing or cannot be listed."""

    kind = "unreadable_directory"


class MalformedStats(BundleDiffError):
    """A stats file is not valid JSON or does not match the name→size shape."""

    kind = "malformed_stats"


class WriteFailure(BundleDiffError):
    """The output folder or one of the output files cannot be written."""

    kind = "write_failure"


class ConfigError(BundleDiffError):
    """The ``[tool.bundle-diff-reporter]`` table is invalid."""

    kind = "config_error"
