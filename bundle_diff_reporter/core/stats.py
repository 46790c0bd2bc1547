"""Bundle stats extraction.

Scans a build folder for top-level ``.js`` files, strips build hashes from
their names so the same bundle can be matched across two builds, and records
each file's size in KB.
"""

from __future__ import annotations

import json
import logging
import math
import re
from pathlib import Path
from typing import cast

from bundle_diff_reporter.core.errors import MalformedStats, MissingInputFile, UnreadableDirectory
from bundle_diff_reporter.core.schemas import validate_file

logger = logging.getLogger("bundle_diff_reporter.stats")

BundleEntry = dict[str, float]
BundleMap = dict[str, BundleEntry]

# Applied in order; each one independently.
_HASH_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\.[0-9a-f]{8,}\.js$", re.IGNORECASE), ".js"),  # content hash
    (re.compile(r"-[0-9a-f]{10,}\.js$", re.IGNORECASE), ".js"),  # chunk hash
    (re.compile(r"\.chunk\.js$", re.IGNORECASE), ".js"),
)


def normalize_name(filename: str) -> str:
    """Return the canonical name of a built JS file.

    The three patterns are applied in order and the pass is repeated until the
    name stops changing, so ``main.<hash>.chunk.js`` loses both suffixes and
    a canonical name always maps to itself.

    >>> normalize_name("main.3f2a9c1d.chunk.js")
    'main.js'
    >>> normalize_name("vendors-0123456789ab.js")
    'vendors.js'
    """
    name = filename
    while True:
        stripped = name
        for pattern, repl in _HASH_PATTERNS:
            stripped = pattern.sub(repl, stripped, count=1)
        if stripped == name:
            return name
        name = stripped


def size_kb(num_bytes: int) -> float:
    """Bytes → KB rounded to 2 decimals."""
    return round(num_bytes / 1024, 2)


def sort_by_size(stats: BundleMap) -> BundleMap:
    """Return a copy of *stats* ordered by descending size (stable on ties)."""
    return dict(sorted(stats.items(), key=lambda kv: kv[1]["size"], reverse=True))


def collect_bundle_stats(build_dir: str | Path) -> BundleMap:
    """Build a name→size mapping for the top-level ``.js`` files of *build_dir*.

    Subdirectories are not scanned.  Files are visited in sorted order, so when
    two files normalize to the same canonical name the lexicographically later
    one wins; every such collision is logged.

    Raises:
        UnreadableDirectory: If *build_dir* is missing or cannot be listed.
    """
    root = Path(build_dir)
    if not root.is_dir():
        logger.debug("Build folder %s does not exist", root)
        raise UnreadableDirectory(f"Build folder not found: {root}", root)

    result: BundleMap = {}
    sources: dict[str, str] = {}
    try:
        for entry in sorted(root.iterdir(), key=lambda p: p.name):
            if entry.suffix != ".js" or not entry.is_file():
                continue
            name = normalize_name(entry.name)
            if name in sources:
                logger.warning(
                    "Files %s and %s both normalize to %s; keeping %s",
                    sources[name], entry.name, name, entry.name,
                )
            sources[name] = entry.name
            result[name] = {"size": size_kb(entry.stat().st_size)}
    except OSError as exc:
        logger.debug("Error reading build folder %s: %s", root, exc)
        raise UnreadableDirectory(f"Cannot read build folder {root}: {exc}", root) from exc

    logger.debug("Collected %d bundle(s) from %s", len(result), root)
    return sort_by_size(result)


def _reject_constant(token: str) -> float:
    raise ValueError(f"{token} is not valid JSON")


def read_stats_json(path: Path) -> object:
    """Parse strict JSON: ``NaN``/``Infinity`` tokens and non-UTF-8 bytes are errors.

    Raises:
        ValueError: On any decoding or parse failure.
        OSError: If the file cannot be read.
    """
    return json.loads(path.read_text(encoding="utf-8"), parse_constant=_reject_constant)


def parse_bundle_stats(data: object, source: str = "<stats>") -> BundleMap:
    """Check that *data* has the stats shape and return it as a BundleMap.

    Sizes must be finite; ``nan`` and ``inf`` slip past a numeric schema.
    """
    errors = validate_file("bundle_stats", data)
    if errors:
        summary = "; ".join(errors[:5])
        raise MalformedStats(f"Invalid bundle stats in {source}: {summary}", source)
    stats = cast(dict[str, dict[str, float]], data)
    bad = [name for name, entry in stats.items() if not math.isfinite(entry["size"])]
    if bad:
        raise MalformedStats(f"Invalid bundle stats in {source}: non-finite size for {', '.join(bad)}", source)
    return {name: {"size": float(entry["size"])} for name, entry in stats.items()}


def load_bundle_stats(path: str | Path) -> BundleMap:
    """Read and validate a stats JSON file.

    Raises:
        MissingInputFile: If *path* does not exist.
        MalformedStats: If the file is not UTF-8 JSON or not a name→``{"size"}`` mapping.
    """
    p = Path(path)
    if not p.exists():
        raise MissingInputFile(f"{p.name} bundle stats file not found at: {p}", p)

    try:
        data = read_stats_json(p)
    except ValueError as exc:
        logger.debug("Error reading JSON file (%s): %s", p, exc)
        raise MalformedStats(f"Invalid JSON in {p}: {exc}", p) from exc
    except OSError as exc:
        logger.debug("Error reading JSON file (%s): %s", p, exc)
        raise MissingInputFile(f"Cannot read {p}: {exc}", p) from exc

    return parse_bundle_stats(data, str(p))
