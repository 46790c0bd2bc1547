"""JSON Schema definitions for bundle stats files, diff output and config.

Each schema is a Python dict following JSON Schema Draft 2020-12.
``validate_file`` checks a loaded document against one of them by name.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

# ======================================================================
# Schemas
# ======================================================================

BUNDLE_STATS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Bundle Stats",
    "description": "Canonical JS filename mapped to its size in KB.",
    "type": "object",
    "additionalProperties": {
        "type": "object",
        "required": ["size"],
        "properties": {
            "size": {"type": "number", "minimum": 0},
        },
        "additionalProperties": True,
    },
}

_SIZE_ENTRY: dict[str, Any] = {
    "type": "object",
    "required": ["size"],
    "properties": {"size": {"type": "number"}},
}

_FAILED_FILE: dict[str, Any] = {
    "type": "object",
    "required": ["fileName", "fileSize"],
    "properties": {
        "fileName": {"type": "string"},
        "fileSize": {"type": "number"},
    },
}

BUNDLE_DIFF_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Bundle Diff",
    "type": "object",
    "required": ["added", "removed", "changed", "same", "summary"],
    "properties": {
        "added": {"type": "object", "additionalProperties": _SIZE_ENTRY},
        "removed": {"type": "object", "additionalProperties": _SIZE_ENTRY},
        "changed": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["current", "master", "difference"],
                "properties": {
                    "current": {"type": "number"},
                    "master": {"type": "number"},
                    "difference": {"type": "number"},
                },
            },
        },
        "same": {"type": "object", "additionalProperties": {"type": "number"}},
        "summary": {
            "type": "object",
            "required": [
                "totalAdded",
                "totalRemoved",
                "sizeIncrease",
                "sizeDecrease",
                "countChanged",
            ],
            "properties": {
                "totalAdded": {"type": "number"},
                "totalRemoved": {"type": "number"},
                "sizeIncrease": {"type": "number", "minimum": 0},
                "sizeDecrease": {"type": "number", "minimum": 0},
                "countChanged": {"type": "integer", "minimum": 0},
            },
        },
    },
}

FAILED_FILES_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Failed Files",
    "type": "object",
    "required": ["aboveAverageFiles", "belowAverageFiles"],
    "properties": {
        "aboveAverageFiles": {"type": "array", "items": _FAILED_FILE},
        "belowAverageFiles": {"type": "array", "items": _FAILED_FILE},
    },
}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Bundle Diff Reporter Config",
    "type": "object",
    "properties": {
        "root": {"type": "string"},
        "build_folder": {"type": "string"},
        "output_folder": {"type": "string"},
        "master_file": {"type": "string"},
        "current_file": {"type": "string"},
        "output_file": {"type": "string"},
        "failure_file": {"type": "string"},
        "change_threshold": {"type": "number", "minimum": 0},
        "splitting_upper_limit": {"type": "number", "minimum": 0},
        "splitting_lower_limit": {"type": "number", "minimum": 0},
        "above_average_files": {"type": "array", "items": {"type": "string"}},
        "below_average_files": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}

SCHEMAS: dict[str, dict[str, Any]] = {
    "bundle_stats": BUNDLE_STATS_SCHEMA,
    "bundle_diff": BUNDLE_DIFF_SCHEMA,
    "failed_files": FAILED_FILES_SCHEMA,
    "config": CONFIG_SCHEMA,
}


# ======================================================================
# Validation
# ======================================================================


def validate_file(schema_name: str, data: Any) -> list[str]:
    """Validate *data* against the named schema. Returns list of error messages."""
    schema = SCHEMAS.get(schema_name)
    if schema is None:
        return [f"Unknown schema: {schema_name}"]

    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))

    msgs: list[str] = []
    for err in errors:
        path = ".".join(str(p) for p in err.absolute_path) or "(root)"
        msgs.append(f"[{path}] {err.message}")
    return msgs


def export_schemas(out_dir: str | Path) -> None:
    """Write all JSON schemas as standalone files."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    for name, schema in SCHEMAS.items():
        (out / f"{name}.schema.json").write_text(
            json.dumps(schema, indent=2) + "\n", encoding="utf-8"
        )
