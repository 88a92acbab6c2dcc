# Readers for the JSON snapshots the build scanner and Lighthouse runner
# leave behind:
#
#   chunks: a JSON array of chunk objects
#           ({"id", "name", "size", "files", "modules"?, "moduleSizes"?}).
#   runs: a JSON object mapping URL to an array of run objects
#           ({"score"?, "lcp"?, "inp"?, "cls"?, "tbt"?, "fcp"?}).

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from result import Err, Ok, Result

from vantage.models.bundle import Chunk
from vantage.models.runtime import LighthouseRun


def _read_json(path: Path) -> Result[Any, str]:
    try:
        return Ok(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError) as exc:
        return Err(f"Failed reading {path}: {exc}.")


def load_chunks(path: Path) -> Result[list[Chunk], str]:
    payload = _read_json(path)
    if isinstance(payload, Err):
        return payload
    data = payload.ok_value
    if not isinstance(data, list):
        return Err(f"Chunk snapshot at {path} must be a JSON array.")
    try:
        return Ok([Chunk.from_dict(item) for item in data])
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        return Err(f"Malformed chunk in {path}: {exc!r}.")


def load_runs(path: Path) -> Result[dict[str, list[LighthouseRun]], str]:
    payload = _read_json(path)
    if isinstance(payload, Err):
        return payload
    data = payload.ok_value
    if not isinstance(data, dict):
        return Err(f"Run snapshot at {path} must be a JSON object.")
    try:
        return Ok({str(url): [LighthouseRun.from_dict(str(url), run) for run in runs] for url, runs in data.items()})
    except (TypeError, ValueError, AttributeError) as exc:
        return Err(f"Malformed run in {path}: {exc!r}.")
