from __future__ import annotations

import json
from pathlib import Path

from result import Err, Ok, Result

from vantage.config.defaults import default_config
from vantage.config.schema import VantageConfig
from vantage.errors import ConfigError

CONFIG_FILE = ".vantage.json"


def load_config(path: Path | None = None) -> Result[VantageConfig, str]:
    resolved = path or Path.cwd() / CONFIG_FILE
    if not resolved.exists():
        return Ok(default_config())

    try:
        payload = json.loads(resolved.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        return Err(f"Failed reading config at {resolved}: {exc}.")

    if not isinstance(payload, dict):
        return Err(f"Config at {resolved} must be a JSON object.")

    try:
        return Ok(VantageConfig.from_dict(payload))
    except ConfigError as exc:
        return Err(f"Invalid config at {resolved}: {exc}.")


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
