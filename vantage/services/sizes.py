from __future__ import annotations

import math
import re

from vantage.services.reporter import DEFAULT_REPORTER, Reporter

_SIZE_RE = re.compile(r"^\s*(\d*\.?\d*)\s*(b|kb|mb|gb)?\s*$", re.IGNORECASE)

# Binary multipliers: "1kb" is 1024 bytes.
_UNITS: dict[str, int] = {
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
}


def parse_size(text: str, reporter: Reporter = DEFAULT_REPORTER) -> int:
    """Parse a human size such as ``"150kb"`` or ``"1.5 MB"`` into bytes.

    Malformed input yields 0 and a warning on *reporter*; this never raises.
    A budget whose max parses to 0 therefore exceeds for any non-empty match.
    """
    match = _SIZE_RE.match(text) if text else None
    if match is None:
        reporter.warn(f"Invalid size string {text!r}; treating as 0 bytes.")
        return 0

    number, unit = match.group(1), match.group(2)
    try:
        value = float(number)
    except ValueError:
        reporter.warn(f"Invalid size string {text!r}; treating as 0 bytes.")
        return 0

    size = value * _UNITS[(unit or "b").lower()]
    if not math.isfinite(size):
        reporter.warn(f"Size string {text!r} is too large; treating as 0 bytes.")
        return 0

    # Half-up rounding to whole bytes.
    return int(math.floor(size + 0.5))
