from __future__ import annotations

from vantage.models.enums import RuntimeMetric, ThresholdStatus

_UNITS = ("B", "KB", "MB", "GB", "TB")

_STATUS_ICONS: dict[ThresholdStatus, str] = {
    ThresholdStatus.PASS: "✅",
    ThresholdStatus.WARN: "⚠️",
    ThresholdStatus.FAIL: "❌",
}


def format_bytes(size: float) -> str:
    value = float(size)
    for unit in _UNITS:
        if abs(value) < 1024 or unit == _UNITS[-1]:
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.1f} {unit}"
        value /= 1024
    raise AssertionError("unreachable")


def format_signed_bytes(delta: float) -> str:
    if delta > 0:
        return f"+{format_bytes(delta)}"
    if delta < 0:
        return f"-{format_bytes(-delta)}"
    return format_bytes(0)


def format_delta(delta: float) -> str:
    if delta > 0:
        return f"+{delta:.2f}"
    if delta < 0:
        return f"{delta:.2f}"
    return "0.00"


def status_icon(status: ThresholdStatus) -> str:
    return _STATUS_ICONS[ThresholdStatus(status)]


def format_metric(value: float, metric: RuntimeMetric) -> str:
    if metric is RuntimeMetric.CLS:
        return f"{value:.3f}"
    return f"{value:.0f}{metric.unit}"
