from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from vantage.models.enums import RuntimeMetric
from vantage.models.threshold import ThresholdResult


def _optional_float(value: Any) -> float | None:
    return float(value) if value is not None else None


@dataclass(slots=True, frozen=True)
class LighthouseRun:
    """One Lighthouse measurement of a URL.

    Metrics are ``None`` when Lighthouse did not report them (INP on a page
    with no interaction, for example).
    """

    url: str
    score: float | None = None
    lcp: float | None = None
    inp: float | None = None
    cls: float | None = None
    tbt: float | None = None
    fcp: float | None = None

    def metric(self, metric: RuntimeMetric) -> float | None:
        return getattr(self, metric.value)

    @classmethod
    def from_dict(cls, url: str, payload: dict[str, Any]) -> LighthouseRun:
        return cls(
            url=url,
            score=_optional_float(payload.get("score")),
            **{m.value: _optional_float(payload.get(m.value)) for m in RuntimeMetric},
        )


@dataclass(slots=True, frozen=True)
class RuntimeSummary:
    url: str
    runs: int
    score: float | None = None
    lcp: float | None = None
    inp: float | None = None
    cls: float | None = None
    tbt: float | None = None
    fcp: float | None = None

    @property
    def route(self) -> str:
        return urlsplit(self.url).path or "/"

    def metric(self, metric: RuntimeMetric) -> float | None:
        return getattr(self, metric.value)


@dataclass(slots=True, frozen=True)
class MetricCheck:
    route: str
    metric: RuntimeMetric
    value: float
    result: ThresholdResult
