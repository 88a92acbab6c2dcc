from __future__ import annotations

from collections.abc import Iterable, Sequence

from vantage.config.schema import RuntimeThresholds
from vantage.models.enums import RuntimeMetric
from vantage.models.runtime import LighthouseRun, MetricCheck, RuntimeSummary
from vantage.services.threshold import compare_runtime_metric


def median(values: Iterable[float | None]) -> float | None:
    """Upper median of the present values; ``None`` when none are present.

    Absent measurements are dropped, never replaced by a placeholder.
    """
    present = sorted(value for value in values if value is not None)
    if not present:
        return None
    return present[len(present) // 2]


def summarize_runs(runs: Sequence[LighthouseRun]) -> RuntimeSummary:
    """Collapse repeated Lighthouse runs of one URL into per-metric medians."""
    if not runs:
        raise ValueError("summarize_runs needs at least one run")
    return RuntimeSummary(
        url=runs[0].url,
        runs=len(runs),
        score=median(run.score for run in runs),
        **{metric.value: median(run.metric(metric) for run in runs) for metric in RuntimeMetric},
    )


def evaluate_runtime(summaries: Iterable[RuntimeSummary], thresholds: RuntimeThresholds) -> list[MetricCheck]:
    checks: list[MetricCheck] = []
    metrics = thresholds.configured()
    for summary in summaries:
        for metric in metrics:
            value = summary.metric(metric)
            if value is None:
                continue
            checks.append(
                MetricCheck(
                    route=summary.route,
                    metric=metric,
                    value=value,
                    result=compare_runtime_metric(value, thresholds, metric),
                )
            )
    return checks
