# Pass/warn/fail classification.
#
# Bundle sizes are compared relative to the previous build and have a warn
# tier between the warning and regression percentages.  Runtime metrics are
# compared against absolute limits and are strictly pass/fail.

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from vantage.config.schema import RuntimeThresholds
from vantage.models.enums import RuntimeMetric, ThresholdStatus
from vantage.models.threshold import ThresholdResult
from vantage.services.formatting import format_metric

BASELINE_MESSAGE = "No previous bundle data for comparison (baseline measurement)"


def _num(value: float) -> str:
    return f"{value:g}"


def compare_bundle_size(
    current: float,
    previous: float,
    regression_threshold: float,
    warning_threshold: float,
) -> ThresholdResult:
    delta = current - previous

    # No prior data is a baseline, not an infinite regression.
    if previous == 0:
        return ThresholdResult.ok(delta, BASELINE_MESSAGE)

    percent = delta * 100 / previous

    if percent <= warning_threshold:
        return ThresholdResult.ok(delta)

    if percent <= regression_threshold:
        return ThresholdResult(
            passed=True,
            delta=delta,
            status=ThresholdStatus.WARN,
            message=f"Bundle size increased by {percent:.1f}% (warning threshold: {_num(warning_threshold)}%)",
        )

    return ThresholdResult(
        passed=False,
        delta=delta,
        status=ThresholdStatus.FAIL,
        message=f"Bundle size increased by {percent:.1f}% (exceeds regression threshold: {_num(regression_threshold)}%)",
    )


def compare_runtime_metric(
    current: float,
    thresholds: RuntimeThresholds | Mapping[str, float | None],
    metric: RuntimeMetric | str,
) -> ThresholdResult:
    metric = RuntimeMetric(metric)
    limit = thresholds.get(metric.value)
    if not limit:
        return ThresholdResult.ok(0)

    delta = current - limit
    if current <= limit:
        return ThresholdResult.ok(delta)

    percent_over = delta * 100 / limit
    return ThresholdResult(
        passed=False,
        delta=delta,
        status=ThresholdStatus.FAIL,
        message=(
            f"{metric.label} is {format_metric(current, metric)}, exceeding threshold of "
            f"{_num(limit)}{metric.unit} by {percent_over:.1f}%"
        ),
    )


def calculate_score(results: Sequence[ThresholdResult]) -> int:
    """Percentage of passed results, 0..100.

    An empty list scores 100: nothing was checked, so nothing failed.
    """
    if not results:
        return 100
    passed = sum(1 for result in results if result.passed)
    return math.floor(100 * passed / len(results) + 0.5)


def should_block_pr(results: Sequence[ThresholdResult]) -> bool:
    return any(result.status == ThresholdStatus.FAIL for result in results)


def should_warn(results: Sequence[ThresholdResult]) -> bool:
    return any(result.status in (ThresholdStatus.WARN, ThresholdStatus.FAIL) for result in results)
