from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from fnmatch import fnmatch

from vantage.config.schema import BundleConfig
from vantage.models.bundle import BudgetResult, BundleAnalysis, BundleDiff, Chunk
from vantage.models.enums import ThresholdStatus
from vantage.models.threshold import ThresholdResult
from vantage.services.analyzer import BundleAnalyzer
from vantage.services.threshold import compare_bundle_size


@dataclass(slots=True, frozen=True)
class BundleCheckReport:
    analysis: BundleAnalysis
    budgets: list[BudgetResult]
    diff: BundleDiff | None = None
    size_result: ThresholdResult | None = None

    @property
    def results(self) -> list[ThresholdResult]:
        results = [_budget_result(budget) for budget in self.budgets]
        if self.size_result is not None:
            results.append(self.size_result)
        return results

    @property
    def passed(self) -> bool:
        return all(result.status != ThresholdStatus.FAIL for result in self.results)


def _budget_result(budget: BudgetResult) -> ThresholdResult:
    delta = budget.current_size - budget.max_size
    if not budget.exceeds:
        return ThresholdResult.ok(delta)
    return ThresholdResult(
        passed=False,
        delta=delta,
        status=ThresholdStatus.FAIL,
        message=f"Budget {budget.path!r} exceeded by {delta} bytes",
    )


def filter_ignored(chunks: Sequence[Chunk], patterns: Sequence[str]) -> list[Chunk]:
    if not patterns:
        return list(chunks)
    return [chunk for chunk in chunks if not any(fnmatch(chunk.name, pattern) for pattern in patterns)]


def run_bundle_check(
    chunks: Sequence[Chunk],
    config: BundleConfig,
    previous: Sequence[Chunk] | None = None,
    analyzer: BundleAnalyzer | None = None,
) -> BundleCheckReport:
    """Analyze *chunks*, check budgets and, given a previous build, classify the size change.

    Chunks matching an ``ignore`` glob are dropped from both builds first.
    """
    analyzer = analyzer or BundleAnalyzer()
    current = filter_ignored(chunks, config.ignore)

    analysis = analyzer.analyze_chunks(current)
    budgets = analyzer.check_budget(current, config.budgets)

    if previous is None:
        return BundleCheckReport(analysis=analysis, budgets=budgets)

    before = filter_ignored(previous, config.ignore)
    diff = analyzer.compare_bundles(current, before)
    size_result = compare_bundle_size(
        analysis.total_size,
        sum(chunk.size for chunk in before),
        config.thresholds.regression,
        config.thresholds.warning,
    )
    return BundleCheckReport(analysis=analysis, budgets=budgets, diff=diff, size_result=size_result)
