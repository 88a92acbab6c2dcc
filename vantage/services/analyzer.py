from __future__ import annotations

import re
from collections.abc import Sequence

from result import Err, Ok, Result

from vantage.config.schema import BundleBudget
from vantage.models.bundle import (
    BudgetResult,
    BundleAnalysis,
    BundleDiff,
    Chunk,
    ModifiedChunk,
    TreemapNode,
)
from vantage.models.enums import TreemapKind
from vantage.services.modules import (
    count_unique_modules,
    extract_module_info,
    find_dead_code,
    find_duplicates,
    largest_modules,
)
from vantage.services.reporter import DEFAULT_REPORTER, Reporter
from vantage.services.sizes import parse_size


def compile_budget_pattern(pattern: str) -> Result[re.Pattern[str], str]:
    """Compile a budget path pattern, returning the compile error as ``Err``."""
    try:
        return Ok(re.compile(pattern))
    except re.error as exc:
        return Err(f"Invalid budget pattern {pattern!r}: {exc}")


class BundleAnalyzer:
    """Analysis, diffing and budget checks over chunk lists.

    Holds no state besides the reporter, so one instance can be shared.
    """

    def __init__(self, reporter: Reporter = DEFAULT_REPORTER) -> None:
        self._reporter = reporter

    def analyze_chunks(self, chunks: Sequence[Chunk]) -> BundleAnalysis:
        modules, duplicated = find_duplicates(extract_module_info(chunks))
        dead_code = find_dead_code(modules, chunks)

        return BundleAnalysis(
            total_size=sum(chunk.size for chunk in chunks),
            chunk_count=len(chunks),
            total_modules=count_unique_modules(chunks),
            duplicate_modules=len(duplicated),
            dead_code_modules=len(dead_code),
            largest_modules=largest_modules(modules),
            modules=modules,
        )

    def compare_bundles(self, current: Sequence[Chunk], previous: Sequence[Chunk]) -> BundleDiff:
        current_ids = {chunk.id for chunk in current}
        previous_by_id = {chunk.id: chunk for chunk in previous}

        added = [chunk for chunk in current if chunk.id not in previous_by_id]
        removed = [chunk for chunk in previous if chunk.id not in current_ids]

        modified: list[ModifiedChunk] = []
        for chunk in current:
            before = previous_by_id.get(chunk.id)
            if before is not None and before.size != chunk.size:
                modified.append(
                    ModifiedChunk(
                        chunk=chunk,
                        old_size=before.size,
                        new_size=chunk.size,
                        size_delta=chunk.size - before.size,
                    )
                )

        # Raw totals, not the sum of the matched pairs above.
        total_change = sum(chunk.size for chunk in current) - sum(chunk.size for chunk in previous)

        return BundleDiff(
            added_chunks=added,
            removed_chunks=removed,
            modified_chunks=modified,
            total_size_change=total_change,
        )

    def check_budget(self, chunks: Sequence[Chunk], budgets: Sequence[BundleBudget]) -> list[BudgetResult]:
        return [self._check_one(chunks, budget) for budget in budgets]

    def _check_one(self, chunks: Sequence[Chunk], budget: BundleBudget) -> BudgetResult:
        max_size = parse_size(budget.max, self._reporter)

        compiled = compile_budget_pattern(budget.path)
        if isinstance(compiled, Err):
            # Fail open: a typo in the budget config never blocks a build.
            self._reporter.error(compiled.err_value)
            return BudgetResult(path=budget.path, current_size=0, max_size=max_size, exceeds=False)

        pattern = compiled.ok_value
        matching = [chunk for chunk in chunks if pattern.search(chunk.name)]
        if not matching:
            return BudgetResult(path=budget.path, current_size=0, max_size=max_size, exceeds=False)

        current_size = sum(chunk.size for chunk in matching)
        return BudgetResult(
            path=budget.path,
            current_size=current_size,
            max_size=max_size,
            exceeds=current_size > max_size,
        )

    def generate_treemap_data(self, chunks: Sequence[Chunk]) -> TreemapNode:
        children = [
            TreemapNode(
                name=chunk.name,
                value=chunk.size,
                kind=TreemapKind.CHUNK,
                children=[TreemapNode(name=path, value=0, kind=TreemapKind.FILE) for path in chunk.files],
            )
            for chunk in chunks
        ]
        return TreemapNode(
            name="Bundle",
            value=sum(child.value for child in children),
            kind=TreemapKind.BUNDLE,
            children=children,
        )
